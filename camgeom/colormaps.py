"""Colour maps and false-colour rendering of depth images."""

from __future__ import annotations

import numpy as np

Color = tuple[float, float, float]

_SIZE = 128


def _jet_entry(i: int) -> Color:
    step = 1.0 / 32.0
    if i < 16:
        return (0.0, 0.0, (17 + i) * step)
    if i < 48:
        return (0.0, (i - 15) * step, 1.0)
    if i < 80:
        k = i - 47
        return (k * step, 1.0, 1.0 - k * step)
    if i < 112:
        return (1.0, 1.0 - (i - 79) * step, 0.0)
    return (1.0 - (i - 111) * step, 0.0, 0.0)


def _autumn_entry(i: int) -> Color:
    return (1.0, float(f"{i / (_SIZE - 1):.5g}"), 0.0)


_JET: tuple[Color, ...] = tuple(_jet_entry(i) for i in range(_SIZE))
_AUTUMN: tuple[Color, ...] = tuple(_autumn_entry(i) for i in range(_SIZE))

_TABLES: dict[str, tuple[Color, ...]] = {"jet": _JET, "autumn": _AUTUMN}

_JET_ARRAY = np.array(_JET, dtype=np.float32)


def colormap(name: str, idx: int) -> Color:
    """Return the (r, g, b) colour, each in [0, 1], at ``idx`` of the named map.

    Known maps are ``"jet"`` and ``"autumn"``, each with 128 entries.
    """
    try:
        table = _TABLES[name]
    except KeyError:
        raise ValueError(f"unknown colormap: {name!r}") from None
    if not 0 <= idx < len(table):
        raise IndexError(f"colormap index {idx} out of range 0..{len(table) - 1}")
    return table[idx]


def color_depth_image(depth, min_range: float, max_range: float) -> np.ndarray:
    """Render a 2-D depth image as an 8-bit BGR image using the jet map.

    Near depths are drawn red, far depths blue; pixels whose depth is zero
    stay black.
    """
    depth = np.asarray(depth, dtype=np.float32)
    if depth.ndim != 2:
        raise ValueError("depth image must be two-dimensional")
    low = np.float32(min_range)
    span = np.float32(max_range) - low
    if not span > 0:
        raise ValueError("max_range must be greater than min_range")

    out = np.zeros(depth.shape + (3,), dtype=np.uint8)
    valid = depth != 0
    if not valid.any():
        return out

    values = depth[valid]
    scaled = np.minimum(values - low, span) / span * np.float32(127.0)
    idx = (_SIZE - 1) - np.trunc(scaled).astype(np.int64)
    idx = np.clip(idx, 0, _SIZE - 1)

    bgr = _JET_ARRAY[idx][:, ::-1] * np.float32(255.0)
    out[valid] = bgr.astype(np.uint8)
    return out