"""Quaternion product and the local parameterization used for optimization.

Quaternions are stored as ``(x, y, z, w)``.
"""

from __future__ import annotations

import math

import numpy as np


def _as_quaternion(q) -> np.ndarray:
    arr = np.asarray(q, dtype=float)
    if arr.shape != (4,):
        raise ValueError("a quaternion needs exactly four coefficients (x, y, z, w)")
    return arr


def quaternion_product(q1, q2) -> np.ndarray:
    """Hamilton product ``q1 * q2`` of two ``(x, y, z, w)`` quaternions."""
    x1, y1, z1, w1 = _as_quaternion(q1)
    x2, y2, z2, w2 = _as_quaternion(q2)
    return np.array(
        [
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
        ]
    )


def quaternion_plus(x, delta) -> np.ndarray:
    """Apply a 3-vector rotation increment to quaternion ``x``.

    The increment is turned into ``(sin|d| d/|d|, cos|d|)`` and multiplied
    on the left of ``x``.
    """
    q = _as_quaternion(x)
    d = np.asarray(delta, dtype=float)
    if d.shape != (3,):
        raise ValueError("delta needs exactly three components")
    norm_delta = math.sqrt(float(d @ d))
    if norm_delta > 0.0:
        scale = math.sin(norm_delta) / norm_delta
        q_delta = np.array([scale * d[0], scale * d[1], scale * d[2], math.cos(norm_delta)])
        return quaternion_product(q_delta, q)
    return q.copy()


def quaternion_plus_jacobian(x) -> np.ndarray:
    """4x3 Jacobian of :func:`quaternion_plus` with respect to delta at zero."""
    qx, qy, qz, qw = _as_quaternion(x)
    return np.array(
        [
            [qw, qz, -qy],
            [-qz, qw, qx],
            [qy, -qx, qw],
            [-qx, -qy, -qz],
        ]
    )