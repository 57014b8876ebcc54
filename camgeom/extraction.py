"""Turning a labelled quad group into an ordered grid of chessboard corners.

Once every quad corner carries a board row and column, the inner corners of
the board are read out row by row. They are then reordered so that the first
row runs left to right and the rows run downwards. A cheaper test is also
provided: it decides from blob sizes alone whether an image may hold a
chessboard at all.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from .quadgraph import ChessboardCorner, ChessboardQuad, Point

_BORDER = 5.0
_SIZE_REL_DEV = 0.4


def _cross(a: Point, b: Point) -> float:
    return a[0] * b[1] - a[1] * b[0]


def _sub(a: Point, b: Point) -> Point:
    return (a[0] - b[0], a[1] - b[1])


def _grid_extent(quads: Sequence[ChessboardQuad]) -> tuple[int, int, int, int]:
    rows = [c.row for q in quads for c in q.corners]
    columns = [c.column for q in quads for c in q.corners]
    return (
        min([127, *rows]),
        max([-127, *rows]),
        min([127, *columns]),
        max([-127, *columns]),
    )


def _board_orientation(
    quads: Sequence[ChessboardQuad],
    pattern_size: tuple[int, int],
    extent: tuple[int, int, int, int],
) -> tuple[int, int]:
    """Width and height of the board in label space."""
    min_row, max_row, min_col, max_col = extent
    pattern_w, pattern_h = pattern_size

    flag_column = False
    flag_row = False
    for quad in quads:
        for c in quad.corners:
            if (
                c.column == max_col
                and c.row not in (min_row, max_row)
                and not c.needs_neighbor
            ):
                flag_column = True
            if (
                c.row == max_row
                and c.column not in (min_col, max_col)
                and not c.needs_neighbor
            ):
                flag_row = True

    if flag_column:
        if max_col - min_col == pattern_w + 1:
            return pattern_w, pattern_h
        return pattern_h, pattern_w
    if flag_row:
        if max_row - min_row == pattern_w + 1:
            return pattern_h, pattern_w
        return pattern_w, pattern_h
    # The board size is not reached in either direction: allow for the worst case.
    side = max(pattern_w, pattern_h)
    return side, side


def _collect_inner_corners(
    quads: Sequence[ChessboardQuad],
    min_row: int,
    max_row: int,
    min_col: int,
    max_col: int,
) -> tuple[list[ChessboardCorner], int] | None:
    corners: list[ChessboardCorner] = []
    linked_border_corners = 0

    for i in range(min_row, max_row + 1):
        for j in range(min_col, max_col + 1):
            board_edge = i in (min_row, max_row) or j in (min_col, max_col)
            seen = 1
            for quad in quads:
                for c in quad.corners:
                    if c.row != i or c.column != j:
                        continue
                    if (seen == 1 and board_edge) or (seen == 2 and not board_edge):
                        corners.append(c)
                    if seen == 2 and board_edge:
                        linked_border_corners += 1
                    if seen > 2:
                        # More than two corners share one label: a linking error.
                        return None
                    seen += 1
    return corners, linked_border_corners


def check_quad_group(
    quads: Sequence[ChessboardQuad],
    pattern_size: tuple[int, int],
    image_size: tuple[int, int],
) -> list[ChessboardCorner] | None:
    """Read the inner board corners out of a labelled quad group.

    ``pattern_size`` is the number of inner corners (width, height) and
    ``image_size`` the image (width, height). Returns the corners in row-major
    order, rows running down the image and each row running so that the board
    forms a right-handed frame, or ``None`` when the group does not form a
    complete board, has linking errors, or touches the image border.
    """
    pattern_w, pattern_h = pattern_size
    if pattern_w < 2 or pattern_h < 2:
        raise ValueError("a chessboard needs at least 2x2 inner corners")
    image_w, image_h = image_size

    extent = _grid_extent(quads)
    width, height = _board_orientation(quads, pattern_size, extent)

    min_row = extent[0] + 1
    min_col = extent[2] + 1
    max_row = min_row + height - 1
    max_col = min_col + width - 1

    collected = _collect_inner_corners(quads, min_row, max_row, min_col, max_col)
    if collected is None:
        return None
    corners, linked_border_corners = collected

    if len(corners) != pattern_w * pattern_h:
        return None
    if linked_border_corners < (pattern_w * 2 + pattern_h * 2 - 2) * 0.75:
        return None

    for c in corners:
        x, y = c.pt
        if x < _BORDER or x > image_w - _BORDER or y < _BORDER or y > image_h - _BORDER:
            return None

    if width != pattern_w:
        width, height = height, width
        corners = [corners[j * height + i] for i in range(height) for j in range(width)]

    p0 = corners[0].pt
    p1 = corners[width - 1].pt
    p2 = corners[width].pt
    if _cross(_sub(p1, p0), _sub(p2, p0)) < 0.0:
        corners = [
            c
            for i in range(height)
            for c in reversed(corners[i * width : (i + 1) * width])
        ]

    p0 = corners[0].pt
    p2 = corners[width].pt
    if p2[1] < p0[1]:
        corners = corners[::-1]

    return corners


def has_chessboard_hypotheses(
    hypotheses: Iterable[tuple[float, int]], pattern_size: tuple[int, int]
) -> bool:
    """Whether blob size hypotheses look like a chessboard.

    Each hypothesis is ``(box_size, class_id)`` with class 0 for a dark blob
    and class 1 for a light one. The test passes when enough blobs have
    similar sizes (within 40% of the smallest of them) and they include
    at least three quarters of the expected dark and light squares.
    """
    pattern_w, pattern_h = pattern_size
    quads = []
    for size, class_id in hypotheses:
        if class_id not in (0, 1):
            raise ValueError(f"class id must be 0 or 1, got {class_id!r}")
        if not size > 0:
            raise ValueError(f"box size must be positive, got {size!r}")
        quads.append((float(size), class_id))
    quads.sort(key=lambda h: h[0])

    min_quads_count = pattern_w * pattern_h // 2
    black_count = round(math.ceil(pattern_w / 2.0) * math.ceil(pattern_h / 2.0))
    white_count = round(math.floor(pattern_w / 2.0) * math.floor(pattern_h / 2.0))

    for i, (base_size, _) in enumerate(quads):
        j = i + 1
        while j < len(quads) and quads[j][0] / base_size <= 1.0 + _SIZE_REL_DEV:
            j += 1
        if j + 1 > min_quads_count + i:
            classes = [class_id for _, class_id in quads[i:j]]
            if (
                classes.count(0) < black_count * 0.75
                or classes.count(1) < white_count * 0.75
            ):
                continue
            return True
    return False