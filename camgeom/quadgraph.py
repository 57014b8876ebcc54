"""Quadrangles and corners that make up a chessboard hypothesis graph.

A chessboard is detected as a graph of dark quadrangles that touch one
another at their corners. This module holds the node types of that graph,
the filter that accepts a four-sided contour as a candidate square, and the
geometric test that decides whether two quad corners may be linked.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

Point = tuple[float, float]

FLT_MAX = 3.4028234663852886e38


@dataclass(eq=False)
class ChessboardCorner:
    """A corner point of a quad, labelled with its board row and column."""

    pt: Point = (0.0, 0.0)
    row: int = 0
    column: int = 0
    needs_neighbor: bool = False


def _no_corners() -> list[ChessboardCorner | None]:
    return [None, None, None, None]


def _no_neighbors() -> list[ChessboardQuad | None]:
    return [None, None, None, None]


@dataclass(eq=False)
class ChessboardQuad:
    """A quadrangle with four corners and up to four neighbouring quads.

    ``neighbors[i]`` is the quad that touches this one at ``corners[i]``;
    ``count`` is the number of neighbours that are set.
    """

    count: int = 0
    group_idx: int = -1
    edge_len: float = FLT_MAX
    labeled: bool = False
    corners: list[ChessboardCorner | None] = field(default_factory=_no_corners)
    neighbors: list[ChessboardQuad | None] = field(default_factory=_no_neighbors)


def min_quad_size(image_width: int, image_height: int) -> int:
    """Smallest area a quad may have in an image of the given size."""
    value = image_width * image_height * 0.03 * 0.01 * 0.92 * 0.1
    return int(math.floor(value + 0.5))


def _sub(a: Point, b: Point) -> Point:
    return (a[0] - b[0], a[1] - b[1])


def _cross(a: Point, b: Point) -> float:
    return a[0] * b[1] - a[1] * b[0]


def _dist(a: Point, b: Point) -> float:
    dx, dy = _sub(a, b)
    return math.sqrt(dx * dx + dy * dy)


def _polygon_area(pts: Sequence[Point]) -> float:
    twice = sum(_cross(p, q) for p, q in zip(pts, [*pts[1:], pts[0]]))
    return abs(twice) / 2.0


def _is_convex(pts: Sequence[Point]) -> bool:
    n = len(pts)
    turns = [
        _cross(_sub(pts[(i + 1) % n], pts[i]), _sub(pts[(i + 2) % n], pts[(i + 1) % n]))
        for i in range(n)
    ]
    if all(t == 0 for t in turns):
        return False
    return all(t >= 0 for t in turns) or all(t <= 0 for t in turns)


def _as_points(contour: Iterable) -> list[Point]:
    return [(float(x), float(y)) for x, y in contour]


def is_acceptable_quad(contour, min_size: float, filter_quads: bool) -> bool:
    """Whether an approximated contour is accepted as a candidate quad.

    The contour must have four vertices and be convex. With ``filter_quads``
    it must also be closer to a square than to a thin rectangle, have an area
    above ``min_size`` and diagonals no shorter than 15% of its perimeter.
    """
    pts = _as_points(contour)
    if len(pts) != 4 or not _is_convex(pts):
        return False
    if not filter_quads:
        return True

    perimeter = sum(_dist(p, q) for p, q in zip(pts, [*pts[1:], pts[0]]))
    area = _polygon_area(pts)
    d1 = _dist(pts[0], pts[2])
    d2 = _dist(pts[1], pts[3])
    d3 = _dist(pts[0], pts[1])
    d4 = _dist(pts[1], pts[2])
    return (
        d3 * 4 > d4
        and d4 * 4 > d3
        and d3 * d4 < area * 1.5
        and area > min_size
        and d1 >= 0.15 * perimeter
        and d2 >= 0.15 * perimeter
    )


def build_quads(quadrilaterals: Iterable) -> list[ChessboardQuad]:
    """Turn four-point contours into quads with fresh corners.

    Each quad's ``edge_len`` is its shortest squared side length.
    """
    quads: list[ChessboardQuad] = []
    for contour in quadrilaterals:
        pts = _as_points(contour)
        if len(pts) != 4:
            raise ValueError(f"a quad needs exactly four points, got {len(pts)}")
        quad = ChessboardQuad()
        quad.corners = [ChessboardCorner(pt=p) for p in pts]
        for p, q in zip(pts, [*pts[1:], pts[0]]):
            dx, dy = _sub(p, q)
            quad.edge_len = min(quad.edge_len, dx * dx + dy * dy)
        quads.append(quad)
    return quads


def _mid(a: Point, b: Point) -> Point:
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


def _side(line_a: Point, line_b: Point, p: Point) -> float:
    return _cross(_sub(line_a, line_b), _sub(p, line_b))


def _same(s1: float, s2: float) -> bool:
    return (s1 < 0 and s2 < 0) or (s1 > 0 and s2 > 0)


def _opposite(s1: float, s2: float) -> bool:
    return (s1 < 0 and s2 > 0) or (s1 > 0 and s2 < 0)


def match_corners(
    quad1: ChessboardQuad, corner1: int, quad2: ChessboardQuad, corner2: int
) -> bool:
    """Whether ``quad1.corners[corner1]`` may be linked to ``quad2.corners[corner2]``.

    Seen from each quad, the candidate corner must lie on the same side of
    the quad's two mid-lines as the quad's own corner, and beyond the two
    sides that meet at that corner; this keeps quads of the same row or
    column, and quads lying inside one another, from linking.
    """
    a = [quad1.corners[(corner1 + k) % 4].pt for k in range(4)]
    b = [quad2.corners[(corner2 + k) % 4].pt for k in range(4)]

    # mid-lines of the current quad
    m1, m2 = _mid(a[0], a[1]), _mid(a[2], a[3])
    m3, m4 = _mid(a[0], a[3]), _mid(a[1], a[2])
    sign11, sign12, sign13 = (_side(m1, m2, p) for p in (a[0], b[0], b[2]))
    sign21, sign22, sign23 = (_side(m3, m4, p) for p in (a[0], b[0], b[2]))

    # mid-lines of the candidate quad
    u1, u2 = _mid(b[0], b[1]), _mid(b[2], b[3])
    u3, u4 = _mid(b[0], b[3]), _mid(b[1], b[2])
    sign31, sign32, sign33 = (_side(u1, u2, p) for p in (a[0], b[0], a[2]))
    sign41, sign42, sign43 = (_side(u3, u4, p) for p in (a[0], b[0], a[2]))

    # sides meeting at the current corner
    sign51, sign52 = (_side(a[1], a[0], p) for p in (a[2], b[0]))
    sign61, sign62 = (_side(a[3], a[0], p) for p in (a[2], b[0]))

    # sides meeting at the candidate corner
    sign71, sign72 = (_side(b[1], b[0], p) for p in (a[0], b[2]))
    sign81, sign82 = (_side(b[3], b[0], p) for p in (a[0], b[2]))

    return (
        _same(sign11, sign12)
        and _same(sign21, sign22)
        and _same(sign31, sign32)
        and _same(sign41, sign42)
        and _same(sign11, sign13)
        and _same(sign21, sign23)
        and _same(sign31, sign33)
        and _same(sign41, sign43)
        and _opposite(sign51, sign52)
        and _opposite(sign61, sign62)
        and _opposite(sign71, sign72)
        and _opposite(sign81, sign82)
    )