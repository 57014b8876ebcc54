"""Pruning and row/column labelling of a connected group of chessboard quads.

After quads have been linked into a connected group, surplus quads that do
not belong to the board are removed, and every corner is given a board row
and column by walking the neighbourhood graph from a seed quad.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from .quadgraph import ChessboardCorner, ChessboardQuad, Point

# Row/column labels of the seed quad's corners, clockwise from the upper left.
_SEED_LABELS: tuple[tuple[int, int], ...] = ((0, 0), (0, 1), (1, 1), (1, 0))


def _cross(o: Point, a: Point, b: Point) -> float:
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def convex_hull_area(points: Iterable[Point]) -> float:
    """Area of the convex hull of the points; zero for fewer than three."""
    pts = sorted({(float(x), float(y)) for x, y in points})
    if len(pts) < 3:
        return 0.0

    def half(seq: Iterable[Point]) -> list[Point]:
        chain: list[Point] = []
        for p in seq:
            while len(chain) >= 2 and _cross(chain[-2], chain[-1], p) <= 0:
                chain.pop()
            chain.append(p)
        return chain

    lower = half(pts)
    upper = half(reversed(pts))
    hull = lower[:-1] + upper[:-1]
    if len(hull) < 3:
        return 0.0
    twice = sum(p[0] * q[1] - p[1] * q[0] for p, q in zip(hull, [*hull[1:], hull[0]]))
    return abs(twice) / 2.0


def _quad_center(quad: ChessboardQuad) -> Point:
    xs = sum(c.pt[0] for c in quad.corners)
    ys = sum(c.pt[1] for c in quad.corners)
    return (xs * 0.25, ys * 0.25)


def _unlink(quad_group: Sequence[ChessboardQuad], removed: ChessboardQuad) -> None:
    for quad in quad_group:
        for j, neighbor in enumerate(quad.neighbors):
            if neighbor is not removed:
                continue
            quad.neighbors[j] = None
            quad.count -= 1
            for k, back in enumerate(removed.neighbors):
                if back is quad:
                    removed.neighbors[k] = None
                    removed.count -= 1
                    break
            break


def clean_found_connected_quads(
    quad_group: list[ChessboardQuad], pattern_size: tuple[int, int]
) -> None:
    """Drop surplus quads from a group, in place.

    A board of ``pattern_size`` (inner corners, width by height) has a known
    number of dark quads. While the group is larger, the quad whose removal
    shrinks the convex hull of the quad centres the most is removed and
    unlinked from its neighbours.
    """
    width, height = pattern_size
    count = ((width + 1) * (height + 1) + 1) // 2
    if len(quad_group) <= count:
        return

    centers = [_quad_center(q) for q in quad_group]
    center = (
        sum(c[0] for c in centers) / len(centers),
        sum(c[1] for c in centers) / len(centers),
    )

    while len(quad_group) > count:
        areas = [
            convex_hull_area([*centers[:skip], center, *centers[skip + 1 :]])
            for skip in range(len(centers))
        ]
        best = min(range(len(areas)), key=areas.__getitem__)

        _unlink(quad_group, quad_group[best])

        quad_group[best] = quad_group[-1]
        centers[best] = centers[-1]
        quad_group.pop()
        centers.pop()


def _label_seed(quad_group: Sequence[ChessboardQuad]) -> None:
    seed: ChessboardQuad | None = None
    max_count = 0
    for quad in quad_group:
        if quad.count > max_count:
            seed = quad
            max_count = quad.count
            if max_count == 4:
                break
    if seed is None:
        raise ValueError("no quad in the group has a neighbour to start labelling from")

    seed.labeled = True
    for corner, (row, column) in zip(seed.corners, _SEED_LABELS):
        corner.row = row
        corner.column = column


def _propagate_labels(quad_group: Sequence[ChessboardQuad]) -> None:
    changed = True
    while changed:
        changed = False
        for quad in reversed(quad_group):
            if quad.labeled:
                continue
            for j, neighbor in enumerate(quad.neighbors):
                if neighbor is None or not neighbor.labeled:
                    continue
                k = next(
                    (k for k, back in enumerate(neighbor.neighbors) if back is quad), None
                )
                if k is None:
                    continue

                con = neighbor.corners[k]
                cw1 = neighbor.corners[(k + 1) % 4]
                cw2 = neighbor.corners[(k + 2) % 4]
                cw3 = neighbor.corners[(k + 3) % 4]
                c0 = quad.corners[j]
                c1 = quad.corners[(j + 1) % 4]
                c2 = quad.corners[(j + 2) % 4]
                c3 = quad.corners[(j + 3) % 4]

                c0.row = con.row
                c0.column = con.column
                c1.row = con.row - cw2.row + cw3.row
                c1.column = con.column - cw2.column + cw3.column
                c2.row = con.row + con.row - cw2.row
                c2.column = con.column + con.column - cw2.column
                c3.row = con.row - cw2.row + cw1.row
                c3.column = con.column - cw2.column + cw1.column

                quad.labeled = True
                changed = True
                break


def _corners_by_label(
    quad_group: Sequence[ChessboardQuad],
) -> dict[tuple[int, int], list[ChessboardCorner]]:
    by_label: dict[tuple[int, int], list[ChessboardCorner]] = {}
    for quad in quad_group:
        for corner in quad.corners:
            by_label.setdefault((corner.row, corner.column), []).append(corner)
    return by_label


def _release_columns(quad_group, min_column: int, max_column: int) -> None:
    for quad in quad_group:
        for corner in quad.corners:
            if corner.column in (min_column, max_column):
                corner.needs_neighbor = False


def _release_rows(quad_group, min_row: int, max_row: int) -> None:
    for quad in quad_group:
        for corner in quad.corners:
            if corner.row in (min_row, max_row):
                corner.needs_neighbor = False


def label_quad_group(
    quad_group: Sequence[ChessboardQuad], pattern_size: tuple[int, int], first_run: bool
) -> None:
    """Give every corner of a connected quad group a board row and column.

    On the first run the quad with the most neighbours is the seed and gets
    labels (0, 0), (0, 1), (1, 1), (1, 0); labels then spread through the
    neighbour links. Corners seen once get ``needs_neighbor`` set, shared
    corners have it cleared, and two distinct corners with the same label
    are moved to their common midpoint. Border corners stop needing a
    neighbour once the board reaches ``pattern_size`` in that direction.
    """
    if first_run:
        _label_seed(quad_group)

    _propagate_labels(quad_group)

    rows = [c.row for q in quad_group for c in q.corners]
    columns = [c.column for q in quad_group for c in q.corners]
    min_row = min([127, *rows])
    max_row = max([-127, *rows])
    min_column = min([127, *columns])
    max_column = max([-127, *columns])

    by_label = _corners_by_label(quad_group)

    for corners in by_label.values():
        shared = len(corners) > 1
        for corner in corners:
            corner.needs_neighbor = not shared

    # Complete linking: two corners with the same label meet halfway.
    for corners in by_label.values():
        if len(corners) < 2:
            continue
        first, second = corners[0], corners[1]
        dx = second.pt[0] - first.pt[0]
        dy = second.pt[1] - first.pt[1]
        if dx != 0.0 or dy != 0.0:
            second.pt = (second.pt[0] - dx * 0.5, second.pt[1] - dy * 0.5)
            first.pt = (first.pt[0] + dx * 0.5, first.pt[1] + dy * 0.5)

    width, height = pattern_size
    larger = max(width, height)
    smaller = min(width, height)
    column_span = max_column - min_column
    row_span = max_row - min_row

    columns_done = larger + 1 == column_span
    if columns_done:
        _release_columns(quad_group, min_column, max_column)

    rows_done = larger + 1 == row_span
    if rows_done:
        _release_rows(quad_group, min_row, max_row)

    if not columns_done and rows_done and smaller + 1 == column_span:
        _release_columns(quad_group, min_column, max_column)

    if columns_done and not rows_done and smaller + 1 == row_span:
        _release_rows(quad_group, min_row, max_row)

    if not columns_done and not rows_done:
        if smaller + 1 < column_span and smaller + 1 == row_span:
            _release_rows(quad_group, min_row, max_row)
        if smaller + 1 < row_span and smaller + 1 == column_span:
            _release_columns(quad_group, min_column, max_column)