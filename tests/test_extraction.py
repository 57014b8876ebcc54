import pytest

from camgeom.extraction import check_quad_group, has_chessboard_hypotheses
from camgeom.quadgraph import ChessboardCorner, ChessboardQuad


def _board(width, height, position, skip=()):
    """Labelled dark quads of a board with ``width`` x ``height`` inner corners."""
    corners = {}

    def corner(r, c):
        if (r, c) not in corners:
            corners[(r, c)] = ChessboardCorner(pt=position(r, c), row=r, column=c)
        return corners[(r, c)]

    quads = []
    for r in range(height + 1):
        for c in range(width + 1):
            if (r + c) % 2 or (r, c) in skip:
                continue
            quad = ChessboardQuad(labeled=True)
            quad.corners = [
                corner(r, c),
                corner(r, c + 1),
                corner(r + 1, c + 1),
                corner(r + 1, c),
            ]
            quads.append(quad)
    for c in corners.values():
        c.needs_neighbor = False
    return quads


def _upright(r, c):
    return (30.0 + 20.0 * c, 30.0 + 20.0 * r)


def _flipped_y(r, c):
    return (30.0 + 20.0 * c, 170.0 - 20.0 * r)


def _flipped_x(r, c):
    return (170.0 - 20.0 * c, 30.0 + 20.0 * r)


def _points(corners):
    return [c.pt for c in corners]


def test_upright_board_is_read_row_major():
    quads = _board(3, 2, _upright)
    result = check_quad_group(quads, (3, 2), (200, 200))
    assert _points(result) == [
        (50.0, 50.0),
        (70.0, 50.0),
        (90.0, 50.0),
        (50.0, 70.0),
        (70.0, 70.0),
        (90.0, 70.0),
    ]


def test_result_carries_inner_labels():
    quads = _board(3, 2, _upright)
    result = check_quad_group(quads, (3, 2), (200, 200))
    assert [(c.row, c.column) for c in result] == [
        (r, c) for r in (1, 2) for c in (1, 2, 3)
    ]


@pytest.mark.parametrize("position", [_upright, _flipped_y, _flipped_x])
def test_output_is_normalised_to_image_order(position):
    quads = _board(3, 2, position)
    result = check_quad_group(quads, (3, 2), (200, 200))
    pts = _points(result)
    assert len(pts) == 6
    assert pts == sorted(pts, key=lambda p: (p[1], p[0]))


@pytest.mark.parametrize("position", [_upright, _flipped_y, _flipped_x])
def test_output_orientation_invariants(position):
    quads = _board(3, 2, position)
    pts = _points(check_quad_group(quads, (3, 2), (200, 200)))
    p0, p1, p2 = pts[0], pts[2], pts[3]
    cross = (p1[0] - p0[0]) * (p2[1] - p0[1]) - (p1[1] - p0[1]) * (p2[0] - p0[0])
    assert cross >= 0
    assert p2[1] >= p0[1]


def test_transposed_pattern_keeps_all_inner_corners():
    quads = _board(3, 2, _upright)
    result = check_quad_group(quads, (2, 3), (200, 200))
    pts = _points(result)
    assert len(pts) == 6
    assert set(pts) == {(x, y) for x in (50.0, 70.0, 90.0) for y in (50.0, 70.0)}
    rows = [pts[0:2], pts[2:4], pts[4:6]]
    for row in rows:
        assert row[0][0] == row[1][0]


def test_corner_near_image_border_is_rejected():
    quads = _board(3, 2, _upright)
    assert check_quad_group(quads, (3, 2), (94, 200)) is None


def test_corner_exactly_at_margin_is_accepted():
    quads = _board(3, 2, _upright)
    result = check_quad_group(quads, (3, 2), (95, 200))
    assert len(result) == 6


def test_missing_quad_is_rejected():
    quads = _board(3, 2, _upright, skip={(1, 3)})
    assert check_quad_group(quads, (3, 2), (200, 200)) is None


def test_three_corners_with_one_label_are_rejected():
    quads = _board(3, 2, _upright)
    extra = ChessboardQuad(labeled=True)
    extra.corners = [
        ChessboardCorner(pt=_upright(r, c), row=r, column=c)
        for r, c in ((1, 1), (1, 2), (2, 2), (2, 1))
    ]
    quads.append(extra)
    assert check_quad_group(quads, (3, 2), (200, 200)) is None


def test_empty_group_is_rejected():
    assert check_quad_group([], (3, 2), (200, 200)) is None


def test_too_small_pattern_raises():
    with pytest.raises(ValueError):
        check_quad_group([], (1, 4), (200, 200))


def test_hypotheses_of_similar_size_pass():
    hyps = [(20.0, 0), (21.0, 1), (22.0, 0)]
    assert has_chessboard_hypotheses(hyps, (3, 2)) is True


def test_hypotheses_order_does_not_matter():
    hyps = [(22.0, 0), (20.0, 0), (21.0, 1)]
    assert has_chessboard_hypotheses(hyps, (3, 2)) == has_chessboard_hypotheses(
        sorted(hyps), (3, 2)
    )
    assert has_chessboard_hypotheses(hyps, (3, 2)) is True


def test_hypotheses_without_light_squares_fail():
    hyps = [(20.0, 0), (21.0, 0), (22.0, 0)]
    assert has_chessboard_hypotheses(hyps, (3, 2)) is False


def test_hypotheses_of_spread_sizes_fail():
    hyps = [(10.0, 0), (20.0, 1), (40.0, 0)]
    assert has_chessboard_hypotheses(hyps, (3, 2)) is False


def test_no_hypotheses_fail():
    assert has_chessboard_hypotheses([], (3, 2)) is False


def test_similar_cluster_among_outliers_passes():
    hyps = [(12.0, 1), (50.0, 0), (52.0, 1), (55.0, 0), (300.0, 1)]
    assert has_chessboard_hypotheses(hyps, (3, 2)) is True


def test_invalid_class_id_raises():
    with pytest.raises(ValueError):
        has_chessboard_hypotheses([(20.0, 2)], (3, 2))


def test_non_positive_size_raises():
    with pytest.raises(ValueError):
        has_chessboard_hypotheses([(0.0, 0)], (3, 2))