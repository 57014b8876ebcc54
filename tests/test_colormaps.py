import numpy as np
import pytest

from camgeom.colormaps import color_depth_image, colormap


def test_jet_first_entry_matches_table():
    assert colormap("jet", 0) == (0.0, 0.0, 0.53125)


def test_autumn_ends():
    assert colormap("autumn", 0) == (1.0, 0.0, 0.0)
    assert colormap("autumn", 127) == (1.0, 1.0, 0.0)


@pytest.mark.parametrize("name", ["jet", "autumn"])
def test_components_in_unit_range(name):
    for i in range(128):
        color = colormap(name, i)
        assert len(color) == 3
        assert all(0.0 <= c <= 1.0 for c in color)


def test_autumn_green_is_nondecreasing():
    greens = [colormap("autumn", i)[1] for i in range(128)]
    assert greens == sorted(greens)
    assert all(colormap("autumn", i)[0] == 1.0 for i in range(128))
    assert all(colormap("autumn", i)[2] == 0.0 for i in range(128))


def test_jet_starts_blue_ends_red():
    r0, g0, b0 = colormap("jet", 0)
    r1, g1, b1 = colormap("jet", 127)
    assert b0 > r0 and b0 > g0
    assert r1 > g1 and r1 > b1


def test_unknown_name_raises():
    with pytest.raises(ValueError):
        colormap("viridis", 0)


@pytest.mark.parametrize("idx", [-1, 128, 255])
def test_index_out_of_range_raises(idx):
    with pytest.raises(IndexError):
        colormap("jet", idx)


def test_zero_depth_stays_black():
    img = color_depth_image(np.zeros((3, 4), dtype=np.float32), 1.0, 10.0)
    assert img.shape == (3, 4, 3)
    assert img.dtype == np.uint8
    assert not img.any()


def test_far_and_near_pixels_use_ends_of_jet():
    depth = np.array([[10.0, 1.0]], dtype=np.float32)
    img = color_depth_image(depth, 1.0, 10.0)
    far = colormap("jet", 0)
    near = colormap("jet", 127)
    assert tuple(img[0, 0]) == tuple(int(np.float32(c) * np.float32(255)) for c in reversed(far))
    assert tuple(img[0, 1]) == tuple(int(np.float32(c) * np.float32(255)) for c in reversed(near))


def test_beyond_max_range_is_clamped_to_far_colour():
    depth = np.array([[10.0, 50.0]], dtype=np.float32)
    img = color_depth_image(depth, 1.0, 10.0)
    assert np.array_equal(img[0, 0], img[0, 1])


def test_invalid_range_raises():
    with pytest.raises(ValueError):
        color_depth_image(np.ones((2, 2)), 5.0, 5.0)


def test_non_2d_depth_raises():
    with pytest.raises(ValueError):
        color_depth_image(np.ones(4), 0.0, 1.0)