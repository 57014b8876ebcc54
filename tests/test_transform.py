import math

import numpy as np
import pytest

from camgeom.transform import Transform


def _rot_z(angle):
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


def _rot_x(angle):
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]])


def _homogeneous(rotation, translation):
    h = np.eye(4)
    h[:3, :3] = rotation
    h[:3, 3] = translation
    return h


def test_default_is_identity():
    t = Transform()
    assert np.array_equal(t.to_matrix(), np.eye(4))
    assert np.array_equal(t.rotation, [0.0, 0.0, 0.0, 1.0])


@pytest.mark.parametrize(
    "rotation",
    [_rot_z(0.7), _rot_x(-1.2), _rot_z(math.pi), _rot_x(math.pi) @ _rot_z(0.3), _rot_z(2.5) @ _rot_x(2.9)],
)
def test_matrix_round_trip(rotation):
    h = _homogeneous(rotation, [1.5, -2.0, 0.25])
    t = Transform.from_matrix(h)
    assert np.allclose(t.to_matrix(), h)


def test_quaternion_is_unit():
    t = Transform.from_matrix(_homogeneous(_rot_z(2.5) @ _rot_x(2.9), [0, 0, 0]))
    assert np.linalg.norm(t.rotation) == pytest.approx(1.0)


def test_rotation_about_z_quaternion():
    angle = 0.8
    t = Transform.from_matrix(_homogeneous(_rot_z(angle), [0, 0, 0]))
    assert np.allclose(t.rotation, [0.0, 0.0, math.sin(angle / 2), math.cos(angle / 2)])


def test_translation_taken_from_last_column():
    t = Transform.from_matrix(_homogeneous(np.eye(3), [3.0, 4.0, 5.0]))
    assert np.array_equal(t.translation, [3.0, 4.0, 5.0])


def test_constructor_copies_inputs():
    translation = np.array([1.0, 2.0, 3.0])
    t = Transform(translation=translation)
    translation[0] = 99.0
    assert t.translation[0] == 1.0


def test_rejects_bad_shapes():
    with pytest.raises(ValueError):
        Transform.from_matrix(np.eye(3))
    with pytest.raises(ValueError):
        Transform(rotation=[0.0, 0.0, 1.0])