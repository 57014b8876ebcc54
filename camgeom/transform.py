"""Rigid-body transform held as a unit quaternion and a translation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np


def _identity_quaternion() -> np.ndarray:
    return np.array([0.0, 0.0, 0.0, 1.0])


def _quaternion_from_rotation(m: np.ndarray) -> np.ndarray:
    q = np.zeros(4)
    trace = m[0, 0] + m[1, 1] + m[2, 2]
    if trace > 0.0:
        t = math.sqrt(trace + 1.0)
        q[3] = 0.5 * t
        t = 0.5 / t
        q[0] = (m[2, 1] - m[1, 2]) * t
        q[1] = (m[0, 2] - m[2, 0]) * t
        q[2] = (m[1, 0] - m[0, 1]) * t
    else:
        i = 0
        if m[1, 1] > m[0, 0]:
            i = 1
        if m[2, 2] > m[i, i]:
            i = 2
        j = (i + 1) % 3
        k = (j + 1) % 3
        t = math.sqrt(m[i, i] - m[j, j] - m[k, k] + 1.0)
        q[i] = 0.5 * t
        t = 0.5 / t
        q[3] = (m[k, j] - m[j, k]) * t
        q[j] = (m[j, i] + m[i, j]) * t
        q[k] = (m[k, i] + m[i, k]) * t
    return q


def _rotation_from_quaternion(q: np.ndarray) -> np.ndarray:
    x, y, z, w = q
    tx, ty, tz = 2.0 * x, 2.0 * y, 2.0 * z
    twx, twy, twz = tx * w, ty * w, tz * w
    txx, txy, txz = tx * x, ty * x, tz * x
    tyy, tyz, tzz = ty * y, tz * y, tz * z
    return np.array(
        [
            [1.0 - (tyy + tzz), txy - twz, txz + twy],
            [txy + twz, 1.0 - (txx + tzz), tyz - twx],
            [txz - twy, tyz + twx, 1.0 - (txx + tyy)],
        ]
    )


@dataclass(eq=False)
class Transform:
    """Rotation as an ``(x, y, z, w)`` quaternion plus a 3-vector translation."""

    rotation: np.ndarray = field(default_factory=_identity_quaternion)
    translation: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self) -> None:
        self.rotation = np.array(self.rotation, dtype=float)
        self.translation = np.array(self.translation, dtype=float)
        if self.rotation.shape != (4,):
            raise ValueError("rotation must be a quaternion (x, y, z, w)")
        if self.translation.shape != (3,):
            raise ValueError("translation must have three components")

    @classmethod
    def from_matrix(cls, matrix) -> Transform:
        """Build a transform from a 4x4 homogeneous matrix."""
        h = np.asarray(matrix, dtype=float)
        if h.shape != (4, 4):
            raise ValueError("a homogeneous transform must be a 4x4 matrix")
        return cls(_quaternion_from_rotation(h[:3, :3]), h[:3, 3].copy())

    @property
    def rotation_matrix(self) -> np.ndarray:
        """The 3x3 rotation matrix of the quaternion."""
        return _rotation_from_quaternion(self.rotation)

    def to_matrix(self) -> np.ndarray:
        """The 4x4 homogeneous matrix of this transform."""
        h = np.eye(4)
        h[:3, :3] = self.rotation_matrix
        h[:3, 3] = self.translation
        return h