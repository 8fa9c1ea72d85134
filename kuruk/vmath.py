"""Small vector and quaternion helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass

__all__ = ["Vec3", "Quat", "v3_dot", "quat_mul", "quat_rotate", "quat_to_mat"]

Mat4 = tuple[tuple[float, float, float, float], ...]


@dataclass(frozen=True)
class Vec3:
    """A 3D vector."""

    x: float
    y: float
    z: float


@dataclass(frozen=True)
class Quat:
    """A quaternion with vector part (x, y, z) and scalar part w."""

    x: float
    y: float
    z: float
    w: float

    def vec(self) -> Vec3:
        """The vector part."""
        return Vec3(self.x, self.y, self.z)


def v3_dot(v1: Vec3, v2: Vec3) -> float:
    """Dot product of two vectors."""
    return v1.x * v2.x + v1.y * v2.y + v1.z * v2.z


def quat_mul(q1: Quat, q2: Quat) -> Quat:
    """Hamilton product ``q1 * q2``."""
    v1, v2 = q1.vec(), q2.vec()
    return Quat(
        x=v2.x * q1.w + v1.x * q2.w + (v1.y * v2.z - v1.z * v2.y),
        y=v2.y * q1.w + v1.y * q2.w + (v1.z * v2.x - v1.x * v2.z),
        z=v2.z * q1.w + v1.z * q2.w + (v1.x * v2.y - v1.y * v2.x),
        w=q1.w * q2.w - v3_dot(v1, v2),
    )


def quat_rotate(q: Quat, angle: float, x: float, y: float, z: float) -> Quat:
    """Compose ``q`` with a rotation of ``angle`` radians about axis (x, y, z)."""
    half = angle * 0.5
    s = math.sin(half)
    return quat_mul(q, Quat(x * s, y * s, z * s, math.cos(half)))


def quat_to_mat(q: Quat) -> Mat4:
    """4x4 rotation matrix of ``q``, indexed ``m[column][row]``."""
    x, y, z, w = q.x, q.y, q.z, q.w
    rows = (
        (1.0 - 2.0 * y * y - 2.0 * z * z, 2.0 * x * y + 2.0 * w * z,
         2.0 * z * x - 2.0 * w * y, 0.0),
        (2.0 * x * y - 2.0 * w * z, 1.0 - 2.0 * x * x - 2.0 * z * z,
         2.0 * y * z + 2.0 * w * x, 0.0),
        (2.0 * z * x + 2.0 * w * y, 2.0 * y * z - 2.0 * w * x,
         1.0 - 2.0 * x * x - 2.0 * y * y, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    )
    return tuple(tuple(row[col] for row in rows) for col in range(4))