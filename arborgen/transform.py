"""Rigid transforms with uniform or per-axis scale, backed by quaternions."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

Vec3 = tuple[float, float, float]
Quat = tuple[float, float, float, float]  # (x, y, z, w)

_IDENTITY_QUAT: Quat = (0.0, 0.0, 0.0, 1.0)


def _cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _quat_mul(a: Quat, b: Quat) -> Quat:
    ax, ay, az, aw = a
    bx, by, bz, bw = b
    return (
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by - ax * bz + ay * bw + az * bx,
        aw * bz + ax * by - ay * bx + az * bw,
        aw * bw - ax * bx - ay * by - az * bz,
    )


def _quat_rotate(q: Quat, v: Vec3) -> Vec3:
    qv = (q[0], q[1], q[2])
    t = tuple(2.0 * c for c in _cross(qv, v))
    u = _cross(qv, t)
    return tuple(vc + q[3] * tc + uc for vc, tc, uc in zip(v, t, u))


def _quat_from_axis_angle(axis: Vec3, angle: float) -> Quat:
    s = math.sin(0.5 * angle)
    return (axis[0] * s, axis[1] * s, axis[2] * s, math.cos(0.5 * angle))


@dataclass
class Transform:
    """Translation, rotation and scale applied as ``T * R * S``."""

    translation: Vec3 = (0.0, 0.0, 0.0)
    rotation: Quat = _IDENTITY_QUAT
    scale: Vec3 = (1.0, 1.0, 1.0)

    @classmethod
    def identity(cls) -> Transform:
        return cls()

    def local_x(self) -> Vec3:
        return _quat_rotate(self.rotation, (1.0, 0.0, 0.0))

    def local_y(self) -> Vec3:
        return _quat_rotate(self.rotation, (0.0, 1.0, 0.0))

    def local_z(self) -> Vec3:
        return _quat_rotate(self.rotation, (0.0, 0.0, 1.0))

    def with_translation(self, translation: Vec3) -> Transform:
        return replace(self, translation=tuple(float(c) for c in translation))

    def with_scale(self, scale: Vec3) -> Transform:
        return replace(self, scale=tuple(float(c) for c in scale))

    def rotate_local_x(self, angle: float) -> None:
        """Rotate in place about the transform's own X axis."""
        self.rotation = _quat_mul(self.rotation, _quat_from_axis_angle((1.0, 0.0, 0.0), angle))

    def rotate_local_y(self, angle: float) -> None:
        """Rotate in place about the transform's own Y axis."""
        self.rotation = _quat_mul(self.rotation, _quat_from_axis_angle((0.0, 1.0, 0.0), angle))

    def rotate_y(self, angle: float) -> None:
        """Rotate in place about the world Y axis."""
        self.rotation = _quat_mul(_quat_from_axis_angle((0.0, 1.0, 0.0), angle), self.rotation)

    def mul_transform(self, other: Transform) -> Transform:
        """Compose: the result applies ``other`` first, then ``self``."""
        return Transform(
            translation=self.transform_point(other.translation),
            rotation=_quat_mul(self.rotation, other.rotation),
            scale=tuple(a * b for a, b in zip(self.scale, other.scale)),
        )

    def transform_point(self, point: Vec3) -> Vec3:
        scaled = tuple(s * p for s, p in zip(self.scale, point))
        rotated = _quat_rotate(self.rotation, scaled)
        return tuple(r + t for r, t in zip(rotated, self.translation))