"""Quaternion arithmetic (Hamilton convention: i^2 = j^2 = k^2 = ijk = -1)."""

from __future__ import annotations

import math
from dataclasses import dataclass

DEFAULT_TOLERANCE = 1e-10


@dataclass(frozen=True, slots=True)
class Quaternion:
    w: float
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def identity(cls) -> Quaternion:
        return cls(1.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_axis_angle(cls, axis: tuple[float, float, float], angle: float) -> Quaternion:
        """Return ``cos(angle) + sin(angle) * axis`` for a unit ``axis``.

        This is exp(angle * axis); as a rotation of 3-space it turns by
        ``2 * angle``.
        """
        ax, ay, az = axis
        norm = math.sqrt(ax * ax + ay * ay + az * az)
        if norm == 0.0:
            raise ValueError("Rotation axis must be non-zero")
        s = math.sin(angle) / norm
        return cls(math.cos(angle), ax * s, ay * s, az * s)

    def __mul__(self, other: Quaternion) -> Quaternion:
        return self.mul(other)

    def __neg__(self) -> Quaternion:
        return Quaternion(-self.w, -self.x, -self.y, -self.z)

    def mul(self, other: Quaternion) -> Quaternion:
        """Hamilton product ``self * other``."""
        w1, x1, y1, z1 = self.w, self.x, self.y, self.z
        w2, x2, y2, z2 = other.w, other.x, other.y, other.z
        return Quaternion(
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        )

    def conjugate(self) -> Quaternion:
        return Quaternion(self.w, -self.x, -self.y, -self.z)

    def norm_squared(self) -> float:
        return self.w * self.w + self.x * self.x + self.y * self.y + self.z * self.z

    def norm(self) -> float:
        return math.sqrt(self.norm_squared())

    def inverse(self) -> Quaternion:
        n2 = self.norm_squared()
        if n2 == 0.0:
            raise ZeroDivisionError("Zero quaternion has no inverse")
        c = self.conjugate()
        return Quaternion(c.w / n2, c.x / n2, c.y / n2, c.z / n2)

    def power(self, exponent: int) -> Quaternion:
        """Integer power by repeated multiplication (negative uses the inverse)."""
        base = self if exponent >= 0 else self.inverse()
        result = Quaternion.identity()
        for _ in range(abs(exponent)):
            result = result * base
        return result

    def approx_eq(self, other: Quaternion, tol: float = DEFAULT_TOLERANCE) -> bool:
        """Component-wise comparison with absolute tolerance ``tol``."""
        return (
            abs(self.w - other.w) <= tol
            and abs(self.x - other.x) <= tol
            and abs(self.y - other.y) <= tol
            and abs(self.z - other.z) <= tol
        )

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.w, self.x, self.y, self.z)
