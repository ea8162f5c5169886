"""2D vector used for every position and velocity on the pitch.

Units are meters (positions) and meters per second (velocities).
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Vec2:
    """Immutable 2D vector.

    Coordinate system:
        Origin (0, 0) = corner of the pitch
        +X = along the pitch length (0 to 105 m)
        +Y = across the pitch width (0 to 68 m)
    """
    x: float = 0.0
    y: float = 0.0

    # =========================================================================
    # Arithmetic Operations
    # =========================================================================

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    def __truediv__(self, scalar: float) -> Vec2:
        if scalar == 0:
            return Vec2(0, 0)
        return Vec2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    # =========================================================================
    # Vector Operations
    # =========================================================================

    def dot(self, other: Vec2) -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        """Magnitude of vector."""
        return math.hypot(self.x, self.y)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def normalized(self) -> Vec2:
        """Unit vector in same direction, zero vector when degenerate."""
        length = self.length()
        if length < 1e-9:
            return Vec2(0, 0)
        return Vec2(self.x / length, self.y / length)

    def distance_to(self, other: Vec2) -> float:
        """Euclidean distance to another point."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def angle(self) -> float:
        """Angle in radians from positive X axis (-pi to pi)."""
        return math.atan2(self.y, self.x)

    def angle_to(self, other: Vec2) -> float:
        """Angle between this vector and another (0 to pi)."""
        dot = self.normalized().dot(other.normalized())
        dot = max(-1.0, min(1.0, dot))
        return math.acos(dot)

    def reflect(self, normal: Vec2) -> Vec2:
        """Reflect vector across a unit normal."""
        return self - normal * (2 * self.dot(normal))

    # =========================================================================
    # Utility
    # =========================================================================

    def clamped(self, max_length: float) -> Vec2:
        """Return vector clamped to maximum length."""
        length = self.length()
        if length <= max_length:
            return self
        return self.normalized() * max_length

    @classmethod
    def from_angle(cls, radians: float, length: float = 1.0) -> Vec2:
        return cls(math.cos(radians) * length, math.sin(radians) * length)

    def to_dict(self) -> dict:
        return {"x": round(self.x, 3), "y": round(self.y, 3)}

    def __repr__(self) -> str:
        return f"Vec2({self.x:.2f}, {self.y:.2f})"
