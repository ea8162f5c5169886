"""Pitch dimensions and the meters-to-display projection."""

from __future__ import annotations

from dataclasses import dataclass

from .vec2 import Vec2


PITCH_LENGTH_M = 105.0
PITCH_WIDTH_M = 68.0


@dataclass(frozen=True)
class Pitch:
    """Fixed-size playing area in meters, origin at a corner."""
    length: float = PITCH_LENGTH_M
    width: float = PITCH_WIDTH_M

    @property
    def center(self) -> Vec2:
        return Vec2(self.length / 2, self.width / 2)

    def contains(self, p: Vec2) -> bool:
        return 0.0 <= p.x <= self.length and 0.0 <= p.y <= self.width

    def clamp(self, p: Vec2) -> Vec2:
        """Clamp a point into [0, length] x [0, width]."""
        return Vec2(
            min(max(p.x, 0.0), self.length),
            min(max(p.y, 0.0), self.width),
        )

    def to_percent(self, p: Vec2) -> tuple[float, float]:
        """Project meters onto 0-100 display coordinates.

        Presentation only; nothing in the simulation reads these values.
        """
        return (p.x / self.length * 100.0, p.y / self.width * 100.0)


PITCH = Pitch()
