"""Pure geometry and kinematics helpers shared by every drill.

Nothing here holds state or draws random numbers, so every function is
safe to call from tests with hand-built inputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .pitch import PITCH, Pitch
from .vec2 import Vec2


# Used when two circles sit exactly on top of each other
COINCIDENT_NORMAL = Vec2(1.0, 0.0)


def distance(a: Vec2, b: Vec2) -> float:
    """Euclidean distance between two points."""
    return a.distance_to(b)


def clamp_to_pitch(p: Vec2, pitch: Pitch = PITCH) -> Vec2:
    """Clamp a point onto the pitch. Idempotent."""
    return pitch.clamp(p)


def move_toward(current: Vec2, target: Vec2, max_speed_mps: float, dt: float) -> Vec2:
    """Advance from current toward target by at most max_speed * dt.

    Snaps exactly onto the target when it is within reach, so the result
    never overshoots.
    """
    if dt <= 0 or max_speed_mps <= 0:
        return current
    offset = target - current
    d = offset.length()
    if d == 0:
        return current
    step = max_speed_mps * dt
    if step >= d:
        return target
    return current + offset * (step / d)


def seek_with_repulsion(
    pos: Vec2,
    desired: Vec2,
    obstacles: Iterable[tuple[Vec2, float]],
    personal_radius: float,
    buffer: float = 0.3,
    strength: float = 0.8,
    pitch: Pitch = PITCH,
) -> Vec2:
    """Shift a desired target away from nearby obstacles.

    Each obstacle is (center, radius). An obstacle closer than
    radius + personal_radius + buffer pushes the target away from it,
    scaled linearly by how deep the intrusion is.
    """
    target = desired
    for center, radius in obstacles:
        min_d = radius + personal_radius + buffer
        away = pos - center
        d = away.length()
        if 0 < d < min_d:
            weight = (min_d - d) / min_d
            target = target + away * (weight * strength / d)
    return pitch.clamp(target)


@dataclass(frozen=True)
class Separation:
    """Result of pushing two overlapping circles apart."""
    a: Vec2
    b: Vec2
    normal: Vec2  # unit vector pointing from b to a
    overlap: float


def separate_circles(
    a: Vec2,
    ra: float,
    b: Vec2,
    rb: float,
    bias_a: float = 0.5,
    margin: float = 0.04,
) -> Optional[Separation]:
    """Resolve overlap between two circles.

    Returns None when the circles are already far enough apart. Otherwise
    a is pushed by overlap * bias_a and b by overlap * (1 - bias_a) along
    the line between their centers.
    """
    min_d = ra + rb + margin
    delta = a - b
    d = delta.length()
    if d >= min_d:
        return None
    normal = COINCIDENT_NORMAL if d == 0 else delta / d
    overlap = min_d - d
    return Separation(
        a=a + normal * (overlap * bias_a),
        b=b - normal * (overlap * (1.0 - bias_a)),
        normal=normal,
        overlap=overlap,
    )


def reflect_velocity(velocity: Vec2, normal: Vec2, restitution: float) -> Vec2:
    """Bounce a velocity off a surface with the given unit normal.

    Only velocities closing along the normal are reflected; a body already
    moving away is returned unchanged.
    """
    closing = velocity.dot(normal)
    if closing >= 0:
        return velocity
    return velocity.reflect(normal) * restitution


def turn_angle(previous_step: Vec2, step: Vec2) -> float:
    """Angle in radians between two consecutive movement vectors."""
    if previous_step.length_squared() == 0 or step.length_squared() == 0:
        return 0.0
    return previous_step.angle_to(step)
