"""Speed capacity of a participant.

Base running speed comes from a per-role band, scaled by the player's
speed attribute and, when the club has recorded them, by height, BMI
and age.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from ..core.entities import PhysicalProfile, RosterPlayer
from ..core.roles import Role


MIN_SPEED_MPS = 1.5
MAX_SPEED_MPS = 8.0


@dataclass(frozen=True)
class RoleBand:
    """Typical drill running speeds for a role, in m/s."""
    base_min: float
    base_max: float
    sprint: float


ROLE_BANDS: dict[Role, RoleBand] = {
    Role.FORWARD: RoleBand(2.8, 3.3, 7.0),
    Role.MIDFIELDER: RoleBand(3.0, 3.4, 6.5),
    Role.DEFENDER: RoleBand(2.6, 3.0, 6.0),
    Role.GOALKEEPER: RoleBand(2.8, 3.2, 6.5),
}


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp value to range."""
    return max(min_val, min(max_val, value))


def attribute_multiplier(speed_attr: int) -> float:
    """0-100 speed attribute to a multiplier in [0.5, 1.5].

    Unrated players (attribute 0) run at the unscaled band speed.
    """
    if speed_attr <= 0:
        return 1.0
    return clamp(0.5 + speed_attr / 100.0, 0.5, 1.5)


def height_multiplier(height_cm: float) -> float:
    return 0.8 + (height_cm - 160.0) * 0.004


def bmi_multiplier(bmi: float) -> float:
    return clamp(1.2 - abs(bmi - 22.0) * 0.05, 0.6, 1.2)


def age_multiplier(age: int) -> float:
    if age <= 22:
        return 0.85 + (age - 18) * 0.025
    if age <= 28:
        return 1.0
    return max(0.7, 1.0 - (age - 28) * 0.02)


def physical_multiplier(physical: PhysicalProfile) -> float:
    """Combined effect of body measurements on running speed."""
    return (
        height_multiplier(physical.height_cm)
        * bmi_multiplier(physical.bmi)
        * age_multiplier(physical.age)
    )


def base_speed(player: RosterPlayer, rng: random.Random) -> float:
    """Sample a participant's base running speed for one session.

    Draws exactly one number from rng so sessions stay reproducible.
    """
    band = ROLE_BANDS[player.role]
    speed = band.base_min + rng.random() * (band.base_max - band.base_min)
    speed *= attribute_multiplier(player.speed)
    if player.physical is not None:
        speed *= physical_multiplier(player.physical)
    return clamp(speed, MIN_SPEED_MPS, MAX_SPEED_MPS)
