"""Stamina and fatigue.

Stamina starts from the player's stamina attribute (or a role default for
unrated players), drains while they run and scales down how fast they can
currently move.
"""

from __future__ import annotations

import random

from ..core.entities import Participant, RosterPlayer
from ..core.roles import Role
from .capacity import clamp


STAMINA_FLOOR = 30.0
MIN_CAPACITY_FRACTION = 0.4
IDLE_DRAIN_PER_S = 0.1
MOVING_SPEED_MPS = 0.5

# Starting stamina range for players without a stamina attribute
ROLE_STAMINA_RANGE: dict[Role, tuple[float, float]] = {
    Role.MIDFIELDER: (85.0, 95.0),
    Role.DEFENDER: (75.0, 85.0),
    Role.FORWARD: (70.0, 80.0),
    Role.GOALKEEPER: (60.0, 70.0),
}

# Lower is more efficient
ROLE_DRAIN: dict[Role, float] = {
    Role.MIDFIELDER: 0.8,
    Role.DEFENDER: 0.9,
    Role.FORWARD: 1.1,
    Role.GOALKEEPER: 0.7,
}


def age_stamina_multiplier(age: int) -> float:
    if age <= 23:
        return 0.9 + (age - 18) * 0.02
    if age <= 27:
        return 1.0
    return max(0.75, 1.0 - (age - 27) * 0.015)


def bmi_stamina_multiplier(bmi: float) -> float:
    return clamp(1.1 - abs(bmi - 22.0) * 0.03, 0.7, 1.1)


def initial_stamina(player: RosterPlayer, rng: random.Random) -> float:
    """Starting stamina in [50, 100].

    Draws one number from rng only when the player has no stamina attribute.
    """
    if player.stamina > 0:
        stamina = float(player.stamina)
    else:
        low, high = ROLE_STAMINA_RANGE[player.role]
        stamina = low + rng.random() * (high - low)
    if player.physical is not None:
        stamina *= age_stamina_multiplier(player.physical.age)
        stamina *= bmi_stamina_multiplier(player.physical.bmi)
    return clamp(stamina, 50.0, 100.0)


def drain_rate(participant: Participant, speed_mps: float) -> float:
    """Stamina points lost per second at the given running speed."""
    if speed_mps < MOVING_SPEED_MPS:
        return IDLE_DRAIN_PER_S
    rate = 0.8 + (speed_mps / 4.0) * 1.2
    rate *= ROLE_DRAIN[participant.role]
    physical = participant.player.physical
    if physical is not None and physical.age > 28:
        rate *= 1.0 + (physical.age - 28) * 0.05
    return rate


def current_capacity(base_speed_mps: float, stamina: float) -> float:
    """Speed available to a participant at the given stamina."""
    return base_speed_mps * max(MIN_CAPACITY_FRACTION, stamina / 100.0)


def apply_fatigue(participant: Participant, moved_m: float, dt: float) -> None:
    """Drain stamina for one tick and refresh the speed capacity."""
    if dt <= 0:
        return
    speed = moved_m / dt
    participant.stamina = max(STAMINA_FLOOR, participant.stamina - drain_rate(participant, speed) * dt)
    participant.speed_mps = current_capacity(participant.base_speed_mps, participant.stamina)
