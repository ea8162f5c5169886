"""Shared pytest fixtures for pitchside tests."""

import random

import pytest

from pitchside.config import DrillConfig
from pitchside.core.entities import MatchRecord, Participant, PhysicalProfile, RosterPlayer
from pitchside.core.roles import Role
from pitchside.core.vec2 import Vec2


# =============================================================================
# Roster Fixtures
# =============================================================================


@pytest.fixture
def striker() -> RosterPlayer:
    """A rated forward with physical data."""
    return RosterPlayer(
        id="p1",
        name="Ade Okafor",
        position="Striker",
        speed=78,
        stamina=72,
        physical=PhysicalProfile(height_cm=181, weight_kg=76, age=24),
    )


@pytest.fixture
def midfielder() -> RosterPlayer:
    """A rated midfielder with some history."""
    return RosterPlayer(
        id="p2",
        name="Luis Ferreira",
        position="Central Midfielder",
        speed=70,
        stamina=88,
        match_history=(
            MatchRecord("2026-09-01", 3.1),
            MatchRecord("2026-09-08", 3.3),
        ),
    )


@pytest.fixture
def unrated_defender() -> RosterPlayer:
    """A brand new player with no ratings yet."""
    return RosterPlayer(id="p3", name="Tom Hale", position="CB")


@pytest.fixture
def roster(striker, midfielder, unrated_defender) -> list[RosterPlayer]:
    return [striker, midfielder, unrated_defender]


# =============================================================================
# Simulation Fixtures
# =============================================================================


@pytest.fixture
def seeded_config() -> DrillConfig:
    """Deterministic config with fatigue switched off."""
    return DrillConfig(seed=42, fatigue=False)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


def make_participant(
    pid: str = "x",
    pos: Vec2 = Vec2(50, 34),
    speed: float = 4.0,
    role: Role = Role.MIDFIELDER,
) -> Participant:
    """Participant at a fixed position and speed, for drill-level tests."""
    player = RosterPlayer(id=pid, name=pid.upper(), position=role.value, speed=60, stamina=80)
    p = Participant(
        id=pid,
        name=player.name,
        role=role,
        player=player,
        base_speed_mps=speed,
        speed_mps=speed,
    )
    p.place(pos)
    return p


@pytest.fixture
def participant_factory():
    return make_participant
