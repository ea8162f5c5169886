"""Common drill machinery.

Every drill is a strategy plugged into the same session loop: `setup`
places participants, `step` advances them by one dt, and `counters`
reports the drill-specific numbers that end up in the session report.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional

from ..config import DrillConfig
from ..core.clock import SessionClock
from ..core.entities import Ball, Participant
from ..core.events import EventBus, EventType
from ..core.geometry import move_toward
from ..core.pitch import PITCH, Pitch
from ..core.vec2 import Vec2
from ..physics.collision import resolve_collisions


class DrillType(str, Enum):
    CHASE = "chase"
    SHUTTLE = "shuttle"
    SLALOM = "slalom"


@dataclass
class DrillState:
    """Everything a drill reads and mutates during a session."""
    participants: list[Participant]
    config: DrillConfig
    rng: random.Random
    clock: SessionClock
    events: EventBus = field(default_factory=EventBus)
    ball: Optional[Ball] = None
    pitch: Pitch = PITCH

    @property
    def by_id(self) -> dict[str, Participant]:
        return {p.id: p for p in self.participants}

    def emit(self, event_type: EventType, player_id: Optional[str] = None,
             description: str = "", **data) -> None:
        self.events.emit_simple(
            event_type,
            tick=self.clock.tick_count,
            time=self.clock.current_time,
            player_id=player_id,
            description=description,
            **data,
        )


class Drill(ABC):
    """A parametrized drill scenario."""

    drill_type: ClassVar[DrillType]
    min_participants: ClassVar[int] = 1
    max_participants: ClassVar[int] = 2
    uses_ball: ClassVar[bool] = False

    @abstractmethod
    def setup(self, state: DrillState) -> None:
        """Place participants (and the ball) at their starting positions."""

    @abstractmethod
    def step(self, state: DrillState, dt: float) -> None:
        """Advance the drill by dt seconds."""

    def is_complete(self, state: DrillState) -> bool:
        """True once the drill has nothing left to do."""
        return False

    def counters(self, participant: Participant) -> dict[str, object]:
        """Drill-specific counters for one participant."""
        return {}

    def resolve_collisions(self, state: DrillState) -> int:
        return resolve_collisions(
            state.participants,
            None,
            player_radius=state.config.player_radius_m,
            ball_radius=0.0,
            restitution=0.0,
            margin=state.config.collision_margin_m,
            pitch=state.pitch,
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def move_participant(p: Participant, target: Vec2, dt: float, pitch: Pitch = PITCH) -> Vec2:
        """Move toward target within the participant's speed capacity.

        Updates position, previous position, velocity and last step, and
        returns the step taken.
        """
        new_pos = pitch.clamp(move_toward(p.pos, pitch.clamp(target), p.speed_mps, dt))
        step = new_pos - p.pos
        p.prev_pos = p.pos
        p.pos = new_pos
        p.velocity = step / dt if dt > 0 else Vec2()
        if step.length_squared() > 0:
            p.last_step = step
        return step

    @staticmethod
    def hold(p: Participant) -> None:
        """Keep a participant still for this tick."""
        p.prev_pos = p.pos
        p.velocity = Vec2()
