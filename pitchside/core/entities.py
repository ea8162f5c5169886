"""Roster records and the simulated entities that move on the pitch."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .roles import Role, map_position_to_role
from .vec2 import Vec2


def coerce_attribute(value: Any, default: int = 50) -> int:
    """Coerce a stored attribute into an integer in [0, 100]."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if number != number:  # NaN
        return default
    return int(round(min(100.0, max(0.0, number))))


def _read_attribute(data: dict, attributes: dict, key: str) -> int:
    value = data.get(key)
    if value is None:
        value = attributes.get(key)
    if value is None:
        return 0
    return coerce_attribute(value)


# =============================================================================
# Roster (input records)
# =============================================================================

@dataclass(frozen=True)
class PhysicalProfile:
    """Optional body measurements used to refine speed and stamina."""
    height_cm: float = 175.0
    weight_kg: float = 70.0
    age: int = 25

    @property
    def bmi(self) -> float:
        height_m = self.height_cm / 100.0
        if height_m <= 0:
            return 22.0
        return self.weight_kg / (height_m * height_m)

    def to_dict(self) -> dict:
        return {"height_cm": self.height_cm, "weight_kg": self.weight_kg, "age": self.age}

    @classmethod
    def from_dict(cls, data: dict) -> PhysicalProfile:
        return cls(
            height_cm=float(data.get("height_cm", 175.0)),
            weight_kg=float(data.get("weight_kg", 70.0)),
            age=int(data.get("age", 25)),
        )


@dataclass(frozen=True)
class MatchRecord:
    """One entry of a player's session history."""
    date: str
    avg_speed_mps: float

    def to_dict(self) -> dict:
        return {"date": self.date, "avg_speed_mps": self.avg_speed_mps}

    @classmethod
    def from_dict(cls, data: dict) -> MatchRecord:
        speed = data["avg_speed_mps"] if "avg_speed_mps" in data else data["avgSpeedMps"]
        return cls(date=str(data["date"]), avg_speed_mps=float(speed))


@dataclass(frozen=True)
class RosterPlayer:
    """A player as stored by the club.

    A speed of 0 marks the player as unrated.
    """
    id: str
    name: str
    position: str = "Midfielder"
    speed: int = 0
    stamina: int = 0
    physical: Optional[PhysicalProfile] = None
    match_history: tuple[MatchRecord, ...] = ()

    @property
    def role(self) -> Role:
        return map_position_to_role(self.position)

    @property
    def is_rated(self) -> bool:
        return self.speed > 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "position": self.position,
            "speed": self.speed,
            "stamina": self.stamina,
            "physical": self.physical.to_dict() if self.physical else None,
            "match_history": [m.to_dict() for m in self.match_history],
        }

    @classmethod
    def from_dict(cls, data: dict) -> RosterPlayer:
        """Build from flat keys or the club export shape.

        The export shape nests attributes under `ratingAttributes`, keeps
        history in `matchHistory` and may carry the position as `role`.
        A missing attribute reads as 0 (unrated); a present but
        non-numeric one reads as 50.
        """
        attributes = data.get("ratingAttributes") or {}
        physical = data.get("physical")
        history = data.get("match_history")
        if history is None:
            history = data.get("matchHistory") or []
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", data["id"])),
            position=str(data.get("position") or data.get("role") or "Midfielder"),
            speed=_read_attribute(data, attributes, "speed"),
            stamina=_read_attribute(data, attributes, "stamina"),
            physical=PhysicalProfile.from_dict(physical) if physical else None,
            match_history=tuple(MatchRecord.from_dict(m) for m in history),
        )


# =============================================================================
# Simulation entities
# =============================================================================

@dataclass
class Participant:
    """A roster player taking part in a drill.

    Position is always kept on the pitch and velocity never exceeds the
    current speed capacity; the drill engine enforces both every tick.
    """
    id: str
    name: str
    role: Role
    player: RosterPlayer
    base_speed_mps: float
    speed_mps: float
    pos: Vec2 = field(default_factory=Vec2)
    velocity: Vec2 = field(default_factory=Vec2)
    prev_pos: Vec2 = field(default_factory=Vec2)
    stamina: float = 100.0

    # Drill bookkeeping
    touches: int = 0
    reps: int = 0
    gates_cleared: int = 0
    errors: int = 0
    completion_time_s: Optional[float] = None
    finished: bool = False
    last_step: Vec2 = field(default_factory=Vec2)
    lane_y: float = 0.0

    def place(self, pos: Vec2) -> None:
        self.pos = pos
        self.prev_pos = pos
        self.velocity = Vec2()
        self.last_step = Vec2()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "role": self.role.value,
            "pos": self.pos.to_dict(),
            "velocity": self.velocity.to_dict(),
            "speed_mps": round(self.speed_mps, 3),
            "stamina": round(self.stamina, 1),
            "touches": self.touches,
            "reps": self.reps,
            "gates_cleared": self.gates_cleared,
            "errors": self.errors,
            "completion_time_s": self.completion_time_s,
            "finished": self.finished,
        }


@dataclass
class Ball:
    """The ball in a chase drill.

    Possession holds a participant id, never the participant itself; an id
    that no longer resolves means the ball is loose.
    """
    pos: Vec2 = field(default_factory=Vec2)
    velocity: Vec2 = field(default_factory=Vec2)
    possession: Optional[str] = None
    last_kicker: Optional[str] = None

    def holder(self, participants: dict[str, Participant]) -> Optional[Participant]:
        if self.possession is None:
            return None
        return participants.get(self.possession)

    @property
    def is_moving(self) -> bool:
        return self.velocity.length_squared() > 0

    def to_dict(self) -> dict:
        return {
            "pos": self.pos.to_dict(),
            "velocity": self.velocity.to_dict(),
            "possession": self.possession,
        }
