"""Core types: vectors, pitch, entities, clock, events."""

from .clock import SessionClock
from .entities import Ball, MatchRecord, Participant, PhysicalProfile, RosterPlayer, coerce_attribute
from .events import Event, EventBus, EventType
from .geometry import (
    Separation,
    clamp_to_pitch,
    distance,
    move_toward,
    reflect_velocity,
    seek_with_repulsion,
    separate_circles,
    turn_angle,
)
from .pitch import PITCH, PITCH_LENGTH_M, PITCH_WIDTH_M, Pitch
from .roles import Role, map_position_to_role
from .vec2 import Vec2

__all__ = [
    "Ball",
    "Event",
    "EventBus",
    "EventType",
    "MatchRecord",
    "PITCH",
    "PITCH_LENGTH_M",
    "PITCH_WIDTH_M",
    "Participant",
    "PhysicalProfile",
    "Pitch",
    "Role",
    "RosterPlayer",
    "SessionClock",
    "Separation",
    "Vec2",
    "clamp_to_pitch",
    "coerce_attribute",
    "distance",
    "map_position_to_role",
    "move_toward",
    "reflect_velocity",
    "seek_with_repulsion",
    "separate_circles",
    "turn_angle",
]
