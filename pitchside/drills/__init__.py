"""Drill scenarios and the registry that builds them by type."""

from __future__ import annotations

from typing import Union

from ..errors import RejectReason, SessionConfigError
from .base import Drill, DrillState, DrillType
from .chase import ChaseDrill
from .shuttle import ShuttleDrill
from .slalom import SlalomDrill


DRILLS: dict[DrillType, type[Drill]] = {
    DrillType.CHASE: ChaseDrill,
    DrillType.SHUTTLE: ShuttleDrill,
    DrillType.SLALOM: SlalomDrill,
}


def parse_drill_type(value: Union[str, DrillType]) -> DrillType:
    """Resolve a drill name, rejecting anything not registered."""
    try:
        return DrillType(value.lower() if isinstance(value, str) else value)
    except ValueError:
        raise SessionConfigError(
            RejectReason.UNKNOWN_DRILL_TYPE,
            f"unknown drill type {value!r}, expected one of {[d.value for d in DrillType]}",
        ) from None


def create_drill(drill_type: Union[str, DrillType]) -> Drill:
    """Instantiate a fresh drill; each session owns its own instance."""
    return DRILLS[parse_drill_type(drill_type)]()


__all__ = [
    "DRILLS",
    "ChaseDrill",
    "Drill",
    "DrillState",
    "DrillType",
    "ShuttleDrill",
    "SlalomDrill",
    "create_drill",
    "parse_drill_type",
]
