"""Pitchside - football drill simulation and kinematic analytics."""

from pitchside.config import AnalyticsConfig, DrillConfig, RatingConfig
from pitchside.core.entities import MatchRecord, PhysicalProfile, RosterPlayer
from pitchside.drills import DrillType
from pitchside.engine import (
    apply_rating_update,
    export_csv,
    export_json,
    pause,
    resume,
    start_session,
    stop,
    tick,
)
from pitchside.errors import (
    InvalidTransitionError,
    PitchsideError,
    RejectReason,
    SessionConfigError,
    TraceConsumedError,
)
from pitchside.report import SessionReport
from pitchside.session import DrillSession, SessionStatus

__version__ = "0.1.0"

__all__ = [
    "AnalyticsConfig",
    "DrillConfig",
    "DrillSession",
    "DrillType",
    "InvalidTransitionError",
    "MatchRecord",
    "PhysicalProfile",
    "PitchsideError",
    "RatingConfig",
    "RejectReason",
    "RosterPlayer",
    "SessionConfigError",
    "SessionReport",
    "SessionStatus",
    "TraceConsumedError",
    "apply_rating_update",
    "export_csv",
    "export_json",
    "pause",
    "resume",
    "start_session",
    "stop",
    "tick",
]
