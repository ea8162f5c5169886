"""API schemas."""

from .sessions import (
    ApplyRatingsRequest,
    CreateSessionRequest,
    ErrorMessage,
    RosterPlayerSchema,
    SessionCompleteMessage,
    SessionResponse,
    StateSyncMessage,
    StepRequest,
    TickUpdateMessage,
)

__all__ = [
    "ApplyRatingsRequest",
    "CreateSessionRequest",
    "ErrorMessage",
    "RosterPlayerSchema",
    "SessionCompleteMessage",
    "SessionResponse",
    "StateSyncMessage",
    "StepRequest",
    "TickUpdateMessage",
]
