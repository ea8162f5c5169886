"""Drill sessions and the async manager that serves them."""

from .manager import ManagedSession, SessionManager, get_session_manager
from .session import (
    DrillSession,
    EntitySnapshot,
    SessionStatus,
    make_participant,
    start_session,
    validate_request,
)

__all__ = [
    "DrillSession",
    "EntitySnapshot",
    "ManagedSession",
    "SessionManager",
    "SessionStatus",
    "get_session_manager",
    "make_participant",
    "start_session",
    "validate_request",
]
