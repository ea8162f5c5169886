"""Exceptions raised by the drill engine."""

from __future__ import annotations

from enum import Enum


class PitchsideError(Exception):
    """Base class for every error raised by pitchside."""


class RejectReason(str, Enum):
    """Why a session could not be started."""
    NOT_ENOUGH_PARTICIPANTS = "NotEnoughParticipants"
    TOO_MANY_PARTICIPANTS = "TooManyParticipants"
    UNKNOWN_DRILL_TYPE = "UnknownDrillType"
    DUPLICATE_PARTICIPANT = "DuplicateParticipant"
    UNKNOWN_PARTICIPANT = "UnknownParticipant"


class SessionConfigError(PitchsideError):
    """A session was requested with an unusable configuration.

    Raised before any session state exists, so a rejected request leaves
    nothing behind to clean up.
    """

    def __init__(self, reason: RejectReason, message: str) -> None:
        super().__init__(message)
        self.reason = reason
        self.message = message

    def __str__(self) -> str:
        return f"{self.reason.value}: {self.message}"


class InvalidTransitionError(PitchsideError):
    """A lifecycle call was made from a state that does not allow it."""

    def __init__(self, action: str, state: str) -> None:
        super().__init__(f"cannot {action} a session that is {state}")
        self.action = action
        self.state = state


class TraceConsumedError(PitchsideError):
    """A position trace was handed to the analytics engine twice."""
