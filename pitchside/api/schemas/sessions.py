"""Pydantic schemas for the drill session API."""

from typing import Literal, Optional

from pydantic import AliasChoices, AliasPath, BaseModel, Field


class PhysicalSchema(BaseModel):
    """Optional body measurements."""

    height_cm: float = Field(default=175.0, ge=120, le=230)
    weight_kg: float = Field(default=70.0, ge=30, le=160)
    age: int = Field(default=25, ge=10, le=60)


class MatchRecordSchema(BaseModel):
    date: str
    avg_speed_mps: float = Field(ge=0, validation_alias=AliasChoices("avg_speed_mps", "avgSpeedMps"))


class RosterPlayerSchema(BaseModel):
    """A roster player as stored by the club.

    Accepts flat attribute keys or the club export shape with
    `ratingAttributes` and `matchHistory`.
    """

    id: str
    name: str = "Player"
    position: str = Field(default="Midfielder", validation_alias=AliasChoices("position", "role"))
    speed: int = Field(
        default=0, ge=0, le=100,
        validation_alias=AliasChoices("speed", AliasPath("ratingAttributes", "speed")),
    )
    stamina: int = Field(
        default=0, ge=0, le=100,
        validation_alias=AliasChoices("stamina", AliasPath("ratingAttributes", "stamina")),
    )
    physical: Optional[PhysicalSchema] = None
    match_history: list[MatchRecordSchema] = Field(
        default_factory=list, validation_alias=AliasChoices("match_history", "matchHistory")
    )


class CreateSessionRequest(BaseModel):
    """Request to create a new drill session."""

    drill: str = "chase"
    participant_ids: list[str]
    roster: list[RosterPlayerSchema]
    seed: Optional[int] = None
    fatigue: bool = True
    tick_rate_ms: int = Field(default=50, ge=10, le=500)


class StepRequest(BaseModel):
    """Advance a session by fixed steps without the tick loop."""

    dt: float = Field(default=0.05, gt=0, le=0.1)
    steps: int = Field(default=1, ge=1, le=12000)


class ApplyRatingsRequest(BaseModel):
    roster: list[RosterPlayerSchema]


class SessionResponse(BaseModel):
    """Session information with the latest entity snapshot."""

    session_id: str
    drill: str
    status: str
    is_running: bool
    tick_rate_ms: int
    snapshot: dict


class RejectionDetail(BaseModel):
    reason: str
    message: str


# WebSocket message types

class WSMessageBase(BaseModel):
    """Base WebSocket message."""

    type: str


# Server -> Client messages

class TickUpdateMessage(WSMessageBase):
    type: Literal["tick_update"] = "tick_update"
    payload: dict


class SessionCompleteMessage(WSMessageBase):
    type: Literal["session_complete"] = "session_complete"
    payload: dict


class StateSyncMessage(WSMessageBase):
    type: Literal["state_sync"] = "state_sync"
    payload: SessionResponse


class ErrorMessage(WSMessageBase):
    """Server message for errors."""

    type: Literal["error"] = "error"
    message: str
    code: str = "UNKNOWN_ERROR"
