"""REST API router for drill sessions."""

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import PlainTextResponse

from pitchside.api.schemas.sessions import (
    ApplyRatingsRequest,
    CreateSessionRequest,
    RejectionDetail,
    SessionResponse,
    StepRequest,
)
from pitchside.config import DrillConfig
from pitchside.engine import apply_rating_update
from pitchside.errors import InvalidTransitionError, SessionConfigError
from pitchside.report import MarkdownSessionWriter, export_csv, export_json
from pitchside.session import ManagedSession, get_session_manager

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _parse_id(session_id: str) -> UUID:
    try:
        return UUID(session_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid session ID format",
        )


async def _get_or_404(session_id: str) -> ManagedSession:
    managed = await get_session_manager().get_session(_parse_id(session_id))
    if managed is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Session not found",
        )
    return managed


def _conflict(e: InvalidTransitionError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


def _session_to_response(managed: ManagedSession) -> SessionResponse:
    session = managed.session
    return SessionResponse(
        session_id=str(managed.session_id),
        drill=session.drill_type.value,
        status=session.status.value,
        is_running=managed.is_running,
        tick_rate_ms=managed.tick_rate_ms,
        snapshot=session.snapshot().to_dict(),
    )


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(request: CreateSessionRequest) -> SessionResponse:
    """Create and start a drill session for players from the given roster."""
    config = DrillConfig(seed=request.seed, fatigue=request.fatigue)
    try:
        managed = await get_session_manager().create_session(
            drill_type=request.drill,
            participant_ids=request.participant_ids,
            roster=[p.model_dump() for p in request.roster],
            config=config,
            tick_rate_ms=request.tick_rate_ms,
        )
    except SessionConfigError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=RejectionDetail(reason=e.reason.value, message=e.message).model_dump(),
        )
    return _session_to_response(managed)


@router.get("", response_model=list[str])
async def list_sessions() -> list[str]:
    """List all active session IDs."""
    sessions = await get_session_manager().list_sessions()
    return [str(s) for s in sessions]


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str) -> SessionResponse:
    return _session_to_response(await _get_or_404(session_id))


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: str) -> None:
    deleted = await get_session_manager().delete_session(_parse_id(session_id))
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Session not found",
        )


@router.post("/{session_id}/start", response_model=SessionResponse)
async def start_loop(session_id: str) -> SessionResponse:
    """Start the real-time tick loop."""
    managed = await _get_or_404(session_id)
    started = await get_session_manager().start_simulation(managed.session_id)
    if not started:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Session is already running or finished",
        )
    return _session_to_response(managed)


@router.post("/{session_id}/step", response_model=SessionResponse)
async def step_session(session_id: str, request: StepRequest) -> SessionResponse:
    """Advance a session by fixed steps (when the tick loop is not running)."""
    managed = await _get_or_404(session_id)
    if managed.is_running:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Session tick loop is running",
        )
    for _ in range(request.steps):
        managed.session.step(request.dt)
    return _session_to_response(managed)


@router.post("/{session_id}/pause", response_model=SessionResponse)
async def pause_session(session_id: str) -> SessionResponse:
    managed = await _get_or_404(session_id)
    try:
        await get_session_manager().pause_simulation(managed.session_id)
    except InvalidTransitionError as e:
        raise _conflict(e)
    return _session_to_response(managed)


@router.post("/{session_id}/resume", response_model=SessionResponse)
async def resume_session(session_id: str) -> SessionResponse:
    managed = await _get_or_404(session_id)
    try:
        await get_session_manager().resume_simulation(managed.session_id)
    except InvalidTransitionError as e:
        raise _conflict(e)
    return _session_to_response(managed)


@router.post("/{session_id}/stop")
async def stop_session(session_id: str) -> dict:
    """Stop a session and return its report."""
    managed = await _get_or_404(session_id)
    report = await get_session_manager().stop_simulation(managed.session_id)
    return report.to_dict()


@router.get("/{session_id}/report")
async def get_report(
    session_id: str,
    format: Literal["json", "csv", "markdown"] = Query(default="json"),
):
    """Export the report of a stopped session."""
    managed = await _get_or_404(session_id)
    report = managed.session.report
    if report is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Session has not been stopped yet",
        )
    if format == "csv":
        return PlainTextResponse(export_csv(report), media_type="text/csv")
    if format == "markdown":
        return PlainTextResponse(
            MarkdownSessionWriter().generate_summary_string(report), media_type="text/markdown"
        )
    return PlainTextResponse(export_json(report), media_type="application/json")


@router.post("/{session_id}/ratings")
async def apply_ratings(session_id: str, request: ApplyRatingsRequest) -> list[dict]:
    """Return the roster with this session's rating updates written in."""
    managed = await _get_or_404(session_id)
    report = managed.session.report
    if report is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Session has not been stopped yet",
        )
    updated = apply_rating_update(
        report,
        [p.model_dump() for p in request.roster],
        managed.session.config.rating,
    )
    return [p.to_dict() for p in updated]
