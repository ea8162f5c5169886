"""WebSocket router for real-time drill session updates."""

import asyncio
import json
import logging
from uuid import UUID

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from pitchside.api.routers.sessions import _session_to_response
from pitchside.api.schemas.sessions import (
    ErrorMessage,
    SessionCompleteMessage,
    StateSyncMessage,
    TickUpdateMessage,
)
from pitchside.errors import InvalidTransitionError
from pitchside.report.models import SessionReport
from pitchside.session import EntitySnapshot, get_session_manager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sessions-websocket"])


@router.websocket("/ws/sessions/{session_id}")
async def session_websocket(websocket: WebSocket, session_id: str) -> None:
    """
    WebSocket endpoint for a drill session.

    Client messages:
    - start: Start the tick loop
    - pause: Pause the session
    - resume: Resume a paused session
    - stop: Stop and analyze the session
    - request_sync: Request full state sync

    Server messages:
    - tick_update: Sent each tick with the entity snapshot
    - session_complete: Sent once with the report when the session ends
    - state_sync: Full state on connect or request
    - error: Error message
    """
    await websocket.accept()

    manager = get_session_manager()

    try:
        uuid = UUID(session_id)
    except ValueError:
        await websocket.send_json(
            ErrorMessage(message="Invalid session ID format", code="INVALID_SESSION_ID").model_dump()
        )
        await websocket.close()
        return

    managed = await manager.get_session(uuid)
    if managed is None:
        await websocket.send_json(
            ErrorMessage(message="Session not found", code="SESSION_NOT_FOUND").model_dump()
        )
        await websocket.close()
        return

    async def send_sync() -> None:
        await websocket.send_json(StateSyncMessage(payload=_session_to_response(managed)).model_dump())

    async def send(message: dict) -> None:
        try:
            await websocket.send_json(message)
        except Exception:
            logger.debug("Dropped message for closed socket on session %s", session_id)

    loop = asyncio.get_running_loop()
    pending: set[asyncio.Task] = set()

    def dispatch(message: dict) -> None:
        task = loop.create_task(send(message))
        pending.add(task)
        task.add_done_callback(pending.discard)

    def on_tick(snapshot: EntitySnapshot) -> None:
        dispatch(TickUpdateMessage(payload=snapshot.to_dict()).model_dump())

    def on_complete(report: SessionReport) -> None:
        dispatch(SessionCompleteMessage(payload=report.to_dict()).model_dump())

    await send_sync()

    try:
        while True:
            data = await websocket.receive_text()
            try:
                message = json.loads(data)
            except json.JSONDecodeError:
                await websocket.send_json(
                    ErrorMessage(message="Invalid JSON", code="INVALID_JSON").model_dump()
                )
                continue

            msg_type = message.get("type")
            try:
                if msg_type == "start":
                    started = await manager.start_simulation(uuid, on_tick, on_complete)
                    if not started:
                        await websocket.send_json(ErrorMessage(
                            message="Session is already running or finished",
                            code="ALREADY_RUNNING",
                        ).model_dump())
                elif msg_type == "pause":
                    await manager.pause_simulation(uuid)
                    await send_sync()
                elif msg_type == "resume":
                    await manager.resume_simulation(uuid)
                    await send_sync()
                elif msg_type == "stop":
                    report = await manager.stop_simulation(uuid)
                    if report is not None and not managed.on_complete:
                        await websocket.send_json(
                            SessionCompleteMessage(payload=report.to_dict()).model_dump()
                        )
                elif msg_type == "request_sync":
                    await send_sync()
                else:
                    await websocket.send_json(ErrorMessage(
                        message=f"Unknown message type: {msg_type}",
                        code="UNKNOWN_MESSAGE_TYPE",
                    ).model_dump())
            except InvalidTransitionError as e:
                await websocket.send_json(
                    ErrorMessage(message=str(e), code="INVALID_TRANSITION").model_dump()
                )

    except WebSocketDisconnect:
        logger.info("WebSocket for session %s disconnected", session_id)
    finally:
        # The tick loop may outlive this socket
        if managed.on_tick is on_tick:
            managed.on_tick = None
        if managed.on_complete is on_complete:
            managed.on_complete = None
