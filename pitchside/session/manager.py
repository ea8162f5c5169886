"""Session manager for drill sessions served over the API."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional
from uuid import UUID, uuid4

from ..config import DrillConfig
from ..report.models import SessionReport
from .session import DrillSession, EntitySnapshot, RosterInput, start_session

logger = logging.getLogger(__name__)


@dataclass
class ManagedSession:
    """A drill session plus the async machinery that ticks it."""

    session_id: UUID
    session: DrillSession
    tick_rate_ms: int = 50
    max_seconds: float = 600.0
    on_tick: Optional[Callable[[EntitySnapshot], None]] = None
    on_complete: Optional[Callable[[SessionReport], None]] = None

    # Async control
    _task: Optional[asyncio.Task] = field(default=None, repr=False)
    _paused: asyncio.Event = field(default_factory=asyncio.Event, repr=False)
    _stop_requested: bool = field(default=False, repr=False)

    def __post_init__(self) -> None:
        self._paused.set()  # Start unpaused

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()


class SessionManager:
    """
    Manages active drill sessions.

    Session storage is guarded by an asyncio lock; each started session
    gets its own tick loop task.
    """

    def __init__(self, tick_rate_ms: int = 50, max_session_seconds: float = 600.0) -> None:
        self._sessions: dict[UUID, ManagedSession] = {}
        self._lock = asyncio.Lock()
        self.tick_rate_ms = tick_rate_ms
        self.max_session_seconds = max_session_seconds

    async def create_session(
        self,
        drill_type: str,
        participant_ids: list[str],
        roster: Iterable[RosterInput],
        config: Optional[DrillConfig] = None,
        tick_rate_ms: Optional[int] = None,
    ) -> ManagedSession:
        """
        Create a new drill session.

        Raises SessionConfigError (nothing is stored) when the request is
        unusable.
        """
        session_id = uuid4()
        session = start_session(
            drill_type, participant_ids, roster, config, session_id=str(session_id)
        )
        managed = ManagedSession(
            session_id=session_id,
            session=session,
            tick_rate_ms=tick_rate_ms or self.tick_rate_ms,
            max_seconds=self.max_session_seconds,
        )

        async with self._lock:
            self._sessions[session_id] = managed

        logger.info("Created session %s (%s)", session_id, session.drill_type.value)
        return managed

    async def get_session(self, session_id: UUID) -> Optional[ManagedSession]:
        async with self._lock:
            return self._sessions.get(session_id)

    async def list_sessions(self) -> list[UUID]:
        async with self._lock:
            return list(self._sessions.keys())

    async def delete_session(self, session_id: UUID) -> bool:
        """
        Delete a session, stopping its loop first.

        Returns True if the session existed.
        """
        async with self._lock:
            managed = self._sessions.get(session_id)
            if managed is None:
                return False
            await self._stop_loop(managed)
            del self._sessions[session_id]
            return True

    async def start_simulation(
        self,
        session_id: UUID,
        on_tick: Optional[Callable[[EntitySnapshot], None]] = None,
        on_complete: Optional[Callable[[SessionReport], None]] = None,
    ) -> bool:
        """
        Start the tick loop for a session.

        Returns False if the session is missing, already looping or finished.
        """
        async with self._lock:
            managed = self._sessions.get(session_id)
            if managed is None or managed.is_running or managed.session.report is not None:
                return False

            managed.on_tick = on_tick
            managed.on_complete = on_complete
            managed._stop_requested = False
            managed._paused.set()
            managed._task = asyncio.create_task(self._run_tick_loop(managed))
            return True

    async def pause_simulation(self, session_id: UUID) -> bool:
        async with self._lock:
            managed = self._sessions.get(session_id)
            if managed is None:
                return False
            managed.session.pause()
            managed._paused.clear()
            return True

    async def resume_simulation(self, session_id: UUID) -> bool:
        async with self._lock:
            managed = self._sessions.get(session_id)
            if managed is None:
                return False
            managed.session.resume()
            managed._paused.set()
            return True

    async def stop_simulation(self, session_id: UUID) -> Optional[SessionReport]:
        """Stop a session and return its report, or None if it is unknown."""
        async with self._lock:
            managed = self._sessions.get(session_id)
            if managed is None:
                return None
            await self._stop_loop(managed)
            return managed.session.stop()

    async def cleanup_all(self) -> None:
        """Stop every loop and forget all sessions."""
        async with self._lock:
            for managed in self._sessions.values():
                await self._stop_loop(managed)
            self._sessions.clear()

    async def _stop_loop(self, managed: ManagedSession) -> None:
        """Stop a session's tick loop (must hold lock)."""
        if managed._task is not None and not managed._task.done():
            managed._stop_requested = True
            managed._paused.set()  # Unblock if paused
            try:
                await asyncio.wait_for(managed._task, timeout=1.0)
            except asyncio.TimeoutError:
                managed._task.cancel()
                try:
                    await managed._task
                except asyncio.CancelledError:
                    pass
            managed._task = None

    async def _run_tick_loop(self, managed: ManagedSession) -> None:
        """Tick a session until it completes, times out or is stopped."""
        session = managed.session
        tick_s = managed.tick_rate_ms / 1000.0
        session.tick(time.monotonic())

        while not managed._stop_requested:
            await managed._paused.wait()
            if managed._stop_requested:
                break

            snapshot = session.tick(time.monotonic())
            if managed.on_tick:
                try:
                    managed.on_tick(snapshot)
                except Exception:
                    logger.exception("on_tick callback failed for session %s", managed.session_id)

            if snapshot.complete or session.elapsed >= managed.max_seconds:
                break

            await asyncio.sleep(tick_s)

        report = session.stop()
        if managed.on_complete:
            try:
                managed.on_complete(report)
            except Exception:
                logger.exception("on_complete callback failed for session %s", managed.session_id)


# Global session manager instance
_session_manager: Optional[SessionManager] = None


def get_session_manager() -> SessionManager:
    """Get the global session manager instance."""
    global _session_manager
    if _session_manager is None:
        from ..config import get_config

        config = get_config()
        _session_manager = SessionManager(
            tick_rate_ms=config.tick_rate_ms,
            max_session_seconds=config.max_session_seconds,
        )
    return _session_manager
