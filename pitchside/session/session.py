"""Drill session: the handle that owns one running drill.

A session owns its participants, ball, traces, clock, RNG and event bus.
Nothing is shared between sessions, so any number can run side by side.

Lifecycle:
    NOT_STARTED -> RUNNING <-> PAUSED -> STOPPED -> ANALYZED

Each tick runs in a fixed order: drill step, collisions, fatigue, then
trace recording. Stopping freezes the traces and runs the analytics
exactly once; later calls return the same report.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional, Sequence, Union
from uuid import uuid4

from ..analytics.kinematics import SessionMetrics, metrics_from_trace
from ..analytics.trace import PositionTrace
from ..config import DrillConfig
from ..core.clock import SessionClock
from ..core.entities import Participant, RosterPlayer
from ..core.events import Event, EventBus, EventType
from ..drills import DRILLS, Drill, DrillState, DrillType, create_drill, parse_drill_type
from ..errors import InvalidTransitionError, RejectReason, SessionConfigError
from ..physics.capacity import base_speed
from ..physics.stamina import apply_fatigue, current_capacity, initial_stamina
from ..rating import RatingUpdate, compute_rating_update
from ..report.builder import build_session_report
from ..report.models import SessionReport

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"
    ANALYZED = "analyzed"


@dataclass
class EntitySnapshot:
    """State of every entity after a tick, for UIs and tests."""
    session_id: str
    status: SessionStatus
    time_s: float
    tick: int
    participants: list[dict] = field(default_factory=list)
    ball: Optional[dict] = None
    complete: bool = False

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "status": self.status.value,
            "time_s": round(self.time_s, 3),
            "tick": self.tick,
            "participants": self.participants,
            "ball": self.ball,
            "complete": self.complete,
        }


RosterInput = Union[RosterPlayer, dict]


def _roster_index(roster: Iterable[RosterInput]) -> dict[str, RosterPlayer]:
    players = {}
    for entry in roster:
        player = entry if isinstance(entry, RosterPlayer) else RosterPlayer.from_dict(entry)
        players[player.id] = player
    return players


def validate_request(
    drill_type: Union[str, DrillType],
    participant_ids: Sequence[str],
    roster: dict[str, RosterPlayer],
) -> type[Drill]:
    """Check a session request; raise SessionConfigError when unusable."""
    drill_cls = DRILLS[parse_drill_type(drill_type)]

    seen = set()
    for pid in participant_ids:
        if pid in seen:
            raise SessionConfigError(
                RejectReason.DUPLICATE_PARTICIPANT, f"participant {pid!r} listed more than once"
            )
        seen.add(pid)

    missing = [pid for pid in participant_ids if pid not in roster]
    if missing:
        raise SessionConfigError(
            RejectReason.UNKNOWN_PARTICIPANT, f"participants not in roster: {', '.join(missing)}"
        )

    count = len(participant_ids)
    if count < drill_cls.min_participants:
        raise SessionConfigError(
            RejectReason.NOT_ENOUGH_PARTICIPANTS,
            f"{drill_cls.drill_type.value} needs at least {drill_cls.min_participants} participants, got {count}",
        )
    if count > drill_cls.max_participants:
        raise SessionConfigError(
            RejectReason.TOO_MANY_PARTICIPANTS,
            f"{drill_cls.drill_type.value} takes at most {drill_cls.max_participants} participants, got {count}",
        )
    return drill_cls


def make_participant(player: RosterPlayer, config: DrillConfig, rng: random.Random) -> Participant:
    """Turn a roster record into a simulated participant."""
    base = base_speed(player, rng)
    if config.fatigue:
        stamina = initial_stamina(player, rng)
        speed = current_capacity(base, stamina)
    else:
        stamina = 100.0
        speed = base
    return Participant(
        id=player.id,
        name=player.name,
        role=player.role,
        player=player,
        base_speed_mps=base,
        speed_mps=speed,
        stamina=stamina,
    )


class DrillSession:
    """Handle for one drill session.

    Create through `start_session` (or construct and call `start`). The
    caller drives it with `tick(now)` from a wall clock or `step(dt)` at a
    fixed rate.
    """

    def __init__(
        self,
        drill: Drill,
        participants: list[Participant],
        config: Optional[DrillConfig] = None,
        rng: Optional[random.Random] = None,
        session_id: Optional[str] = None,
        started_at: Optional[datetime] = None,
    ) -> None:
        self.config = config or DrillConfig()
        self.drill = drill
        self.session_id = session_id or str(uuid4())
        self.started_at = started_at or datetime.now()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.clock = SessionClock(max_step=self.config.max_step_s)
        self.events = EventBus()
        self.state = DrillState(
            participants=participants,
            config=self.config,
            rng=self.rng,
            clock=self.clock,
            events=self.events,
        )
        self.traces: dict[str, PositionTrace] = {
            p.id: PositionTrace(participant_id=p.id) for p in participants
        }
        self._status = SessionStatus.NOT_STARTED
        self._stop_requested = False
        self._report: Optional[SessionReport] = None

        self.events.subscribe_all(self._log_event)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def drill_type(self) -> DrillType:
        return self.drill.drill_type

    @property
    def participants(self) -> list[Participant]:
        return self.state.participants

    @property
    def elapsed(self) -> float:
        """Simulation seconds, excluding any paused time."""
        return self.clock.current_time

    @property
    def report(self) -> Optional[SessionReport]:
        return self._report

    def is_complete(self) -> bool:
        return self.drill.is_complete(self.state)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> EntitySnapshot:
        """Place everyone and begin accepting ticks."""
        if self._status != SessionStatus.NOT_STARTED:
            raise InvalidTransitionError("start", self._status.value)
        self.drill.setup(self.state)
        self._record()
        self.clock.rebaseline()
        self._status = SessionStatus.RUNNING
        self.state.emit(EventType.SESSION_START, drill=self.drill_type.value)
        logger.info(
            "Session %s started: %s with %s",
            self.session_id, self.drill_type.value, ", ".join(p.id for p in self.participants),
        )
        return self.snapshot()

    def pause(self) -> None:
        if self._status != SessionStatus.RUNNING:
            raise InvalidTransitionError("pause", self._status.value)
        self._status = SessionStatus.PAUSED
        self.state.emit(EventType.SESSION_PAUSED)
        logger.info("Session %s paused at %.2fs", self.session_id, self.elapsed)

    def resume(self) -> None:
        """Resume a paused session; the paused gap is never integrated."""
        if self._status != SessionStatus.PAUSED:
            raise InvalidTransitionError("resume", self._status.value)
        self.clock.rebaseline()
        self._status = SessionStatus.RUNNING
        self.state.emit(EventType.SESSION_RESUMED)
        logger.info("Session %s resumed at %.2fs", self.session_id, self.elapsed)

    def stop(self) -> SessionReport:
        """Stop the session and analyze it.

        Analytics run only on the first call; later calls return the same
        report.
        """
        if self._report is not None:
            return self._report
        self._stop_requested = True
        self._status = SessionStatus.STOPPED
        self.state.emit(EventType.SESSION_STOP)
        for trace in self.traces.values():
            trace.freeze()

        metrics = self._analyze()
        updates = self._rating_updates(metrics)
        self._report = build_session_report(
            session_id=self.session_id,
            date_time=self.started_at.isoformat(timespec="seconds"),
            drill=self.drill_type,
            duration_s=self.elapsed,
            participants=self.participants,
            metrics=metrics,
            updates=updates,
            counters=self.drill.counters,
            events=self.events.history,
        )
        self._status = SessionStatus.ANALYZED
        logger.info("Session %s stopped after %.2fs", self.session_id, self.elapsed)
        return self._report

    # =========================================================================
    # Ticking
    # =========================================================================

    def tick(self, now: float) -> EntitySnapshot:
        """Advance to wall time `now` (seconds, any monotonic origin).

        The first tick after start or resume only records the baseline.
        """
        if not self._accepting_ticks():
            return self.snapshot()
        return self._advance(self.clock.delta_for(now))

    def step(self, dt: float) -> EntitySnapshot:
        """Advance by a fixed dt (clamped like any other tick)."""
        if not self._accepting_ticks():
            return self.snapshot()
        return self._advance(self.clock.clamp_step(dt))

    def _accepting_ticks(self) -> bool:
        if self._status == SessionStatus.NOT_STARTED:
            raise InvalidTransitionError("tick", self._status.value)
        return self._status == SessionStatus.RUNNING and not self._stop_requested

    def _advance(self, dt: float) -> EntitySnapshot:
        if dt <= 0:
            return self.snapshot()
        self.clock.advance(dt)
        self.drill.step(self.state, dt)
        contacts = self.drill.resolve_collisions(self.state)
        if contacts:
            logger.debug("Session %s resolved %d contacts", self.session_id, contacts)
        if self.config.fatigue:
            for p in self.participants:
                apply_fatigue(p, p.prev_pos.distance_to(p.pos), dt)
                p.velocity = p.velocity.clamped(p.speed_mps)
        self._record()
        return self.snapshot()

    def _record(self) -> None:
        t = self.clock.current_time
        for p in self.participants:
            self.traces[p.id].append(t, p.pos.x, p.pos.y)

    # =========================================================================
    # Analysis
    # =========================================================================

    def _analyze(self) -> dict[str, SessionMetrics]:
        return {
            pid: metrics_from_trace(trace, self.config.analytics)
            for pid, trace in self.traces.items()
        }

    def _rating_updates(self, metrics: dict[str, SessionMetrics]) -> dict[str, RatingUpdate]:
        """Suggested rating updates; participants who never moved get none."""
        date = self.started_at.isoformat(timespec="seconds")
        updates = {}
        for p in self.participants:
            speed = metrics[p.id].avg_speed_mps
            if speed <= 0:
                continue
            updates[p.id] = compute_rating_update(p.player, round(speed, 3), date, self.config.rating)
        return updates

    # =========================================================================
    # Output
    # =========================================================================

    def snapshot(self) -> EntitySnapshot:
        return EntitySnapshot(
            session_id=self.session_id,
            status=self._status,
            time_s=self.clock.current_time,
            tick=self.clock.tick_count,
            participants=[p.to_dict() for p in self.participants],
            ball=self.state.ball.to_dict() if self.state.ball else None,
            complete=self._status != SessionStatus.NOT_STARTED and self.is_complete(),
        )

    def event_log(self) -> list[Event]:
        return list(self.events.history)

    def _log_event(self, event: Event) -> None:
        logger.debug("Session %s: %s", self.session_id, event)


def start_session(
    drill_type: Union[str, DrillType],
    participant_ids: Sequence[str],
    roster: Iterable[RosterInput],
    config: Optional[DrillConfig] = None,
    rng: Optional[random.Random] = None,
    session_id: Optional[str] = None,
    started_at: Optional[datetime] = None,
) -> DrillSession:
    """Validate a request and return a running session.

    Raises SessionConfigError before creating anything when the drill type
    is unknown, ids repeat or are missing from the roster, or the
    participant count does not suit the drill.
    """
    config = config or DrillConfig()
    problems = config.validate()
    if problems:
        raise ValueError(f"invalid drill config: {'; '.join(problems)}")

    players = _roster_index(roster)
    try:
        validate_request(drill_type, participant_ids, players)
    except SessionConfigError as e:
        logger.warning("Rejected %s session: %s", drill_type, e)
        raise

    rng = rng if rng is not None else random.Random(config.seed)
    participants = [make_participant(players[pid], config, rng) for pid in participant_ids]
    session = DrillSession(
        drill=create_drill(drill_type),
        participants=participants,
        config=config,
        rng=rng,
        session_id=session_id,
        started_at=started_at,
    )
    session.start()
    return session
