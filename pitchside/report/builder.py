"""Assemble per-participant metrics, counters and rating updates into a report."""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from ..analytics.kinematics import ZERO_METRICS, SessionMetrics
from ..core.entities import Participant
from ..core.events import Event
from ..drills.base import DrillType
from ..rating import RatingUpdate
from .feedback import session_feedback
from .models import ParticipantReport, SessionReport


def build_participant_report(
    participant: Participant,
    drill: DrillType,
    metrics: SessionMetrics,
    counters: dict[str, object],
    update: Optional[RatingUpdate],
) -> ParticipantReport:
    player = participant.player
    return ParticipantReport(
        player_id=participant.id,
        player_name=participant.name,
        position=player.position,
        role=participant.role.value,
        speed_attr=player.speed,
        stamina_attr=player.stamina,
        metrics=metrics,
        counters=dict(counters),
        feedback=session_feedback(participant.name, drill, metrics, counters),
        rating_update=update,
    )


def build_session_report(
    session_id: str,
    date_time: str,
    drill: DrillType,
    duration_s: float,
    participants: Sequence[Participant],
    metrics: dict[str, SessionMetrics],
    updates: dict[str, RatingUpdate],
    counters: Callable[[Participant], dict[str, object]],
    events: Sequence[Event] = (),
) -> SessionReport:
    """Package a finished session.

    `counters` is the drill's counter function; participants without
    metrics get zero metrics and those without an update get none.
    """
    return SessionReport(
        session_id=session_id,
        date_time=date_time,
        drill=drill.value,
        duration_s=duration_s,
        participants=[
            build_participant_report(
                p,
                drill,
                metrics.get(p.id, ZERO_METRICS),
                counters(p),
                updates.get(p.id),
            )
            for p in participants
        ],
        events=[e.to_dict() for e in events],
    )
