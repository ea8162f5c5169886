"""Public entry points for driving drill sessions.

Thin functions over `DrillSession` so callers can treat the session as an
opaque handle:

    session = start_session("chase", ["p1", "p2"], roster, DrillConfig(seed=7))
    for i in range(200):
        tick(session, i * 0.05)
    report = stop(session)
    csv_text = export_csv(report)
"""

from __future__ import annotations

from typing import Iterable, Union

from .config import RatingConfig
from .core.entities import RosterPlayer
from .rating import apply_update, compute_rating_update
from .report.export import export_csv, export_json
from .report.models import SessionReport
from .session.session import DrillSession, EntitySnapshot, start_session


def tick(session: DrillSession, now: float) -> EntitySnapshot:
    """Advance a session to wall time `now` (seconds)."""
    return session.tick(now)


def pause(session: DrillSession) -> None:
    session.pause()


def resume(session: DrillSession) -> None:
    session.resume()


def stop(session: DrillSession) -> SessionReport:
    """Stop a session and return its report (the same one on every call)."""
    return session.stop()


def apply_rating_update(
    report: SessionReport,
    roster: Iterable[Union[RosterPlayer, dict]],
    config: RatingConfig = RatingConfig(),
) -> list[RosterPlayer]:
    """Write a report's rating updates into roster records.

    Pure: returns new records in roster order and leaves the input alone.
    Each update is recomputed against the record passed in, so applying a
    report to the roster it was run against reproduces the report's
    suggestion, and applying it twice appends the session twice.
    Players without an update in the report come back unchanged.
    """
    updates = {u.player_id: u for u in report.rating_updates()}
    result = []
    for entry in roster:
        player = entry if isinstance(entry, RosterPlayer) else RosterPlayer.from_dict(entry)
        update = updates.get(player.id)
        if update is None:
            result.append(player)
            continue
        recomputed = compute_rating_update(player, update.session_speed_mps, report.date_time, config)
        result.append(apply_update(player, recomputed))
    return result


__all__ = [
    "apply_rating_update",
    "export_csv",
    "export_json",
    "pause",
    "resume",
    "start_session",
    "stop",
    "tick",
]
