"""Built-in squad for demos and the command line."""

from __future__ import annotations

from typing import Optional

from pitchside.config import DrillConfig
from pitchside.core.entities import MatchRecord, PhysicalProfile, RosterPlayer
from pitchside.drills import DRILLS, parse_drill_type
from pitchside.report.models import SessionReport
from pitchside.session import start_session


DEMO_ROSTER = [
    RosterPlayer(
        id="p1",
        name="Ade Okafor",
        position="Striker",
        speed=78,
        stamina=72,
        physical=PhysicalProfile(height_cm=181, weight_kg=76, age=24),
    ),
    RosterPlayer(
        id="p2",
        name="Luis Ferreira",
        position="Central Midfielder",
        speed=70,
        stamina=88,
        physical=PhysicalProfile(height_cm=174, weight_kg=69, age=27),
        match_history=(
            MatchRecord("2026-09-01T18:00:00", 3.1),
            MatchRecord("2026-09-08T18:00:00", 3.3),
            MatchRecord("2026-09-15T18:00:00", 3.2),
        ),
    ),
    RosterPlayer(id="p3", name="Tom Hale", position="CB", speed=0, stamina=0),
    RosterPlayer(id="p4", name="Sam Reyes", position="GK", speed=55, stamina=64),
]


def run_demo(
    drill: str = "chase",
    seconds: float = 10.0,
    dt: float = 0.05,
    seed: Optional[int] = 7,
    participant_ids: Optional[list[str]] = None,
) -> SessionReport:
    """Run a headless drill at a fixed step and return its report."""
    drill_cls = DRILLS[parse_drill_type(drill)]
    if participant_ids is None:
        participant_ids = [p.id for p in DEMO_ROSTER[: drill_cls.max_participants]]

    session = start_session(drill, participant_ids, DEMO_ROSTER, DrillConfig(seed=seed))
    for _ in range(int(round(seconds / dt))):
        session.step(dt)
        if session.is_complete():
            break
    return session.stop()
