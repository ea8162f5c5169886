"""Session report structures.

The flat rows and the nested dict are both built from
`ParticipantReport.row()`, so CSV and JSON exports always carry the same
values for the fields they share.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ..analytics.kinematics import SessionMetrics
from ..rating import RatingUpdate


SESSION_COLUMNS = ["session_id", "date_time", "drill", "duration_s"]
PLAYER_COLUMNS = ["player_id", "player_name", "position", "speed_attr", "stamina_attr"]
METRIC_COLUMNS = [
    "distance_m",
    "avg_speed_mps",
    "p95_speed_mps",
    "max_speed_mps",
    "high_speed_time_s",
    "sprint_count",
]
COUNTER_COLUMNS = ["reps", "gates", "errors", "completion_time_s", "touches"]
RATING_COLUMNS = ["previous_rating", "new_rating", "rating_mode"]

CSV_COLUMNS = (
    SESSION_COLUMNS
    + PLAYER_COLUMNS
    + METRIC_COLUMNS
    + COUNTER_COLUMNS
    + ["feedback"]
    + RATING_COLUMNS
)

DECIMALS = 3


def _round(value: Any) -> Any:
    if isinstance(value, float):
        return round(value, DECIMALS)
    return value


@dataclass(frozen=True)
class ParticipantReport:
    """One participant's slice of a session report."""
    player_id: str
    player_name: str
    position: str
    role: str
    speed_attr: int
    stamina_attr: int
    metrics: SessionMetrics
    counters: dict[str, Any]
    feedback: str
    rating_update: Optional[RatingUpdate] = None

    def row(self, report: SessionReport) -> dict[str, Any]:
        """Flat row in CSV column order; unused counters are None."""
        update = self.rating_update
        row: dict[str, Any] = {
            "session_id": report.session_id,
            "date_time": report.date_time,
            "drill": report.drill,
            "duration_s": _round(report.duration_s),
            "player_id": self.player_id,
            "player_name": self.player_name,
            "position": self.position,
            "speed_attr": self.speed_attr,
            "stamina_attr": self.stamina_attr,
        }
        metrics = self.metrics.to_dict()
        for column in METRIC_COLUMNS:
            row[column] = _round(metrics[column])
        for column in COUNTER_COLUMNS:
            row[column] = _round(self.counters.get(column))
        row["feedback"] = self.feedback
        row["previous_rating"] = update.previous_rating if update else None
        row["new_rating"] = update.new_rating if update else None
        row["rating_mode"] = update.mode.value if update else None
        return row


@dataclass(frozen=True)
class SessionReport:
    """Everything a finished session produced."""
    session_id: str
    date_time: str
    drill: str
    duration_s: float
    participants: list[ParticipantReport] = field(default_factory=list)
    events: list[dict] = field(default_factory=list)

    def rows(self) -> list[dict[str, Any]]:
        return [p.row(self) for p in self.participants]

    def participant(self, player_id: str) -> Optional[ParticipantReport]:
        for p in self.participants:
            if p.player_id == player_id:
                return p
        return None

    def rating_updates(self) -> list[RatingUpdate]:
        return [p.rating_update for p in self.participants if p.rating_update is not None]

    def to_dict(self) -> dict[str, Any]:
        """Nested form: session header plus one block per participant."""
        participants = []
        for p, row in zip(self.participants, self.rows()):
            participants.append({
                "player": {column: row[column] for column in PLAYER_COLUMNS} | {"role": p.role},
                "metrics": {column: row[column] for column in METRIC_COLUMNS},
                "counters": {
                    column: row[column] for column in COUNTER_COLUMNS if row[column] is not None
                },
                "rating": p.rating_update.to_dict() if p.rating_update else None,
                "feedback": row["feedback"],
            })
        return {
            "session_id": self.session_id,
            "date_time": self.date_time,
            "drill": self.drill,
            "duration_s": _round(self.duration_s),
            "participants": participants,
            "events": self.events,
        }
