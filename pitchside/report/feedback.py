"""Coaching feedback for a participant's session.

Rules are checked in order and the first match wins.
"""

from __future__ import annotations

from typing import Optional

from ..analytics.kinematics import SessionMetrics
from ..drills.base import DrillType


MIN_SHUTTLE_REPS = 20
LOW_AVG_SPEED_MPS = 2.6
TOP_SPEED_MPS = 6.5
ENDURANCE_AVG_MPS = 2.9
AEROBIC_DISTANCE_M = 1800.0
AEROBIC_AVG_MPS = 3.0

SLALOM_SLOW_S = 15.0
SLALOM_FAST_S = 10.0


def slalom_feedback(name: str, gates: int, total_gates: int, time_s: Optional[float]) -> str:
    """Feedback based on how far through the course the participant got."""
    completion = gates / total_gates if total_gates else 0.0
    if completion < 0.5:
        return (
            f"{name}, the run stopped early at gate {gates} of {total_gates}. "
            f"Work on consistency and master the first cones before the full course."
        )
    if gates < total_gates or time_s is None:
        return (
            f"{name}, good effort reaching gate {gates}. The run broke down near the end; "
            f"hold speed and precision through the final cones."
        )
    if time_s > SLALOM_SLOW_S:
        return (
            f"{name} completed the course in {time_s:.2f}s. Good control, but the pace is cautious; "
            f"attack the space between cones."
        )
    if time_s < SLALOM_FAST_S:
        return (
            f"{name}, brilliant time of {time_s:.2f}s. Next step is tighter turns to cut travel distance."
        )
    return f"{name} completed the slalom in {time_s:.2f}s. Keep practising to bring the time down."


def session_feedback(
    name: str,
    drill: DrillType,
    metrics: SessionMetrics,
    counters: dict[str, object],
) -> str:
    """Pick the feedback line for one participant."""
    if drill == DrillType.SHUTTLE and int(counters.get("reps") or 0) < MIN_SHUTTLE_REPS:
        return f"{name} needs more repeatability. Aim for two more shuttles next session."
    if drill == DrillType.SLALOM:
        return slalom_feedback(
            name,
            int(counters.get("gates") or 0),
            int(counters.get("gates_total") or 0),
            counters.get("completion_time_s"),
        )

    avg = metrics.avg_speed_mps
    if avg < LOW_AVG_SPEED_MPS:
        return f"{name} needs to raise steady pace. Target an average above 2.8 m/s."
    if metrics.max_speed_mps > TOP_SPEED_MPS and avg < ENDURANCE_AVG_MPS:
        return f"{name} has good top speed. Improve endurance to hold pace longer."
    if metrics.distance_m > AEROBIC_DISTANCE_M and avg >= AEROBIC_AVG_MPS:
        return f"{name} delivered a strong aerobic load today. Keep recovery solid."
    return f"{name} completed the session."
