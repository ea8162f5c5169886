"""Shuttle run: participants sprint back and forth between two cones."""

from __future__ import annotations

from ..core.entities import Participant
from ..core.events import EventType
from ..core.vec2 import Vec2
from .base import Drill, DrillState, DrillType


class ShuttleDrill(Drill):
    """Oscillate between x = 0.2L and x = 0.8L on a fixed lane.

    A rep is counted each time a participant gets within the turn
    threshold of the cone it is running at; it then turns for the other one.
    """

    drill_type = DrillType.SHUTTLE
    min_participants = 1
    max_participants = 2

    def __init__(self) -> None:
        self._heading_right: dict[str, bool] = {}

    def lanes(self, state: DrillState) -> list[float]:
        mid = state.pitch.width / 2
        if len(state.participants) == 1:
            return [mid]
        offset = state.config.shuttle.lane_offset_m
        return [mid - offset, mid + offset]

    def ends(self, state: DrillState) -> tuple[float, float]:
        cfg = state.config.shuttle
        return state.pitch.length * cfg.left_fraction, state.pitch.length * cfg.right_fraction

    def setup(self, state: DrillState) -> None:
        left, _ = self.ends(state)
        for p, lane in zip(state.participants, self.lanes(state)):
            p.lane_y = lane
            p.place(Vec2(left, lane))
            self._heading_right[p.id] = True

    def step(self, state: DrillState, dt: float) -> None:
        left, right = self.ends(state)
        threshold = state.config.shuttle.turn_threshold_m

        for p in state.participants:
            heading_right = self._heading_right[p.id]
            target = Vec2(right if heading_right else left, p.lane_y)
            self.move_participant(p, target, dt, state.pitch)

            if p.pos.distance_to(target) < threshold:
                p.reps += 1
                self._heading_right[p.id] = not heading_right
                state.emit(
                    EventType.REP_COMPLETED,
                    player_id=p.id,
                    description=f"rep {p.reps}",
                    reps=p.reps,
                )

    def counters(self, participant: Participant) -> dict[str, object]:
        return {"reps": participant.reps}
