"""Slalom: weave through a line of gates as quickly and cleanly as possible."""

from __future__ import annotations

import math

from ..core.entities import Participant
from ..core.events import EventType
from ..core.geometry import turn_angle
from ..core.vec2 import Vec2
from .base import Drill, DrillState, DrillType


MIN_STEP_M = 0.01


class SlalomDrill(Drill):
    """Each participant clears an ordered sequence of gates.

    Gates alternate either side of the participant's lane. A technique
    error is a sharp change of direction (over the configured angle) made
    while running faster than the configured speed.
    """

    drill_type = DrillType.SLALOM
    min_participants = 1
    max_participants = 2

    def __init__(self) -> None:
        self.gates: dict[str, list[Vec2]] = {}

    def build_gates(self, state: DrillState, lane_y: float) -> list[Vec2]:
        cfg = state.config.slalom
        length = state.pitch.length
        first = length * cfg.first_gate_fraction
        last = length * cfg.last_gate_fraction
        spacing = (last - first) / (cfg.gate_count - 1) if cfg.gate_count > 1 else 0.0
        gates = []
        for i in range(cfg.gate_count):
            offset = -cfg.gate_offset_m if i % 2 == 0 else cfg.gate_offset_m
            gates.append(state.pitch.clamp(Vec2(first + i * spacing, lane_y + offset)))
        return gates

    def setup(self, state: DrillState) -> None:
        cfg = state.config.slalom
        mid = state.pitch.width / 2
        if len(state.participants) == 1:
            lanes = [mid]
        else:
            lanes = [mid - cfg.lane_offset_m * 2, mid + cfg.lane_offset_m * 2]

        for p, lane in zip(state.participants, lanes):
            p.lane_y = lane
            gates = self.build_gates(state, lane)
            self.gates[p.id] = gates
            p.place(state.pitch.clamp(Vec2(gates[0].x - cfg.lead_in_m, lane)))

    def step(self, state: DrillState, dt: float) -> None:
        cfg = state.config.slalom
        error_angle = math.radians(cfg.error_turn_angle_deg)

        for p in state.participants:
            if p.finished:
                self.hold(p)
                continue

            gates = self.gates[p.id]
            previous_step = p.last_step
            step = self.move_participant(p, gates[p.gates_cleared], dt, state.pitch)

            step_len = step.length()
            if (
                dt > 0
                and step_len > MIN_STEP_M
                and previous_step.length() > MIN_STEP_M
                and step_len / dt > cfg.error_speed_mps
                and turn_angle(previous_step, step) > error_angle
            ):
                p.errors += 1
                state.emit(
                    EventType.TECHNIQUE_ERROR,
                    player_id=p.id,
                    description="sharp turn at speed",
                    angle_deg=round(math.degrees(turn_angle(previous_step, step)), 1),
                    speed_mps=round(step_len / dt, 2),
                )

            if p.pos.distance_to(gates[p.gates_cleared]) <= cfg.reach_radius_m:
                p.gates_cleared += 1
                state.emit(EventType.GATE_CLEARED, player_id=p.id, gate=p.gates_cleared)
                if p.gates_cleared >= len(gates):
                    p.finished = True
                    p.completion_time_s = state.clock.current_time
                    state.emit(
                        EventType.DRILL_FINISHED,
                        player_id=p.id,
                        description=f"finished in {p.completion_time_s:.2f}s",
                        errors=p.errors,
                    )

    def is_complete(self, state: DrillState) -> bool:
        return all(p.finished for p in state.participants)

    def counters(self, participant: Participant) -> dict[str, object]:
        total = len(self.gates.get(participant.id, ()))
        return {
            "gates": participant.gates_cleared,
            "gates_total": total,
            "errors": participant.errors,
            "completion_time_s": participant.completion_time_s,
        }
