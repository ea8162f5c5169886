"""Tests for the drill scenarios and the drill registry."""

import random

import pytest

from pitchside.config import DrillConfig
from pitchside.core.clock import SessionClock
from pitchside.core.entities import Ball
from pitchside.core.events import EventType
from pitchside.core.vec2 import Vec2
from pitchside.drills import (
    ChaseDrill,
    DrillState,
    DrillType,
    ShuttleDrill,
    SlalomDrill,
    create_drill,
    parse_drill_type,
)
from pitchside.errors import RejectReason, SessionConfigError


def make_state(participants, config=None, seed=7):
    config = config or DrillConfig(fatigue=False)
    return DrillState(
        participants=participants,
        config=config,
        rng=random.Random(seed),
        clock=SessionClock(max_step=config.max_step_s),
    )


def run(drill, state, seconds, dt=0.05, until_complete=False):
    for _ in range(int(round(seconds / dt))):
        state.clock.advance(dt)
        drill.step(state, dt)
        drill.resolve_collisions(state)
        if until_complete and drill.is_complete(state):
            break


# =============================================================================
# Registry
# =============================================================================


class TestRegistry:
    """Tests for parse_drill_type() and create_drill()."""

    def test_case_insensitive(self):
        assert parse_drill_type("SHUTTLE") == DrillType.SHUTTLE
        assert isinstance(create_drill("Slalom"), SlalomDrill)
        assert isinstance(create_drill(DrillType.CHASE), ChaseDrill)

    def test_unknown_drill_rejected(self):
        with pytest.raises(SessionConfigError) as exc_info:
            parse_drill_type("rondo")
        assert exc_info.value.reason == RejectReason.UNKNOWN_DRILL_TYPE

    def test_each_call_gets_a_fresh_drill(self):
        assert create_drill("shuttle") is not create_drill("shuttle")


# =============================================================================
# Shuttle
# =============================================================================


class TestShuttle:
    """Tests for ShuttleDrill."""

    def test_starts_at_left_cone(self, participant_factory):
        p = participant_factory("a")
        state = make_state([p])
        ShuttleDrill().setup(state)
        assert p.pos.x == pytest.approx(state.pitch.length * 0.2)
        assert p.pos.y == pytest.approx(state.pitch.width / 2)

    def test_two_lanes(self, participant_factory):
        a, b = participant_factory("a"), participant_factory("b")
        state = make_state([a, b])
        ShuttleDrill().setup(state)
        assert b.pos.y - a.pos.y == pytest.approx(12.0)

    def test_reps_counted_at_each_end(self, participant_factory):
        """At 4 m/s a 63 m leg takes about 15.6 s, so 40 s gives two reps."""
        p = participant_factory("a", speed=4.0)
        state = make_state([p])
        drill = ShuttleDrill()
        drill.setup(state)

        run(drill, state, 40.0)

        assert p.reps == 2
        assert drill.counters(p) == {"reps": 2}
        assert len(state.events.get_events_by_type(EventType.REP_COMPLETED)) == 2

    def test_never_completes(self, participant_factory):
        state = make_state([participant_factory("a")])
        drill = ShuttleDrill()
        drill.setup(state)
        assert not drill.is_complete(state)


# =============================================================================
# Slalom
# =============================================================================


class TestSlalom:
    """Tests for SlalomDrill."""

    def test_gates_alternate_sides(self, participant_factory):
        p = participant_factory("a")
        state = make_state([p])
        drill = SlalomDrill()
        drill.setup(state)

        gates = drill.gates["a"]
        assert len(gates) == 8
        assert gates[0].y < p.lane_y < gates[1].y
        assert all(g2.x > g1.x for g1, g2 in zip(gates, gates[1:]))
        assert p.pos.x == pytest.approx(gates[0].x - state.config.slalom.lead_in_m)

    def test_clean_run_completes(self, participant_factory):
        p = participant_factory("a", speed=4.0)
        state = make_state([p])
        drill = SlalomDrill()
        drill.setup(state)

        run(drill, state, 90.0, until_complete=True)

        assert drill.is_complete(state)
        counters = drill.counters(p)
        assert counters["gates"] == 8
        assert counters["gates_total"] == 8
        assert counters["errors"] == 0
        assert counters["completion_time_s"] == pytest.approx(state.clock.current_time)
        assert len(state.events.get_events_by_type(EventType.GATE_CLEARED)) == 8
        assert len(state.events.get_events_by_type(EventType.DRILL_FINISHED)) == 1

    def test_sharp_turns_at_speed_are_errors(self, participant_factory):
        p = participant_factory("a", speed=7.0)
        state = make_state([p])
        drill = SlalomDrill()
        drill.setup(state)

        run(drill, state, 60.0, until_complete=True)

        assert p.errors > 0
        assert len(state.events.get_events_by_type(EventType.TECHNIQUE_ERROR)) == p.errors

    def test_finished_participant_holds(self, participant_factory):
        p = participant_factory("a", speed=6.0)
        state = make_state([p])
        drill = SlalomDrill()
        drill.setup(state)
        run(drill, state, 90.0, until_complete=True)

        finished_at = p.pos
        run(drill, state, 1.0)
        assert p.pos == finished_at
        assert drill.counters(p)["gates"] == 8

    def test_unfinished_has_no_completion_time(self, participant_factory):
        p = participant_factory("a", speed=4.0)
        state = make_state([p])
        drill = SlalomDrill()
        drill.setup(state)
        run(drill, state, 2.0)
        assert drill.counters(p)["completion_time_s"] is None


# =============================================================================
# Chase
# =============================================================================


class TestChase:
    """Tests for ChaseDrill."""

    def test_setup_places_ball_at_center(self, participant_factory):
        a, b = participant_factory("a"), participant_factory("b")
        state = make_state([a, b])
        ChaseDrill().setup(state)
        assert state.ball.pos == state.pitch.center
        assert a.pos.x < state.ball.pos.x < b.pos.x

    def test_kicks_counted_as_touches(self, participant_factory):
        a = participant_factory("a", speed=5.0)
        b = participant_factory("b", speed=5.0)
        state = make_state([a, b])
        drill = ChaseDrill()
        drill.setup(state)

        run(drill, state, 30.0)

        kicks = state.events.get_events_by_type(EventType.KICK)
        assert a.touches + b.touches == len(kicks)
        assert len(kicks) >= 1
        assert state.pitch.contains(state.ball.pos)

    def test_same_seed_same_outcome(self, participant_factory):
        def play(seed):
            a = participant_factory("a", speed=5.0)
            b = participant_factory("b", speed=5.0)
            state = make_state([a, b], seed=seed)
            drill = ChaseDrill()
            drill.setup(state)
            run(drill, state, 20.0)
            return a.pos, b.pos, state.ball.pos, a.touches, b.touches

        assert play(11) == play(11)

    def test_kicker_does_not_kick_twice_in_a_row(self, participant_factory):
        a = participant_factory("a", speed=5.0)
        b = participant_factory("b", speed=5.0)
        state = make_state([a, b])
        drill = ChaseDrill()
        drill.setup(state)
        run(drill, state, 30.0)

        kickers = [e.player_id for e in state.events.get_events_by_type(EventType.KICK)]
        assert all(k1 != k2 for k1, k2 in zip(kickers, kickers[1:]))

    def test_other_participant_kicks_when_previous_kicker_is_closer(self, participant_factory):
        """A resting ball pinned by the last kicker is still playable by the other."""
        a, b = participant_factory("a"), participant_factory("b")
        state = make_state([a, b])
        drill = ChaseDrill()
        drill.setup(state)
        a.place(Vec2(49.34, 34))
        b.place(Vec2(50.70, 34))
        state.ball = Ball(pos=Vec2(50, 34), last_kicker="a")

        drill.step(state, 0.05)

        assert b.touches == 1
        assert a.touches == 0
        assert state.ball.last_kicker == "b"

    @pytest.mark.parametrize("seed", [0, 13])
    def test_play_never_stalls(self, participant_factory, seed):
        a = participant_factory("a", speed=5.0)
        b = participant_factory("b", speed=5.0)
        state = make_state([a, b], seed=seed)
        drill = ChaseDrill()
        drill.setup(state)

        run(drill, state, 60.0)

        kick_times = [e.time for e in state.events.get_events_by_type(EventType.KICK)]
        marks = [0.0] + kick_times + [state.clock.current_time]
        longest_gap = max(t2 - t1 for t1, t2 in zip(marks, marks[1:]))
        assert longest_gap < 20.0
        assert len(kick_times) >= 4

    def test_dangling_possession_cleared(self, participant_factory):
        a, b = participant_factory("a"), participant_factory("b")
        state = make_state([a, b])
        drill = ChaseDrill()
        drill.setup(state)
        state.ball.possession = "ghost"
        drill.step(state, 0.05)
        assert state.ball.possession is None
