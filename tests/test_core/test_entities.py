"""Tests for roles, roster records, clock and events."""

import pytest

from pitchside.core.clock import SessionClock
from pitchside.core.entities import Ball, PhysicalProfile, RosterPlayer, coerce_attribute
from pitchside.core.events import EventBus, EventType
from pitchside.core.pitch import PITCH
from pitchside.core.roles import Role, map_position_to_role
from pitchside.core.vec2 import Vec2


class TestRoleMapping:
    """Tests for map_position_to_role()."""

    @pytest.mark.parametrize(
        "position,expected",
        [
            ("Striker", Role.FORWARD),
            ("Left Winger", Role.FORWARD),
            ("RW", Role.FORWARD),
            ("Central Midfielder", Role.MIDFIELDER),
            ("CDM", Role.MIDFIELDER),
            ("Mezzala", Role.MIDFIELDER),
            ("CB", Role.DEFENDER),
            ("Defender", Role.DEFENDER),
            ("GK", Role.GOALKEEPER),
            ("Goalkeeper", Role.GOALKEEPER),
        ],
    )
    def test_keywords(self, position, expected):
        assert map_position_to_role(position) == expected

    def test_unknown_falls_back_to_midfielder(self):
        assert map_position_to_role("utility") == Role.MIDFIELDER

    def test_empty_falls_back_to_midfielder(self):
        assert map_position_to_role("") == Role.MIDFIELDER
        assert map_position_to_role(None) == Role.MIDFIELDER


class TestRosterPlayer:
    """Tests for roster record parsing."""

    def test_coerce_attribute(self):
        assert coerce_attribute(150) == 100
        assert coerce_attribute(-5) == 0
        assert coerce_attribute("72") == 72
        assert coerce_attribute("fast") == 50
        assert coerce_attribute(None) == 50

    def test_from_dict_round_trip_fields(self):
        player = RosterPlayer.from_dict({
            "id": "a1",
            "name": "Ana",
            "position": "RB",
            "speed": "64",
            "stamina": 81,
            "physical": {"height_cm": 168, "weight_kg": 60, "age": 21},
            "match_history": [{"date": "2026-10-01", "avg_speed_mps": 3.2}],
        })
        assert player.speed == 64
        assert player.role == Role.DEFENDER
        assert player.physical.age == 21
        assert player.match_history[0].avg_speed_mps == 3.2
        assert player.to_dict()["match_history"] == [{"date": "2026-10-01", "avg_speed_mps": 3.2}]

    def test_missing_speed_is_unrated(self):
        player = RosterPlayer.from_dict({"id": "n", "name": "New"})
        assert player.speed == 0
        assert not player.is_rated

    def test_club_export_shape(self):
        player = RosterPlayer.from_dict({
            "id": "a2",
            "name": "Bea",
            "role": "Winger",
            "ratingAttributes": {"speed": 66, "stamina": 74, "passing": 58},
            "physical": {"height_cm": 165, "weight_kg": 58, "age": 19},
            "matchHistory": [{"date": "2026-10-01", "avgSpeedMps": 3.4}],
        })
        assert player.position == "Winger"
        assert player.role == Role.FORWARD
        assert (player.speed, player.stamina) == (66, 74)
        assert player.match_history[0].avg_speed_mps == 3.4
        assert player.to_dict()["match_history"] == [{"date": "2026-10-01", "avg_speed_mps": 3.4}]

    def test_flat_keys_win_over_nested(self):
        player = RosterPlayer.from_dict({"id": "a3", "speed": 70, "ratingAttributes": {"speed": 20}})
        assert player.speed == 70

    def test_non_numeric_attribute_reads_as_average(self):
        player = RosterPlayer.from_dict({"id": "a4", "speed": "quick", "ratingAttributes": {"stamina": None}})
        assert player.speed == 50
        assert player.stamina == 0

    def test_bmi(self):
        assert PhysicalProfile(height_cm=180, weight_kg=81, age=25).bmi == pytest.approx(25.0)


class TestBall:
    def test_dangling_possession_is_loose(self):
        ball = Ball(possession="gone")
        assert ball.holder({}) is None

    def test_pitch_center(self):
        assert PITCH.center == Vec2(52.5, 34)
        assert PITCH.to_percent(PITCH.center) == pytest.approx((50.0, 50.0))


class TestSessionClock:
    """Tests for SessionClock."""

    def test_first_delta_is_zero(self):
        clock = SessionClock()
        assert clock.delta_for(100.0) == 0.0

    def test_delta_is_clamped(self):
        clock = SessionClock(max_step=0.1)
        clock.delta_for(0.0)
        assert clock.delta_for(2.5) == 0.1

    def test_backwards_clock_gives_zero(self):
        clock = SessionClock()
        clock.delta_for(10.0)
        assert clock.delta_for(9.0) == 0.0

    def test_rebaseline_skips_gap(self):
        clock = SessionClock()
        clock.delta_for(1.0)
        clock.rebaseline()
        assert clock.delta_for(50.0) == 0.0
        assert clock.delta_for(50.05) == pytest.approx(0.05)


class TestEventBus:
    """Tests for EventBus."""

    def test_emit_records_and_notifies(self):
        bus = EventBus()
        seen = []
        bus.subscribe(EventType.KICK, seen.append)
        bus.emit_simple(EventType.KICK, tick=1, time=0.05, player_id="p1", angle=0.3)
        bus.emit_simple(EventType.REP_COMPLETED, tick=2, time=0.1, player_id="p2")

        assert len(bus) == 2
        assert len(seen) == 1
        assert seen[0].data == {"angle": 0.3}
        assert bus.get_events_by_type(EventType.REP_COMPLETED)[0].player_id == "p2"

    def test_subscribe_all(self):
        bus = EventBus()
        seen = []
        bus.subscribe_all(seen.append)
        bus.emit_simple(EventType.GATE_CLEARED, tick=0, time=0.0)
        assert len(seen) == 1

    def test_empty_bus_is_truthy(self):
        assert EventBus()

    def test_event_types(self):
        assert {t.value for t in EventType} == {
            "session_start", "session_paused", "session_resumed", "session_stop",
            "kick", "ball_bounce", "ball_stopped",
            "rep_completed",
            "gate_cleared", "technique_error", "drill_finished",
        }

    def test_event_str(self):
        bus = EventBus()
        event = bus.emit_simple(EventType.KICK, tick=3, time=1.5, player_id="p1", description="left foot")
        assert str(event) == "[1.50s] kick by p1 - left foot"
