"""Tests for geometry and kinematics helpers."""

import math

import pytest

from pitchside.core.geometry import (
    clamp_to_pitch,
    distance,
    move_toward,
    reflect_velocity,
    seek_with_repulsion,
    separate_circles,
    turn_angle,
)
from pitchside.core.pitch import PITCH, Pitch
from pitchside.core.vec2 import Vec2


class TestMoveToward:
    """Tests for move_toward()."""

    @pytest.mark.parametrize(
        "current,target,speed,dt",
        [
            (Vec2(0, 0), Vec2(10, 0), 5.0, 0.1),
            (Vec2(0, 0), Vec2(0.2, 0.1), 5.0, 0.1),
            (Vec2(30, 20), Vec2(29.9, 20.05), 8.0, 0.1),
            (Vec2(50, 34), Vec2(0, 0), 3.3, 0.05),
            (Vec2(1, 1), Vec2(1, 1), 4.0, 0.1),
        ],
    )
    def test_never_overshoots(self, current, target, speed, dt):
        """Moved distance never exceeds min(d, speed * dt)."""
        result = move_toward(current, target, speed, dt)
        d = distance(current, target)
        moved = distance(current, result)
        assert moved <= min(d, speed * dt) + 1e-9
        assert distance(result, target) <= d + 1e-9

    def test_snaps_onto_target_within_reach(self):
        """A target within one step is reached exactly."""
        result = move_toward(Vec2(0, 0), Vec2(0.3, 0.4), 10.0, 0.1)
        assert result == Vec2(0.3, 0.4)

    def test_partial_step_along_line(self):
        result = move_toward(Vec2(0, 0), Vec2(10, 0), 5.0, 0.1)
        assert result.x == pytest.approx(0.5)
        assert result.y == pytest.approx(0.0)

    def test_zero_dt_returns_current(self):
        assert move_toward(Vec2(1, 2), Vec2(5, 5), 5.0, 0.0) == Vec2(1, 2)

    def test_negative_dt_returns_current(self):
        assert move_toward(Vec2(1, 2), Vec2(5, 5), 5.0, -0.1) == Vec2(1, 2)


class TestClampToPitch:
    """Tests for clamp_to_pitch()."""

    @pytest.mark.parametrize(
        "point",
        [Vec2(-5, 10), Vec2(120, -3), Vec2(50, 80), Vec2(52.5, 34), Vec2(105, 68)],
    )
    def test_idempotent(self, point):
        once = clamp_to_pitch(point)
        assert clamp_to_pitch(once) == once

    def test_result_inside_pitch(self):
        p = clamp_to_pitch(Vec2(200, -40))
        assert p == Vec2(PITCH.length, 0.0)
        assert PITCH.contains(p)

    def test_custom_pitch(self):
        small = Pitch(length=40, width=20)
        assert clamp_to_pitch(Vec2(50, 50), small) == Vec2(40, 20)


class TestSeparateCircles:
    """Tests for separate_circles()."""

    def test_no_overlap_returns_none(self):
        assert separate_circles(Vec2(0, 0), 0.5, Vec2(5, 0), 0.5) is None

    def test_even_split(self):
        sep = separate_circles(Vec2(0, 0), 0.5, Vec2(0.5, 0), 0.5, bias_a=0.5, margin=0.0)
        assert sep is not None
        assert sep.overlap == pytest.approx(0.5)
        assert sep.a.x == pytest.approx(-0.25)
        assert sep.b.x == pytest.approx(0.75)
        assert distance(sep.a, sep.b) == pytest.approx(1.0)

    def test_bias_moves_a_more(self):
        sep = separate_circles(Vec2(0, 0), 0.5, Vec2(0.5, 0), 0.5, bias_a=1.0, margin=0.0)
        assert sep.b == Vec2(0.5, 0)
        assert sep.a.x == pytest.approx(-0.5)

    def test_coincident_centers_use_fixed_normal(self):
        sep = separate_circles(Vec2(10, 10), 0.5, Vec2(10, 10), 0.5, margin=0.0)
        assert sep.normal == Vec2(1.0, 0.0)
        assert distance(sep.a, sep.b) == pytest.approx(1.0)


class TestReflectVelocity:
    """Tests for reflect_velocity()."""

    def test_closing_velocity_is_reflected_and_damped(self):
        v = reflect_velocity(Vec2(-4, 0), Vec2(1, 0), 0.5)
        assert v.x == pytest.approx(2.0)
        assert v.y == pytest.approx(0.0)

    def test_separating_velocity_unchanged(self):
        assert reflect_velocity(Vec2(4, 1), Vec2(1, 0), 0.5) == Vec2(4, 1)


class TestSeekWithRepulsion:
    """Tests for seek_with_repulsion()."""

    def test_no_obstacles_returns_desired(self):
        assert seek_with_repulsion(Vec2(10, 10), Vec2(20, 10), [], 0.5) == Vec2(20, 10)

    def test_far_obstacle_ignored(self):
        target = seek_with_repulsion(Vec2(10, 10), Vec2(20, 10), [(Vec2(40, 40), 0.5)], 0.5)
        assert target == Vec2(20, 10)

    def test_near_obstacle_pushes_target_away(self):
        # Obstacle just above the participant pushes the target downward
        target = seek_with_repulsion(Vec2(10, 10), Vec2(20, 10), [(Vec2(10, 10.5), 0.5)], 0.5)
        assert target.y < 10
        assert target.x == pytest.approx(20)

    def test_result_clamped_to_pitch(self):
        target = seek_with_repulsion(Vec2(0.2, 0.2), Vec2(0, 0), [(Vec2(0.6, 0.6), 0.5)], 0.5)
        assert PITCH.contains(target)


class TestTurnAngle:
    def test_reversal_is_pi(self):
        assert turn_angle(Vec2(1, 0), Vec2(-1, 0)) == pytest.approx(math.pi)

    def test_right_angle(self):
        assert turn_angle(Vec2(1, 0), Vec2(0, 2)) == pytest.approx(math.pi / 2)

    def test_zero_step_is_no_turn(self):
        assert turn_angle(Vec2(0, 0), Vec2(1, 0)) == 0.0
