"""Tests for ball flight and collision resolution."""

import pytest

from pitchside.config import BallConfig
from pitchside.core.entities import Ball
from pitchside.core.pitch import PITCH
from pitchside.core.vec2 import Vec2
from pitchside.physics.ball import apply_friction, bounce_off_walls, integrate_ball
from pitchside.physics.collision import resolve_collisions


class TestWallBounce:
    """Tests for bounce_off_walls()."""

    def test_right_wall_flips_and_damps(self):
        """Crossing the right boundary flips vx, scales it and pins x."""
        config = BallConfig(restitution=0.7, wall_epsilon_m=0.02)
        ball = Ball(pos=Vec2(PITCH.length + 0.3, 30), velocity=Vec2(10, 0))

        walls = bounce_off_walls(ball, config)

        assert walls == ["right"]
        assert ball.velocity.x == pytest.approx(-7.0)
        assert ball.velocity.y == 0
        assert ball.pos.x == PITCH.length - 0.02

    def test_left_wall(self):
        config = BallConfig(restitution=0.5)
        ball = Ball(pos=Vec2(-1, 30), velocity=Vec2(-6, 2))
        bounce_off_walls(ball, config)
        assert ball.velocity.x == pytest.approx(3.0)
        assert ball.velocity.y == pytest.approx(2.0)
        assert ball.pos.x == config.wall_epsilon_m

    def test_corner_hits_both_walls(self):
        ball = Ball(pos=Vec2(PITCH.length + 1, -1), velocity=Vec2(5, -5))
        walls = bounce_off_walls(ball, BallConfig())
        assert walls == ["right", "bottom"]
        assert ball.velocity.x < 0 < ball.velocity.y

    def test_inside_untouched(self):
        ball = Ball(pos=Vec2(50, 30), velocity=Vec2(5, 5))
        assert bounce_off_walls(ball, BallConfig()) == []
        assert ball.velocity == Vec2(5, 5)

    def test_integrate_crossing_right_boundary(self):
        """Without friction, one step across the boundary gives exactly restitution * v."""
        config = BallConfig(restitution=0.7, friction_per_second=1.0)
        ball = Ball(pos=Vec2(PITCH.length - 0.5, 20), velocity=Vec2(10, 0))

        walls, stopped = integrate_ball(ball, config, 0.1)

        assert walls == ["right"]
        assert not stopped
        assert ball.velocity.x == pytest.approx(-7.0)
        assert ball.pos.x == pytest.approx(PITCH.length - config.wall_epsilon_m)


class TestFriction:
    """Tests for apply_friction()."""

    def test_exponential_decay(self):
        config = BallConfig(friction_per_second=0.5)
        ball = Ball(velocity=Vec2(8, 0))
        apply_friction(ball, config, 1.0)
        assert ball.velocity.x == pytest.approx(4.0)

    def test_slow_ball_snaps_to_rest(self):
        config = BallConfig(friction_per_second=0.9, stop_speed_mps=0.2)
        ball = Ball(velocity=Vec2(0.15, 0))
        assert apply_friction(ball, config, 0.05)
        assert ball.velocity == Vec2()

    def test_resting_ball_not_reported_again(self):
        assert not apply_friction(Ball(), BallConfig(), 0.05)


class TestCollisions:
    """Tests for resolve_collisions()."""

    def test_participants_pushed_apart(self, participant_factory):
        a = participant_factory("a", Vec2(50, 34))
        b = participant_factory("b", Vec2(50.3, 34))

        contacts = resolve_collisions([a, b], None, player_radius=0.5, ball_radius=0.1, restitution=0.7)

        assert contacts >= 1
        assert a.pos.distance_to(b.pos) >= 1.0

    def test_ball_bounces_off_participant(self, participant_factory):
        p = participant_factory("a", Vec2(50, 34))
        ball = Ball(pos=Vec2(49.6, 34), velocity=Vec2(5, 0))

        resolve_collisions([p], ball, player_radius=0.5, ball_radius=0.11, restitution=0.7)

        assert ball.velocity.x < 0
        assert ball.pos.distance_to(p.pos) >= 0.61

    def test_everything_stays_on_pitch(self, participant_factory):
        a = participant_factory("a", Vec2(0.1, 0.1))
        b = participant_factory("b", Vec2(0.2, 0.1))
        resolve_collisions([a, b], None, player_radius=0.5, ball_radius=0.1, restitution=0.7)
        assert PITCH.contains(a.pos)
        assert PITCH.contains(b.pos)
