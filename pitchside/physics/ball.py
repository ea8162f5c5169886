"""Ball flight: integration, wall bounces and rolling friction."""

from __future__ import annotations

from ..config import BallConfig
from ..core.entities import Ball
from ..core.pitch import PITCH, Pitch
from ..core.vec2 import Vec2


def bounce_off_walls(ball: Ball, config: BallConfig, pitch: Pitch = PITCH) -> list[str]:
    """Keep the ball on the pitch, bouncing it off any wall it crossed.

    The velocity component into the wall is flipped and scaled by the
    restitution, and the position is pinned just inside the boundary.
    Returns the walls that were hit ("left", "right", "bottom", "top").
    """
    eps = config.wall_epsilon_m
    x, y = ball.pos.x, ball.pos.y
    vx, vy = ball.velocity.x, ball.velocity.y
    hit = []

    if x <= 0:
        x = eps
        vx = abs(vx) * config.restitution
        hit.append("left")
    elif x >= pitch.length:
        x = pitch.length - eps
        vx = -abs(vx) * config.restitution
        hit.append("right")

    if y <= 0:
        y = eps
        vy = abs(vy) * config.restitution
        hit.append("bottom")
    elif y >= pitch.width:
        y = pitch.width - eps
        vy = -abs(vy) * config.restitution
        hit.append("top")

    if hit:
        ball.pos = Vec2(x, y)
        ball.velocity = Vec2(vx, vy)
    return hit


def apply_friction(ball: Ball, config: BallConfig, dt: float) -> bool:
    """Decay ball velocity; returns True when the ball came to rest this step."""
    if not ball.is_moving:
        return False
    ball.velocity = ball.velocity * (config.friction_per_second ** dt)
    if ball.velocity.length() < config.stop_speed_mps:
        ball.velocity = Vec2()
        return True
    return False


def integrate_ball(ball: Ball, config: BallConfig, dt: float, pitch: Pitch = PITCH) -> tuple[list[str], bool]:
    """Advance the ball one step.

    Returns (walls hit, came to rest).
    """
    if dt <= 0:
        return [], False
    ball.pos = ball.pos + ball.velocity * dt
    walls = bounce_off_walls(ball, config, pitch)
    stopped = apply_friction(ball, config, dt)
    return walls, stopped
