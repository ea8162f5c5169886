"""Iterative overlap resolution between participants and the ball."""

from __future__ import annotations

from typing import Optional

from ..core.entities import Ball, Participant
from ..core.geometry import reflect_velocity, separate_circles
from ..core.pitch import PITCH, Pitch


BALL_NUDGE_M = 0.01


def resolve_collisions(
    participants: list[Participant],
    ball: Optional[Ball],
    player_radius: float,
    ball_radius: float,
    restitution: float,
    margin: float = 0.04,
    ball_bias: float = 0.7,
    iterations: int = 8,
    pitch: Pitch = PITCH,
) -> int:
    """Push overlapping bodies apart.

    Participants split an overlap evenly; the ball takes `ball_bias` of it
    and, if it was moving into the participant, bounces off. Everything is
    clamped back onto the pitch afterwards. Returns the number of contacts
    resolved.
    """
    contacts = 0
    for _ in range(iterations):
        moved = False

        for i in range(len(participants)):
            for j in range(i + 1, len(participants)):
                a, b = participants[i], participants[j]
                sep = separate_circles(a.pos, player_radius, b.pos, player_radius, 0.5, margin)
                if sep is not None:
                    a.pos, b.pos = sep.a, sep.b
                    moved = True
                    contacts += 1

        if ball is not None:
            for p in participants:
                sep = separate_circles(ball.pos, ball_radius, p.pos, player_radius, ball_bias, margin)
                if sep is None:
                    continue
                ball.velocity = reflect_velocity(ball.velocity, sep.normal, restitution)
                ball.pos = sep.a + sep.normal * BALL_NUDGE_M
                p.pos = sep.b
                moved = True
                contacts += 1

        if not moved:
            break

    for p in participants:
        p.pos = pitch.clamp(p.pos)
    if ball is not None:
        ball.pos = pitch.clamp(ball.pos)
    return contacts
