"""Chase drill: two participants pursue a ball that gets kicked on contact."""

from __future__ import annotations

import logging
import math
from typing import Optional

from ..core.entities import Ball, Participant
from ..core.events import EventType
from ..core.geometry import seek_with_repulsion
from ..core.vec2 import Vec2
from ..physics.ball import integrate_ball
from ..physics.collision import resolve_collisions
from .base import Drill, DrillState, DrillType

logger = logging.getLogger(__name__)


class ChaseDrill(Drill):
    """Both participants seek the ball.

    Whoever reaches it first (and did not make the previous kick) kicks it
    on, partly toward the other participant and with a random angle from
    the session RNG.
    """

    drill_type = DrillType.CHASE
    min_participants = 2
    max_participants = 2
    uses_ball = True

    def setup(self, state: DrillState) -> None:
        pitch = state.pitch
        starts = [
            Vec2(pitch.length * 0.25, pitch.width / 2),
            Vec2(pitch.length * 0.75, pitch.width / 2),
        ]
        for p, start in zip(state.participants, starts):
            p.place(start)
        state.ball = Ball(pos=pitch.center)

    def step(self, state: DrillState, dt: float) -> None:
        ball = state.ball
        cfg = state.config
        chase = cfg.chase
        radius = cfg.player_radius_m

        if ball.possession is not None and ball.holder(state.by_id) is None:
            logger.debug("Possession %s no longer on the pitch, ball is loose", ball.possession)
            ball.possession = None

        for p in state.participants:
            obstacles = [(o.pos, radius) for o in state.participants if o is not p]
            target = seek_with_repulsion(
                p.pos,
                ball.pos,
                obstacles,
                personal_radius=radius,
                buffer=chase.repulsion_buffer_m,
                strength=chase.repulsion_strength,
                pitch=state.pitch,
            )
            self.move_participant(p, target, dt, state.pitch)

        kicker = self._eligible_kicker(state.participants, ball, chase.contact_radius_m)
        if kicker is not None:
            self._kick(state, kicker)

        walls, stopped = integrate_ball(ball, cfg.ball, dt, state.pitch)
        if walls:
            state.emit(EventType.BALL_BOUNCE, walls=walls)
        if stopped:
            ball.possession = None
            state.emit(EventType.BALL_STOPPED, x=round(ball.pos.x, 2), y=round(ball.pos.y, 2))

    def resolve_collisions(self, state: DrillState) -> int:
        cfg = state.config
        return resolve_collisions(
            state.participants,
            state.ball,
            player_radius=cfg.player_radius_m,
            ball_radius=cfg.ball.radius_m,
            restitution=cfg.ball.restitution,
            margin=cfg.collision_margin_m,
            ball_bias=cfg.chase.ball_bias,
            iterations=cfg.chase.collision_iterations,
            pitch=state.pitch,
        )

    def counters(self, participant: Participant) -> dict[str, object]:
        return {"touches": participant.touches}

    # =========================================================================
    # Kicking
    # =========================================================================

    @staticmethod
    def _eligible_kicker(
        participants: list[Participant], ball: Ball, contact_radius: float
    ) -> Optional[Participant]:
        """Closest participant in contact range who did not make the last kick."""
        eligible = [
            p for p in participants
            if p.id != ball.last_kicker and p.pos.distance_to(ball.pos) <= contact_radius
        ]
        if not eligible:
            return None
        return min(eligible, key=lambda p: p.pos.distance_to(ball.pos))

    def _kick(self, state: DrillState, kicker: Participant) -> None:
        ball = state.ball
        chase = state.config.chase

        direction = (ball.pos - kicker.pos).normalized()
        if direction.length_squared() == 0:
            direction = Vec2(1.0, 0.0)

        mates = [p for p in state.participants if p is not kicker]
        if mates and chase.teammate_bias > 0:
            to_mate = (mates[0].pos - ball.pos).normalized()
            blended = direction * (1.0 - chase.teammate_bias) + to_mate * chase.teammate_bias
            if blended.length_squared() > 0:
                direction = blended.normalized()

        angle = direction.angle() + (state.rng.random() - 0.5) * 2.0 * chase.kick_jitter_rad
        ball.velocity = Vec2.from_angle(angle, chase.kick_speed_mps)
        ball.possession = kicker.id
        ball.last_kicker = kicker.id
        kicker.touches += 1

        state.emit(
            EventType.KICK,
            player_id=kicker.id,
            description=f"{kicker.name} kicks at {math.degrees(angle):.0f} deg",
            angle=round(angle, 4),
        )
