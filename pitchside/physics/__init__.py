"""Physics: speed capacity, stamina, ball flight and collisions."""

from .ball import apply_friction, bounce_off_walls, integrate_ball
from .capacity import ROLE_BANDS, RoleBand, base_speed, physical_multiplier
from .collision import resolve_collisions
from .stamina import apply_fatigue, current_capacity, initial_stamina

__all__ = [
    "ROLE_BANDS",
    "RoleBand",
    "apply_fatigue",
    "apply_friction",
    "base_speed",
    "bounce_off_walls",
    "current_capacity",
    "initial_stamina",
    "integrate_ball",
    "physical_multiplier",
    "resolve_collisions",
]
