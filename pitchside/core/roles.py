"""Playing roles and the free-text position mapping."""

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    FORWARD = "Forward"
    MIDFIELDER = "Midfielder"
    DEFENDER = "Defender"
    GOALKEEPER = "Goalkeeper"


# Checked in order; first role with a matching substring wins.
POSITION_KEYWORDS: list[tuple[Role, tuple[str, ...]]] = [
    (Role.FORWARD, ("striker", "forward", "winger", "attacker", "cf", "lw", "rw", "st", "am")),
    (Role.MIDFIELDER, ("mid", "cm", "dm", "cam", "amf", "mf", "mezzala", "volante")),
    (Role.DEFENDER, ("def", "cb", "rb", "lb", "fb", "rwb", "lwb")),
    (Role.GOALKEEPER, ("gk", "goal", "keeper")),
]


def map_position_to_role(position: str | None) -> Role:
    """Map a free-text position ("Left Winger", "CB", "gk") to a Role.

    Matching is a case-insensitive substring search. Anything unrecognised
    falls back to Midfielder.
    """
    if not position:
        return Role.MIDFIELDER
    text = position.lower()
    for role, keywords in POSITION_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return role
    return Role.MIDFIELDER
