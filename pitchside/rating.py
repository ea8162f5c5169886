"""Speed rating update protocol.

A session's average speed becomes a 0-100 speed rating. New players, and
players with very little history, get the session's speed converted
directly (bootstrap). Everyone else gets the mean of their most recent
sessions (rolling), so one odd session cannot swing the rating.

There is no deduplication by session id: committing the same session
twice appends it to the history twice. Callers that persist updates must
commit each report at most once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional

from .config import RatingConfig
from .core.entities import MatchRecord, RosterPlayer

logger = logging.getLogger(__name__)


class RatingMode(str, Enum):
    BOOTSTRAP = "bootstrap"
    ROLLING = "rolling"


def speed_to_rating(speed_mps: float, max_realistic_speed_mps: float = 9.0) -> int:
    """Convert m/s to a rating: round(speed / max * 100), clamped to [0, 100]."""
    if max_realistic_speed_mps <= 0:
        return 0
    rating = int(round(speed_mps / max_realistic_speed_mps * 100))
    return max(0, min(100, rating))


@dataclass(frozen=True)
class RatingUpdate:
    """Outcome of applying one session's speed to a player."""
    player_id: str
    previous_rating: int
    new_rating: int
    mode: RatingMode
    session_speed_mps: float
    sessions_used: int
    match_history: tuple[MatchRecord, ...]

    @property
    def delta(self) -> int:
        return self.new_rating - self.previous_rating

    def to_dict(self) -> dict:
        return {
            "player_id": self.player_id,
            "previous_rating": self.previous_rating,
            "new_rating": self.new_rating,
            "delta": self.delta,
            "mode": self.mode.value,
            "session_speed_mps": self.session_speed_mps,
            "sessions_used": self.sessions_used,
            "match_history": [m.to_dict() for m in self.match_history],
        }


def compute_rating_update(
    player: RosterPlayer,
    session_speed_mps: float,
    date: Optional[str] = None,
    config: RatingConfig = RatingConfig(),
) -> RatingUpdate:
    """Work out a player's new speed rating after one session.

    The session is appended to the history, which is then trimmed to the
    rolling window. Bootstrap applies when the player is unrated or the
    history, including this session, has at most `bootstrap_sessions`
    entries.
    """
    date = date or datetime.now().isoformat(timespec="seconds")
    history = list(player.match_history) + [MatchRecord(date=date, avg_speed_mps=session_speed_mps)]
    full_length = len(history)
    recent = history[-config.window:]

    if not player.is_rated or full_length <= config.bootstrap_sessions:
        mode = RatingMode.BOOTSTRAP
        new_rating = speed_to_rating(session_speed_mps, config.max_realistic_speed_mps)
        used = 1
    else:
        mode = RatingMode.ROLLING
        mean_speed = sum(m.avg_speed_mps for m in recent) / len(recent)
        new_rating = speed_to_rating(mean_speed, config.max_realistic_speed_mps)
        used = len(recent)

    logger.debug(
        "Rating for %s: %d -> %d (%s over %d sessions)",
        player.id, player.speed, new_rating, mode.value, used,
    )
    return RatingUpdate(
        player_id=player.id,
        previous_rating=player.speed,
        new_rating=new_rating,
        mode=mode,
        session_speed_mps=session_speed_mps,
        sessions_used=used,
        match_history=tuple(recent),
    )


def apply_update(player: RosterPlayer, update: RatingUpdate) -> RosterPlayer:
    """Return a copy of the player with the update written in."""
    return replace(player, speed=update.new_rating, match_history=update.match_history)
