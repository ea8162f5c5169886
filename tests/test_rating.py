"""Tests for the speed rating update protocol."""

import pytest

from pitchside.config import RatingConfig
from pitchside.core.entities import MatchRecord, RosterPlayer
from pitchside.rating import RatingMode, apply_update, compute_rating_update, speed_to_rating


def rated_player(history_speeds, speed=40):
    return RosterPlayer(
        id="r1",
        name="Rated",
        speed=speed,
        match_history=tuple(MatchRecord(f"2026-0{i + 1}-01", s) for i, s in enumerate(history_speeds)),
    )


class TestSpeedToRating:
    """Tests for speed_to_rating()."""

    @pytest.mark.parametrize(
        "speed,expected",
        [(0.0, 0), (4.5, 50), (9.0, 100), (12.0, 100), (-1.0, 0), (3.5, 39)],
    )
    def test_conversion(self, speed, expected):
        assert speed_to_rating(speed) == expected


class TestBootstrap:
    """Early sessions convert the session speed directly."""

    def test_new_player(self):
        player = RosterPlayer(id="n", name="New")
        update = compute_rating_update(player, 4.5, date="2026-10-17")
        assert update.new_rating == 50
        assert update.previous_rating == 0
        assert update.mode == RatingMode.BOOTSTRAP
        assert len(update.match_history) == 1

    def test_second_session_still_bootstraps(self):
        update = compute_rating_update(rated_player([3.0]), 6.3, date="d")
        assert update.mode == RatingMode.BOOTSTRAP
        assert update.new_rating == 70

    def test_unrated_with_long_history_bootstraps(self):
        update = compute_rating_update(rated_player([3.0] * 5, speed=0), 4.5, date="d")
        assert update.mode == RatingMode.BOOTSTRAP
        assert update.new_rating == 50

    def test_threshold_is_configurable(self):
        config = RatingConfig(bootstrap_sessions=0)
        update = compute_rating_update(rated_player([3.0]), 6.3, date="d", config=config)
        assert update.mode == RatingMode.ROLLING


class TestRollingWindow:
    """Established players average over the last six sessions."""

    def test_seventh_session_pushes_out_oldest(self):
        update = compute_rating_update(rated_player([3.0] * 6), 6.0, date="2026-10-17")
        # mean of [3, 3, 3, 3, 3, 6] = 3.5 -> 39; all seven would give 3.43 -> 38
        assert update.mode == RatingMode.ROLLING
        assert update.new_rating == 39
        assert update.sessions_used == 6
        assert len(update.match_history) == 6
        assert update.match_history[-1].avg_speed_mps == 6.0

    def test_third_session_rolls(self):
        update = compute_rating_update(rated_player([3.0, 3.0]), 6.0, date="d")
        assert update.mode == RatingMode.ROLLING
        assert update.new_rating == speed_to_rating(4.0)

    def test_rating_clamped(self):
        update = compute_rating_update(rated_player([20.0] * 6), 20.0, date="d")
        assert update.new_rating == 100


class TestApplyUpdate:
    def test_returns_new_record(self):
        player = rated_player([3.0] * 6)
        update = compute_rating_update(player, 6.0, date="d")
        updated = apply_update(player, update)
        assert updated.speed == 39
        assert player.speed == 40
        assert updated.match_history == update.match_history

    def test_delta(self):
        update = compute_rating_update(rated_player([3.0] * 6), 6.0, date="d")
        assert update.delta == -1
        assert update.to_dict()["mode"] == "rolling"


class TestClubRecords:
    """Rating updates for records read from the club export shape."""

    def test_history_read_from_match_history_key(self):
        player = RosterPlayer.from_dict({
            "id": "c1",
            "name": "Club",
            "ratingAttributes": {"speed": 35, "stamina": 60},
            "matchHistory": [{"date": f"2026-0{i + 1}-01", "avgSpeedMps": 3.0} for i in range(6)],
        })
        update = compute_rating_update(player, 6.0, date="d")
        assert update.mode == RatingMode.ROLLING
        assert update.new_rating == 39
        assert update.previous_rating == 35
