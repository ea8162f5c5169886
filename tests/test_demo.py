"""Tests for the headless demo runner and the command line."""

import csv
import io
import sys

import pytest

from pitchside.__main__ import main
from pitchside.demo import run_demo
from pitchside.report.models import CSV_COLUMNS


class TestRunDemo:
    def test_default_players_fit_drill(self):
        report = run_demo("shuttle", seconds=2.0)
        assert [p.player_id for p in report.participants] == ["p1", "p2"]
        assert report.duration_s == pytest.approx(2.0)

    def test_explicit_players(self):
        report = run_demo("slalom", seconds=1.0, participant_ids=["p4"])
        assert report.participants[0].player_name == "Sam Reyes"

    def test_seeded_runs_repeat(self):
        first = run_demo("chase", seconds=3.0, seed=3)
        second = run_demo("chase", seconds=3.0, seed=3)
        assert [p.metrics for p in first.participants] == [p.metrics for p in second.participants]


class TestCommandLine:
    def test_csv_output(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["pitchside", "--drill", "shuttle", "--seconds", "2", "--csv"])
        main()
        rows = list(csv.DictReader(io.StringIO(capsys.readouterr().out)))
        assert list(rows[0].keys()) == CSV_COLUMNS
        assert rows[0]["drill"] == "shuttle"

    def test_summary_output(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["pitchside", "--drill", "chase", "--seconds", "1"])
        main()
        assert "chase drill" in capsys.readouterr().out

    def test_rejected_players(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["pitchside", "--drill", "chase", "--players", "p1"])
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 2
        assert "NotEnoughParticipants" in capsys.readouterr().err
