# /// script
# requires-python = ">=3.12"
# dependencies = ["pytest>=7.0", "pydantic>=2.0"]
# ///
"""Tests for the play_ball command-line driver."""

import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

import play_ball


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: None)


# ---------------------------------------------------------------------------
# demo
# ---------------------------------------------------------------------------

class TestDemo:
    def test_demo_runs(self, capsys):
        assert play_ball.main(["demo"]) == 0
        out = capsys.readouterr().out
        assert "Demo 1: Basic Plate Appearance" in out
        assert "Demo 2: Half Inning Progress" in out
        assert "Demo 3: Walk-off" in out

    def test_demo_full_count_walk(self, capsys):
        play_ball.demo_plate_appearance()
        out = capsys.readouterr().out
        assert "Before: 3-2" in out
        assert "Result: WALK" in out

    def test_demo_half_inning_retires_side(self, capsys):
        play_ball.demo_half_inning()
        out = capsys.readouterr().out
        assert "Side retired, 3 run(s) scored" in out

    def test_demo_walk_off(self, capsys):
        play_ball.demo_walk_off()
        out = capsys.readouterr().out
        assert "Bottom of the 9th, Away 3 - Home 3" in out
        assert "Game Complete: Home wins 4-3 in the 9th" in out


# ---------------------------------------------------------------------------
# sim
# ---------------------------------------------------------------------------

class TestSim:
    def test_seeded_sim(self, capsys):
        assert play_ball.main(["sim", "--seed", "42"]) == 0
        out = capsys.readouterr().out
        assert "Simulating game with seed 42" in out
        assert "Seed: 42" in out
        assert "Winner:" in out

    def test_verbose_prints_play_by_play(self, capsys):
        play_ball.main(["sim", "--seed", "42", "--verbose"])
        out = capsys.readouterr().out
        assert "--- Top of the 1st ---" in out

    def test_seed_from_environment(self, monkeypatch, capsys):
        monkeypatch.setenv("BASEBALL_SEED", "17")
        play_ball.main(["sim"])
        assert "Seed: 17" in capsys.readouterr().out

    def test_flag_overrides_environment(self, monkeypatch, capsys):
        monkeypatch.setenv("BASEBALL_SEED", "17")
        play_ball.main(["sim", "--seed", "3"])
        assert "Seed: 3" in capsys.readouterr().out

    def test_json_output(self, capsys):
        assert play_ball.main(["sim", "--seed", "8", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["seed"] == 8
        assert data["summary"]["winner"] in ("AWAY", "HOME")
        assert data["play_log"][-1]["event_type"] == "game_end"

    def test_unfinished_game_exit_code(self, capsys):
        assert play_ball.main(["sim", "--seed", "42", "--max-pitches", "5"]) == 1

    def test_missing_command_errors(self):
        with pytest.raises(SystemExit):
            play_ball.main([])
