# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Tests for the seeded game simulator.

Verifies:
1. Simulates outcomes at the pitch level through the rules engine
2. Ball-in-play outcomes built against the runners on base
3. Games finish under the engine's ending rules
4. Play-by-play event description produced
5. Line score agrees with the engine's final score
6. Seeded randomness for deterministic replay
"""

import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from rules import (
    BaserunnerState,
    BattingPosition,
    Game,
    GameScore,
    GameState,
    GameWinner,
    HalfInning,
    InningHalf,
    InningNumber,
    PitchKind,
    PitchOutcome,
)
from simulation import (
    SimulationEngine,
    PlayEvent,
    format_line_score,
    line_score,
    live_score,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_test_engine(seed=42):
    return SimulationEngine(seed=seed)


def simulate(seed=42, **kwargs):
    return make_test_engine(seed).simulate_game(**kwargs)


# ===========================================================================
# Test: Pitch resolution
# ===========================================================================

def test_resolve_pitch_labels():
    engine = make_test_engine(7)
    half = HalfInning.new(InningHalf.TOP)
    labels = set()
    for _ in range(500):
        pitch, label = engine.resolve_pitch(half)
        labels.add(label)
        if label == "ball":
            assert pitch.kind is PitchKind.BALL
        elif label in ("called_strike", "swinging_strike"):
            assert pitch.kind is PitchKind.STRIKE
        elif label == "foul":
            assert pitch.kind is PitchKind.FOUL
        elif label == "hbp":
            assert pitch.kind is PitchKind.HIT_BY_PITCH
        elif label == "home_run":
            assert pitch.kind is PitchKind.HOME_RUN
        else:
            assert pitch.kind is PitchKind.IN_PLAY
    assert {"ball", "called_strike", "foul", "groundout"} <= labels
    print("  test_resolve_pitch_labels: PASSED")


def test_ball_in_play_uses_current_runners():
    engine = make_test_engine(3)
    bases = BaserunnerState(first=BattingPosition.FIRST, second=BattingPosition.SECOND)
    half = HalfInning(half=InningHalf.TOP, current_batter=BattingPosition.THIRD,
                      baserunners=bases)
    for _ in range(300):
        pitch, label = engine.resolve_ball_in_play(half)
        if label == "single":
            assert pitch.play.baserunners() == BaserunnerState(
                first=BattingPosition.THIRD,
                second=BattingPosition.FIRST,
                third=BattingPosition.SECOND,
            )
        elif label == "double_play":
            assert pitch.play.outs() == 2
        elif label == "groundout":
            assert pitch.play.outs() == 1
            assert pitch.play.baserunners() == BaserunnerState(
                second=BattingPosition.FIRST, third=BattingPosition.SECOND,
            )
    print("  test_ball_in_play_uses_current_runners: PASSED")


def test_no_double_play_with_two_outs():
    engine = make_test_engine(11)
    half = HalfInning(half=InningHalf.BOTTOM, outs=2,
                      baserunners=BaserunnerState(first=BattingPosition.NINTH))
    for _ in range(300):
        _, label = engine.resolve_ball_in_play(half)
        assert label != "double_play"
    print("  test_no_double_play_with_two_outs: PASSED")


# ===========================================================================
# Test: Full game
# ===========================================================================

def test_game_completes():
    sim = simulate(42)
    assert sim.is_complete()
    assert sim.game.state is GameState.COMPLETE
    summary = sim.summary
    assert summary.winner in (GameWinner.AWAY, GameWinner.HOME)
    assert summary.innings_played.as_number() >= 9
    assert not summary.final_score.is_tied()
    print("  test_game_completes: PASSED")


def test_many_seeds_complete():
    for seed in range(25):
        sim = simulate(seed)
        assert sim.is_complete(), f"seed {seed} did not finish"
        assert sim.pitch_count > 0
    print("  test_many_seeds_complete: PASSED")


def test_play_log_structure():
    sim = simulate(42)
    log = sim.play_log
    assert log[0].event_type == "inning_change"
    assert log[0].description == "--- Top of the 1st ---"
    assert log[-1].event_type == "game_end"
    types = {e.event_type for e in log}
    assert "in_play" in types or "strikeout" in types
    for event in log:
        assert isinstance(event, PlayEvent)
        assert event.half in ("TOP", "BOTTOM")
        json.dumps(event.to_dict())
    print("  test_play_log_structure: PASSED")


def test_play_log_runs_match_final_score():
    sim = simulate(99)
    away = sum(e.runs_scored for e in sim.play_log if e.half == "TOP")
    home = sum(e.runs_scored for e in sim.play_log if e.half == "BOTTOM")
    assert GameScore(away=away, home=home) == sim.summary.final_score
    print("  test_play_log_runs_match_final_score: PASSED")


def test_line_score_totals():
    for seed in (1, 2, 3, 42):
        sim = simulate(seed)
        box = line_score(sim)
        away_runs = box["away"]["inning_runs"]
        home_runs = [r for r in box["home"]["inning_runs"] if r != "X"]
        assert sum(away_runs) == box["away"]["total_runs"] == sim.summary.final_score.away
        assert sum(home_runs) == box["home"]["total_runs"] == sim.summary.final_score.home
        assert len(away_runs) == box["innings"]
        assert len(box["home"]["inning_runs"]) == box["innings"]
        assert box["winner"] == sim.summary.winner.value
    print("  test_line_score_totals: PASSED")


def test_unplayed_bottom_of_ninth_shows_x():
    game = Game(
        inning=InningNumber(number=9),
        state=GameState.TOP,
        score=GameScore(away=0, home=1),
        half_inning=HalfInning(half=InningHalf.TOP, outs=2),
    )
    # Play from the top of the ninth until the inning ends one way or another.
    for seed in range(50):
        sim = simulate(seed, game=game)
        if sim.summary.innings_played.as_number() == 9 and sim.summary.winner is GameWinner.HOME \
                and sim.summary.final_score.home == 1:
            box = line_score(sim)
            assert box["home"]["inning_runs"][-1] == "X"
            break
    else:
        raise AssertionError("no seed ended the game after the top of the ninth")
    print("  test_unplayed_bottom_of_ninth_shows_x: PASSED")


def test_format_line_score():
    sim = simulate(42)
    text = format_line_score(sim)
    assert text.startswith("Team")
    assert "Away" in text
    assert "Home" in text
    assert f"Winner: {sim.summary.winner.value.title()}" in text
    assert "Seed: 42" in text
    print("  test_format_line_score: PASSED")


def test_max_pitches_stops_early():
    sim = simulate(42, max_pitches=10)
    assert not sim.is_complete()
    assert sim.pitch_count == 10
    assert sim.summary is None
    assert "none (unfinished)" in format_line_score(sim)
    print("  test_max_pitches_stops_early: PASSED")


def test_live_score_includes_pending_runs():
    game = Game(
        inning=InningNumber(number=3),
        state=GameState.BOTTOM,
        score=GameScore(away=2, home=1),
        half_inning=HalfInning(half=InningHalf.BOTTOM, runs_scored=2),
    )
    assert live_score(game) == (2, 3)
    print("  test_live_score_includes_pending_runs: PASSED")


def test_verbose_prints_play_by_play(capsys):
    simulate(5, verbose=True)
    out = capsys.readouterr().out
    assert "--- Top of the 1st ---" in out
    assert "wins" in out
    print("  test_verbose_prints_play_by_play: PASSED")


# ===========================================================================
# Test: Deterministic seeding
# ===========================================================================

def test_deterministic_replay():
    """Same seed produces same game outcome."""
    game1 = simulate(42)
    game2 = simulate(42)

    assert game1.summary == game2.summary
    assert game1.pitch_count == game2.pitch_count
    assert len(game1.play_log) == len(game2.play_log)

    for i, (e1, e2) in enumerate(zip(game1.play_log, game2.play_log)):
        assert e1.description == e2.description, \
            f"Event {i} differs: '{e1.description}' vs '{e2.description}'"

    print("  test_deterministic_replay: PASSED")


def test_different_seeds_different_outcomes():
    """Different seeds produce different outcomes (probabilistically)."""
    results = set()
    for seed in range(10):
        sim = simulate(seed)
        results.add((sim.summary.final_score.away, sim.summary.final_score.home, sim.pitch_count))

    assert len(results) >= 2, f"All 10 games were identical: {results}"
    print("  test_different_seeds_different_outcomes: PASSED")


def test_random_seed_recorded():
    engine = SimulationEngine()
    assert isinstance(engine.seed, int)
    sim = engine.simulate_game()
    assert sim.seed == engine.seed
    print("  test_random_seed_recorded: PASSED")


# ===========================================================================
# Test: Starting from a hand-built game
# ===========================================================================

def test_simulate_from_between_halves():
    game = Game(inning=InningNumber(number=3), state=GameState.TOP_END, half_inning=None)
    sim = simulate(1, game=game)
    assert sim.is_complete()
    assert sim.play_log[0].description == "--- Bottom of the 3rd ---"
    assert sim.play_log[0].half == "BOTTOM"
    print("  test_simulate_from_between_halves: PASSED")


def test_simulate_from_finished_game():
    walk_off = Game(
        inning=InningNumber(number=9),
        state=GameState.BOTTOM,
        score=GameScore(away=3, home=3),
        half_inning=HalfInning.new(InningHalf.BOTTOM),
    ).advance(PitchOutcome.home_run())
    sim = simulate(1, game=walk_off.game)
    assert sim.is_complete()
    assert sim.pitch_count == 0
    assert sim.play_log == []
    assert sim.summary.final_score == GameScore(away=3, home=4)
    print("  test_simulate_from_finished_game: PASSED")
