# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Command-line driver for the baseball rules engine.

Usage:
    uv run play_ball.py demo                 # narrate scripted plays
    uv run play_ball.py sim --seed 42        # simulate a full game
    uv run play_ball.py sim --seed 42 -v     # ... with play-by-play
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from config import configure_logging, get_seed
from rules import (
    BattingPosition,
    Game,
    GameScore,
    GameState,
    HalfInning,
    InningHalf,
    InningNumber,
    PitchOutcome,
    PlateAppearance,
    PlayOutcome,
)
from simulation import SimulationEngine, format_line_score

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Scripted demos
# ---------------------------------------------------------------------------

def demo_plate_appearance() -> None:
    print("Simulating a full count walk...")

    pitches = [
        ("Ball", PitchOutcome.ball()),
        ("Strike", PitchOutcome.strike()),
        ("Ball", PitchOutcome.ball()),
        ("Strike", PitchOutcome.strike()),
        ("Ball", PitchOutcome.ball()),
        ("Foul ball", PitchOutcome.foul()),
        ("Foul ball", PitchOutcome.foul()),
        ("Ball", PitchOutcome.ball()),
    ]

    pa = PlateAppearance()
    for i, (desc, pitch) in enumerate(pitches, start=1):
        print(f"  Pitch {i}: {desc}")
        print(f"    Before: {pa.count}")
        result = pa.advance(pitch)
        if result.is_complete():
            print(f"    Result: {result.kind.value}")
            break
        pa = result.plate_appearance
        print(f"    After: {pa.count}")


def demo_half_inning() -> None:
    half = HalfInning.new(InningHalf.TOP, BattingPosition.FIRST)
    print("Starting top half with leadoff batter")
    print(f"Initial state: {half.outs} outs, batter #{half.current_batter.as_number()}")

    script = [
        ("Ground out", lambda h: PitchOutcome.in_play(PlayOutcome.groundout(h.baserunners))),
        ("Single", lambda h: PitchOutcome.in_play(PlayOutcome.single(h.baserunners, h.current_batter))),
        ("Double", lambda h: PitchOutcome.in_play(PlayOutcome.double(h.baserunners, h.current_batter))),
        ("Home run", lambda h: PitchOutcome.home_run()),
        ("Ground out", lambda h: PitchOutcome.in_play(PlayOutcome.groundout(h.baserunners))),
        ("Ground out", lambda h: PitchOutcome.in_play(PlayOutcome.groundout(h.baserunners))),
    ]
    for desc, make_pitch in script:
        print(f"\n  Batter #{half.current_batter.as_number()} steps up... {desc}")
        result = half.advance(make_pitch(half))
        if result.is_complete():
            print(f"    Side retired, {result.summary.runs_scored} run(s) scored")
            break
        half = result.half_inning
        print(
            f"    {half.outs} outs, {half.runs_scored} runs, {half.baserunners.describe()}, "
            f"next batter #{half.current_batter.as_number()}"
        )


def demo_walk_off() -> None:
    game = Game(
        inning=InningNumber(number=9),
        state=GameState.BOTTOM,
        score=GameScore(away=3, home=3),
        half_inning=HalfInning.new(InningHalf.BOTTOM),
    )
    print(f"{game.inning_description()}, {game.score}")
    print("  Leadoff batter hits the first pitch out...")
    result = game.advance(PitchOutcome.home_run())
    summary = result.summary
    print(
        f"  {result.game.inning_description()}: {summary.winner.value.title()} wins "
        f"{summary.final_score.home}-{summary.final_score.away} "
        f"in the {summary.innings_played.ordinal()}"
    )


def run_demo() -> int:
    for title, demo in (
        ("Demo 1: Basic Plate Appearance", demo_plate_appearance),
        ("Demo 2: Half Inning Progress", demo_half_inning),
        ("Demo 3: Walk-off", demo_walk_off),
    ):
        print(title)
        demo()
        print(f"\n{'=' * 50}\n")
    return 0


# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------

def run_sim(seed: int | None, verbose: bool, max_pitches: int, as_json: bool) -> int:
    engine = SimulationEngine(seed=seed)
    if not as_json:
        print(f"Simulating game with seed {engine.seed}...")
        print("=" * 72)

    sim = engine.simulate_game(max_pitches=max_pitches, verbose=verbose and not as_json)

    if as_json:
        print(json.dumps({
            "seed": engine.seed,
            "pitches": sim.pitch_count,
            "summary": sim.summary.model_dump(mode="json") if sim.summary else None,
            "play_log": [e.to_dict() for e in sim.play_log],
        }, indent=2))
    else:
        print()
        print(format_line_score(sim))
        print(f"\nTotal pitches: {sim.pitch_count}")

    if not sim.is_complete():
        logger.error("Game did not finish within %d pitches", max_pitches)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Drive the baseball rules engine one pitch at a time."
    )
    parser.add_argument(
        "--log-level", default=None,
        help="Logging level (default: $BASEBALL_LOG_LEVEL or WARNING).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("demo", help="Narrate scripted plate appearances and innings.")

    sim_parser = subparsers.add_parser("sim", help="Simulate a full game with random pitches.")
    sim_parser.add_argument(
        "--seed", type=int, default=None,
        help="Random seed for deterministic replay (default: $BASEBALL_SEED or random).",
    )
    sim_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Print the play-by-play.",
    )
    sim_parser.add_argument(
        "--max-pitches", type=int, default=2000,
        help="Stop after this many pitches (default: 2000).",
    )
    sim_parser.add_argument(
        "--json", action="store_true", dest="as_json",
        help="Print the summary and play log as JSON.",
    )
    args = parser.parse_args(argv)

    configure_logging(args.log_level.upper() if args.log_level else None)

    if args.command == "demo":
        return run_demo()

    seed = args.seed if args.seed is not None else get_seed()
    return run_sim(seed, args.verbose, args.max_pitches, args.as_json)


if __name__ == "__main__":
    sys.exit(main())
