# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Baseball game simulation engine.

Generates pitch outcomes from fixed league-average probabilities and feeds
them, one pitch at a time, through the rules engine in ``rules``. The
engine decides everything about counts, outs, runners and the final
score; this module only rolls the dice and keeps a play-by-play log and a
line score for display.

All randomness is seeded for deterministic replay.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from rules import (
    Game,
    GameAdvance,
    GameSummary,
    HalfInning,
    HalfInningAdvance,
    InningHalf,
    PitchOutcome,
    PlateAppearanceResult,
    PlayBaseOutcome,
    PlayOutcome,
)

logger = logging.getLogger(__name__)

# Safety valve for marathon extra-inning games.
MAX_PITCHES = 2000

# ---------------------------------------------------------------------------
# Pitch probabilities (league averages)
# ---------------------------------------------------------------------------

HBP_RATE = 0.008        # ~1% of pitches
ZONE_RATE = 0.45        # pitches in the strike zone
SWING_IN_ZONE = 0.68    # batters swing at ~70% of pitches in the zone
CHASE_RATE = 0.28       # swings at pitches out of the zone
CONTACT_RATE = 0.76     # contact on a swing
FOUL_RATE = 0.40        # share of contact that goes foul

# Ball-in-play probabilities
HIT_RATE = 0.30         # BABIP, home runs included
ERROR_RATE = 0.02
DOUBLE_PLAY_RATE = 0.35  # groundouts with a force at second and < 2 outs

HIT_TYPE_WEIGHTS = {
    "single": 0.65,
    "double": 0.20,
    "triple": 0.02,
    "home_run": 0.13,
}

_HIT_BUILDERS = {
    "single": PlayOutcome.single,
    "double": PlayOutcome.double,
    "triple": PlayOutcome.triple,
}

_IN_PLAY_VERBS = {
    "single": "singles",
    "double": "doubles",
    "triple": "triples",
    "groundout": "grounds out",
    "double_play": "grounds into double play",
    "error": "reaches on error",
}


# ---------------------------------------------------------------------------
# Play-by-play event
# ---------------------------------------------------------------------------

@dataclass
class PlayEvent:
    inning: int
    half: str  # "TOP" or "BOTTOM"
    outs_before: int
    description: str
    event_type: str  # "walk", "strikeout", "hbp", "home_run", "in_play", "inning_change", "game_end"
    score_home: int = 0
    score_away: int = 0
    runs_scored: int = 0
    batter: int = 0  # batting-order slot, 0 for non-batting events

    def to_dict(self) -> dict:
        return {
            "inning": self.inning,
            "half": self.half,
            "outs_before": self.outs_before,
            "description": self.description,
            "event_type": self.event_type,
            "score": {"home": self.score_home, "away": self.score_away},
            "runs_scored": self.runs_scored,
            "batter": self.batter,
        }


# ---------------------------------------------------------------------------
# Simulated game record
# ---------------------------------------------------------------------------

@dataclass
class SimulatedGame:
    """The latest engine result plus everything logged along the way."""
    advance: GameAdvance
    seed: int = 0
    play_log: list[PlayEvent] = field(default_factory=list)
    inning_runs: dict[str, list[int]] = field(
        default_factory=lambda: {"away": [], "home": []}
    )
    pitch_count: int = 0

    @property
    def game(self) -> Game:
        return self.advance.game

    @property
    def summary(self) -> GameSummary | None:
        return self.advance.summary

    def is_complete(self) -> bool:
        return self.advance.is_complete()


def live_score(game: Game) -> tuple[int, int]:
    """(away, home) including runs already scored in the half being played."""
    away, home = game.score.away, game.score.home
    half = game.half_inning
    if half is not None:
        if half.half is InningHalf.TOP:
            away += half.runs_scored
        else:
            home += half.runs_scored
    return away, home


# ---------------------------------------------------------------------------
# Simulation engine
# ---------------------------------------------------------------------------

class SimulationEngine:
    """Rolls pitch outcomes and drives a ``Game`` to completion."""

    def __init__(self, seed: int | None = None):
        if seed is None:
            seed = random.randint(0, 2**31 - 1)
        self.seed = seed
        self.rng = random.Random(seed)

    # -------------------------------------------------------------------
    # Pitch resolution
    # -------------------------------------------------------------------

    def resolve_pitch(self, half_inning: HalfInning) -> tuple[PitchOutcome, str]:
        """Resolve a single pitch.

        Returns:
            (pitch, label) where label is one of "hbp", "ball",
            "called_strike", "swinging_strike", "foul", or a ball-in-play
            label from ``resolve_ball_in_play``.
        """
        if self.rng.random() < HBP_RATE:
            return PitchOutcome.hit_by_pitch(), "hbp"

        in_zone = self.rng.random() < ZONE_RATE
        swing_probability = SWING_IN_ZONE if in_zone else CHASE_RATE
        if self.rng.random() >= swing_probability:
            if in_zone:
                return PitchOutcome.strike(), "called_strike"
            return PitchOutcome.ball(), "ball"

        if self.rng.random() >= CONTACT_RATE:
            return PitchOutcome.strike(), "swinging_strike"

        if self.rng.random() < FOUL_RATE:
            return PitchOutcome.foul(), "foul"

        return self.resolve_ball_in_play(half_inning)

    def resolve_ball_in_play(self, half_inning: HalfInning) -> tuple[PitchOutcome, str]:
        """Resolve a ball put in play against the runners currently on base.

        Labels: "single", "double", "triple", "home_run", "error",
        "double_play", "groundout".
        """
        bases = half_inning.baserunners
        batter = half_inning.current_batter

        if self.rng.random() < HIT_RATE:
            hit_type = self._determine_hit_type()
            if hit_type == "home_run":
                return PitchOutcome.home_run(), hit_type
            play = _HIT_BUILDERS[hit_type](bases, batter)
            return PitchOutcome.in_play(play), hit_type

        if self.rng.random() < ERROR_RATE:
            return PitchOutcome.in_play(PlayOutcome.error(bases, batter)), "error"

        if bases.first is not None and half_inning.outs < 2:
            if self.rng.random() < DOUBLE_PLAY_RATE:
                # Lead runner forced at second, batter at first.
                play = PlayOutcome.groundout(bases).with_second(PlayBaseOutcome.force_out())
                return PitchOutcome.in_play(play), "double_play"

        return PitchOutcome.in_play(PlayOutcome.groundout(bases)), "groundout"

    def _determine_hit_type(self) -> str:
        roll = self.rng.random()
        cumulative = 0.0
        for hit_type, weight in HIT_TYPE_WEIGHTS.items():
            cumulative += weight
            if roll < cumulative:
                return hit_type
        return "single"

    # -------------------------------------------------------------------
    # Game flow
    # -------------------------------------------------------------------

    def simulate_game(self, game: Game | None = None, max_pitches: int = MAX_PITCHES,
                      verbose: bool = False) -> SimulatedGame:
        """Simulate a game from ``game`` (a fresh game by default) to the end."""
        if game is None:
            game = Game.new()
        if game.is_complete():
            return SimulatedGame(advance=GameAdvance.complete(game), seed=self.seed)

        game = game.start_next_half()
        sim = SimulatedGame(advance=GameAdvance.in_progress(game), seed=self.seed)
        self._start_half_inning(sim, game, verbose)

        while not sim.is_complete():
            if sim.pitch_count >= max_pitches:
                logger.warning("Stopping simulation after %d pitches", max_pitches)
                break

            game = sim.game
            half = game.half_inning
            pitch, label = self.resolve_pitch(half)
            sim.pitch_count += 1

            pa_result = half.plate_appearance.advance(pitch)
            half_result = half.advance(pitch)
            sim.advance = game.advance(pitch)

            if pa_result.is_complete():
                self._record_plate_appearance(
                    sim, game, half, pa_result.kind, label, half_result, verbose
                )

            if sim.is_complete():
                self._record_game_end(sim, walk_off=not half_result.is_complete(), verbose=verbose)
            elif half_result.is_complete():
                self._start_half_inning(sim, sim.game, verbose)

        return sim

    def _start_half_inning(self, sim: SimulatedGame, game: Game, verbose: bool) -> None:
        side = "away" if game.half_inning.half is InningHalf.TOP else "home"
        runs = sim.inning_runs[side]
        while len(runs) < game.inning.number:
            runs.append(0)

        away, home = live_score(game)
        event = PlayEvent(
            inning=game.inning.number,
            half=game.half_inning.half.value,
            outs_before=0,
            description=f"--- {game.inning_description()} ---",
            event_type="inning_change",
            score_home=home,
            score_away=away,
        )
        sim.play_log.append(event)
        if verbose:
            print(f"\n{event.description}")

    def _record_plate_appearance(self, sim: SimulatedGame, game: Game, half: HalfInning,
                                 result: PlateAppearanceResult, label: str,
                                 half_result: HalfInningAdvance, verbose: bool) -> None:
        if half_result.is_complete():
            runs_after = half_result.summary.runs_scored
        else:
            runs_after = half_result.half_inning.runs_scored
        runs = runs_after - half.runs_scored

        batter = half.current_batter.as_number()
        if result is PlateAppearanceResult.STRIKEOUT:
            how = "swinging" if label == "swinging_strike" else "looking"
            description, event_type = f"#{batter} strikes out {how}", "strikeout"
        elif result is PlateAppearanceResult.WALK:
            description, event_type = f"#{batter} walks", "walk"
        elif result is PlateAppearanceResult.HIT_BY_PITCH:
            description, event_type = f"#{batter} hit by pitch", "hbp"
        elif result is PlateAppearanceResult.HOME_RUN:
            description, event_type = f"#{batter} homers", "home_run"
            if runs > 1:
                description += f" ({runs}-run homer)"
        else:
            description, event_type = f"#{batter} {_IN_PLAY_VERBS[label]}", "in_play"

        if runs > 0:
            description += f", {runs} run{'s' if runs > 1 else ''} score{'' if runs > 1 else 's'}"

        side = "away" if half.half is InningHalf.TOP else "home"
        sim.inning_runs[side][game.inning.number - 1] += runs

        away, home = live_score(sim.game)
        event = PlayEvent(
            inning=game.inning.number,
            half=half.half.value,
            outs_before=half.outs,
            description=description,
            event_type=event_type,
            score_home=home,
            score_away=away,
            runs_scored=runs,
            batter=batter,
        )
        sim.play_log.append(event)
        if verbose:
            print(f"  {description}")
            if runs > 0:
                print(f"  Score: Away {away} - Home {home}")

    def _record_game_end(self, sim: SimulatedGame, walk_off: bool, verbose: bool) -> None:
        summary = sim.summary
        score = summary.final_score
        winner = summary.winner.value.title()
        prefix = "Walk-off!" if walk_off else "Game over!"
        event = PlayEvent(
            inning=summary.innings_played.number,
            half=("BOTTOM" if walk_off else sim.play_log[-1].half),
            outs_before=0,
            description=f"{prefix} {winner} wins {max(score.away, score.home)}-{min(score.away, score.home)}",
            event_type="game_end",
            score_home=score.home,
            score_away=score.away,
        )
        sim.play_log.append(event)
        logger.info("Seed %d: %s after %d pitches", sim.seed, event.description, sim.pitch_count)
        if verbose:
            print(f"\n{event.description}")


# ---------------------------------------------------------------------------
# Line score
# ---------------------------------------------------------------------------

def line_score(sim: SimulatedGame) -> dict:
    """Per-inning runs and totals for both teams.

    A home half that was never played (home team ahead after the top of the
    ninth) shows as "X".
    """
    away_runs = list(sim.inning_runs["away"])
    home_runs: list[int | str] = list(sim.inning_runs["home"])
    while len(home_runs) < len(away_runs):
        home_runs.append("X")

    away, home = live_score(sim.game)
    return {
        "away": {"inning_runs": away_runs, "total_runs": away},
        "home": {"inning_runs": home_runs, "total_runs": home},
        "winner": sim.summary.winner.value if sim.summary else None,
        "innings": sim.game.inning.number,
        "seed": sim.seed,
    }


def format_line_score(sim: SimulatedGame) -> str:
    """Generate a formatted line score string."""
    box = line_score(sim)
    lines = []

    max_inn = len(box["away"]["inning_runs"])
    header = f"{'Team':<10}"
    for i in range(1, max_inn + 1):
        header += f" {i:>3}"
    header += "  |   R"
    lines.append(header)
    lines.append("-" * len(header))

    for side in ("away", "home"):
        team = box[side]
        row = f"{side.title():<10}"
        for r in team["inning_runs"]:
            row += f" {r:>3}"
        row += f"  | {team['total_runs']:>3}"
        lines.append(row)

    lines.append("")
    lines.append(f"Winner: {box['winner'].title() if box['winner'] else 'none (unfinished)'}")
    lines.append(f"Seed: {box['seed']}")
    return "\n".join(lines)
