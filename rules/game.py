# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Game state machine.

Threads pitches through the active half-inning, folds finished halves into
the score, and decides when the game is over:

- Innings 1-8 are always played in full.
- After the top of the ninth the game ends if the home team leads.
- After the bottom of the ninth, or of any extra inning, it ends unless tied.
- In the bottom of the ninth or later the game ends the moment the home
  team goes ahead (walk-off), without waiting for the third out.

Each half-inning starts with the batting team's fixed leadoff slot; the
order does not carry over from the team's previous half.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from rules.inning import HalfInning, InningHalf
from rules.lineup import BattingPosition
from rules.plate_appearance import PitchOutcome

logger = logging.getLogger(__name__)

REGULATION_INNINGS = 9


# ---------------------------------------------------------------------------
# Inning number
# ---------------------------------------------------------------------------

class InningNumber(BaseModel):
    """1-9 are regulation innings; 10 and up are extra innings."""
    model_config = ConfigDict(frozen=True)

    number: int = Field(default=1, ge=1)

    def next(self) -> InningNumber:
        return InningNumber(number=self.number + 1)

    def as_number(self) -> int:
        return self.number

    def is_extra(self) -> bool:
        return self.number > REGULATION_INNINGS

    def ordinal(self) -> str:
        """Return ordinal string for the inning (1st, 2nd, 3rd, 11th, etc.)."""
        n = self.number
        if 11 <= n % 100 <= 13:
            suffix = "th"
        else:
            suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
        return f"{n}{suffix}"


# ---------------------------------------------------------------------------
# Score and result
# ---------------------------------------------------------------------------

class GameWinner(str, Enum):
    AWAY = "AWAY"
    HOME = "HOME"


class GameScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    away: int = Field(default=0, ge=0)
    home: int = Field(default=0, ge=0)

    def add_away_runs(self, runs: int) -> GameScore:
        return self.model_copy(update={"away": self.away + runs})

    def add_home_runs(self, runs: int) -> GameScore:
        return self.model_copy(update={"home": self.home + runs})

    def is_tied(self) -> bool:
        return self.away == self.home

    def winner(self) -> Optional[GameWinner]:
        if self.away > self.home:
            return GameWinner.AWAY
        if self.home > self.away:
            return GameWinner.HOME
        return None

    def __str__(self) -> str:
        return f"Away {self.away} - Home {self.home}"


class GameSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    final_score: GameScore
    innings_played: InningNumber
    winner: GameWinner


# ---------------------------------------------------------------------------
# Game
# ---------------------------------------------------------------------------

class GameState(str, Enum):
    TOP = "TOP"
    BOTTOM = "BOTTOM"
    TOP_END = "TOP_END"
    BOTTOM_END = "BOTTOM_END"
    COMPLETE = "COMPLETE"


class Game(BaseModel):
    """Authoritative game state.

    ``half_inning`` is the half being played. It is None only between
    halves (TOP_END/BOTTOM_END) and after the final out.
    """
    model_config = ConfigDict(frozen=True)

    inning: InningNumber = Field(default_factory=InningNumber)
    state: GameState = GameState.TOP
    score: GameScore = Field(default_factory=GameScore)
    half_inning: Optional[HalfInning] = Field(
        default_factory=lambda: HalfInning.new(InningHalf.TOP)
    )
    away_batting_order: BattingPosition = BattingPosition.FIRST
    home_batting_order: BattingPosition = BattingPosition.FIRST

    @classmethod
    def new(cls) -> Game:
        return cls.with_batting_orders(BattingPosition.FIRST, BattingPosition.FIRST)

    @classmethod
    def with_batting_orders(cls, away_order: BattingPosition,
                            home_order: BattingPosition) -> Game:
        return cls(
            half_inning=HalfInning.new(InningHalf.TOP, away_order),
            away_batting_order=away_order,
            home_batting_order=home_order,
        )

    # -------------------------------------------------------------------
    # Read accessors
    # -------------------------------------------------------------------

    def is_complete(self) -> bool:
        return self.state is GameState.COMPLETE

    def current_half(self) -> Optional[InningHalf]:
        if self.state is GameState.TOP:
            return InningHalf.TOP
        if self.state is GameState.BOTTOM:
            return InningHalf.BOTTOM
        return None

    def batting_team(self) -> Optional[GameWinner]:
        """The side at bat, or that just batted between halves; None once over."""
        if self.state in (GameState.TOP, GameState.TOP_END):
            return GameWinner.AWAY
        if self.state in (GameState.BOTTOM, GameState.BOTTOM_END):
            return GameWinner.HOME
        return None

    def inning_description(self) -> str:
        if self.state is GameState.COMPLETE:
            return "Game Complete"
        if self.state in (GameState.TOP, GameState.TOP_END):
            half_text = "Top"
        else:
            half_text = "Bottom"
        return f"{half_text} of the {self.inning.ordinal()}"

    def summary(self) -> Optional[GameSummary]:
        """The final result, or None while the game is still being played.

        A hand-built COMPLETE game with a tied score has no winner and so
        no summary either.
        """
        if not self.is_complete() or self.score.is_tied():
            return None
        return GameSummary(
            final_score=self.score,
            innings_played=self.inning,
            winner=self.score.winner(),
        )

    # -------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------

    def advance(self, pitch: PitchOutcome) -> GameAdvance:
        if self.is_complete():
            return GameAdvance.complete(self)
        if self.half_inning is None:
            # Between halves: put the next half on the field first.
            return self.start_next_half().advance(pitch)

        result = self.half_inning.advance(pitch)

        if not result.is_complete():
            game = self.model_copy(update={"half_inning": result.half_inning})
            pending = result.half_inning.runs_scored
            if game._is_walk_off(pending):
                logger.debug("Walk-off in the bottom of the %s", self.inning.ordinal())
                return game._finish(game.score.add_home_runs(pending))
            return GameAdvance.in_progress(game)

        game = self._complete_half(result.summary.runs_scored)
        if game._should_end():
            return game._finish(game.score)
        return GameAdvance.in_progress(game.start_next_half())

    def _is_walk_off(self, pending_runs: int) -> bool:
        return (
            self.state is GameState.BOTTOM
            and self.inning.number >= REGULATION_INNINGS
            and self.score.home + pending_runs > self.score.away
        )

    def _complete_half(self, runs_scored: int) -> Game:
        if self.state is GameState.TOP:
            return self.model_copy(update={
                "score": self.score.add_away_runs(runs_scored),
                "state": GameState.TOP_END,
                "half_inning": None,
            })
        return self.model_copy(update={
            "score": self.score.add_home_runs(runs_scored),
            "state": GameState.BOTTOM_END,
            "half_inning": None,
        })

    def _should_end(self) -> bool:
        """Whether the half that just finished is the last one."""
        if self.inning.number < REGULATION_INNINGS:
            return False
        if self.state is GameState.TOP_END:
            # The home team still bats unless it is already ahead in the ninth.
            return not self.inning.is_extra() and self.score.home > self.score.away
        if self.state is GameState.BOTTOM_END:
            return not self.score.is_tied()
        return False

    def start_next_half(self) -> Game:
        """Put the next half on the field.

        A game already in a half, or already over, is returned unchanged.
        """
        if self.is_complete() or self.half_inning is not None:
            return self
        if self.state in (GameState.TOP, GameState.BOTTOM):
            half = self.current_half()
            order = self.away_batting_order if half is InningHalf.TOP else self.home_batting_order
            return self.model_copy(update={"half_inning": HalfInning.new(half, order)})
        if self.state is GameState.TOP_END:
            logger.debug("Bottom of the %s, %s", self.inning.ordinal(), self.score)
            return self.model_copy(update={
                "state": GameState.BOTTOM,
                "half_inning": HalfInning.new(InningHalf.BOTTOM, self.home_batting_order),
            })
        inning = self.inning.next()
        logger.debug("Top of the %s, %s", inning.ordinal(), self.score)
        return self.model_copy(update={
            "inning": inning,
            "state": GameState.TOP,
            "half_inning": HalfInning.new(InningHalf.TOP, self.away_batting_order),
        })

    def _finish(self, score: GameScore) -> GameAdvance:
        final = self.model_copy(update={
            "score": score,
            "state": GameState.COMPLETE,
            "half_inning": None,
        })
        logger.debug("Game over after %s inning(s): %s", self.inning.number, score)
        return GameAdvance.complete(final)


# ---------------------------------------------------------------------------
# Advance result
# ---------------------------------------------------------------------------

class GameResult(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETE = "COMPLETE"


class GameAdvance(BaseModel):
    """The game after a pitch, plus its summary once it is over.

    ``game`` is always set so a driver can keep displaying the final state.
    """
    model_config = ConfigDict(frozen=True)

    kind: GameResult
    game: Game
    summary: Optional[GameSummary] = None

    @classmethod
    def in_progress(cls, game: Game) -> GameAdvance:
        return cls(kind=GameResult.IN_PROGRESS, game=game)

    @classmethod
    def complete(cls, game: Game) -> GameAdvance:
        return cls(kind=GameResult.COMPLETE, game=game, summary=game.summary())

    def is_complete(self) -> bool:
        return self.kind is GameResult.COMPLETE

    def advance(self, pitch: PitchOutcome) -> GameAdvance:
        if self.is_complete():
            return self
        return self.game.advance(pitch)
