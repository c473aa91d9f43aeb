# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Half-inning state machine.

A half-inning owns the outs, the batter at the plate, the runners on base
and the runs scored so far. Each pitch either keeps it in progress or, once
the third out is recorded, replaces it with a ``HalfInningSummary``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from rules.baserunners import BaserunnerState
from rules.lineup import BattingPosition
from rules.plate_appearance import (
    PitchOutcome,
    PlateAppearance,
    PlateAppearanceResult,
)

logger = logging.getLogger(__name__)

OUTS_PER_HALF_INNING = 3


class InningHalf(str, Enum):
    TOP = "TOP"
    BOTTOM = "BOTTOM"


class HalfInningSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    half: InningHalf
    runs_scored: int = Field(default=0, ge=0)


class HalfInning(BaseModel):
    model_config = ConfigDict(frozen=True)

    half: InningHalf
    outs: int = Field(default=0, ge=0, le=2)
    current_batter: BattingPosition = BattingPosition.FIRST
    plate_appearance: PlateAppearance = Field(default_factory=PlateAppearance)
    runs_scored: int = Field(default=0, ge=0)
    baserunners: BaserunnerState = Field(default_factory=BaserunnerState)

    @classmethod
    def new(cls, half: InningHalf,
            starting_batter: BattingPosition = BattingPosition.FIRST) -> HalfInning:
        return cls(half=half, current_batter=starting_batter)

    def advance(self, pitch: PitchOutcome) -> HalfInningAdvance:
        """Apply one pitch to the batter at the plate."""
        pa = self.plate_appearance.advance(pitch)

        if pa.kind is PlateAppearanceResult.IN_PROGRESS:
            return HalfInningAdvance.in_progress(
                self.model_copy(update={"plate_appearance": pa.plate_appearance})
            )

        if pa.kind is PlateAppearanceResult.STRIKEOUT:
            return self._register_outs(1)

        if pa.kind is PlateAppearanceResult.IN_PLAY:
            play = pa.play
            after_play = self.model_copy(update={
                "runs_scored": self.runs_scored + play.runs_scored(),
                "baserunners": play.baserunners(),
            })
            return after_play._register_outs(play.outs())

        if pa.kind in (PlateAppearanceResult.WALK, PlateAppearanceResult.HIT_BY_PITCH):
            baserunners, runs = self.baserunners.walk(self.current_batter)
            return self.model_copy(update={
                "runs_scored": self.runs_scored + runs,
                "baserunners": baserunners,
            })._register_outs(0)

        # Home run: everybody on base comes around, then the batter.
        return self.model_copy(update={
            "runs_scored": self.runs_scored + self.baserunners.home_run(),
            "baserunners": BaserunnerState.empty(),
        })._register_outs(0)

    def _register_outs(self, outs: int) -> HalfInningAdvance:
        """Record the outs from a finished plate appearance.

        The half ends as soon as the third out is reached; outs past the
        third on the same play are dropped. Otherwise the next batter comes
        up with a fresh count.
        """
        total = self.outs + outs
        if total >= OUTS_PER_HALF_INNING:
            logger.debug(
                "%s half complete: %d run(s) on %d out(s) recorded",
                self.half.value, self.runs_scored, total,
            )
            return HalfInningAdvance.complete(
                HalfInningSummary(half=self.half, runs_scored=self.runs_scored)
            )
        return HalfInningAdvance.in_progress(self.model_copy(update={
            "outs": total,
            "current_batter": self.current_batter.next(),
            "plate_appearance": PlateAppearance(),
        }))


class HalfInningResult(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETE = "COMPLETE"


class HalfInningAdvance(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: HalfInningResult
    half_inning: Optional[HalfInning] = None
    summary: Optional[HalfInningSummary] = None

    @classmethod
    def in_progress(cls, half_inning: HalfInning) -> HalfInningAdvance:
        return cls(kind=HalfInningResult.IN_PROGRESS, half_inning=half_inning)

    @classmethod
    def complete(cls, summary: HalfInningSummary) -> HalfInningAdvance:
        return cls(kind=HalfInningResult.COMPLETE, summary=summary)

    def is_complete(self) -> bool:
        return self.kind is HalfInningResult.COMPLETE

    def advance(self, pitch: PitchOutcome) -> HalfInningAdvance:
        if self.is_complete():
            return self
        return self.half_inning.advance(pitch)
