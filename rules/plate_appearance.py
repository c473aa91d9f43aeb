# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Pitch outcomes, the ball-strike count, and plate appearances.

``PitchOutcome`` is the only input the engine accepts. Balls, strikes and
fouls are bookkeeping on the ``Count``; every other pitch ends the plate
appearance on the spot. Results are tagged values rather than exceptions:
callers check ``kind`` (or ``is_complete()``) and read the payload.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from rules.baserunners import PlayOutcome


# ---------------------------------------------------------------------------
# Pitch outcomes
# ---------------------------------------------------------------------------

class PitchKind(str, Enum):
    BALL = "BALL"
    STRIKE = "STRIKE"
    FOUL = "FOUL"
    IN_PLAY = "IN_PLAY"
    HOME_RUN = "HOME_RUN"
    HIT_BY_PITCH = "HIT_BY_PITCH"


class PitchOutcome(BaseModel):
    """What happened on one pitch. ``play`` is set only for balls in play."""
    model_config = ConfigDict(frozen=True)

    kind: PitchKind
    play: Optional[PlayOutcome] = None

    @model_validator(mode="after")
    def _play_only_when_in_play(self) -> PitchOutcome:
        if (self.kind is PitchKind.IN_PLAY) != (self.play is not None):
            raise ValueError("a PlayOutcome is required for IN_PLAY pitches and only for them")
        return self

    @classmethod
    def ball(cls) -> PitchOutcome:
        return cls(kind=PitchKind.BALL)

    @classmethod
    def strike(cls) -> PitchOutcome:
        return cls(kind=PitchKind.STRIKE)

    @classmethod
    def foul(cls) -> PitchOutcome:
        return cls(kind=PitchKind.FOUL)

    @classmethod
    def in_play(cls, play: PlayOutcome) -> PitchOutcome:
        return cls(kind=PitchKind.IN_PLAY, play=play)

    @classmethod
    def home_run(cls) -> PitchOutcome:
        return cls(kind=PitchKind.HOME_RUN)

    @classmethod
    def hit_by_pitch(cls) -> PitchOutcome:
        return cls(kind=PitchKind.HIT_BY_PITCH)


# ---------------------------------------------------------------------------
# Count
# ---------------------------------------------------------------------------

class Count(BaseModel):
    model_config = ConfigDict(frozen=True)

    balls: int = Field(default=0, ge=0, le=3)
    strikes: int = Field(default=0, ge=0, le=2)

    def __str__(self) -> str:
        return f"{self.balls}-{self.strikes}"

    def advance(self, pitch: PitchOutcome) -> CountAdvance:
        """Apply a ball, strike or foul. Any other pitch leaves the count alone."""
        if pitch.kind is PitchKind.BALL:
            if self.balls == 3:
                return CountAdvance.walk()
            return CountAdvance.in_progress(self.model_copy(update={"balls": self.balls + 1}))

        if pitch.kind is PitchKind.STRIKE:
            if self.strikes == 2:
                return CountAdvance.strikeout()
            return CountAdvance.in_progress(self.model_copy(update={"strikes": self.strikes + 1}))

        if pitch.kind is PitchKind.FOUL:
            # A foul is a strike until there are two; it can't be the third.
            if self.strikes == 2:
                return CountAdvance.in_progress(self)
            return CountAdvance.in_progress(self.model_copy(update={"strikes": self.strikes + 1}))

        return CountAdvance.in_progress(self)


class CountResult(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    STRIKEOUT = "STRIKEOUT"
    WALK = "WALK"


class CountAdvance(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: CountResult
    count: Optional[Count] = None

    @classmethod
    def in_progress(cls, count: Count) -> CountAdvance:
        return cls(kind=CountResult.IN_PROGRESS, count=count)

    @classmethod
    def strikeout(cls) -> CountAdvance:
        return cls(kind=CountResult.STRIKEOUT)

    @classmethod
    def walk(cls) -> CountAdvance:
        return cls(kind=CountResult.WALK)

    def is_complete(self) -> bool:
        return self.kind is not CountResult.IN_PROGRESS


# ---------------------------------------------------------------------------
# Plate appearance
# ---------------------------------------------------------------------------

class PlateAppearance(BaseModel):
    model_config = ConfigDict(frozen=True)

    count: Count = Field(default_factory=Count)

    @classmethod
    def with_count(cls, count: Count) -> PlateAppearance:
        return cls(count=count)

    def advance(self, pitch: PitchOutcome) -> PlateAppearanceAdvance:
        if pitch.kind in (PitchKind.BALL, PitchKind.STRIKE, PitchKind.FOUL):
            result = self.count.advance(pitch)
            if result.kind is CountResult.STRIKEOUT:
                return PlateAppearanceAdvance.terminal(PlateAppearanceResult.STRIKEOUT)
            if result.kind is CountResult.WALK:
                return PlateAppearanceAdvance.terminal(PlateAppearanceResult.WALK)
            return PlateAppearanceAdvance.in_progress(PlateAppearance(count=result.count))

        if pitch.kind is PitchKind.IN_PLAY:
            return PlateAppearanceAdvance.ball_in_play(pitch.play)
        if pitch.kind is PitchKind.HOME_RUN:
            return PlateAppearanceAdvance.terminal(PlateAppearanceResult.HOME_RUN)
        return PlateAppearanceAdvance.terminal(PlateAppearanceResult.HIT_BY_PITCH)


class PlateAppearanceResult(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    STRIKEOUT = "STRIKEOUT"
    WALK = "WALK"
    HIT_BY_PITCH = "HIT_BY_PITCH"
    HOME_RUN = "HOME_RUN"
    IN_PLAY = "IN_PLAY"


class PlateAppearanceAdvance(BaseModel):
    """Either the plate appearance still going, or how it ended.

    Only IN_PLAY results carry a payload (the ``PlayOutcome``); the
    half-inning works out what the other terminal results mean for the
    bases.
    """
    model_config = ConfigDict(frozen=True)

    kind: PlateAppearanceResult
    plate_appearance: Optional[PlateAppearance] = None
    play: Optional[PlayOutcome] = None

    @classmethod
    def in_progress(cls, plate_appearance: PlateAppearance) -> PlateAppearanceAdvance:
        return cls(kind=PlateAppearanceResult.IN_PROGRESS, plate_appearance=plate_appearance)

    @classmethod
    def ball_in_play(cls, play: PlayOutcome) -> PlateAppearanceAdvance:
        return cls(kind=PlateAppearanceResult.IN_PLAY, play=play)

    @classmethod
    def terminal(cls, kind: PlateAppearanceResult) -> PlateAppearanceAdvance:
        return cls(kind=kind)

    def is_complete(self) -> bool:
        return self.kind is not PlateAppearanceResult.IN_PROGRESS

    def advance(self, pitch: PitchOutcome) -> PlateAppearanceAdvance:
        """Pitch again. Once the appearance is over this returns ``self``."""
        if self.is_complete():
            return self
        return self.plate_appearance.advance(pitch)
