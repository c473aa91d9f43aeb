# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Base occupancy and ball-in-play outcomes.

A ``BaserunnerState`` records which batting-order slot occupies each base.
A ``PlayOutcome`` describes what happened at every base on one batted ball:
each of first, second and third ends up empty, with a runner on it, or as
the site of a force or tag out, and home plate records either the number
of runs that crossed it or an out at the plate.

Named constructors build the canonical outcomes (singles, doubles, triples,
home runs, groundouts, errors) from the runners on base before the play,
using a fixed advancement policy: every runner moves up exactly as many
bases as the batter, with no runner holding or taking an extra base.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from rules.lineup import BattingPosition


# ---------------------------------------------------------------------------
# Bases
# ---------------------------------------------------------------------------

class Base(str, Enum):
    FIRST = "FIRST"
    SECOND = "SECOND"
    THIRD = "THIRD"
    HOME = "HOME"

    def next(self) -> Base:
        """The following base; home is as far as a runner can go."""
        if self is Base.HOME:
            return Base.HOME
        return _BASE_ORDER[_BASE_ORDER.index(self) + 1]

    def advance_by(self, bases: int) -> Base:
        current = self
        for _ in range(bases):
            if current is Base.HOME:
                break
            current = current.next()
        return current


_BASE_ORDER = (Base.FIRST, Base.SECOND, Base.THIRD, Base.HOME)


# ---------------------------------------------------------------------------
# Baserunner state
# ---------------------------------------------------------------------------

class BaserunnerState(BaseModel):
    """Who is standing on first, second and third."""
    model_config = ConfigDict(frozen=True)

    first: Optional[BattingPosition] = None
    second: Optional[BattingPosition] = None
    third: Optional[BattingPosition] = None

    @classmethod
    def empty(cls) -> BaserunnerState:
        return cls()

    def is_empty(self) -> bool:
        return self.first is None and self.second is None and self.third is None

    def runner_count(self) -> int:
        return sum(r is not None for r in (self.first, self.second, self.third))

    def runner_on(self, base: Base) -> Optional[BattingPosition]:
        if base is Base.FIRST:
            return self.first
        if base is Base.SECOND:
            return self.second
        if base is Base.THIRD:
            return self.third
        return None  # nobody stays on home

    def has_runner_on(self, base: Base) -> bool:
        return self.runner_on(base) is not None

    def with_first(self, runner: Optional[BattingPosition]) -> BaserunnerState:
        return self.model_copy(update={"first": runner})

    def with_second(self, runner: Optional[BattingPosition]) -> BaserunnerState:
        return self.model_copy(update={"second": runner})

    def with_third(self, runner: Optional[BattingPosition]) -> BaserunnerState:
        return self.model_copy(update={"third": runner})

    def bases_string(self) -> str:
        """Return base state string like '110' for runners on 1st and 2nd."""
        return "".join(
            "1" if r is not None else "0"
            for r in (self.first, self.second, self.third)
        )

    def describe(self) -> str:
        occupied = [
            label for label, r in (("1st", self.first), ("2nd", self.second), ("3rd", self.third))
            if r is not None
        ]
        if not occupied:
            return "bases empty"
        if len(occupied) == 3:
            return "bases loaded"
        return "runners on " + ", ".join(occupied)

    def forced_advance(
        self,
    ) -> tuple[Optional[BattingPosition], Optional[BattingPosition], Optional[BattingPosition]]:
        """Move up every runner forced off a base by someone taking first.

        Returns the new (second, third, scoring runner). A runner only moves
        when every base behind him is occupied; everyone else holds.
        """
        second, third, scored = self.second, self.third, None
        if self.first is not None:
            second = self.first
            if self.second is not None:
                third = self.second
                if self.third is not None:
                    scored = self.third
        return second, third, scored

    def walk(self, batter: BattingPosition) -> tuple[BaserunnerState, int]:
        """Award the batter first base and push forced runners along.

        Returns the new state and the runs scored (1 only with the bases
        loaded).
        """
        second, third, scored = self.forced_advance()
        runs = 1 if scored is not None else 0
        return BaserunnerState(first=batter, second=second, third=third), runs

    def home_run(self) -> int:
        """Runs scored on a home run: every runner plus the batter."""
        return 1 + self.runner_count()


# ---------------------------------------------------------------------------
# Per-base play outcomes
# ---------------------------------------------------------------------------

class BaseOutcomeKind(str, Enum):
    NONE = "NONE"
    FORCE_OUT = "FORCE_OUT"
    TAG_OUT = "TAG_OUT"
    RUNNER = "RUNNER"


class PlayBaseOutcome(BaseModel):
    """What a single base looks like once the play is over."""
    model_config = ConfigDict(frozen=True)

    kind: BaseOutcomeKind = BaseOutcomeKind.NONE
    runner: Optional[BattingPosition] = None

    @model_validator(mode="after")
    def _runner_matches_kind(self) -> PlayBaseOutcome:
        if (self.kind is BaseOutcomeKind.RUNNER) != (self.runner is not None):
            raise ValueError("a runner is required for RUNNER outcomes and only for them")
        return self

    @classmethod
    def empty(cls) -> PlayBaseOutcome:
        return cls()

    @classmethod
    def force_out(cls) -> PlayBaseOutcome:
        return cls(kind=BaseOutcomeKind.FORCE_OUT)

    @classmethod
    def tag_out(cls) -> PlayBaseOutcome:
        return cls(kind=BaseOutcomeKind.TAG_OUT)

    @classmethod
    def occupied(cls, runner: BattingPosition) -> PlayBaseOutcome:
        return cls(kind=BaseOutcomeKind.RUNNER, runner=runner)

    @classmethod
    def occupied_or_empty(cls, runner: Optional[BattingPosition]) -> PlayBaseOutcome:
        return cls.empty() if runner is None else cls.occupied(runner)

    def outs(self) -> int:
        return 1 if self.kind in (BaseOutcomeKind.FORCE_OUT, BaseOutcomeKind.TAG_OUT) else 0

    def is_out(self) -> bool:
        return self.outs() > 0


class HomePlateOutcome(str, Enum):
    NONE = "NONE"
    ONE = "ONE"
    TWO = "TWO"
    THREE = "THREE"
    FOUR = "FOUR"
    OUT = "OUT"

    @classmethod
    def from_runs(cls, runs: int) -> HomePlateOutcome:
        for outcome, value in _RUNS_AT_HOME.items():
            if value == runs and outcome is not cls.OUT:
                return outcome
        raise ValueError(f"between 0 and 4 runs can score on one play, got {runs}")

    def runs_scored(self) -> int:
        return _RUNS_AT_HOME[self]

    def outs(self) -> int:
        return 1 if self is HomePlateOutcome.OUT else 0

    def is_out(self) -> bool:
        return self.outs() > 0


_RUNS_AT_HOME = {
    HomePlateOutcome.NONE: 0,
    HomePlateOutcome.ONE: 1,
    HomePlateOutcome.TWO: 2,
    HomePlateOutcome.THREE: 3,
    HomePlateOutcome.FOUR: 4,
    HomePlateOutcome.OUT: 0,
}


# ---------------------------------------------------------------------------
# Whole-play outcomes
# ---------------------------------------------------------------------------

class PlayOutcome(BaseModel):
    """The resolved consequence of one ball in play.

    The general constructor accepts any combination of per-base outcomes;
    internal consistency is the caller's responsibility (see
    ``rules.validation`` for opt-in checks).
    """
    model_config = ConfigDict(frozen=True)

    first: PlayBaseOutcome = Field(default_factory=PlayBaseOutcome.empty)
    second: PlayBaseOutcome = Field(default_factory=PlayBaseOutcome.empty)
    third: PlayBaseOutcome = Field(default_factory=PlayBaseOutcome.empty)
    home: HomePlateOutcome = HomePlateOutcome.NONE

    # -------------------------------------------------------------------
    # Named constructors
    # -------------------------------------------------------------------

    @classmethod
    def groundout(cls, baserunners: BaserunnerState | None = None) -> PlayOutcome:
        """Batter thrown out at first.

        Runners forced by the batter moving toward first advance one base
        (a runner forced off third scores); unforced runners hold.
        """
        if baserunners is None:
            baserunners = BaserunnerState.empty()
        second, third, scored = baserunners.forced_advance()
        return cls(
            first=PlayBaseOutcome.force_out(),
            second=PlayBaseOutcome.occupied_or_empty(second),
            third=PlayBaseOutcome.occupied_or_empty(third),
            home=cls._scored(scored),
        )

    @classmethod
    def single(cls, baserunners: BaserunnerState, batter: BattingPosition) -> PlayOutcome:
        return cls(
            first=PlayBaseOutcome.occupied(batter),
            second=PlayBaseOutcome.occupied_or_empty(baserunners.first),
            third=PlayBaseOutcome.occupied_or_empty(baserunners.second),
            home=cls._scored(baserunners.third),
        )

    @classmethod
    def double(cls, baserunners: BaserunnerState, batter: BattingPosition) -> PlayOutcome:
        return cls(
            second=PlayBaseOutcome.occupied(batter),
            third=PlayBaseOutcome.occupied_or_empty(baserunners.first),
            home=cls._scored(baserunners.second, baserunners.third),
        )

    @classmethod
    def triple(cls, baserunners: BaserunnerState, batter: BattingPosition) -> PlayOutcome:
        return cls(
            third=PlayBaseOutcome.occupied(batter),
            home=cls._scored(baserunners.first, baserunners.second, baserunners.third),
        )

    @classmethod
    def homerun(cls, baserunners: BaserunnerState, batter: BattingPosition) -> PlayOutcome:
        return cls(
            home=cls._scored(baserunners.first, baserunners.second, baserunners.third, batter),
        )

    @classmethod
    def error(cls, baserunners: BaserunnerState, batter: BattingPosition) -> PlayOutcome:
        """Batter reaches on an error; every runner moves up one base."""
        return cls.single(baserunners, batter)

    @staticmethod
    def _scored(*runners: Optional[BattingPosition]) -> HomePlateOutcome:
        return HomePlateOutcome.from_runs(sum(r is not None for r in runners))

    # -------------------------------------------------------------------
    # Projections
    # -------------------------------------------------------------------

    def outs(self) -> int:
        return self.first.outs() + self.second.outs() + self.third.outs() + self.home.outs()

    def runs_scored(self) -> int:
        return self.home.runs_scored()

    def baserunners(self) -> BaserunnerState:
        """Occupancy after the play; outs and empty bases are both vacant."""
        return BaserunnerState(
            first=self.first.runner,
            second=self.second.runner,
            third=self.third.runner,
        )

    def with_first(self, first: PlayBaseOutcome) -> PlayOutcome:
        return self.model_copy(update={"first": first})

    def with_second(self, second: PlayBaseOutcome) -> PlayOutcome:
        return self.model_copy(update={"second": second})

    def with_third(self, third: PlayBaseOutcome) -> PlayOutcome:
        return self.model_copy(update={"third": third})

    def with_home(self, home: HomePlateOutcome) -> PlayOutcome:
        return self.model_copy(update={"home": home})
