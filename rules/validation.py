# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Consistency checks for hand-built play outcomes.

The engine accepts any ``PlayOutcome`` it is given, including combinations
that could not happen on a real field. Drivers that build outcomes by hand
(for example from a fielding layer) can run them through
``validate_play_outcome`` first.

Checks performed:
- A runner appears on at most one base
- No more than three outs are recorded on one play
- With the pre-play baserunners known:
  - every runner left on base was the batter or already on base
  - no runner ends up on a base behind the one he started on
  - outs, runners left on base and runs never account for more players
    than the batter plus the runners who started the play

Errors include which part of the play failed and what was expected.
"""

from __future__ import annotations

from typing import Any, Optional

from rules.baserunners import Base, BaserunnerState, PlayOutcome
from rules.inning import OUTS_PER_HALF_INNING
from rules.lineup import BattingPosition


class ValidationErrorDetail:
    """Container for a structured validation error."""

    def __init__(self, parameter: str, expected: str, got: Any):
        self.parameter = parameter
        self.expected = expected
        self.got = got

    def to_dict(self) -> dict:
        return {
            "parameter": self.parameter,
            "expected": self.expected,
            "got": repr(self.got),
        }

    def __str__(self) -> str:
        return f"Parameter '{self.parameter}': expected {self.expected}, got {self.got!r}"


class InvalidPlayOutcome(ValueError):
    """Raised by ``validate_play_outcome`` when a play cannot have happened."""

    def __init__(self, errors: list[ValidationErrorDetail]):
        self.errors = errors
        super().__init__("; ".join(str(e) for e in errors))


_BASES = (Base.FIRST, Base.SECOND, Base.THIRD)


def _placed_runners(outcome: PlayOutcome) -> list[tuple[Base, BattingPosition]]:
    placed = []
    for base, base_outcome in zip(_BASES, (outcome.first, outcome.second, outcome.third)):
        if base_outcome.runner is not None:
            placed.append((base, base_outcome.runner))
    return placed


def play_outcome_errors(
    outcome: PlayOutcome,
    baserunners: Optional[BaserunnerState] = None,
    batter: Optional[BattingPosition] = None,
) -> list[ValidationErrorDetail]:
    """Return every consistency problem found in ``outcome`` (empty if none)."""
    errors: list[ValidationErrorDetail] = []
    placed = _placed_runners(outcome)

    seen: dict[BattingPosition, Base] = {}
    for base, runner in placed:
        if runner in seen:
            errors.append(ValidationErrorDetail(
                f"{base.value.lower()}.runner",
                f"batter #{runner.as_number()} on one base only (already on {seen[runner].value.lower()})",
                runner.as_number(),
            ))
        else:
            seen[runner] = base

    if outcome.outs() > OUTS_PER_HALF_INNING:
        errors.append(ValidationErrorDetail(
            "outs", f"at most {OUTS_PER_HALF_INNING} outs on one play", outcome.outs(),
        ))

    if baserunners is None:
        return errors

    starting_base = {
        baserunners.runner_on(base): base
        for base in _BASES
        if baserunners.has_runner_on(base)
    }
    for base, runner in placed:
        if runner in starting_base:
            if _BASES.index(base) < _BASES.index(starting_base[runner]):
                errors.append(ValidationErrorDetail(
                    f"{base.value.lower()}.runner",
                    f"batter #{runner.as_number()} at or beyond {starting_base[runner].value.lower()}",
                    base.value.lower(),
                ))
        elif batter is not None and runner != batter:
            errors.append(ValidationErrorDetail(
                f"{base.value.lower()}.runner",
                "the batter or a runner who was on base",
                runner.as_number(),
            ))

    participants = baserunners.runner_count() + 1
    accounted = outcome.outs() + len(placed) + outcome.runs_scored()
    if accounted > participants:
        errors.append(ValidationErrorDetail(
            "play",
            f"outs + runners + runs to total at most {participants}",
            accounted,
        ))

    return errors


def validate_play_outcome(
    outcome: PlayOutcome,
    baserunners: Optional[BaserunnerState] = None,
    batter: Optional[BattingPosition] = None,
) -> PlayOutcome:
    """Return ``outcome`` unchanged, or raise ``InvalidPlayOutcome``."""
    errors = play_outcome_errors(outcome, baserunners, batter)
    if errors:
        raise InvalidPlayOutcome(errors)
    return outcome
