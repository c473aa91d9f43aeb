# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Baseball rules engine -- pitch-by-pitch state transitions for a game."""

from rules.lineup import BattingPosition
from rules.baserunners import (
    Base,
    BaseOutcomeKind,
    BaserunnerState,
    HomePlateOutcome,
    PlayBaseOutcome,
    PlayOutcome,
)
from rules.plate_appearance import (
    Count,
    CountAdvance,
    CountResult,
    PitchKind,
    PitchOutcome,
    PlateAppearance,
    PlateAppearanceAdvance,
    PlateAppearanceResult,
)
from rules.inning import (
    HalfInning,
    HalfInningAdvance,
    HalfInningResult,
    HalfInningSummary,
    InningHalf,
)
from rules.game import (
    Game,
    GameAdvance,
    GameResult,
    GameScore,
    GameState,
    GameSummary,
    GameWinner,
    InningNumber,
)
from rules.validation import (
    InvalidPlayOutcome,
    ValidationErrorDetail,
    play_outcome_errors,
    validate_play_outcome,
)
