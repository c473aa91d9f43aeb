# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Batting order slots."""

from __future__ import annotations

from enum import IntEnum

LINEUP_SIZE = 9


class BattingPosition(IntEnum):
    """A slot in the nine-player batting order (1-9)."""
    FIRST = 1
    SECOND = 2
    THIRD = 3
    FOURTH = 4
    FIFTH = 5
    SIXTH = 6
    SEVENTH = 7
    EIGHTH = 8
    NINTH = 9

    def next(self) -> BattingPosition:
        """The slot due up after this one; the ninth hitter wraps to the leadoff."""
        return BattingPosition(self.value % LINEUP_SIZE + 1)

    def as_number(self) -> int:
        return int(self.value)
