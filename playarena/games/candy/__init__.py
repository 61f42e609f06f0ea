"""
Candy - Match-3 on an 8x8 grid with cascades and combo scoring.
"""

from .state import (
    CandyGem,
    CandyState,
    GemType,
    SpecialType,
    ROWS,
    COLS,
    STARTING_MOVES,
    TARGET_SCORE,
)
from .board import has_matches, find_matches, collapse
from .engine import CandyEngine, MAX_CASCADES

__all__ = [
    "CandyGem",
    "CandyState",
    "GemType",
    "SpecialType",
    "ROWS",
    "COLS",
    "STARTING_MOVES",
    "TARGET_SCORE",
    "has_matches",
    "find_matches",
    "collapse",
    "CandyEngine",
    "MAX_CASCADES",
]
