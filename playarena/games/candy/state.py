"""
Candy State - Gems on a fixed 8x8 grid.

At rest, between player actions, the grid holds no run of three or more
identical gems in a row or column.
"""

from __future__ import annotations
from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

ROWS = 8
COLS = 8
STARTING_MOVES = 20
TARGET_SCORE = 2000


class GemType(str, Enum):
    """Gem colours."""
    RED = "RED"
    BLUE = "BLUE"
    GREEN = "GREEN"
    YELLOW = "YELLOW"
    PURPLE = "PURPLE"
    ORANGE = "ORANGE"


class SpecialType(str, Enum):
    """Special gem markers."""
    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"
    BOMB = "BOMB"


@dataclass
class CandyGem:
    """
    A gem at (row, col).

    type is None for an empty or special-only cell; None never matches.
    """
    id: str
    type: GemType | None
    row: int
    col: int
    special: SpecialType | None = None
    is_new: bool = False
    is_matched: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "type": self.type.value if self.type else None,
            "row": self.row,
            "col": self.col,
        }
        if self.special:
            data["special"] = self.special.value
        if self.is_new:
            data["isNew"] = True
        if self.is_matched:
            data["isMatched"] = True
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CandyGem:
        gem_type = data.get("type")
        special = data.get("special")
        return cls(
            id=data["id"],
            type=GemType(gem_type) if gem_type else None,
            row=data["row"],
            col=data["col"],
            special=SpecialType(special) if special else None,
            is_new=data.get("isNew", False),
            is_matched=data.get("isMatched", False),
        )


@dataclass
class CandyState:
    """
    Complete Candy game.

    combo_multiplier resets to 1 on every accepted swap and grows by one
    per cascade round.
    """
    grid: list[list[CandyGem]] = field(default_factory=list)
    score: int = 0
    moves_left: int = STARTING_MOVES
    target_score: int = TARGET_SCORE
    is_complete: bool = False
    combo_multiplier: int = 1

    @property
    def is_finished(self) -> bool:
        return self.is_complete

    def to_dict(self) -> dict[str, Any]:
        return {
            "grid": [[gem.to_dict() for gem in row] for row in self.grid],
            "score": self.score,
            "movesLeft": self.moves_left,
            "targetScore": self.target_score,
            "isComplete": self.is_complete,
            "comboMultiplier": self.combo_multiplier,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CandyState:
        grid = [[CandyGem.from_dict(g) for g in row] for row in data["grid"]]
        if len(grid) != ROWS or any(len(row) != COLS for row in grid):
            raise ValueError(f"Candy grid must be {ROWS}x{COLS}")
        return cls(
            grid=grid,
            score=data.get("score", 0),
            moves_left=data.get("movesLeft", STARTING_MOVES),
            target_score=data.get("targetScore", TARGET_SCORE),
            is_complete=data.get("isComplete", False),
            combo_multiplier=data.get("comboMultiplier", 1),
        )

    def clone(self) -> CandyState:
        """Deep copy the state."""
        return deepcopy(self)
