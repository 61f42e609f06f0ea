"""
Sudoku State - Board, solution and the challenge-mode clock.

Times are seconds since the epoch.
"""

from __future__ import annotations
from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

SIZE = 9
BOX = 3
MAX_MISTAKES = 3


class SudokuDifficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def cells_removed(self) -> int:
        """How many numbers are cleared from the solved grid."""
        return {"easy": 30, "medium": 45, "hard": 55}[self.value]

    @property
    def time_limit(self) -> int:
        """Challenge-mode clock, in seconds."""
        return {"easy": 5 * 60, "medium": 10 * 60, "hard": 15 * 60}[self.value]

    @classmethod
    def parse(cls, value: Any, default: SudokuDifficulty | None = None) -> SudokuDifficulty | None:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return default


@dataclass
class SudokuCell:
    """
    One cell of the board.

    Fixed cells are the puzzle's clues and never change.
    """
    row: int
    col: int
    value: int | None = None
    is_fixed: bool = False
    is_error: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "row": self.row,
            "col": self.col,
            "value": self.value,
            "isFixed": self.is_fixed,
            "isError": self.is_error,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SudokuCell:
        return cls(
            row=data["row"],
            col=data["col"],
            value=data.get("value"),
            is_fixed=data.get("isFixed", False),
            is_error=data.get("isError", False),
        )


def empty_board() -> list[list[SudokuCell]]:
    return [[SudokuCell(row=r, col=c) for c in range(SIZE)] for r in range(SIZE)]


@dataclass
class SudokuState:
    """
    Complete Sudoku game.

    is_complete without is_won is a loss: three mistakes or the clock
    running out, both in challenge mode only.
    """
    board: list[list[SudokuCell]] = field(default_factory=empty_board)
    solution: list[list[int]] = field(default_factory=list)
    difficulty: SudokuDifficulty = SudokuDifficulty.EASY
    mistakes: int = 0
    is_complete: bool = False
    is_won: bool = False
    start_time: float = 0.0
    end_time: float | None = None
    challenge_mode: bool = False
    time_limit: int | None = None

    @property
    def is_finished(self) -> bool:
        return self.is_complete

    def values(self) -> list[list[int | None]]:
        return [[cell.value for cell in row] for row in self.board]

    def filled_count(self) -> int:
        return sum(1 for row in self.board for cell in row if cell.value is not None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "board": [[cell.to_dict() for cell in row] for row in self.board],
            "solution": [list(row) for row in self.solution],
            "difficulty": self.difficulty.value,
            "mistakes": self.mistakes,
            "isComplete": self.is_complete,
            "isWon": self.is_won,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "challengeMode": self.challenge_mode,
            "timeLimit": self.time_limit,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SudokuState:
        board = [[SudokuCell.from_dict(c) for c in row] for row in data["board"]]
        solution = [list(row) for row in data.get("solution", [])]
        for name, grid in (("board", board), ("solution", solution)):
            if len(grid) != SIZE or any(len(row) != SIZE for row in grid):
                raise ValueError(f"Sudoku {name} must be {SIZE}x{SIZE}")
        return cls(
            board=board,
            solution=solution,
            difficulty=SudokuDifficulty.parse(data.get("difficulty"), SudokuDifficulty.EASY),
            mistakes=data.get("mistakes", 0),
            is_complete=data.get("isComplete", False),
            is_won=data.get("isWon", False),
            start_time=data.get("startTime", 0.0),
            end_time=data.get("endTime"),
            challenge_mode=data.get("challengeMode", False),
            time_limit=data.get("timeLimit"),
        )

    def clone(self) -> SudokuState:
        """Deep copy the state."""
        return deepcopy(self)
