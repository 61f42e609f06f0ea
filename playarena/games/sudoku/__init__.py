"""
Sudoku - Generated puzzles with classic and challenge rules.
"""

from .state import SudokuCell, SudokuDifficulty, SudokuState, MAX_MISTAKES
from .grid import (
    is_valid_placement,
    fill_grid,
    find_conflicts,
    is_valid_solution,
)
from .engine import SudokuEngine

__all__ = [
    "SudokuCell",
    "SudokuDifficulty",
    "SudokuState",
    "MAX_MISTAKES",
    "is_valid_placement",
    "fill_grid",
    "find_conflicts",
    "is_valid_solution",
    "SudokuEngine",
]
