"""
2048 - Slide and merge on a 4x4 grid.

Contents:
- State: tiles, score, win/lose flags
- Logic: pure slide/merge, spawn, game-over detection, optimistic preview
- Engine: the stateful game
"""

from .state import Direction, Tile, Game2048State, GRID_SIZE, WIN_VALUE
from .logic import (
    SlideResult,
    slide,
    spawn_tile,
    moves_available,
    calculate_next_state,
)
from .engine import Engine2048

__all__ = [
    "Direction",
    "Tile",
    "Game2048State",
    "GRID_SIZE",
    "WIN_VALUE",
    "SlideResult",
    "slide",
    "spawn_tile",
    "moves_available",
    "calculate_next_state",
    "Engine2048",
]
