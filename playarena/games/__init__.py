"""
Games module - One subpackage per engine.

Each game has its own subpackage with:
- State dataclasses and their JSON form
- Pure board helpers
- The engine class

The registry below maps a game type to its engine and state classes for
the store, session and API layers. Engines never import each other.
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..engine_core.engine import GameEngine
from .game_2048 import Engine2048, Game2048State
from .memory import MemoryEngine, MemoryState
from .candy import CandyEngine, CandyState
from .sudoku import SudokuEngine, SudokuState

STORAGE_PREFIX = "playarena_"


class GameType(str, Enum):
    """Games with a local engine."""
    GAME_2048 = "2048"
    MEMORY = "memory"
    CANDY = "candy"
    SUDOKU = "sudoku"

    @property
    def storage_key(self) -> str:
        """Key the saved state is stored under."""
        return f"{STORAGE_PREFIX}{self.value}"


@dataclass(frozen=True)
class GameInfo:
    """Catalogue entry for a game."""
    game_type: GameType
    name: str
    description: str
    engine_class: type
    state_class: type
    actions: tuple[str, ...]


GAMES: dict[GameType, GameInfo] = {
    GameType.GAME_2048: GameInfo(
        game_type=GameType.GAME_2048,
        name="2048",
        description="Slide tiles and merge equal numbers to reach 2048.",
        engine_class=Engine2048,
        state_class=Game2048State,
        actions=("move", "keep_playing", "restart"),
    ),
    GameType.MEMORY: GameInfo(
        game_type=GameType.MEMORY,
        name="Memory",
        description="Flip cards two at a time and find every pair.",
        engine_class=MemoryEngine,
        state_class=MemoryState,
        actions=("flip", "restart"),
    ),
    GameType.CANDY: GameInfo(
        game_type=GameType.CANDY,
        name="Candy Chakachak",
        description="Swap gems to line up three or more and chain cascades.",
        engine_class=CandyEngine,
        state_class=CandyState,
        actions=("swap", "restart"),
    ),
    GameType.SUDOKU: GameInfo(
        game_type=GameType.SUDOKU,
        name="Sudoku",
        description="Fill the grid so every row, column and box holds 1-9.",
        engine_class=SudokuEngine,
        state_class=SudokuState,
        actions=("move", "new_game", "restart"),
    ),
}


def get_game_type(value: str | GameType) -> GameType:
    """Resolve a game type name, raising ValueError if unknown."""
    if isinstance(value, GameType):
        return value
    try:
        return GameType(value)
    except ValueError:
        raise ValueError(f"Unknown game type: {value}") from None


def get_game_info(value: str | GameType) -> GameInfo:
    return GAMES[get_game_type(value)]


def create_engine(
    game_type: str | GameType,
    initial_state: Any = None,
    rng: random.Random | None = None,
    **options: Any,
) -> GameEngine:
    """
    Build an engine for a game type.

    Args:
        game_type: Game type or its name
        initial_state: State object or saved dict to resume from
        rng: Random source (seed it for reproducible games)
        **options: Engine-specific options (Sudoku: difficulty, challenge_mode)

    Returns:
        A fresh or resumed engine
    """
    info = get_game_info(game_type)
    options = {k: v for k, v in options.items() if v is not None}
    return info.engine_class(initial_state, rng=rng, **options)


__all__ = [
    "GameType",
    "GameInfo",
    "GAMES",
    "STORAGE_PREFIX",
    "get_game_type",
    "get_game_info",
    "create_engine",
    "Engine2048",
    "Game2048State",
    "MemoryEngine",
    "MemoryState",
    "CandyEngine",
    "CandyState",
    "SudokuEngine",
    "SudokuState",
]
