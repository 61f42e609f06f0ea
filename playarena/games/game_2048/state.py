"""
2048 State - Tiles and the 4x4 grid.

A tile keeps its id while it slides. A merge produces a new tile with a
fresh id and records both progenitors in merged_from, which the UI uses
to animate the merge.
"""

from __future__ import annotations
from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

GRID_SIZE = 4
WIN_VALUE = 2048


class Direction(str, Enum):
    """Slide directions."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def vector(self) -> tuple[int, int]:
        """(row delta, col delta) for one step in this direction."""
        return _VECTORS[self]

    @classmethod
    def parse(cls, value: Any) -> Direction | None:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


_VECTORS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}


@dataclass
class Tile:
    """A numbered tile on the grid."""
    id: str
    value: int
    row: int
    col: int
    merged_from: list[str] | None = None
    is_new: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "value": self.value,
            "row": self.row,
            "col": self.col,
        }
        if self.merged_from:
            data["mergedFrom"] = list(self.merged_from)
        if self.is_new:
            data["isNew"] = True
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Tile:
        # Older saves stored the value as "val"
        value = data["value"] if "value" in data else data["val"]
        merged_from = data.get("mergedFrom")
        return cls(
            id=data["id"],
            value=int(value),
            row=data["row"],
            col=data["col"],
            merged_from=list(merged_from) if merged_from else None,
            is_new=bool(data.get("isNew", False)),
        )


def empty_grid() -> list[list[Tile | None]]:
    return [[None] * GRID_SIZE for _ in range(GRID_SIZE)]


@dataclass
class Game2048State:
    """
    Complete 2048 game.

    best_score survives restarts. game_over is terminal until restart.
    """
    grid: list[list[Tile | None]] = field(default_factory=empty_grid)
    score: int = 0
    best_score: int = 0
    game_over: bool = False
    won: bool = False
    keep_playing: bool = False

    @property
    def is_finished(self) -> bool:
        return self.game_over

    @property
    def tiles(self) -> list[Tile]:
        """All tiles, row-major."""
        return [tile for row in self.grid for tile in row if tile is not None]

    def values(self) -> list[list[int | None]]:
        """Grid of plain values, handy for display and tests."""
        return [[tile.value if tile else None for tile in row] for row in self.grid]

    def to_dict(self) -> dict[str, Any]:
        return {
            "grid": [[tile.to_dict() if tile else None for tile in row] for row in self.grid],
            "score": self.score,
            "bestScore": self.best_score,
            "gameOver": self.game_over,
            "won": self.won,
            "keepPlaying": self.keep_playing,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Game2048State:
        """
        Raises:
            ValueError: grid is not GRID_SIZE x GRID_SIZE
        """
        grid = [
            [Tile.from_dict(cell) if cell else None for cell in row]
            for row in data["grid"]
        ]
        if len(grid) != GRID_SIZE or any(len(row) != GRID_SIZE for row in grid):
            raise ValueError(f"2048 grid must be {GRID_SIZE}x{GRID_SIZE}")
        return cls(
            grid=grid,
            score=data.get("score", 0),
            best_score=data.get("bestScore", 0),
            game_over=data.get("gameOver", False),
            won=data.get("won", False),
            keep_playing=data.get("keepPlaying", False),
        )

    def clone(self) -> Game2048State:
        """Deep copy the state."""
        return deepcopy(self)
