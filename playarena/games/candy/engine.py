"""
Candy Engine - Swap, cascade, score.

Actions:
    swap     {"row1": r, "col1": c, "row2": r, "col2": c}
    restart  fresh board and move budget

A swap is accepted only between orthogonal neighbours and only if it
creates a match. Accepted swaps cost one move and run the cascade:
each round removes every matched gem, scores
matched * 10 * combo_multiplier, bumps the multiplier, drops the
remaining gems and refills the gaps. The cascade stops after
MAX_CASCADES rounds even if matches remain.
"""

from __future__ import annotations
import random
from typing import Any

from ...engine_core.action import ActionType
from ...engine_core.randomness import generate_id, make_rng
from .board import collapse, find_matches, has_matches
from .state import (
    CandyGem,
    CandyState,
    GemType,
    ROWS,
    COLS,
    STARTING_MOVES,
    TARGET_SCORE,
)

GEM_TYPES = list(GemType)
MAX_CASCADES = 10
POINTS_PER_GEM = 10


class CandyEngine:
    """Owns one Candy game."""

    def __init__(
        self,
        initial_state: CandyState | dict[str, Any] | None = None,
        rng: random.Random | None = None,
    ):
        self.rng = rng or make_rng()
        self.state: CandyState | None = None
        if initial_state is None:
            self.start_new_game()
        elif isinstance(initial_state, dict):
            self.state = CandyState.from_dict(initial_state)
        else:
            self.state = initial_state

    def get_state(self) -> CandyState:
        return self.state

    def handle_action(self, action: str, payload: dict[str, Any] | None = None) -> CandyState:
        action_type = ActionType.parse(action)
        restarting = action_type in (ActionType.RESTART, ActionType.NEW_GAME)

        if self.state.is_complete and not restarting:
            return self.state

        if restarting:
            return self.start_new_game()
        if action_type is ActionType.SWAP:
            coords = [(payload or {}).get(k) for k in ("row1", "col1", "row2", "col2")]
            if not all(isinstance(v, int) and not isinstance(v, bool) for v in coords):
                return self.state
            return self.swap(*coords)
        return self.state

    def start_new_game(self) -> CandyState:
        self.state = CandyState(
            grid=self._create_initial_grid(),
            score=0,
            moves_left=STARTING_MOVES,
            target_score=TARGET_SCORE,
            is_complete=False,
            combo_multiplier=1,
        )
        return self.state

    def _random_gem(self, row: int, col: int, is_new: bool = False) -> CandyGem:
        return CandyGem(
            id=generate_id(self.rng),
            type=self.rng.choice(GEM_TYPES),
            row=row,
            col=col,
            is_new=is_new,
        )

    def _create_initial_grid(self) -> list[list[CandyGem]]:
        """Random boards until one starts without any run."""
        while True:
            grid = [
                [self._random_gem(r, c) for c in range(COLS)]
                for r in range(ROWS)
            ]
            if not has_matches(grid):
                return grid

    @staticmethod
    def _in_bounds(row: int, col: int) -> bool:
        return 0 <= row < ROWS and 0 <= col < COLS

    @staticmethod
    def _exchange(grid: list[list[CandyGem]], r1: int, c1: int, r2: int, c2: int) -> None:
        grid[r1][c1], grid[r2][c2] = grid[r2][c2], grid[r1][c1]
        grid[r1][c1].row, grid[r1][c1].col = r1, c1
        grid[r2][c2].row, grid[r2][c2].col = r2, c2

    def swap(self, r1: int, c1: int, r2: int, c2: int) -> CandyState:
        state = self.state
        if state.moves_left <= 0:
            return state
        if not (self._in_bounds(r1, c1) and self._in_bounds(r2, c2)):
            return state
        if abs(r1 - r2) + abs(c1 - c2) != 1:
            return state

        grid = state.grid
        self._exchange(grid, r1, c1, r2, c2)

        if has_matches(grid):
            state.moves_left -= 1
            state.combo_multiplier = 1
            for row in grid:
                for gem in row:
                    gem.is_new = False
            self._resolve_matches(grid)
        else:
            self._exchange(grid, r1, c1, r2, c2)

        if state.moves_left == 0 or state.score >= state.target_score:
            state.is_complete = True

        return state

    def _resolve_matches(self, grid: list[list[CandyGem]]) -> None:
        state = self.state
        cascades = 0
        while cascades < MAX_CASCADES and has_matches(grid):
            cascades += 1
            matched = find_matches(grid)

            state.score += len(matched) * POINTS_PER_GEM * state.combo_multiplier
            state.combo_multiplier += 1

            collapse(grid, matched, lambda r, c: self._random_gem(r, c, is_new=True))
