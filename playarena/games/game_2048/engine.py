"""
2048 Engine - Stateful single-player 2048.

Actions:
    move          {"direction": "up" | "down" | "left" | "right"}
    keep_playing  continue past the 2048 tile
    restart       new game, best score carried over

Once the game is over only restart is accepted.
"""

from __future__ import annotations
import random
from typing import Any

from ...engine_core.action import ActionType
from ...engine_core.randomness import make_rng
from .logic import moves_available, slide, spawn_tile
from .state import Direction, Game2048State, empty_grid

STARTING_TILES = 2


class Engine2048:
    """
    Owns one 2048 game.

    Usage:
        engine = Engine2048(rng=random.Random(7))
        state = engine.handle_action("move", {"direction": "left"})
    """

    def __init__(
        self,
        initial_state: Game2048State | dict[str, Any] | None = None,
        rng: random.Random | None = None,
    ):
        self.rng = rng or make_rng()
        self.state: Game2048State | None = None
        if initial_state is None:
            self.start_new_game()
        elif isinstance(initial_state, dict):
            self.state = Game2048State.from_dict(initial_state)
        else:
            self.state = initial_state

    def get_state(self) -> Game2048State:
        return self.state

    def handle_action(self, action: str, payload: dict[str, Any] | None = None) -> Game2048State:
        action_type = ActionType.parse(action)
        restarting = action_type in (ActionType.RESTART, ActionType.NEW_GAME)

        if self.state.game_over and not restarting:
            return self.state

        if restarting:
            return self.start_new_game()
        if action_type is ActionType.MOVE:
            direction = Direction.parse((payload or {}).get("direction"))
            if direction is None:
                return self.state
            return self.move(direction)
        if action_type is ActionType.KEEP_PLAYING:
            self.state.keep_playing = True
            self.state.won = False
        return self.state

    def start_new_game(self) -> Game2048State:
        """Empty grid with two spawned tiles. Best score is kept."""
        grid = empty_grid()
        for _ in range(STARTING_TILES):
            spawn_tile(grid, self.rng)

        self.state = Game2048State(
            grid=grid,
            best_score=self.state.best_score if self.state else 0,
        )
        return self.state

    def move(self, direction: Direction) -> Game2048State:
        """Slide, spawn one tile if anything moved, then check for game over."""
        state = self.state
        result = slide(state.grid, direction, self.rng)
        if not result.moved:
            return state

        if result.reached_win and not state.won and not state.keep_playing:
            state.won = True

        spawn_tile(result.grid, self.rng)
        state.grid = result.grid
        state.score += result.points
        state.best_score = max(state.best_score, state.score)

        if not moves_available(state.grid):
            state.game_over = True

        return state
