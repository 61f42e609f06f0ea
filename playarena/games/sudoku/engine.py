"""
Sudoku Engine - Puzzle generation and move handling.

Actions:
    move      {"row": r, "col": c, "value": 1-9 | None}
    new_game  {"difficulty": "easy" | "medium" | "hard", "challengeMode": bool}
    restart   new puzzle with the current difficulty and mode

Classic mode lets any cell be overwritten and flags every duplicate
live. Challenge mode checks each entry against the solution instead,
allows MAX_MISTAKES wrong entries and runs a clock.

The clock is checked lazily: an expired game is only marked lost when
the next move arrives, or when a caller runs check_timeout().
"""

from __future__ import annotations
import random
import time
from typing import Any, Callable

from ...engine_core.action import ActionType
from ...engine_core.randomness import make_rng
from .grid import fill_grid, find_conflicts
from .state import (
    MAX_MISTAKES,
    SIZE,
    SudokuCell,
    SudokuDifficulty,
    SudokuState,
    empty_board,
)


class SudokuEngine:
    """
    Owns one Sudoku game.

    Usage:
        engine = SudokuEngine(difficulty="hard", challenge_mode=True)
        engine.handle_action("move", {"row": 0, "col": 4, "value": 7})
    """

    def __init__(
        self,
        initial_state: SudokuState | dict[str, Any] | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] | None = None,
        difficulty: SudokuDifficulty | str = SudokuDifficulty.EASY,
        challenge_mode: bool = False,
    ):
        self.rng = rng or make_rng()
        self.clock = clock or time.time
        self.state: SudokuState | None = None
        if initial_state is None:
            self.generate_new_game(difficulty, challenge_mode)
        elif isinstance(initial_state, dict):
            self.state = SudokuState.from_dict(initial_state)
        else:
            self.state = initial_state

    def get_state(self) -> SudokuState:
        return self.state

    def handle_action(self, action: str, payload: dict[str, Any] | None = None) -> SudokuState:
        action_type = ActionType.parse(action)
        payload = payload or {}

        if action_type is ActionType.NEW_GAME:
            return self.generate_new_game(
                payload.get("difficulty") or SudokuDifficulty.EASY,
                bool(payload.get("challengeMode")),
            )

        if self.state.is_complete:
            return self.state

        if action_type is ActionType.MOVE:
            return self.handle_move(payload.get("row"), payload.get("col"), payload.get("value"))
        if action_type is ActionType.RESTART:
            return self.start_new_game()
        return self.state

    def start_new_game(
        self,
        difficulty: SudokuDifficulty | str | None = None,
        challenge_mode: bool | None = None,
    ) -> SudokuState:
        """New puzzle, defaulting to the current difficulty and mode."""
        if difficulty is None:
            difficulty = self.state.difficulty if self.state else SudokuDifficulty.EASY
        if challenge_mode is None:
            challenge_mode = self.state.challenge_mode if self.state else False
        return self.generate_new_game(difficulty, challenge_mode)

    def generate_new_game(
        self,
        difficulty: SudokuDifficulty | str,
        challenge_mode: bool,
    ) -> SudokuState:
        difficulty = SudokuDifficulty.parse(difficulty, SudokuDifficulty.EASY)

        values: list[list[int | None]] = [[None] * SIZE for _ in range(SIZE)]
        fill_grid(values, self.rng)
        solution = [list(row) for row in values]

        board = empty_board()
        for r in range(SIZE):
            for c in range(SIZE):
                board[r][c].value = values[r][c]
        self._remove_numbers(board, difficulty.cells_removed)

        self.state = SudokuState(
            board=board,
            solution=solution,
            difficulty=difficulty,
            mistakes=0,
            is_complete=False,
            is_won=False,
            start_time=self.clock(),
            end_time=None,
            challenge_mode=challenge_mode,
            time_limit=difficulty.time_limit if challenge_mode else None,
        )
        return self.state

    def _remove_numbers(self, board: list[list[SudokuCell]], count: int) -> None:
        """Clear count filled cells at random, then fix the survivors as clues."""
        for _ in range(count):
            row, col = self.rng.randrange(SIZE), self.rng.randrange(SIZE)
            while board[row][col].value is None:
                row, col = self.rng.randrange(SIZE), self.rng.randrange(SIZE)
            board[row][col].value = None

        for line in board:
            for cell in line:
                cell.is_fixed = cell.value is not None

    # -------------------------------------------------------------------------
    # Clock
    # -------------------------------------------------------------------------

    def elapsed(self) -> float:
        end = self.state.end_time if self.state.end_time is not None else self.clock()
        return end - self.state.start_time

    def time_remaining(self) -> float | None:
        """Seconds left on the challenge clock, None without a clock."""
        if not self.state.challenge_mode or not self.state.time_limit:
            return None
        return max(0.0, self.state.time_limit - self.elapsed())

    def check_timeout(self) -> bool:
        """Mark the game lost if the challenge clock has run out.

        Returns True if this call ended the game.
        """
        state = self.state
        if state.is_complete or not state.challenge_mode or not state.time_limit:
            return False
        if self.clock() - state.start_time <= state.time_limit:
            return False
        state.is_complete = True
        state.is_won = False
        state.end_time = self.clock()
        return True

    # -------------------------------------------------------------------------
    # Moves
    # -------------------------------------------------------------------------

    @staticmethod
    def _valid_value(value: Any) -> bool:
        if value is None:
            return True
        return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= SIZE

    def handle_move(self, row: Any, col: Any, value: Any) -> SudokuState:
        state = self.state
        if not isinstance(row, int) or not isinstance(col, int):
            return state
        if not (0 <= row < SIZE and 0 <= col < SIZE):
            return state
        if state.is_complete:
            return state

        if self.check_timeout():
            return state

        cell = state.board[row][col]
        if cell.is_fixed or not self._valid_value(value):
            return state

        if state.challenge_mode and value is not None:
            if value != state.solution[row][col]:
                state.mistakes += 1
                cell.value = value
                cell.is_error = True
                if state.mistakes >= MAX_MISTAKES:
                    state.is_complete = True
                    state.is_won = False
                    state.end_time = self.clock()
                return state

        cell.value = value
        cell.is_error = False

        if not state.challenge_mode:
            self.validate_board()

        self._check_completion()
        return state

    def validate_board(self) -> None:
        """Recompute every is_error flag from the current values."""
        conflicts = find_conflicts(self.state.values())
        for line in self.state.board:
            for cell in line:
                cell.is_error = (cell.row, cell.col) in conflicts

    def _check_completion(self) -> None:
        state = self.state
        cells = [cell for line in state.board for cell in line]
        if all(cell.value is not None for cell in cells) and not any(cell.is_error for cell in cells):
            state.is_complete = True
            state.is_won = True
            state.end_time = self.clock()
