"""
Action System - Action names, actions and results.

Engines receive actions as a plain name plus an optional payload dict,
exactly as the UI sends them. The Action dataclass wraps that pair for
the layers above the engines (sessions, API, CLI), and ActionResult
reports what happened.

Invalid gameplay input is never an error: engines return their state
unchanged, and ActionResult.changed is False.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(str, Enum):
    """Named actions understood by the engines."""
    # 2048 and Sudoku
    MOVE = "move"

    # 2048
    KEEP_PLAYING = "keep_playing"

    # Memory
    FLIP = "flip"

    # Candy
    SWAP = "swap"

    # Lifecycle
    RESTART = "restart"
    NEW_GAME = "new_game"

    @classmethod
    def parse(cls, value: str | ActionType) -> ActionType | None:
        """Return the ActionType for a name, or None if unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass
class Action:
    """
    An action addressed to one engine.

    The payload keeps the UI's camelCase keys (cardId, row1, ...)
    so it can be handed to handle_action untouched.
    """
    action_type: ActionType
    payload: dict[str, Any] = field(default_factory=dict)
    timestamp: float | None = None

    @classmethod
    def move(cls, direction: str) -> Action:
        """Factory for a 2048 slide."""
        return cls(action_type=ActionType.MOVE, payload={"direction": direction})

    @classmethod
    def place(cls, row: int, col: int, value: int | None) -> Action:
        """Factory for a Sudoku entry (value None clears the cell)."""
        return cls(
            action_type=ActionType.MOVE,
            payload={"row": row, "col": col, "value": value},
        )

    @classmethod
    def flip(cls, card_id: str) -> Action:
        """Factory for a Memory card flip."""
        return cls(action_type=ActionType.FLIP, payload={"cardId": card_id})

    @classmethod
    def swap(cls, row1: int, col1: int, row2: int, col2: int) -> Action:
        """Factory for a Candy gem swap."""
        return cls(
            action_type=ActionType.SWAP,
            payload={"row1": row1, "col1": col1, "row2": row2, "col2": col2},
        )

    @classmethod
    def keep_playing(cls) -> Action:
        return cls(action_type=ActionType.KEEP_PLAYING)

    @classmethod
    def restart(cls) -> Action:
        return cls(action_type=ActionType.RESTART)

    @classmethod
    def new_game(cls, difficulty: str | None = None, challenge_mode: bool = False) -> Action:
        """Factory for a fresh Sudoku puzzle."""
        payload: dict[str, Any] = {"challengeMode": challenge_mode}
        if difficulty is not None:
            payload["difficulty"] = difficulty
        return cls(action_type=ActionType.NEW_GAME, payload=payload)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the action could be routed (success)
    - Whether it changed the game (changed)
    - Resulting state
    - Errors (unknown session, unknown action name)
    """
    success: bool
    changed: bool = False
    new_state: Any | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(cls, state: Any, changed: bool) -> ActionResult:
        """Create a success result with the resulting state."""
        return cls(success=True, changed=changed, new_state=state)
