"""
Engine protocol - The contract the session, store and API layers rely on.

This is a structural type only. Each engine is a standalone class.
"""

from __future__ import annotations
from typing import Any, Protocol


class GameStateLike(Protocol):
    """What every engine state offers."""

    @property
    def is_finished(self) -> bool: ...

    def to_dict(self) -> dict[str, Any]: ...

    def clone(self) -> GameStateLike: ...


class GameEngine(Protocol):
    """What every engine offers."""

    def get_state(self) -> Any: ...

    def handle_action(self, action: str, payload: dict[str, Any] | None = None) -> Any: ...

    def start_new_game(self, *args: Any, **kwargs: Any) -> Any: ...
