"""
Local Game Store - Saves and loads game state for single-player games.

The store:
- Keeps one JSON file per key (playarena_2048, playarena_sudoku, ...)
- Lives in a plain directory, no database
- Remembers the player's display name

Design decisions:
- A failed read or write is logged and treated as "nothing saved"
- The stored JSON is exactly the state's to_dict() output
"""

from __future__ import annotations
import json
import logging
import os
import random
from pathlib import Path
from typing import Any

from ..engine_core.engine import GameEngine
from ..games import STORAGE_PREFIX, GameType, create_engine, get_game_info, get_game_type

logger = logging.getLogger(__name__)

PLAYER_NAME_KEY = f"{STORAGE_PREFIX}player_name"


class LocalGameStore:
    """
    File-based store for saved games.

    Usage:
        store = LocalGameStore(store_dir="~/.playarena/saves")

        engine = store.load_engine("sudoku")
        engine.handle_action("move", {"row": 0, "col": 0, "value": 5})
        store.save_game("sudoku", engine.get_state())
    """

    def __init__(self, store_dir: str | Path | None = None):
        if store_dir is None:
            store_dir = os.getenv("PLAYARENA_STORE_DIR") or Path.home() / ".playarena" / "saves"
        self.store_dir = Path(store_dir).expanduser()
        self.store_dir.mkdir(parents=True, exist_ok=True)

    # -------------------------------------------------------------------------
    # Games
    # -------------------------------------------------------------------------

    def save_game(self, game_type: str | GameType, state: Any) -> bool:
        """
        Save a game's state.

        Accepts a state object or an already serialized dict.
        Returns False if the write failed.
        """
        game_type = get_game_type(game_type)
        data = state if isinstance(state, dict) else state.to_dict()
        return self._write(game_type.storage_key, data)

    def load_game(self, game_type: str | GameType) -> dict[str, Any] | None:
        """Saved state for a game, or None."""
        game_type = get_game_type(game_type)
        data = self._read(game_type.storage_key)
        if data is not None and not isinstance(data, dict):
            logger.warning("Ignoring malformed save for %s", game_type.value)
            return None
        return data

    def clear_game(self, game_type: str | GameType) -> None:
        game_type = get_game_type(game_type)
        self._delete(game_type.storage_key)

    def list_saved(self) -> list[GameType]:
        """Game types that currently have a save."""
        return [gt for gt in GameType if self._path(gt.storage_key).exists()]

    def load_engine(
        self,
        game_type: str | GameType,
        rng: random.Random | None = None,
        **options: Any,
    ) -> GameEngine:
        """
        Engine for a game: the saved one if unfinished, otherwise new.

        Options are only used when a new game is started.
        """
        info = get_game_info(game_type)
        data = self.load_game(info.game_type)

        if data is not None:
            try:
                state = info.state_class.from_dict(data)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Could not restore %s save: %s", info.game_type.value, e)
                state = None

            if state is not None and not state.is_finished:
                logger.debug("Resuming saved %s game", info.game_type.value)
                return info.engine_class(state, rng=rng)

        return create_engine(info.game_type, rng=rng, **options)

    # -------------------------------------------------------------------------
    # Player
    # -------------------------------------------------------------------------

    def save_player_name(self, name: str) -> bool:
        return self._write(PLAYER_NAME_KEY, name)

    def get_player_name(self) -> str | None:
        name = self._read(PLAYER_NAME_KEY)
        return name if isinstance(name, str) else None

    # -------------------------------------------------------------------------
    # Files
    # -------------------------------------------------------------------------

    def _path(self, key: str) -> Path:
        return self.store_dir / f"{key}.json"

    def _write(self, key: str, data: Any) -> bool:
        try:
            with open(self._path(key), "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Failed to save %s: %s", key, e)
            return False
        return True

    def _read(self, key: str) -> Any | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Failed to load %s: %s", key, e)
            return None

    def _delete(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Failed to clear %s: %s", key, e)
