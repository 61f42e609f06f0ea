"""
Store Module - Saved games for local play.

Each game's state is kept as JSON under a fixed key per game type.
Loading resumes an unfinished game and starts fresh otherwise.
"""

from .local_store import LocalGameStore, PLAYER_NAME_KEY

__all__ = [
    "LocalGameStore",
    "PLAYER_NAME_KEY",
]
