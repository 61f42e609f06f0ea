"""
Session Module - Live engine instances, one per room.

A session represents one play-through of a game:
- Created when a player (or a room) starts a game
- Owns the only engine instance for that game
- Routes every action to it
- Dropped when the game ends or the room closes

Sessions live in memory. Saving a game across restarts is the store's job.
"""

from .manager import SessionManager, GameSession, SessionState

__all__ = [
    "SessionManager",
    "GameSession",
    "SessionState",
]
