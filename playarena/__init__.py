"""
PlayArena - Casual game rule engines

Deterministic, offline-capable engines for the PlayArena browser games.
Each engine owns its state and exposes the same narrow contract:
- get_state()
- handle_action(action, payload)
- start_new_game(...)

Around the engines the package provides:
- JSON persistence keyed per game (store)
- In-memory sessions, one authoritative engine per room
- A REST API and a small CLI
"""

__version__ = "0.1.0"
