"""
Engine Core - Shared primitives for the game engines.

Engines do not share a base class. What they share:
1. Action names and the ActionResult envelope
2. An injectable random source (seedable for tests and replays)
3. A structural GameEngine protocol for the layers that drive them
"""

from .action import Action, ActionType, ActionResult
from .engine import GameEngine, GameStateLike
from .randomness import make_rng, generate_id

__all__ = [
    "Action",
    "ActionType",
    "ActionResult",
    "GameEngine",
    "GameStateLike",
    "make_rng",
    "generate_id",
]
