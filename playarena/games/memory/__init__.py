"""
Memory - Flip two cards, keep them if they match.
"""

from .state import MemoryCard, MemoryState, SYMBOLS
from .engine import MemoryEngine

__all__ = [
    "MemoryCard",
    "MemoryState",
    "SYMBOLS",
    "MemoryEngine",
]
