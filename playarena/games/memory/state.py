"""
Memory State - A shuffled deck of symbol pairs.

At most two cards are face up and unmatched at any time: the pending
selection.
"""

from __future__ import annotations
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any

SYMBOLS = ["🍎", "🍌", "🍒", "🍇", "🍉", "🍓", "🍑", "🍍"]


@dataclass
class MemoryCard:
    """One card of a pair."""
    id: str
    content: str
    is_flipped: bool = False
    is_matched: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "isFlipped": self.is_flipped,
            "isMatched": self.is_matched,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MemoryCard:
        return cls(
            id=data["id"],
            content=data["content"],
            is_flipped=data.get("isFlipped", False),
            is_matched=data.get("isMatched", False),
        )


@dataclass
class MemoryState:
    """
    Complete Memory game.

    moves counts completed pairs of flips. best_score is the lowest move
    count of any finished game, 0 until one is finished.
    """
    cards: list[MemoryCard] = field(default_factory=list)
    moves: int = 0
    matches: int = 0
    is_complete: bool = False
    best_score: int = 0

    @property
    def is_finished(self) -> bool:
        return self.is_complete

    @property
    def pair_count(self) -> int:
        return len(self.cards) // 2

    @property
    def pending(self) -> list[MemoryCard]:
        """Cards face up but not yet matched."""
        return [c for c in self.cards if c.is_flipped and not c.is_matched]

    def get_card(self, card_id: str) -> MemoryCard | None:
        for card in self.cards:
            if card.id == card_id:
                return card
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "cards": [card.to_dict() for card in self.cards],
            "moves": self.moves,
            "matches": self.matches,
            "isComplete": self.is_complete,
            "bestScore": self.best_score,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MemoryState:
        return cls(
            cards=[MemoryCard.from_dict(c) for c in data.get("cards", [])],
            moves=data.get("moves", 0),
            matches=data.get("matches", 0),
            is_complete=data.get("isComplete", False),
            best_score=data.get("bestScore", 0),
        )

    def clone(self) -> MemoryState:
        """Deep copy the state."""
        return deepcopy(self)
