"""
Memory Engine - Flip/match state machine.

Actions:
    flip     {"cardId": "card-3"}
    restart  new shuffled deck, best score carried over

A flip depends on how many cards are currently pending:
- 0: the card becomes the first pick
- 1: the card is the second pick; one move is counted and the pair is
     kept if the symbols match
- 2: the previous pair did not match. Both turn back face down and the
     clicked card becomes the new first pick
"""

from __future__ import annotations
import random
from typing import Any, Sequence

from ...engine_core.action import ActionType
from ...engine_core.randomness import make_rng
from .state import MemoryCard, MemoryState, SYMBOLS


class MemoryEngine:
    """Owns one Memory game."""

    def __init__(
        self,
        initial_state: MemoryState | dict[str, Any] | None = None,
        rng: random.Random | None = None,
        symbols: Sequence[str] = SYMBOLS,
    ):
        self.rng = rng or make_rng()
        self.symbols = list(symbols)
        self.state: MemoryState | None = None
        if initial_state is None:
            self.start_new_game()
        elif isinstance(initial_state, dict):
            self.state = MemoryState.from_dict(initial_state)
        else:
            self.state = initial_state

    def get_state(self) -> MemoryState:
        return self.state

    def handle_action(self, action: str, payload: dict[str, Any] | None = None) -> MemoryState:
        action_type = ActionType.parse(action)
        if action_type is ActionType.FLIP:
            card_id = (payload or {}).get("cardId")
            if card_id is None:
                return self.state
            return self.flip_card(card_id)
        if action_type in (ActionType.RESTART, ActionType.NEW_GAME):
            return self.start_new_game()
        return self.state

    def start_new_game(self) -> MemoryState:
        items = self.symbols + self.symbols

        # Fisher-Yates
        for i in range(len(items) - 1, 0, -1):
            j = self.rng.randint(0, i)
            items[i], items[j] = items[j], items[i]

        self.state = MemoryState(
            cards=[
                MemoryCard(id=f"card-{index}", content=item)
                for index, item in enumerate(items)
            ],
            best_score=self.state.best_score if self.state else 0,
        )
        return self.state

    def flip_card(self, card_id: str) -> MemoryState:
        state = self.state
        if state.is_complete:
            return state

        card = state.get_card(card_id)
        if card is None or card.is_matched or card.is_flipped:
            return state

        pending = state.pending

        if len(pending) >= 2:
            for other in pending:
                other.is_flipped = False
            card.is_flipped = True
        elif len(pending) == 1:
            card.is_flipped = True
            state.moves += 1

            first = pending[0]
            if first.content == card.content:
                first.is_matched = True
                card.is_matched = True
                state.matches += 1

                if state.matches == state.pair_count:
                    state.is_complete = True
                    if state.best_score == 0 or state.moves < state.best_score:
                        state.best_score = state.moves
        else:
            card.is_flipped = True

        return state
