"""
Pytest fixtures for PlayArena tests.
"""

import random

import pytest

from ..games.game_2048 import Game2048State, Tile
from ..games.candy import CandyGem, CandyState, GemType
from ..games.memory import MemoryEngine


class ScriptedRandom(random.Random):
    """Random source whose choice() replays a script before falling back."""

    def script(self, values):
        self._script = list(values)
        return self

    def choice(self, seq):
        script = getattr(self, "_script", None)
        if script:
            return script.pop(0)
        return super().choice(seq)


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def make_2048_state(values, **kwargs) -> Game2048State:
    """Build a 2048 state from a 4x4 grid of ints / None."""
    grid = [
        [
            Tile(id=f"t{r}{c}", value=v, row=r, col=c) if v else None
            for c, v in enumerate(row)
        ]
        for r, row in enumerate(values)
    ]
    return Game2048State(grid=grid, **kwargs)


GEMS = list(GemType)


def make_candy_grid(indexes) -> list:
    """Build a gem grid from gem-type indexes into GemType order."""
    return [
        [
            CandyGem(id=f"g{r}{c}", type=GEMS[i], row=r, col=c)
            for c, i in enumerate(row)
        ]
        for r, row in enumerate(indexes)
    ]


def stable_candy_indexes() -> list:
    """
    An 8x8 board without runs where swapping (0,0)-(0,1) lines up
    three REDs at row 0, columns 1-3.
    """
    rows = [[(r + 2 * c) % 6 for c in range(8)] for r in range(8)]
    rows[0] = [0, 2, 0, 0, 4, 5, 4, 5]
    return rows


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scripted_rng():
    return ScriptedRandom(42)


@pytest.fixture
def candy_state() -> CandyState:
    return CandyState(grid=make_candy_grid(stable_candy_indexes()))


@pytest.fixture
def memory_engine(rng) -> MemoryEngine:
    return MemoryEngine(rng=rng)
