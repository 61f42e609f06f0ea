"""
Candy Board - Run detection and gravity on a gem grid.

These functions work on any rectangular grid of CandyGem and know
nothing about score or moves.
"""

from __future__ import annotations
from typing import Callable, Iterator, Sequence

from .state import CandyGem

MIN_RUN = 3


def _runs(line: Sequence[CandyGem]) -> Iterator[Sequence[CandyGem]]:
    """Maximal runs of MIN_RUN or more identical non-empty gems."""
    start = 0
    while start < len(line):
        gem_type = line[start].type
        end = start + 1
        while gem_type is not None and end < len(line) and line[end].type == gem_type:
            end += 1
        if gem_type is not None and end - start >= MIN_RUN:
            yield line[start:end]
        start = end


def _columns(grid: list[list[CandyGem]]) -> Iterator[list[CandyGem]]:
    for c in range(len(grid[0]) if grid else 0):
        yield [row[c] for row in grid]


def has_matches(grid: list[list[CandyGem]]) -> bool:
    for line in grid:
        if next(_runs(line), None) is not None:
            return True
    for line in _columns(grid):
        if next(_runs(line), None) is not None:
            return True
    return False


def find_matches(grid: list[list[CandyGem]]) -> set[str]:
    """Ids of every gem in a horizontal or vertical run.

    A gem in both a row run and a column run is counted once.
    """
    matched: set[str] = set()
    for line in grid:
        for run in _runs(line):
            matched.update(gem.id for gem in run)
    for line in _columns(grid):
        for run in _runs(line):
            matched.update(gem.id for gem in run)
    return matched


def collapse(
    grid: list[list[CandyGem]],
    matched: set[str],
    new_gem: Callable[[int, int], CandyGem],
) -> None:
    """Remove matched gems, let the rest fall, refill from the top.

    Works in place. new_gem(row, col) builds each refill gem.
    """
    rows = len(grid)
    for c in range(len(grid[0]) if grid else 0):
        shift = 0
        for r in range(rows - 1, -1, -1):
            gem = grid[r][c]
            if gem.id in matched:
                shift += 1
            elif shift > 0:
                grid[r + shift][c] = gem
                gem.row = r + shift

        for r in range(shift):
            grid[r][c] = new_gem(r, c)
