"""
Sudoku Grid - Placement rules, generation and conflict detection.

Grids here are plain 9x9 lists of int | None.
"""

from __future__ import annotations
import random
from typing import Iterator, Sequence

from .state import BOX, SIZE

DIGITS = tuple(range(1, SIZE + 1))


def is_valid_placement(grid: Sequence[Sequence[int | None]], row: int, col: int, num: int) -> bool:
    """True if num appears nowhere in the row, column or box of (row, col)."""
    if any(grid[row][c] == num for c in range(SIZE)):
        return False
    if any(grid[r][col] == num for r in range(SIZE)):
        return False
    box_row = (row // BOX) * BOX
    box_col = (col // BOX) * BOX
    for r in range(box_row, box_row + BOX):
        for c in range(box_col, box_col + BOX):
            if grid[r][c] == num:
                return False
    return True


def fill_grid(grid: list[list[int | None]], rng: random.Random) -> bool:
    """Complete the grid in place by randomized backtracking.

    Empty cells are filled in row-major order, trying digits in a random
    order. Returns False if no completion exists.
    """
    for index in range(SIZE * SIZE):
        row, col = divmod(index, SIZE)
        if grid[row][col] is not None:
            continue

        candidates = list(DIGITS)
        rng.shuffle(candidates)
        for num in candidates:
            if is_valid_placement(grid, row, col, num):
                grid[row][col] = num
                if fill_grid(grid, rng):
                    return True
                grid[row][col] = None
        return False
    return True


def groups() -> Iterator[list[tuple[int, int]]]:
    """Every row, column and box as lists of coordinates."""
    for r in range(SIZE):
        yield [(r, c) for c in range(SIZE)]
    for c in range(SIZE):
        yield [(r, c) for r in range(SIZE)]
    for box_row in range(0, SIZE, BOX):
        for box_col in range(0, SIZE, BOX):
            yield [
                (r, c)
                for r in range(box_row, box_row + BOX)
                for c in range(box_col, box_col + BOX)
            ]


def find_conflicts(grid: Sequence[Sequence[int | None]]) -> set[tuple[int, int]]:
    """Coordinates of every cell sharing its value with a peer."""
    conflicts: set[tuple[int, int]] = set()
    for group in groups():
        seen: dict[int, list[tuple[int, int]]] = {}
        for r, c in group:
            value = grid[r][c]
            if value is not None:
                seen.setdefault(value, []).append((r, c))
        for cells in seen.values():
            if len(cells) > 1:
                conflicts.update(cells)
    return conflicts


def is_valid_solution(grid: Sequence[Sequence[int | None]]) -> bool:
    """True if every row, column and box is a permutation of 1-9."""
    if len(grid) != SIZE or any(len(row) != SIZE for row in grid):
        return False
    expected = set(DIGITS)
    return all({grid[r][c] for r, c in group} == expected for group in groups())
