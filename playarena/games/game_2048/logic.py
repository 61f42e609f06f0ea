"""
2048 Logic - Pure grid functions shared by the engine and the UI preview.

slide() is the whole move algorithm:
- Traverse so the far edge in the move direction is visited first
- Walk each tile to the farthest empty cell
- Merge into an equal neighbour that has not merged yet this move

calculate_next_state() runs the same slide without spawning a tile or
checking for game over, so a client can render a move immediately and
let the authoritative engine supply the spawned tile afterwards.
"""

from __future__ import annotations
import random
from dataclasses import dataclass

from ...engine_core.randomness import generate_id
from .state import Direction, Game2048State, Tile, GRID_SIZE, WIN_VALUE

SPAWN_FOUR_CHANCE = 0.1


@dataclass
class SlideResult:
    """Outcome of sliding a grid."""
    grid: list[list[Tile | None]]
    moved: bool
    points: int
    reached_win: bool


def _in_bounds(row: int, col: int) -> bool:
    return 0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE


def _traversal(direction: Direction) -> list[tuple[int, int]]:
    rows = list(range(GRID_SIZE))
    cols = list(range(GRID_SIZE))
    if direction is Direction.DOWN:
        rows.reverse()
    if direction is Direction.RIGHT:
        cols.reverse()
    return [(r, c) for r in rows for c in cols]


def _fresh_copy(grid: list[list[Tile | None]]) -> list[list[Tile | None]]:
    """Copy tiles and clear last move's merge/spawn markers."""
    return [
        [
            Tile(id=tile.id, value=tile.value, row=tile.row, col=tile.col)
            if tile else None
            for tile in row
        ]
        for row in grid
    ]


def slide(
    grid: list[list[Tile | None]],
    direction: Direction,
    rng: random.Random,
) -> SlideResult:
    """Slide and merge every tile one move in the given direction.

    The input grid is not modified.
    """
    new_grid = _fresh_copy(grid)
    d_row, d_col = direction.vector
    moved = False
    points = 0
    reached_win = False

    for r, c in _traversal(direction):
        tile = new_grid[r][c]
        if tile is None:
            continue

        dest_r, dest_c = r, c
        next_r, next_c = r + d_row, c + d_col
        while _in_bounds(next_r, next_c) and new_grid[next_r][next_c] is None:
            dest_r, dest_c = next_r, next_c
            next_r += d_row
            next_c += d_col

        target = new_grid[next_r][next_c] if _in_bounds(next_r, next_c) else None
        if target is not None and target.value == tile.value and not target.merged_from:
            merged_value = tile.value * 2
            new_grid[next_r][next_c] = Tile(
                id=generate_id(rng),
                value=merged_value,
                row=next_r,
                col=next_c,
                merged_from=[target.id, tile.id],
            )
            new_grid[r][c] = None
            points += merged_value
            moved = True
            if merged_value == WIN_VALUE:
                reached_win = True
        elif (dest_r, dest_c) != (r, c):
            tile.row, tile.col = dest_r, dest_c
            new_grid[dest_r][dest_c] = tile
            new_grid[r][c] = None
            moved = True

    return SlideResult(grid=new_grid, moved=moved, points=points, reached_win=reached_win)


def empty_cells(grid: list[list[Tile | None]]) -> list[tuple[int, int]]:
    return [
        (r, c)
        for r in range(GRID_SIZE)
        for c in range(GRID_SIZE)
        if grid[r][c] is None
    ]


def spawn_tile(grid: list[list[Tile | None]], rng: random.Random) -> Tile | None:
    """Place a 2 (90%) or 4 (10%) on a random empty cell, in place.

    Returns the new tile, or None when the grid is full.
    """
    cells = empty_cells(grid)
    if not cells:
        return None
    r, c = cells[rng.randrange(len(cells))]
    value = 4 if rng.random() < SPAWN_FOUR_CHANCE else 2
    tile = Tile(id=generate_id(rng), value=value, row=r, col=c, is_new=True)
    grid[r][c] = tile
    return tile


def moves_available(grid: list[list[Tile | None]]) -> bool:
    """True if there is an empty cell or two orthogonal neighbours match."""
    for r in range(GRID_SIZE):
        for c in range(GRID_SIZE):
            tile = grid[r][c]
            if tile is None:
                return True
            right = grid[r][c + 1] if c + 1 < GRID_SIZE else None
            below = grid[r + 1][c] if r + 1 < GRID_SIZE else None
            if right is not None and right.value == tile.value:
                return True
            if below is not None and below.value == tile.value:
                return True
    return False


def calculate_next_state(
    state: Game2048State,
    direction: Direction | str,
    rng: random.Random | None = None,
) -> Game2048State | None:
    """Optimistic preview of a move: slide and merge only.

    Returns None if the move changes nothing. The given state is left
    untouched.
    """
    direction = Direction.parse(direction)
    if direction is None:
        return None

    result = slide(state.grid, direction, rng or random.Random())
    if not result.moved:
        return None

    score = state.score + result.points
    won = state.won
    if result.reached_win and not state.keep_playing and not state.won:
        won = True

    return Game2048State(
        grid=result.grid,
        score=score,
        best_score=max(score, state.best_score),
        game_over=state.game_over,
        won=won,
        keep_playing=state.keep_playing,
    )
