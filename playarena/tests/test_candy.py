"""
Tests for the Candy engine.

Tests:
- Starting boards
- Swap validation and revert
- Cascade scoring and the combo multiplier
- Completion
"""

import random

import pytest

from ..games.candy import (
    CandyEngine,
    CandyState,
    GemType,
    MAX_CASCADES,
    collapse,
    find_matches,
    has_matches,
)
from .conftest import make_candy_grid, stable_candy_indexes

RED, BLUE, GREEN, YELLOW, PURPLE, ORANGE = list(GemType)

# Refill types that leave the board stable after the row-0 match
QUIET_REFILL = [ORANGE, BLUE, YELLOW]

SWAP = {"row1": 0, "col1": 0, "row2": 0, "col2": 1}


def assert_positions_consistent(state: CandyState):
    for r, row in enumerate(state.grid):
        for c, gem in enumerate(row):
            assert (gem.row, gem.col) == (r, c)


class TestBoard:
    """Tests for run detection and gravity."""

    def test_stable_fixture_has_no_runs(self, candy_state):
        assert not has_matches(candy_state.grid)
        assert find_matches(candy_state.grid) == set()

    def test_run_ids_are_deduplicated(self):
        """A gem in a row run and a column run is counted once."""
        indexes = stable_candy_indexes()
        indexes[3][2] = indexes[3][3] = indexes[3][4] = 0
        indexes[2][3] = indexes[4][3] = 0
        grid = make_candy_grid(indexes)
        assert find_matches(grid) == {"g32", "g33", "g34", "g23", "g43"}

    def test_runs_longer_than_three(self):
        indexes = stable_candy_indexes()
        indexes[5] = [1, 1, 1, 1, 1, 4, 2, 4]
        assert {f"g5{c}" for c in range(5)} <= find_matches(make_candy_grid(indexes))

    def test_empty_cells_never_match(self):
        grid = make_candy_grid(stable_candy_indexes())
        for gem in grid[0][:3]:
            gem.type = None
        assert not has_matches(grid)

    def test_collapse_drops_gems_and_refills_top(self):
        grid = make_candy_grid(stable_candy_indexes())
        above = grid[0][5]
        collapse(grid, {"g15", "g25"}, lambda r, c: make_candy_grid([[0]])[0][0])

        assert grid[2][5] is above
        assert (above.row, above.col) == (2, 5)
        assert grid[3][5].id == "g35"
        assert grid[0][5].type is RED and grid[1][5].type is RED


class TestStartingBoard:

    def test_new_game_defaults(self, rng):
        state = CandyEngine(rng=rng).get_state()
        assert len(state.grid) == 8 and all(len(row) == 8 for row in state.grid)
        assert (state.score, state.moves_left, state.target_score) == (0, 20, 2000)
        assert state.combo_multiplier == 1
        assert not state.is_complete

    def test_new_game_has_no_runs(self, rng):
        for _ in range(5):
            state = CandyEngine(rng=rng).get_state()
            assert not has_matches(state.grid)
            assert_positions_consistent(state)


class TestSwap:
    """Tests for swap validation."""

    def test_non_adjacent_swap_is_ignored(self, candy_state, rng):
        engine = CandyEngine(candy_state, rng=rng)
        before = candy_state.to_dict()
        engine.handle_action("swap", {"row1": 0, "col1": 0, "row2": 0, "col2": 2})
        engine.handle_action("swap", {"row1": 0, "col1": 0, "row2": 1, "col2": 1})
        engine.handle_action("swap", {"row1": 0, "col1": 0, "row2": 0, "col2": 0})
        assert engine.get_state().to_dict() == before

    def test_out_of_range_or_malformed_swap_is_ignored(self, candy_state, rng):
        engine = CandyEngine(candy_state, rng=rng)
        before = candy_state.to_dict()
        engine.handle_action("swap", {"row1": 7, "col1": 7, "row2": 7, "col2": 8})
        engine.handle_action("swap", {"row1": 0, "col1": 0})
        engine.handle_action("swap", None)
        assert engine.get_state().to_dict() == before

    @pytest.mark.parametrize("payload", [
        {"row1": True, "col1": 0, "row2": 0, "col2": 1},
        {"row1": "0", "col1": 0, "row2": 0, "col2": 1},
        {"row1": 0, "col1": 0.0, "row2": 0, "col2": 1},
        {"row1": 0, "col1": 0, "row2": 0, "col2": 1.7},
    ])
    def test_non_integer_coordinates_are_ignored(self, candy_state, rng, payload):
        engine = CandyEngine(candy_state, rng=rng)
        before = candy_state.to_dict()
        engine.handle_action("swap", payload)
        assert engine.get_state().to_dict() == before

    def test_swap_without_match_reverts(self, candy_state, rng):
        engine = CandyEngine(candy_state, rng=rng)
        before = candy_state.to_dict()
        state = engine.handle_action("swap", {"row1": 7, "col1": 6, "row2": 7, "col2": 7})
        assert state.to_dict() == before
        assert state.moves_left == 20
        assert state.score == 0

    def test_matching_swap_scores_and_refills(self, candy_state, scripted_rng):
        engine = CandyEngine(candy_state, rng=scripted_rng.script(QUIET_REFILL))
        state = engine.handle_action("swap", SWAP)

        assert state.score == 30
        assert state.moves_left == 19
        assert state.combo_multiplier == 2
        assert not has_matches(state.grid)
        assert_positions_consistent(state)

        assert state.grid[0][0].id == "g01"
        assert [g.type for g in state.grid[0][1:4]] == QUIET_REFILL
        assert all(g.is_new for g in state.grid[0][1:4])
        assert {g.id for g in state.grid[0][1:4]}.isdisjoint({"g00", "g02", "g03"})

    def test_combo_multiplier_resets_each_move(self, candy_state, scripted_rng):
        candy_state.combo_multiplier = 5
        engine = CandyEngine(candy_state, rng=scripted_rng.script(QUIET_REFILL))
        state = engine.handle_action("swap", SWAP)
        assert state.score == 30
        assert state.combo_multiplier == 2


class TestCascade:
    """Tests for chained matches."""

    def test_refill_match_scores_with_multiplier(self, candy_state, scripted_rng):
        """Second round scores 3 gems x 10 x 2."""
        engine = CandyEngine(
            candy_state,
            rng=scripted_rng.script([RED, RED, RED] + QUIET_REFILL),
        )
        state = engine.handle_action("swap", SWAP)
        assert state.score == 30 + 60
        assert state.combo_multiplier == 3
        assert not has_matches(state.grid)

    def test_cascade_stops_at_cap(self, candy_state, scripted_rng):
        """A board that keeps matching stops scoring after MAX_CASCADES rounds."""
        engine = CandyEngine(
            candy_state,
            rng=scripted_rng.script([RED] * (3 * MAX_CASCADES)),
        )
        state = engine.handle_action("swap", SWAP)

        assert state.score == 30 * sum(range(1, MAX_CASCADES + 1))
        assert state.combo_multiplier == MAX_CASCADES + 1
        assert state.moves_left == 19
        assert has_matches(state.grid)


class TestCompletion:

    def test_last_move_completes(self, candy_state, scripted_rng):
        candy_state.moves_left = 1
        engine = CandyEngine(candy_state, rng=scripted_rng.script(QUIET_REFILL))
        state = engine.handle_action("swap", SWAP)
        assert state.moves_left == 0
        assert state.is_complete

    def test_reaching_target_completes(self, candy_state, scripted_rng):
        candy_state.target_score = 30
        engine = CandyEngine(candy_state, rng=scripted_rng.script(QUIET_REFILL))
        assert engine.handle_action("swap", SWAP).is_complete

    def test_no_swaps_after_completion(self, candy_state, rng):
        candy_state.is_complete = True
        engine = CandyEngine(candy_state, rng=rng)
        before = candy_state.to_dict()
        engine.handle_action("swap", SWAP)
        assert engine.get_state().to_dict() == before

        fresh = engine.handle_action("restart")
        assert not fresh.is_complete
        assert fresh.moves_left == 20

    def test_no_swaps_without_moves(self, candy_state, rng):
        candy_state.moves_left = 0
        engine = CandyEngine(candy_state, rng=rng)
        before = candy_state.to_dict()
        engine.swap(0, 0, 0, 1)
        assert engine.get_state().to_dict() == before


class TestPersistence:

    def test_round_trip(self, rng):
        state = CandyEngine(rng=rng).get_state()
        assert CandyState.from_dict(state.to_dict()) == state

    def test_resume_from_dict(self, candy_state, scripted_rng):
        engine = CandyEngine(candy_state.to_dict(), rng=scripted_rng.script(QUIET_REFILL))
        assert engine.handle_action("swap", SWAP).score == 30

    def test_resumed_game_plays_identically(self, candy_state):
        original = CandyEngine(candy_state.clone(), rng=random.Random(9))
        resumed = CandyEngine(candy_state.to_dict(), rng=random.Random(9))

        swaps = [SWAP, {"row1": 7, "col1": 6, "row2": 7, "col2": 7}, {"row1": 4, "col1": 2, "row2": 5, "col2": 2}]
        for payload in swaps:
            a = original.handle_action("swap", payload)
            b = resumed.handle_action("swap", payload)
            assert a.to_dict() == b.to_dict()

    def test_wrong_grid_size_is_rejected(self, candy_state):
        data = candy_state.to_dict()
        data["grid"] = data["grid"][:7]
        with pytest.raises(ValueError, match="8x8"):
            CandyState.from_dict(data)

        data = candy_state.to_dict()
        data["grid"][3] = data["grid"][3][:4]
        with pytest.raises(ValueError):
            CandyState.from_dict(data)

    def test_get_state_is_idempotent(self, rng):
        engine = CandyEngine(rng=rng)
        assert engine.get_state().to_dict() == engine.get_state().to_dict()
