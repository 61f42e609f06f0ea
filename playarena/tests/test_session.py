"""
Tests for the session manager.

Tests:
- Session creation and lookup
- Action routing and the changed flag
- Ending and cleanup
- Challenge clock sweeps
"""

import time

import pytest

from ..engine_core.action import Action, ActionType
from ..games import GameType
from ..games.game_2048 import Engine2048
from ..session import SessionManager, SessionState
from .conftest import make_2048_state

# Left slide changes nothing on this board
LEFT_BLOCKED = [[2, 4, None, None]] + [[None] * 4] * 3


@pytest.fixture
def manager():
    return SessionManager()


class TestSessionCreation:
    """Tests for creating sessions."""

    def test_create_session(self, manager):
        session = manager.create_session("2048", seed=1)
        assert session.game_type is GameType.GAME_2048
        assert isinstance(session.engine, Engine2048)
        assert session.state == SessionState.ACTIVE
        assert manager.get_session(session.session_id) is session

    def test_sessions_are_independent(self, manager):
        a = manager.create_session("memory", seed=1)
        b = manager.create_session("memory", seed=1)
        assert a.session_id != b.session_id
        assert a.engine is not b.engine

        first = a.game_state.cards[0].id
        manager.handle_action(a.session_id, "flip", {"cardId": first})
        assert a.game_state.get_card(first).is_flipped
        assert not b.game_state.get_card(first).is_flipped

    def test_seed_makes_games_reproducible(self, manager):
        a = manager.create_session("memory", seed=99)
        b = manager.create_session("memory", seed=99)
        assert a.game_state.to_dict() == b.game_state.to_dict()

    def test_resume_from_saved_state(self, manager):
        saved = make_2048_state(LEFT_BLOCKED, score=64).to_dict()
        session = manager.create_session("2048", initial_state=saved)
        assert session.game_state.to_dict() == saved

    def test_sudoku_options(self, manager):
        session = manager.create_session("sudoku", seed=3, difficulty="medium", challenge_mode=True)
        assert session.game_state.difficulty.value == "medium"
        assert session.game_state.time_limit == 600

    def test_unknown_game(self, manager):
        with pytest.raises(ValueError, match="Unknown game type"):
            manager.create_session("tetris")
        assert manager.list_sessions() == []

    def test_get_unknown_session(self, manager):
        assert manager.get_session("nope") is None


class TestActions:
    """Tests for routing actions."""

    def test_accepted_move_reports_change(self, manager):
        session = manager.create_session("2048", initial_state=make_2048_state(LEFT_BLOCKED), seed=5)
        result = manager.handle_action(session.session_id, "move", {"direction": "right"})

        assert result.success
        assert result.changed
        assert result.new_state is session.game_state
        assert session.action_count == 1
        assert session.last_action_at > 0

    def test_rejected_move_is_not_an_error(self, manager):
        session = manager.create_session("2048", initial_state=make_2048_state(LEFT_BLOCKED))
        result = manager.handle_action(session.session_id, "move", {"direction": "left"})

        assert result.success
        assert not result.changed
        assert result.error is None
        assert session.action_count == 1

    def test_action_objects(self, manager):
        session = manager.create_session("memory", seed=2)
        card = session.game_state.cards[0].id
        result = manager.handle_action(session.session_id, Action.flip(card))
        assert result.changed
        assert session.game_state.get_card(card).is_flipped

    def test_unknown_session(self, manager):
        result = manager.handle_action("missing", "move", {"direction": "up"})
        assert not result.success
        assert result.error_code == "SESSION_NOT_FOUND"

    def test_unknown_action(self, manager):
        session = manager.create_session("candy", seed=4)
        result = manager.handle_action(session.session_id, "teleport")
        assert not result.success
        assert result.error_code == "UNKNOWN_ACTION"
        assert session.action_count == 0

    def test_action_for_another_game_is_ignored(self, manager):
        session = manager.create_session("candy", seed=4)
        result = manager.handle_action(session.session_id, "flip", {"cardId": "card-0"})
        assert result.success
        assert not result.changed


class TestActionFactories:
    """Actions built by the Action factories reach the right engine."""

    def test_move(self, manager):
        session = manager.create_session("2048", initial_state=make_2048_state(LEFT_BLOCKED), seed=1)
        result = manager.handle_action(session.session_id, Action.move("down"))
        assert result.changed
        assert result.new_state.grid[3][0].value == 2

    def test_keep_playing(self, manager):
        won = make_2048_state(LEFT_BLOCKED, won=True)
        session = manager.create_session("2048", initial_state=won)
        result = manager.handle_action(session.session_id, Action.keep_playing())
        assert result.changed
        assert result.new_state.keep_playing
        assert not result.new_state.won

    def test_swap(self, manager, candy_state):
        session = manager.create_session("candy", initial_state=candy_state, seed=1)
        result = manager.handle_action(session.session_id, Action.swap(0, 0, 0, 1))
        assert result.changed
        assert result.new_state.moves_left == 19

    def test_place(self, manager):
        session = manager.create_session("sudoku", seed=1)
        state = session.game_state
        r, c = next(
            (cell.row, cell.col) for row in state.board for cell in row if cell.value is None
        )
        result = manager.handle_action(session.session_id, Action.place(r, c, state.solution[r][c]))
        assert result.changed
        assert result.new_state.board[r][c].value == state.solution[r][c]

    def test_new_game(self, manager):
        session = manager.create_session("sudoku", seed=1)
        result = manager.handle_action(session.session_id, Action.new_game("hard", challenge_mode=True))
        assert result.new_state.difficulty.value == "hard"
        assert result.new_state.challenge_mode

    def test_restart(self, manager):
        session = manager.create_session("memory", seed=1)
        card = session.game_state.cards[0].id
        manager.handle_action(session.session_id, Action.flip(card))
        result = manager.handle_action(session.session_id, Action.restart())
        assert result.changed
        assert result.new_state.pending == []

    def test_timestamp_marks_activity(self, manager):
        session = manager.create_session("memory", seed=1)
        manager.handle_action(session.session_id, Action(action_type=ActionType.RESTART, timestamp=123.0))
        assert session.last_action_at == 123.0


class TestLifecycle:
    """Tests for ending and cleaning up sessions."""

    def test_end_session(self, manager):
        session = manager.create_session("memory")
        assert manager.end_session(session.session_id)
        assert session.state == SessionState.ENDED
        assert manager.get_session(session.session_id) is None
        assert not manager.end_session(session.session_id)

    def test_finished_game(self, manager):
        finished = make_2048_state(LEFT_BLOCKED, game_over=True)
        session = manager.create_session("2048", initial_state=finished)
        assert session.state == SessionState.FINISHED
        assert not session.is_active()

    def test_list_active_sessions(self, manager):
        live = manager.create_session("2048")
        done = manager.create_session("2048", initial_state=make_2048_state(LEFT_BLOCKED, game_over=True))
        assert set(manager.list_sessions()) == {live.session_id, done.session_id}
        assert manager.list_active_sessions() == [live.session_id]

    def test_cleanup_finished(self, manager):
        live = manager.create_session("2048")
        done = manager.create_session("2048", initial_state=make_2048_state(LEFT_BLOCKED, game_over=True))
        assert manager.cleanup_finished() == [done.session_id]
        assert manager.list_sessions() == [live.session_id]

    def test_cleanup_idle(self, manager):
        idle = manager.create_session("memory")
        fresh = manager.create_session("memory")
        idle.created_at = time.time() - 600

        assert manager.cleanup_finished(max_idle_seconds=60) == [idle.session_id]
        assert manager.list_sessions() == [fresh.session_id]

    def test_recent_action_keeps_session(self, manager):
        session = manager.create_session("memory")
        session.created_at = time.time() - 600
        manager.handle_action(session.session_id, "restart")
        assert manager.cleanup_finished(max_idle_seconds=60) == []


class TestTimeouts:

    def test_sweep_ends_expired_challenges(self, manager):
        expired = manager.create_session("sudoku", seed=1, challenge_mode=True)
        running = manager.create_session("sudoku", seed=2, challenge_mode=True)
        classic = manager.create_session("sudoku", seed=3)
        memory = manager.create_session("memory")

        expired.engine.state.start_time -= 1000
        classic.engine.state.start_time -= 1000

        assert manager.sweep_timeouts() == [expired.session_id]
        assert expired.state == SessionState.FINISHED
        assert not expired.game_state.is_won
        assert running.is_active() and classic.is_active() and memory.is_active()
        assert manager.sweep_timeouts() == []
