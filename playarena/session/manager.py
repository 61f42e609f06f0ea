"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. create_session(game_type) builds a fresh or resumed engine
2. handle_action() routes actions to that engine, one call at a time
3. The game finishes (engine reports is_finished) or the room is closed
4. end_session() / cleanup_finished() drop the engine

OWNERSHIP:
- Each session exclusively owns its engine
- No two sessions share an engine or a state
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any
import logging
import time
import uuid

from ..engine_core.action import Action, ActionResult, ActionType
from ..engine_core.engine import GameEngine, GameStateLike
from ..engine_core.randomness import make_rng
from ..games import GameType, create_engine, get_game_type

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    FINISHED = "finished"  # Engine reports the game is over
    ENDED = "ended"  # Closed by the player or cleanup


@dataclass
class GameSession:
    """
    A live game.

    Contains:
    - The engine (authoritative for this session)
    - Which game it is
    - Activity counters for cleanup
    """
    session_id: str
    game_type: GameType
    engine: GameEngine
    created_at: float

    ended: bool = False
    last_action_at: float = 0.0
    action_count: int = 0

    @property
    def game_state(self) -> GameStateLike:
        return self.engine.get_state()

    @property
    def state(self) -> SessionState:
        if self.ended:
            return SessionState.ENDED
        if self.game_state.is_finished:
            return SessionState.FINISHED
        return SessionState.ACTIVE

    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    def apply(self, action: Action) -> ActionResult:
        """Run one action through the engine."""
        before = self.game_state.to_dict()
        new_state = self.engine.handle_action(action.action_type.value, action.payload)
        changed = new_state.to_dict() != before

        self.action_count += 1
        self.last_action_at = action.timestamp or time.time()
        return ActionResult.success_with_state(new_state, changed=changed)


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions with fresh or restored engines
    - Route actions
    - Clean up finished, idle or expired sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, GameSession] = {}

    def create_session(
        self,
        game_type: str | GameType,
        initial_state: Any = None,
        seed: int | None = None,
        **options: Any,
    ) -> GameSession:
        """
        Create a new game session.

        Args:
            game_type: Which game to play
            initial_state: Saved state (object or dict) to resume
            seed: Seed for the engine's random source
            **options: Engine options (Sudoku: difficulty, challenge_mode)

        Returns:
            New GameSession

        Raises:
            ValueError: Unknown game type
        """
        game_type = get_game_type(game_type)
        engine = create_engine(game_type, initial_state, rng=make_rng(seed), **options)

        session = GameSession(
            session_id=str(uuid.uuid4()),
            game_type=game_type,
            engine=engine,
            created_at=time.time(),
        )
        self._sessions[session.session_id] = session
        logger.info("Created %s session %s", game_type.value, session.session_id)
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        """Get session by ID."""
        return self._sessions.get(session_id)

    def handle_action(
        self,
        session_id: str,
        action: Action | str,
        payload: dict[str, Any] | None = None,
    ) -> ActionResult:
        """
        Apply an action to a session's engine.

        Unknown sessions and unknown action names are reported as
        failures. Moves the rules reject succeed with changed=False.
        """
        session = self._sessions.get(session_id)
        if not session:
            return ActionResult.failure("Session not found", error_code="SESSION_NOT_FOUND")

        if not isinstance(action, Action):
            action_type = ActionType.parse(action)
            if action_type is None:
                return ActionResult.failure(f"Unknown action: {action}", error_code="UNKNOWN_ACTION")
            action = Action(action_type=action_type, payload=dict(payload or {}))

        result = session.apply(action)
        logger.debug(
            "Session %s: %s changed=%s",
            session_id, action.action_type.value, result.changed,
        )
        return result

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        """
        End a session and drop its engine.

        Returns False if there was no such session.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        session.ended = True
        logger.info("Ended session %s (%s)", session_id, reason)
        return True

    def list_sessions(self) -> list[str]:
        """IDs of all sessions, finished ones included."""
        return list(self._sessions)

    def list_active_sessions(self) -> list[str]:
        return [sid for sid, s in self._sessions.items() if s.is_active()]

    def sweep_timeouts(self) -> list[str]:
        """
        Run the challenge clock check on every Sudoku session.

        Returns IDs of sessions this call ended.
        """
        expired = []
        for session_id, session in self._sessions.items():
            if session.game_type is GameType.SUDOKU and session.engine.check_timeout():
                expired.append(session_id)
        for session_id in expired:
            logger.info("Session %s ran out of time", session_id)
        return expired

    def cleanup_finished(self, max_idle_seconds: float | None = None) -> list[str]:
        """
        Drop finished sessions, and idle ones if max_idle_seconds is given.

        Returns IDs of removed sessions.
        """
        now = time.time()
        to_remove = []
        for session_id, session in self._sessions.items():
            last_seen = session.last_action_at or session.created_at
            if not session.is_active():
                to_remove.append(session_id)
            elif max_idle_seconds is not None and now - last_seen > max_idle_seconds:
                to_remove.append(session_id)

        for session_id in to_remove:
            self.end_session(session_id, reason="cleanup")
        return to_remove
