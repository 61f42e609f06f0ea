"""
API Service - Business logic layer between API and engines.

The service:
1. Translates API requests to session calls
2. Serializes engine states for the wire
3. Reports missing sessions and bad input as ErrorResponse

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .schemas import (
    CreateSessionRequest,
    ActionRequest,
    Preview2048Request,
    ErrorCode,
    ErrorResponse,
    GameInfo,
    GameListResponse,
    SessionResponse,
    ActionResponse,
    PreviewResponse,
    EndSessionResponse,
    SessionStatus,
)
from ..games import GAMES, GameType, get_game_type
from ..games.game_2048 import Game2048State, calculate_next_state
from ..session import SessionManager, GameSession

logger = logging.getLogger(__name__)


@dataclass
class APIService:
    """
    Main API service for the web client.

    Usage:
        service = APIService()

        session = service.create_session(CreateSessionRequest(game_type="2048"))
        result = service.apply_action(
            session.session_id,
            ActionRequest(action="move", payload={"direction": "left"}),
        )
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def list_games(self) -> GameListResponse:
        games = [
            GameInfo(
                game_type=info.game_type.value,
                name=info.name,
                description=info.description,
                actions=list(info.actions),
                storage_key=info.game_type.storage_key,
            )
            for info in GAMES.values()
        ]
        return GameListResponse(games=games, count=len(games))

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """
        Create a new game session.

        Raises:
            ValueError: Unknown game type or unreadable saved state
        """
        game_type = get_game_type(request.game_type)

        options = {}
        if game_type is GameType.SUDOKU:
            options = {
                "difficulty": request.difficulty,
                "challenge_mode": request.challenge_mode,
            }

        try:
            session = self.session_manager.create_session(
                game_type,
                initial_state=request.state,
                seed=request.seed,
                **options,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid saved state: {e}") from e

        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        """
        Get session status and state.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return ErrorResponse(
                error="Session not found",
                error_code=ErrorCode.SESSION_NOT_FOUND,
            )
        return self._session_to_response(session)

    def apply_action(self, session_id: str, request: ActionRequest) -> ActionResponse | ErrorResponse:
        """
        Apply one action to a session.
        """
        result = self.session_manager.handle_action(session_id, request.action, request.payload)
        if not result.success:
            return ErrorResponse(
                error=result.error,
                error_code=ErrorCode(result.error_code),
                details={"session_id": session_id, "action": request.action},
            )

        session = self.session_manager.get_session(session_id)
        return ActionResponse(
            session_id=session_id,
            action=request.action,
            changed=result.changed,
            status=self._status(session),
            state=result.new_state.to_dict(),
        )

    def end_session(self, session_id: str, reason: str = "user_ended") -> EndSessionResponse:
        """
        End a game session.
        """
        success = self.session_manager.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    def list_sessions(self) -> list[str]:
        """
        List session IDs.
        """
        return self.session_manager.list_sessions()

    def preview_2048(self, request: Preview2048Request) -> PreviewResponse:
        """
        Slide a 2048 grid without spawning a tile.

        Raises:
            ValueError: Malformed state
        """
        try:
            state = Game2048State.from_dict(request.state)
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid 2048 state: {e}") from e

        next_state = calculate_next_state(state, request.direction)
        if next_state is None:
            return PreviewResponse(moved=False)
        return PreviewResponse(moved=True, state=next_state.to_dict())

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _status(self, session: GameSession) -> SessionStatus:
        if session.game_state.is_finished:
            return SessionStatus.FINISHED
        return SessionStatus.ACTIVE

    def _session_to_response(self, session: GameSession) -> SessionResponse:
        """Convert GameSession to SessionResponse."""
        time_remaining = None
        if session.game_type is GameType.SUDOKU:
            time_remaining = session.engine.time_remaining()

        return SessionResponse(
            session_id=session.session_id,
            game_type=session.game_type.value,
            status=self._status(session),
            created_at=session.created_at,
            action_count=session.action_count,
            time_remaining=time_remaining,
            state=session.game_state.to_dict(),
        )
