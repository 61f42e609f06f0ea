"""
API Module - Web client interface.

Exposes the engines via REST:
1. List the game catalogue
2. Start or resume a game session
3. Send actions and receive the resulting state
4. Preview 2048 slides before the authoritative result arrives

All state is session-scoped. Saving games is left to the client.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    ActionRequest,
    Preview2048Request,
    # Responses
    SessionResponse,
    ActionResponse,
    PreviewResponse,
    GameListResponse,
    ErrorResponse,
    # Enums
    ErrorCode,
    SessionStatus,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "ActionRequest",
    "Preview2048Request",
    # Responses
    "SessionResponse",
    "ActionResponse",
    "PreviewResponse",
    "GameListResponse",
    "ErrorResponse",
    # Enums
    "ErrorCode",
    "SessionStatus",
    # Service
    "APIService",
    "create_app",
]
