"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between the web client and the engines.
Game states travel as the same camelCase JSON the engines persist.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has been ended
- UNKNOWN_GAME: Game type has no engine
- UNKNOWN_ACTION: Action name is not one the engines understand
- VALIDATION_ERROR: Request body or supplied state is malformed
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    FINISHED = "finished"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    UNKNOWN_GAME = "UNKNOWN_GAME"
    UNKNOWN_ACTION = "UNKNOWN_ACTION"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to start or resume a game."""
    game_type: str = Field(..., description="2048, memory, candy or sudoku")
    seed: Optional[int] = Field(None, description="Seed for a reproducible game")
    difficulty: Optional[str] = Field(None, description="Sudoku only: easy, medium, hard")
    challenge_mode: bool = Field(False, description="Sudoku only: mistake limit and clock")
    state: Optional[dict[str, Any]] = Field(None, description="Saved state to resume")


class ActionRequest(BaseModel):
    """An action for a session's engine."""
    action: str = Field(..., description="move, flip, swap, keep_playing, restart, new_game")
    payload: dict[str, Any] = Field(default_factory=dict)


class Preview2048Request(BaseModel):
    """Optimistic 2048 slide, computed without touching any session."""
    state: dict[str, Any]
    direction: str


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameInfo(BaseModel):
    """Catalogue entry."""
    game_type: str
    name: str
    description: str
    actions: list[str] = Field(default_factory=list)
    storage_key: str


class GameListResponse(BaseModel):
    games: list[GameInfo]
    count: int


class SessionResponse(BaseModel):
    """Session information with the current game state."""
    session_id: str
    game_type: str
    status: SessionStatus
    created_at: float = 0.0
    action_count: int = 0
    time_remaining: Optional[float] = Field(
        None, description="Sudoku challenge clock, seconds"
    )
    state: dict[str, Any]
    api_version: str = "v1"


class ActionResponse(BaseModel):
    """Result of one action."""
    session_id: str
    action: str
    changed: bool = Field(..., description="False when the rules ignored the action")
    status: SessionStatus
    state: dict[str, Any]
    api_version: str = "v1"


class PreviewResponse(BaseModel):
    moved: bool
    state: Optional[dict[str, Any]] = None


class SessionListResponse(BaseModel):
    """Response listing sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    environment: str
