"""
FastAPI Application - REST API for the game engines.

Endpoints:
    GET    /api/v1/health                    Health check
    GET    /api/v1/games                     Game catalogue
    POST   /api/v1/sessions                  Start or resume a game
    GET    /api/v1/sessions                  List sessions
    GET    /api/v1/sessions/{id}             Session status and state
    POST   /api/v1/sessions/{id}/actions     Apply an action
    DELETE /api/v1/sessions/{id}             End a session
    POST   /api/v1/preview/2048              Optimistic 2048 slide

Actions the rules reject are not errors: the response has changed=false.
All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional, Union
import os

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from .service import APIService
from .schemas import (
    CreateSessionRequest,
    ActionRequest,
    Preview2048Request,
    ErrorCode,
    ErrorResponse,
    GameListResponse,
    SessionResponse,
    ActionResponse,
    PreviewResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
)

# Environment configuration
PLAYARENA_ENV = os.getenv("PLAYARENA_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")


def create_app(service: Optional[APIService] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="PlayArena Engine API",
        description="""
Rule engines for PlayArena's single-player games: 2048, Memory, Candy and Sudoku.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `UNKNOWN_GAME` | Game type has no engine |
| `UNKNOWN_ACTION` | Action name not recognised |
| `VALIDATION_ERROR` | Malformed request or saved state |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def from_error(response: ErrorResponse) -> JSONResponse:
        status_code = 404 if response.error_code == ErrorCode.SESSION_NOT_FOUND else 400
        return make_error_response(
            response.error_code, response.error, status_code, response.details
        )

    # =========================================================================
    # Catalogue
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["System"])
    async def health() -> HealthResponse:
        return HealthResponse(
            status="ok",
            service="playarena",
            version=__version__,
            environment=PLAYARENA_ENV,
        )

    @app.get("/api/v1/games", response_model=GameListResponse, tags=["Games"])
    async def list_games() -> GameListResponse:
        """List the games that have an engine."""
        return api_service.list_games()

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Start or resume a game",
    )
    async def create_session(request: CreateSessionRequest) -> Union[SessionResponse, JSONResponse]:
        """
        Start a game.

        Pass `state` to resume a saved game instead.
        """
        try:
            return api_service.create_session(request)
        except ValueError as e:
            error_msg = str(e)
            if "unknown game" in error_msg.lower():
                return make_error_response(ErrorCode.UNKNOWN_GAME, error_msg)
            return make_error_response(ErrorCode.VALIDATION_ERROR, error_msg)

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        response = api_service.get_session(session_id)
        if isinstance(response, ErrorResponse):
            return from_error(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/actions",
        response_model=ActionResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Unknown action"},
            404: {"model": ErrorResponse, "description": "Session not found"},
        },
        tags=["Game Loop"],
        summary="Apply an action",
    )
    async def apply_action(session_id: str, request: ActionRequest) -> Union[ActionResponse, JSONResponse]:
        """
        Apply one action to the session's engine.

        **Examples:**
        ```json
        {"action": "move", "payload": {"direction": "left"}}
        {"action": "flip", "payload": {"cardId": "card-3"}}
        {"action": "swap", "payload": {"row1": 0, "col1": 0, "row2": 0, "col2": 1}}
        {"action": "move", "payload": {"row": 4, "col": 4, "value": 9}}
        ```
        """
        response = api_service.apply_action(session_id, request)
        if isinstance(response, ErrorResponse):
            return from_error(response)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(
        session_id: str,
        reason: str = Query("user_ended", description="Reason for ending"),
    ) -> EndSessionResponse:
        return api_service.end_session(session_id, reason)

    # =========================================================================
    # Preview
    # =========================================================================

    @app.post(
        "/api/v1/preview/2048",
        response_model=PreviewResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Slide a 2048 grid without spawning",
    )
    async def preview_2048(request: Preview2048Request) -> Union[PreviewResponse, JSONResponse]:
        try:
            return api_service.preview_2048(request)
        except ValueError as e:
            return make_error_response(ErrorCode.VALIDATION_ERROR, str(e))

    return app


# For running directly: uvicorn playarena.api.app:app
app = create_app()
