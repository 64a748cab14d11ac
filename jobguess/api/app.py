"""
FastAPI Application - REST API for presentation clients.

Endpoints:
    POST   /api/v1/sessions                         Create game session
    GET    /api/v1/sessions                         List active sessions
    GET    /api/v1/sessions/{id}                    Get session status
    DELETE /api/v1/sessions/{id}                    End session
    GET    /api/v1/sessions/{id}/snapshot           Get current snapshot
    GET    /api/v1/sessions/{id}/results            Get results board
    POST   /api/v1/sessions/{id}/jobs/{job}/descriptions                 Add description
    DELETE /api/v1/sessions/{id}/jobs/{job}/descriptions/{desc}          Delete description
    POST   /api/v1/sessions/{id}/jobs/{job}/descriptions/{desc}/vote     Vote
    POST   /api/v1/sessions/{id}/next               Next question
    POST   /api/v1/sessions/{id}/previous           Previous question
    POST   /api/v1/sessions/{id}/restart            Restart
    POST   /api/v1/sessions/{id}/timer/{command}    start | pause | reset | tick
    WS     /api/v1/sessions/{id}/ws                 WebSocket for snapshot updates

Timer Flow:
    With JOBGUESS_SERVER_CLOCK enabled, POST /timer/start also starts a
    server-side clock that ticks once per second and pushes snapshots over
    the WebSocket. Pause, restart and session end stop it. Clients that
    drive their own clock disable it and POST /timer/tick instead.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional, Union
import json
import logging

from ..config import GameConfig

logger = logging.getLogger(__name__)


def create_app(service=None, config: Optional[GameConfig] = None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        config: Optional GameConfig (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect, Body, Query
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        # Request models
        CreateSessionRequest,
        VoteRequest,
        AddDescriptionRequest,
        RestartRequest,
        # Response models
        SessionResponse,
        SnapshotResponse,
        CommandResponse,
        ResultsResponse,
        ErrorResponse,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
        # Enums
        ErrorCode,
    )
    from ..session import SessionClock

    if config is None:
        config = service.config if service is not None else GameConfig()

    app = FastAPI(
        title="Job Guess API",
        description="""
Guessing-game session manager: players read crowd-written descriptions of a
job, vote them up or down, and guess the hidden title.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist or has ended |
| `VALIDATION_ERROR` | Description text or contributor is empty |
| `SESSION_COMPLETE` | Navigation rejected while results are showing |
| `INVALID_CATALOG` | Inline job catalog is malformed |
        """,
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Service instance
    api_service = service or APIService(config=config)

    # WebSocket connections and server clocks per session
    ws_connections: dict[str, list[WebSocket]] = {}
    clocks: dict[str, SessionClock] = {}
    app.state.clocks = clocks

    status_codes = {
        ErrorCode.SESSION_NOT_FOUND: 404,
        ErrorCode.VALIDATION_ERROR: 400,
        ErrorCode.INVALID_CATALOG: 400,
        ErrorCode.SESSION_COMPLETE: 409,
        ErrorCode.INTERNAL_ERROR: 500,
    }

    # =========================================================================
    # Helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_codes.get(error.error_code, 400),
            content=error.model_dump(mode="json"),
        )

    async def broadcast_to_session(session_id: str, message: dict):
        """Broadcast a message to all WebSocket connections for a session."""
        if session_id in ws_connections:
            dead_connections = []
            for ws in ws_connections[session_id]:
                try:
                    await ws.send_json(message)
                except Exception:
                    dead_connections.append(ws)
            for ws in dead_connections:
                ws_connections[session_id].remove(ws)

    async def broadcast_snapshot(session_id: str):
        snapshot = api_service.get_snapshot(session_id)
        if isinstance(snapshot, SnapshotResponse):
            await broadcast_to_session(session_id, {
                "type": "snapshot",
                "payload": snapshot.model_dump(mode="json"),
            })

    async def stop_clock(session_id: str):
        clock = clocks.pop(session_id, None)
        if clock is not None:
            await clock.stop()

    async def cleanup_stale_sessions():
        """End sessions past session_max_age and stop their clocks."""
        for session_id in api_service.cleanup_stale_sessions():
            await stop_clock(session_id)
            ws_connections.pop(session_id, None)

    async def command_response(
        session_id: str,
        response: Union[CommandResponse, ErrorResponse],
    ) -> Union[CommandResponse, JSONResponse]:
        """Send errors as JSON errors, broadcast changes, return the response."""
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        if response.changed:
            await broadcast_to_session(session_id, {
                "type": "snapshot",
                "payload": response.snapshot.model_dump(mode="json"),
            })
        return response

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={400: {"model": ErrorResponse, "description": "Invalid catalog"}},
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(
        body: Optional[CreateSessionRequest] = Body(None),
    ) -> Union[SessionResponse, JSONResponse]:
        """
        Create a new game session.

        Omit `jobs` to play the configured catalog. Sessions older than
        JOBGUESS_SESSION_MAX_AGE are cleaned up first.
        """
        await cleanup_stale_sessions()
        response = api_service.create_session(body or CreateSessionRequest())
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        """List all active session IDs."""
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
        """Get the current status of a game session."""
        response = api_service.get_session(session_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
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
        """End a game session and release resources."""
        await stop_clock(session_id)
        success = api_service.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    @app.get(
        "/api/v1/sessions/{session_id}/snapshot",
        response_model=SnapshotResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Get the current snapshot",
    )
    async def get_snapshot(session_id: str) -> Union[SnapshotResponse, JSONResponse]:
        """Current job (title hidden), ranked descriptions, position and timer."""
        response = api_service.get_snapshot(session_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.get(
        "/api/v1/sessions/{session_id}/results",
        response_model=ResultsResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Get the results board",
    )
    async def get_results(session_id: str) -> Union[ResultsResponse, JSONResponse]:
        """Every job's title with its ranked descriptions, once complete."""
        response = api_service.get_results(session_id)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # Description Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/jobs/{job_id}/descriptions",
        response_model=CommandResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Empty text or contributor"},
            404: {"model": ErrorResponse},
        },
        tags=["Descriptions"],
        summary="Add a description to a job",
    )
    async def add_description(
        session_id: str,
        job_id: int,
        body: AddDescriptionRequest,
    ) -> Union[CommandResponse, JSONResponse]:
        """
        Submit a description. An unknown job id is accepted as a no-op
        (`changed=false`).
        """
        response = api_service.add_description(session_id, job_id, body.text, body.contributor)
        return await command_response(session_id, response)

    @app.delete(
        "/api/v1/sessions/{session_id}/jobs/{job_id}/descriptions/{description_id}",
        response_model=CommandResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Descriptions"],
        summary="Delete a description",
    )
    async def delete_description(
        session_id: str,
        job_id: int,
        description_id: str,
    ) -> Union[CommandResponse, JSONResponse]:
        """Delete a description. Unknown ids are a no-op."""
        response = api_service.delete_description(session_id, job_id, description_id)
        return await command_response(session_id, response)

    @app.post(
        "/api/v1/sessions/{session_id}/jobs/{job_id}/descriptions/{description_id}/vote",
        response_model=CommandResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Descriptions"],
        summary="Vote a description up or down",
    )
    async def vote(
        session_id: str,
        job_id: int,
        description_id: str,
        body: VoteRequest,
    ) -> Union[CommandResponse, JSONResponse]:
        """Vote up or down. Unknown ids are a no-op."""
        response = api_service.vote(session_id, job_id, description_id, body.direction)
        return await command_response(session_id, response)

    # =========================================================================
    # Navigation Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/next",
        response_model=CommandResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Navigation"],
        summary="Go to the next question, or to results after the last one",
    )
    async def next_question(session_id: str) -> Union[CommandResponse, JSONResponse]:
        response = api_service.next_question(session_id)
        return await command_response(session_id, response)

    @app.post(
        "/api/v1/sessions/{session_id}/previous",
        response_model=CommandResponse,
        responses={
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse, "description": "Session is complete"},
        },
        tags=["Navigation"],
        summary="Go to the previous question",
    )
    async def previous_question(session_id: str) -> Union[CommandResponse, JSONResponse]:
        response = api_service.previous_question(session_id)
        return await command_response(session_id, response)

    @app.post(
        "/api/v1/sessions/{session_id}/restart",
        response_model=CommandResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Navigation"],
        summary="Restart from the first question",
    )
    async def restart(
        session_id: str,
        body: Optional[RestartRequest] = Body(None),
    ) -> Union[CommandResponse, JSONResponse]:
        """
        Back to question 1 with a paused, full timer. Descriptions and votes
        are kept unless `reset_content` is true.
        """
        await stop_clock(session_id)
        reset_content = body.reset_content if body else False
        response = api_service.restart(session_id, reset_content=reset_content)
        return await command_response(session_id, response)

    # =========================================================================
    # Timer Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/timer/{command}",
        response_model=CommandResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Timer"],
        summary="Start, pause, reset or tick the countdown",
    )
    async def timer_command(session_id: str, command: str) -> Union[CommandResponse, JSONResponse]:
        handlers = {
            "start": api_service.start_timer,
            "pause": api_service.pause_timer,
            "reset": api_service.reset_timer,
            "tick": api_service.tick,
        }
        handler = handlers.get(command)
        if handler is None:
            raise HTTPException(status_code=404, detail=f"Unknown timer command: {command}")

        if command == "pause":
            await stop_clock(session_id)

        response = handler(session_id)

        if command == "start" and config.server_clock and isinstance(response, CommandResponse):
            controller = api_service.get_controller(session_id)
            running = clocks.get(session_id)
            if controller is not None and (running is None or not running.is_running):
                clock = SessionClock(
                    controller,
                    interval=config.clock_interval,
                    on_tick=lambda _snapshot: broadcast_snapshot(session_id),
                )
                clocks[session_id] = clock
                clock.start()

        return await command_response(session_id, response)

    # =========================================================================
    # WebSocket Endpoint
    # =========================================================================

    @app.websocket("/api/v1/sessions/{session_id}/ws")
    async def websocket_endpoint(websocket: WebSocket, session_id: str):
        """
        WebSocket for real-time updates.

        Messages from server:
        - snapshot: Session state changed (payload is a SnapshotResponse)
        - error: Error occurred

        Messages from client:
        - ping: Keep-alive
        """
        await websocket.accept()

        if session_id not in ws_connections:
            ws_connections[session_id] = []
        ws_connections[session_id].append(websocket)

        try:
            # Send initial state
            response = api_service.get_snapshot(session_id)
            if isinstance(response, SnapshotResponse):
                await websocket.send_json({
                    "type": "snapshot",
                    "payload": response.model_dump(mode="json"),
                })
            else:
                await websocket.send_json({
                    "type": "error",
                    "payload": response.model_dump(mode="json"),
                })

            # Listen for messages
            while True:
                data = await websocket.receive_text()
                try:
                    message = json.loads(data)
                    if message.get("type") == "ping":
                        await websocket.send_json({"type": "pong"})
                except json.JSONDecodeError:
                    await websocket.send_json({
                        "type": "error",
                        "payload": {"message": "Invalid JSON"},
                    })

        except WebSocketDisconnect:
            logger.debug("WebSocket closed for session %s", session_id)
        finally:
            if session_id in ws_connections:
                if websocket in ws_connections[session_id]:
                    ws_connections[session_id].remove(websocket)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="jobguess",
            version="1.0.0",
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Job Guess API",
            "version": "1.0.0",
            "docs": "/api/docs",
            "health": "/health",
        }

    return app
