"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to controller commands
2. Manages sessions and their controllers
3. Formats snapshots and results for clients

This layer is framework-agnostic (can be used with FastAPI, a CLI, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable
import logging

from pydantic import ValidationError as PydanticValidationError

from .schemas import (
    # Requests
    CreateSessionRequest,
    # Responses
    SessionResponse,
    SnapshotResponse,
    CommandResponse,
    ResultsResponse,
    ErrorResponse,
    # Shared
    DescriptionInfo,
    JobInfo,
    JobResultInfo,
    TimerInfo,
    # Enums
    SessionStatus,
    ErrorCode,
)
from ..config import GameConfig
from ..engine_core.action import ActionResult
from ..engine_core.state import VoteDirection
from ..games.job_titles import catalog_from_definitions
from ..session import SessionManager, Session, GameController, SessionSnapshot

logger = logging.getLogger(__name__)

# Engine error codes that surface to clients; anything else is internal
_ENGINE_ERROR_CODES = {
    "VALIDATION_ERROR": ErrorCode.VALIDATION_ERROR,
    "SESSION_COMPLETE": ErrorCode.SESSION_COMPLETE,
}


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        session = service.create_session(CreateSessionRequest())
        service.vote(session.session_id, 1, "1-1", "up")
        service.next_question(session.session_id)
        snapshot = service.get_snapshot(session.session_id)
    """
    config: GameConfig = field(default_factory=GameConfig)
    session_manager: SessionManager | None = None

    # Controllers per session
    _controllers: dict[str, GameController] = field(default_factory=dict)

    def __post_init__(self):
        if self.session_manager is None:
            self.session_manager = SessionManager(self.config)

    def create_session(self, request: CreateSessionRequest) -> SessionResponse | ErrorResponse:
        """
        Create a new game session.
        """
        catalog = None
        if request.jobs is not None:
            try:
                catalog = catalog_from_definitions(
                    [job.model_dump() for job in request.jobs]
                )
            except (PydanticValidationError, ValueError) as e:
                return ErrorResponse(
                    error=f"Invalid catalog: {e}",
                    error_code=ErrorCode.INVALID_CATALOG,
                )

        session = self.session_manager.create_session(
            catalog=catalog,
            timer_seconds=request.timer_seconds,
            expiry=request.timer_expiry,
        )
        self._controllers[session.session_id] = GameController(session)

        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        """
        Get session status.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_to_response(session)

    def get_controller(self, session_id: str) -> GameController | None:
        """Controller for a live session."""
        if not self.session_manager.get_session(session_id):
            return None
        return self._controllers.get(session_id)

    def get_snapshot(self, session_id: str) -> SnapshotResponse | ErrorResponse:
        """
        Get the current snapshot.
        """
        controller = self.get_controller(session_id)
        if not controller:
            return self._not_found(session_id)
        return self._snapshot_to_response(controller.session, controller.snapshot())

    def get_results(self, session_id: str) -> ResultsResponse | ErrorResponse:
        """
        Get the results board.
        """
        controller = self.get_controller(session_id)
        if not controller:
            return self._not_found(session_id)

        return ResultsResponse(
            session_id=session_id,
            is_complete=controller.state.is_complete,
            results=[
                JobResultInfo.model_validate(result)
                for result in controller.results()
            ],
        )

    # =========================================================================
    # Commands
    # =========================================================================

    def vote(
        self,
        session_id: str,
        job_id: int,
        description_id: str,
        direction: VoteDirection | str,
    ) -> CommandResponse | ErrorResponse:
        return self._run(session_id, lambda c: c.vote(job_id, description_id, direction))

    def add_description(
        self,
        session_id: str,
        job_id: int,
        text: str,
        contributor: str,
    ) -> CommandResponse | ErrorResponse:
        return self._run(session_id, lambda c: c.add_description(job_id, text, contributor))

    def delete_description(
        self,
        session_id: str,
        job_id: int,
        description_id: str,
    ) -> CommandResponse | ErrorResponse:
        return self._run(session_id, lambda c: c.delete_description(job_id, description_id))

    def next_question(self, session_id: str) -> CommandResponse | ErrorResponse:
        return self._run(session_id, lambda c: c.next_question())

    def previous_question(self, session_id: str) -> CommandResponse | ErrorResponse:
        return self._run(session_id, lambda c: c.previous_question())

    def restart(self, session_id: str, reset_content: bool = False) -> CommandResponse | ErrorResponse:
        return self._run(session_id, lambda c: c.restart(reset_content=reset_content))

    def start_timer(self, session_id: str) -> CommandResponse | ErrorResponse:
        return self._run(session_id, lambda c: c.start_timer())

    def pause_timer(self, session_id: str) -> CommandResponse | ErrorResponse:
        return self._run(session_id, lambda c: c.pause_timer())

    def reset_timer(self, session_id: str) -> CommandResponse | ErrorResponse:
        return self._run(session_id, lambda c: c.reset_timer())

    def tick(self, session_id: str) -> CommandResponse | ErrorResponse:
        return self._run(session_id, lambda c: c.tick())

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        """
        End a game session.
        """
        self._controllers.pop(session_id, None)
        return self.session_manager.end_session(session_id, reason)

    def cleanup_stale_sessions(self, max_age_seconds: int | None = None) -> list[str]:
        """
        End sessions older than max_age (config.session_max_age by default)
        and drop their controllers. Returns the removed IDs.
        """
        removed = self.session_manager.cleanup_stale_sessions(max_age_seconds)
        for session_id in removed:
            self._controllers.pop(session_id, None)
        if removed:
            logger.info("Cleaned up %d stale sessions", len(removed))
        return removed

    def list_sessions(self) -> list[str]:
        """
        List active session IDs.
        """
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _run(
        self,
        session_id: str,
        command: Callable[[GameController], ActionResult],
    ) -> CommandResponse | ErrorResponse:
        """Run a command against a session and format the outcome."""
        controller = self.get_controller(session_id)
        if not controller:
            return self._not_found(session_id)

        result = command(controller)
        if not result.success:
            return ErrorResponse(
                error=result.error or "Command failed",
                error_code=_ENGINE_ERROR_CODES.get(result.error_code, ErrorCode.INTERNAL_ERROR),
                details={"engine_error_code": result.error_code},
            )

        return CommandResponse(
            success=True,
            changed=result.changed,
            state_changes=result.state_changes,
            created_id=result.created_id,
            snapshot=self._snapshot_to_response(controller.session, controller.snapshot()),
        )

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _session_to_response(self, session: Session) -> SessionResponse:
        """Convert Session to SessionResponse."""
        return SessionResponse(
            session_id=session.session_id,
            status=SessionStatus(session.status.value),
            total_questions=session.state.total_jobs,
            timer_seconds=session.state.timer.duration,
            timer_expiry=session.expiry,
            created_at=session.created_at,
        )

    def _snapshot_to_response(
        self,
        session: Session,
        snapshot: SessionSnapshot,
    ) -> SnapshotResponse:
        """Convert SessionSnapshot to SnapshotResponse."""
        current_job = None
        if snapshot.current_job is not None:
            current_job = JobInfo(
                job_id=snapshot.current_job.job_id,
                title=snapshot.current_job.title,
                descriptions=[
                    DescriptionInfo.model_validate(d)
                    for d in snapshot.current_job.descriptions
                ],
            )

        return SnapshotResponse(
            session_id=session.session_id,
            status=SessionStatus(session.status.value),
            current_index=snapshot.current_index,
            question_number=snapshot.question_number,
            total_questions=snapshot.total_questions,
            is_complete=snapshot.is_complete,
            timer=TimerInfo.model_validate(snapshot.timer),
            current_job=current_job,
            results=[JobResultInfo.model_validate(r) for r in snapshot.results],
        )
