"""
Tests for API layer.

Tests:
- API service methods
- Session lifecycle via API
- Error handling
"""

import pytest
from pydantic import ValidationError

from ..api.schemas import (
    CreateSessionRequest,
    JobDefinition,
    DescriptionDefinition,
    SessionResponse,
    SnapshotResponse,
    CommandResponse,
    ErrorResponse,
    SessionStatus,
    ErrorCode,
)
from ..api.service import APIService
from ..config import GameConfig
from ..engine_core.timer import TimerExpiry


class TestAPIService:
    """Tests for APIService."""

    @pytest.fixture
    def service(self):
        """Create a fresh API service."""
        return APIService(config=GameConfig(timer_seconds=45))

    @pytest.fixture
    def session_id(self, service):
        return service.create_session(CreateSessionRequest()).session_id

    def test_create_session(self, service):
        """Default catalog and configured timer."""
        response = service.create_session(CreateSessionRequest())

        assert isinstance(response, SessionResponse)
        assert response.status == SessionStatus.ACTIVE
        assert response.total_questions == 2
        assert response.timer_seconds == 45
        assert response.timer_expiry == TimerExpiry.HOLD

    def test_create_session_inline_catalog(self, service):
        request = CreateSessionRequest(
            timer_seconds=10,
            timer_expiry=TimerExpiry.ADVANCE,
            jobs=[JobDefinition(id=3, title="Nurse", descriptions=[
                DescriptionDefinition(id="n", text="Cares for patients", contributor="Pat"),
            ])],
        )

        response = service.create_session(request)

        assert response.total_questions == 1
        assert response.timer_seconds == 10
        assert response.timer_expiry == TimerExpiry.ADVANCE

    def test_blank_description_rejected_by_request(self):
        """Inline catalogs are validated when the request is built."""
        with pytest.raises(ValidationError):
            CreateSessionRequest(jobs=[{"id": 3, "title": "Nurse", "descriptions": [
                {"id": "n", "text": "  ", "contributor": "Pat"},
            ]}])

    def test_duplicate_description_ids_rejected_by_request(self):
        with pytest.raises(ValidationError):
            CreateSessionRequest(jobs=[{"id": 3, "title": "Nurse", "descriptions": [
                {"id": "n", "text": "Cares", "contributor": "Pat"},
                {"id": "n", "text": "Heals", "contributor": "Sam"},
            ]}])

    def test_create_session_duplicate_job_ids(self, service):
        request = CreateSessionRequest(jobs=[
            JobDefinition(id=1, title="A"),
            JobDefinition(id=1, title="B"),
        ])

        response = service.create_session(request)

        assert response.error_code == ErrorCode.INVALID_CATALOG

    def test_get_session(self, service, session_id):
        response = service.get_session(session_id)
        assert response.session_id == session_id

    def test_get_snapshot(self, service, session_id):
        response = service.get_snapshot(session_id)

        assert isinstance(response, SnapshotResponse)
        assert response.question_number == 1
        assert response.current_job.title is None
        assert [d.rank for d in response.current_job.descriptions] == [1, 2, 3]
        assert response.timer.remaining_seconds == 45
        assert response.results == []

    def test_unknown_session(self, service):
        for response in (
            service.get_session("nope"),
            service.get_snapshot("nope"),
            service.get_results("nope"),
            service.next_question("nope"),
        ):
            assert isinstance(response, ErrorResponse)
            assert response.error_code == ErrorCode.SESSION_NOT_FOUND

    def test_vote_and_add(self, service, session_id):
        service.vote(session_id, 1, "1-1", "up")
        response = service.add_description(session_id, 1, "Reviews pull requests", "Sky")

        assert isinstance(response, CommandResponse)
        assert response.changed
        assert response.created_id is not None
        votes = {d.description_id: d.votes for d in response.snapshot.current_job.descriptions}
        assert votes["1-1"] == 6
        assert votes[response.created_id] == 0

    def test_add_empty_is_validation_error(self, service, session_id):
        response = service.add_description(session_id, 1, "", "Sky")

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.VALIDATION_ERROR
        assert response.details == {"engine_error_code": "VALIDATION_ERROR"}

    def test_no_op_command(self, service, session_id):
        response = service.delete_description(session_id, 1, "missing")

        assert response.success
        assert not response.changed

    def test_navigation_and_results(self, service, session_id):
        assert service.get_results(session_id).results == []

        service.next_question(session_id)
        response = service.next_question(session_id)

        assert response.snapshot.is_complete
        assert response.snapshot.status == SessionStatus.COMPLETE
        results = service.get_results(session_id)
        assert results.is_complete
        assert [r.title for r in results.results] == ["Software Engineer", "Graphic Designer"]

        previous = service.previous_question(session_id)
        assert previous.error_code == ErrorCode.SESSION_COMPLETE

        restarted = service.restart(session_id)
        assert restarted.snapshot.current_index == 0

    def test_timer_commands(self, service, session_id):
        service.start_timer(session_id)
        service.tick(session_id)
        response = service.tick(session_id)
        assert response.snapshot.timer.remaining_seconds == 43

        response = service.pause_timer(session_id)
        assert not response.snapshot.timer.is_running

        response = service.reset_timer(session_id)
        assert response.snapshot.timer.remaining_seconds == 45

    def test_cleanup_stale_sessions(self, service, session_id):
        """Stale sessions lose their controller along with the session."""
        fresh = service.create_session(CreateSessionRequest()).session_id
        service.session_manager.get_session(session_id).created_at -= 7200

        removed = service.cleanup_stale_sessions()

        assert removed == [session_id]
        assert service.get_controller(session_id) is None
        assert session_id not in service._controllers
        assert service.list_sessions() == [fresh]
        assert service.get_snapshot(session_id).error_code == ErrorCode.SESSION_NOT_FOUND

    def test_end_session(self, service, session_id):
        assert service.end_session(session_id)
        assert service.get_controller(session_id) is None
        assert session_id not in service.list_sessions()
        assert not service.end_session(session_id)
