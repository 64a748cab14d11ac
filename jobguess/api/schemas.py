"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between presentation clients
and the engine. All responses include explicit types for OpenAPI
schema generation.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- VALIDATION_ERROR: Description text or contributor is empty
- SESSION_COMPLETE: Navigation rejected because results are showing
- INVALID_CATALOG: Inline job catalog is malformed
- INTERNAL_ERROR: Unexpected engine failure
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

from ..engine_core.state import VoteDirection
from ..engine_core.timer import TimerExpiry
# Inline catalogs use the same validated definitions as JSON catalog files
from ..games.job_titles.setup import DescriptionDefinition, JobDefinition


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    COMPLETE = "complete"
    ENDED = "ended"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SESSION_COMPLETE = "SESSION_COMPLETE"
    INVALID_CATALOG = "INVALID_CATALOG"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class DescriptionInfo(BaseModel):
    """A description with its derived rank."""
    description_id: str
    text: str
    contributor: str
    votes: int
    rank: int = Field(..., description="1-based position by votes")

    model_config = {"from_attributes": True}


class JobInfo(BaseModel):
    """The job being guessed."""
    job_id: int
    title: Optional[str] = Field(None, description="Hidden (null) until the session is complete")
    descriptions: list[DescriptionInfo] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class JobResultInfo(BaseModel):
    """One row of the results board."""
    job_id: int
    title: str
    descriptions: list[DescriptionInfo] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class TimerInfo(BaseModel):
    """Countdown state."""
    remaining_seconds: int
    is_running: bool
    duration: int

    model_config = {"from_attributes": True}


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a game session."""
    timer_seconds: Optional[int] = Field(None, ge=1, description="Countdown per question")
    timer_expiry: Optional[TimerExpiry] = Field(
        None, description="hold, stop or advance when the countdown drains"
    )
    jobs: Optional[list[JobDefinition]] = Field(
        None, description="Inline catalog; the configured catalog is used when omitted"
    )


class VoteRequest(BaseModel):
    """Request to vote on a description."""
    direction: VoteDirection


class AddDescriptionRequest(BaseModel):
    """Request to submit a description. Empty values are rejected by the engine."""
    text: str
    contributor: str


class RestartRequest(BaseModel):
    """Request to restart a session."""
    reset_content: bool = Field(
        False, description="Also restore the descriptions and votes the session started with"
    )


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class SessionResponse(BaseModel):
    """Response containing session information."""
    session_id: str
    status: SessionStatus
    total_questions: int
    timer_seconds: int
    timer_expiry: TimerExpiry
    created_at: float = 0.0
    api_version: str = "v1"


class SnapshotResponse(BaseModel):
    """Read-only view of a session for rendering."""
    session_id: str
    status: SessionStatus
    current_index: int
    question_number: int
    total_questions: int
    is_complete: bool
    timer: TimerInfo
    current_job: Optional[JobInfo] = None
    results: list[JobResultInfo] = Field(default_factory=list)
    api_version: str = "v1"


class CommandResponse(BaseModel):
    """Outcome of one session command."""
    success: bool
    changed: bool = Field(False, description="False when the command was a no-op")
    state_changes: list[str] = Field(default_factory=list)
    created_id: Optional[str] = Field(None, description="Id of a newly added description")
    snapshot: SnapshotResponse
    api_version: str = "v1"


class ResultsResponse(BaseModel):
    """Results board; empty until the session is complete."""
    session_id: str
    is_complete: bool
    results: list[JobResultInfo] = Field(default_factory=list)
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
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
