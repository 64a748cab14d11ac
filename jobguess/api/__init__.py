"""
API Module - Interface for presentation clients.

Exposes the engine via REST API and WebSocket. A client:
1. Creates a game session
2. Reads the snapshot and renders it
3. Sends votes, submissions, navigation and timer commands
4. Shows the results board once the session is complete

All state is session-scoped. No user accounts.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    VoteRequest,
    AddDescriptionRequest,
    RestartRequest,
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
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "VoteRequest",
    "AddDescriptionRequest",
    "RestartRequest",
    # Responses
    "SessionResponse",
    "SnapshotResponse",
    "CommandResponse",
    "ResultsResponse",
    "ErrorResponse",
    # Shared
    "DescriptionInfo",
    "JobInfo",
    "JobResultInfo",
    "TimerInfo",
    # Enums
    "SessionStatus",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
