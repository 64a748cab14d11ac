"""
Session Module - Manages ephemeral game sessions.

A session represents one play-through of the job catalog:
- Created with a seed catalog at the first question
- Holds the current session state
- Processes votes, submissions, navigation and timer commands
- Rewinds on restart, destroyed when ended

Sessions are EPHEMERAL:
- No persistence to database
- Nothing survives the process
"""

from .manager import SessionManager, Session, SessionStatus
from .controller import GameController
from .snapshot import (
    SessionSnapshot,
    JobView,
    DescriptionView,
    TimerView,
    JobResult,
    build_snapshot,
)
from .clock import SessionClock

__all__ = [
    "SessionManager",
    "Session",
    "SessionStatus",
    "GameController",
    "SessionSnapshot",
    "JobView",
    "DescriptionView",
    "TimerView",
    "JobResult",
    "build_snapshot",
    "SessionClock",
]
