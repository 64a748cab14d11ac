"""
Engine Core - Deterministic session state management.

The engine is the runtime that:
1. Holds SessionState (catalog, position, timer)
2. Applies actions via the reducer
3. Derives rankings from votes
"""

from .state import (
    Description,
    Job,
    JobCatalog,
    RankedView,
    SessionPhase,
    SessionState,
    VoteDirection,
)
from .timer import TimerExpiry, TimerState
from .action import Action, ActionType, ActionPayload, ActionResult
from .reducer import Reducer
from .errors import ValidationError, validate_submission

__all__ = [
    "Description",
    "Job",
    "JobCatalog",
    "RankedView",
    "SessionPhase",
    "SessionState",
    "VoteDirection",
    "TimerExpiry",
    "TimerState",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Reducer",
    "ValidationError",
    "validate_submission",
]
