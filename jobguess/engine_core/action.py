"""
Action System - Actions, payloads, and results.

Actions represent every inbound command:
1. Content commands (vote, add description, delete description)
2. Navigation commands (next, previous, restart)
3. Timer commands (start, pause, reset, tick)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .state import VoteDirection


class ActionType(Enum):
    """Types of actions in the system."""
    # Content
    VOTE = "vote"
    ADD_DESCRIPTION = "add_description"
    DELETE_DESCRIPTION = "delete_description"

    # Navigation
    NEXT_QUESTION = "next_question"
    PREVIOUS_QUESTION = "previous_question"
    RESTART = "restart"

    # Timer
    START_TIMER = "start_timer"
    PAUSE_TIMER = "pause_timer"
    RESET_TIMER = "reset_timer"
    TICK = "tick"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    This is a generic container; validation happens in the reducer.
    """
    job_id: int | None = None
    description_id: str | None = None
    direction: VoteDirection | None = None

    # For add_description
    text: str | None = None
    contributor: str | None = None

    # For restart
    reset_content: bool = False


@dataclass
class Action:
    """
    A complete action to be applied to the session state.

    Actions are applied atomically by the reducer: either fully or not at all.
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def vote(cls, job_id: int, description_id: str, direction: VoteDirection | str) -> Action:
        """Factory for vote action."""
        return cls(
            action_type=ActionType.VOTE,
            payload=ActionPayload(
                job_id=job_id,
                description_id=description_id,
                direction=VoteDirection(direction),
            ),
        )

    @classmethod
    def add_description(cls, job_id: int, text: str, contributor: str) -> Action:
        """Factory for add description action."""
        return cls(
            action_type=ActionType.ADD_DESCRIPTION,
            payload=ActionPayload(job_id=job_id, text=text, contributor=contributor),
        )

    @classmethod
    def delete_description(cls, job_id: int, description_id: str) -> Action:
        """Factory for delete description action."""
        return cls(
            action_type=ActionType.DELETE_DESCRIPTION,
            payload=ActionPayload(job_id=job_id, description_id=description_id),
        )

    @classmethod
    def restart(cls, reset_content: bool = False) -> Action:
        """Factory for restart action."""
        return cls(
            action_type=ActionType.RESTART,
            payload=ActionPayload(reset_content=reset_content),
        )

    @classmethod
    def simple(cls, action_type: ActionType) -> Action:
        """Factory for actions that carry no parameters."""
        return cls(action_type=action_type)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (the unchanged state for no-ops)
    - Errors (if failed)
    - Human-readable changes; empty on a successful no-op
    """
    success: bool
    new_state: Any | None = None  # SessionState
    error: str | None = None
    error_code: str | None = None

    # For UI/presentation
    state_changes: list[str] = field(default_factory=list)

    # Set when the action created a description
    created_id: str | None = None

    @property
    def changed(self) -> bool:
        return self.success and bool(self.state_changes)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        created_id: str | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            created_id=created_id,
        )

    @classmethod
    def no_op(cls, state: Any) -> ActionResult:
        """Create a success result that changed nothing."""
        return cls(success=True, new_state=state)
