"""
Reducer - Applies actions to session state.

The reducer is the single point of state mutation.
All state changes go through Reducer.apply(); GameController owns the call.

Design principles:
- Pure function: (state, action) -> new_state
- Validates before applying
- Returns ActionResult with success/failure
- Unknown ids are no-ops, not failures
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from .state import SessionState, SessionPhase, JobCatalog
from .timer import TimerExpiry
from .action import Action, ActionType, ActionResult
from .errors import ValidationError, validate_submission

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to session state.

    Stateless - all state is in SessionState.
    expiry decides what the tick that drains the timer does.
    seed_catalog is restored by restart(reset_content=True).
    """
    expiry: TimerExpiry = TimerExpiry.HOLD
    seed_catalog: JobCatalog | None = None

    def apply(self, state: SessionState, action: Action) -> ActionResult:
        """
        Apply an action to the session state.

        Returns ActionResult with new state or error.
        """
        validation_error = self._validate_action(state, action)
        if validation_error:
            return ActionResult.failure(validation_error, error_code="SESSION_COMPLETE")

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )

        try:
            result = handler(state, action)
        except ValidationError as e:
            logger.debug("Rejected %s: %s", action.action_type.value, e)
            return ActionResult.failure(str(e), error_code="VALIDATION_ERROR")
        except Exception as e:
            logger.exception("Handler for %s failed", action.action_type.value)
            return ActionResult.failure(str(e), error_code="HANDLER_ERROR")

        if result.success and not result.state_changes:
            logger.debug("%s was a no-op", action.action_type.value)
        return result

    def _validate_action(self, state: SessionState, action: Action) -> str | None:
        """
        Validate that an action is legal in the current state.

        Returns error message if invalid, None if valid.
        """
        # Index is frozen once complete; next stays an idempotent no-op
        if state.phase == SessionPhase.COMPLETE:
            if action.action_type == ActionType.PREVIOUS_QUESTION:
                return "Session is complete - restart to navigate"

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.VOTE: self._handle_vote,
            ActionType.ADD_DESCRIPTION: self._handle_add_description,
            ActionType.DELETE_DESCRIPTION: self._handle_delete_description,
            ActionType.NEXT_QUESTION: self._handle_next_question,
            ActionType.PREVIOUS_QUESTION: self._handle_previous_question,
            ActionType.RESTART: self._handle_restart,
            ActionType.START_TIMER: self._handle_start_timer,
            ActionType.PAUSE_TIMER: self._handle_pause_timer,
            ActionType.RESET_TIMER: self._handle_reset_timer,
            ActionType.TICK: self._handle_tick,
        }
        return handlers.get(action_type)

    # =========================================================================
    # Content
    # =========================================================================

    def _handle_vote(self, state: SessionState, action: Action) -> ActionResult:
        """Handle vote action."""
        payload = action.payload
        new_catalog = state.catalog.vote(payload.job_id, payload.description_id, payload.direction)
        if new_catalog == state.catalog:
            return ActionResult.no_op(state)

        return ActionResult.success_with_state(
            state._copy_with(catalog=new_catalog),
            changes=[f"Voted {payload.direction.value} on {payload.description_id}"],
        )

    def _handle_add_description(self, state: SessionState, action: Action) -> ActionResult:
        """Handle add description action."""
        payload = action.payload
        validate_submission(payload.text or "", payload.contributor or "")

        description, new_catalog = state.catalog.add(
            payload.job_id, payload.text, payload.contributor
        )
        if description is None:
            return ActionResult.no_op(state)

        return ActionResult.success_with_state(
            state._copy_with(catalog=new_catalog),
            changes=[f"{payload.contributor} added a description to job {payload.job_id}"],
            created_id=description.description_id,
        )

    def _handle_delete_description(self, state: SessionState, action: Action) -> ActionResult:
        """Handle delete description action."""
        payload = action.payload
        new_catalog = state.catalog.remove(payload.job_id, payload.description_id)
        if new_catalog == state.catalog:
            return ActionResult.no_op(state)

        return ActionResult.success_with_state(
            state._copy_with(catalog=new_catalog),
            changes=[f"Deleted description {payload.description_id}"],
        )

    # =========================================================================
    # Navigation
    # =========================================================================

    def _handle_next_question(self, state: SessionState, action: Action) -> ActionResult:
        """Handle next question action."""
        return self._advance(state)

    def _handle_previous_question(self, state: SessionState, action: Action) -> ActionResult:
        """Handle previous question action."""
        if state.current_index <= 0:
            return ActionResult.no_op(state)

        new_index = state.current_index - 1
        return ActionResult.success_with_state(
            state._copy_with(current_index=new_index),
            changes=[f"Moved to question {new_index + 1}"],
        )

    def _handle_restart(self, state: SessionState, action: Action) -> ActionResult:
        """Handle restart action."""
        catalog = state.catalog
        changes = ["Session restarted"]
        if action.payload.reset_content and self.seed_catalog is not None:
            catalog = self.seed_catalog
            changes.append("Descriptions and votes restored")

        new_state = state._copy_with(
            catalog=catalog,
            current_index=0,
            phase=SessionPhase.ACTIVE,
            timer=state.timer.pause().reset(),
        )
        return ActionResult.success_with_state(new_state, changes=changes)

    def _advance(self, state: SessionState) -> ActionResult:
        """Move to the next job, or complete the session after the last one."""
        if state.is_complete:
            return ActionResult.no_op(state)

        if not state.is_last_question:
            new_index = state.current_index + 1
            return ActionResult.success_with_state(
                state._copy_with(current_index=new_index),
                changes=[f"Moved to question {new_index + 1}"],
            )

        logger.info("Session complete after %d questions", state.total_jobs)
        return ActionResult.success_with_state(
            state._copy_with(phase=SessionPhase.COMPLETE),
            changes=["Session complete"],
        )

    # =========================================================================
    # Timer
    # =========================================================================

    def _handle_start_timer(self, state: SessionState, action: Action) -> ActionResult:
        """Handle start timer action."""
        if state.timer.is_running:
            return ActionResult.no_op(state)
        return ActionResult.success_with_state(
            state._copy_with(timer=state.timer.start()),
            changes=["Timer started"],
        )

    def _handle_pause_timer(self, state: SessionState, action: Action) -> ActionResult:
        """Handle pause timer action."""
        if not state.timer.is_running:
            return ActionResult.no_op(state)
        return ActionResult.success_with_state(
            state._copy_with(timer=state.timer.pause()),
            changes=["Timer paused"],
        )

    def _handle_reset_timer(self, state: SessionState, action: Action) -> ActionResult:
        """Handle reset timer action."""
        new_timer = state.timer.reset()
        if new_timer == state.timer:
            return ActionResult.no_op(state)
        return ActionResult.success_with_state(
            state._copy_with(timer=new_timer),
            changes=[f"Timer reset to {new_timer.duration}s"],
        )

    def _handle_tick(self, state: SessionState, action: Action) -> ActionResult:
        """
        Handle one clock tick.

        The expiry policy fires only on the tick that moves the timer
        from 1 to 0; later ticks at zero do nothing more.
        """
        old_timer = state.timer
        new_timer = old_timer.tick()
        if new_timer == old_timer:
            return ActionResult.no_op(state)

        new_state = state._copy_with(timer=new_timer)
        changes = [f"{new_timer.remaining_seconds}s remaining"]

        if not new_timer.is_expired:
            return ActionResult.success_with_state(new_state, changes=changes)

        logger.info("Timer expired on question %d (policy: %s)",
                    state.current_index + 1, self.expiry.value)
        changes.append("Time is up")

        if self.expiry == TimerExpiry.STOP:
            new_state = new_state._copy_with(timer=new_timer.pause())
        elif self.expiry == TimerExpiry.ADVANCE:
            new_state = new_state._copy_with(timer=new_timer.pause().reset())
            advanced = self._advance(new_state)
            new_state = advanced.new_state
            changes.extend(advanced.state_changes)

        return ActionResult.success_with_state(new_state, changes=changes)

