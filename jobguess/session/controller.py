"""
Game Controller - The single entry point for session commands.

Every inbound command:
1. Becomes an Action
2. Goes through the Reducer against the current SessionState
3. Replaces the session's state if it succeeded
4. Returns the ActionResult

Presentation reads snapshot() after each command.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from ..engine_core.action import Action, ActionType, ActionResult
from ..engine_core.reducer import Reducer
from ..engine_core.state import JobCatalog, VoteDirection
from ..engine_core.timer import TimerExpiry
from .snapshot import SessionSnapshot, JobResult, build_snapshot, build_results

if TYPE_CHECKING:
    from .manager import Session

logger = logging.getLogger(__name__)


class GameController:
    """
    Drives one session.

    Usage:
        controller = GameController.create(catalog)

        controller.vote(1, "1-1", "up")
        result = controller.add_description(1, "Ships features", "Sam")
        if not result.success:
            show_error(result.error)

        controller.next_question()
        render(controller.snapshot())
    """

    def __init__(self, session: Session):
        self.session = session
        self.reducer = Reducer(expiry=session.expiry, seed_catalog=session.seed_catalog)

    @classmethod
    def create(
        cls,
        catalog: JobCatalog,
        timer_seconds: int = 60,
        expiry: TimerExpiry = TimerExpiry.HOLD,
    ) -> GameController:
        """Create a controller with its own session, outside any manager."""
        from .manager import Session

        return cls(Session.create(catalog, timer_seconds=timer_seconds, expiry=expiry))

    @property
    def state(self):
        return self.session.state

    def dispatch(self, action: Action) -> ActionResult:
        """Apply an action and keep the new state if it succeeded."""
        result = self.reducer.apply(self.session.state, action)
        if result.success and result.new_state is not None:
            self.session.state = result.new_state
        elif not result.success:
            logger.debug(
                "Session %s: %s failed (%s)",
                self.session.session_id,
                action.action_type.value,
                result.error_code,
            )
        return result

    # Content

    def vote(self, job_id: int, description_id: str, direction: VoteDirection | str) -> ActionResult:
        return self.dispatch(Action.vote(job_id, description_id, direction))

    def add_description(self, job_id: int, text: str, contributor: str) -> ActionResult:
        """
        Add a description to a job.

        result.success is False (VALIDATION_ERROR) for empty text or
        contributor; result.created_id holds the new id otherwise.
        """
        return self.dispatch(Action.add_description(job_id, text, contributor))

    def delete_description(self, job_id: int, description_id: str) -> ActionResult:
        return self.dispatch(Action.delete_description(job_id, description_id))

    # Navigation

    def next_question(self) -> ActionResult:
        return self.dispatch(Action.simple(ActionType.NEXT_QUESTION))

    def previous_question(self) -> ActionResult:
        return self.dispatch(Action.simple(ActionType.PREVIOUS_QUESTION))

    def restart(self, reset_content: bool = False) -> ActionResult:
        return self.dispatch(Action.restart(reset_content=reset_content))

    # Timer

    def start_timer(self) -> ActionResult:
        return self.dispatch(Action.simple(ActionType.START_TIMER))

    def pause_timer(self) -> ActionResult:
        return self.dispatch(Action.simple(ActionType.PAUSE_TIMER))

    def reset_timer(self) -> ActionResult:
        return self.dispatch(Action.simple(ActionType.RESET_TIMER))

    def tick(self) -> ActionResult:
        return self.dispatch(Action.simple(ActionType.TICK))

    # Views

    def snapshot(self) -> SessionSnapshot:
        return build_snapshot(self.session.state)

    def results(self) -> tuple[JobResult, ...]:
        """Results board; empty until the session is complete."""
        if not self.session.state.is_complete:
            return ()
        return build_results(self.session.state)
