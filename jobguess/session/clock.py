"""
Session Clock - Periodic tick source for a session timer.

The engine never reads the wall clock; something outside has to call
tick() once per second. SessionClock is that something when the
server owns the timer: an asyncio task on the same event loop as the
API handlers, so ticks are serialized with every other command.

Each iteration advances exactly one second of model time, whatever the
real drift was.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Awaitable, Callable, Optional

from .controller import GameController
from .snapshot import SessionSnapshot

logger = logging.getLogger(__name__)

OnTick = Callable[[SessionSnapshot], Awaitable[None]]


class SessionClock:
    """
    Ticks a controller while its timer runs.

    Usage:
        clock = SessionClock(controller, on_tick=broadcast)
        clock.start()   # after controller.start_timer()
        ...
        await clock.stop()
    """

    def __init__(
        self,
        controller: GameController,
        interval: float = 1.0,
        on_tick: Optional[OnTick] = None,
    ):
        self.controller = controller
        self.interval = interval
        self.on_tick = on_tick
        self._task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start ticking. No-op if already running. Needs a running loop."""
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        """Stop ticking and wait for the task to finish."""
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        session_id = self.controller.session.session_id
        logger.debug("Clock started for session %s", session_id)
        while True:
            await asyncio.sleep(self.interval)
            if not self.controller.state.timer.is_running:
                break

            result = self.controller.tick()
            if self.on_tick is not None and result.changed:
                await self.on_tick(self.controller.snapshot())

        logger.debug("Clock stopped for session %s", session_id)
