"""
Countdown Timer - Per-question countdown driven by an external clock.

States:
- Stopped: ticks have no effect
- Running: each tick removes one second, floored at zero

The timer never reads the wall clock. Whoever owns the session decides
when a second has passed and calls tick(); one call is one second of
model time.

What happens when the countdown drains is NOT decided here. The reducer
applies the configured TimerExpiry policy on the tick that reaches zero.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


DEFAULT_DURATION_SECONDS = 60


class TimerExpiry(str, Enum):
    """What the session does on the tick that drains the timer."""
    HOLD = "hold"  # Keep running, show zero indefinitely
    STOP = "stop"  # Pause at zero
    ADVANCE = "advance"  # Pause, reset, move to next question


@dataclass(frozen=True)
class TimerState:
    """
    Immutable countdown state.

    All transitions return a new TimerState.
    """
    duration: int = DEFAULT_DURATION_SECONDS
    remaining_seconds: int = DEFAULT_DURATION_SECONDS
    is_running: bool = False

    @classmethod
    def create(cls, duration: int = DEFAULT_DURATION_SECONDS) -> TimerState:
        """Create a stopped timer at full duration."""
        if duration < 1:
            raise ValueError("Timer duration must be at least 1 second")
        return cls(duration=duration, remaining_seconds=duration, is_running=False)

    @property
    def is_expired(self) -> bool:
        return self.remaining_seconds == 0

    def start(self) -> TimerState:
        """Stopped -> Running. No-op if already running."""
        if self.is_running:
            return self
        return self._copy_with(is_running=True)

    def pause(self) -> TimerState:
        """Running -> Stopped. No-op if already stopped."""
        if not self.is_running:
            return self
        return self._copy_with(is_running=False)

    def reset(self) -> TimerState:
        """Refill to the configured duration without touching run state."""
        return self._copy_with(remaining_seconds=self.duration)

    def tick(self) -> TimerState:
        """Advance one second of model time."""
        if not self.is_running:
            return self
        return self._copy_with(remaining_seconds=max(0, self.remaining_seconds - 1))

    def _copy_with(self, **kwargs) -> TimerState:
        """Create a copy with some fields replaced."""
        return TimerState(
            duration=kwargs.get("duration", self.duration),
            remaining_seconds=kwargs.get("remaining_seconds", self.remaining_seconds),
            is_running=kwargs.get("is_running", self.is_running),
        )
