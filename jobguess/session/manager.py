"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Caller creates a session from a seed catalog (in-memory only)
2. During play every command goes through the session's GameController
3. restart() rewinds navigation and timer; the session object survives
4. end_session() removes the session and ALL its state

PERSISTENCE RULES:
- No database, no files written
- Session state lives for the process lifetime at most
- There is no process-wide session: whoever creates one owns it
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import time
import uuid

from ..config import GameConfig
from ..engine_core.state import JobCatalog, SessionState
from ..engine_core.timer import TimerExpiry
from ..games.job_titles import create_default_catalog, load_catalog

logger = logging.getLogger(__name__)


class SessionStatus(Enum):
    """Lifecycle status of a session."""
    ACTIVE = "active"  # Questions being played
    COMPLETE = "complete"  # Results showing
    ENDED = "ended"  # Removed from the manager


@dataclass
class Session:
    """
    An ephemeral game session.

    Contains:
    - The current canonical SessionState (replaced on every command)
    - The seed catalog, restored by restart(reset_content=True)
    - The timer expiry policy for this session

    State is NOT persisted.
    """
    session_id: str
    state: SessionState
    seed_catalog: JobCatalog
    created_at: float = field(default_factory=time.time)
    expiry: TimerExpiry = TimerExpiry.HOLD
    ended: bool = False
    ended_reason: str | None = None

    @classmethod
    def create(
        cls,
        catalog: JobCatalog,
        timer_seconds: int = 60,
        expiry: TimerExpiry = TimerExpiry.HOLD,
        session_id: str | None = None,
    ) -> Session:
        """Create a session at the first question with a stopped, full timer."""
        return cls(
            session_id=session_id or str(uuid.uuid4()),
            state=SessionState.create(catalog, timer_duration=timer_seconds),
            seed_catalog=catalog,
            expiry=expiry,
        )

    @property
    def status(self) -> SessionStatus:
        if self.ended:
            return SessionStatus.ENDED
        if self.state.is_complete:
            return SessionStatus.COMPLETE
        return SessionStatus.ACTIVE

    def is_active(self) -> bool:
        """Check if session is still active."""
        return not self.ended


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions from the configured catalog
    - Track active sessions
    - Clean up ended or stale sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, config: GameConfig | None = None):
        self.config = config or GameConfig()
        self._sessions: dict[str, Session] = {}

    def default_catalog(self) -> JobCatalog:
        """Catalog from JOBGUESS_CATALOG_PATH, or the built-in one."""
        if self.config.catalog_path:
            return load_catalog(self.config.catalog_path)
        return create_default_catalog()

    def create_session(
        self,
        catalog: JobCatalog | None = None,
        timer_seconds: int | None = None,
        expiry: TimerExpiry | None = None,
    ) -> Session:
        """
        Create a new game session.

        Args:
            catalog: Jobs to play (defaults to the configured catalog)
            timer_seconds: Countdown per question (defaults to config)
            expiry: What happens when the countdown drains (defaults to config)

        Returns:
            New Session at the first question
        """
        session = Session.create(
            catalog=catalog if catalog is not None else self.default_catalog(),
            timer_seconds=timer_seconds if timer_seconds is not None else self.config.timer_seconds,
            expiry=expiry if expiry is not None else self.config.timer_expiry,
        )
        self._sessions[session.session_id] = session

        logger.info(
            "Created session %s with %d jobs (timer %ds, expiry %s)",
            session.session_id,
            session.state.total_jobs,
            session.state.timer.duration,
            session.expiry.value,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and remove it from memory.

        Returns False if the session did not exist.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False

        session.ended = True
        session.ended_reason = reason
        logger.info("Ended session %s (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int | None = None) -> list[str]:
        """
        End sessions older than max_age.

        Called periodically to free memory. Returns the removed IDs.
        """
        if max_age_seconds is None:
            max_age_seconds = self.config.session_max_age
        current_time = time.time()

        to_remove = [
            session_id
            for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds
        ]
        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return to_remove
