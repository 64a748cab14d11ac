"""
Game State - Jobs, descriptions and the session container.

Design principles:
- Immutable: every mutation returns a new value, nothing shared is
  changed in place, so a reader holding an old state keeps a consistent view
- Rank is derived, never stored: display order is always computed from votes
- Permissive lookups: unknown job/description ids are filtered, not asserted
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator
import uuid

from .timer import TimerState


class VoteDirection(str, Enum):
    """Direction of a single vote."""
    UP = "up"
    DOWN = "down"

    @property
    def delta(self) -> int:
        return 1 if self is VoteDirection.UP else -1


class SessionPhase(Enum):
    """High-level session phases."""
    ACTIVE = "active"
    COMPLETE = "complete"


@dataclass(frozen=True)
class Description:
    """
    A crowd-submitted description of a job.

    Note: there is no rank field. Position in the ranked view is the rank.
    """
    description_id: str
    text: str
    contributor: str
    votes: int = 0

    def with_votes(self, votes: int) -> Description:
        """Return a copy with a different vote count."""
        return Description(
            description_id=self.description_id,
            text=self.text,
            contributor=self.contributor,
            votes=votes,
        )


class RankedView:
    """
    Descriptions ordered by votes, highest first.

    Lazy and restartable: every iteration sorts the underlying tuple
    again. sorted() is stable, so equal votes keep insertion order.
    """

    def __init__(self, descriptions: tuple[Description, ...]):
        self._descriptions = descriptions

    def __iter__(self) -> Iterator[Description]:
        return iter(sorted(self._descriptions, key=lambda d: -d.votes))

    def __len__(self) -> int:
        return len(self._descriptions)

    def ids(self) -> list[str]:
        return [d.description_id for d in self]


@dataclass(frozen=True)
class Job:
    """
    A guessable job: hidden title plus its description store.

    Descriptions are kept in insertion order. A job may have none.
    """
    job_id: int
    title: str
    descriptions: tuple[Description, ...] = ()

    @property
    def count(self) -> int:
        return len(self.descriptions)

    def get_description(self, description_id: str) -> Description | None:
        """Get description by ID."""
        for d in self.descriptions:
            if d.description_id == description_id:
                return d
        return None

    def vote(self, description_id: str, direction: VoteDirection) -> Job:
        """
        Return new job with one vote applied.

        An unknown description_id leaves every vote unchanged.
        """
        direction = VoteDirection(direction)
        new_descriptions = tuple(
            d.with_votes(d.votes + direction.delta) if d.description_id == description_id else d
            for d in self.descriptions
        )
        return self._copy_with(descriptions=new_descriptions)

    def add(self, text: str, contributor: str, description_id: str | None = None) -> tuple[Description, Job]:
        """
        Return (new description, new job) with the description appended.

        The store does not validate text; callers run validate_submission first.
        """
        if description_id is None:
            description_id = self._new_description_id()
        elif self.get_description(description_id) is not None:
            raise ValueError(f"Description {description_id} already exists in job {self.job_id}")

        description = Description(
            description_id=description_id,
            text=text,
            contributor=contributor,
            votes=0,
        )
        return description, self._copy_with(descriptions=self.descriptions + (description,))

    def remove(self, description_id: str) -> Job:
        """Return new job without the description. No-op if absent."""
        new_descriptions = tuple(
            d for d in self.descriptions if d.description_id != description_id
        )
        return self._copy_with(descriptions=new_descriptions)

    def ranked_view(self) -> RankedView:
        """Descriptions by votes descending, insertion order on ties."""
        return RankedView(self.descriptions)

    def _new_description_id(self) -> str:
        existing = {d.description_id for d in self.descriptions}
        while True:
            candidate = f"{self.job_id}-{uuid.uuid4().hex[:12]}"
            if candidate not in existing:
                return candidate

    def _copy_with(self, **kwargs) -> Job:
        """Create a copy with some fields replaced."""
        return Job(
            job_id=kwargs.get("job_id", self.job_id),
            title=kwargs.get("title", self.title),
            descriptions=kwargs.get("descriptions", self.descriptions),
        )


@dataclass(frozen=True)
class JobCatalog:
    """
    Ordered, fixed-membership collection of jobs.

    Only the descriptions inside jobs change; jobs are never added,
    removed or reordered once a session starts.
    """
    jobs: tuple[Job, ...] = ()

    def __post_init__(self):
        seen: set[int] = set()
        for job in self.jobs:
            if job.job_id in seen:
                raise ValueError(f"Duplicate job id: {job.job_id}")
            seen.add(job.job_id)

    def __len__(self) -> int:
        return len(self.jobs)

    def __iter__(self) -> Iterator[Job]:
        return iter(self.jobs)

    def length(self) -> int:
        return len(self.jobs)

    def at(self, index: int) -> Job:
        """
        Get the job at a position.

        Raises IndexError when out of range. Negative indexes are out of
        range too; navigation checks bounds before calling this.
        """
        if index < 0 or index >= len(self.jobs):
            raise IndexError(f"Job index {index} out of range (0..{len(self.jobs) - 1})")
        return self.jobs[index]

    def get(self, job_id: int) -> Job | None:
        """Get job by ID."""
        for job in self.jobs:
            if job.job_id == job_id:
                return job
        return None

    def with_job(self, job: Job) -> JobCatalog:
        """Return new catalog with the job of the same id replaced."""
        return JobCatalog(
            jobs=tuple(job if j.job_id == job.job_id else j for j in self.jobs)
        )

    def vote(self, job_id: int, description_id: str, direction: VoteDirection) -> JobCatalog:
        # Unknown job id is a no-op, not an error. Callers needing strict
        # semantics check get() first.
        job = self.get(job_id)
        if job is None:
            return self
        return self.with_job(job.vote(description_id, direction))

    def add(self, job_id: int, text: str, contributor: str) -> tuple[Description | None, JobCatalog]:
        """Return (new description or None if job unknown, new catalog)."""
        job = self.get(job_id)
        if job is None:
            return None, self
        description, new_job = job.add(text, contributor)
        return description, self.with_job(new_job)

    def remove(self, job_id: int, description_id: str) -> JobCatalog:
        job = self.get(job_id)
        if job is None:
            return self
        return self.with_job(job.remove(description_id))

    def ranked_view(self, job_id: int) -> RankedView:
        """Ranked descriptions for a job; empty for an unknown id."""
        job = self.get(job_id)
        if job is None:
            return RankedView(())
        return job.ranked_view()


@dataclass(frozen=True)
class SessionState:
    """
    Complete session state at a point in time.

    This is the canonical state the reducer operates on.

    Invariants:
    - 0 <= current_index < len(catalog) (for a non-empty catalog)
    - current_index does not move while phase is COMPLETE
    """
    catalog: JobCatalog
    current_index: int = 0
    phase: SessionPhase = SessionPhase.ACTIVE
    timer: TimerState = field(default_factory=TimerState.create)

    @classmethod
    def create(cls, catalog: JobCatalog, timer_duration: int = 60) -> SessionState:
        """Fresh session: first job, not complete, timer stopped and full."""
        return cls(
            catalog=catalog,
            current_index=0,
            phase=SessionPhase.ACTIVE,
            timer=TimerState.create(timer_duration),
        )

    @property
    def is_complete(self) -> bool:
        return self.phase == SessionPhase.COMPLETE

    @property
    def total_jobs(self) -> int:
        return len(self.catalog)

    @property
    def is_last_question(self) -> bool:
        return self.current_index >= len(self.catalog) - 1

    @property
    def current_job(self) -> Job | None:
        """The job being guessed, or None for an empty catalog."""
        if not len(self.catalog):
            return None
        return self.catalog.at(self.current_index)

    def _copy_with(self, **kwargs) -> SessionState:
        """Create a copy with some fields replaced."""
        return SessionState(
            catalog=kwargs.get("catalog", self.catalog),
            current_index=kwargs.get("current_index", self.current_index),
            phase=kwargs.get("phase", self.phase),
            timer=kwargs.get("timer", self.timer),
        )
