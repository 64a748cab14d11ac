"""
Snapshots - Immutable views of a session for presentation.

A snapshot is built from a SessionState and shares no mutable
references with it: every collection is a tuple of frozen views.

Title visibility:
- While the session is active the current job's title is hidden (None)
- Once complete, results list every job with its title revealed
"""

from __future__ import annotations
from dataclasses import dataclass

from ..engine_core.state import Job, SessionState


@dataclass(frozen=True)
class DescriptionView:
    """A description with its derived 1-based rank."""
    description_id: str
    text: str
    contributor: str
    votes: int
    rank: int


@dataclass(frozen=True)
class JobView:
    """The job being guessed. title is None until results."""
    job_id: int
    title: str | None
    descriptions: tuple[DescriptionView, ...] = ()


@dataclass(frozen=True)
class TimerView:
    remaining_seconds: int
    is_running: bool
    duration: int


@dataclass(frozen=True)
class JobResult:
    """One row of the results board."""
    job_id: int
    title: str
    descriptions: tuple[DescriptionView, ...] = ()

    @property
    def top_description(self) -> DescriptionView | None:
        return self.descriptions[0] if self.descriptions else None


@dataclass(frozen=True)
class SessionSnapshot:
    """
    Point-in-time, read-only view of a session.

    results is empty until is_complete is True.
    """
    current_index: int
    total_questions: int
    is_complete: bool
    timer: TimerView
    current_job: JobView | None = None
    results: tuple[JobResult, ...] = ()

    @property
    def question_number(self) -> int:
        """1-based position for "Question x of y"."""
        return self.current_index + 1


def ranked_descriptions(job: Job) -> tuple[DescriptionView, ...]:
    """Materialize a job's ranked view with positions."""
    return tuple(
        DescriptionView(
            description_id=d.description_id,
            text=d.text,
            contributor=d.contributor,
            votes=d.votes,
            rank=position,
        )
        for position, d in enumerate(job.ranked_view(), start=1)
    )


def build_results(state: SessionState) -> tuple[JobResult, ...]:
    """Every job with its title and ranked descriptions, in catalog order."""
    return tuple(
        JobResult(
            job_id=job.job_id,
            title=job.title,
            descriptions=ranked_descriptions(job),
        )
        for job in state.catalog
    )


def build_snapshot(state: SessionState) -> SessionSnapshot:
    """Create a snapshot from session state."""
    job = state.current_job
    current_job = None
    if job is not None:
        current_job = JobView(
            job_id=job.job_id,
            title=job.title if state.is_complete else None,
            descriptions=ranked_descriptions(job),
        )

    return SessionSnapshot(
        current_index=state.current_index,
        total_questions=state.total_jobs,
        is_complete=state.is_complete,
        timer=TimerView(
            remaining_seconds=state.timer.remaining_seconds,
            is_running=state.timer.is_running,
            duration=state.timer.duration,
        ),
        current_job=current_job,
        results=build_results(state) if state.is_complete else (),
    )
