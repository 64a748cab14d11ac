"""
Pytest fixtures for Job Guess tests.
"""

import os

import pytest

from ..engine_core.state import Description, Job, JobCatalog, SessionState
from ..engine_core.reducer import Reducer
from ..games.job_titles import create_default_catalog
from ..session import GameController


@pytest.fixture
def default_catalog() -> JobCatalog:
    """The built-in catalog (Software Engineer, Graphic Designer)."""
    return create_default_catalog()


@pytest.fixture
def two_job_catalog() -> JobCatalog:
    """Two small jobs with known votes."""
    return JobCatalog(jobs=(
        Job(
            job_id=1,
            title="Baker",
            descriptions=(
                Description(description_id="a", text="Gets up early", contributor="Sam", votes=5),
                Description(description_id="b", text="Works with dough", contributor="Kim", votes=10),
            ),
        ),
        Job(
            job_id=2,
            title="Pilot",
            descriptions=(
                Description(description_id="c", text="Flies planes", contributor="Lee", votes=3),
            ),
        ),
    ))


@pytest.fixture
def empty_job_catalog() -> JobCatalog:
    """A single job with no descriptions."""
    return JobCatalog(jobs=(Job(job_id=7, title="Lighthouse Keeper"),))


@pytest.fixture
def session_state(two_job_catalog: JobCatalog) -> SessionState:
    """Fresh session state at question 1."""
    return SessionState.create(two_job_catalog, timer_duration=60)


@pytest.fixture
def reducer(two_job_catalog: JobCatalog) -> Reducer:
    """Reducer with default (hold) expiry."""
    return Reducer(seed_catalog=two_job_catalog)


@pytest.fixture
def controller(two_job_catalog: JobCatalog) -> GameController:
    """Controller over the two-job catalog."""
    return GameController.create(two_job_catalog, timer_seconds=60)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep JOBGUESS_* settings from the host out of every test."""
    for var in list(os.environ):
        if var.upper().startswith("JOBGUESS_") or var.upper() == "ALLOWED_ORIGINS":
            monkeypatch.delenv(var, raising=False)
