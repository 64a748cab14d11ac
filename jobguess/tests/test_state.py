"""
Tests for jobs, descriptions and the catalog.

Tests:
- Vote arithmetic and unknown-id filtering
- Stable ranked view
- Add/remove semantics
- Catalog lookup and bounds
"""

import pytest

from ..engine_core.state import (
    Description,
    Job,
    JobCatalog,
    SessionState,
    VoteDirection,
)


def _job(*votes: int) -> Job:
    return Job(
        job_id=1,
        title="Baker",
        descriptions=tuple(
            Description(description_id=f"d{i}", text=f"text {i}", contributor="Sam", votes=v)
            for i, v in enumerate(votes)
        ),
    )


class TestVote:
    """Tests for voting on descriptions."""

    def test_up_and_down(self):
        """Final votes equal initial plus ups minus downs."""
        job = _job(5)
        for direction in ["up", "up", "down", "up", "down", "down", "down"]:
            job = job.vote("d0", direction)

        assert job.get_description("d0").votes == 5 + 3 - 4

    def test_votes_can_go_negative(self):
        """Votes are not floored at zero."""
        job = _job(0).vote("d0", VoteDirection.DOWN).vote("d0", VoteDirection.DOWN)
        assert job.get_description("d0").votes == -2

    def test_unknown_id_changes_nothing(self):
        """Voting on a missing description leaves all votes unchanged."""
        job = _job(1, 2, 3)
        voted = job.vote("missing", "up")

        assert voted == job
        assert [d.votes for d in voted.descriptions] == [1, 2, 3]

    def test_vote_does_not_mutate_original(self):
        """Voting returns a new job; the old one keeps its votes."""
        job = _job(4)
        job.vote("d0", "up")
        assert job.get_description("d0").votes == 4

    def test_invalid_direction_raises(self):
        """Only up and down are directions."""
        with pytest.raises(ValueError):
            _job(1).vote("d0", "sideways")


class TestRankedView:
    """Tests for derived ranking."""

    def test_sorted_by_votes_descending(self):
        """Highest votes first."""
        job = _job(5, 10, 7)
        assert [d.votes for d in job.ranked_view()] == [10, 7, 5]

    def test_ties_keep_insertion_order(self):
        """Equal votes keep insertion order after an unrelated vote."""
        job = _job(3, 3, 3, 0)
        job = job.vote("d3", "up")

        assert job.ranked_view().ids() == ["d0", "d1", "d2", "d3"]

    def test_restartable(self):
        """The view can be iterated more than once."""
        view = _job(1, 2).ranked_view()
        assert list(view) == list(view)
        assert len(view) == 2

    def test_view_is_read_only(self):
        """Ranking does not reorder the stored descriptions."""
        job = _job(1, 9)
        list(job.ranked_view())
        assert [d.description_id for d in job.descriptions] == ["d0", "d1"]

    def test_empty_job(self):
        """A job with no descriptions has an empty view."""
        assert list(Job(job_id=3, title="Nobody").ranked_view()) == []


class TestAddRemove:
    """Tests for adding and removing descriptions."""

    def test_add_appends_with_zero_votes(self):
        """New description goes to the end of insertion order."""
        job = _job(5, 10)
        description, new_job = job.add("Kneads bread", "Robin")

        assert new_job.count == 3
        assert new_job.descriptions[-1] == description
        assert description.votes == 0
        assert description.description_id.startswith("1-")
        assert job.count == 2

    def test_generated_ids_are_unique(self):
        """Every added description gets a fresh id."""
        job = _job()
        for i in range(20):
            _, job = job.add(f"text {i}", "Robin")

        ids = [d.description_id for d in job.descriptions]
        assert len(set(ids)) == 20

    def test_add_rejects_duplicate_explicit_id(self):
        """An explicit id must not already exist."""
        with pytest.raises(ValueError):
            _job(1).add("Again", "Robin", description_id="d0")

    def test_remove_only_target(self):
        """Removing one description keeps the others."""
        job = _job(1, 2, 3).remove("d1")
        assert [d.description_id for d in job.descriptions] == ["d0", "d2"]

    def test_remove_missing_is_idempotent(self):
        """Removing an absent id leaves the collection unchanged."""
        job = _job(1, 2)
        assert job.remove("missing") == job
        assert job.remove("d0").remove("d0").count == 1


class TestJobCatalog:
    """Tests for the catalog."""

    def test_at_and_length(self, two_job_catalog):
        """Lookup by position."""
        assert two_job_catalog.length() == 2
        assert two_job_catalog.at(0).title == "Baker"
        assert two_job_catalog.at(1).title == "Pilot"

    def test_at_out_of_range(self, two_job_catalog):
        """Out-of-range positions raise IndexError."""
        with pytest.raises(IndexError):
            two_job_catalog.at(2)
        with pytest.raises(IndexError):
            two_job_catalog.at(-1)

    def test_duplicate_job_ids_rejected(self):
        """Job ids are unique in a catalog."""
        with pytest.raises(ValueError):
            JobCatalog(jobs=(Job(job_id=1, title="A"), Job(job_id=1, title="B")))

    def test_unknown_job_is_no_op(self, two_job_catalog):
        """Mutations on an unknown job id leave the catalog unchanged."""
        assert two_job_catalog.vote(99, "a", "up") == two_job_catalog
        assert two_job_catalog.remove(99, "a") == two_job_catalog

        description, catalog = two_job_catalog.add(99, "text", "Sam")
        assert description is None
        assert catalog == two_job_catalog
        assert list(two_job_catalog.ranked_view(99)) == []

    def test_mutation_touches_only_one_job(self, two_job_catalog):
        """Other jobs are untouched by a vote."""
        catalog = two_job_catalog.vote(1, "a", "up")
        assert catalog.get(2) is two_job_catalog.get(2)
        assert catalog.get(1).get_description("a").votes == 6

    def test_membership_is_fixed(self, two_job_catalog):
        """Description changes never add or remove jobs."""
        _, catalog = two_job_catalog.add(2, "Wears a hat", "Ash")
        catalog = catalog.remove(1, "a").remove(1, "b")
        assert [job.job_id for job in catalog] == [1, 2]


class TestSessionState:
    """Tests for the session container."""

    def test_create(self, two_job_catalog):
        """Fresh session starts at the first job with a stopped timer."""
        state = SessionState.create(two_job_catalog, timer_duration=45)

        assert state.current_index == 0
        assert not state.is_complete
        assert state.timer.remaining_seconds == 45
        assert not state.timer.is_running
        assert state.current_job.job_id == 1

    def test_empty_catalog_has_no_current_job(self):
        """No jobs means no current job, not an error."""
        state = SessionState.create(JobCatalog(), timer_duration=60)
        assert state.current_job is None
        assert state.total_jobs == 0
