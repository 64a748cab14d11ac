"""
Catalog Setup - Builds the JobCatalog a session starts from.

Definitions come either from DEFAULT_JOBS or from a JSON file:

    [
      {"id": 1, "title": "Software Engineer",
       "descriptions": [{"id": "1-1", "text": "...", "contributor": "Alex", "votes": 5}]}
    ]

Definitions are checked with pydantic before anything is built:
- text and contributor must be non-empty
- job ids unique in the catalog, description ids unique in their job
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from ...engine_core.state import Description, Job, JobCatalog
from .jobs import DEFAULT_JOBS

logger = logging.getLogger(__name__)


class DescriptionDefinition(BaseModel):
    """A seed description. text and contributor must not be blank."""
    id: str
    text: str
    contributor: str
    votes: int = 0

    @field_validator("text", "contributor")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v


class JobDefinition(BaseModel):
    """A seed job. Description ids are unique within the job."""
    id: int
    title: str
    descriptions: list[DescriptionDefinition] = Field(default_factory=list)

    @model_validator(mode="after")
    def unique_description_ids(self) -> JobDefinition:
        ids = [d.id for d in self.descriptions]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate description id in job {self.id}")
        return self


def catalog_from_definitions(definitions: list[dict[str, Any]]) -> JobCatalog:
    """
    Build a JobCatalog from raw definitions.

    Raises pydantic.ValidationError for malformed entries and
    ValueError for duplicate job ids.
    """
    jobs = []
    for raw in definitions:
        definition = JobDefinition.model_validate(raw)
        jobs.append(Job(
            job_id=definition.id,
            title=definition.title,
            descriptions=tuple(
                Description(
                    description_id=d.id,
                    text=d.text,
                    contributor=d.contributor,
                    votes=d.votes,
                )
                for d in definition.descriptions
            ),
        ))
    return JobCatalog(jobs=tuple(jobs))


def create_default_catalog() -> JobCatalog:
    """The built-in job titles catalog."""
    return catalog_from_definitions(DEFAULT_JOBS)


def load_catalog(path: str | Path) -> JobCatalog:
    """Load a catalog from a JSON file."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of jobs")

    catalog = catalog_from_definitions(data)
    logger.info("Loaded %d jobs from %s", len(catalog), path)
    return catalog
