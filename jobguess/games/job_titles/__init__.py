"""
Job Titles - The built-in catalog.

Players see crowd-written descriptions of a job and guess its title.
Descriptions are voted up or down; the title is revealed on the
results board.

This module contains:
- The seed jobs (DEFAULT_JOBS)
- create_default_catalog() and load_catalog() for JSON files
"""

from .jobs import DEFAULT_JOBS
from .setup import create_default_catalog, load_catalog, catalog_from_definitions

__all__ = [
    "DEFAULT_JOBS",
    "create_default_catalog",
    "load_catalog",
    "catalog_from_definitions",
]
