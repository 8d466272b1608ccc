"""FastAPI dependency injection."""

from __future__ import annotations

from functools import lru_cache

from lithoscope.config import settings
from lithoscope.engine.archetypes import Archetype, resolve_archetypes
from lithoscope.engine.pipeline import Pipeline, create_pipeline


def get_settings():
    return settings


@lru_cache(maxsize=1)
def get_archetypes() -> tuple[Archetype, ...]:
    """Archetype table, read once per process."""
    return resolve_archetypes(settings.lithoscope_archetype_table_path or None)


def get_pipeline() -> Pipeline:
    return create_pipeline(archetypes=get_archetypes())
