"""SQLAlchemy adapter package for blocksettings."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyBlockTypeRepository,
    SqlAlchemyCourseRepository,
    SqlAlchemyPlacementRepository,
    SqlAlchemyUserPreferenceRepository,
)
from .unit_of_work import (
    SqlAlchemyBlockSettingsUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyBlockSettingsUnitOfWork",
    "SqlAlchemyBlockTypeRepository",
    "SqlAlchemyCourseRepository",
    "SqlAlchemyPlacementRepository",
    "SqlAlchemyUserPreferenceRepository",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
