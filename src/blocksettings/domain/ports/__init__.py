"""Domain port definitions for adapters."""

from __future__ import annotations

from .defaults import DefaultPlacementProvider
from .persistence import (
    BlockTypeRepository,
    CourseRepository,
    PlacementRepository,
    UserPreferenceRepository,
)
from .unit_of_work import (
    BlockSettingsRepositories,
    BlockSettingsUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "BlockSettingsRepositories",
    "BlockSettingsUnitOfWork",
    "BlockTypeRepository",
    "CourseRepository",
    "DefaultPlacementProvider",
    "PlacementRepository",
    "RepositoryCollection",
    "UnitOfWork",
    "UserPreferenceRepository",
]
