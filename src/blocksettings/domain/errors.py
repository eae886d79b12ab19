"""Error hierarchy raised by the block settings domain."""

from __future__ import annotations


class BlockSettingsError(Exception):
    """Base class for block settings failures."""


class NotFoundError(BlockSettingsError, LookupError):
    """Raised when a referenced object does not exist."""


class CourseNotFoundError(NotFoundError):
    """Raised when a course identifier or shortname does not resolve."""


class RegionNotFoundError(NotFoundError):
    """Raised when querying a region that is not on the course page."""

    def __init__(self, region: str | None) -> None:
        super().__init__(f"Unknown block region: {region!r}")
        self.region = region


class PersistenceError(BlockSettingsError):
    """Raised when the store rejects a mutation."""


class SetupError(BlockSettingsError):
    """Raised before any row is processed when the input cannot be used at all."""


class WeightOutOfRangeError(BlockSettingsError, ValueError):
    """Raised when a block weight falls outside the page's weight range."""

    def __init__(self, weight: int) -> None:
        super().__init__(f"Block weight {weight} is outside the allowed range")
        self.weight = weight
