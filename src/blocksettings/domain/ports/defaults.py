"""Port for restoring a course's default block layout."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from blocksettings.domain.model import Course


@runtime_checkable
class DefaultPlacementProvider(Protocol):
    def reset_to_defaults(self, course: Course) -> list[int]:
        """Destroy the course's placements and recreate the defaults, returning new ids."""
        ...
