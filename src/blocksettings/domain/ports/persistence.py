"""Ports for the host's course, block and preference stores."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from blocksettings.domain.model import BlockInstance, BlockType, Course, Placement


@runtime_checkable
class CourseRepository(Protocol):
    """Course directory."""

    def get(self, course_id: int) -> Course | None: ...

    def get_by_shortname(self, shortname: str) -> Course | None: ...

    def add(self, course: Course) -> None: ...


@runtime_checkable
class BlockTypeRepository(Protocol):
    """Installed block type listing."""

    def list_installed(self) -> Sequence[BlockType]: ...

    def add(self, block_type: BlockType) -> None: ...


@runtime_checkable
class PlacementRepository(Protocol):
    """Block instance rows and their page position overrides."""

    def list_for_context(
        self,
        context_id: int,
        *,
        include_invisible: bool = False,
    ) -> Sequence[Placement]:
        """Return course page placements ordered by ``(region, weight, id)``.

        Hidden placements and placements of disabled block types are left out
        unless ``include_invisible`` is set.
        """
        ...

    def add(self, instance: BlockInstance) -> int:
        """Insert ``instance`` and return its new id."""
        ...

    def delete(self, placement_id: int) -> None:
        """Delete a placement and any position override tied to it."""
        ...

    def delete_all_for_context(self, context_id: int) -> list[int]:
        """Delete every placement in a context, returning the deleted ids."""
        ...

    def reposition(
        self,
        placement: Placement,
        region: str,
        weight: int,
        *,
        move_defaults: bool,
    ) -> None:
        """Move a placement, either by changing its defaults or by a page position override."""
        ...


@runtime_checkable
class UserPreferenceRepository(Protocol):
    """Per-user preference key space."""

    def delete_names(self, names: Iterable[str]) -> int: ...
