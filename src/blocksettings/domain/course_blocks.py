"""Block placements of a single course.

``CourseBlockRegistry`` mirrors what the host's block manager does for the
current page, but for an arbitrary course: it loads the course's placements
once, answers questions about block types and regions, and writes placement
changes straight to the store. Only active placements are loaded unless the
registry is asked to include hidden ones. The in-memory snapshot is never
refreshed by the registry's own mutations; build a new registry to observe
them.
"""

from __future__ import annotations

from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING

from blocksettings.domain.errors import (
    CourseNotFoundError,
    RegionNotFoundError,
    WeightOutOfRangeError,
)
from blocksettings.domain.model import (
    DEFAULT_REGION,
    MAX_WEIGHT,
    MIN_WEIGHT,
    BlockType,
    Placement,
    Region,
    new_course_block_instance,
    normalize_block_type_list,
    preference_names,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from blocksettings.domain.model import Course
    from blocksettings.domain.ports import BlockSettingsRepositories

log = getLogger(__name__)

_REGIONS: tuple[Region, ...] = (Region.SIDE_PRE, Region.SIDE_POST)


class CourseBlockRegistry:
    """Present one course's block placements and validate/perform changes to them."""

    def __init__(
        self,
        course_id: int,
        *,
        repositories: BlockSettingsRepositories,
        protected_block_types: str | Iterable[str] | None = None,
        include_invisible: bool = False,
    ) -> None:
        course = repositories.courses.get(course_id)
        if course is None or course.context_id is None:
            raise CourseNotFoundError(f"Course {course_id} not found")
        self.course: Course = course
        self.context_id: int = course.context_id
        self._repositories = repositories
        self._protected_block_types = normalize_block_type_list(protected_block_types)
        self._include_invisible = include_invisible

        self._installed: tuple[BlockType, ...] | None = None
        self._addable: tuple[BlockType, ...] | None = None
        self._records_by_region: dict[Region, list[Placement]] | None = None
        self._placements_by_region: dict[Region, tuple[Placement, ...]] = {}

    # Regions -----------------------------------------------------------------

    def list_regions(self) -> tuple[Region, ...]:
        return _REGIONS

    def is_known_region(self, region: str | None) -> bool:
        if not region:
            return False
        return region in _REGIONS

    # Block types -------------------------------------------------------------

    def get_installed_block_types(self) -> tuple[BlockType, ...]:
        if self._installed is None:
            self._installed = tuple(self._repositories.block_types.list_installed())
        return self._installed

    def get_block_type(self, name: str) -> BlockType | None:
        for block_type in self.get_installed_block_types():
            if block_type.name == name:
                return block_type
        return None

    def is_known_block_type(self, name: str | None, *, include_invisible: bool = False) -> bool:
        """Return whether ``name`` is installed and, unless asked otherwise, enabled."""

        if not name:
            return False
        block_type = self.get_block_type(name)
        if block_type is None:
            return False
        return include_invisible or block_type.visible

    def get_protected_block_types(self) -> tuple[str, ...]:
        """Block types that may never be added or removed in bulk (e.g. navigation)."""

        return self._protected_block_types

    def is_protected(self, name: str) -> bool:
        return name in self._protected_block_types

    def get_addable_block_types(self) -> tuple[BlockType, ...]:
        """Block types that can still be added to this course, ordered by title.

        Installed, enabled, not protected, and either allowed more than once or not
        already on the course. Computed once per registry.
        """

        if self._addable is not None:
            return self._addable

        addable = [
            block_type
            for block_type in self.get_installed_block_types()
            if block_type.visible
            and not self.is_protected(block_type.name)
            and (block_type.allow_multiple or not self.is_block_present(block_type.name))
        ]
        self._addable = tuple(sorted(addable, key=lambda item: item.display_title.casefold()))
        return self._addable

    def is_addable(self, name: str) -> bool:
        return any(block_type.name == name for block_type in self.get_addable_block_types())

    # Placements --------------------------------------------------------------

    def load_placements(self) -> None:
        """Load the course's placements once, grouped by region."""

        self._records()

    def _records(self) -> dict[Region, list[Placement]]:
        if self._records_by_region is not None:
            return self._records_by_region

        by_region: dict[Region, list[Placement]] = {region: [] for region in _REGIONS}
        unknown: list[Placement] = []
        for record in self._repositories.placements.list_for_context(
            self.context_id,
            include_invisible=self._include_invisible,
        ):
            if self.is_known_region(record.region):
                by_region[Region(record.region)].append(record)
            else:
                unknown.append(replace(record, region=DEFAULT_REGION.value))
        by_region[DEFAULT_REGION].extend(unknown)

        self._records_by_region = by_region
        log.debug(
            "Loaded placements for course %s: %s",
            self.course.shortname,
            {region.value: len(records) for region, records in by_region.items()},
        )
        return by_region

    def is_block_present(self, name: str) -> bool:
        """Return whether at least one placement of block type ``name`` is on the course."""

        for records in self._records().values():
            for record in records:
                if record.block_name and record.block_name == name:
                    return True
        return False

    def get_placements_for_region(self, region: str) -> tuple[Placement, ...]:
        if not self.is_known_region(region):
            raise RegionNotFoundError(region)
        key = Region(region)
        if key not in self._placements_by_region:
            self._placements_by_region[key] = tuple(
                self._materialize(record) for record in self._records()[key]
            )
        return self._placements_by_region[key]

    def find_placement(self, block_name: str, region: str, weight: int) -> Placement | None:
        """Return the first placement matching type, region and weight, in region order."""

        for placement in self.get_placements_for_region(region):
            if placement.matches(block_name, region, weight):
                return placement
        return None

    def find_placement_by_id(self, placement_id: int) -> Placement | None:
        for region in _REGIONS:
            for placement in self.get_placements_for_region(region):
                if placement.id == placement_id:
                    return placement
        return None

    def add_placement(self, block_name: str, region: str, weight: int) -> int:
        """Insert a new placement of ``block_name`` on the course page; returns its id."""

        instance = new_course_block_instance(
            block_name,
            context_id=self.context_id,
            region=region,
            weight=weight,
        )
        placement_id = self._repositories.placements.add(instance)
        log.info(
            "Added block %s to course %s (%s, weight %s) as placement %s",
            block_name,
            self.course.shortname,
            region,
            weight,
            placement_id,
        )
        return placement_id

    def delete_placement(self, placement: Placement) -> None:
        """Remove a placement, its position overrides and user hidden/docked state."""

        self._repositories.placements.delete(placement.id)
        self._repositories.preferences.delete_names(preference_names(placement.id))
        log.info(
            "Deleted block %s (placement %s) from course %s",
            placement.block_name,
            placement.id,
            self.course.shortname,
        )

    def reposition_placement(self, placement: Placement, region: str, weight: int) -> None:
        """Move a placement to ``region``/``weight`` on the course page.

        A placement that owns its defaults has them changed; any other gets a page
        position override for the course view.
        """

        if not self.is_known_region(region):
            raise RegionNotFoundError(region)
        if not MIN_WEIGHT <= weight <= MAX_WEIGHT:
            raise WeightOutOfRangeError(weight)
        move_defaults = placement.owns_defaults
        self._repositories.placements.reposition(
            placement,
            region,
            weight,
            move_defaults=move_defaults,
        )
        log.info(
            "Moved block %s (placement %s) on course %s to %s, weight %s%s",
            placement.block_name,
            placement.id,
            self.course.shortname,
            region,
            weight,
            "" if move_defaults else " (page override)",
        )

    def _materialize(self, record: Placement) -> Placement:
        return replace(record, protected=self.is_protected(record.block_name))
