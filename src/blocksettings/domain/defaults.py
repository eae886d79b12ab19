"""Site default block layout for course pages."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from blocksettings.domain.model import (
    Region,
    new_course_block_instance,
    normalize_block_type_list,
    preference_names,
)

if TYPE_CHECKING:
    from blocksettings.domain.model import Course
    from blocksettings.domain.ports import BlockSettingsRepositories

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DefaultBlockLayout:
    """Block names per region, in display order."""

    side_pre: tuple[str, ...] = ()
    side_post: tuple[str, ...] = ()

    @classmethod
    def parse(cls, value: str | None) -> DefaultBlockLayout:
        """Parse ``pre1,pre2:post1,post2``; a missing ``:`` means left column only."""

        if not value:
            return cls()
        if value.count(":") > 1:
            raise ValueError(f"expected at most one ':' separator in {value!r}")
        pre, _, post = value.partition(":")
        return cls(
            side_pre=normalize_block_type_list(pre),
            side_post=normalize_block_type_list(post),
        )

    def by_region(self) -> dict[Region, tuple[str, ...]]:
        return {Region.SIDE_PRE: self.side_pre, Region.SIDE_POST: self.side_post}


class SiteDefaultPlacements:
    """Restore a course's blocks to the configured site defaults."""

    def __init__(
        self,
        repositories: BlockSettingsRepositories,
        *,
        layout: DefaultBlockLayout,
    ) -> None:
        self._repositories = repositories
        self._layout = layout

    def reset_to_defaults(self, course: Course) -> list[int]:
        if course.context_id is None:
            raise ValueError(f"Course {course.shortname} has no placement context")

        placements = self._repositories.placements
        deleted = placements.delete_all_for_context(course.context_id)
        stale_preferences = [name for item in deleted for name in preference_names(item)]
        if stale_preferences:
            self._repositories.preferences.delete_names(stale_preferences)

        enabled = {
            block_type.name
            for block_type in self._repositories.block_types.list_installed()
            if block_type.visible
        }
        created: list[int] = []
        for region, names in self._layout.by_region().items():
            weight = 0
            for name in names:
                if name not in enabled:
                    log.warning(
                        "Skipping default block %s for course %s: not installed",
                        name,
                        course.shortname,
                    )
                    continue
                instance = new_course_block_instance(
                    name,
                    context_id=course.context_id,
                    region=region.value,
                    weight=weight,
                )
                created.append(placements.add(instance))
                weight += 1

        log.info(
            "Reset blocks for course %s: removed=%s, added=%s",
            course.shortname,
            len(deleted),
            len(created),
        )
        return created
