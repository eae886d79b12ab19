"""Block types, block instances and the placements derived from them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

COURSE_VIEW_PAGE_TYPE: Final[str] = "course-view-topics"
COURSE_VIEW_PAGE_TYPE_PATTERN: Final[str] = "course-view-*"

# Page type patterns that match a course view page, most specific first.
COURSE_VIEW_PAGE_TYPE_PATTERNS: Final[tuple[str, ...]] = (
    COURSE_VIEW_PAGE_TYPE,
    COURSE_VIEW_PAGE_TYPE_PATTERN,
    "course-*",
    "*",
)

MIN_WEIGHT: Final[int] = -10
MAX_WEIGHT: Final[int] = 10


@dataclass(eq=False, kw_only=True)
class BlockType:
    """An installed kind of block."""

    name: str
    title: str = ""
    visible: bool = True
    allow_multiple: bool = False
    id: int | None = None

    @property
    def display_title(self) -> str:
        return self.title or self.name


@dataclass(eq=False, kw_only=True)
class BlockInstance:
    """Persistent row backing a placement; region and weight are its defaults."""

    block_name: str
    parent_context_id: int
    default_region: str
    default_weight: int
    show_in_subcontexts: bool = False
    page_type_pattern: str = COURSE_VIEW_PAGE_TYPE_PATTERN
    subpage_pattern: str | None = None
    required_by_theme: bool = False
    config_data: str = ""
    id: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Placement:
    """A block instance as it appears on the course page.

    ``region``/``weight`` are effective values: a page position override when one
    exists, the instance defaults otherwise. ``protected`` is derived from the
    configured undeletable block types when the placement is materialised.
    """

    id: int
    block_name: str
    context_id: int
    region: str
    weight: int
    default_region: str
    default_weight: int
    position_id: int | None = None
    visible: bool = True
    required_by_theme: bool = False
    page_type_pattern: str = COURSE_VIEW_PAGE_TYPE_PATTERN
    subpage_pattern: str | None = None
    show_in_subcontexts: bool = False
    config_data: str = ""
    protected: bool = False

    def matches(self, block_name: str, region: str, weight: int) -> bool:
        return self.block_name == block_name and self.region == region and self.weight == weight

    @property
    def owns_defaults(self) -> bool:
        """Whether moving this placement may change its instance defaults.

        True when it sits at its default position and the instance cannot show up on
        any page other than this course page.
        """

        return (
            self.region == self.default_region
            and self.weight == self.default_weight
            and not self.show_in_subcontexts
            and "*" not in self.page_type_pattern
        )


def new_course_block_instance(
    block_name: str,
    *,
    context_id: int,
    region: str,
    weight: int,
) -> BlockInstance:
    """Build the instance row used for blocks added to a course page."""

    return BlockInstance(
        block_name=block_name,
        parent_context_id=context_id,
        default_region=region,
        default_weight=weight,
        show_in_subcontexts=False,
        page_type_pattern=COURSE_VIEW_PAGE_TYPE_PATTERN,
        subpage_pattern=None,
        config_data="",
    )


def preference_names(placement_id: int) -> tuple[str, str]:
    """User preference keys that hold hidden/docked state for a placement."""

    return (f"block{placement_id}hidden", f"docked_block_instance_{placement_id}")


def normalize_block_type_list(value: str | Iterable[str] | None) -> tuple[str, ...]:
    """Accept a comma-joined string or an explicit list of block type names."""

    if not value:
        return ()
    items = value.split(",") if isinstance(value, str) else value
    names: list[str] = []
    for item in items:
        name = item.strip()
        if name and name not in names:
            names.append(name)
    return tuple(names)
