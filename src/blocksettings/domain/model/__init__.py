"""Domain model for course block placements."""

from __future__ import annotations

from .blocks import (
    COURSE_VIEW_PAGE_TYPE,
    COURSE_VIEW_PAGE_TYPE_PATTERN,
    COURSE_VIEW_PAGE_TYPE_PATTERNS,
    MAX_WEIGHT,
    MIN_WEIGHT,
    BlockInstance,
    BlockType,
    Placement,
    new_course_block_instance,
    normalize_block_type_list,
    preference_names,
)
from .course import Course
from .enums import DEFAULT_REGION, ContextLevel, Operation, Region

__all__ = [
    "COURSE_VIEW_PAGE_TYPE",
    "COURSE_VIEW_PAGE_TYPE_PATTERN",
    "COURSE_VIEW_PAGE_TYPE_PATTERNS",
    "DEFAULT_REGION",
    "MAX_WEIGHT",
    "MIN_WEIGHT",
    "BlockInstance",
    "BlockType",
    "ContextLevel",
    "Course",
    "Operation",
    "Placement",
    "Region",
    "new_course_block_instance",
    "normalize_block_type_list",
    "preference_names",
]
