"""Pydantic model describing one block settings CSV record."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# Header names accepted for each column, canonical name first.
COLUMN_ALIASES: Final[Mapping[str, tuple[str, ...]]] = {
    "operation": ("operation", "op"),
    "course_shortname": ("course_shortname", "courseid", "course", "shortname"),
    "block_name": ("block_name", "block", "blockname"),
    "region": ("region",),
    "weight": ("weight",),
}

HEADER_NAMES: Final[frozenset[str]] = frozenset(
    alias for aliases in COLUMN_ALIASES.values() for alias in aliases
)


def _none_to_blank(value: object) -> object:
    if value is None:
        return ""
    return value


class BlockSettingsCsvRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True, frozen=True)

    operation: str = Field(
        default="",
        validation_alias=AliasChoices(*COLUMN_ALIASES["operation"]),
    )
    course_shortname: str = Field(
        default="",
        validation_alias=AliasChoices(*COLUMN_ALIASES["course_shortname"]),
    )
    block_name: str = Field(
        default="",
        validation_alias=AliasChoices(*COLUMN_ALIASES["block_name"]),
    )
    region: str = Field(default="", validation_alias=AliasChoices(*COLUMN_ALIASES["region"]))
    weight: str = Field(default="", validation_alias=AliasChoices(*COLUMN_ALIASES["weight"]))

    _blank_cells = field_validator("*", mode="before")(_none_to_blank)
