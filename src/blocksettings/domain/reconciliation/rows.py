"""Typed records for block settings CSV rows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Sequence

COLUMNS: Final[tuple[str, ...]] = (
    "operation",
    "course_shortname",
    "block_name",
    "region",
    "weight",
)


def parse_weight(text: str | None) -> int | None:
    """Parse a weight cell: blank means 0, anything that is not an integer is invalid."""

    if text is None:
        return 0
    stripped = text.strip()
    if not stripped:
        return 0
    try:
        return int(stripped)
    except ValueError:
        return None


@dataclass(frozen=True, slots=True, kw_only=True)
class BlockSettingsRow:
    """One ``operation,course_shortname,block_name,region,weight`` record.

    ``weight_text`` keeps the raw cell for reporting; ``weight`` is its parsed
    value or ``None`` when the cell is not an integer. ``surplus`` holds any
    non-blank cells found beyond the known columns.
    """

    operation: str
    course_shortname: str = ""
    block_name: str = ""
    region: str = ""
    weight_text: str = ""
    line_number: int | None = None
    surplus: tuple[str, ...] = ()

    @property
    def weight(self) -> int | None:
        return parse_weight(self.weight_text)

    @classmethod
    def from_cells(
        cls,
        cells: Sequence[str | None],
        *,
        line_number: int | None = None,
    ) -> BlockSettingsRow:
        values = [(cell or "").strip() for cell in cells]
        known = values[: len(COLUMNS)]
        known += [""] * (len(COLUMNS) - len(known))
        operation, course_shortname, block_name, region, weight_text = known
        return cls(
            operation=operation,
            course_shortname=course_shortname,
            block_name=block_name,
            region=region,
            weight_text=weight_text,
            line_number=line_number,
            surplus=tuple(value for value in values[len(COLUMNS) :] if value),
        )
