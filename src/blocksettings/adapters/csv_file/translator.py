"""Translate validated CSV records into domain rows."""

from __future__ import annotations

from typing import TYPE_CHECKING

from blocksettings.domain.reconciliation import BlockSettingsRow

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .schema import BlockSettingsCsvRecord


def to_block_settings_row(
    record: BlockSettingsCsvRecord,
    *,
    line_number: int | None = None,
    surplus: Sequence[str] = (),
) -> BlockSettingsRow:
    return BlockSettingsRow(
        operation=record.operation,
        course_shortname=record.course_shortname,
        block_name=record.block_name,
        region=record.region,
        weight_text=record.weight,
        line_number=line_number,
        surplus=tuple(cell.strip() for cell in surplus if cell.strip()),
    )
