"""Public interface for the CSV file adapter."""

from __future__ import annotations

from .reader import DELIMITERS, CsvOptions, load_block_settings_rows, parse_block_settings_csv
from .schema import COLUMN_ALIASES, BlockSettingsCsvRecord
from .translator import to_block_settings_row

__all__ = [
    "COLUMN_ALIASES",
    "DELIMITERS",
    "BlockSettingsCsvRecord",
    "CsvOptions",
    "load_block_settings_rows",
    "parse_block_settings_csv",
    "to_block_settings_row",
]
