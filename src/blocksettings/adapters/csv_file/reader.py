"""Read block settings rows from a CSV file."""

from __future__ import annotations

import csv
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from pydantic import ValidationError

from blocksettings.domain.errors import SetupError
from blocksettings.domain.reconciliation.rows import COLUMNS

from .schema import COLUMN_ALIASES, HEADER_NAMES, BlockSettingsCsvRecord
from .translator import to_block_settings_row

if TYPE_CHECKING:
    from collections.abc import Iterable

    from blocksettings.domain.reconciliation import BlockSettingsRow

log = getLogger(__name__)

DELIMITERS: Final[dict[str, str]] = {
    "comma": ",",
    "semicolon": ";",
    "colon": ":",
    "tab": "\t",
}

MIN_COLUMNS: Final[int] = 2

_CANONICAL_BY_ALIAS: Final[dict[str, str]] = {
    alias: name for name, aliases in COLUMN_ALIASES.items() for alias in aliases
}


@dataclass(frozen=True, slots=True)
class CsvOptions:
    encoding: str = "utf-8-sig"
    delimiter: str = "comma"

    @property
    def delimiter_char(self) -> str:
        try:
            return DELIMITERS[self.delimiter]
        except KeyError:
            raise SetupError(
                f"Unknown CSV delimiter {self.delimiter!r}; use one of {', '.join(DELIMITERS)}"
            ) from None


def load_block_settings_rows(
    path: str | Path,
    *,
    options: CsvOptions | None = None,
) -> list[BlockSettingsRow]:
    """Read ``path`` and return its rows, raising ``SetupError`` if it cannot be used."""

    resolved = options or CsvOptions()
    delimiter = resolved.delimiter_char
    source = Path(path)
    try:
        with source.open(encoding=resolved.encoding, newline="") as handle:
            lines = handle.readlines()
    except (OSError, UnicodeDecodeError, LookupError) as exc:
        raise SetupError(f"Cannot read CSV file {source}: {exc}") from exc

    rows = parse_block_settings_csv(lines, delimiter=delimiter)
    log.debug("Read %s rows from %s", len(rows), source)
    return rows


def parse_block_settings_csv(
    lines: Iterable[str],
    *,
    delimiter: str = ",",
) -> list[BlockSettingsRow]:
    """Parse CSV text into rows; line numbers refer to the physical file lines.

    Blank lines are skipped. A first record whose first cell is ``operation`` is
    a header and maps the remaining records by column name.
    """

    reader = csv.reader(lines, delimiter=delimiter)
    records = [
        (reader.line_num, cells) for cells in reader if any(cell.strip() for cell in cells)
    ]
    if not records:
        raise SetupError("CSV file is empty")

    first_line, first = records[0]
    if len(first) < MIN_COLUMNS:
        raise SetupError(
            f"Line {first_line}: expected at least {MIN_COLUMNS} columns, found {len(first)}"
        )

    header: list[str] | None = None
    if first[0].strip().lower() == "operation":
        header = [cell.strip().lower() for cell in first]
        records = records[1:]

    return [_to_row(cells, line_number, header) for line_number, cells in records]


def _to_row(cells: list[str], line_number: int, header: list[str] | None) -> BlockSettingsRow:
    payload: dict[str, str] = {}
    surplus: list[str] = []
    if header is None:
        payload.update(zip(COLUMNS, cells, strict=False))
        surplus.extend(cells[len(COLUMNS) :])
    else:
        for index, cell in enumerate(cells):
            name = header[index] if index < len(header) else None
            if name is not None and name in HEADER_NAMES and _CANONICAL_BY_ALIAS[name] not in payload:
                payload[_CANONICAL_BY_ALIAS[name]] = cell
            else:
                surplus.append(cell)

    try:
        record = BlockSettingsCsvRecord.model_validate(payload)
    except ValidationError as exc:
        raise SetupError(f"Line {line_number}: cannot read row: {exc}") from exc
    return to_block_settings_row(record, line_number=line_number, surplus=surplus)
