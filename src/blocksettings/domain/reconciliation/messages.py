"""Outcome codes and the report messages rendered for them."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Final


class Outcome(StrEnum):
    """Result of processing one CSV row; values double as message keys."""

    BLOCK_ADDED = "blockadded"
    BLOCK_DELETED = "blockdeleted"
    COURSE_BLOCKS_RESET = "courseblocksreset"

    OPERATION_UNKNOWN = "operationunknown"
    COURSE_NOT_SPECIFIED = "coursenotspecified"
    COURSE_NOT_FOUND = "coursenotfound"
    BLOCK_NOT_SPECIFIED = "blocknotspecified"
    REGION_NOT_SPECIFIED = "regionnotspecified"
    BLOCK_NOT_INSTALLED = "blocknotinstalled"
    OPERATION_NOT_VALID = "operationnotvalid"
    REGION_NOT_VALID = "regionnotvalid"
    WEIGHT_NOT_VALID = "weightnotvalid"
    BLOCK_DOESNT_EXIST = "blockdoesntexist"
    BLOCK_INSTANCE_NOT_FOUND = "blockinstancenotfound"
    BLOCK_ALREADY_ADDED = "blockalreadyadded"
    TOO_MANY_COLUMNS = "toomanycols"
    PERSISTENCE_FAILED = "persistencefailed"

    @property
    def is_success(self) -> bool:
        return self in _SUCCESSES


_SUCCESSES: Final[frozenset[Outcome]] = frozenset(
    {Outcome.BLOCK_ADDED, Outcome.BLOCK_DELETED, Outcome.COURSE_BLOCKS_RESET}
)


@dataclass(slots=True)
class ReportFields:
    """Values substituted into a report message."""

    linenum: int
    op: str = ""
    oplabel: str = ""
    coursename: str = ""
    courseid: str = ""
    blockname: str = ""
    blocktitle: str = ""
    region: str = ""
    weight: str = ""
    line: str = "Line"
    skipped: str = "Skipped"


MESSAGES: Final[dict[Outcome, str]] = {
    Outcome.BLOCK_ADDED: (
        '{line} {linenum} [{oplabel}]: "{blocktitle}" ({blockname}) added to '
        '"{coursename}" ({courseid}) in {region} with weight {weight}.'
    ),
    Outcome.BLOCK_DELETED: (
        '{line} {linenum} [{oplabel}]: Deleted "{blocktitle}" ({blockname}) from {region} '
        'with weight {weight} in "{coursename}" ({courseid}).'
    ),
    Outcome.COURSE_BLOCKS_RESET: (
        '{line} {linenum} [{oplabel}]: Blocks in "{coursename}" ({courseid}) reset to defaults.'
    ),
    Outcome.OPERATION_UNKNOWN: '{line} {linenum} [{oplabel}]: Invalid operation "{op}". {skipped}.',
    Outcome.COURSE_NOT_SPECIFIED: "{line} {linenum} [{oplabel}]: No course specified. {skipped}.",
    Outcome.COURSE_NOT_FOUND: (
        '{line} {linenum} [{oplabel}]: Course "{coursename}" not found. {skipped}.'
    ),
    Outcome.BLOCK_NOT_SPECIFIED: "{line} {linenum} [{oplabel}]: No block specified. {skipped}.",
    Outcome.REGION_NOT_SPECIFIED: "{line} {linenum} [{oplabel}]: No region specified. {skipped}.",
    Outcome.BLOCK_NOT_INSTALLED: (
        '{line} {linenum} [{oplabel}]: Block "{blockname}" is not installed or not enabled. '
        "{skipped}."
    ),
    Outcome.OPERATION_NOT_VALID: (
        '{line} {linenum} [{oplabel}]: "{blocktitle}" ({blockname}) is a protected block and '
        "cannot be added or deleted. {skipped}."
    ),
    Outcome.REGION_NOT_VALID: (
        '{line} {linenum} [{oplabel}]: Region "{region}" is not valid, use side-pre or '
        "side-post. {skipped}."
    ),
    Outcome.WEIGHT_NOT_VALID: (
        '{line} {linenum} [{oplabel}]: Weight "{weight}" is not valid, use a whole number '
        "from -10 to 10. {skipped}."
    ),
    Outcome.BLOCK_DOESNT_EXIST: (
        '{line} {linenum} [{oplabel}]: "{blocktitle}" ({blockname}) not added to '
        '"{coursename}" ({courseid}), so can\'t be removed. {skipped}.'
    ),
    Outcome.BLOCK_INSTANCE_NOT_FOUND: (
        '{line} {linenum} [{oplabel}]: No "{blocktitle}" ({blockname}) block in {region} '
        'with weight {weight} in "{coursename}" ({courseid}). {skipped}.'
    ),
    Outcome.BLOCK_ALREADY_ADDED: (
        '{line} {linenum} [{oplabel}]: "{blocktitle}" ({blockname}) already added to '
        '"{coursename}" ({courseid}). {skipped}.'
    ),
    Outcome.TOO_MANY_COLUMNS: (
        "{line} {linenum} [{oplabel}]: Too many columns, expecting 5. {skipped}."
    ),
    Outcome.PERSISTENCE_FAILED: (
        '{line} {linenum} [{oplabel}]: Error saving changes to "{blockname}" in '
        '"{coursename}" ({courseid}). {skipped}.'
    ),
}

ROWS_TOTAL_MESSAGE: Final[str] = "{total} rows processed."


def format_message(outcome: Outcome, fields: ReportFields) -> str:
    return MESSAGES[outcome].format(**asdict(fields))


def format_total(total: int) -> str:
    return ROWS_TOTAL_MESSAGE.format(total=total)
