"""CSV-driven reconciliation of course block placements.

Rows flow through ``ReconciliationProcessor``: the operation and course are
resolved, the block/region/weight fields validated against a
``CourseBlockRegistry`` for the course, and the add, delete or reset applied.
Each row yields one ``ReportLine``.
"""

from __future__ import annotations

from .messages import MESSAGES, Outcome, ReportFields, format_message, format_total
from .processor import ReconciliationProcessor, ReconciliationSettings
from .report import ReconciliationReport, ReportLine
from .rows import COLUMNS, BlockSettingsRow, parse_weight

__all__ = [
    "COLUMNS",
    "MESSAGES",
    "BlockSettingsRow",
    "Outcome",
    "ReconciliationProcessor",
    "ReconciliationReport",
    "ReconciliationSettings",
    "ReportFields",
    "ReportLine",
    "format_message",
    "format_total",
    "parse_weight",
]
