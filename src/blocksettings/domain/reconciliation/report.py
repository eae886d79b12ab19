"""Line-by-line outcome of a reconciliation run."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from blocksettings.domain.reconciliation.messages import Outcome, format_total


@dataclass(frozen=True, slots=True)
class ReportLine:
    line_number: int
    outcome: Outcome
    message: str


@dataclass(slots=True)
class ReconciliationReport:
    """Report lines in input order, one per processed row."""

    lines: list[ReportLine] = field(default_factory=list[ReportLine])

    def append(self, line: ReportLine) -> None:
        self.lines.append(line)

    @property
    def total(self) -> int:
        return len(self.lines)

    @property
    def outcomes(self) -> list[Outcome]:
        return [line.outcome for line in self.lines]

    def counts(self) -> Counter[Outcome]:
        return Counter(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for line in self.lines if line.outcome.is_success)

    @property
    def skipped(self) -> int:
        return self.total - self.succeeded

    def summary(self) -> str:
        return format_total(self.total)

    def render(self) -> str:
        return "\n".join([*(line.message for line in self.lines), self.summary()])
