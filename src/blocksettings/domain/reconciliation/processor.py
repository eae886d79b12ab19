"""Apply block settings CSV rows to courses, one report line per row."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from blocksettings.domain.course_blocks import CourseBlockRegistry
from blocksettings.domain.defaults import DefaultBlockLayout, SiteDefaultPlacements
from blocksettings.domain.errors import PersistenceError
from blocksettings.domain.model import MAX_WEIGHT, MIN_WEIGHT, Operation
from blocksettings.domain.reconciliation.messages import Outcome, ReportFields, format_message
from blocksettings.domain.reconciliation.report import ReconciliationReport, ReportLine
from blocksettings.domain.reconciliation.rows import BlockSettingsRow

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from blocksettings.domain.model import Course
    from blocksettings.domain.ports import (
        BlockSettingsRepositories,
        BlockSettingsUnitOfWork,
        DefaultPlacementProvider,
    )

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReconciliationSettings:
    """Site settings the processor needs for every run."""

    protected_block_types: tuple[str, ...] = ()
    default_layout: DefaultBlockLayout = field(default_factory=DefaultBlockLayout)


@dataclass(slots=True)
class _RunState:
    """Per-run cache of the last course's registry."""

    unit_of_work: BlockSettingsUnitOfWork
    defaults: DefaultPlacementProvider
    course_shortname: str | None = None
    registry: CourseBlockRegistry | None = None
    protected_block_types: tuple[str, ...] = ()

    @property
    def repositories(self) -> BlockSettingsRepositories:
        return self.unit_of_work.repositories

    def forget_registry(self) -> None:
        self.course_shortname = None
        self.registry = None


class ReconciliationProcessor:
    """Validate CSV rows against course block registries and apply add/delete/reset.

    A failed row never stops the run: every row ends in exactly one report line.
    Rows are committed one at a time, so a run interrupted half way leaves the
    earlier rows applied.
    """

    def __init__(
        self,
        *,
        unit_of_work_factory: Callable[[], BlockSettingsUnitOfWork],
        settings: ReconciliationSettings | None = None,
    ) -> None:
        self._unit_of_work_factory = unit_of_work_factory
        self._settings = settings or ReconciliationSettings()

    def execute(
        self,
        rows: Iterable[BlockSettingsRow | Sequence[str]],
    ) -> ReconciliationReport:
        report = ReconciliationReport()

        with self._unit_of_work_factory() as uow:
            state = _RunState(
                unit_of_work=uow,
                defaults=SiteDefaultPlacements(
                    uow.repositories,
                    layout=self._settings.default_layout,
                ),
            )
            for index, raw in enumerate(rows, start=1):
                row = (
                    raw
                    if isinstance(raw, BlockSettingsRow)
                    else BlockSettingsRow.from_cells(raw, line_number=index)
                )
                line = self._process_row(row, row.line_number or index, state)
                log.debug("Row %s: %s", line.line_number, line.outcome)
                report.append(line)

        log.info(
            "Processed %s rows: succeeded=%s, skipped=%s",
            report.total,
            report.succeeded,
            report.skipped,
        )
        return report

    def _process_row(  # noqa: C901, PLR0911, PLR0912
        self,
        row: BlockSettingsRow,
        line_number: int,
        state: _RunState,
    ) -> ReportLine:
        fields = ReportFields(
            linenum=line_number,
            op=row.operation,
            oplabel=row.operation,
            coursename=row.course_shortname,
            blockname=row.block_name,
            blocktitle=row.block_name,
            region=row.region,
            weight=row.weight_text,
        )

        def reported(outcome: Outcome) -> ReportLine:
            return ReportLine(line_number, outcome, format_message(outcome, fields))

        if row.surplus:
            return reported(Outcome.TOO_MANY_COLUMNS)

        operation = Operation.from_token(row.operation)
        if operation is None:
            return reported(Outcome.OPERATION_UNKNOWN)
        fields.oplabel = operation.label

        if not row.course_shortname:
            return reported(Outcome.COURSE_NOT_SPECIFIED)
        course = state.repositories.courses.get_by_shortname(row.course_shortname)
        if course is None or course.id is None or course.context_id is None:
            return reported(Outcome.COURSE_NOT_FOUND)
        fields.courseid = str(course.id)

        registry = self._registry_for(course, state)

        if operation is Operation.RESET:
            if not self._apply(state, lambda: state.defaults.reset_to_defaults(course)):
                return reported(Outcome.PERSISTENCE_FAILED)
            return reported(Outcome.COURSE_BLOCKS_RESET)

        block_name = row.block_name
        if not block_name:
            return reported(Outcome.BLOCK_NOT_SPECIFIED)
        if not row.region:
            return reported(Outcome.REGION_NOT_SPECIFIED)
        if not registry.is_known_block_type(block_name):
            return reported(Outcome.BLOCK_NOT_INSTALLED)
        block_type = registry.get_block_type(block_name)
        if block_type is not None:
            fields.blocktitle = block_type.display_title
        if block_name in state.protected_block_types:
            return reported(Outcome.OPERATION_NOT_VALID)
        if operation is Operation.DELETE and not registry.is_block_present(block_name):
            return reported(Outcome.BLOCK_DOESNT_EXIST)
        if not registry.is_known_region(row.region):
            return reported(Outcome.REGION_NOT_VALID)
        weight = row.weight
        if weight is None or not MIN_WEIGHT <= weight <= MAX_WEIGHT:
            return reported(Outcome.WEIGHT_NOT_VALID)

        if operation is Operation.DELETE:
            placement = registry.find_placement(block_name, row.region, weight)
            if placement is None:
                return reported(Outcome.BLOCK_INSTANCE_NOT_FOUND)
            if not self._apply(state, lambda: registry.delete_placement(placement)):
                return reported(Outcome.PERSISTENCE_FAILED)
            return reported(Outcome.BLOCK_DELETED)

        if not registry.is_addable(block_name):
            return reported(Outcome.BLOCK_ALREADY_ADDED)
        if not self._apply(state, lambda: registry.add_placement(block_name, row.region, weight)):
            return reported(Outcome.PERSISTENCE_FAILED)
        return reported(Outcome.BLOCK_ADDED)

    def _registry_for(self, course: Course, state: _RunState) -> CourseBlockRegistry:
        if state.registry is None or state.course_shortname != course.shortname:
            if course.id is None:
                raise ValueError("Cannot build a block registry for an unsaved course")
            state.registry = CourseBlockRegistry(
                course.id,
                repositories=state.repositories,
                protected_block_types=self._settings.protected_block_types,
            )
            state.protected_block_types = state.registry.get_protected_block_types()
            state.course_shortname = course.shortname
        return state.registry

    def _apply(self, state: _RunState, mutation: Callable[[], object]) -> bool:
        """Run one row's mutation and commit it; roll back and report on store errors.

        The cached registry is dropped either way so the next row reloads the
        course from the store.
        """

        try:
            mutation()
            state.unit_of_work.commit()
        except PersistenceError:
            log.warning("Store rejected change for course %s", state.course_shortname, exc_info=True)
            state.unit_of_work.rollback()
            return False
        finally:
            state.forget_registry()
        return True
