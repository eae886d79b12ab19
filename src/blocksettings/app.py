"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from blocksettings.adapters.csv_file import CsvOptions, load_block_settings_rows
from blocksettings.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyBlockSettingsUnitOfWork,
    is_started,
    startup,
)
from blocksettings.config import BlockSettingsConfig, get_block_settings_config
from blocksettings.domain.course_blocks import CourseBlockRegistry
from blocksettings.domain.defaults import DefaultBlockLayout
from blocksettings.domain.errors import CourseNotFoundError
from blocksettings.domain.model import BlockType, Course
from blocksettings.domain.ports.unit_of_work import BlockSettingsUnitOfWork
from blocksettings.domain.reconciliation import ReconciliationProcessor, ReconciliationSettings

if TYPE_CHECKING:
    from pathlib import Path

    from blocksettings.domain.model import Placement, Region
    from blocksettings.domain.ports import BlockSettingsRepositories
    from blocksettings.domain.reconciliation import ReconciliationReport

UnitOfWorkFactory = Callable[[], BlockSettingsUnitOfWork]


log = getLogger(__name__)


def _resolve_unit_of_work(factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if factory is not None:
        return factory
    if not is_started():
        startup()
    return SqlAlchemyBlockSettingsUnitOfWork


def reconciliation_settings(config: BlockSettingsConfig) -> ReconciliationSettings:
    return ReconciliationSettings(
        protected_block_types=config.undeletable_block_types,
        default_layout=DefaultBlockLayout.parse(config.default_blocks),
    )


def upload_block_settings(
    path: str | Path,
    *,
    options: CsvOptions | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    config: BlockSettingsConfig | None = None,
) -> ReconciliationReport:
    """Apply a block settings CSV file to the course store."""

    # Read the whole file first so a malformed upload changes nothing.
    rows = load_block_settings_rows(path, options=options)
    effective_config = config or get_block_settings_config()
    processor = ReconciliationProcessor(
        unit_of_work_factory=_resolve_unit_of_work(unit_of_work_factory),
        settings=reconciliation_settings(effective_config),
    )
    log.info("Starting block settings upload: file=%s, rows=%s", path, len(rows))

    report = processor.execute(rows)

    log.info(
        "Finished block settings upload: total=%s, succeeded=%s, skipped=%s",
        report.total,
        report.succeeded,
        report.skipped,
    )
    return report


def _registry_for_shortname(
    repositories: BlockSettingsRepositories,
    shortname: str,
    config: BlockSettingsConfig,
    *,
    include_invisible: bool = False,
) -> CourseBlockRegistry:
    course = repositories.courses.get_by_shortname(shortname)
    if course is None or course.id is None:
        raise CourseNotFoundError(f"Course {shortname!r} not found")
    return CourseBlockRegistry(
        course.id,
        repositories=repositories,
        protected_block_types=config.undeletable_block_types,
        include_invisible=include_invisible,
    )


def describe_course_blocks(
    shortname: str,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    config: BlockSettingsConfig | None = None,
) -> dict[Region, tuple[Placement, ...]]:
    """Return a course's placements grouped by region, in page order, hidden ones included."""

    effective_config = config or get_block_settings_config()
    with _resolve_unit_of_work(unit_of_work_factory)() as uow:
        registry = _registry_for_shortname(
            uow.repositories,
            shortname,
            effective_config,
            include_invisible=True,
        )
        return {
            region: registry.get_placements_for_region(region)
            for region in registry.list_regions()
        }


def list_addable_block_types(
    shortname: str,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    config: BlockSettingsConfig | None = None,
) -> tuple[BlockType, ...]:
    effective_config = config or get_block_settings_config()
    with _resolve_unit_of_work(unit_of_work_factory)() as uow:
        registry = _registry_for_shortname(uow.repositories, shortname, effective_config)
        return registry.get_addable_block_types()


def create_course(
    *,
    shortname: str,
    fullname: str = "",
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Course:
    """Register a course so block settings can be uploaded for it."""

    if not shortname.strip():
        raise ValueError("Course shortname must not be empty")
    course = Course(shortname=shortname.strip(), fullname=fullname.strip())
    with _resolve_unit_of_work(unit_of_work_factory)() as uow:
        uow.repositories.courses.add(course)
        uow.commit()
    log.info("Created course %s (id=%s, context=%s)", course.shortname, course.id, course.context_id)
    return course


def install_block_type(
    *,
    name: str,
    title: str = "",
    allow_multiple: bool = False,
    visible: bool = True,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> BlockType:
    """Register an installed block type."""

    if not name.strip():
        raise ValueError("Block type name must not be empty")
    block_type = BlockType(
        name=name.strip(),
        title=title.strip(),
        visible=visible,
        allow_multiple=allow_multiple,
    )
    with _resolve_unit_of_work(unit_of_work_factory)() as uow:
        uow.repositories.block_types.add(block_type)
        uow.commit()
    log.info("Installed block type %s (id=%s)", block_type.name, block_type.id)
    return block_type
