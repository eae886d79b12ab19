from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from blocksettings.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyBlockSettingsUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from blocksettings.domain.model import Course

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.engine import Engine


def test_commit_persists_across_units_of_work(
    sqlite_unit_of_work: Callable[[], SqlAlchemyBlockSettingsUnitOfWork],
) -> None:
    with sqlite_unit_of_work() as uow:
        uow.repositories.courses.add(Course(shortname="course101"))
        uow.commit()

    with sqlite_unit_of_work() as uow:
        course = uow.repositories.courses.get_by_shortname("course101")

    assert course is not None
    assert course.context_id is not None


def test_exception_rolls_back(
    sqlite_unit_of_work: Callable[[], SqlAlchemyBlockSettingsUnitOfWork],
) -> None:
    with pytest.raises(RuntimeError), sqlite_unit_of_work() as uow:
        uow.repositories.courses.add(Course(shortname="course101"))
        raise RuntimeError("boom")

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.courses.get_by_shortname("course101") is None


def test_explicit_rollback_discards_changes(
    sqlite_unit_of_work: Callable[[], SqlAlchemyBlockSettingsUnitOfWork],
) -> None:
    with sqlite_unit_of_work() as uow:
        uow.repositories.courses.add(Course(shortname="course101"))
        uow.rollback()
        assert uow.repositories.courses.get_by_shortname("course101") is None


def test_repositories_require_an_open_session(
    sqlite_unit_of_work: Callable[[], SqlAlchemyBlockSettingsUnitOfWork],
) -> None:
    uow = sqlite_unit_of_work()

    with pytest.raises(StartupError):
        _ = uow.repositories


def test_unit_of_work_requires_startup() -> None:
    shutdown()

    with pytest.raises(StartupError):
        SqlAlchemyBlockSettingsUnitOfWork()


def test_startup_twice_requires_force(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    try:
        assert is_started()
        assert configured_engine() is sqlite_engine
        with pytest.raises(StartupError):
            startup(engine=sqlite_engine)
    finally:
        shutdown()

    assert not is_started()
