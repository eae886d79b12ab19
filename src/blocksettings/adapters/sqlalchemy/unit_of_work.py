"""SQLAlchemy-backed unit of work for course block changes."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from blocksettings.adapters.sqlalchemy.mappings import start_mappers
from blocksettings.adapters.sqlalchemy.migrations import upgrade_head
from blocksettings.adapters.sqlalchemy.repositories import (
    SqlAlchemyBlockTypeRepository,
    SqlAlchemyCourseRepository,
    SqlAlchemyPlacementRepository,
    SqlAlchemyUserPreferenceRepository,
)
from blocksettings.config import DatabaseConfig, get_database_config
from blocksettings.domain.errors import PersistenceError
from blocksettings.domain.ports.unit_of_work import BlockSettingsRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when a SQLAlchemy unit of work is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    engine: Engine | None = None
    session_factory: sessionmaker[Session] | None = None


_STATE = _AdapterState()


def _session_factory() -> sessionmaker[Session]:
    if _STATE.session_factory is None:
        raise StartupError(
            "SQLAlchemy adapter not initialised. Call blocksettings.adapters.sqlalchemy."
            "unit_of_work.startup() before opening a unit of work."
        )
    return _STATE.session_factory


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Initialise the SQLAlchemy engine, schema, and session factory."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    if engine is None:
        database = DatabaseConfig(uri=database_uri) if database_uri else get_database_config()
        engine = create_engine(database.uri, echo=database.echo)
    start_mappers()
    upgrade_head(engine=engine)
    log.debug("SQLAlchemy adapter started on %s", engine.url)

    _STATE.engine = engine
    _STATE.session_factory = sessionmaker(bind=engine, expire_on_commit=False)


def configured_engine() -> Engine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def is_started() -> bool:
    """Return whether the adapter has been initialised."""

    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None
    _STATE.session_factory = None


class SqlAlchemyBlockSettingsUnitOfWork:
    """One session per ``with`` block, exposing the block settings repositories.

    Leaving the block closes the session; an exception rolls it back first.
    """

    def __init__(self) -> None:
        self._session_factory = _session_factory()
        self._session: Session | None = None
        self._repositories: BlockSettingsRepositories | None = None

    def __enter__(self) -> SqlAlchemyBlockSettingsUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work session already initialised")
        session = self._session_factory()
        self._session = session
        self._repositories = BlockSettingsRepositories(
            courses=SqlAlchemyCourseRepository(session),
            block_types=SqlAlchemyBlockTypeRepository(session),
            placements=SqlAlchemyPlacementRepository(session),
            preferences=SqlAlchemyUserPreferenceRepository(session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        session = self.session
        try:
            if exc_type is not None:
                session.rollback()
        finally:
            session.close()
            self._session = None
            self._repositories = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._session

    @property
    def repositories(self) -> BlockSettingsRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work session not initialised")
        return self._repositories

    def commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            raise PersistenceError("Could not commit block changes") from exc

    def rollback(self) -> None:
        self.session.rollback()
