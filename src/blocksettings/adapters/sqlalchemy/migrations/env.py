"""Alembic environment for the course block tables.

``upgrade_head`` hands over an open connection through ``config.attributes``;
the command line path opens its own engine from ``sqlalchemy.url`` or the
configured database.
"""

from __future__ import annotations

import logging
from logging.config import fileConfig
from pathlib import Path
from typing import TYPE_CHECKING, Any

from alembic import context
from sqlalchemy import create_engine, pool

from blocksettings.adapters.sqlalchemy.mappings import mapper_registry, start_mappers
from blocksettings.config import get_database_config

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection

config = context.config
log = logging.getLogger("alembic.env")

if config.config_file_name and Path(config.config_file_name).suffix == ".ini":
    fileConfig(config.config_file_name)

start_mappers()

# SQLite cannot ALTER most constraints in place; batch mode rebuilds the table.
_OPTIONS: dict[str, Any] = {
    "target_metadata": mapper_registry.metadata,
    "render_as_batch": True,
    "compare_type": True,
}


def _database_uri() -> str:
    return config.get_main_option("sqlalchemy.url") or get_database_config().uri


def _migrate(connection: Connection) -> None:
    context.configure(connection=connection, **_OPTIONS)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    context.configure(url=_database_uri(), literal_binds=True, **_OPTIONS)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connection = config.attributes.get("connection")
    if connection is not None:
        _migrate(connection)
        return

    engine = create_engine(_database_uri(), poolclass=pool.NullPool)
    try:
        with engine.connect() as own_connection:
            _migrate(own_connection)
    finally:
        engine.dispose()


if context.is_offline_mode():
    log.info("Writing migration SQL for %s", _database_uri())
    run_migrations_offline()
else:
    run_migrations_online()
