"""Root logger setup for the blocksettings CLI."""

from __future__ import annotations

import logging

# Libraries that log migration chatter at INFO on every start.
_QUIET_LOGGERS = ("alembic.runtime.migration",)


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once.

    Report lines go to stdout; logs go to stderr in a terse format. Migration
    chatter is only shown at DEBUG. Pass ``force=True`` to reconfigure in tests.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    quiet_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)
