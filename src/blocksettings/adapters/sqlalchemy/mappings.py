"""SQLAlchemy mapping metadata for the host's course and block tables."""

from __future__ import annotations

import logging
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
    orm,
)
from sqlalchemy.orm import configure_mappers

from blocksettings.domain.model import (
    COURSE_VIEW_PAGE_TYPE_PATTERN,
    BlockInstance,
    BlockType,
    Course,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

context_table = Table(
    "context",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("context_level", Integer, nullable=False),
    Column("instance_id", Integer, nullable=False),
    UniqueConstraint("context_level", "instance_id", name="uq_context_instance"),
)

course_table = Table(
    "course",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("shortname", String(255), nullable=False, unique=True),
    Column("fullname", String(254), nullable=False, default=""),
    Column("context_id", Integer, ForeignKey("context.id"), nullable=True),
)

block_table = Table(
    "block",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(40), nullable=False, unique=True),
    Column("title", String(255), nullable=False, default=""),
    Column("visible", Boolean, nullable=False, default=True),
    Column("allow_multiple", Boolean, nullable=False, default=False),
)

block_instance_table = Table(
    "block_instances",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("block_name", String(40), nullable=False),
    Column("parent_context_id", Integer, ForeignKey("context.id"), nullable=False),
    Column("show_in_subcontexts", Boolean, nullable=False, default=False),
    Column("required_by_theme", Boolean, nullable=False, default=False),
    Column(
        "page_type_pattern",
        String(64),
        nullable=False,
        default=COURSE_VIEW_PAGE_TYPE_PATTERN,
    ),
    Column("subpage_pattern", String(16), nullable=True),
    Column("default_region", String(16), nullable=False),
    Column("default_weight", Integer, nullable=False),
    Column("config_data", Text, nullable=False, default=""),
    Index("ix_block_instances_parent_context", "parent_context_id"),
    sqlite_autoincrement=True,
)

block_position_table = Table(
    "block_positions",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "block_instance_id",
        Integer,
        ForeignKey("block_instances.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("context_id", Integer, ForeignKey("context.id"), nullable=False),
    Column("page_type", String(64), nullable=False),
    Column("subpage", String(16), nullable=False, default=""),
    Column("visible", Boolean, nullable=False, default=True),
    Column("region", String(16), nullable=False),
    Column("weight", Integer, nullable=False),
    UniqueConstraint(
        "block_instance_id",
        "context_id",
        "page_type",
        "subpage",
        name="uq_block_positions_page",
    ),
)

user_preference_table = Table(
    "user_preferences",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, nullable=False),
    Column("name", String(255), nullable=False),
    Column("value", String(1333), nullable=False, default=""),
    UniqueConstraint("user_id", "name", name="uq_user_preferences_name"),
    Index("ix_user_preferences_name", "name"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Course, course_table)
    mapper_registry.map_imperatively(BlockType, block_table)
    mapper_registry.map_imperatively(BlockInstance, block_instance_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
