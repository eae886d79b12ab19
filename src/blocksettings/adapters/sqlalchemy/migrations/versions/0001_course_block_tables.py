"""Course, context, block and user preference tables.

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "context",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("context_level", sa.Integer(), nullable=False),
        sa.Column("instance_id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_context"),
        sa.UniqueConstraint("context_level", "instance_id", name="uq_context_instance"),
    )
    op.create_table(
        "course",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("shortname", sa.String(length=255), nullable=False),
        sa.Column("fullname", sa.String(length=254), nullable=False),
        sa.Column("context_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(
            ["context_id"], ["context.id"], name="fk_course_context_id_context"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_course"),
        sa.UniqueConstraint("shortname", name="uq_course_shortname"),
    )
    op.create_table(
        "block",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=40), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("visible", sa.Boolean(), nullable=False),
        sa.Column("allow_multiple", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_block"),
        sa.UniqueConstraint("name", name="uq_block_name"),
    )
    op.create_table(
        "block_instances",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("block_name", sa.String(length=40), nullable=False),
        sa.Column("parent_context_id", sa.Integer(), nullable=False),
        sa.Column("show_in_subcontexts", sa.Boolean(), nullable=False),
        sa.Column("required_by_theme", sa.Boolean(), nullable=False),
        sa.Column("page_type_pattern", sa.String(length=64), nullable=False),
        sa.Column("subpage_pattern", sa.String(length=16), nullable=True),
        sa.Column("default_region", sa.String(length=16), nullable=False),
        sa.Column("default_weight", sa.Integer(), nullable=False),
        sa.Column("config_data", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(
            ["parent_context_id"],
            ["context.id"],
            name="fk_block_instances_parent_context_id_context",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_block_instances"),
        sqlite_autoincrement=True,
    )
    op.create_index(
        "ix_block_instances_parent_context",
        "block_instances",
        ["parent_context_id"],
    )
    op.create_table(
        "block_positions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("block_instance_id", sa.Integer(), nullable=False),
        sa.Column("context_id", sa.Integer(), nullable=False),
        sa.Column("page_type", sa.String(length=64), nullable=False),
        sa.Column("subpage", sa.String(length=16), nullable=False),
        sa.Column("visible", sa.Boolean(), nullable=False),
        sa.Column("region", sa.String(length=16), nullable=False),
        sa.Column("weight", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["block_instance_id"],
            ["block_instances.id"],
            name="fk_block_positions_block_instance_id_block_instances",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["context_id"], ["context.id"], name="fk_block_positions_context_id_context"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_block_positions"),
        sa.UniqueConstraint(
            "block_instance_id",
            "context_id",
            "page_type",
            "subpage",
            name="uq_block_positions_page",
        ),
    )
    op.create_table(
        "user_preferences",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("value", sa.String(length=1333), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_user_preferences"),
        sa.UniqueConstraint("user_id", "name", name="uq_user_preferences_name"),
    )
    op.create_index("ix_user_preferences_name", "user_preferences", ["name"])


def downgrade() -> None:
    op.drop_index("ix_user_preferences_name", table_name="user_preferences")
    op.drop_table("user_preferences")
    op.drop_table("block_positions")
    op.drop_index("ix_block_instances_parent_context", table_name="block_instances")
    op.drop_table("block_instances")
    op.drop_table("block")
    op.drop_table("course")
    op.drop_table("context")
