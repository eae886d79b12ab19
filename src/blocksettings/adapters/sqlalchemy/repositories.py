"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import and_, delete, func, insert, literal, or_, select, true, update
from sqlalchemy.exc import SQLAlchemyError

from blocksettings.adapters.sqlalchemy.mappings import (
    block_instance_table,
    block_position_table,
    block_table,
    context_table,
    course_table,
    user_preference_table,
)
from blocksettings.domain.errors import PersistenceError
from blocksettings.domain.model import (
    COURSE_VIEW_PAGE_TYPE,
    COURSE_VIEW_PAGE_TYPE_PATTERNS,
    BlockInstance,
    BlockType,
    ContextLevel,
    Course,
    Placement,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy.orm import Session


class SqlAlchemyCourseRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, course_id: int) -> Course | None:
        return self.session.get(Course, course_id)

    def get_by_shortname(self, shortname: str) -> Course | None:
        stmt = select(Course).where(course_table.c.shortname == shortname)
        return self.session.execute(stmt).scalar_one_or_none()

    def add(self, course: Course) -> None:
        """Insert ``course`` together with the context its blocks live in."""

        try:
            self.session.add(course)
            self.session.flush()
            if course.context_id is None:
                result = self.session.execute(
                    insert(context_table).values(
                        context_level=int(ContextLevel.COURSE),
                        instance_id=course.id,
                    )
                )
                course.context_id = result.inserted_primary_key[0]
                self.session.flush()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not save course {course.shortname!r}") from exc


class SqlAlchemyBlockTypeRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_installed(self) -> list[BlockType]:
        stmt = select(BlockType).order_by(block_table.c.name)
        return list(self.session.execute(stmt).scalars())

    def add(self, block_type: BlockType) -> None:
        try:
            self.session.add(block_type)
            self.session.flush()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not save block type {block_type.name!r}") from exc


class SqlAlchemyPlacementRepository:
    """Course page placements: instance rows joined with their position overrides."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_context(
        self,
        context_id: int,
        *,
        include_invisible: bool = False,
    ) -> list[Placement]:
        instances = block_instance_table
        positions = block_position_table
        blocks = block_table
        region = func.coalesce(positions.c.region, instances.c.default_region).label("region")
        weight = func.coalesce(positions.c.weight, instances.c.default_weight).label("weight")
        visible = func.coalesce(positions.c.visible, true()).label("visible")

        stmt = (
            select(
                instances.c.id,
                instances.c.block_name,
                instances.c.parent_context_id,
                instances.c.default_region,
                instances.c.default_weight,
                instances.c.show_in_subcontexts,
                instances.c.page_type_pattern,
                instances.c.subpage_pattern,
                instances.c.required_by_theme,
                instances.c.config_data,
                positions.c.id.label("position_id"),
                region,
                weight,
                visible,
            )
            .select_from(
                instances.outerjoin(
                    positions,
                    and_(
                        positions.c.block_instance_id == instances.c.id,
                        positions.c.context_id == context_id,
                        positions.c.page_type == COURSE_VIEW_PAGE_TYPE,
                        positions.c.subpage == literal(""),
                    ),
                )
            )
            .where(instances.c.parent_context_id == context_id)
            .where(instances.c.page_type_pattern.in_(COURSE_VIEW_PAGE_TYPE_PATTERNS))
            .where(instances.c.subpage_pattern.is_(None))
            .order_by(region, weight, instances.c.id)
        )
        if not include_invisible:
            enabled = select(blocks.c.name).where(blocks.c.visible == true())
            stmt = stmt.where(instances.c.block_name.in_(enabled)).where(
                or_(positions.c.visible == true(), positions.c.visible.is_(None))
            )

        return [
            Placement(
                id=row.id,
                block_name=row.block_name,
                context_id=row.parent_context_id,
                region=row.region,
                weight=row.weight,
                default_region=row.default_region,
                default_weight=row.default_weight,
                position_id=row.position_id,
                visible=bool(row.visible),
                required_by_theme=bool(row.required_by_theme),
                page_type_pattern=row.page_type_pattern,
                subpage_pattern=row.subpage_pattern,
                show_in_subcontexts=bool(row.show_in_subcontexts),
                config_data=row.config_data,
            )
            for row in self.session.execute(stmt)
        ]

    def add(self, instance: BlockInstance) -> int:
        try:
            self.session.add(instance)
            self.session.flush()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not add block {instance.block_name!r}") from exc
        if instance.id is None:
            raise PersistenceError(f"Block {instance.block_name!r} was not assigned an id")
        return instance.id

    def delete(self, placement_id: int) -> None:
        try:
            self.session.execute(
                delete(block_position_table).where(
                    block_position_table.c.block_instance_id == placement_id
                )
            )
            self.session.execute(
                delete(BlockInstance).where(block_instance_table.c.id == placement_id)
            )
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not delete placement {placement_id}") from exc

    def delete_all_for_context(self, context_id: int) -> list[int]:
        try:
            ids = list(
                self.session.execute(
                    select(block_instance_table.c.id).where(
                        block_instance_table.c.parent_context_id == context_id
                    )
                ).scalars()
            )
            if ids:
                self.session.execute(
                    delete(block_position_table).where(
                        block_position_table.c.block_instance_id.in_(ids)
                    )
                )
                self.session.execute(
                    delete(BlockInstance).where(block_instance_table.c.id.in_(ids))
                )
            self.session.execute(
                delete(block_position_table).where(block_position_table.c.context_id == context_id)
            )
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not delete blocks in context {context_id}") from exc
        return ids

    def reposition(
        self,
        placement: Placement,
        region: str,
        weight: int,
        *,
        move_defaults: bool,
    ) -> None:
        positions = block_position_table
        try:
            if move_defaults:
                self.session.execute(
                    update(BlockInstance)
                    .where(block_instance_table.c.id == placement.id)
                    .values(default_region=region, default_weight=weight)
                )
            if placement.position_id is not None:
                self.session.execute(
                    update(positions)
                    .where(positions.c.id == placement.position_id)
                    .values(region=region, weight=weight)
                )
            elif not move_defaults:
                self.session.execute(
                    insert(positions).values(
                        block_instance_id=placement.id,
                        context_id=placement.context_id,
                        page_type=COURSE_VIEW_PAGE_TYPE,
                        subpage="",
                        visible=placement.visible,
                        region=region,
                        weight=weight,
                    )
                )
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not move placement {placement.id}") from exc


class SqlAlchemyUserPreferenceRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def delete_names(self, names: Iterable[str]) -> int:
        keys = list(names)
        if not keys:
            return 0
        try:
            result = self.session.execute(
                delete(user_preference_table).where(user_preference_table.c.name.in_(keys))
            )
        except SQLAlchemyError as exc:
            raise PersistenceError("Could not delete user preferences") from exc
        return result.rowcount
