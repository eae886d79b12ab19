from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import func, insert, select

from blocksettings.adapters.sqlalchemy.mappings import (
    block_instance_table,
    block_position_table,
    context_table,
    user_preference_table,
)
from blocksettings.adapters.sqlalchemy.repositories import (
    SqlAlchemyBlockTypeRepository,
    SqlAlchemyCourseRepository,
    SqlAlchemyPlacementRepository,
    SqlAlchemyUserPreferenceRepository,
)
from blocksettings.domain.errors import PersistenceError
from blocksettings.domain.model import (
    COURSE_VIEW_PAGE_TYPE,
    BlockInstance,
    BlockType,
    ContextLevel,
    Course,
    new_course_block_instance,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


def _course(session: Session, shortname: str = "course101") -> Course:
    course = Course(shortname=shortname, fullname="Course 101")
    SqlAlchemyCourseRepository(session).add(course)
    return course


def _context_id(course: Course) -> int:
    assert course.context_id is not None
    return course.context_id


def _install(session: Session, *names: str, visible: bool = True) -> None:
    repository = SqlAlchemyBlockTypeRepository(session)
    for name in names:
        repository.add(BlockType(name=name, visible=visible))


def test_course_add_creates_course_context(sqlite_session: Session) -> None:
    course = _course(sqlite_session)

    assert course.id is not None
    context = sqlite_session.execute(
        select(context_table).where(context_table.c.id == course.context_id)
    ).one()
    assert context.context_level == ContextLevel.COURSE
    assert context.instance_id == course.id


def test_course_lookup_by_id_and_shortname(sqlite_session: Session) -> None:
    course = _course(sqlite_session)
    sqlite_session.commit()
    repository = SqlAlchemyCourseRepository(sqlite_session)

    assert course.id is not None
    assert repository.get(course.id) is course
    assert repository.get_by_shortname("course101") is course
    assert repository.get_by_shortname("course999") is None
    assert repository.get(999) is None


def test_duplicate_course_shortname_is_a_persistence_error(sqlite_session: Session) -> None:
    _course(sqlite_session)

    with pytest.raises(PersistenceError):
        _course(sqlite_session)


def test_block_types_listed_by_name(sqlite_session: Session) -> None:
    repository = SqlAlchemyBlockTypeRepository(sqlite_session)
    repository.add(BlockType(name="news_items", title="Latest announcements"))
    repository.add(BlockType(name="html", title="Text", allow_multiple=True))
    repository.add(BlockType(name="mentees", visible=False))

    installed = repository.list_installed()

    assert [block_type.name for block_type in installed] == ["html", "mentees", "news_items"]
    assert installed[0].allow_multiple
    assert not installed[1].visible


def test_duplicate_block_type_is_a_persistence_error(sqlite_session: Session) -> None:
    repository = SqlAlchemyBlockTypeRepository(sqlite_session)
    repository.add(BlockType(name="html"))

    with pytest.raises(PersistenceError):
        repository.add(BlockType(name="html"))


def test_placements_ordered_by_region_weight_and_id(sqlite_session: Session) -> None:
    context_id = _context_id(_course(sqlite_session))
    _install(sqlite_session, "calendar_month", "html", "news_items", "rss_client")
    repository = SqlAlchemyPlacementRepository(sqlite_session)
    ids = [
        repository.add(new_course_block_instance(name, context_id=context_id, region=r, weight=w))
        for name, r, w in [
            ("html", "side-pre", 2),
            ("calendar_month", "side-pre", -1),
            ("news_items", "side-post", 0),
            ("rss_client", "side-pre", 2),
        ]
    ]

    placements = repository.list_for_context(context_id)

    assert [(p.block_name, p.region, p.weight) for p in placements] == [
        ("news_items", "side-post", 0),
        ("calendar_month", "side-pre", -1),
        ("html", "side-pre", 2),
        ("rss_client", "side-pre", 2),
    ]
    assert placements[2].id == ids[0]
    assert all(p.position_id is None for p in placements)
    assert all(p.visible for p in placements)


def test_position_override_wins_over_instance_defaults(sqlite_session: Session) -> None:
    context_id = _context_id(_course(sqlite_session))
    repository = SqlAlchemyPlacementRepository(sqlite_session)
    placement_id = repository.add(
        new_course_block_instance("html", context_id=context_id, region="side-post", weight=0)
    )
    sqlite_session.execute(
        insert(block_position_table).values(
            block_instance_id=placement_id,
            context_id=context_id,
            page_type=COURSE_VIEW_PAGE_TYPE,
            subpage="",
            visible=False,
            region="side-pre",
            weight=-5,
        )
    )

    (placement,) = repository.list_for_context(context_id, include_invisible=True)

    assert placement.region == "side-pre"
    assert placement.weight == -5
    assert placement.default_region == "side-post"
    assert placement.default_weight == 0
    assert placement.position_id is not None
    assert not placement.visible


def test_only_course_page_placements_of_the_context_are_listed(sqlite_session: Session) -> None:
    context_id = _context_id(_course(sqlite_session))
    other_context_id = _context_id(_course(sqlite_session, "course202"))
    _install(sqlite_session, "calendar_month", "html", "news_items", "search_forums")
    repository = SqlAlchemyPlacementRepository(sqlite_session)
    repository.add(new_course_block_instance("html", context_id=context_id, region="side-pre", weight=0))
    repository.add(
        new_course_block_instance("html", context_id=other_context_id, region="side-pre", weight=0)
    )
    repository.add(
        BlockInstance(
            block_name="search_forums",
            parent_context_id=context_id,
            default_region="side-pre",
            default_weight=0,
            page_type_pattern="mod-forum-*",
        )
    )
    repository.add(
        BlockInstance(
            block_name="calendar_month",
            parent_context_id=context_id,
            default_region="side-pre",
            default_weight=0,
            subpage_pattern="2",
        )
    )
    repository.add(
        BlockInstance(
            block_name="news_items",
            parent_context_id=context_id,
            default_region="side-post",
            default_weight=1,
            page_type_pattern="*",
        )
    )

    names = [p.block_name for p in repository.list_for_context(context_id)]

    assert names == ["news_items", "html"]


def test_delete_removes_instance_and_position(sqlite_session: Session) -> None:
    context_id = _context_id(_course(sqlite_session))
    _install(sqlite_session, "html")
    repository = SqlAlchemyPlacementRepository(sqlite_session)
    placement_id = repository.add(
        new_course_block_instance("html", context_id=context_id, region="side-pre", weight=0)
    )
    sqlite_session.execute(
        insert(block_position_table).values(
            block_instance_id=placement_id,
            context_id=context_id,
            page_type=COURSE_VIEW_PAGE_TYPE,
            subpage="",
            visible=True,
            region="side-post",
            weight=3,
        )
    )

    repository.delete(placement_id)

    assert repository.list_for_context(context_id) == []
    positions = sqlite_session.execute(
        select(func.count()).select_from(block_position_table)
    ).scalar_one()
    assert positions == 0


def test_delete_all_for_context_returns_deleted_ids(sqlite_session: Session) -> None:
    context_id = _context_id(_course(sqlite_session))
    other_context_id = _context_id(_course(sqlite_session, "course202"))
    _install(sqlite_session, "html", "news_items")
    repository = SqlAlchemyPlacementRepository(sqlite_session)
    first = repository.add(
        new_course_block_instance("html", context_id=context_id, region="side-pre", weight=0)
    )
    second = repository.add(
        new_course_block_instance("news_items", context_id=context_id, region="side-post", weight=0)
    )
    kept = repository.add(
        new_course_block_instance("html", context_id=other_context_id, region="side-pre", weight=0)
    )

    deleted = repository.delete_all_for_context(context_id)

    assert sorted(deleted) == sorted([first, second])
    assert repository.list_for_context(context_id) == []
    assert [p.id for p in repository.list_for_context(other_context_id)] == [kept]


def test_deleted_ids_are_not_reused(sqlite_session: Session) -> None:
    context_id = _context_id(_course(sqlite_session))
    repository = SqlAlchemyPlacementRepository(sqlite_session)
    first = repository.add(
        new_course_block_instance("html", context_id=context_id, region="side-pre", weight=0)
    )
    repository.delete(first)

    second = repository.add(
        new_course_block_instance("html", context_id=context_id, region="side-pre", weight=0)
    )

    assert second != first
    count = sqlite_session.execute(
        select(func.count()).select_from(block_instance_table)
    ).scalar_one()
    assert count == 1


def test_delete_preferences_by_name(sqlite_session: Session) -> None:
    sqlite_session.execute(
        insert(user_preference_table),
        [
            {"user_id": 1, "name": "block7hidden", "value": "1"},
            {"user_id": 2, "name": "block7hidden", "value": "1"},
            {"user_id": 2, "name": "docked_block_instance_7", "value": "1"},
            {"user_id": 2, "name": "block8hidden", "value": "1"},
        ],
    )
    repository = SqlAlchemyUserPreferenceRepository(sqlite_session)

    deleted = repository.delete_names(["block7hidden", "docked_block_instance_7"])

    assert deleted == 3
    assert repository.delete_names([]) == 0
    remaining = sqlite_session.execute(select(user_preference_table.c.name)).scalars().all()
    assert remaining == ["block8hidden"]


def _hide_on_course_page(session: Session, placement_id: int, context_id: int) -> None:
    session.execute(
        insert(block_position_table).values(
            block_instance_id=placement_id,
            context_id=context_id,
            page_type=COURSE_VIEW_PAGE_TYPE,
            subpage="",
            visible=False,
            region="side-pre",
            weight=0,
        )
    )


def test_hidden_placements_and_disabled_types_are_left_out(sqlite_session: Session) -> None:
    context_id = _context_id(_course(sqlite_session))
    _install(sqlite_session, "html", "news_items")
    _install(sqlite_session, "mentees", visible=False)
    repository = SqlAlchemyPlacementRepository(sqlite_session)
    hidden = repository.add(
        new_course_block_instance("html", context_id=context_id, region="side-pre", weight=0)
    )
    _hide_on_course_page(sqlite_session, hidden, context_id)
    repository.add(
        new_course_block_instance("mentees", context_id=context_id, region="side-pre", weight=1)
    )
    repository.add(
        new_course_block_instance("news_items", context_id=context_id, region="side-post", weight=0)
    )

    active = repository.list_for_context(context_id)
    everything = repository.list_for_context(context_id, include_invisible=True)

    assert [p.block_name for p in active] == ["news_items"]
    assert [(p.block_name, p.visible) for p in everything] == [
        ("news_items", True),
        ("html", False),
        ("mentees", True),
    ]


def test_reposition_with_page_override(sqlite_session: Session) -> None:
    context_id = _context_id(_course(sqlite_session))
    _install(sqlite_session, "html")
    repository = SqlAlchemyPlacementRepository(sqlite_session)
    placement_id = repository.add(
        new_course_block_instance("html", context_id=context_id, region="side-pre", weight=0)
    )
    (placement,) = repository.list_for_context(context_id)

    repository.reposition(placement, "side-post", 4, move_defaults=False)

    (moved,) = repository.list_for_context(context_id)
    assert moved.id == placement_id
    assert (moved.region, moved.weight) == ("side-post", 4)
    assert (moved.default_region, moved.default_weight) == ("side-pre", 0)
    assert moved.position_id is not None
    position = sqlite_session.execute(
        select(block_position_table).where(block_position_table.c.id == moved.position_id)
    ).one()
    assert position.page_type == COURSE_VIEW_PAGE_TYPE
    assert position.context_id == context_id
    assert position.visible

    repository.reposition(moved, "side-pre", -2, move_defaults=False)

    (again,) = repository.list_for_context(context_id)
    assert (again.region, again.weight) == ("side-pre", -2)
    assert again.position_id == moved.position_id


def test_reposition_moving_defaults(sqlite_session: Session) -> None:
    context_id = _context_id(_course(sqlite_session))
    _install(sqlite_session, "html")
    repository = SqlAlchemyPlacementRepository(sqlite_session)
    repository.add(
        BlockInstance(
            block_name="html",
            parent_context_id=context_id,
            default_region="side-pre",
            default_weight=0,
            page_type_pattern=COURSE_VIEW_PAGE_TYPE,
        )
    )
    (placement,) = repository.list_for_context(context_id)

    repository.reposition(placement, "side-post", 3, move_defaults=True)

    (moved,) = repository.list_for_context(context_id)
    assert (moved.region, moved.weight) == ("side-post", 3)
    assert (moved.default_region, moved.default_weight) == ("side-post", 3)
    assert moved.position_id is None
    positions = sqlite_session.execute(
        select(func.count()).select_from(block_position_table)
    ).scalar_one()
    assert positions == 0
