from __future__ import annotations

import logging

import pytest

from blocksettings.domain.defaults import DefaultBlockLayout, SiteDefaultPlacements
from blocksettings.domain.model import Region, preference_names
from tests.helpers.blocks import FakeStore


def test_parse_layout_with_both_columns() -> None:
    layout = DefaultBlockLayout.parse("search_forums, html:news_items,calendar_upcoming")

    assert layout.side_pre == ("search_forums", "html")
    assert layout.side_post == ("news_items", "calendar_upcoming")
    assert layout.by_region() == {
        Region.SIDE_PRE: ("search_forums", "html"),
        Region.SIDE_POST: ("news_items", "calendar_upcoming"),
    }


def test_parse_layout_without_separator_is_left_column() -> None:
    layout = DefaultBlockLayout.parse("html,calendar_month")

    assert layout.side_pre == ("html", "calendar_month")
    assert layout.side_post == ()


@pytest.mark.parametrize("value", [None, ""])
def test_parse_empty_layout(value: str | None) -> None:
    assert DefaultBlockLayout.parse(value) == DefaultBlockLayout()


def test_parse_rejects_more_than_one_separator() -> None:
    with pytest.raises(ValueError, match="at most one"):
        DefaultBlockLayout.parse("html:news_items:calendar_month")


def test_reset_replaces_course_blocks(store: FakeStore) -> None:
    course = store.courses.get_by_shortname("course101")
    assert course is not None
    assert course.context_id is not None
    old = store.place(course, "calendar_month", "side-pre", 4)
    store.preferences.set(1, preference_names(old)[0])
    defaults = SiteDefaultPlacements(
        store.repositories,
        layout=DefaultBlockLayout.parse("html:news_items,recent_activity"),
    )

    created = defaults.reset_to_defaults(course)

    placements = store.placements.list_for_context(course.context_id)
    assert [(p.block_name, p.region, p.weight) for p in placements] == [
        ("news_items", "side-post", 0),
        ("recent_activity", "side-post", 1),
        ("html", "side-pre", 0),
    ]
    assert sorted(created) == sorted(p.id for p in placements)
    assert old not in store.placements.instances
    assert store.preferences.names == set()


def test_reset_leaves_other_courses_alone(store: FakeStore) -> None:
    course = store.courses.get_by_shortname("course101")
    other = store.add_course("course202")
    assert course is not None
    assert other.context_id is not None
    kept = store.place(other, "html", "side-pre", 0)

    SiteDefaultPlacements(store.repositories, layout=DefaultBlockLayout()).reset_to_defaults(course)

    assert kept in store.placements.instances


def test_reset_skips_blocks_that_are_not_enabled(
    store: FakeStore,
    caplog: pytest.LogCaptureFixture,
) -> None:
    course = store.courses.get_by_shortname("course101")
    assert course is not None
    assert course.context_id is not None
    defaults = SiteDefaultPlacements(
        store.repositories,
        layout=DefaultBlockLayout.parse(":no_such_block,mentees,news_items"),
    )

    with caplog.at_level(logging.WARNING):
        defaults.reset_to_defaults(course)

    placements = store.placements.list_for_context(course.context_id)
    assert [(p.block_name, p.weight) for p in placements] == [("news_items", 0)]
    assert "no_such_block" in caplog.text
    assert "mentees" in caplog.text
