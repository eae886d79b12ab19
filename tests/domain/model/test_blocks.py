from __future__ import annotations

import pytest

from blocksettings.domain.model import (
    BlockType,
    Operation,
    Placement,
    new_course_block_instance,
    normalize_block_type_list,
    preference_names,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, ()),
        ("", ()),
        ("navigation,settings", ("navigation", "settings")),
        (" navigation , , settings,navigation ", ("navigation", "settings")),
        (["settings", " navigation"], ("settings", "navigation")),
    ],
)
def test_normalize_block_type_list(value: object, expected: tuple[str, ...]) -> None:
    assert normalize_block_type_list(value) == expected  # type: ignore[arg-type]


def test_display_title_falls_back_to_name() -> None:
    assert BlockType(name="html").display_title == "html"
    assert BlockType(name="html", title="Text").display_title == "Text"


def test_preference_names() -> None:
    assert preference_names(42) == ("block42hidden", "docked_block_instance_42")


def test_new_course_block_instance_defaults() -> None:
    instance = new_course_block_instance("html", context_id=9, region="side-pre", weight=3)

    assert instance.parent_context_id == 9
    assert instance.default_region == "side-pre"
    assert instance.default_weight == 3
    assert instance.page_type_pattern == "course-view-*"
    assert instance.subpage_pattern is None
    assert instance.config_data == ""
    assert not instance.show_in_subcontexts
    assert instance.id is None


def test_placement_matches_full_key() -> None:
    placement = Placement(
        id=1,
        block_name="html",
        context_id=9,
        region="side-pre",
        weight=2,
        default_region="side-pre",
        default_weight=2,
    )

    assert placement.matches("html", "side-pre", 2)
    assert not placement.matches("html", "side-pre", 1)
    assert not placement.matches("html", "side-post", 2)
    assert not placement.matches("calendar_month", "side-pre", 2)


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("add", Operation.ADD),
        ("del", Operation.DELETE),
        ("delete", Operation.DELETE),
        ("res", Operation.RESET),
        ("reset", Operation.RESET),
        ("upd", None),
        ("Add", None),
        (None, None),
    ],
)
def test_operation_tokens(token: str | None, expected: Operation | None) -> None:
    assert Operation.from_token(token) is expected


def test_operation_labels() -> None:
    assert [operation.label for operation in Operation] == ["Add", "Delete", "Reset"]
