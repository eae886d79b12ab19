"""Site block settings: protected block types and the default course layout."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final

from blocksettings.domain.defaults import DefaultBlockLayout
from blocksettings.domain.model import normalize_block_type_list

from .errors import ConfigurationError

UNDELETABLE_BLOCK_TYPES_ENV: Final[str] = "BLOCKSETTINGS_UNDELETABLE_BLOCK_TYPES"
DEFAULT_BLOCKS_ENV: Final[str] = "BLOCKSETTINGS_DEFAULT_BLOCKS"

DEFAULT_COURSE_BLOCKS: Final[str] = ":search_forums,news_items,calendar_upcoming,recent_activity"


@dataclass(frozen=True, slots=True)
class BlockSettingsConfig:
    undeletable_block_types: tuple[str, ...] = ()
    default_blocks: str = DEFAULT_COURSE_BLOCKS


def validate_default_blocks(value: str) -> str:
    """Check a ``pre1,pre2:post1,post2`` layout string, returning it stripped."""

    stripped = value.strip()
    try:
        DefaultBlockLayout.parse(stripped)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid default block layout: {exc}") from exc
    return stripped


def get_block_settings_config(
    *,
    undeletable_block_types: str | list[str] | tuple[str, ...] | None = None,
) -> BlockSettingsConfig:
    """Build the block settings config, preferring explicit values over the environment."""

    protected = (
        undeletable_block_types
        if undeletable_block_types is not None
        else os.getenv(UNDELETABLE_BLOCK_TYPES_ENV)
    )
    default_blocks = os.getenv(DEFAULT_BLOCKS_ENV)
    return BlockSettingsConfig(
        undeletable_block_types=normalize_block_type_list(protected),
        default_blocks=(
            validate_default_blocks(default_blocks)
            if default_blocks is not None
            else DEFAULT_COURSE_BLOCKS
        ),
    )
