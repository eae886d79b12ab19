"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class Region(StrEnum):
    """Block regions available on a course page."""

    SIDE_PRE = "side-pre"
    SIDE_POST = "side-post"


# Region that receives new default blocks and placements stored under an unknown region.
DEFAULT_REGION = Region.SIDE_POST


class Operation(StrEnum):
    ADD = "add"
    DELETE = "del"
    RESET = "res"

    @classmethod
    def from_token(cls, token: str | None) -> Operation | None:
        """Resolve an operation token (``add``, ``del``/``delete``, ``res``/``reset``)."""

        if token is None:
            return None
        return _OPERATION_SYNONYMS.get(token)

    @property
    def label(self) -> str:
        return _OPERATION_LABELS[self]


_OPERATION_SYNONYMS: dict[str, Operation] = {
    "add": Operation.ADD,
    "del": Operation.DELETE,
    "delete": Operation.DELETE,
    "res": Operation.RESET,
    "reset": Operation.RESET,
}

_OPERATION_LABELS: dict[Operation, str] = {
    Operation.ADD: "Add",
    Operation.DELETE: "Delete",
    Operation.RESET: "Reset",
}


class ContextLevel(IntEnum):
    """Context levels placements can hang off (host numbering)."""

    SYSTEM = 10
    COURSE = 50
