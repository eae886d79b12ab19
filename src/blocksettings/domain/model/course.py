"""Courses as seen by the block settings tool."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False, kw_only=True)
class Course:
    shortname: str
    fullname: str = ""
    # Placement context of the course page; assigned by the course directory.
    context_id: int | None = None
    id: int | None = None
