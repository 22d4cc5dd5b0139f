"""Type definitions for questlog data structures.

TypedDicts describe the storage layer's record shapes as they arrive at the
engine boundary. They are STATIC ANALYSIS ONLY: records are read with
`.get()` defaults and normalized in data_builders.py, never trusted as typed.

Engine-side values (RecurrenceRule, RepeatType) live in
engines/recurrence_rule.py because they carry behavior-relevant invariants.

IMPORTANT: This file must NOT import from the engines or data_builders.
"""

from datetime import date, datetime
from typing import Any, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

ISODate = str  # ISO 8601 date string (no time) "2026-01-18"
ISODatetime = str  # ISO 8601 datetime string "2026-01-18T00:00:00.000Z"
DateLike = date | datetime | ISODate | ISODatetime


# =============================================================================
# Task Records
# =============================================================================


class ChecklistItemData(TypedDict):
    """A single checklist entry after normalization.

    Legacy records stored plain strings; those become {"text": s, "checked": False}.
    """

    text: str
    checked: bool


class TaskRecordData(TypedDict, total=False):
    """A recurring task as stored by the task layer (camelCase keys).

    All fields are optional (total=False): missing fields take the defaults
    documented in data_builders.build_recurrence_rule().
    """

    title: str
    description: str
    difficulty: str  # easy, medium, hard
    startDate: DateLike | None
    repeatType: str  # daily, weekly, monthly
    repeatEvery: int | None
    repeatOn: list[int] | None  # weekdays 0-6 (Sun-first) or month days 1-31
    tags: list[str]
    completed: bool
    completedDate: DateLike | None
    skipped: bool
    skippedDate: DateLike | None
    lastReset: DateLike | None
    createdAt: DateLike | None
    checklist: list[ChecklistItemData | str]
    order: int


# Records may also be plain objects exposing the same names as attributes.
TaskLike = TaskRecordData | dict[str, Any] | Any
