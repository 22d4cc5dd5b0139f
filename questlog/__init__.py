"""QuestLog recurrence scheduling engine.

Answers three questions about a recurring task record for the task list
views: is it due today, is it not due today, and when does it next occur.
Also renders the short "Next:" labels shown under each task.

Every function takes an optional `today`. When omitted, the current date is
read once in the configured timezone (see `set_default_timezone`) and used
for the whole call.

Usage:
    from questlog import is_due, next_occurrence_date, format_date_label

    task = {"startDate": "2024-01-01", "repeatType": "weekly", "repeatOn": [1, 3, 5]}
    is_due(task, today=date(2024, 1, 3))  # True (Wednesday)
"""

from __future__ import annotations

from datetime import date, datetime

from .data_builders import (
    EntityValidationError,
    build_checklist,
    build_recurrence_rule,
    build_task_checklist,
    validate_recurrence_data,
)
from .engines import (
    DueEngine,
    RecurrenceEngine,
    RecurrenceRule,
    RepeatType,
    calculate_next_occurrence,
)
from .task_filters import count_due_tasks, filter_daily_tasks, tasks_due_for_reset
from .type_defs import DateLike, TaskLike
from .utils.dt_utils import (
    dt_format_label,
    dt_require_date,
    dt_today_local,
    get_default_timezone,
    set_default_timezone,
)


def _resolve_today(today: date | datetime | None) -> date:
    """Return the caller's today as a date, reading the clock only if omitted."""
    if today is None:
        return dt_today_local()
    return dt_require_date(today)


def is_due(task: TaskLike, today: date | datetime | None = None) -> bool:
    """Return True when the task belongs in the Due list today."""
    return DueEngine.is_due(build_recurrence_rule(task), _resolve_today(today))


def is_not_due(task: TaskLike, today: date | datetime | None = None) -> bool:
    """Return True when the task belongs in the Not Due list today."""
    return DueEngine.is_not_due(build_recurrence_rule(task), _resolve_today(today))


def next_occurrence_date(task: TaskLike, today: date | datetime | None = None) -> date:
    """Return the date the task next occurs (today if it is due now)."""
    return calculate_next_occurrence(
        build_recurrence_rule(task), _resolve_today(today)
    )


def should_reset(task: TaskLike, today: date | datetime | None = None) -> bool:
    """Return True when a resolved task's flags should be cleared today."""
    return RecurrenceEngine(build_recurrence_rule(task)).should_reset(
        _resolve_today(today)
    )


def format_date_label(
    value: DateLike | None, today: date | datetime | None = None
) -> str:
    """Return "Today", "Tomorrow", a weekday name, or "Mon D, YYYY"."""
    return dt_format_label(value, _resolve_today(today))


__all__ = [
    "DueEngine",
    "EntityValidationError",
    "RecurrenceEngine",
    "RecurrenceRule",
    "RepeatType",
    "build_checklist",
    "build_recurrence_rule",
    "build_task_checklist",
    "count_due_tasks",
    "filter_daily_tasks",
    "format_date_label",
    "get_default_timezone",
    "is_due",
    "is_not_due",
    "next_occurrence_date",
    "set_default_timezone",
    "should_reset",
    "tasks_due_for_reset",
    "validate_recurrence_data",
]
