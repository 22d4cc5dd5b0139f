"""Batch helpers over lists of recurring task records.

These back the task list views: the Due / Not Due filter, the due badge
count, and the reset sweep the task layer runs when it reads tasks. Each
helper builds every rule once and evaluates the whole batch against a
single "today".
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime

from . import const
from .data_builders import build_recurrence_rule
from .engines.due_engine import DueEngine
from .engines.schedule_engine import RecurrenceEngine
from .type_defs import TaskLike
from .utils.dt_utils import dt_require_date


def _resolve_filter_mode(mode: str) -> str:
    """Map a filter mode (including UI spellings like "notDue") to a DAILY_FILTER_* value.

    Raises:
        ValueError: for unknown modes.
    """
    resolved = const.DAILY_FILTER_ALIASES.get(mode, mode)
    if resolved not in const.DAILY_FILTER_OPTIONS:
        raise ValueError(
            f"Unknown daily filter {mode!r}; expected one of {const.DAILY_FILTER_OPTIONS}"
        )
    return resolved


def filter_daily_tasks(
    tasks: Iterable[TaskLike],
    mode: str,
    today: date | datetime,
) -> list[TaskLike]:
    """Filter task records for the Due / Not Due list views.

    Args:
        tasks: Task records (mappings or objects), in display order
        mode: "all", "due" or "not_due" ("notDue" accepted)
        today: The caller's current local date

    Returns:
        The matching records themselves, order preserved.
    """
    resolved = _resolve_filter_mode(mode)
    task_list = list(tasks)
    if resolved == const.DAILY_FILTER_ALL:
        return task_list

    day = dt_require_date(today)
    predicate = (
        DueEngine.is_due if resolved == const.DAILY_FILTER_DUE else DueEngine.is_not_due
    )
    return [task for task in task_list if predicate(build_recurrence_rule(task), day)]


def count_due_tasks(tasks: Iterable[TaskLike], today: date | datetime) -> int:
    """Count the records that are due today."""
    day = dt_require_date(today)
    return sum(1 for task in tasks if DueEngine.is_due(build_recurrence_rule(task), day))


def tasks_due_for_reset(
    tasks: Iterable[TaskLike], today: date | datetime
) -> list[TaskLike]:
    """Return the resolved records whose flags should be cleared today."""
    day = dt_require_date(today)
    due_for_reset = [
        task
        for task in tasks
        if RecurrenceEngine(build_recurrence_rule(task)).should_reset(day)
    ]
    const.LOGGER.debug(
        "TaskFilters: %d task(s) due for reset on %s", len(due_for_reset), day
    )
    return due_for_reset
