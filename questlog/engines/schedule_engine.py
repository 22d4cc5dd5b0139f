"""Schedule Engine for questlog.

Calculates the next occurrence of a recurring task and decides when the task
layer should clear a resolved instance for a new cadence boundary.

- Day/week intervals use plain `timedelta` day arithmetic.
- Month intervals use `dateutil.relativedelta` from the first of the month,
  then clamp the day-of-month (a 31st anchor lands on Feb 28/29, Apr 30).

IMPORTANT: This module must NOT import from data_builders.py or task_filters.py.
Only import from const.py, utils and the engine value types.
"""

from __future__ import annotations

from datetime import date
from typing import ClassVar

from .. import const
from ..utils.dt_utils import (
    dt_add_days,
    dt_add_months,
    dt_days_between,
    dt_last_day_of_month,
    dt_weekday_index,
    dt_with_clamped_day,
)
from .due_engine import DueEngine
from .recurrence_rule import RecurrenceRule, RepeatType


class RecurrenceEngine:
    """Next-occurrence and reset calculations for a single RecurrenceRule.

    The engine holds only the immutable rule; every method takes the caller's
    "today" so a batch of calls can agree on one date.

    Handles all repeat types:
    - DAILY: every N days
    - WEEKLY: every N weeks, optionally on listed weekdays (0=Sunday)
    - MONTHLY: every N months, optionally on listed month days (1-31)
    - Unrecognized: falls back to "tomorrow"
    """

    # Repeat types whose repeat_on list restricts the matching days
    DAY_LIST_TYPES: ClassVar[frozenset[RepeatType]] = frozenset(
        {RepeatType.WEEKLY, RepeatType.MONTHLY}
    )

    def __init__(self, rule: RecurrenceRule) -> None:
        """Initialize the engine with a normalized rule."""
        self._rule = rule

    @property
    def rule(self) -> RecurrenceRule:
        """Return the rule this engine evaluates."""
        return self._rule

    # =========================================================================
    # Due status
    # =========================================================================

    def is_due(self, today: date) -> bool:
        """Return True when the task is due today (see DueEngine.is_due)."""
        return DueEngine.is_due(self._rule, today)

    def is_not_due(self, today: date) -> bool:
        """Return True when the task is not due today (see DueEngine.is_not_due)."""
        return DueEngine.is_not_due(self._rule, today)

    # =========================================================================
    # Next occurrence
    # =========================================================================

    def get_next_occurrence(self, today: date) -> date:
        """Calculate the date of the next occurrence on or after today.

        First match wins:
            1. No start date: tomorrow if resolved, otherwise today
            2. Start date in the future: the start date
            3. Unresolved and due today: today
            4. Cadence advance from today for the repeat type
            5. Unrecognized repeat type: tomorrow

        Args:
            today: The caller's current local date.

        Returns:
            Next occurrence date.
        """
        rule = self._rule

        if rule.start_date is None:
            return dt_add_days(today, 1) if rule.is_resolved else today

        if rule.start_date > today:
            return rule.start_date

        if not rule.is_resolved and DueEngine.is_due(rule, today):
            return today

        if rule.repeat_type is RepeatType.DAILY:
            return dt_add_days(today, rule.repeat_every)
        if rule.repeat_type is RepeatType.WEEKLY:
            return self._next_weekly(today)
        if rule.repeat_type is RepeatType.MONTHLY:
            return self._next_monthly(today)

        const.LOGGER.debug(
            "RecurrenceEngine: Unrecognized repeat type %r, next occurrence is tomorrow",
            rule.raw_repeat_type,
        )
        return dt_add_days(today, 1)

    def _next_weekly(self, today: date) -> date:
        """Advance a weekly rule from today.

        Without listed weekdays the task simply moves repeat_every weeks ahead.
        With listed weekdays, a later day in the current week (Sunday-first)
        wins; otherwise skip to the next week boundary, add repeat_every - 1
        further weeks and land on the first listed weekday.
        """
        rule = self._rule
        if not rule.repeat_on:
            return dt_add_days(today, const.DAYS_PER_WEEK * rule.repeat_every)

        today_index = dt_weekday_index(today)
        for weekday in rule.repeat_on:
            if weekday > today_index:
                return dt_add_days(today, weekday - today_index)

        # 0-6: on a Sunday the week boundary is today
        days_until_next_sunday = (
            const.DAYS_PER_WEEK - today_index
        ) % const.DAYS_PER_WEEK
        total_days = (
            days_until_next_sunday
            + (rule.repeat_every - 1) * const.DAYS_PER_WEEK
            + rule.repeat_on[0]
        )
        return dt_add_days(today, total_days)

    def _next_monthly(self, today: date) -> date:
        """Advance a monthly rule from today.

        Without listed days the anchor is the start date's day-of-month,
        repeat_every months ahead. With listed days, a later listed day that
        exists in the current month wins; otherwise the first listed day of
        the month repeat_every months ahead. Both clamp to the month length.
        """
        rule = self._rule
        target_month = dt_add_months(today, rule.repeat_every)

        if not rule.repeat_on:
            anchor_day = rule.start_date.day if rule.start_date else today.day
            return dt_with_clamped_day(target_month, anchor_day)

        last_day = dt_last_day_of_month(today.year, today.month)
        for month_day in rule.repeat_on:
            if today.day < month_day <= last_day:
                return today.replace(day=month_day)

        return dt_with_clamped_day(target_month, rule.repeat_on[0])

    # =========================================================================
    # Reset policy
    # =========================================================================

    def should_reset(self, today: date) -> bool:
        """Decide whether a resolved task should be cleared for today.

        The task layer calls this when reading tasks; a True result means
        completed/skipped should be cleared and last_reset set to today.

        Returns False unless the task is resolved, was last reset before
        today, and has started. Then today must fall on the cadence:
            - DAILY: every day
            - WEEKLY without days: whole repeat_every-week periods from the
              anchor (start date, else creation date)
            - MONTHLY without days: the anchor's day-of-month
            - WEEKLY/MONTHLY with days: today is a listed day
            - Unrecognized: never
        """
        rule = self._rule

        if not rule.is_resolved:
            return False
        if rule.last_reset is None:
            # Never reset means the record is brand new
            return False
        if rule.last_reset >= today:
            return False
        if not rule.has_started(today):
            return False

        if rule.repeat_type is RepeatType.DAILY:
            return True

        if rule.repeat_type in self.DAY_LIST_TYPES and rule.repeat_on:
            if rule.repeat_type is RepeatType.WEEKLY:
                return dt_weekday_index(today) in rule.repeat_on
            return today.day in rule.repeat_on

        anchor = rule.start_date or rule.created_at
        if rule.repeat_type is RepeatType.WEEKLY:
            if anchor is None:
                return False
            days_since_anchor = dt_days_between(anchor, today)
            return days_since_anchor % (const.DAYS_PER_WEEK * rule.repeat_every) == 0
        if rule.repeat_type is RepeatType.MONTHLY:
            return anchor is not None and today.day == anchor.day

        const.LOGGER.debug(
            "RecurrenceEngine: Unrecognized repeat type %r, no reset",
            rule.raw_repeat_type,
        )
        return False


def calculate_next_occurrence(rule: RecurrenceRule, today: date) -> date:
    """Calculate the next occurrence using RecurrenceEngine.

    Convenience function for one-off calculations.
    """
    return RecurrenceEngine(rule).get_next_occurrence(today)
