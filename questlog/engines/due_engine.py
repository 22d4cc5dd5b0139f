"""Due Engine - Pure logic deciding whether a recurring task is due today.

This engine answers two independent questions for the task lists:
- is_due: should the task appear in the "Due" list?
- is_not_due: should the task appear in the "Not Due" list?

They are NOT negations of each other. A resolved (completed/skipped) task is
never due but is not-due; an un-anchored task is due and not not-due. Each
predicate is computed on its own so both lists stay stable.

ARCHITECTURE: Stateless engine. All methods are static and operate on a
RecurrenceRule plus the caller's "today". No clock reads happen here.
"""

from __future__ import annotations

from datetime import date

from .. import const
from ..utils.dt_utils import dt_days_between, dt_weekday_index
from .recurrence_rule import RecurrenceRule, RepeatType


class DueEngine:
    """Pure logic engine for due / not-due evaluation.

    All methods are static - no instance state.
    """

    @staticmethod
    def is_due(rule: RecurrenceRule, today: date) -> bool:
        """Return True when the task should be shown as due today.

        Evaluation order:
            1. Completed or skipped → False
            2. No start date → True
            3. Start date in the future → False
            4. Cadence match for the repeat type
        """
        if rule.is_resolved:
            return False
        if rule.start_date is None:
            return True
        if rule.start_date > today:
            return False
        return DueEngine.matches_cadence(rule, today)

    @staticmethod
    def is_not_due(rule: RecurrenceRule, today: date) -> bool:
        """Return True when the task should be shown as not due today.

        Evaluation order:
            1. Completed or skipped → True
            2. No start date → False
            3. Start date in the future → True
            4. Complement of the cadence match (daily and unrecognized
               repeat types are never not-due once started)
        """
        if rule.is_resolved:
            return True
        if rule.start_date is None:
            return False
        if rule.start_date > today:
            return True
        if rule.repeat_type in (RepeatType.WEEKLY, RepeatType.MONTHLY):
            return not DueEngine.matches_cadence(rule, today)
        return False

    @staticmethod
    def matches_cadence(rule: RecurrenceRule, today: date) -> bool:
        """Check whether today falls on the rule's cadence.

        Assumes the task has started. Ignores the completed/skipped flags.

        Weekly and monthly rules with explicit repeat_on days match every
        listed day regardless of repeat_every.
        """
        repeat_type = rule.repeat_type

        if repeat_type is RepeatType.DAILY:
            return True

        if repeat_type is RepeatType.WEEKLY:
            if not rule.repeat_on:
                return DueEngine._is_on_week_interval(rule, today)
            return dt_weekday_index(today) in rule.repeat_on

        if repeat_type is RepeatType.MONTHLY:
            if not rule.repeat_on:
                # start_date is None only for un-anchored rules, which match every day
                return rule.start_date is None or today.day == rule.start_date.day
            return today.day in rule.repeat_on

        const.LOGGER.debug(
            "DueEngine: Unrecognized repeat type %r, treating started task as due",
            rule.raw_repeat_type,
        )
        return rule.has_started(today)

    @staticmethod
    def _is_on_week_interval(rule: RecurrenceRule, today: date) -> bool:
        """True when today is a whole number of repeat_every-week periods from start."""
        if rule.start_date is None:
            return True
        days_since_start = dt_days_between(rule.start_date, today)
        return days_since_start % (const.DAYS_PER_WEEK * rule.repeat_every) == 0
