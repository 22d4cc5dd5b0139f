"""Recurrence rule value types shared by the due and schedule engines.

A RecurrenceRule is built once at the boundary (data_builders.build_recurrence_rule)
and is immutable afterwards. Engines never re-inspect the raw record shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from .. import const


class RepeatType(StrEnum):
    """Closed set of cadences a task can repeat on."""

    DAILY = const.REPEAT_TYPE_DAILY
    WEEKLY = const.REPEAT_TYPE_WEEKLY
    MONTHLY = const.REPEAT_TYPE_MONTHLY

    @classmethod
    def from_value(cls, value: object) -> RepeatType | None:
        """Return the matching member, or None for unrecognized values."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return None
        return None


@dataclass(frozen=True)
class RecurrenceRule:
    """Cadence description attached to a recurring task.

    Attributes:
        start_date: Cadence anchor. None means "started in the infinite past".
        repeat_type: Cadence kind. None marks an unrecognized stored value;
            engines route it to their fallback arm.
        repeat_every: Interval multiplier, always >= 1.
        repeat_on: Sorted unique weekday indices (weekly, 0=Sunday) or
            month days (monthly, 1-31). Ignored for daily.
        completed: Today's instance was completed.
        skipped: Today's instance was skipped.
        last_reset: Day the completed/skipped flags were last cleared.
        created_at: Record creation day (reset anchor fallback).
        raw_repeat_type: The stored repeat type value, kept for logging.
    """

    start_date: date | None = None
    repeat_type: RepeatType | None = RepeatType.DAILY
    repeat_every: int = const.DEFAULT_REPEAT_EVERY
    repeat_on: tuple[int, ...] = ()
    completed: bool = False
    skipped: bool = False
    last_reset: date | None = None
    created_at: date | None = None
    raw_repeat_type: str | None = None

    def __post_init__(self) -> None:
        """Enforce repeat_every >= 1 and a sorted, de-duplicated repeat_on."""
        if not isinstance(self.repeat_every, int) or self.repeat_every < 1:
            object.__setattr__(self, "repeat_every", const.DEFAULT_REPEAT_EVERY)
        object.__setattr__(self, "repeat_on", tuple(sorted(set(self.repeat_on))))

    @property
    def is_resolved(self) -> bool:
        """True when today's instance is already completed or skipped."""
        return self.completed or self.skipped

    def has_started(self, today: date) -> bool:
        """True when today is on or after the start date (always without one)."""
        return self.start_date is None or self.start_date <= today
