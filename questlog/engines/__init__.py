"""Engine modules for questlog.

Contains the pure computation engines:
- recurrence_rule: RecurrenceRule and RepeatType value types
- due_engine: Due / not-due evaluation for today
- schedule_engine: Next occurrence and reset policy
"""

from .due_engine import DueEngine
from .recurrence_rule import RecurrenceRule, RepeatType
from .schedule_engine import RecurrenceEngine, calculate_next_occurrence

__all__ = [
    "DueEngine",
    "RecurrenceEngine",
    "RecurrenceRule",
    "RepeatType",
    "calculate_next_occurrence",
]
