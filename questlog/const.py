# File: const.py
"""Constants for the questlog scheduling engine.

This file centralizes record keys, repeat types, defaults, labels and error
keys so that the engines, builders and filters agree on one vocabulary.
"""

import logging

# ------------------------------------------------------------------------------------------------
# General
# ------------------------------------------------------------------------------------------------
# Logger
LOGGER = logging.getLogger(__package__)

# ------------------------------------------------------------------------------------------------
# Task record keys (storage layer uses camelCase)
# ------------------------------------------------------------------------------------------------
DATA_TASK_START_DATE = "startDate"
DATA_TASK_REPEAT_TYPE = "repeatType"
DATA_TASK_REPEAT_EVERY = "repeatEvery"
DATA_TASK_REPEAT_ON = "repeatOn"
DATA_TASK_COMPLETED = "completed"
DATA_TASK_SKIPPED = "skipped"
DATA_TASK_LAST_RESET = "lastReset"
DATA_TASK_CREATED_AT = "createdAt"
DATA_TASK_CHECKLIST = "checklist"

# Checklist item keys
DATA_CHECKLIST_TEXT = "text"
DATA_CHECKLIST_CHECKED = "checked"

# snake_case aliases accepted on read (record key → attribute name)
DATA_TASK_KEY_ALIASES = {
    DATA_TASK_START_DATE: "start_date",
    DATA_TASK_REPEAT_TYPE: "repeat_type",
    DATA_TASK_REPEAT_EVERY: "repeat_every",
    DATA_TASK_REPEAT_ON: "repeat_on",
    DATA_TASK_COMPLETED: "completed",
    DATA_TASK_SKIPPED: "skipped",
    DATA_TASK_LAST_RESET: "last_reset",
    DATA_TASK_CREATED_AT: "created_at",
    DATA_TASK_CHECKLIST: "checklist",
}

# ------------------------------------------------------------------------------------------------
# Repeat types
# ------------------------------------------------------------------------------------------------
REPEAT_TYPE_DAILY = "daily"
REPEAT_TYPE_WEEKLY = "weekly"
REPEAT_TYPE_MONTHLY = "monthly"

REPEAT_TYPE_OPTIONS = [
    REPEAT_TYPE_DAILY,
    REPEAT_TYPE_WEEKLY,
    REPEAT_TYPE_MONTHLY,
]

# Storage layer default when the field is absent
DEFAULT_REPEAT_TYPE = REPEAT_TYPE_DAILY
DEFAULT_REPEAT_EVERY = 1

# ------------------------------------------------------------------------------------------------
# Calendar
# ------------------------------------------------------------------------------------------------
DAYS_PER_WEEK = 7

# Weekday indices are Sunday-first: 0 = Sunday ... 6 = Saturday
WEEKDAY_MIN = 0
WEEKDAY_MAX = 6
MONTH_DAY_MIN = 1
MONTH_DAY_MAX = 31

# Legacy weekday names stored before repeatOn became integer-only
WEEKDAY_NAME_TO_INT = {
    "sun": 0,
    "mon": 1,
    "tue": 2,
    "wed": 3,
    "thu": 4,
    "fri": 5,
    "sat": 6,
    "sunday": 0,
    "monday": 1,
    "tuesday": 2,
    "wednesday": 3,
    "thursday": 4,
    "friday": 5,
    "saturday": 6,
}

# ------------------------------------------------------------------------------------------------
# Daily list filters
# ------------------------------------------------------------------------------------------------
DAILY_FILTER_ALL = "all"
DAILY_FILTER_DUE = "due"
DAILY_FILTER_NOT_DUE = "not_due"

DAILY_FILTER_ALIASES = {
    "notDue": DAILY_FILTER_NOT_DUE,
    "not-due": DAILY_FILTER_NOT_DUE,
}

DAILY_FILTER_OPTIONS = [
    DAILY_FILTER_ALL,
    DAILY_FILTER_DUE,
    DAILY_FILTER_NOT_DUE,
]

# ------------------------------------------------------------------------------------------------
# Validation error keys
# ------------------------------------------------------------------------------------------------
TRANS_KEY_INVALID_REPEAT_TYPE = "invalid_repeat_type"
TRANS_KEY_INVALID_REPEAT_EVERY = "invalid_repeat_every"
TRANS_KEY_INVALID_REPEAT_ON = "invalid_repeat_on"
TRANS_KEY_INVALID_START_DATE = "invalid_start_date"
TRANS_KEY_INVALID_FLAG = "invalid_flag"
TRANS_KEY_INVALID_RECORD = "invalid_record"
