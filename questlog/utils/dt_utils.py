# File: utils/dt_utils.py
"""Date utilities for questlog.

Pure Python calendar-day functions. Everything here works on
`datetime.date` values at day granularity; no time-of-day or time-zone
arithmetic takes part in any comparison.

Functions:
    - set_default_timezone / get_default_timezone: Zone used to read "today"
    - dt_today_local: Get today's date in the configured timezone
    - dt_parse_date: Parse date strings
    - dt_to_date: Normalize date inputs (str, date, datetime) to a date
    - dt_require_date: Normalize a caller-supplied "today"
    - dt_days_between: Whole days between two dates
    - dt_weekday_index: Sunday-first weekday index (0=Sun ... 6=Sat)
    - dt_last_day_of_month: Number of days in a month
    - dt_add_months: First day of the month N months later
    - dt_with_clamped_day: Set day-of-month, clamped to the month length
    - dt_format_label: Short relative label ("Today", "Tomorrow", ...)
"""

from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime, timedelta
import logging
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants (local copies to avoid circular imports)
# ==============================================================================

# Default timezone - can be overridden by caller
DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo("UTC")

LABEL_TODAY = "Today"
LABEL_TOMORROW = "Tomorrow"
LABEL_WEEKDAY_MAX_DAYS = 7
DISPLAY_UNKNOWN = "Unknown"

WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: ZoneInfo | str) -> None:
    """Set the timezone used to read "today" when a caller does not pass one.

    Args:
        tz: ZoneInfo object or IANA zone name (e.g. "Europe/Berlin")
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = ZoneInfo(tz) if isinstance(tz, str) else tz


def get_default_timezone() -> ZoneInfo:
    """Get the current default timezone."""
    return DEFAULT_TIME_ZONE


# ==============================================================================
# Current Date
# ==============================================================================


def dt_today_local(tz: ZoneInfo | None = None) -> date:
    """Return today's date in the local timezone as a `datetime.date`.

    Args:
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Example:
        datetime.date(2025, 4, 7)
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    return datetime.now(tz_info).date()


# ==============================================================================
# Parsing
# ==============================================================================


def dt_parse_date(date_str: str | None) -> date | None:
    """Safely parse a date string into a `datetime.date`.

    Accepts formats:
    - "2025-04-07" (ISO date)
    - "2025-04-07T00:00:00.000Z" (ISO datetime; its own calendar date is kept)
    - "04/07/2025" (US format)
    - "07/04/2025" (European format - attempted if US fails)

    Returns:
        datetime.date or None if parsing fails.
    """
    if not date_str or not isinstance(date_str, str):
        return None

    cleaned = date_str.strip()

    try:
        return date.fromisoformat(cleaned)
    except ValueError:
        pass

    try:
        return datetime.fromisoformat(cleaned).date()
    except ValueError:
        pass

    for fmt in ("%m/%d/%Y", "%d/%m/%Y", "%Y/%m/%d"):
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue

    return None


def dt_to_date(value: str | date | datetime | None) -> date | None:
    """Normalize a date-like input to a calendar date.

    A datetime contributes the calendar date it carries; no timezone
    conversion is applied.

    Returns:
        datetime.date, or None for empty or unparseable input.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        parsed = dt_parse_date(value)
        if parsed is None:
            _LOGGER.debug("dt_to_date: Could not parse %r", value)
        return parsed
    _LOGGER.debug("dt_to_date: Unsupported type %s", type(value).__name__)
    return None


def dt_require_date(value: date | datetime) -> date:
    """Normalize a caller-supplied "today" to a date.

    Raises:
        TypeError: if the value is not a date or datetime.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected a date or datetime, got {type(value).__name__}")


# ==============================================================================
# Calendar Arithmetic
# ==============================================================================


def dt_days_between(start: date, end: date) -> int:
    """Return the number of whole days from start to end (negative if end < start)."""
    return (end - start).days


def dt_weekday_index(day: date) -> int:
    """Return the Sunday-first weekday index (0=Sunday ... 6=Saturday)."""
    return (day.weekday() + 1) % 7


def dt_last_day_of_month(year: int, month: int) -> int:
    """Return the number of days in the given month (28-31)."""
    return monthrange(year, month)[1]


def dt_add_months(day: date, months: int) -> date:
    """Return the first day of the month `months` months after day's month.

    Works from the first of the month so the target month is never skipped
    (January 31 + 1 month targets February, not March).

    Examples:
        dt_add_months(date(2024, 1, 31), 1) → date(2024, 2, 1)
        dt_add_months(date(2024, 11, 15), 3) → date(2025, 2, 1)
    """
    return day.replace(day=1) + relativedelta(months=months)


def dt_with_clamped_day(month_start: date, day_of_month: int) -> date:
    """Set the day-of-month, clamped to the month's last day.

    Examples:
        dt_with_clamped_day(date(2023, 2, 1), 31) → date(2023, 2, 28)
        dt_with_clamped_day(date(2024, 2, 1), 31) → date(2024, 2, 29)
    """
    last_day = dt_last_day_of_month(month_start.year, month_start.month)
    return month_start.replace(day=min(day_of_month, last_day))


def dt_add_days(day: date, days: int) -> date:
    """Return day shifted by a whole number of days."""
    return day + timedelta(days=days)


# ==============================================================================
# Formatting
# ==============================================================================


def dt_format_long(day: date) -> str:
    """Format a date as "Mon D, YYYY" using fixed English abbreviations."""
    return f"{MONTH_ABBREVIATIONS[day.month - 1]} {day.day}, {day.year}"


def dt_format_label(
    value: str | date | datetime | None,
    today: date | datetime,
) -> str:
    """Render a date as a short label relative to today.

    - 0 days ahead → "Today"
    - 1 day ahead → "Tomorrow"
    - 2 to 7 days ahead → weekday name ("Friday")
    - anything else, including past dates → "Mar 5, 2024"

    Args:
        value: Date to label (date, datetime or ISO string)
        today: The caller's current local date

    Returns:
        Label string, or "Unknown" if value cannot be parsed.
    """
    target = dt_to_date(value)
    if target is None:
        return DISPLAY_UNKNOWN

    diff_days = dt_days_between(dt_require_date(today), target)

    if diff_days == 0:
        return LABEL_TODAY
    if diff_days == 1:
        return LABEL_TOMORROW
    if 1 < diff_days <= LABEL_WEEKDAY_MAX_DAYS:
        return WEEKDAY_NAMES[dt_weekday_index(target)]
    return dt_format_long(target)
