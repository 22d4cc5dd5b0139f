"""Record normalization helpers.

This module is the SINGLE SOURCE OF TRUTH for turning stored task records into
engine values. Records arrive from the task layer in whatever shape history
left them (camelCase dicts, snake_case objects, legacy weekday names, string
checklists); they are normalized here once so the engines never branch on
shape.

### Build Functions
- `build_recurrence_rule()` - Task record → RecurrenceRule (permissive by default)
- `build_checklist()` - Legacy string / object checklist → ChecklistItemData list

### Validation Functions
- `validate_recurrence_data()` - voluptuous schema + range checks, returns a
  dict of errors (empty if valid). Opt-in strictness layered on top of the
  permissive builder; the engines never require it.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

import voluptuous as vol

from . import const
from .engines.recurrence_rule import RecurrenceRule, RepeatType
from .type_defs import ChecklistItemData, TaskLike
from .utils.dt_utils import dt_to_date

_MISSING = object()

# Fields read from a task record, in canonical (storage) spelling
_RULE_FIELDS = (
    const.DATA_TASK_START_DATE,
    const.DATA_TASK_REPEAT_TYPE,
    const.DATA_TASK_REPEAT_EVERY,
    const.DATA_TASK_REPEAT_ON,
    const.DATA_TASK_COMPLETED,
    const.DATA_TASK_SKIPPED,
    const.DATA_TASK_LAST_RESET,
    const.DATA_TASK_CREATED_AT,
)

_FIELD_ERROR_KEYS = {
    const.DATA_TASK_START_DATE: const.TRANS_KEY_INVALID_START_DATE,
    const.DATA_TASK_REPEAT_TYPE: const.TRANS_KEY_INVALID_REPEAT_TYPE,
    const.DATA_TASK_REPEAT_EVERY: const.TRANS_KEY_INVALID_REPEAT_EVERY,
    const.DATA_TASK_REPEAT_ON: const.TRANS_KEY_INVALID_REPEAT_ON,
    const.DATA_TASK_COMPLETED: const.TRANS_KEY_INVALID_FLAG,
    const.DATA_TASK_SKIPPED: const.TRANS_KEY_INVALID_FLAG,
}

# ==============================================================================
# HELPER FUNCTIONS FOR FIELD NORMALIZATION
# ==============================================================================


def _read_field(record: TaskLike, key: str) -> Any:
    """Read a field by storage key or its snake_case alias.

    Mappings are read with item access, anything else with attribute access.
    Returns _MISSING when neither spelling is present.
    """
    alias = const.DATA_TASK_KEY_ALIASES.get(key, key)
    if isinstance(record, Mapping):
        if key in record:
            return record[key]
        return record.get(alias, _MISSING)
    value = getattr(record, key, _MISSING)
    if value is _MISSING:
        value = getattr(record, alias, _MISSING)
    return value


def _extract_rule_fields(record: TaskLike) -> dict[str, Any]:
    """Collect the present rule fields under their storage keys."""
    fields: dict[str, Any] = {}
    for key in _RULE_FIELDS:
        value = _read_field(record, key)
        if value is not _MISSING:
            fields[key] = value
    return fields


def _normalize_list_field(value: Any) -> list[Any]:
    """Normalize a field that should be a list.

    Handles cases where the value might be:
    - Already a list → return as-is
    - None → return empty list
    - Other iterables (tuple, set) → return as list

    Strings are wrapped, never iterated character by character.
    """
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, (tuple, set, frozenset)):
        return list(value)
    return []


def _normalize_repeat_every(value: Any) -> int:
    """Return a positive interval, defaulting to 1 for missing or invalid input."""
    if value is None or isinstance(value, bool):
        return const.DEFAULT_REPEAT_EVERY
    try:
        interval = int(value)
    except (TypeError, ValueError):
        const.LOGGER.debug("DataBuilders: Invalid repeatEvery %r, using 1", value)
        return const.DEFAULT_REPEAT_EVERY
    return max(const.DEFAULT_REPEAT_EVERY, interval)


def _normalize_start_date(value: Any) -> date | None:
    """Return the start date, or None when missing or unparseable.

    Unparseable values leave the task un-anchored and are logged as a warning.
    """
    start_date = dt_to_date(value)
    if start_date is None and value not in (None, ""):
        const.LOGGER.warning(
            "DataBuilders: Unparseable startDate %r, treating task as un-anchored",
            value,
        )
    return start_date


def _coerce_repeat_on_item(item: Any, repeat_type: RepeatType | None) -> int | None:
    """Convert one repeatOn entry to an int, or None when it cannot be read.

    Legacy weekly records stored weekday names ("sun", "monday").
    """
    if isinstance(item, bool):
        return None
    if isinstance(item, int):
        return item
    if isinstance(item, float) and item.is_integer():
        return int(item)
    if isinstance(item, str):
        cleaned = item.strip().lower()
        if cleaned.lstrip("-").isdigit():
            return int(cleaned)
        if repeat_type is RepeatType.WEEKLY:
            return const.WEEKDAY_NAME_TO_INT.get(cleaned)
    return None


def _repeat_on_bounds(repeat_type: RepeatType | None) -> tuple[int, int] | None:
    """Return the valid (min, max) range for repeatOn, or None if unused."""
    if repeat_type is RepeatType.WEEKLY:
        return const.WEEKDAY_MIN, const.WEEKDAY_MAX
    if repeat_type is RepeatType.MONTHLY:
        return const.MONTH_DAY_MIN, const.MONTH_DAY_MAX
    return None


def _normalize_repeat_on(value: Any, repeat_type: RepeatType | None) -> tuple[int, ...]:
    """Normalize repeatOn to a sorted tuple of in-range integers.

    Unreadable and out-of-range entries are dropped with a warning.
    """
    bounds = _repeat_on_bounds(repeat_type)
    days: set[int] = set()
    dropped: list[Any] = []

    for item in _normalize_list_field(value):
        day = _coerce_repeat_on_item(item, repeat_type)
        if day is None or (bounds and not bounds[0] <= day <= bounds[1]):
            dropped.append(item)
            continue
        days.add(day)

    if dropped:
        const.LOGGER.warning(
            "DataBuilders: Dropped invalid repeatOn values %s for repeat type %s",
            dropped,
            repeat_type,
        )

    return tuple(sorted(days))


# ==============================================================================
# EXCEPTIONS
# ==============================================================================


class EntityValidationError(Exception):
    """Validation error with field-specific information.

    Raised by build_recurrence_rule(strict=True) when a record fails
    validate_recurrence_data().

    Attributes:
        field: The DATA_TASK_* key identifying the field that failed
        translation_key: The TRANS_KEY_* constant for the error message
        placeholders: Optional dict for message placeholders
    """

    def __init__(
        self,
        field: str,
        translation_key: str,
        placeholders: dict[str, str] | None = None,
    ) -> None:
        """Initialize EntityValidationError."""
        self.field = field
        self.translation_key = translation_key
        self.placeholders = placeholders or {}
        super().__init__(translation_key)


# ==============================================================================
# VALIDATION
# ==============================================================================


def _valid_start_date(value: Any) -> Any:
    """Voluptuous validator: None or a parseable date."""
    if value is None:
        return value
    if dt_to_date(value) is None:
        raise vol.Invalid(f"unparseable start date: {value!r}")
    return value


def _strict_int(value: Any) -> int:
    """Voluptuous validator: a real int (bools rejected)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise vol.Invalid(f"expected int, got {type(value).__name__}")
    return value


RECURRENCE_SCHEMA = vol.Schema(
    {
        vol.Optional(const.DATA_TASK_START_DATE): _valid_start_date,
        vol.Optional(const.DATA_TASK_REPEAT_TYPE): vol.In(const.REPEAT_TYPE_OPTIONS),
        vol.Optional(const.DATA_TASK_REPEAT_EVERY): vol.Any(
            None, vol.All(_strict_int, vol.Range(min=1))
        ),
        vol.Optional(const.DATA_TASK_REPEAT_ON): vol.Any(None, [_strict_int]),
        vol.Optional(const.DATA_TASK_COMPLETED): bool,
        vol.Optional(const.DATA_TASK_SKIPPED): bool,
    },
    extra=vol.ALLOW_EXTRA,
)


def validate_recurrence_data(record: TaskLike) -> dict[str, str]:
    """Validate a task record's recurrence fields.

    Works with DATA_TASK_* keys (or their snake_case aliases / attributes).

    Args:
        record: Task record (mapping or object)

    Returns:
        Dict of errors: {field: translation_key}
        Empty dict means validation passed.

    Validation Rules:
        1. startDate parseable when present
        2. repeatType one of daily, weekly, monthly
        3. repeatEvery an integer >= 1 when present
        4. repeatOn a list of integers when present
        5. completed / skipped booleans when present
        6. repeatOn within 0-6 (weekly) or 1-31 (monthly)
    """
    errors: dict[str, str] = {}

    if record is None:
        errors["record"] = const.TRANS_KEY_INVALID_RECORD
        return errors

    data = _extract_rule_fields(record)

    # === 1-5. Schema ===
    try:
        RECURRENCE_SCHEMA(data)
    except vol.MultipleInvalid as err:
        for invalid in err.errors:
            field = str(invalid.path[0]) if invalid.path else "record"
            errors.setdefault(
                field, _FIELD_ERROR_KEYS.get(field, const.TRANS_KEY_INVALID_RECORD)
            )
        return errors

    # === 6. Range for the repeat type ===
    repeat_type = RepeatType.from_value(
        data.get(const.DATA_TASK_REPEAT_TYPE, const.DEFAULT_REPEAT_TYPE)
    )
    bounds = _repeat_on_bounds(repeat_type)
    repeat_on = data.get(const.DATA_TASK_REPEAT_ON) or []
    if bounds and any(not bounds[0] <= day <= bounds[1] for day in repeat_on):
        errors[const.DATA_TASK_REPEAT_ON] = const.TRANS_KEY_INVALID_REPEAT_ON

    return errors


# ==============================================================================
# BUILDERS
# ==============================================================================


def build_recurrence_rule(
    record: TaskLike | RecurrenceRule,
    *,
    strict: bool = False,
) -> RecurrenceRule:
    """Build a RecurrenceRule from a stored task record.

    Permissive defaults (strict=False):
        - repeatType absent → daily; unrecognized → None (fallback arms)
        - repeatEvery missing, invalid or < 1 → 1
        - repeatOn missing/invalid → empty; bad entries dropped
        - startDate missing or unparseable → None (always started)
        - completed / skipped → truthiness

    Args:
        record: Task record (mapping or object). A RecurrenceRule is
            returned unchanged.
        strict: Run validate_recurrence_data() first and raise on errors.

    Raises:
        EntityValidationError: strict=True and the record is invalid.
    """
    if isinstance(record, RecurrenceRule):
        return record

    if strict:
        errors = validate_recurrence_data(record)
        if errors:
            field, translation_key = next(iter(errors.items()))
            raise EntityValidationError(
                field=field,
                translation_key=translation_key,
                placeholders={"errors": ", ".join(sorted(errors))},
            )

    if record is None:
        const.LOGGER.debug("DataBuilders: Empty task record, using defaults")
        return RecurrenceRule()

    data = _extract_rule_fields(record)

    raw_repeat_type = data.get(const.DATA_TASK_REPEAT_TYPE, const.DEFAULT_REPEAT_TYPE)
    repeat_type = RepeatType.from_value(raw_repeat_type)
    if repeat_type is None:
        const.LOGGER.warning(
            "DataBuilders: Unrecognized repeatType %r, using fallback scheduling",
            raw_repeat_type,
        )

    return RecurrenceRule(
        start_date=_normalize_start_date(data.get(const.DATA_TASK_START_DATE)),
        repeat_type=repeat_type,
        repeat_every=_normalize_repeat_every(data.get(const.DATA_TASK_REPEAT_EVERY)),
        repeat_on=_normalize_repeat_on(data.get(const.DATA_TASK_REPEAT_ON), repeat_type),
        completed=bool(data.get(const.DATA_TASK_COMPLETED, False)),
        skipped=bool(data.get(const.DATA_TASK_SKIPPED, False)),
        last_reset=dt_to_date(data.get(const.DATA_TASK_LAST_RESET)),
        created_at=dt_to_date(data.get(const.DATA_TASK_CREATED_AT)),
        raw_repeat_type=None if raw_repeat_type is None else str(raw_repeat_type),
    )


def build_checklist(items: Any) -> list[ChecklistItemData]:
    """Normalize a checklist to {text, checked} items.

    Legacy records stored checklists as plain strings. Objects missing a
    field get text "" / checked False; checked must be exactly True.

    Examples:
        build_checklist(["Pack bag"]) → [{"text": "Pack bag", "checked": False}]
        build_checklist([{"text": "Run", "checked": True}]) → unchanged
    """
    checklist: list[ChecklistItemData] = []
    for item in _normalize_list_field(items):
        if isinstance(item, str):
            checklist.append({"text": item, "checked": False})
        elif isinstance(item, Mapping):
            text = item.get(const.DATA_CHECKLIST_TEXT)
            checklist.append(
                {
                    "text": "" if text is None else str(text),
                    "checked": item.get(const.DATA_CHECKLIST_CHECKED) is True,
                }
            )
        elif item is not None:
            checklist.append({"text": str(item), "checked": False})
    return checklist


def build_task_checklist(record: TaskLike) -> list[ChecklistItemData]:
    """Read and normalize the checklist of a task record."""
    value = _read_field(record, const.DATA_TASK_CHECKLIST)
    return build_checklist(None if value is _MISSING else value)
