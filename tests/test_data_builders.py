"""Tests for data_builders.py: record normalization and validation."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
import logging
from types import SimpleNamespace
from typing import Any

import pytest

from questlog import const
from questlog.data_builders import (
    EntityValidationError,
    build_checklist,
    build_recurrence_rule,
    build_task_checklist,
    validate_recurrence_data,
)
from questlog.engines.recurrence_rule import RecurrenceRule, RepeatType

TaskFactory = Callable[..., dict[str, Any]]


# =============================================================================
# build_recurrence_rule: shapes
# =============================================================================


class TestBuildRuleShapes:
    """Mappings, snake_case aliases and plain objects."""

    def test_camel_case_mapping(self, make_task: TaskFactory) -> None:
        """Stored records use camelCase keys."""
        rule = build_recurrence_rule(
            make_task(repeatType="weekly", repeatEvery=2, repeatOn=[5, 1, 3])
        )

        assert rule.start_date == date(2024, 1, 1)
        assert rule.repeat_type is RepeatType.WEEKLY
        assert rule.repeat_every == 2
        assert rule.repeat_on == (1, 3, 5)
        assert rule.is_resolved is False

    def test_snake_case_mapping(self) -> None:
        """snake_case aliases are accepted."""
        rule = build_recurrence_rule(
            {
                "start_date": "2024-01-01",
                "repeat_type": "monthly",
                "repeat_on": [15],
                "last_reset": "2024-01-05",
                "created_at": "2023-12-20T08:00:00.000Z",
            }
        )

        assert rule.repeat_type is RepeatType.MONTHLY
        assert rule.repeat_on == (15,)
        assert rule.last_reset == date(2024, 1, 5)
        assert rule.created_at == date(2023, 12, 20)

    def test_object_attributes(self) -> None:
        """Objects are read by attribute."""
        task = SimpleNamespace(
            start_date=date(2024, 1, 1), repeat_type="daily", completed=True
        )
        rule = build_recurrence_rule(task)

        assert rule.start_date == date(2024, 1, 1)
        assert rule.completed is True

    def test_rule_passes_through(self) -> None:
        """A built rule is returned unchanged."""
        rule = RecurrenceRule(start_date=date(2024, 1, 1))
        assert build_recurrence_rule(rule) is rule

    def test_none_record_uses_defaults(self) -> None:
        """A missing record behaves like an empty daily task."""
        assert build_recurrence_rule(None) == RecurrenceRule()


# =============================================================================
# build_recurrence_rule: defaults and normalization
# =============================================================================


class TestBuildRuleDefaults:
    """Permissive defaults for missing or malformed fields."""

    def test_empty_record(self) -> None:
        """Absent repeatType means daily; no start date."""
        rule = build_recurrence_rule({})

        assert rule.repeat_type is RepeatType.DAILY
        assert rule.start_date is None
        assert rule.repeat_every == 1
        assert rule.repeat_on == ()

    def test_repeat_type_case_insensitive(self, make_task: TaskFactory) -> None:
        """Stored values are trimmed and lower-cased."""
        assert build_recurrence_rule(make_task(repeatType=" Weekly ")).repeat_type is (
            RepeatType.WEEKLY
        )

    @pytest.mark.parametrize("value", ["yearly", None, 7])
    def test_unrecognized_repeat_type(
        self, make_task: TaskFactory, value: Any, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Unrecognized values route to the fallback with a warning."""
        with caplog.at_level(logging.WARNING, logger="questlog"):
            rule = build_recurrence_rule(make_task(repeatType=value))

        assert rule.repeat_type is None
        assert "Unrecognized repeatType" in caplog.text

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, 1), (0, 1), (-3, 1), ("3", 3), (2.0, 2), ("abc", 1), (True, 1)],
    )
    def test_repeat_every(
        self, make_task: TaskFactory, value: Any, expected: int
    ) -> None:
        """Missing, invalid and non-positive intervals become 1."""
        assert build_recurrence_rule(make_task(repeatEvery=value)).repeat_every == expected

    @pytest.mark.parametrize("value", ["soon", "2024-13-01"])
    def test_unparseable_start_date_warns(
        self, make_task: TaskFactory, value: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A bad start date means "always started" and is logged as a warning."""
        with caplog.at_level(logging.WARNING, logger="questlog"):
            rule = build_recurrence_rule(make_task(startDate=value))

        assert rule.start_date is None
        assert "Unparseable startDate" in caplog.text

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_start_date_is_quiet(
        self, make_task: TaskFactory, value: str | None, caplog: pytest.LogCaptureFixture
    ) -> None:
        """An absent start date is a normal un-anchored task."""
        with caplog.at_level(logging.WARNING, logger="questlog"):
            rule = build_recurrence_rule(make_task(startDate=value))

        assert rule.start_date is None
        assert "Unparseable startDate" not in caplog.text

    def test_flags_use_truthiness(self, make_task: TaskFactory) -> None:
        """completed/skipped accept truthy storage values."""
        rule = build_recurrence_rule(make_task(completed=1, skipped=""))

        assert rule.completed is True
        assert rule.skipped is False


class TestNormalizeRepeatOn:
    """repeatOn coercion, range filtering and ordering."""

    def test_weekday_names(self, make_task: TaskFactory) -> None:
        """Legacy weekly records stored weekday names."""
        rule = build_recurrence_rule(
            make_task(repeatType="weekly", repeatOn=["sun", "Monday", "fri"])
        )
        assert rule.repeat_on == (0, 1, 5)

    def test_numeric_strings_and_duplicates(self, make_task: TaskFactory) -> None:
        """Digit strings are parsed and duplicates collapse."""
        rule = build_recurrence_rule(
            make_task(repeatType="monthly", repeatOn=["15", 15, 1.0])
        )
        assert rule.repeat_on == (1, 15)

    def test_out_of_range_dropped_with_warning(
        self, make_task: TaskFactory, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Values outside 0-6 for weekly are dropped and logged."""
        with caplog.at_level(logging.WARNING, logger="questlog"):
            rule = build_recurrence_rule(
                make_task(repeatType="weekly", repeatOn=[1, 7, -1, True, "mon"])
            )

        assert rule.repeat_on == (1,)
        assert "Dropped invalid repeatOn values" in caplog.text

    def test_monthly_range(self, make_task: TaskFactory) -> None:
        """Month days must be 1-31."""
        rule = build_recurrence_rule(
            make_task(repeatType="monthly", repeatOn=[0, 1, 31, 32])
        )
        assert rule.repeat_on == (1, 31)

    @pytest.mark.parametrize("value", [None, "", 5, {"a": 1}])
    def test_non_list_values(self, make_task: TaskFactory, value: Any) -> None:
        """Missing or non-list repeatOn reads as empty."""
        rule = build_recurrence_rule(make_task(repeatType="weekly", repeatOn=value))
        assert rule.repeat_on == ()

    def test_tuple_accepted(self, make_task: TaskFactory) -> None:
        """Tuples and sets are treated like lists."""
        rule = build_recurrence_rule(make_task(repeatType="weekly", repeatOn=(3, 1)))
        assert rule.repeat_on == (1, 3)


# =============================================================================
# Validation
# =============================================================================


class TestValidateRecurrenceData:
    """Opt-in strict validation."""

    def test_valid_record(self, make_task: TaskFactory) -> None:
        """Storage defaults pass."""
        assert validate_recurrence_data(make_task()) == {}

    def test_none_record(self) -> None:
        """A missing record is reported as such."""
        assert validate_recurrence_data(None) == {"record": const.TRANS_KEY_INVALID_RECORD}

    @pytest.mark.parametrize(
        ("overrides", "field", "trans_key"),
        [
            ({"repeatType": "yearly"}, "repeatType", const.TRANS_KEY_INVALID_REPEAT_TYPE),
            ({"repeatEvery": 0}, "repeatEvery", const.TRANS_KEY_INVALID_REPEAT_EVERY),
            ({"repeatEvery": "2"}, "repeatEvery", const.TRANS_KEY_INVALID_REPEAT_EVERY),
            ({"repeatOn": ["mon"]}, "repeatOn", const.TRANS_KEY_INVALID_REPEAT_ON),
            ({"startDate": "soon"}, "startDate", const.TRANS_KEY_INVALID_START_DATE),
            ({"completed": "yes"}, "completed", const.TRANS_KEY_INVALID_FLAG),
        ],
    )
    def test_field_errors(
        self,
        make_task: TaskFactory,
        overrides: dict[str, Any],
        field: str,
        trans_key: str,
    ) -> None:
        """Each malformed field maps to its translation key."""
        errors = validate_recurrence_data(make_task(**overrides))
        assert errors[field] == trans_key

    def test_repeat_on_range_for_type(self, make_task: TaskFactory) -> None:
        """Weekday 7 is invalid for weekly; day 7 is fine for monthly."""
        weekly = make_task(repeatType="weekly", repeatOn=[7])
        monthly = make_task(repeatType="monthly", repeatOn=[7])

        assert validate_recurrence_data(weekly) == {
            "repeatOn": const.TRANS_KEY_INVALID_REPEAT_ON
        }
        assert validate_recurrence_data(monthly) == {}

    def test_strict_build_raises(self, make_task: TaskFactory) -> None:
        """strict=True raises EntityValidationError with the failing field."""
        with pytest.raises(EntityValidationError) as err:
            build_recurrence_rule(make_task(repeatEvery=-1), strict=True)

        assert err.value.field == "repeatEvery"
        assert err.value.translation_key == const.TRANS_KEY_INVALID_REPEAT_EVERY
        assert err.value.placeholders == {"errors": "repeatEvery"}

    def test_strict_build_valid(self, make_task: TaskFactory) -> None:
        """Valid records build normally in strict mode."""
        rule = build_recurrence_rule(make_task(repeatType="monthly"), strict=True)
        assert rule.repeat_type is RepeatType.MONTHLY


# =============================================================================
# Checklist
# =============================================================================


class TestChecklist:
    """Checklist normalization."""

    def test_legacy_strings(self) -> None:
        """Plain strings become unchecked items."""
        assert build_checklist(["Pack bag", "Shoes"]) == [
            {"text": "Pack bag", "checked": False},
            {"text": "Shoes", "checked": False},
        ]

    def test_objects(self) -> None:
        """Objects keep text; checked must be exactly True."""
        assert build_checklist(
            [{"text": "Run", "checked": True}, {"checked": "yes"}, None, 3]
        ) == [
            {"text": "Run", "checked": True},
            {"text": "", "checked": False},
            {"text": "3", "checked": False},
        ]

    @pytest.mark.parametrize("value", [None, [], 12])
    def test_empty(self, value: Any) -> None:
        """Missing or non-list checklists are empty."""
        assert build_checklist(value) == []

    def test_task_checklist(self, make_task: TaskFactory) -> None:
        """Reads the checklist field from a record."""
        assert build_task_checklist(make_task(checklist=["Warm up"])) == [
            {"text": "Warm up", "checked": False}
        ]
        assert build_task_checklist({}) == []
