"""Shared fixtures for questlog tests."""

from collections.abc import Callable, Iterator
from datetime import date
from typing import Any

import pytest

from questlog.utils import dt_utils

# Default task anchor (a Monday)
MONDAY = date(2024, 1, 1)


@pytest.fixture(autouse=True)
def reset_default_timezone() -> Iterator[None]:
    """Restore the default timezone after tests that change it."""
    original = dt_utils.get_default_timezone()
    yield
    dt_utils.set_default_timezone(original)


@pytest.fixture
def make_task() -> Callable[..., dict[str, Any]]:
    """Return a factory for stored task records (camelCase, storage defaults)."""

    def _make_task(**overrides: Any) -> dict[str, Any]:
        task: dict[str, Any] = {
            "title": "Stretch",
            "difficulty": "easy",
            "startDate": MONDAY.isoformat(),
            "repeatType": "daily",
            "repeatEvery": 1,
            "repeatOn": [],
            "completed": False,
            "skipped": False,
            "checklist": [],
        }
        task.update(overrides)
        return task

    return _make_task
