# File: utils/__init__.py
"""Pure Python utilities for questlog.

Submodules:
    - dt_utils: Calendar-day parsing, arithmetic and label formatting

Usage:
    from . import dt_utils
    from .dt_utils import dt_weekday_index
"""

from . import dt_utils

__all__ = ["dt_utils"]
