# File: utils/__init__.py
"""Pure Python utilities for Bastuklubb.

Submodules:
    - dt_utils: Date/time parsing, timezone handling, calendar-month arithmetic

Usage:
    from .utils import dt_utils
    from .utils.dt_utils import dt_subtract_months
"""

from . import dt_utils

__all__ = ["dt_utils"]
