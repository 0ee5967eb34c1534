# File: utils/dt_utils.py
"""Date and time utilities for Bastuklubb.

Pure Python date/time functions shared by the engines and data builders.
Uses standard library datetime/zoneinfo plus dateutil for calendar-month
arithmetic.

Functions:
    - set_default_timezone / get_default_timezone: Local timezone configuration
    - dt_now_utc: Current datetime in UTC
    - as_utc / as_local: Timezone conversion
    - dt_parse_date: Parse date strings
    - dt_parse: Normalize str/date/datetime inputs to an aware datetime
    - dt_to_local_date: Normalize any supported input to a local date
    - dt_subtract_months: Calendar-month subtraction (month-end clamped)
    - dt_whole_years_between: Completed years between two dates
    - dt_days_between: Whole days between two dates
"""

from __future__ import annotations

from datetime import UTC, date, datetime
import logging
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

# Third-party date utilities
from dateutil.relativedelta import relativedelta

if TYPE_CHECKING:
    from datetime import tzinfo

# Module-level logger
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants (local copies to avoid circular imports)
# These mirror const.py values but are defined locally for purity.
# ==============================================================================

# Default timezone - can be overridden by caller
DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo("Europe/Stockholm")

# Alternate date formats accepted from hand-edited rows and scripts
_DATE_FORMATS = ("%Y/%m/%d", "%d/%m/%Y", "%Y%m%d")


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: ZoneInfo) -> None:
    """Set the default timezone for all dt_utils functions.

    Call this once at start-up when the association is not in Sweden.

    Args:
        tz: ZoneInfo object representing the default timezone
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = tz


def get_default_timezone() -> ZoneInfo:
    """Get the current default timezone."""
    return DEFAULT_TIME_ZONE


# ==============================================================================
# Current Date/Time
# ==============================================================================


def dt_now_utc() -> datetime:
    """Return the current datetime in UTC (timezone-aware)."""
    return datetime.now(UTC)


# ==============================================================================
# Timezone Conversion
# ==============================================================================


def as_utc(dt_obj: datetime) -> datetime:
    """Convert a datetime to UTC timezone.

    Naive datetimes are assumed to be in the default timezone.
    """
    if dt_obj.tzinfo is None:
        dt_obj = dt_obj.replace(tzinfo=DEFAULT_TIME_ZONE)
    return dt_obj.astimezone(UTC)


def as_local(dt_obj: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Convert a datetime to local timezone.

    Args:
        dt_obj: Datetime object (naive values are taken as local already)
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Datetime in local timezone
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    if dt_obj.tzinfo is None:
        return dt_obj.replace(tzinfo=tz_info)
    return dt_obj.astimezone(tz_info)


# ==============================================================================
# Parsing
# ==============================================================================


def dt_parse_date(date_str: str | None) -> date | None:
    """Safely parse a date string into a `datetime.date`.

    Accepts formats:
    - "2024-06-01" (ISO format)
    - "2024-06-01T10:15:00+02:00" (ISO datetime, date part kept)
    - "2024/06/01", "01/06/2024" (European), "20240601"

    Args:
        date_str: Date string to parse, or None

    Returns:
        datetime.date or None if parsing fails.
    """
    if not date_str or not isinstance(date_str, str):
        return None

    text = date_str.strip()

    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    _LOGGER.debug("dt_parse_date: Unrecognized date string %r", date_str)
    return None


def dt_parse(
    dt_input: str | date | datetime | None,
    default_tzinfo: tzinfo | None = None,
) -> datetime | None:
    """Normalize str, date or datetime input to a timezone-aware datetime.

    Args:
        dt_input: String, date or datetime to normalize, or None
        default_tzinfo: Timezone to use if the input is naive
                        (defaults to DEFAULT_TIME_ZONE if None)

    Returns:
        Aware datetime, or None if the input could not be parsed.

    Example:
        >>> dt_parse("2024-05-20")
        datetime.datetime(2024, 5, 20, 0, 0, tzinfo=ZoneInfo('Europe/Stockholm'))
    """
    if not dt_input:
        return None

    tz_info = default_tzinfo or DEFAULT_TIME_ZONE
    result: datetime | None = None

    if isinstance(dt_input, datetime):
        result = dt_input
    elif isinstance(dt_input, date):
        result = datetime.combine(dt_input, datetime.min.time())
    elif isinstance(dt_input, str):
        try:
            # Postgres timestamps may carry a trailing "Z"
            result = datetime.fromisoformat(dt_input.strip().replace("Z", "+00:00"))
        except ValueError:
            parsed_date = dt_parse_date(dt_input)
            if parsed_date is None:
                return None
            result = datetime.combine(parsed_date, datetime.min.time())
    else:
        _LOGGER.debug("dt_parse: Unsupported input type %s", type(dt_input).__name__)
        return None

    if result.tzinfo is None:
        result = result.replace(tzinfo=tz_info)
    return result


def dt_to_local_date(
    value: str | date | datetime | None, tz: ZoneInfo | None = None
) -> date | None:
    """Return the local calendar date of a str, date or datetime input.

    Plain dates are returned unchanged; datetimes are converted to the local
    timezone first so a late-evening UTC timestamp lands on the right day.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return as_local(value, tz).date()
    if isinstance(value, date):
        return value
    parsed = dt_parse(value, default_tzinfo=tz)
    if parsed is None:
        return None
    return as_local(parsed, tz).date()


# ==============================================================================
# Calendar Arithmetic
# ==============================================================================


def dt_subtract_months(reference: date, months: int) -> date:
    """Subtract calendar months, clamping the day at month end.

    Examples:
        dt_subtract_months(date(2024, 6, 1), 13) → date(2023, 5, 1)
        dt_subtract_months(date(2024, 3, 31), 1) → date(2024, 2, 29)
    """
    return reference - relativedelta(months=months)


def dt_whole_years_between(start: date, end: date) -> int:
    """Return completed years from start to end (negative if end < start)."""
    return relativedelta(end, start).years


def dt_days_between(start: date, end: date) -> int:
    """Return whole days from start to end."""
    return (end - start).days
