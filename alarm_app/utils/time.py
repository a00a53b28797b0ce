"""
Calendar date helpers for daily price history.

Trigger dates are plain calendar days. Anything that arrives as a datetime
or an ISO string is reduced to its UTC date before it is compared, so a
stored "2025-10-27T07:00:00.000Z" and a target of 2025-10-27 agree.
"""

import re
from datetime import date, datetime, timezone
from typing import Optional, Union

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
DAY_FIRST_PATTERN = re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{4})$")

DateLike = Union[date, datetime, str]


def utc_today(now: Optional[datetime] = None) -> date:
    """
    Get the current UTC calendar date.

    Args:
        now: Optional wall-clock time, defaults to the current time

    Returns:
        Today's date in UTC
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.date()


def parse_date(value: DateLike) -> date:
    """
    Parse a date from the formats seen in stored price history.

    Accepts date objects, datetimes (converted to UTC when aware), ISO dates,
    ISO datetimes and day-first ``DD-MM-YYYY`` strings.

    Raises:
        ValueError: If the value cannot be read as a calendar date
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Unsupported date value: {value!r}")

    text = value.strip()
    if ISO_DATE_PATTERN.match(text):
        return date.fromisoformat(text)

    match = DAY_FIRST_PATTERN.match(text)
    if match:
        day, month, year = (int(part) for part in match.groups())
        return date(year, month, day)

    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValueError(f"Unrecognized date format: {value!r}") from None

    # naive datetimes are already UTC
    return parse_date(parsed)


def parse_target_date(value: Optional[str]) -> date:
    """
    Parse a ``YYYY-MM-DD`` target date, defaulting to today in UTC.

    Raises:
        ValueError: If the string is not exactly ``YYYY-MM-DD``
    """
    if value is None:
        return utc_today()
    if not ISO_DATE_PATTERN.match(value):
        raise ValueError(f"Invalid date format {value!r}. Use YYYY-MM-DD")
    return date.fromisoformat(value)


def format_date(value: Optional[date]) -> Optional[str]:
    """Format a date as ``YYYY-MM-DD``, passing None through."""
    if value is None:
        return None
    return value.isoformat()
