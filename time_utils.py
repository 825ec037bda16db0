"""
Hour-granularity timestamp helpers for hourly bar files.

Bar files carry naive local timestamps in the form ``YYYY-MM-DDTHH:MM``
(e.g. ``2023-10-01T09:00``). No timezone conversion is applied anywhere:
gaps are measured on the wall-clock values exactly as written.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterator, Optional

from hour_fill_errors import MalformedTimestampError

HOUR_FORMAT = "%Y-%m-%dT%H:%M"
ONE_HOUR = timedelta(hours=1)

# Seconds are tolerated on input; output always uses HOUR_FORMAT.
_ACCEPTED_FORMATS = (HOUR_FORMAT, "%Y-%m-%dT%H:%M:%S")


def parse_hour(value: str, row_number: Optional[int] = None) -> datetime:
    """
    Parse a dateTime field and truncate it to the hour.

    Args:
        value: Raw field text, e.g. "2023-10-01T09:00"
        row_number: Data row number used in the error message

    Returns:
        Naive datetime with minutes, seconds and microseconds zeroed

    Raises:
        MalformedTimestampError if the value does not match a supported format
    """
    text = (value or "").strip()
    for fmt in _ACCEPTED_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return parsed.replace(minute=0, second=0, microsecond=0)
    raise MalformedTimestampError(value, row_number)


def format_hour(hour: datetime) -> str:
    return hour.strftime(HOUR_FORMAT)


def hours_between(previous: datetime, current: datetime) -> int:
    """Whole hours from previous to current (negative when current is earlier)."""
    return int((current - previous) // ONE_HOUR)


def missing_hours_between(previous: datetime, current: datetime) -> Iterator[datetime]:
    """Yield every hour strictly between previous and current, ascending."""
    hour = previous + ONE_HOUR
    while hour < current:
        yield hour
        hour += ONE_HOUR
