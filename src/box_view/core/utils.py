"""
Utility functions for parameter encoding.

Dates, boolean flags, thumbnail sizes and Retry-After values are converted
here into the string forms the API sends and expects.
"""

import math
from datetime import date, datetime, time, timezone
from email.utils import parsedate_to_datetime
from typing import Iterable, Optional, Union

from dateutil.parser import ParserError
from dateutil.parser import parse as parse_date_string

DateInput = Union[datetime, date, str]


def _parse_http_date(text: str) -> Optional[datetime]:
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        return None


def _parse_date_string(text: str) -> datetime:
    text = text.strip()
    if not text:
        raise ValueError("Date string cannot be empty")

    try:
        return parse_date_string(text)
    except (ParserError, OverflowError) as e:
        raise ValueError(f"Unrecognized date: {text!r}") from e


def to_utc(value: datetime) -> datetime:
    """Convert to an aware UTC datetime. Naive values are taken as local time."""
    return value.astimezone(timezone.utc)


def parse_date(value: DateInput) -> datetime:
    """
    Turn a datetime, date or date string in almost any format into an aware
    UTC datetime.

    Raises:
        ValueError: If a string cannot be parsed
        TypeError: If the value is not a date, datetime or string
    """
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, date):
        return to_utc(datetime.combine(value, time()))
    if isinstance(value, str):
        return to_utc(_parse_date_string(value))
    raise TypeError(f"Expected datetime, date or str, got {type(value).__name__}")


def to_rfc3339(value: DateInput) -> str:
    """
    Format a date as an RFC 3339 UTC timestamp with millisecond precision.

    Example:
        >>> to_rfc3339("2013-08-30T02:17:37+02:00")
        '2013-08-30T00:17:37.000Z'
    """
    utc = parse_date(value)
    return f"{utc:%Y-%m-%dT%H:%M:%S}.{utc.microsecond // 1000:03d}Z"


def encode_flag(value: bool) -> str:
    return "1" if value else "0"


def join_thumbnails(thumbnails: Union[str, Iterable[str]]) -> str:
    """Join thumbnail sizes like ``["100x100", "200x200"]`` with commas."""
    if isinstance(thumbnails, str):
        return thumbnails
    return ",".join(str(size) for size in thumbnails)


def parse_retry_after(
    value: Optional[str], now: Optional[datetime] = None
) -> Optional[float]:
    """
    Seconds to wait from a Retry-After header value.

    Accepts delay-seconds or an HTTP date. Returns None when the value
    cannot be understood.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None

    try:
        seconds = float(text)
    except ValueError:
        seconds = None

    if seconds is not None:
        if not math.isfinite(seconds):
            return None
        return max(seconds, 0.0)

    when = _parse_http_date(text)
    if when is None:
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)

    now = now or datetime.now(timezone.utc)
    return max((when - now).total_seconds(), 0.0)
