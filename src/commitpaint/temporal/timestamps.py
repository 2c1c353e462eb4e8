"""Conversions between calendar strings and commit instants."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

from ..errors import FormatError, RangeError

CALENDAR_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

FUTURE_YEARS = 74
"""How far ahead of the current year the far-future sentinel is placed."""

EPOCH_YEAR = 1970

GIT_MAX_YEAR = 2099
"""Last year git's date parser accepts."""


def parse_calendar_date(value: str) -> datetime:
    """Parse a strict ``YYYY-MM-DD`` string into a naive local midnight.

    Raises
    ------
    FormatError:
        If ``value`` does not match the pattern or is not a real calendar day.
    """
    if not CALENDAR_DATE_PATTERN.match(value):
        raise FormatError(f"Invalid date '{value}', expected YYYY-MM-DD")
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError as exc:
        raise FormatError(f"Invalid date '{value}': {exc}") from exc


def canonicalize(instant: datetime) -> datetime:
    """Return the instant as git should receive it for correct calendar display.

    The contribution calendar renders commits shifted across time zones, so the
    local wall-clock time is moved forward one hour and then labelled as UTC.
    Apply this once per resolved instant, never to values still being compared.
    """
    if instant.tzinfo is not None:
        instant = instant.astimezone().replace(tzinfo=None)
    try:
        shifted = instant + timedelta(hours=1)
    except OverflowError as e:
        raise RangeError(f"Date {instant.isoformat()} is out of range: {e}") from e
    return shifted.replace(tzinfo=timezone.utc)


def add_years(instant: datetime, years: int) -> datetime:
    try:
        return instant.replace(year=instant.year + years)
    except ValueError:
        # Feb 29 in a non-leap target year
        return instant.replace(year=instant.year + years, day=28)


def far_future_sentinel(now: Optional[datetime] = None) -> datetime:
    """Return an instant ``FUTURE_YEARS`` ahead of ``now``.

    Commits dated here stay outside every range the contribution calendar shows.
    The result is capped at the end of ``GIT_MAX_YEAR``.
    """
    current = now or datetime.now().astimezone()
    target = add_years(current, FUTURE_YEARS)
    if target.year > GIT_MAX_YEAR:
        target = target.replace(year=GIT_MAX_YEAR, month=12, day=31)
    return target.replace(microsecond=0)


def year_window(now: Optional[datetime] = None) -> tuple[int, int]:
    """Return the accepted ``[low, high)`` year window for generated commits."""
    current = now or datetime.now()
    return EPOCH_YEAR, current.year + FUTURE_YEARS


def stringify(instant: datetime) -> str:
    """ISO-8601 form used both as the git ``--date`` value and the commit message."""
    return instant.isoformat(timespec="seconds")


def format_milliseconds(ms: float) -> str:
    """Render a duration as ``MMm SSs``.

    The whole-second count is rounded up by one so a short remainder is never
    shown as ``00s``.
    """
    total_seconds = int(ms // 1000) + 1
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{minutes:02d}m {seconds:02d}s"
