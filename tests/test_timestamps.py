from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from commitpaint.errors import FormatError
from commitpaint.temporal.timestamps import (
    canonicalize,
    far_future_sentinel,
    format_milliseconds,
    parse_calendar_date,
    stringify,
    year_window,
)


def test_parse_calendar_date_returns_local_midnight() -> None:
    assert parse_calendar_date("1990-12-23") == datetime(1990, 12, 23)


@pytest.mark.parametrize("value", ["1990-1-23", "90-12-23", "1990-12-23T10:00", "1990-02-30", ""])
def test_parse_calendar_date_rejects_malformed_input(value: str) -> None:
    with pytest.raises(FormatError):
        parse_calendar_date(value)


def test_canonicalize_shifts_one_hour_and_labels_utc() -> None:
    result = canonicalize(datetime(1990, 12, 23))

    assert result == datetime(1990, 12, 23, 1, 0, tzinfo=timezone.utc)
    assert result.utcoffset() == timedelta(0)


def test_stringify_is_iso() -> None:
    assert stringify(datetime(1990, 12, 23, 1, tzinfo=timezone.utc)) == "1990-12-23T01:00:00+00:00"


def test_far_future_sentinel_is_74_years_ahead() -> None:
    now = datetime(2024, 6, 1, 12, 30, 15, 999)

    assert far_future_sentinel(now) == datetime(2098, 6, 1, 12, 30, 15)


def test_far_future_sentinel_handles_leap_day() -> None:
    assert far_future_sentinel(datetime(2020, 2, 29)) == datetime(2094, 2, 28)


def test_far_future_sentinel_is_capped_for_git() -> None:
    assert far_future_sentinel(datetime(2030, 3, 1)) == datetime(2099, 12, 31)


def test_year_window_is_exclusive_on_the_high_end() -> None:
    assert year_window(datetime(2024, 6, 1)) == (1970, 2098)


@pytest.mark.parametrize(
    ("ms", "expected"),
    [
        (0, "00m 01s"),
        (999, "00m 01s"),
        (59000, "01m 00s"),
        (61500, "01m 02s"),
        (600000, "10m 01s"),
    ],
)
def test_format_milliseconds(ms: int, expected: str) -> None:
    assert format_milliseconds(ms) == expected
