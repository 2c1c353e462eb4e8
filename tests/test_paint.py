from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta

import pytest

from commitpaint.errors import FormatError
from commitpaint.temporal.paint import PAINT_CODES, draw_date, expand, parse_level
from commitpaint.temporal.resolver import resolve_local


def test_draw_date_repeats_with_zero_offsets() -> None:
    assert draw_date("2021-01-01", 1) == ["2021-01-01"]
    assert draw_date("2021-01-01", 2) == ["2021-01-01"] + ["0"] * 10


def test_draw_date_level_zero_is_empty() -> None:
    assert draw_date("2021-01-01", 0) == []


@pytest.mark.parametrize("level", ["5", "-1", "dark"])
def test_invalid_level_is_rejected(level: str) -> None:
    with pytest.raises(FormatError):
        parse_level(level)


def test_expand_keeps_offsets_and_paints_dates() -> None:
    assert expand(["2021-01-01", "7", "2021-01-02"], 1) == ["2021-01-01", "7", "2021-01-02"]
    assert len(expand(["2021-01-01", "2021-01-02"], 4)) == 2 * PAINT_CODES[4]


def test_painted_day_resolves_to_distinct_minutes() -> None:
    instants = resolve_local(draw_date("2021-01-01", 3))

    assert len(set(instants)) == PAINT_CODES[3]
    assert instants[-1] == datetime(2021, 1, 1) + timedelta(minutes=PAINT_CODES[3] - 1)


def test_expand_paints_days_reached_by_offsets() -> None:
    tokens = expand(["2021-01-01", "1", "0", "1"], 2)

    assert tokens == (
        ["2021-01-01"] + ["0"] * 10
        + ["1"] + ["0"] * 10
        + ["0"]
        + ["1"] + ["0"] * 10
    )


def test_painted_offsets_give_every_day_the_same_shade() -> None:
    instants = resolve_local(expand(["2021-01-01", "1", "1"], 4))

    per_day = Counter(instant.date() for instant in instants)
    assert sorted(per_day.values()) == [PAINT_CODES[4]] * 3


def test_level_zero_keeps_offsets() -> None:
    assert expand(["2021-01-01", "3"], 0) == ["3"]
