"""Contribution-calendar intensity levels.

The counts are upper thresholds for each shade. The calendar scales colours
relative to the busiest day, so a level may render brighter than requested.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from ..errors import FormatError
from .timestamps import CALENDAR_DATE_PATTERN

PAINT_CODES: Dict[int, int] = {
    0: 0,  # no contribution
    1: 1,  # #0e4429
    2: 11,  # #006d32
    3: 21,  # #26a641
    4: 31,  # #39d353
}


def parse_level(value: object) -> int:
    try:
        level = int(str(value))
    except ValueError:
        level = -1
    if level not in PAINT_CODES:
        raise FormatError(
            f"Invalid paint level '{value}', expected one of {sorted(PAINT_CODES)}"
        )
    return level


def draw_date(date: str, level: int) -> List[str]:
    """Return the tokens that paint ``date`` at ``level``.

    The date is followed by zero offsets, each of which adds one more commit a
    minute after the previous one.
    """
    count = PAINT_CODES[parse_level(level)]
    if not count:
        return []
    return [date] + ["0"] * (count - 1)


def expand(tokens: Iterable[str], level: int) -> List[str]:
    """Paint every day reached by ``tokens`` at ``level``.

    Absolute dates and non-zero offsets each open a new day and are followed by
    zero offsets up to the level's commit count. Zero offsets already add to the
    current day and are kept as they are. With level 0 the dates disappear and
    offsets are left as they are.
    """
    count = PAINT_CODES[parse_level(level)]
    expanded: List[str] = []
    for token in tokens:
        text = str(token).strip()
        if CALENDAR_DATE_PATTERN.match(text):
            expanded.extend(draw_date(text, level))
        elif text.isascii() and text.isdigit() and int(text) and count:
            expanded.extend([text] + ["0"] * (count - 1))
        else:
            expanded.append(text)
    return expanded
