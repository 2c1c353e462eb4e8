"""Date handling: timestamp helpers, token resolution and paint levels."""

from .paint import PAINT_CODES, draw_date, expand
from .resolver import (
    AbsoluteDate,
    Direction,
    RelativeOffset,
    ResolverState,
    parse_token,
    resolve,
    resolve_local,
)
from .timestamps import (
    canonicalize,
    far_future_sentinel,
    format_milliseconds,
    parse_calendar_date,
    stringify,
    year_window,
)

__all__ = [
    "PAINT_CODES",
    "draw_date",
    "expand",
    "AbsoluteDate",
    "Direction",
    "RelativeOffset",
    "ResolverState",
    "parse_token",
    "resolve",
    "resolve_local",
    "canonicalize",
    "far_future_sentinel",
    "format_milliseconds",
    "parse_calendar_date",
    "stringify",
    "year_window",
]
