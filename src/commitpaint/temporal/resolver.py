"""Turn date and relative-offset tokens into an ordered list of commit instants.

Tokens are folded left to right. Each step sees an immutable
:class:`ResolverState` holding two values:

``previous_instant``
    The instant produced by the previous token, minute nudges included.
``previous_date``
    The last calendar date reached by an absolute date or a non-zero offset.
    Relative offsets always measure from here so chained offsets never
    accumulate minute nudges.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ..errors import FormatError, RangeError, ResolverInvariantError, SequencingError
from ..flags import describe_flag
from .timestamps import CALENDAR_DATE_PATTERN, canonicalize, parse_calendar_date

OFFSET_PATTERN = re.compile(r"^\d+$")
SIGNED_OFFSET_PATTERN = re.compile(r"^[+-]\d+$")


class Direction(Enum):
    FORWARD = 1
    BACKWARD = -1

    @classmethod
    def from_flag(cls, value: Optional[str]) -> "Direction":
        """Map the ``--direction`` flag value (``+`` or ``-``) to a direction."""
        if value in (None, "", "+"):
            return cls.FORWARD
        if value == "-":
            return cls.BACKWARD
        raise FormatError(
            'Invalid direction flag. The direction flag must be either "+" or "-".\n'
            + describe_flag("direction")
        )


@dataclass(frozen=True, slots=True)
class AbsoluteDate:
    raw: str
    value: datetime


@dataclass(frozen=True, slots=True)
class RelativeOffset:
    raw: str
    days: int


Token = Union[AbsoluteDate, RelativeOffset]


@dataclass(frozen=True, slots=True)
class ResolverState:
    previous_instant: Optional[datetime] = None
    previous_date: Optional[datetime] = None


def parse_token(raw: object) -> Token:
    """Classify one raw command line item.

    Raises
    ------
    FormatError:
        If the item is neither ``YYYY-MM-DD`` nor a non-negative integer. A
        signed integer gets a pointer to the ``--direction`` flag.
    """
    text = str(raw).strip()
    if OFFSET_PATTERN.match(text):
        return RelativeOffset(raw=text, days=int(text))
    if CALENDAR_DATE_PATTERN.match(text):
        return AbsoluteDate(raw=text, value=parse_calendar_date(text))

    message = (
        f"Invalid input '{text}'. Expected a date string in the format YYYY-MM-DD "
        "or a relative day number."
    )
    if SIGNED_OFFSET_PATTERN.match(text):
        message += (
            " If you meant to use relative numbers, please specify the direction using "
            "the appropriate flag, rather than including the sign in the number itself."
        )
    raise FormatError(message + "\n" + describe_flag("direction"))


def _shift(instant: datetime, token: Token, **delta: int) -> datetime:
    try:
        return instant + timedelta(**delta)
    except OverflowError as e:
        raise RangeError(f"Token '{token.raw}' moves the date out of range: {e}") from e


def step(
    state: ResolverState, token: Token, direction: Direction
) -> Tuple[ResolverState, datetime]:
    """Resolve a single token against ``state``.

    Returns the next state together with the resolved (not yet canonical)
    instant.
    """
    previous_instant = state.previous_instant
    previous_date = state.previous_date

    if isinstance(token, RelativeOffset):
        if previous_instant is None:
            raise SequencingError(
                f"Relative date adjustment '{token.raw}' is used before any date has been provided."
            )
        delta = token.days * direction.value
        if delta == 0:
            result = _shift(previous_instant, token, minutes=1)
        else:
            if previous_date is None:
                raise ResolverInvariantError(
                    "Previous calendar date is empty while a previous instant exists."
                )
            result = _shift(previous_date, token, days=delta)
            previous_date = result
    elif isinstance(token, AbsoluteDate):
        parsed = token.value
        if parsed == previous_instant:
            result = _shift(parsed, token, minutes=1)
        elif parsed == previous_date:
            # [D, 0, D]: D + 1min is taken by the zero offset
            result = _shift(previous_instant, token, minutes=1)
        else:
            result = parsed
            previous_date = result
    else:
        raise FormatError(f"Unsupported token: {token!r}")

    return ResolverState(previous_instant=result, previous_date=previous_date), result


def resolve_local(
    tokens: Iterable[Union[str, int, Token]], direction: Direction = Direction.FORWARD
) -> List[datetime]:
    """Resolve ``tokens`` into naive local instants without canonicalizing them."""
    state = ResolverState()
    instants: List[datetime] = []
    for item in tokens:
        token = item if isinstance(item, (AbsoluteDate, RelativeOffset)) else parse_token(item)
        state, instant = step(state, token, direction)
        instants.append(instant)
    return instants


def resolve(
    tokens: Sequence[Union[str, int, Token]], direction: Direction = Direction.FORWARD
) -> List[datetime]:
    """Resolve ``tokens`` into the canonical UTC instants handed to git.

    Parameters
    ----------
    tokens:
        Absolute dates (``YYYY-MM-DD``) and non-negative day offsets, in order.
    direction:
        Sign applied to every relative offset.

    Returns
    -------
    One timezone-aware instant per token, in input order.
    """
    return [canonicalize(instant) for instant in resolve_local(tokens, direction)]
