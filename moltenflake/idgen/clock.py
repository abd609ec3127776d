from __future__ import annotations

import math
import numbers
import time
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Union

from moltenflake.errors import InvalidTimestamp

TimestampLike = Union[numbers.Real, Decimal, datetime]

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


def now_ms() -> int:
    return time.time_ns() // 1_000_000


def to_epoch_ms(value: TimestampLike) -> int:
    """
    Normalise a timestamp to integer milliseconds since the Unix epoch.

    - int: taken as milliseconds.
    - other real numbers (float, Decimal, Fraction, numpy scalars): milliseconds,
      floored; NaN / inf are rejected.
    - datetime: naive values are read as UTC.

    bool and str are rejected even though bool is an int subclass.
    """
    if isinstance(value, bool):
        raise InvalidTimestamp(value=value, message="Invalid timestamp: expected number or datetime but received bool")

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        delta = value - _UNIX_EPOCH
        # exact integer ms, no float round trip
        return delta // _ONE_MS

    if isinstance(value, int):
        return int(value)

    # Decimal is not registered as numbers.Real
    if isinstance(value, (numbers.Real, Decimal)):
        try:
            finite = math.isfinite(float(value))
        except (ValueError, OverflowError):
            # signalling Decimal NaN, or beyond float range
            finite = False
        if not finite:
            raise InvalidTimestamp(value=value, message="Invalid timestamp: expected a finite number")
        return int(math.floor(value))

    raise InvalidTimestamp(
        value=value,
        message=f"Invalid timestamp: expected number or datetime but received {type(value).__name__}",
    )


def from_epoch_ms(ms: int) -> datetime:
    """UTC-aware datetime for a millisecond Unix timestamp."""
    return _UNIX_EPOCH + int(ms) * _ONE_MS
