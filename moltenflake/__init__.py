# moltenflake/__init__.py
from __future__ import annotations

"""
moltenflake

Sortable 64-bit ids (snowflakes) exchanged as decimal strings:
- idgen.snowflake: SnowflakeCodec (generate / deconstruct / get_timestamp / calculate_duration)
- idgen.counter: IncrementCounter, the per-codec 12-bit sequence

The module-level functions below share one lazily created codec
(worker 1, process 0) for callers that do not manage their own instance.
"""

import threading
from typing import Optional

from .errors import InvalidSnowflake, InvalidTimestamp, SnowflakeError
from .idgen.clock import TimestampLike
from .idgen.counter import IncrementCounter
from .idgen.layout import SnowflakeLayout
from .idgen.snowflake import SnowflakeCodec, SnowflakeLike
from .models.snowflake import DeconstructedSnowflake

EPOCH = SnowflakeCodec.EPOCH

_default_codec: Optional[SnowflakeCodec] = None
_default_lock = threading.Lock()


def default_codec() -> SnowflakeCodec:
    global _default_codec
    with _default_lock:
        if _default_codec is None:
            _default_codec = SnowflakeCodec()
        return _default_codec


def reset_default_codec() -> None:
    """Drop the shared codec; the next call creates a fresh one (counter at 0)."""
    global _default_codec
    with _default_lock:
        _default_codec = None


def generate(timestamp: Optional[TimestampLike] = None) -> str:
    return default_codec().generate(timestamp)


def deconstruct(snowflake: SnowflakeLike) -> DeconstructedSnowflake:
    return default_codec().deconstruct(snowflake)


def get_timestamp(snowflake: SnowflakeLike) -> int:
    return default_codec().get_timestamp(snowflake)


def calculate_duration(a: SnowflakeLike, b: SnowflakeLike) -> int:
    return default_codec().calculate_duration(a, b)


__all__ = [
    "EPOCH",
    "DeconstructedSnowflake",
    "IncrementCounter",
    "InvalidSnowflake",
    "InvalidTimestamp",
    "SnowflakeCodec",
    "SnowflakeError",
    "SnowflakeLayout",
    "calculate_duration",
    "deconstruct",
    "default_codec",
    "generate",
    "get_timestamp",
    "reset_default_codec",
]
