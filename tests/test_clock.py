# tests/test_clock.py
from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone

import pytest

from moltenflake.errors import InvalidTimestamp
from moltenflake.idgen.clock import from_epoch_ms, now_ms, to_epoch_ms


def test_now_ms_tracks_wall_clock() -> None:
    before = int(time.time() * 1000)
    value = now_ms()
    after = int(time.time() * 1000)
    assert before - 1 <= value <= after + 1


def test_to_epoch_ms_int_and_float() -> None:
    assert to_epoch_ms(1_420_070_400_000) == 1_420_070_400_000
    assert to_epoch_ms(12.9) == 12
    assert to_epoch_ms(-0.5) == -1


def test_to_epoch_ms_datetime_keeps_milliseconds() -> None:
    dt = datetime(2015, 1, 1, 0, 0, 0, 999_000, tzinfo=timezone.utc)
    assert to_epoch_ms(dt) == 1_420_070_400_999

    # 非 UTC 时区先换算
    plus8 = timezone(timedelta(hours=8))
    assert to_epoch_ms(datetime(2015, 1, 1, 8, 0, 0, tzinfo=plus8)) == 1_420_070_400_000


def test_to_epoch_ms_rejects_non_numbers() -> None:
    for bad in ("123", b"123", None, False, float("nan")):
        with pytest.raises(InvalidTimestamp):
            to_epoch_ms(bad)


def test_from_epoch_ms_is_utc() -> None:
    dt = from_epoch_ms(1_420_070_400_000)
    assert dt == datetime(2015, 1, 1, tzinfo=timezone.utc)
    assert dt.tzinfo is timezone.utc
