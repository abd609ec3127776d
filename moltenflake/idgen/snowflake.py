from __future__ import annotations

import logging
import re
from typing import Callable, ClassVar, Final, Optional, Union

from moltenflake.errors import InvalidSnowflake, InvalidTimestamp
from moltenflake.idgen.clock import TimestampLike, now_ms, to_epoch_ms
from moltenflake.idgen.counter import IncrementCounter
from moltenflake.idgen.layout import DEFAULT_LAYOUT, SnowflakeLayout
from moltenflake.models.snowflake import DeconstructedSnowflake

log = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]+")

SnowflakeLike = Union[str, int]


class SnowflakeCodec:
    """
    Snowflake generator and parser.

    Notes:
    - IDs are returned as *strings* so consumers limited to 53-bit safe
      integers (JSON, JS) keep full precision.
    - The increment wraps 4095 -> 0 without waiting for the next millisecond.
    - Timestamps before the epoch, or too far after it to fit the 42-bit
      timestamp field, are rejected with InvalidTimestamp.
    """

    EPOCH: ClassVar[int] = 1_420_070_400_000  # 2015-01-01T00:00:00.000Z

    _layout: Final[SnowflakeLayout] = DEFAULT_LAYOUT

    def __init__(
        self,
        worker_id: int = 1,
        process_id: int = 0,
        *,
        epoch_ms: Optional[int] = None,
        counter: Optional[IncrementCounter] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        if worker_id < 0 or worker_id > self._layout.max_worker_id:
            raise ValueError(f"worker_id must be in [0, {self._layout.max_worker_id}]")
        if process_id < 0 or process_id > self._layout.max_process_id:
            raise ValueError(f"process_id must be in [0, {self._layout.max_process_id}]")

        epoch = self.EPOCH if epoch_ms is None else int(epoch_ms)
        if epoch < 0:
            raise ValueError("epoch_ms must be >= 0")

        if counter is not None and counter.max_value != self._layout.max_increment:
            raise ValueError(f"counter must wrap at {self._layout.max_increment}")

        self._worker_id = int(worker_id)
        self._process_id = int(process_id)
        self._epoch_ms = epoch
        self._counter = counter if counter is not None else IncrementCounter(self._layout.max_increment)
        self._clock = clock or now_ms

        log.debug(
            "snowflake codec ready worker_id=%d process_id=%d epoch_ms=%d",
            self._worker_id,
            self._process_id,
            self._epoch_ms,
        )

    @property
    def worker_id(self) -> int:
        return self._worker_id

    @property
    def process_id(self) -> int:
        return self._process_id

    @property
    def epoch_ms(self) -> int:
        return self._epoch_ms

    @property
    def counter(self) -> IncrementCounter:
        return self._counter

    @property
    def layout(self) -> SnowflakeLayout:
        return self._layout

    # ---------- generate ----------
    def generate(self, timestamp: Optional[TimestampLike] = None) -> str:
        """
        Mint a snowflake for `timestamp` (default: now).

        `timestamp` is ms since the Unix epoch (any finite real number) or a
        datetime. Input is validated before the counter advances.
        """
        ms = self._clock() if timestamp is None else to_epoch_ms(timestamp)

        relative = ms - self._epoch_ms
        if relative < 0:
            log.debug("rejected pre-epoch timestamp %d", ms)
            raise InvalidTimestamp(value=timestamp, message=f"Invalid timestamp: before epoch {self._epoch_ms}")
        if relative > self._layout.max_timestamp:
            log.debug("rejected timestamp %d beyond the %d-bit range", ms, self._layout.timestamp_bits)
            raise InvalidTimestamp(
                value=timestamp,
                message=f"Invalid timestamp: does not fit in {self._layout.timestamp_bits} bits after epoch",
            )

        value = self._layout.compose(
            relative_ms=relative,
            worker_id=self._worker_id,
            process_id=self._process_id,
            increment=self._counter.next(),
        )
        return str(value)

    # ---------- parse ----------
    def deconstruct(self, snowflake: SnowflakeLike) -> DeconstructedSnowflake:
        value = self._parse(snowflake)
        lay = self._layout
        return DeconstructedSnowflake(
            timestamp=(value >> lay.timestamp_shift) + self._epoch_ms,
            worker_id=(value >> lay.worker_shift) & lay.max_worker_id,
            process_id=(value >> lay.process_shift) & lay.max_process_id,
            increment=value & lay.max_increment,
            binary=format(value, "b").zfill(lay.total_bits),
        )

    def get_timestamp(self, snowflake: SnowflakeLike) -> int:
        return (self._parse(snowflake) >> self._layout.timestamp_shift) + self._epoch_ms

    def calculate_duration(self, a: SnowflakeLike, b: SnowflakeLike) -> int:
        """Absolute distance in ms between the timestamps of two snowflakes."""
        return abs(self.get_timestamp(a) - self.get_timestamp(b))

    def _parse(self, snowflake: SnowflakeLike) -> int:
        if isinstance(snowflake, bool):
            raise InvalidSnowflake(value=snowflake, message="Invalid snowflake: expected a decimal string")

        if isinstance(snowflake, int):
            value = snowflake
        elif isinstance(snowflake, str):
            text = snowflake.strip()
            # int() alone would also accept "+1", "1_000" and non-ASCII digits
            if _DIGITS.fullmatch(text) is None:
                raise InvalidSnowflake(value=snowflake, message="Invalid snowflake: expected a decimal string")
            try:
                value = int(text)
            except ValueError as e:
                # exceeds the interpreter's int digit limit
                raise InvalidSnowflake(value=snowflake, message="Invalid snowflake: too many digits") from e
        else:
            raise InvalidSnowflake(
                value=snowflake,
                message=f"Invalid snowflake: expected a decimal string but received {type(snowflake).__name__}",
            )

        if value < 0 or value > self._layout.max_value:
            raise InvalidSnowflake(
                value=snowflake,
                message=f"Invalid snowflake: outside the unsigned {self._layout.total_bits}-bit range",
            )
        return value
