from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SnowflakeLayout:
    """
    Bit layout of a snowflake (LSB first):
      - increment:  12 bits @ 0
      - process_id:  5 bits @ 12
      - worker_id:   5 bits @ 17
      - timestamp:  42 bits @ 22 (ms since custom epoch)
    Total: 64 bits, unsigned.
    """
    increment_bits: int = 12
    process_bits: int = 5
    worker_bits: int = 5
    total_bits: int = 64

    @property
    def timestamp_bits(self) -> int:
        return self.total_bits - self.timestamp_shift

    @property
    def max_increment(self) -> int:
        return (1 << self.increment_bits) - 1

    @property
    def max_process_id(self) -> int:
        return (1 << self.process_bits) - 1

    @property
    def max_worker_id(self) -> int:
        return (1 << self.worker_bits) - 1

    @property
    def max_timestamp(self) -> int:
        return (1 << self.timestamp_bits) - 1

    @property
    def max_value(self) -> int:
        return (1 << self.total_bits) - 1

    @property
    def process_shift(self) -> int:
        return self.increment_bits

    @property
    def worker_shift(self) -> int:
        return self.increment_bits + self.process_bits

    @property
    def timestamp_shift(self) -> int:
        return self.increment_bits + self.process_bits + self.worker_bits

    def compose(self, *, relative_ms: int, worker_id: int, process_id: int, increment: int) -> int:
        return (
            (relative_ms << self.timestamp_shift)
            | ((worker_id & self.max_worker_id) << self.worker_shift)
            | ((process_id & self.max_process_id) << self.process_shift)
            | (increment & self.max_increment)
        )


DEFAULT_LAYOUT = SnowflakeLayout()
