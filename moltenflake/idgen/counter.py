from __future__ import annotations

import logging
import threading

log = logging.getLogger(__name__)


class IncrementCounter:
    """
    Per-codec sequence counter.

    next() hands out 0, 1, ..., max_value and then starts again at 0.
    It never waits for the next millisecond; callers minting more than
    max_value + 1 ids in the same millisecond will see repeats.

    The read-check-reset-increment sequence runs under a lock, so concurrent
    generate() calls never receive the same value inside one cycle.
    """

    def __init__(self, max_value: int = 0xFFF, *, start: int = 0) -> None:
        if max_value < 0:
            raise ValueError("max_value must be >= 0")
        self._max = int(max_value)
        self._lock = threading.Lock()
        self._value = 0
        self.reset(start)

    @property
    def max_value(self) -> int:
        return self._max

    @property
    def value(self) -> int:
        """The value the next call to next() will return."""
        with self._lock:
            return self._value

    def next(self) -> int:
        with self._lock:
            current = self._value
            wrapped = current >= self._max
            self._value = 0 if wrapped else current + 1
        if wrapped:
            log.debug("increment counter wrapped after %d", current)
        return current

    def reset(self, value: int = 0) -> None:
        if value < 0 or value > self._max:
            raise ValueError(f"counter value must be in [0, {self._max}]")
        with self._lock:
            self._value = int(value)
