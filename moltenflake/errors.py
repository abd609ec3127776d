from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(eq=False)
class SnowflakeError(Exception):
    value: Any
    message: str

    def __str__(self) -> str:
        return f"{self.message} (got {self.value!r})"


class InvalidTimestamp(SnowflakeError, TypeError):
    """generate() was given something that is not a usable timestamp."""


class InvalidSnowflake(SnowflakeError, TypeError):
    """The value is not a decimal string of an unsigned 64-bit integer."""
