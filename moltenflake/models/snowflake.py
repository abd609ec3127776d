from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict

from moltenflake.idgen.clock import from_epoch_ms


@dataclass(frozen=True)
class DeconstructedSnowflake:
    timestamp: int  # ms since the Unix epoch
    worker_id: int
    process_id: int
    increment: int
    binary: str  # 64 chars, zero padded

    @property
    def date(self) -> datetime:
        return from_epoch_ms(self.timestamp)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": int(self.timestamp),
            "date": self.date.isoformat(),
            "worker_id": int(self.worker_id),
            "process_id": int(self.process_id),
            "increment": int(self.increment),
            "binary": self.binary,
        }
