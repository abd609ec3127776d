# moltenflake/logging_setup.py
from __future__ import annotations

import logging
import logging.handlers
import queue
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from moltenflake.logging_context import action_var, corr_id_var, node_var

LOG_FORMAT = (
    "%(asctime)s %(levelname)s "
    "[pid=%(process)d tid=%(thread)d] "
    "%(name)s:%(funcName)s:%(lineno)d "
    "corr=%(corr_id)s node=%(node)s action=%(action)s - %(message)s"
)


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        # extra={...} passed at the call site wins over the context var
        if not hasattr(record, "corr_id"):
            record.corr_id = corr_id_var.get()
        if not hasattr(record, "node"):
            record.node = node_var.get()
        if not hasattr(record, "action"):
            record.action = action_var.get()
        return True


@dataclass
class LoggingRuntime:
    listener: logging.handlers.QueueListener
    handlers: List[logging.Handler]

    def stop(self) -> None:
        self.listener.stop()
        for h in self.handlers:
            h.close()


def setup_logging(
    *,
    log_dir: Optional[Path] = None,
    level: str = "INFO",
    keep_days: int = 14,
    console: bool = False,
) -> LoggingRuntime:
    """
    Route all records through a QueueHandler on the root logger.

    A QueueListener thread owns the real handlers:
    - log_dir/app.log   (INFO+, rotated at midnight, `keep_days` backups)
    - log_dir/error.log (ERROR+)
    - stderr            (when `console` is set)
    Call LoggingRuntime.stop() on shutdown to flush the queue.
    """
    formatter = logging.Formatter(fmt=LOG_FORMAT)
    handlers: List[logging.Handler] = []

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        for name, min_level in (("app.log", logging.INFO), ("error.log", logging.ERROR)):
            fh = logging.handlers.TimedRotatingFileHandler(
                filename=str(log_dir / name),
                when="midnight",
                backupCount=int(keep_days),
                encoding="utf-8",
                utc=True,
            )
            fh.setLevel(min_level)
            handlers.append(fh)

    if console:
        ch = logging.StreamHandler(stream=sys.stderr)
        ch.setLevel(logging.DEBUG)
        handlers.append(ch)

    for h in handlers:
        h.setFormatter(formatter)
        h.addFilter(ContextFilter())

    log_q: "queue.Queue[logging.LogRecord]" = queue.Queue(maxsize=20_000)
    qh = logging.handlers.QueueHandler(log_q)
    qh.setLevel(logging.DEBUG)
    # context vars must be read on the producing thread, not the listener
    qh.addFilter(ContextFilter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(qh)

    listener = logging.handlers.QueueListener(log_q, *handlers, respect_handler_level=True)
    listener.start()

    logging.getLogger(__name__).info("logging initialized", extra={"action": "boot"})
    return LoggingRuntime(listener=listener, handlers=handlers)
