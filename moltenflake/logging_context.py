# moltenflake/logging_context.py
from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional
from uuid import uuid4

corr_id_var: ContextVar[str] = ContextVar("corr_id", default="-")
node_var: ContextVar[str] = ContextVar("node", default="-")
action_var: ContextVar[str] = ContextVar("action", default="-")


def new_corr_id() -> str:
    return uuid4().hex[:12]


def node_label(worker_id: int, process_id: int) -> str:
    return f"w{int(worker_id)}.p{int(process_id)}"


@contextmanager
def log_context(
    *,
    corr_id: Optional[str] = None,
    node: Optional[str] = None,
    action: Optional[str] = None,
) -> Iterator[None]:
    tokens = []
    try:
        if corr_id is not None:
            tokens.append((corr_id_var, corr_id_var.set(corr_id)))
        if node is not None:
            tokens.append((node_var, node_var.set(node)))
        if action is not None:
            tokens.append((action_var, action_var.set(action)))
        yield
    finally:
        for var, tok in reversed(tokens):
            var.reset(tok)
