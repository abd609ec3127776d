# tests/test_logging_setup.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path

import pytest

from moltenflake.logging_context import log_context, new_corr_id, node_label
from moltenflake.logging_setup import setup_logging


@contextmanager
def isolated_root_logger():
    # setup_logging 会清空 root handlers，测试结束后还原（包括 pytest 自己的 handler）
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)


def test_file_logging_with_context(tmp_path: Path) -> None:
    with isolated_root_logger():
        rt = setup_logging(log_dir=tmp_path / "logs", level="DEBUG")
        log = logging.getLogger("moltenflake.test")
        try:
            with log_context(corr_id="abc123", node=node_label(1, 0), action="mint"):
                log.info("hello info")
                log.debug("hello debug")
                log.error("hello error")
                log.info("overridden", extra={"action": "boot"})
            log.info("outside")
        finally:
            rt.stop()

    app = (tmp_path / "logs" / "app.log").read_text(encoding="utf-8")
    err = (tmp_path / "logs" / "error.log").read_text(encoding="utf-8")

    assert "logging initialized" in app
    assert "corr=abc123 node=w1.p0 action=mint - hello info" in app
    assert "action=boot - overridden" in app
    assert "corr=- node=- action=- - outside" in app
    # app.log 只收 INFO 及以上
    assert "hello debug" not in app
    assert "hello error" in err
    assert "hello info" not in err


def test_console_only(capsys: pytest.CaptureFixture[str]) -> None:
    with isolated_root_logger():
        rt = setup_logging(console=True, level="INFO")
        logging.getLogger("moltenflake.test").warning("to stderr")
        rt.stop()
    assert "to stderr" in capsys.readouterr().err


def test_log_context_restores_previous_values() -> None:
    from moltenflake.logging_context import action_var, corr_id_var

    with log_context(corr_id="outer"):
        with log_context(corr_id="inner", action="x"):
            assert corr_id_var.get() == "inner"
            assert action_var.get() == "x"
        assert corr_id_var.get() == "outer"
        assert action_var.get() == "-"
    assert corr_id_var.get() == "-"


def test_new_corr_id_shape() -> None:
    cid = new_corr_id()
    assert len(cid) == 12
    assert cid != new_corr_id()
