# tests/conftest.py
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# 项目根目录 = tests 上一层目录
ROOT = Path(__file__).resolve().parents[1]

# 确保项目根在 sys.path 中，方便 `import moltenflake` 等绝对导入
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from moltenflake import SnowflakeCodec, reset_default_codec  # noqa: E402

# 固定时钟：epoch 之后 1 秒
FIXED_NOW_MS = SnowflakeCodec.EPOCH + 1000


@pytest.fixture
def codec() -> SnowflakeCodec:
    return SnowflakeCodec(worker_id=1, process_id=0, clock=lambda: FIXED_NOW_MS)


@pytest.fixture
def fresh_default_codec():
    reset_default_codec()
    yield
    reset_default_codec()
