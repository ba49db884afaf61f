from __future__ import annotations

import datetime as dt
import logging
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
CODE = ROOT / "code"
if str(CODE) not in sys.path:
    sys.path.insert(0, str(CODE))


@pytest.fixture
def fixed_now() -> dt.datetime:
    return dt.datetime(2024, 1, 10, 12, 30)


@pytest.fixture
def frozen_clock(monkeypatch, fixed_now):
    from utils import date_functions

    monkeypatch.setattr(date_functions, "get_now", lambda now=None: fixed_now)
    return fixed_now


@pytest.fixture
def tmp_log_path(monkeypatch, tmp_path):
    from managers import paths

    log_path = tmp_path / "logs" / "task.log"
    monkeypatch.setattr(paths, "get_log_path", lambda task: log_path)
    return log_path


@pytest.fixture(autouse=True)
def reset_task_loggers():
    yield
    for name in ("tasks", "utils"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
