from __future__ import annotations

import logging
import os
from collections.abc import Iterator

import pytest


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    filters = list(root.filters)
    yield root
    root.setLevel(level)
    root.handlers[:] = handlers
    root.filters[:] = filters


@pytest.fixture(autouse=True)
def clear_wait_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("WAITFORTRUE_"):
            monkeypatch.delenv(key)
