"""Logging setup with per-wait correlation context.

Each ``wait_for_true`` call runs inside a ``wait_scope`` so every record it
emits can be tied back to one invocation, even when many waits interleave on
the same event loop.
"""

from __future__ import annotations

import contextvars
import json
import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, datetime


@dataclass(frozen=True, slots=True)
class WaitContext:
    """Identifiers attached to log records emitted during a wait."""

    wait_id: str | None = None
    label: str | None = None


_EMPTY_CONTEXT = WaitContext()
_WAIT_CONTEXT: contextvars.ContextVar[WaitContext | None] = contextvars.ContextVar(
    "waitfortrue_wait_context",
    default=None,
)


def get_wait_context() -> WaitContext:
    """Return the wait context of the current task, or an empty one."""

    context = _WAIT_CONTEXT.get()
    if context is None:
        return _EMPTY_CONTEXT
    return context


def new_wait_id() -> str:
    return uuid.uuid4().hex[:12]


class WaitContextFilter(logging.Filter):
    """Inject ``wait_id`` and ``wait_label`` into every ``LogRecord``."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = get_wait_context()
        record.wait_id = context.wait_id
        record.wait_label = context.label
        return True


class _JsonFormatter(logging.Formatter):
    """Render logs as compact JSON for machine-readable ingestion."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object | None] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "wait_id": getattr(record, "wait_id", None),
            "wait_label": getattr(record, "wait_label", None),
        }
        if record.exc_info is not None:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def setup_logging(level: int | str = logging.INFO, json_output: bool = False) -> None:
    """Configure root logging once with wait-aware handlers."""

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.filters.clear()

    handler = logging.StreamHandler(stream=sys.stdout)
    if json_output:
        formatter: logging.Formatter = _JsonFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s "
            "wait_id=%(wait_id)s wait_label=%(wait_label)s "
            "%(message)s",
        )
    handler.setFormatter(formatter)

    context_filter = WaitContextFilter()
    handler.addFilter(context_filter)
    root_logger.addFilter(context_filter)
    root_logger.addHandler(handler)


@contextmanager
def wait_scope(*, wait_id: str | None = None, label: str | None = None) -> Iterator[WaitContext]:
    """Apply a wait context to the current task for the duration of the block.

    A missing ``wait_id`` gets a fresh one. A missing ``label`` is inherited
    from an enclosing scope.
    """

    current = get_wait_context()
    updated = WaitContext(
        wait_id=new_wait_id() if wait_id is None else wait_id,
        label=current.label if label is None else label,
    )
    token: contextvars.Token[WaitContext | None] = _WAIT_CONTEXT.set(updated)
    try:
        yield updated
    finally:
        _WAIT_CONTEXT.reset(token)


__all__ = [
    "WaitContext",
    "WaitContextFilter",
    "get_wait_context",
    "new_wait_id",
    "setup_logging",
    "wait_scope",
]
