from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from waitfortrue.signal import CancellationSignal

DEFAULT_INTERVAL_S = 0.05

Condition = Callable[[], bool | Awaitable[bool]]
ExternalSignal = CancellationSignal | asyncio.Event


class WaitOutcome(StrEnum):
    satisfied = "satisfied"
    cancelled = "cancelled"
    failed = "failed"


class WaitOptions(BaseModel):
    """Per-call configuration for ``wait_for_true``.

    ``timeout`` of ``None`` or ``0`` means the wait is unbounded. ``error`` is
    kept by identity so callers can match the exact object they passed in.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    interval: float = Field(default=DEFAULT_INTERVAL_S, ge=0)
    timeout: float | None = Field(default=None, ge=0)
    signal: ExternalSignal | None = None
    error: BaseException | None = None
    label: str | None = None

    @property
    def effective_interval(self) -> float:
        """Delay between checks, clamped so a short timeout is not overslept."""
        if self.timeout:
            return min(self.interval, self.timeout)
        return self.interval


__all__ = [
    "Condition",
    "DEFAULT_INTERVAL_S",
    "ExternalSignal",
    "WaitOptions",
    "WaitOutcome",
]
