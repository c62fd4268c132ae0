"""Shared test helpers."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import pytest


class TimerSpy:
    """Record every ``call_later`` handle scheduled on a running loop.

    Lets tests assert that a wait left no pending timer behind.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self.loop = loop
        self.handles: list[asyncio.TimerHandle] = []
        self._call_later = loop.call_later

    def install(self, monkeypatch: pytest.MonkeyPatch) -> TimerSpy:
        monkeypatch.setattr(self.loop, "call_later", self._record)
        return self

    def _record(
        self,
        delay: float,
        callback: Callable[..., object],
        *args: object,
        **kwargs: object,
    ) -> asyncio.TimerHandle:
        handle = self._call_later(delay, callback, *args, **kwargs)
        self.handles.append(handle)
        return handle

    def pending(self) -> list[asyncio.TimerHandle]:
        now = self.loop.time()
        return [h for h in self.handles if not h.cancelled() and h.when() > now]


def spy_timers(monkeypatch: pytest.MonkeyPatch) -> TimerSpy:
    return TimerSpy(asyncio.get_running_loop()).install(monkeypatch)


class Stopwatch:
    def __init__(self) -> None:
        self._loop = asyncio.get_running_loop()
        self._start = self._loop.time()

    @property
    def elapsed(self) -> float:
        return self._loop.time() - self._start
