"""Trigger-once cancellation signal.

One class serves both sides of a wait: callers hand a ``CancellationSignal``
to ``wait_for_true`` as an external stop handle, and every invocation keeps a
private one as its internal token.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

Listener = Callable[[], None]


class CancellationSignal:
    """A flag that can be triggered exactly once and notifies listeners."""

    def __init__(self) -> None:
        self._cancelled = False
        self._reason: str | None = None
        self._listeners: list[Listener] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str | None = None) -> bool:
        """Trigger the signal. Returns True only for the call that triggered it.

        Every listener runs even if an earlier one raises; the first failure
        is re-raised once all of them have been called.
        """
        if self._cancelled:
            return False
        self._cancelled = True
        self._reason = reason
        listeners, self._listeners = self._listeners, []
        first_error: Exception | None = None
        for listener in listeners:
            try:
                listener()
            except Exception as exc:
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error
        return True

    def add_listener(self, callback: Listener) -> None:
        # Registering after the fact is silent; check ``cancelled`` first.
        if self._cancelled:
            return
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        try:
            self._listeners.remove(callback)
        except ValueError:
            return

    async def wait(self) -> None:
        if self._cancelled:
            return
        waiter: asyncio.Future[None] = asyncio.get_running_loop().create_future()

        def _wake() -> None:
            if not waiter.done():
                waiter.set_result(None)

        self.add_listener(_wake)
        try:
            await waiter
        finally:
            self.remove_listener(_wake)

    def __repr__(self) -> str:
        state = f"cancelled reason={self._reason!r}" if self._cancelled else "pending"
        return f"<CancellationSignal {state}>"


__all__ = ["CancellationSignal", "Listener"]
