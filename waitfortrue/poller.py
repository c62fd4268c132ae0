"""Condition poller.

``wait_for_true`` evaluates a predicate until it is truthy, a timeout fires or
an external signal is triggered. Timeout and external signal both feed a
private ``CancellationSignal``; the loop only ever looks at that token and at
the external signal itself.

Without ``timeout`` or ``signal`` the wait is unbounded: a predicate that
never turns true keeps the caller suspended forever.
"""

from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping

from waitfortrue.logging import wait_scope
from waitfortrue.models import Condition, ExternalSignal, WaitOptions, WaitOutcome
from waitfortrue.signal import CancellationSignal

logger = logging.getLogger(__name__)

_REASON_TIMEOUT = "timeout"
_REASON_SIGNAL = "signal"


def _resolve_options(
    options: WaitOptions | Mapping[str, object] | None,
    overrides: dict[str, object],
) -> WaitOptions:
    if options is None:
        base: dict[str, object] = {}
    elif isinstance(options, WaitOptions):
        if not overrides:
            return options
        base = {name: getattr(options, name) for name in WaitOptions.model_fields}
    else:
        base = dict(options)
    base.update(overrides)
    return WaitOptions.model_validate(base)


def _is_triggered(signal: ExternalSignal | None) -> bool:
    if signal is None:
        return False
    if isinstance(signal, asyncio.Event):
        return signal.is_set()
    return signal.cancelled


def _bridge_signal(
    signal: ExternalSignal, token: CancellationSignal
) -> Callable[[], Awaitable[None]]:
    """Forward ``signal`` into ``token`` and return a coroutine function that undoes it."""

    if isinstance(signal, asyncio.Event):

        async def _watch() -> None:
            await signal.wait()
            token.cancel(_REASON_SIGNAL)

        watcher = asyncio.create_task(_watch())

        async def _stop_watcher() -> None:
            watcher.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await watcher

        return _stop_watcher

    def _forward() -> None:
        token.cancel(_REASON_SIGNAL)

    signal.add_listener(_forward)

    async def _remove_listener() -> None:
        signal.remove_listener(_forward)

    return _remove_listener


async def _evaluate(condition: Condition) -> bool:
    result = condition()
    if inspect.isawaitable(result):
        result = await result
    return bool(result)


async def _delay(seconds: float, token: CancellationSignal) -> None:
    """Sleep for ``seconds`` or until ``token`` fires, whichever comes first."""
    if token.cancelled:
        return
    loop = asyncio.get_running_loop()
    waiter: asyncio.Future[None] = loop.create_future()

    def _wake() -> None:
        if not waiter.done():
            waiter.set_result(None)

    timer = loop.call_later(seconds, _wake)
    token.add_listener(_wake)
    try:
        await waiter
    finally:
        timer.cancel()
        token.remove_listener(_wake)


async def wait_for_true(
    condition: Condition,
    options: WaitOptions | Mapping[str, object] | None = None,
    **overrides: object,
) -> None:
    """Wait until ``condition()`` returns a truthy value.

    ``condition`` may return a plain value or an awaitable. Keyword arguments
    (``interval``, ``timeout``, ``signal``, ``error``, ``label``) override the
    matching fields of ``options``.

    Returns ``None`` when the condition holds, and also when a timeout or the
    external signal ends the wait and no ``error`` was configured. With an
    ``error`` configured, that exact exception is raised instead. Exceptions
    raised by the condition propagate unchanged and stop the wait at once.

    Raises:
        TypeError: ``condition`` is not callable.
        pydantic.ValidationError: the options are invalid.
    """
    if not callable(condition):
        raise TypeError("condition must be callable")

    opts = _resolve_options(options, overrides)
    loop = asyncio.get_running_loop()
    token = CancellationSignal()
    external = opts.signal

    unbridge: Callable[[], Awaitable[None]] | None = None
    timeout_handle: asyncio.TimerHandle | None = None
    delay = opts.effective_interval
    checks = 0

    with wait_scope(label=opts.label):
        logger.debug("wait started interval=%s timeout=%s", delay, opts.timeout)
        try:
            if external is not None:
                unbridge = _bridge_signal(external, token)
            if opts.timeout:
                timeout_handle = loop.call_later(opts.timeout, token.cancel, _REASON_TIMEOUT)

            while not token.cancelled and not _is_triggered(external):
                checks += 1
                try:
                    satisfied = await _evaluate(condition)
                except Exception:
                    logger.debug("wait %s after %d checks", WaitOutcome.failed, checks)
                    raise
                if satisfied:
                    logger.debug("wait %s after %d checks", WaitOutcome.satisfied, checks)
                    return
                await _delay(delay, token)

            reason = token.reason or _REASON_SIGNAL
            logger.debug("wait %s by %s after %d checks", WaitOutcome.cancelled, reason, checks)
            if opts.error is not None:
                raise opts.error
        finally:
            if timeout_handle is not None:
                timeout_handle.cancel()
            if unbridge is not None:
                await unbridge()


__all__ = ["wait_for_true"]
