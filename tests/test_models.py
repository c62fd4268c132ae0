"""Tests for WaitOptions validation and derived values."""

from __future__ import annotations

import asyncio

import pytest
from pydantic import ValidationError
from waitfortrue.models import DEFAULT_INTERVAL_S, WaitOptions, WaitOutcome
from waitfortrue.signal import CancellationSignal


class TestWaitOptions:
    def test_defaults(self) -> None:
        opts = WaitOptions()
        assert opts.interval == DEFAULT_INTERVAL_S == 0.05
        assert opts.timeout is None
        assert opts.signal is None
        assert opts.error is None
        assert opts.label is None

    def test_error_kept_by_identity(self) -> None:
        error = RuntimeError("custom")
        assert WaitOptions(error=error).error is error

    def test_signal_types(self) -> None:
        signal = CancellationSignal()
        event = asyncio.Event()
        assert WaitOptions(signal=signal).signal is signal
        assert WaitOptions(signal=event).signal is event

    def test_rejects_unknown_signal_type(self) -> None:
        with pytest.raises(ValidationError):
            WaitOptions(signal="stop")  # type: ignore[arg-type]

    def test_rejects_non_exception_error(self) -> None:
        with pytest.raises(ValidationError):
            WaitOptions(error="boom")  # type: ignore[arg-type]

    @pytest.mark.parametrize("field", ["interval", "timeout"])
    def test_rejects_negative_durations(self, field: str) -> None:
        with pytest.raises(ValidationError):
            WaitOptions.model_validate({field: -0.01})

    def test_frozen(self) -> None:
        opts = WaitOptions()
        with pytest.raises(ValidationError):
            opts.interval = 1.0  # type: ignore[misc]


class TestEffectiveInterval:
    def test_without_timeout(self) -> None:
        assert WaitOptions(interval=0.2).effective_interval == 0.2

    def test_clamped_by_shorter_timeout(self) -> None:
        assert WaitOptions(interval=0.2, timeout=0.05).effective_interval == 0.05

    def test_longer_timeout_leaves_interval(self) -> None:
        assert WaitOptions(interval=0.2, timeout=5.0).effective_interval == 0.2

    def test_zero_timeout_means_unbounded(self) -> None:
        assert WaitOptions(interval=0.2, timeout=0).effective_interval == 0.2


def test_outcome_values() -> None:
    assert {o.value for o in WaitOutcome} == {"satisfied", "cancelled", "failed"}
