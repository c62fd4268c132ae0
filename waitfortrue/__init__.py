"""Poll a condition until it holds, times out, or is cancelled."""

from waitfortrue.config import WaitSettings, load_config
from waitfortrue.logging import setup_logging
from waitfortrue.models import WaitOptions, WaitOutcome
from waitfortrue.poller import wait_for_true
from waitfortrue.signal import CancellationSignal

__all__ = [
    "CancellationSignal",
    "WaitOptions",
    "WaitOutcome",
    "WaitSettings",
    "load_config",
    "setup_logging",
    "wait_for_true",
]
