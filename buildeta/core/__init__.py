"""buildeta core — stream engine, estimators and the display driver."""

from buildeta.core.decay import decay
from buildeta.core.driver import (
    ProgressDisplay,
    format_status,
    progress_display,
    progress_display_tester,
)
from buildeta.core.message import (
    Estimate,
    estimates,
    format_duration,
    format_percent,
    message,
    percent_complete,
)
from buildeta.core.replay import ReplayFormatError, read_snapshots, replay
from buildeta.core.signals import branch, changed, latch, position, previous_and_current
from buildeta.core.stream import Stream, apply, constant, fold, identity, lift

__all__ = [
    # stream
    "Stream",
    "constant",
    "identity",
    "apply",
    "lift",
    "fold",
    # signals
    "position",
    "previous_and_current",
    "changed",
    "branch",
    "latch",
    # estimation
    "decay",
    "Estimate",
    "estimates",
    "message",
    "format_duration",
    "format_percent",
    "percent_complete",
    # driver
    "ProgressDisplay",
    "format_status",
    "progress_display",
    "progress_display_tester",
    # replay
    "ReplayFormatError",
    "read_snapshots",
    "replay",
]
