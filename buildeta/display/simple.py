"""The ready-made display: titlebar plus ``shake-progress``."""

from __future__ import annotations

import threading
from collections.abc import Iterable
from typing import TYPE_CHECKING

from buildeta.config import ProgressSettings, settings as default_settings
from buildeta.core.driver import ProgressSource, progress_display
from buildeta.display.dispatcher import DisplayDispatcher
from buildeta.display.program import ProgramSink
from buildeta.display.terminal import TerminalInfo
from buildeta.display.titlebar import TitlebarSink

if TYPE_CHECKING:
    from buildeta.display import DisplaySink


def simple_dispatcher(
    config: ProgressSettings | None = None,
    *,
    terminal: TerminalInfo | None = None,
    extra_sinks: Iterable[DisplaySink] = (),
) -> DisplayDispatcher:
    """Build the default sink set described by ``config``."""
    cfg = config or default_settings
    dispatcher = DisplayDispatcher()
    if cfg.titlebar:
        dispatcher.register_sink(
            TitlebarSink(terminal if terminal is not None else TerminalInfo.detect())
        )
    if cfg.program:
        dispatcher.register_sink(ProgramSink.discover(cfg.program_name))
    for sink in extra_sinks:
        dispatcher.register_sink(sink)
    return dispatcher


def progress_simple(
    progress: ProgressSource,
    stop: threading.Event,
    *,
    config: ProgressSettings | None = None,
) -> None:
    """Show progress in the titlebar and any ``shake-progress`` helper.

    Samples every ``sample_interval`` seconds (5 by default) until ``stop``
    is set.
    """
    cfg = config or default_settings
    progress_display(
        cfg.sample_interval,
        simple_dispatcher(cfg),
        progress,
        stop,
        guess_decay=cfg.guess_decay,
        work_decay=cfg.work_decay,
    )
