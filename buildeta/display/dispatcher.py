"""DisplayDispatcher — fans each status line out to every registered sink.

A failing sink is logged and skipped; the remaining sinks still receive
the line and the driver never sees the error.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from buildeta.display import DisplaySink

logger = logging.getLogger(__name__)


class DisplayDispatcher:
    """Routes status lines to ALL registered sinks.

    The dispatcher is itself a one-argument callable, so it plugs straight
    into ``progress_display``.

    Usage
    -----
    >>> dispatcher = DisplayDispatcher([TitlebarSink(), ProgramSink.discover()])
    >>> progress_display(5.0, dispatcher, engine.snapshot, stop)
    """

    def __init__(self, sinks: Iterable[DisplaySink] = ()) -> None:
        self._sinks: list[DisplaySink] = []
        for sink in sinks:
            self.register_sink(sink)

    # ------------------------------------------------------------------
    # Sink management
    # ------------------------------------------------------------------

    def register_sink(self, sink: DisplaySink) -> None:
        """Register a sink.  Sinks are called in registration order.

        Registering the same sink instance twice is ignored.
        """
        if sink not in self._sinks:
            self._sinks.append(sink)
            logger.debug("Registered display sink: %s", sink.sink_name)

    def unregister_sink(self, sink: DisplaySink) -> None:
        """Remove a previously registered sink."""
        try:
            self._sinks.remove(sink)
            logger.debug("Unregistered display sink: %s", sink.sink_name)
        except ValueError:
            pass

    @property
    def registered_sinks(self) -> list[DisplaySink]:
        """Return a copy of the registered sink list."""
        return list(self._sinks)

    @property
    def sink_name(self) -> str:
        return "dispatcher"

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, message: str) -> list[str]:
        """Show ``message`` on every sink.

        Returns the names of the sinks that accepted it.
        """
        succeeded: list[str] = []
        for sink in self._sinks:
            try:
                sink(message)
                succeeded.append(sink.sink_name)
            except Exception as exc:  # noqa: BLE001
                logger.error(
                    "Display sink %s failed for %r: %s",
                    sink.sink_name,
                    message,
                    exc,
                )
        return succeeded

    def __call__(self, message: str) -> None:
        self.dispatch(message)
