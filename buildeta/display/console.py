"""Rich console sink.

Prints each status line on its own row; the ``Failure!`` suffix is shown
in bold red and the ``Starting...`` / ``Finished`` bookends are dimmed.
"""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from buildeta.models.display import FAILURE_MARKER, FINISHED_MESSAGE, STARTING_MESSAGE


def render_status(message: str) -> Text:
    """Style one status line for the terminal."""
    if message in (STARTING_MESSAGE, FINISHED_MESSAGE):
        return Text(message, style="dim")

    head, sep, tail = message.partition(f", {FAILURE_MARKER} ")
    text = Text(head, style="bold cyan")
    if sep:
        text.append(f", {FAILURE_MARKER} ", style="bold red")
        text.append(tail, style="red")
    return text


class ConsoleSink:
    """Writes status lines to a Rich ``Console``.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    prefix:
        Optional markup shown before every line.
    """

    def __init__(self, console: Console | None = None, prefix: str = "") -> None:
        self.console = console or Console()
        self._prefix = prefix

    @property
    def sink_name(self) -> str:
        return "console"

    def __call__(self, message: str) -> None:
        line = Text.from_markup(self._prefix) if self._prefix else Text()
        line.append_text(render_status(message))
        self.console.print(line, highlight=False)
