"""Titlebar sink — shows the status line as the console window title."""

from __future__ import annotations

import ctypes
import logging
import sys
from typing import TextIO

from buildeta.display.terminal import TerminalInfo

logger = logging.getLogger(__name__)


def xterm_title(text: str) -> str:
    """The xterm set-title escape sequence for ``text``."""
    return f"\x1b]0;{text}\x07"


class TitlebarSink:
    """Sets the console title.

    xterm-compatible terminals get the escape sequence on ``stream``; a
    Windows console that is not an xterm gets ``SetConsoleTitleW``;
    anything else is left alone.

    Parameters
    ----------
    terminal:
        Capabilities resolved at session start.  Detected from the
        environment when not given.
    stream:
        Where escape sequences go.  Defaults to ``sys.stdout`` at call time.
    """

    def __init__(
        self,
        terminal: TerminalInfo | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self._terminal = terminal if terminal is not None else TerminalInfo.detect()
        self._stream = stream

    @property
    def sink_name(self) -> str:
        return "titlebar"

    @property
    def terminal(self) -> TerminalInfo:
        return self._terminal

    def __call__(self, message: str) -> None:
        if self._terminal.xterm:
            stream = self._stream if self._stream is not None else sys.stdout
            stream.write(xterm_title(message))
            stream.flush()
        elif self._terminal.windows:
            _set_console_title(message)


def _set_console_title(text: str) -> None:
    windll = getattr(ctypes, "windll", None)
    if windll is None:
        logger.debug("No console title API on this platform")
        return
    windll.kernel32.SetConsoleTitleW(text)


def progress_titlebar(text: str) -> None:
    """Set the title of the current console window once."""
    TitlebarSink()(text)
