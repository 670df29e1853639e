"""Terminal capabilities, resolved once per session."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict


class TerminalInfo(BaseModel):
    """What the titlebar sink may assume about the console."""

    model_config = ConfigDict(frozen=True)

    xterm: bool = False
    windows: bool = False

    @classmethod
    def detect(
        cls,
        environ: Mapping[str, str] | None = None,
        platform: str | None = None,
    ) -> TerminalInfo:
        """Inspect ``TERM`` and the platform.

        Terminal.app reports ``xterm-256color``, so any ``TERM`` starting
        with ``xterm`` counts.
        """
        env = os.environ if environ is None else environ
        plat = sys.platform if platform is None else platform
        return cls(
            xterm=env.get("TERM", "").startswith("xterm"),
            windows=plat == "win32",
        )
