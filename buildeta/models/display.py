"""Display driver and helper-program state models."""

from __future__ import annotations

from enum import Enum


class DisplayState(str, Enum):
    """Lifecycle of one progress-reporting session.

    STARTING -> RUNNING -> FINISHED.  FINISHED is reached only through the
    stop token; the loop has no other exit.
    """

    STARTING = "starting"
    RUNNING = "running"
    FINISHED = "finished"


class ProgramState(str, Enum):
    """``--state`` values understood by the ``shake-progress`` helper."""

    NO_PROGRESS = "NoProgress"
    NORMAL = "Normal"
    ERROR = "Error"


STARTING_MESSAGE = "Starting..."
FINISHED_MESSAGE = "Finished"
FAILURE_MARKER = "Failure!"
