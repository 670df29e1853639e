"""buildeta data models — Pydantic v2 records and state enums."""

from buildeta.models.display import (
    FAILURE_MARKER,
    FINISHED_MESSAGE,
    STARTING_MESSAGE,
    DisplayState,
    ProgramState,
)
from buildeta.models.progress import Progress

__all__ = [
    # progress
    "Progress",
    # display
    "DisplayState",
    "ProgramState",
    "STARTING_MESSAGE",
    "FINISHED_MESSAGE",
    "FAILURE_MARKER",
]
