"""Deterministic replay of recorded snapshots through the display driver."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from pathlib import Path

from pydantic import ValidationError

from buildeta.core.driver import progress_display_tester
from buildeta.core.message import DEFAULT_GUESS_DECAY, DEFAULT_WORK_DECAY
from buildeta.models.progress import Progress


class ReplayFormatError(ValueError):
    """Raised when a replay file line is not a valid ``Progress`` record."""

    def __init__(self, line_number: int, reason: str) -> None:
        self.line_number = line_number
        super().__init__(f"line {line_number}: {reason}")


def read_snapshots(path: Path) -> list[Progress]:
    """Read a JSON-lines file of ``Progress`` records.  Blank lines are skipped."""
    return list(parse_snapshots(path.read_text(encoding="utf-8").splitlines()))


def parse_snapshots(lines: Iterable[str]) -> Iterator[Progress]:
    for number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            yield Progress.model_validate_json(line)
        except ValidationError as exc:
            raise ReplayFormatError(number, str(exc)) from exc


def replay(
    sample: float,
    snapshots: Iterable[Progress],
    *,
    guess_decay: float = DEFAULT_GUESS_DECAY,
    work_decay: float = DEFAULT_WORK_DECAY,
) -> list[str]:
    """Every line the driver would show for ``snapshots``, one tick each.

    Includes the ``"Starting..."`` and ``"Finished"`` bookends.
    """
    pending = list(snapshots)
    shown: list[str] = []
    stop = threading.Event()
    if not pending:
        stop.set()

    def _next() -> Progress:
        snapshot = pending.pop(0)
        if not pending:
            stop.set()
        return snapshot

    progress_display_tester(
        sample, shown.append, _next, stop,
        guess_decay=guess_decay, work_decay=work_decay,
    )
    return shown
