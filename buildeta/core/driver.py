"""Display driver — polls the build and pushes status lines to a sink.

The driver owns the sampling cadence.  Each cycle it waits one interval
on the stop token, fetches a snapshot, advances the message pipeline one
tick and hands the resulting line to the display callback.  Setting the
stop token is the only way out of the loop; a final ``"Finished"`` is
always emitted on that path.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from buildeta.core.message import DEFAULT_GUESS_DECAY, DEFAULT_WORK_DECAY, message
from buildeta.core.stream import Stream, identity
from buildeta.models.display import (
    FAILURE_MARKER,
    FINISHED_MESSAGE,
    STARTING_MESSAGE,
    DisplayState,
)
from buildeta.models.progress import Progress

logger = logging.getLogger(__name__)

Display = Callable[[str], None]
ProgressSource = Callable[[], Progress]


def format_status(msg: str, snapshot: Progress) -> str:
    """Append the failure suffix when the snapshot carries one."""
    if snapshot.failure is None:
        return msg
    return f"{msg}, {FAILURE_MARKER} {snapshot.failure}"


def _run_display(
    sample: float,
    display: Display,
    progress: ProgressSource,
    stop: threading.Event,
    *,
    sleep: bool,
    guess_decay: float,
    work_decay: float,
    on_state: Callable[[DisplayState], None] | None = None,
) -> None:
    def _enter(state: DisplayState) -> None:
        if on_state is not None:
            on_state(state)

    _enter(DisplayState.STARTING)
    display(STARTING_MESSAGE)  # no useful information at this stage
    _enter(DisplayState.RUNNING)

    stream: Stream[Progress, str] = message(
        sample, identity(), guess_decay=guess_decay, work_decay=work_decay
    )
    ticks = 0
    try:
        while True:
            if sleep:
                if stop.wait(sample):
                    break
            elif stop.is_set():
                break

            snapshot = progress()
            msg, stream = stream.run(snapshot)
            ticks += 1
            logger.debug("Tick %d: %s", ticks, msg)
            display(format_status(msg, snapshot))
    finally:
        logger.debug("Progress display stopped after %d ticks", ticks)
        display(FINISHED_MESSAGE)
        _enter(DisplayState.FINISHED)


def progress_display(
    sample: float,
    display: Display,
    progress: ProgressSource,
    stop: threading.Event,
    *,
    guess_decay: float = DEFAULT_GUESS_DECAY,
    work_decay: float = DEFAULT_WORK_DECAY,
) -> None:
    """Poll ``progress`` every ``sample`` seconds until ``stop`` is set.

    Blocks the calling thread.  Use ``ProgressDisplay`` to run it in the
    background.

    Parameters
    ----------
    sample:
        Sampling interval in seconds, must be > 0.
    display:
        Receives every status line, including ``"Starting..."`` and
        ``"Finished"``.
    progress:
        Returns the current immutable snapshot.
    stop:
        Cancellation token.  Checked at the timed wait, so shutdown takes
        at most one interval.
    """
    if sample <= 0:
        raise ValueError(f"sample must be > 0, got {sample}")
    _run_display(
        sample, display, progress, stop,
        sleep=True, guess_decay=guess_decay, work_decay=work_decay,
    )


def progress_display_tester(
    sample: float,
    display: Display,
    progress: ProgressSource,
    stop: threading.Event,
    *,
    guess_decay: float = DEFAULT_GUESS_DECAY,
    work_decay: float = DEFAULT_WORK_DECAY,
) -> None:
    """Version of ``progress_display`` that never waits.

    ``sample`` is still used as the assumed interval between ticks.  The
    loop polls ``stop`` before each fetch, so the ``progress`` callback
    is the natural place to set it.
    """
    _run_display(
        sample, display, progress, stop,
        sleep=False, guess_decay=guess_decay, work_decay=work_decay,
    )


class ProgressDisplay:
    """Runs ``progress_display`` on a background thread.

    Parameters
    ----------
    sample:
        Sampling interval in seconds.
    display:
        Status line callback.
    progress:
        Snapshot accessor.  Called from the background thread, so it must
        return a consistent copy even while the build mutates its state.

    Usage
    -----
    >>> with ProgressDisplay(5.0, print, engine.snapshot):
    ...     engine.build()
    """

    def __init__(
        self,
        sample: float,
        display: Display,
        progress: ProgressSource,
        *,
        guess_decay: float = DEFAULT_GUESS_DECAY,
        work_decay: float = DEFAULT_WORK_DECAY,
    ) -> None:
        if sample <= 0:
            raise ValueError(f"sample must be > 0, got {sample}")
        self._sample = sample
        self._display = display
        self._progress = progress
        self._guess_decay = guess_decay
        self._work_decay = work_decay
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._state = DisplayState.STARTING

    @property
    def state(self) -> DisplayState:
        return self._state

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _set_state(self, state: DisplayState) -> None:
        self._state = state

    def _run(self) -> None:
        _run_display(
            self._sample,
            self._display,
            self._progress,
            self._stop,
            sleep=True,
            guess_decay=self._guess_decay,
            work_decay=self._work_decay,
            on_state=self._set_state,
        )

    def start(self) -> None:
        """Start the background thread.  Calling twice is an error."""
        if self._thread is not None:
            raise RuntimeError("ProgressDisplay has already been started")
        logger.info("Starting progress display every %.2fs", self._sample)
        self._thread = threading.Thread(
            target=self._run, name="buildeta-progress", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        """Signal the loop to finish and wait for ``"Finished"`` to be shown."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)

    def __enter__(self) -> ProgressDisplay:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()
