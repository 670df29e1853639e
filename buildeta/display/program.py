"""Program sink — forwards progress to a ``shake-progress`` helper.

If ``shake-progress`` is on the ``PATH`` it is called with:

* ``--title=<message>`` — the full status line.
* ``--state=<state>`` — ``NoProgress``, ``Normal`` or ``Error``.
* ``--value=<percent>`` — the percent complete, omitted for ``NoProgress``.

The helper is never called twice in a row with the same state and value.
A missing helper, an OS error or a non-zero exit are all ignored: the
progress bar is a convenience and must never get in the way of the build.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import threading

from buildeta.models.display import FAILURE_MARKER, ProgramState

logger = logging.getLogger(__name__)

DEFAULT_PROGRAM = "shake-progress"


def parse_percent(message: str) -> str:
    """Digits immediately before the first ``%``, or ``""`` if there are none."""
    head, sep, _ = message.partition("%")
    if not sep:
        return ""
    digits = len(head) - len(head.rstrip("0123456789"))
    return head[len(head) - digits:]


def is_failure(message: str) -> bool:
    return f" {FAILURE_MARKER} " in message


def program_state(message: str) -> tuple[ProgramState, str]:
    """Classify a status line as ``(state, percent)``."""
    percent = parse_percent(message)
    if not percent:
        return ProgramState.NO_PROGRESS, percent
    if is_failure(message):
        return ProgramState.ERROR, percent
    return ProgramState.NORMAL, percent


def program_args(executable: str, message: str) -> list[str]:
    """Command line for one helper invocation."""
    state, percent = program_state(message)
    args = [executable, f"--title={message}", f"--state={state.value}"]
    if state is not ProgramState.NO_PROGRESS:
        args.append(f"--value={percent}")
    return args


class ProgramSink:
    """Calls an external progress-bar helper for each status line.

    Parameters
    ----------
    executable:
        Full path of the helper, or ``None`` for an inert sink.
    """

    def __init__(self, executable: str | None) -> None:
        self._executable = executable
        self._last: tuple[ProgramState, str] | None = None
        self._lock = threading.Lock()

    @classmethod
    def discover(cls, name: str = DEFAULT_PROGRAM) -> ProgramSink:
        """Look ``name`` up on the ``PATH``."""
        executable = shutil.which(name)
        if executable is None:
            logger.debug("%s not found on PATH; progress program disabled", name)
        else:
            logger.info("Progress program: %s", executable)
        return cls(executable)

    @property
    def sink_name(self) -> str:
        return "program"

    @property
    def executable(self) -> str | None:
        return self._executable

    def __call__(self, message: str) -> None:
        if self._executable is None:
            return

        key = program_state(message)
        with self._lock:
            same = key == self._last
            self._last = key
        if same:
            return

        args = program_args(self._executable, message)
        try:
            result = subprocess.run(args, check=False)
        except (subprocess.SubprocessError, OSError) as exc:
            logger.debug("Progress program failed to run: %s", exc)
            return
        if result.returncode != 0:
            logger.debug(
                "Progress program exited with code %d", result.returncode
            )


def progress_program(name: str = DEFAULT_PROGRAM) -> ProgramSink:
    """Return a sink calling ``name`` if it is on the ``PATH``, else a no-op."""
    return ProgramSink.discover(name)
