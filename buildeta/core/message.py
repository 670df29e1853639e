"""Message generator — turns a stream of snapshots into status lines.

Typical status messages take the form ``1m25s (15%)``: the build is
predicted to complete in 1 minute 25 seconds, and 15% of the necessary
build time has elapsed.  The prediction is a guess from past
observations; it will go up as well as down, and is least accurate on a
clean build where few rules have known durations.

The remaining time is the predicted outstanding work (``time_todo``, plus
a guessed duration for never-timed rules) scaled by the observed work
rate in this build, roughly ``done / time_elapsed``.  The percentage is
``done / (done + remaining_work)``.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict

from buildeta.core.decay import decay
from buildeta.core.signals import branch, changed, latch, position
from buildeta.core.stream import Stream, constant, lift
from buildeta.models.progress import Progress

DEFAULT_GUESS_DECAY = 10.0
DEFAULT_WORK_DECAY = 1.2


class Estimate(BaseModel):
    """Everything the pipeline derived on one tick."""

    model_config = ConfigDict(frozen=True)

    done: float
    todo: float
    guess: float
    work: float
    remaining_seconds: float
    percent: int

    def render(self) -> str:
        return f"{format_duration(self.remaining_seconds)} ({self.percent}%)"


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Render seconds as ``Ns`` or ``MmSSs``, rounding up."""
    mins, secs = divmod(math.ceil(seconds), 60)
    if mins == 0:
        return f"{secs}s"
    return f"{mins}m{secs:02d}s"


def percent_complete(done: float, todo: float) -> int:
    """Floored percentage of work done; 0 until anything has been built."""
    if done == 0:
        return 0
    return math.floor(100 * done / (done + todo))


def format_percent(done: float, todo: float) -> str:
    return str(percent_complete(done, todo))


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def _samples(p: Progress) -> int:
    return p.count_built + p.count_todo - p.todo_unknown_count


def _timed(p: Progress) -> float:
    return p.time_built + p.todo_known_time


def estimates(
    sample: float,
    progress: Stream[Progress, Progress],
    *,
    guess_decay: float = DEFAULT_GUESS_DECAY,
    work_decay: float = DEFAULT_WORK_DECAY,
) -> Stream[Progress, Estimate]:
    """Derive an ``Estimate`` per tick from a stream of snapshots.

    Parameters
    ----------
    sample:
        Seconds between ticks.
    progress:
        Snapshot stream, normally ``identity()`` over the fetched values.
    guess_decay:
        Decay for the duration guess of never-timed rules.  High, so a
        build that goes in phases (many small compiles, then a few large
        links) settles quickly without bouncing too much.
    work_decay:
        Decay for the observed work rate.
    """
    # Seconds of work completed.  Ignores time_skipped, which would be more
    # truthful but makes the percentage drop sharply at the start of a build.
    done = progress.map(lambda p: p.time_built)

    # Predicted build time for a rule that has never been built before
    samples = progress.map(_samples)
    guess = branch(
        samples.map(lambda n: n == 0),
        constant(0.0),
        decay(guess_decay, progress.map(_timed), samples.map(float)),
    )

    # Seconds of work remaining, ignoring multiple threads
    todo = lift(
        lambda p, g: p.todo_known_time + p.todo_unknown_count * g,
        progress,
        guess,
    )

    # Seconds we have been going
    step = position().map(lambda n: n * sample)
    work = decay(work_decay, done, step)

    # Don't divide by 0, and don't update the rate on ticks where done is unchanged
    real_work = branch(
        done.map(lambda d: d == 0),
        constant(1.0),
        latch(lift(lambda moved, w: (not moved, w), changed(0.0, done), work)),
    )

    def _estimate(d: float, t: float, g: float, w: float) -> Estimate:
        return Estimate(
            done=d,
            todo=t,
            guess=g,
            work=w,
            remaining_seconds=t / w,
            percent=percent_complete(d, t),
        )

    return lift(_estimate, done, todo, guess, real_work)


def message(
    sample: float,
    progress: Stream[Progress, Progress],
    *,
    guess_decay: float = DEFAULT_GUESS_DECAY,
    work_decay: float = DEFAULT_WORK_DECAY,
) -> Stream[Progress, str]:
    """Stream of ``"<time> (<percent>%)"`` status lines."""
    return estimates(
        sample, progress, guess_decay=guess_decay, work_decay=work_decay
    ).map(Estimate.render)
