"""Progress snapshot — cumulative build bookkeeping at one point in time.

The build engine owns and mutates its live counters; the estimator only
ever sees frozen ``Progress`` copies, one per tick.  Snapshots from
sub-builds combine with ``merge`` (or ``+``) into a single view.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Progress(BaseModel):
    """Information about the current state of the build.

    Counters and timers are cumulative for the life of one build: rules
    migrate from ``todo`` / ``unknown`` towards ``built`` / ``skipped``
    but no total ever moves backwards.

    Attributes
    ----------
    failure:
        Starts out ``None``; becomes the name of a target once a rule fails.
    count_skipped:
        Rules which were required, but were already in a valid state.
    count_built:
        Rules which have been built in this run.
    count_unknown:
        Rules built previously, but not yet known to be required.
    count_todo:
        Rules currently required but not yet built.
    time_skipped:
        Time spent building ``count_skipped`` rules in previous runs.
    time_built:
        Time spent building ``count_built`` rules.
    time_unknown:
        Time spent building ``count_unknown`` rules in previous runs.
    time_todo:
        Time spent building ``count_todo`` rules in previous runs, paired
        with the number of them which have no known time.
    """

    model_config = ConfigDict(frozen=True)

    failure: str | None = None
    count_skipped: int = Field(default=0, ge=0)
    count_built: int = Field(default=0, ge=0)
    count_unknown: int = Field(default=0, ge=0)
    count_todo: int = Field(default=0, ge=0)
    time_skipped: float = Field(default=0.0, ge=0)
    time_built: float = Field(default=0.0, ge=0)
    time_unknown: float = Field(default=0.0, ge=0)
    time_todo: tuple[float, int] = (0.0, 0)

    @field_validator("time_todo")
    @classmethod
    def _non_negative_todo(cls, value: tuple[float, int]) -> tuple[float, int]:
        seconds, unknown = value
        if seconds < 0 or unknown < 0:
            raise ValueError(f"time_todo members must be >= 0, got {value}")
        return value

    # ------------------------------------------------------------------
    # Monoid
    # ------------------------------------------------------------------

    @classmethod
    def empty(cls) -> Progress:
        """The identity snapshot: nothing known, nothing failed."""
        return cls()

    def merge(self, other: Progress) -> Progress:
        """Combine two snapshots field-wise.

        Counts and times add.  ``failure`` keeps the left-hand value when
        both sides carry one.
        """
        return Progress(
            failure=self.failure if self.failure is not None else other.failure,
            count_skipped=self.count_skipped + other.count_skipped,
            count_built=self.count_built + other.count_built,
            count_unknown=self.count_unknown + other.count_unknown,
            count_todo=self.count_todo + other.count_todo,
            time_skipped=self.time_skipped + other.time_skipped,
            time_built=self.time_built + other.time_built,
            time_unknown=self.time_unknown + other.time_unknown,
            time_todo=(
                self.time_todo[0] + other.time_todo[0],
                self.time_todo[1] + other.time_todo[1],
            ),
        )

    def __add__(self, other: object) -> Progress:
        if not isinstance(other, Progress):
            return NotImplemented
        return self.merge(other)

    @classmethod
    def concat(cls, snapshots: Iterable[Progress]) -> Progress:
        """Merge any number of snapshots left to right."""
        result = cls.empty()
        for snapshot in snapshots:
            result = result.merge(snapshot)
        return result

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    @property
    def todo_known_time(self) -> float:
        """Seconds of pending work whose duration is known from earlier runs."""
        return self.time_todo[0]

    @property
    def todo_unknown_count(self) -> int:
        """Pending rules that have never been timed."""
        return self.time_todo[1]
