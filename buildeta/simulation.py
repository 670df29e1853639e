"""A synthetic build engine for demos and tests.

``SimulatedBuild`` runs ``rules`` on ``jobs`` parallel workers in simulated
time and publishes ``Progress`` snapshots under a lock, the way a real
engine would.  Some rules have a duration known from an earlier run, the
rest are reported as never timed.
"""

from __future__ import annotations

import logging
import random
import threading
import time

from pydantic import BaseModel, ConfigDict, Field

from buildeta.models.progress import Progress

logger = logging.getLogger(__name__)


class SimulatedRule(BaseModel):
    """One rule of the synthetic build."""

    model_config = ConfigDict(frozen=True)

    name: str
    duration: float = Field(gt=0)
    known: bool = True
    fails: bool = False


def make_rules(
    count: int,
    *,
    seed: int = 0,
    unknown_fraction: float = 0.3,
    link_every: int = 0,
) -> list[SimulatedRule]:
    """Generate ``count`` rules with mostly short compile-like durations.

    ``link_every`` > 0 inserts a long link-like rule at that period, to
    give the build distinct phases.
    """
    rng = random.Random(seed)
    rules: list[SimulatedRule] = []
    for i in range(count):
        if link_every and (i + 1) % link_every == 0:
            name, duration = f"link-{i}", rng.uniform(5.0, 10.0)
        else:
            name, duration = f"compile-{i}", rng.uniform(0.5, 2.0)
        rules.append(
            SimulatedRule(
                name=name,
                duration=round(duration, 3),
                known=rng.random() >= unknown_fraction,
            )
        )
    return rules


class SimulatedBuild:
    """Thread-safe simulated build.

    Parameters
    ----------
    rules:
        Rules in scheduling order.
    jobs:
        Number of rules that may run at once.
    """

    def __init__(self, rules: list[SimulatedRule], jobs: int = 1) -> None:
        if jobs < 1:
            raise ValueError(f"jobs must be >= 1, got {jobs}")
        self._jobs = jobs
        self._pending: list[SimulatedRule] = list(rules)
        self._running: list[tuple[SimulatedRule, float]] = []
        self._built: list[SimulatedRule] = []
        self._failure: str | None = None
        self._lock = threading.Lock()
        self._schedule()

    # ------------------------------------------------------------------
    # Engine
    # ------------------------------------------------------------------

    def _schedule(self) -> None:
        while self._pending and len(self._running) < self._jobs:
            rule = self._pending.pop(0)
            self._running.append((rule, rule.duration))

    def advance(self, seconds: float) -> None:
        """Move simulated time forward by ``seconds``."""
        with self._lock:
            remaining = seconds
            while remaining > 0 and self._running:
                slice_ = min(remaining, min(left for _, left in self._running))
                still_running: list[tuple[SimulatedRule, float]] = []
                for rule, left in self._running:
                    left -= slice_
                    if left <= 1e-9:
                        self._built.append(rule)
                        if rule.fails and self._failure is None:
                            self._failure = rule.name
                            logger.info("Simulated rule %s failed", rule.name)
                    else:
                        still_running.append((rule, left))
                self._running = still_running
                remaining -= slice_
                self._schedule()

    @property
    def finished(self) -> bool:
        with self._lock:
            return not self._pending and not self._running

    def snapshot(self) -> Progress:
        """A consistent copy of the current bookkeeping."""
        with self._lock:
            todo = self._pending + [rule for rule, _ in self._running]
            return Progress(
                failure=self._failure,
                count_built=len(self._built),
                count_todo=len(todo),
                time_built=sum(rule.duration for rule in self._built),
                time_todo=(
                    sum(rule.duration for rule in todo if rule.known),
                    sum(1 for rule in todo if not rule.known),
                ),
            )

    # ------------------------------------------------------------------
    # Real-time driver
    # ------------------------------------------------------------------

    def run(
        self,
        *,
        speed: float = 1.0,
        resolution: float = 0.05,
        stop: threading.Event | None = None,
    ) -> None:
        """Advance in real time, ``speed`` simulated seconds per second."""
        token = stop or threading.Event()
        last = time.monotonic()
        while not self.finished:
            if token.wait(resolution):
                return
            now = time.monotonic()
            self.advance((now - last) * speed)
            last = now
