"""Unit tests for the message pipeline and its formatting helpers."""

from __future__ import annotations

import pytest

from buildeta.core.message import (
    Estimate,
    estimates,
    format_duration,
    format_percent,
    message,
    percent_complete,
)
from buildeta.core.stream import identity
from buildeta.models.progress import Progress


# ---------------------------------------------------------------------------
# Test: Formatting
# ---------------------------------------------------------------------------


class TestFormatDuration:
    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (0, "0s"),
            (5, "5s"),
            (59, "59s"),
            (60, "1m00s"),
            (65, "1m05s"),
            (125, "2m05s"),
            (600, "10m00s"),
            (3725, "62m05s"),
        ],
    )
    def test_table(self, seconds, expected):
        assert format_duration(seconds) == expected

    def test_rounds_up(self):
        assert format_duration(0.1) == "1s"
        assert format_duration(59.01) == "1m00s"
        assert format_duration(64.5) == "1m05s"


class TestFormatPercent:
    def test_floors(self):
        assert format_percent(1.0, 2.0) == "33"
        assert percent_complete(2.0, 1.0) == 66

    def test_zero_done(self):
        assert format_percent(0.0, 0.0) == "0"
        assert format_percent(0.0, 50.0) == "0"

    def test_complete(self):
        assert format_percent(40.0, 0.0) == "100"


# ---------------------------------------------------------------------------
# Test: Pipeline
# ---------------------------------------------------------------------------


def _estimates(snapshots: list[Progress], sample: float = 1.0) -> list[Estimate]:
    return estimates(sample, identity()).take(snapshots)


class TestZeroProgress:
    def test_empty_snapshots(self):
        assert message(1.0, identity()).take([Progress()] * 3) == ["0s (0%)"] * 3

    def test_nothing_built_yet(self):
        """Known pending work is shown at a work rate of 1 until something completes."""
        snapshots = [Progress(count_todo=5, time_todo=(50.0, 0))] * 4
        out = _estimates(snapshots)
        assert [e.percent for e in out] == [0, 0, 0, 0]
        assert [e.work for e in out] == [1.0] * 4
        assert [e.render() for e in out] == ["50s (0%)"] * 4


class TestGuess:
    def test_unknown_rules_use_average_known_time(self):
        p = Progress(
            count_built=2,
            time_built=10.0,
            count_todo=3,
            time_todo=(0.0, 3),
        )
        (est,) = _estimates([p])
        # samples = 2 + 3 - 3 = 2, time = 10 + 0 -> guess 5 per rule
        assert est.guess == pytest.approx(5.0)
        assert est.todo == pytest.approx(15.0)
        assert est.work == pytest.approx(10.0)
        assert est.render() == "2s (40%)"

    def test_guess_zero_without_samples(self):
        p = Progress(count_todo=2, time_todo=(0.0, 2))
        (est,) = _estimates([p])
        assert est.guess == 0.0
        assert est.todo == 0.0

    def test_guess_recovers_after_zero_samples(self):
        unknown = Progress(count_todo=2, time_todo=(0.0, 2))
        timed = Progress(count_built=1, time_built=4.0, count_todo=1, time_todo=(0.0, 1))
        out = _estimates([unknown, unknown, timed])
        assert out[2].guess > 0


class TestLatch:
    def test_work_frozen_while_done_unchanged(self):
        snapshots = [
            Progress(count_built=1, time_built=10.0, count_todo=5, time_todo=(50.0, 0)),
            Progress(count_built=1, time_built=10.0, count_todo=5, time_todo=(50.0, 0)),
            Progress(count_built=1, time_built=10.0, count_todo=5, time_todo=(50.0, 0)),
            Progress(count_built=2, time_built=20.0, count_todo=4, time_todo=(40.0, 0)),
        ]
        out = _estimates(snapshots)
        assert out[0].work == pytest.approx(10.0)
        assert out[1].work == out[0].work
        assert out[2].work == out[0].work
        assert out[3].work != out[0].work

    def test_frozen_work_keeps_remaining_time(self):
        p = Progress(count_built=1, time_built=10.0, count_todo=5, time_todo=(50.0, 0))
        out = message(1.0, identity()).take([p, p, p])
        assert out[0] == out[1] == out[2] == "5s (16%)"


class TestTuning:
    def test_custom_decay_factors_change_estimate(self):
        snapshots = [
            Progress(count_built=i, time_built=float(i * i), count_todo=10 - i,
                     time_todo=(float(10 - i), 0))
            for i in range(1, 6)
        ]
        default = estimates(1.0, identity()).take(snapshots)[-1]
        tuned = estimates(1.0, identity(), work_decay=5.0).take(snapshots)[-1]
        assert default.work != tuned.work

    def test_sample_scales_elapsed_time(self):
        p = Progress(count_built=1, time_built=10.0, count_todo=1, time_todo=(10.0, 0))
        (fast,) = _estimates([p], sample=1.0)
        (slow,) = _estimates([p], sample=10.0)
        assert fast.work == pytest.approx(10.0)
        assert slow.work == pytest.approx(1.0)
