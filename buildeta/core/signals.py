"""Signal combinators built on the stream engine."""

from __future__ import annotations

import operator
from typing import Any, TypeVar

from buildeta.core.stream import Stream, constant, fold, lift

I = TypeVar("I")  # noqa: E741
A = TypeVar("A")

_UNSET: Any = object()


def position() -> Stream[Any, int]:
    """1-based tick index."""
    return fold(operator.add, 0, constant(1))


def _shift(pair: tuple[A, A], new: A) -> tuple[A, A]:
    return pair[1], new


def previous_and_current(initial: A, source: Stream[I, A]) -> Stream[I, tuple[A, A]]:
    """Pair each value with the one from the previous tick.

    On the first tick the previous value is ``initial``.
    """
    return fold(_shift, (initial, initial), source)


def changed(initial: A, source: Stream[I, A]) -> Stream[I, bool]:
    """``True`` on ticks where ``source`` differs from its previous value."""
    return previous_and_current(initial, source).map(lambda pair: pair[0] != pair[1])


def _choose(cond: bool, if_true: A, if_false: A) -> A:
    return if_true if cond else if_false


def branch(cond: Stream[I, bool], if_true: Stream[I, A], if_false: Stream[I, A]) -> Stream[I, A]:
    """Select ``if_true`` or ``if_false`` per tick.

    Both arms are advanced every tick whichever one is selected, so their
    internal state never depends on the condition.
    """
    return lift(_choose, cond, if_true, if_false)


def _latch_step(held: A, gated: tuple[bool, A]) -> A:
    gate, value = gated
    if gate and held is not _UNSET:
        return held
    return value


def latch(source: Stream[I, tuple[bool, A]]) -> Stream[I, A]:
    """Freeze a value while its gate is ``True``.

    ``source`` yields ``(gate, value)``.  While the gate is ``False`` the
    value passes through; while it is ``True`` the last emitted value is
    repeated.  With nothing emitted yet, the first value passes through.
    """
    return fold(_latch_step, _UNSET, source)
