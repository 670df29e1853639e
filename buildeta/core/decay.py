"""Decayed online division.

Estimates ``a / b`` for two accumulating quantities, weighting the most
recent increments by a decay factor ``f``::

    r' = (r*b + f*(a' - a)) / (b + f*(b' - b))

where ``r`` is the previous estimate (seeded at 0) and ``(a, a')``,
``(b, b')`` are the previous and current values.  With ``f == 1`` this is
exactly ``a' / b'``; larger ``f`` adapts faster to changes in rate at the
cost of more noise, smaller ``f`` smooths more.
"""

from __future__ import annotations

from typing import TypeVar

from buildeta.core.signals import previous_and_current
from buildeta.core.stream import Stream, fold, lift

I = TypeVar("I")  # noqa: E741


def decay_step(
    factor: float,
    r: float,
    a: tuple[float, float],
    b: tuple[float, float],
) -> float:
    """One step of the recurrence.

    A zero denominator leaves the estimate at ``r``.
    """
    (a0, a1), (b0, b1) = a, b
    denominator = b0 + factor * (b1 - b0)
    if denominator == 0:
        return r
    return (r * b0 + factor * (a1 - a0)) / denominator


def decay(factor: float, a: Stream[I, float], b: Stream[I, float]) -> Stream[I, float]:
    """Stream of decayed ``a / b`` estimates.

    Parameters
    ----------
    factor:
        Decay factor, must be > 0.
    a:
        Numerator-accumulating quantity.
    b:
        Denominator-accumulating quantity.
    """
    if factor <= 0:
        raise ValueError(f"decay factor must be > 0, got {factor}")

    pairs = lift(lambda x, y: (x, y), previous_and_current(0.0, a), previous_and_current(0.0, b))
    return fold(lambda r, ab: decay_step(factor, r, ab[0], ab[1]), 0.0, pairs)
