"""Pull-based streams — values that evolve once per external tick.

A ``Stream`` is an explicit state machine: a transition function plus the
state it currently holds.  Running it on an input returns the current
output and a *new* stream carrying the successor state; the original is
never mutated, so a stream can be re-run or shared as a starting point
without synchronisation.

Only ``fold`` retains history.  Every other combinator just threads the
states of the streams it is built from.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar

I = TypeVar("I")  # noqa: E741
A = TypeVar("A")
B = TypeVar("B")

# step(state, input) -> (output, next_state)
Step = Callable[[Any, Any], "tuple[Any, Any]"]


class Stream(Generic[I, A]):
    """A value of type ``A`` that advances on every input of type ``I``.

    Parameters
    ----------
    step:
        Pure transition ``(state, input) -> (output, next_state)``.
    state:
        The state the next ``run`` starts from.
    """

    __slots__ = ("_step", "_state")

    def __init__(self, step: Step, state: Any) -> None:
        self._step = step
        self._state = state

    def run(self, value: I) -> tuple[A, Stream[I, A]]:
        """Advance one tick: return ``(output, successor)``."""
        output, state = self._step(self._state, value)
        return output, Stream(self._step, state)

    def map(self, fn: Callable[[A], B]) -> Stream[I, B]:
        """Apply ``fn`` to every output."""
        return apply(constant(fn), self)

    def take(self, inputs: Iterable[I]) -> list[A]:
        """Run over a finite input sequence and collect the outputs."""
        outputs: list[A] = []
        stream: Stream[I, A] = self
        for value in inputs:
            output, stream = stream.run(value)
            outputs.append(output)
        return outputs

    def __repr__(self) -> str:
        return f"Stream(step={getattr(self._step, '__name__', self._step)!r})"


# ---------------------------------------------------------------------------
# Primitive combinators
# ---------------------------------------------------------------------------


def _constant_step(state: Any, _value: Any) -> tuple[Any, Any]:
    return state, state


def _identity_step(state: Any, value: Any) -> tuple[Any, Any]:
    return value, state


def _apply_step(state: tuple[Stream, Stream], value: Any) -> tuple[Any, Any]:
    fs, xs = state
    f, fs = fs.run(value)
    x, xs = xs.run(value)
    return f(x), (fs, xs)


def _lift_step(state: tuple[Callable[..., Any], tuple[Stream, ...]], value: Any) -> tuple[Any, Any]:
    fn, streams = state
    outputs = []
    successors = []
    for stream in streams:
        output, stream = stream.run(value)
        outputs.append(output)
        successors.append(stream)
    return fn(*outputs), (fn, tuple(successors))


def _fold_step(state: tuple[Callable[[Any, Any], Any], Any, Stream], value: Any) -> tuple[Any, Any]:
    fn, acc, source = state
    output, source = source.run(value)
    acc = fn(acc, output)
    return acc, (fn, acc, source)


def constant(value: A) -> Stream[Any, A]:
    """A stream that ignores its input and always yields ``value``."""
    return Stream(_constant_step, value)


def identity() -> Stream[I, I]:
    """A stream that yields its input unchanged."""
    return Stream(_identity_step, None)


def apply(fs: Stream[I, Callable[[A], B]], xs: Stream[I, A]) -> Stream[I, B]:
    """Pointwise application of a stream of functions to a stream of arguments.

    Both operands are advanced on the same tick input.
    """
    return Stream(_apply_step, (fs, xs))


def lift(fn: Callable[..., B], *streams: Stream[I, Any]) -> Stream[I, B]:
    """Combine several streams pointwise with an N-argument function."""
    return Stream(_lift_step, (fn, tuple(streams)))


def fold(fn: Callable[[B, A], B], seed: B, source: Stream[I, A]) -> Stream[I, B]:
    """Running accumulation: ``acc = fn(acc, output)`` on every tick.

    The first output is ``fn(seed, first_source_output)``; the seed itself
    is never emitted.
    """
    return Stream(_fold_step, (fn, seed, source))
