"""Display sinks for status lines.

Every sink implements the ``DisplaySink`` protocol: a ``sink_name``
property and ``__call__(message)``.  A sink is an ordinary one-argument
callable, so it can be passed straight to ``progress_display`` or
registered with a ``DisplayDispatcher`` alongside others.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class DisplaySink(Protocol):
    """Protocol that every buildeta display sink implements.

    Attributes
    ----------
    sink_name : str
        A short human-readable identifier (e.g. ``"titlebar"``).
    """

    @property
    def sink_name(self) -> str:
        """Return the name of this sink."""
        ...

    def __call__(self, message: str) -> None:
        """Show one status line.

        Implementations own their failures; the dispatcher logs anything
        that escapes and carries on.
        """
        ...
