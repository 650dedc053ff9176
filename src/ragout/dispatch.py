"""Contracts between the editing core and an event-to-action layer.

Both protocols are generic over the application's event type. A concrete
layer binds them to one event type (``Writer[str]`` for raw key data,
``Writer[MyKeyEvent]`` for a decoded enum, ...) rather than sharing a single
dynamic interface across event types.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar

if TYPE_CHECKING:
    from ragout.buffer import EditBuffer
    from ragout.history import History
    from ragout.terminal import TerminalSink

E = TypeVar("E", contravariant=True)


class Writer(Protocol[E]):
    """Applies one event to the buffer and history and redraws through *sink*."""

    def write(
        self,
        buffer: EditBuffer,
        history: History,
        event: E,
        sink: TerminalSink,
    ) -> str | None:
        """Apply *event*.

        Returns the submitted line when the event commits the buffer,
        otherwise ``None``.
        """
        ...


class DebugLog(Protocol[E]):
    """Receives a read-only notification of every applied event."""

    def log(self, event: E) -> None: ...
