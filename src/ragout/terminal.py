"""Terminal output sink and best-effort raw mode.

The editing core only ever writes bytes and flushes; anything that provides
those two methods (a real stdout, an in-memory buffer in tests) is a
:class:`TerminalSink`.
"""

from __future__ import annotations

import logging
import sys
import termios
import tty
from typing import Any, BinaryIO, Protocol

logger = logging.getLogger(__name__)

TermAttrs = list[Any]


class TerminalSink(Protocol):
    """Something escape sequences and text can be written to."""

    def write(self, data: bytes) -> None: ...

    def flush(self) -> None: ...


class StdoutSink:
    """:class:`TerminalSink` backed by ``sys.stdout`` (or another binary stream)."""

    def __init__(self, stream: BinaryIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout.buffer

    def write(self, data: bytes) -> None:
        try:
            self._stream.write(data)
        except OSError as e:
            logger.debug("Terminal write failed: %s", e)

    def flush(self) -> None:
        try:
            self._stream.flush()
        except OSError as e:
            logger.debug("Terminal flush failed: %s", e)


def _stdin_fd() -> int | None:
    try:
        return sys.stdin.fileno()
    except (AttributeError, ValueError, OSError):
        return None


def enable_raw_mode(fd: int | None = None) -> TermAttrs | None:
    """Put the terminal on *fd* (stdin by default) into raw mode.

    Best effort: when the descriptor is not a terminal, or the mode cannot be
    changed, editing simply continues in the current mode and ``None`` is
    returned. On success the previous attributes are returned for
    :func:`restore_mode`.
    """
    if fd is None:
        fd = _stdin_fd()
        if fd is None:
            return None
    try:
        saved = termios.tcgetattr(fd)
        tty.setraw(fd)
    except (termios.error, OSError, ValueError) as e:
        logger.debug("Raw mode not enabled: %s", e)
        return None
    return saved


def restore_mode(saved: TermAttrs | None, fd: int | None = None) -> None:
    """Restore attributes returned by :func:`enable_raw_mode`."""
    if saved is None:
        return
    if fd is None:
        fd = _stdin_fd()
        if fd is None:
            return
    try:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
    except (termios.error, OSError, ValueError) as e:
        logger.debug("Terminal mode not restored: %s", e)
