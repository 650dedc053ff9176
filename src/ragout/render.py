"""Escape-sequence output for the prompt line.

The redraw is always a full line: clear it, return the carriage, then write
the prompt followed by the buffer. The terminal cursor is then placed by
counting columns right from the line start.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from ragout.utils import visible_width

if TYPE_CHECKING:
    from ragout.buffer import EditBuffer
    from ragout.terminal import TerminalSink

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

CLEAR_LINE = b"\x1b[2K"
CARRIAGE_RETURN = b"\r"
CURSOR_RIGHT = b"\x1b[C"
ALT_SCREEN_ENABLE = b"\x1b[?1049h"
ALT_SCREEN_DISABLE = b"\x1b[?1049l"
CURSOR_TO_ORIGIN = b"\x1b[1;1f"

# "chars" counts characters; "cells" counts terminal columns
Measure = Literal["chars", "cells"]


def encode(text: str) -> bytes:
    """Encode *text* one character at a time: ASCII as a single byte, the rest as UTF-8."""
    out = bytearray()
    for ch in text:
        if ch.isascii():
            out.append(ord(ch))
        else:
            out += ch.encode("utf-8", errors="replace")
    return bytes(out)


def write_prompt(buffer: EditBuffer, sink: TerminalSink) -> None:
    """Redraw the prompt and the buffer contents on a clean line."""
    sink.write(CLEAR_LINE)
    sink.write(CARRIAGE_RETURN)
    sink.write(encode(buffer.prompt))
    sink.write(encode(buffer.text))
    sink.flush()


def cursor_column(buffer: EditBuffer, measure: Measure = "chars") -> int:
    """Number of right moves :func:`sync_cursor` emits from the line start."""
    if measure == "cells":
        before = "".join(buffer.values[: buffer.cursor])
        return visible_width(buffer.prompt) + 1 + visible_width(before)
    # Characters, not bytes: a multi-byte prompt must not push the cursor further.
    return len(buffer.prompt) + 1 + buffer.cursor


def sync_cursor(
    buffer: EditBuffer,
    sink: TerminalSink,
    measure: Measure = "chars",
) -> None:
    """Move the terminal cursor to match ``buffer.cursor``."""
    sink.write(CARRIAGE_RETURN)
    sink.write(CURSOR_RIGHT * cursor_column(buffer, measure))
    sink.flush()


def enter_alt_screen(sink: TerminalSink) -> None:
    sink.write(ALT_SCREEN_ENABLE)
    sink.write(CURSOR_TO_ORIGIN)
    sink.flush()


def leave_alt_screen(sink: TerminalSink) -> None:
    """Switch back to the main screen. Left to the host's shutdown path."""
    sink.write(ALT_SCREEN_DISABLE)
    sink.flush()
