"""Default decoding of raw terminal input into key identifiers.

Handles the legacy xterm sequences a line editor needs: plain and modified
arrows and home/end, delete, control letters and ESC-prefixed (alt) keys.
Key identifiers use the ``"ctrl+a"`` / ``"alt+left"`` / ``"enter"`` format.
"""

from __future__ import annotations

from typing import Iterator

ESC = "\x1b"

KeyId = str

LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[4~": "end",
    "\x1b[7~": "home",
    "\x1b[8~": "end",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
}

# xterm modifier parameter -> key id prefix
_MODIFIER_PREFIXES: dict[int, str] = {
    2: "shift+",
    3: "alt+",
    4: "shift+alt+",
    5: "ctrl+",
    6: "ctrl+shift+",
    7: "ctrl+alt+",
    8: "ctrl+shift+alt+",
}

_CSI_FINALS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}

_TILDE_CODES: dict[str, str] = {
    "2": "insert",
    "3": "delete",
    "5": "pageUp",
    "6": "pageDown",
}


def _build_modified_sequences() -> dict[str, str]:
    table: dict[str, str] = {}
    for mod, prefix in _MODIFIER_PREFIXES.items():
        for final, name in _CSI_FINALS.items():
            table[f"\x1b[1;{mod}{final}"] = prefix + name
        for code, name in _TILDE_CODES.items():
            table[f"\x1b[{code};{mod}~"] = prefix + name
    return table


LEGACY_MODIFIED_SEQUENCES: dict[str, str] = _build_modified_sequences()


def parse_key(data: str) -> KeyId | None:
    """Return the key identifier for one complete key sequence, or ``None``."""
    if not data:
        return None

    name = LEGACY_MODIFIED_SEQUENCES.get(data) or LEGACY_KEY_SEQUENCES.get(data)
    if name is not None:
        return name

    if data == ESC:
        return "escape"
    if data in ("\r", "\n"):
        return "enter"
    if data == "\t":
        return "tab"
    if data == " ":
        return "space"
    if data in ("\x7f", "\x08"):
        return "backspace"
    if data == "\x00":
        return "ctrl+space"
    if data == "\x1b[Z":
        return "shift+tab"

    # Ctrl + letter (0x01 - 0x1a)
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)

    # Alt + key (ESC prefix)
    if len(data) == 2 and data[0] == ESC:
        ch = data[1]
        if ch in ("\x7f", "\x08"):
            return "alt+backspace"
        if ch in ("\r", "\n"):
            return "alt+enter"
        if 1 <= ord(ch) <= 26:
            return "ctrl+alt+" + chr(ord(ch) + ord("a") - 1)
        if ch.isprintable():
            return "alt+" + ch.lower()

    if len(data) == 1 and data.isprintable():
        return data

    return None


def _sequence_length(data: str, start: int) -> int:
    """Length of the escape sequence beginning at ``data[start]`` (an ESC)."""
    end = len(data)
    if start + 1 >= end:
        return 1
    kind = data[start + 1]
    if kind == "[":
        pos = start + 2
        while pos < end and not 0x40 <= ord(data[pos]) <= 0x7E:
            pos += 1
        return min(pos + 1, end) - start
    if kind == "O":
        return min(3, end - start)
    return 2


def split_keys(data: str) -> Iterator[str]:
    """Split a chunk read from the terminal into single key sequences.

    A read can hold several keys at once (fast typing, pasted text, repeated
    arrows). Each escape sequence and each other character is yielded on its
    own.
    """
    pos = 0
    while pos < len(data):
        if data[pos] == ESC:
            length = _sequence_length(data, pos)
        else:
            length = 1
        yield data[pos : pos + length]
        pos += length
