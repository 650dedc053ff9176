"""Editable single-line buffer with a gap cursor and word jumps."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ragout.dispatch import DebugLog
    from ragout.history import History

# Characters that end a word for jump navigation
STOPPERS: frozenset[str] = frozenset("/ -_,\"';:.")


class EditBuffer:
    """The line being edited, stored as a list of single characters.

    ``cursor`` is the gap to the left of ``values[cursor]``: ``0`` is before
    the first character and ``len(values)`` is after the last one.
    """

    def __init__(
        self,
        prompt: str = "",
        alt_screen: bool = False,
        diagnostics: DebugLog[Any] | None = None,
    ) -> None:
        self.values: list[str] = []
        self.cursor: int = 0
        self.prompt: str = prompt
        self.alt_screen: bool = alt_screen
        self.diagnostics = diagnostics

    def __repr__(self) -> str:
        return f"EditBuffer(text={self.text!r}, cursor={self.cursor})"

    @property
    def text(self) -> str:
        return "".join(self.values)

    def overwrite_prompt(self, new_prompt: str) -> None:
        """Replace the prompt shown before the buffer."""
        self.prompt = new_prompt

    # -- editing ------------------------------------------------------------

    def insert(self, c: str) -> None:
        """Insert *c* at the cursor and advance the cursor past it."""
        if self.cursor == len(self.values):
            self.values.append(c)
        else:
            self.values.insert(self.cursor, c)
        self.cursor += 1

    def delete_before_cursor(self) -> None:
        """Backspace: remove the character left of the cursor."""
        if not self.values or self.cursor == 0:
            return
        del self.values[self.cursor - 1]
        self.cursor -= 1

    def submit(self, history: History) -> str:
        """Commit the buffer to *history* and return its text.

        The buffer is drained and the cursor goes back to 0.
        """
        history.submit(list(self.values))
        line = "".join(self.values)
        self.values.clear()
        self.cursor = 0
        return line

    # -- movement -----------------------------------------------------------

    def move_right(self) -> bool:
        if not self.values or self.cursor == len(self.values):
            return False
        self.cursor += 1
        return True

    def move_left(self) -> bool:
        if not self.values or self.cursor == 0:
            return False
        self.cursor -= 1
        return True

    def move_to_end(self) -> int:
        """Move the cursor after the last character; return the distance moved."""
        distance = len(self.values) - self.cursor
        if distance > 0:
            self.cursor = len(self.values)
        return distance

    def move_to_home(self) -> bool:
        if self.cursor == 0:
            return False
        self.cursor = 0
        return True

    # -- clearing -----------------------------------------------------------

    def clear_all(self) -> None:
        self.values.clear()
        self.cursor = 0

    def clear_after_cursor(self) -> None:
        """Drop everything right of the cursor (ctrl+k)."""
        del self.values[self.cursor :]

    def clear_before_cursor(self) -> None:
        """Drop everything left of the cursor (ctrl+u)."""
        del self.values[: self.cursor]
        self.cursor = 0

    # -- word jumps ---------------------------------------------------------

    def jump_right(self) -> None:
        """Jump past the current word, or over a run of spaces.

        A word jump lands on the stopper that ends the word (or the end of
        the buffer). A space run is skipped up to the gap before the next
        non-space character.
        """
        length = len(self.values)
        if self.cursor == length:
            return

        peek = self.cursor + 1 if self.cursor + 1 < length else self.cursor
        if self.values[peek] == " ":
            while self.cursor + 1 < length and self.values[self.cursor + 1] == " ":
                self.cursor += 1
        else:
            while self.cursor + 1 < length and self.values[self.cursor + 1] not in STOPPERS:
                self.cursor += 1
            self.cursor += 1

    def jump_left(self) -> None:
        """Jump to the start of the current word, or back over a run of spaces."""
        if self.cursor == 0:
            return

        if self.values[self.cursor - 1] == " ":
            while self.cursor > 0 and self.values[self.cursor - 1] == " ":
                self.cursor -= 1
        else:
            # Inner bound stays above 1; the final step may reach 0.
            while self.cursor > 1 and self.values[self.cursor - 1] not in STOPPERS:
                self.cursor -= 1
            self.cursor -= 1
