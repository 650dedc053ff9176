"""Command history with draft preservation.

``History.cursor`` is the index of the recalled entry. ``len(values)`` is the
live position (nothing recalled, the draft is in the buffer) and ``0`` means
the oldest entry is loaded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ragout.dispatch import DebugLog


class MissingDraftError(RuntimeError):
    """Raised when browsing back to the live position finds no saved draft."""


class History:
    """Deduplicated log of submitted lines plus the draft being edited."""

    def __init__(self, diagnostics: DebugLog[Any] | None = None) -> None:
        self.values: list[list[str]] = []
        self.cursor: int = 0
        self.temp: list[str] | None = None
        self.diagnostics = diagnostics

    def __repr__(self) -> str:
        return f"History(entries={len(self.values)}, cursor={self.cursor})"

    @property
    def is_live(self) -> bool:
        return self.cursor == len(self.values)

    def submit(self, candidate: list[str]) -> None:
        """Record *candidate* and return to the live position.

        Lines made only of spaces and lines already in the history are not
        added, but the browsing state is reset either way.
        """
        if any(c != " " for c in candidate) and candidate not in self.values:
            self.values.append(list(candidate))
        self.temp = None
        self.cursor = len(self.values)

    def recall_previous(self, current: list[str]) -> bool:
        """Load the previous (older) entry into *current* in place."""
        if self.cursor == 0:
            return False

        if self.temp is None or self.cursor == len(self.values):
            self.temp = list(current)

        current[:] = self.values[self.cursor - 1]
        self.cursor -= 1
        return True

    def recall_next(self, current: list[str]) -> bool:
        """Load the next (newer) entry into *current*, or the saved draft.

        Raises:
            MissingDraftError: stepping back to the live position without a
                draft saved by ``recall_previous``.
        """
        if self.cursor == len(self.values):
            return False

        if self.cursor + 1 == len(self.values):
            if self.temp is None:
                raise MissingDraftError(
                    f"no draft saved at history position {self.cursor}"
                )
            current[:] = self.temp
        else:
            current[:] = self.values[self.cursor + 1]
        self.cursor += 1
        return True
