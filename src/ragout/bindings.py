"""Default keybindings and the raw-key :class:`~ragout.dispatch.Writer`.

This is one possible event-to-action layer. Applications with their own
event type implement ``Writer[TheirEvent]`` instead; nothing in the editing
core depends on this module.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from ragout.keys import KeyId, parse_key
from ragout.render import Measure, sync_cursor, write_prompt

if TYPE_CHECKING:
    from ragout.buffer import EditBuffer
    from ragout.history import History
    from ragout.terminal import TerminalSink

EditAction = Literal[
    # Cursor movement
    "cursorLeft",
    "cursorRight",
    "cursorWordLeft",
    "cursorWordRight",
    "cursorLineStart",
    "cursorLineEnd",
    # Deletion
    "deleteCharBackward",
    "deleteToLineStart",
    "deleteToLineEnd",
    "clearLine",
    # History
    "historyPrevious",
    "historyNext",
    # Commit
    "submit",
]

KeybindingsConfig = dict[EditAction, KeyId | list[KeyId]]

DEFAULT_KEYBINDINGS: dict[EditAction, KeyId | list[KeyId]] = {
    "cursorLeft": ["left", "ctrl+b"],
    "cursorRight": ["right", "ctrl+f"],
    "cursorWordLeft": ["alt+left", "ctrl+left", "alt+b"],
    "cursorWordRight": ["alt+right", "ctrl+right", "alt+f"],
    "cursorLineStart": ["home", "ctrl+a"],
    "cursorLineEnd": ["end", "ctrl+e"],
    "deleteCharBackward": "backspace",
    "deleteToLineStart": "ctrl+u",
    "deleteToLineEnd": "ctrl+k",
    "clearLine": ["ctrl+l", "escape"],
    "historyPrevious": ["up", "ctrl+p"],
    "historyNext": ["down", "ctrl+n"],
    "submit": "enter",
}


class KeybindingsManager:
    """Maps key identifiers to edit actions."""

    def __init__(self, config: KeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[EditAction, list[KeyId]] = {}
        self._key_to_action: dict[KeyId, EditAction] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: KeybindingsConfig) -> None:
        self._action_to_keys.clear()
        self._key_to_action.clear()

        for source in (DEFAULT_KEYBINDINGS, config):
            for action, keys in source.items():
                self._action_to_keys[action] = list(keys if isinstance(keys, list) else [keys])

        for action, keys in self._action_to_keys.items():
            for key in keys:
                self._key_to_action[key] = action

    def action_for(self, key: KeyId) -> EditAction | None:
        return self._key_to_action.get(key)


def _is_text(data: str) -> bool:
    return len(data) == 1 and data.isprintable()


class KeyWriter:
    """``Writer[str]``: applies one raw key sequence to the buffer and history.

    Printable characters without a binding are inserted. Every applied key
    redraws the line; ``submit`` only moves to a fresh line, the caller
    redraws once it has handled the submitted text.
    """

    def __init__(
        self,
        keybindings: KeybindingsManager | None = None,
        measure: Measure = "chars",
    ) -> None:
        self.keybindings = keybindings or KeybindingsManager()
        self.measure: Measure = measure

    def write(
        self,
        buffer: EditBuffer,
        history: History,
        event: str,
        sink: TerminalSink,
    ) -> str | None:
        key = parse_key(event)
        action = self.keybindings.action_for(key) if key is not None else None

        if action is None:
            if not _is_text(event):
                return None
            buffer.insert(event)
        elif action == "submit":
            line = buffer.submit(history)
            sink.write(b"\r\n")
            sink.flush()
            return line
        else:
            self._apply(action, buffer, history)

        write_prompt(buffer, sink)
        sync_cursor(buffer, sink, self.measure)
        return None

    def _apply(self, action: EditAction, buffer: EditBuffer, history: History) -> None:
        if action == "cursorLeft":
            buffer.move_left()
        elif action == "cursorRight":
            buffer.move_right()
        elif action == "cursorWordLeft":
            buffer.jump_left()
        elif action == "cursorWordRight":
            buffer.jump_right()
        elif action == "cursorLineStart":
            buffer.move_to_home()
        elif action == "cursorLineEnd":
            buffer.move_to_end()
        elif action == "deleteCharBackward":
            buffer.delete_before_cursor()
        elif action == "deleteToLineStart":
            buffer.clear_before_cursor()
        elif action == "deleteToLineEnd":
            buffer.clear_after_cursor()
        elif action == "clearLine":
            buffer.clear_all()
        elif action == "historyPrevious":
            if history.recall_previous(buffer.values):
                buffer.cursor = len(buffer.values)
        elif action == "historyNext":
            if history.recall_next(buffer.values):
                buffer.cursor = len(buffer.values)
