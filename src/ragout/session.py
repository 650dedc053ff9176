"""Session setup and the single-event step of the editing loop."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, TypeVar

from ragout.buffer import EditBuffer
from ragout.diagnostics import DiagnosticLog, open_session_logs
from ragout.history import History
from ragout.render import Measure, enter_alt_screen, leave_alt_screen, sync_cursor, write_prompt
from ragout.terminal import StdoutSink, TermAttrs, TerminalSink, enable_raw_mode, restore_mode

if TYPE_CHECKING:
    from ragout.config import EditorConfig
    from ragout.dispatch import Writer

logger = logging.getLogger(__name__)

E = TypeVar("E")


class Session:
    """One editing session: the output sink, the buffer and the history.

    Use :func:`init` (or :meth:`from_config`) to create one.
    """

    def __init__(
        self,
        sink: TerminalSink,
        buffer: EditBuffer,
        history: History,
        measure: Measure = "chars",
        saved_mode: TermAttrs | None = None,
        logs: list[DiagnosticLog] | None = None,
    ) -> None:
        self.sink = sink
        self.buffer = buffer
        self.history = history
        self.measure: Measure = measure
        self._saved_mode = saved_mode
        self._logs = logs or []

    @classmethod
    def from_config(
        cls,
        config: EditorConfig,
        sink: TerminalSink | None = None,
        raw_mode: bool = True,
    ) -> Session:
        return init(
            config.prompt,
            config.alt_screen,
            sink=sink,
            log_dir=config.log_dir if config.debug_logs else None,
            measure=config.measure,
            raw_mode=raw_mode,
        )

    def apply(self, writer: Writer[E], event: E) -> str | None:
        """Apply *event* through *writer*; return the submitted line, if any."""
        if self.buffer.diagnostics is not None:
            self.buffer.diagnostics.log(event)
        if self.history.diagnostics is not None:
            self.history.diagnostics.log(event)
        return writer.write(self.buffer, self.history, event, self.sink)

    def run(self, writer: Writer[E], read_event: Callable[[], E]) -> str:
        """Read one event and apply it.

        Returns the submitted line, or ``""`` when the event did not submit.
        """
        line = self.apply(writer, read_event())
        return line if line is not None else ""

    def redraw(self) -> None:
        write_prompt(self.buffer, self.sink)
        sync_cursor(self.buffer, self.sink, self.measure)

    def close(self) -> None:
        """Restore the terminal mode, leave the alternate screen and close logs."""
        if self.buffer.alt_screen:
            leave_alt_screen(self.sink)
        restore_mode(self._saved_mode)
        self._saved_mode = None
        for log in self._logs:
            log.close()
        self._logs = []


def init(
    prompt: str = "",
    alt_screen: bool = False,
    *,
    sink: TerminalSink | None = None,
    log_dir: str | None = None,
    measure: Measure = "chars",
    raw_mode: bool = True,
) -> Session:
    """Start an editing session and draw the prompt.

    Raw mode is enabled on a best-effort basis. With *alt_screen* the
    session switches to the alternate screen and homes the cursor first.
    When *log_dir* is given, every applied event is recorded in
    ``<log_dir>/input`` and ``<log_dir>/history``; failing to open those
    raises :class:`~ragout.diagnostics.DiagnosticsError`.
    """
    saved_mode = enable_raw_mode() if raw_mode else None

    sink = sink if sink is not None else StdoutSink()
    if alt_screen:
        enter_alt_screen(sink)

    logs: list[DiagnosticLog] = []
    if log_dir is not None:
        try:
            logs.extend(open_session_logs(log_dir))
        except OSError:
            if alt_screen:
                leave_alt_screen(sink)
            restore_mode(saved_mode)
            raise
        logger.debug("Diagnostic logs in %s", log_dir)

    buffer = EditBuffer(prompt, alt_screen, diagnostics=logs[0] if logs else None)
    history = History(diagnostics=logs[1] if logs else None)

    session = Session(sink, buffer, history, measure, saved_mode, logs)
    session.redraw()
    return session
