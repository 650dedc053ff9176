"""Tests for session setup, event application and teardown."""

from __future__ import annotations

from pathlib import Path

import pytest

from ragout.bindings import KeyWriter
from ragout.buffer import EditBuffer
from ragout.config import EditorConfig
from ragout.diagnostics import DiagnosticsError
from ragout.history import History
from ragout.session import Session, init

from .virtual_terminal import VirtualTerminal


class RecordingLog:
    """DebugLog test double."""

    def __init__(self) -> None:
        self.events: list[object] = []

    def log(self, event: object) -> None:
        self.events.append(event)


class WordWriter:
    """Writer[str] over whole words: each event is inserted then submitted."""

    def write(
        self,
        buffer: EditBuffer,
        history: History,
        event: str,
        sink: VirtualTerminal,
    ) -> str | None:
        for c in event:
            buffer.insert(c)
        return buffer.submit(history)


class TestInit:
    """init() prepares the buffer, history and screen."""

    def test_draws_prompt(self) -> None:
        term = VirtualTerminal()
        session = init("some prompt> ", sink=term, raw_mode=False)
        assert session.buffer.prompt == "some prompt> "
        assert session.buffer.values == []
        assert session.history.values == []
        assert term.output.startswith(b"\x1b[2K\rsome prompt> ")

    def test_alt_screen_comes_first(self) -> None:
        term = VirtualTerminal()
        session = init("> ", True, sink=term, raw_mode=False)
        assert session.buffer.alt_screen is True
        assert term.output.startswith(b"\x1b[?1049h\x1b[1;1f\x1b[2K\r> ")

    def test_no_alt_screen(self) -> None:
        term = VirtualTerminal()
        init("> ", False, sink=term, raw_mode=False)
        assert b"\x1b[?1049h" not in term.output

    def test_without_diagnostics(self) -> None:
        session = init("> ", sink=VirtualTerminal(), raw_mode=False)
        assert session.buffer.diagnostics is None
        assert session.history.diagnostics is None

    def test_with_diagnostics(self, tmp_path: Path) -> None:
        session = init("> ", sink=VirtualTerminal(), log_dir=str(tmp_path / "logs"), raw_mode=False)
        try:
            session.apply(KeyWriter(), "x")
        finally:
            session.close()
        assert "'x'" in (tmp_path / "logs" / "input").read_text(encoding="utf-8")
        assert "'x'" in (tmp_path / "logs" / "history").read_text(encoding="utf-8")

    def test_diagnostics_failure_is_fatal(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(DiagnosticsError):
            init("> ", sink=VirtualTerminal(), log_dir=str(blocker), raw_mode=False)

    def test_diagnostics_failure_leaves_alt_screen(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")
        term = VirtualTerminal()
        with pytest.raises(DiagnosticsError):
            init("> ", True, sink=term, log_dir=str(blocker), raw_mode=False)
        assert term.output == b"\x1b[?1049h\x1b[1;1f\x1b[?1049l"

    def test_from_config(self) -> None:
        config = EditorConfig(prompt="$ ", alt_screen=True, measure="cells")
        term = VirtualTerminal()
        session = Session.from_config(config, sink=term, raw_mode=False)
        assert session.buffer.prompt == "$ "
        assert session.measure == "cells"
        assert session.buffer.diagnostics is None


class TestApplyAndRun:
    """apply() notifies diagnostics and delegates to the writer."""

    def _session(self) -> Session:
        return Session(VirtualTerminal(), EditBuffer("> "), History())

    def test_apply_returns_submitted_line(self) -> None:
        session = self._session()
        assert session.apply(WordWriter(), "hello") == "hello"
        assert session.history.values == [list("hello")]

    def test_apply_notifies_diagnostics(self) -> None:
        input_log, history_log = RecordingLog(), RecordingLog()
        session = Session(
            VirtualTerminal(),
            EditBuffer("> ", diagnostics=input_log),
            History(diagnostics=history_log),
        )
        session.apply(KeyWriter(), "a")
        session.apply(KeyWriter(), "\x7f")
        assert input_log.events == ["a", "\x7f"]
        assert history_log.events == ["a", "\x7f"]

    def test_run_reads_one_event(self) -> None:
        session = self._session()
        events = iter(["h", "i", "\r"])
        writer = KeyWriter()
        assert session.run(writer, lambda: next(events)) == ""
        assert session.run(writer, lambda: next(events)) == ""
        assert session.run(writer, lambda: next(events)) == "hi"
        assert session.buffer.values == []

    def test_redraw(self) -> None:
        session = self._session()
        session.buffer.insert("a")
        session.redraw()
        assert session.sink.output == b"\x1b[2K\r> a\r" + b"\x1b[C" * 4


class TestClose:
    def test_leaves_alt_screen(self) -> None:
        term = VirtualTerminal()
        session = init("> ", True, sink=term, raw_mode=False)
        term.clear_buffer()
        session.close()
        assert term.output == b"\x1b[?1049l"

    def test_nothing_written_without_alt_screen(self) -> None:
        term = VirtualTerminal()
        session = init("> ", sink=term, raw_mode=False)
        term.clear_buffer()
        session.close()
        assert term.output == b""
