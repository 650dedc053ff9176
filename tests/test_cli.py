"""Tests for the ragout echo shell."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import pytest
from click.testing import CliRunner

import ragout.cli as cli


def _reader(*chunks: bytes) -> Callable[[], Callable[[], bytes]]:
    pending = list(chunks)

    def read() -> bytes:
        return pending.pop(0) if pending else b""

    return lambda: read


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RAGOUT_CONFIG_DIR", str(tmp_path / "cfg"))
    monkeypatch.delenv("RAGOUT_DEBUG_LOGS", raising=False)
    monkeypatch.delenv("RAGOUT_LOG_DIR", raising=False)


class TestEchoShell:
    """The shell echoes submitted lines until told to stop."""

    def test_echoes_and_exits(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(cli, "_stdin_reader", _reader(b"hi\r", b"exit\r"))
        result = CliRunner().invoke(cli.main, ["--prompt", "$ "])
        assert result.exit_code == 0, result.output
        assert b"\x1b[2K\r$ hi" in result.stdout_bytes
        assert b"hi\r\n" in result.stdout_bytes

    def test_utf8_split_across_reads(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(cli, "_stdin_reader", _reader(b"\xc3", b"\xa9\r", b"quit\r"))
        result = CliRunner().invoke(cli.main, [])
        assert result.exit_code == 0, result.output
        assert "é\r\n".encode("utf-8") in result.stdout_bytes

    def test_ctrl_d_stops(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(cli, "_stdin_reader", _reader(b"abc\x04", b"never\r"))
        result = CliRunner().invoke(cli.main, [])
        assert result.exit_code == 0, result.output
        assert b"never" not in result.stdout_bytes

    def test_end_of_input_stops(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(cli, "_stdin_reader", _reader())
        result = CliRunner().invoke(cli.main, [])
        assert result.exit_code == 0, result.output

    def test_alt_screen_bracketing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(cli, "_stdin_reader", _reader())
        result = CliRunner().invoke(cli.main, ["--alt-screen"])
        assert result.stdout_bytes.startswith(b"\x1b[?1049h\x1b[1;1f")
        assert result.stdout_bytes.endswith(b"\x1b[?1049l")


    def test_keybindings_from_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "keys.json"
        path.write_text(json.dumps({"keybindings": {"submit": "ctrl+o"}}), encoding="utf-8")
        monkeypatch.setattr(cli, "_stdin_reader", _reader(b"ab\r", b"c\x0f", b"exit\x0f"))
        result = CliRunner().invoke(cli.main, ["--config", str(path)])
        assert result.exit_code == 0, result.output
        assert b"abc\r\n" in result.stdout_bytes


class TestErrors:
    def test_bad_config(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{oops", encoding="utf-8")
        result = CliRunner().invoke(cli.main, ["--config", str(path)])
        assert result.exit_code == 1
        assert "Error reading config" in result.output

    def test_unopenable_debug_logs(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")
        result = CliRunner().invoke(
            cli.main, ["--debug-logs", "--log-dir", str(blocker / "logs")]
        )
        assert result.exit_code == 1
        assert "Cannot open diagnostic log" in result.output

    def test_debug_logs_written(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(cli, "_stdin_reader", _reader(b"ok\r", b"exit\r"))
        log_dir = tmp_path / "logs"
        result = CliRunner().invoke(cli.main, ["--debug-logs", "--log-dir", str(log_dir)])
        assert result.exit_code == 0, result.output
        assert "'o'" in (log_dir / "input").read_text(encoding="utf-8")
