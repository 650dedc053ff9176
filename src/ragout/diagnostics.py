"""Optional per-session diagnostic logs.

A :class:`DiagnosticLog` writes one line per applied event to its own file
through a non-propagating :mod:`logging` logger named after that file, so
reopening a path reuses its logger. The session creates them only when
diagnostics are enabled in the configuration.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

E = TypeVar("E")

DEFAULT_LOG_DIR = Path("resources/logs/terminal")

_FORMAT = "%(asctime)s %(message)s"


class DiagnosticsError(OSError):
    """The diagnostic log could not be opened, even after creating its directory."""


def _open_handler(path: Path) -> logging.FileHandler:
    try:
        return logging.FileHandler(path, mode="w", encoding="utf-8")
    except OSError as e:
        logger.debug("Cannot open %s (%s), creating %s", path, e, path.parent)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(path, mode="w", encoding="utf-8")
    except OSError as e:
        raise DiagnosticsError(f"Cannot open diagnostic log {path}: {e}") from e


class DiagnosticLog(Generic[E]):
    """File-backed :class:`~ragout.dispatch.DebugLog` for events of type ``E``."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self._handler = _open_handler(self.path)
        self._handler.setFormatter(logging.Formatter(_FORMAT))

        self._logger = logging.getLogger(f"ragout.events.{self.path.resolve()}")
        self._logger.setLevel(logging.DEBUG)
        self._logger.propagate = False
        self._logger.addHandler(self._handler)

    def __repr__(self) -> str:
        return f"DiagnosticLog({str(self.path)!r})"

    def log(self, event: E) -> None:
        self._logger.debug("%r", event)

    def fileno(self) -> int:
        """Raw descriptor of the open log file."""
        return self._handler.stream.fileno()

    def close(self) -> None:
        self._logger.removeHandler(self._handler)
        self._handler.close()


def open_session_logs(
    log_dir: str | os.PathLike[str] = DEFAULT_LOG_DIR,
) -> tuple[DiagnosticLog, DiagnosticLog]:
    """Open the ``input`` and ``history`` logs under *log_dir*."""
    log_dir = Path(log_dir)
    input_log = DiagnosticLog(log_dir / "input")
    try:
        history_log = DiagnosticLog(log_dir / "history")
    except DiagnosticsError:
        input_log.close()
        raise
    return input_log, history_log
