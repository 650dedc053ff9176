"""ragout: terminal line editing with word jumps and command history."""

# Editing core
from ragout.buffer import STOPPERS, EditBuffer
from ragout.history import History, MissingDraftError

# Default key handling
from ragout.bindings import (
    DEFAULT_KEYBINDINGS,
    EditAction,
    KeybindingsManager,
    KeyWriter,
)
from ragout.keys import KeyId, parse_key, split_keys

# Configuration
from ragout.config import ConfigError, EditorConfig, load_config, save_config

# Diagnostics
from ragout.diagnostics import DiagnosticLog, DiagnosticsError, open_session_logs

# Dispatch contracts
from ragout.dispatch import DebugLog, Writer

# Rendering
from ragout.render import (
    encode,
    enter_alt_screen,
    leave_alt_screen,
    sync_cursor,
    write_prompt,
)

# Session
from ragout.session import Session, init

# Terminal
from ragout.terminal import StdoutSink, TerminalSink, enable_raw_mode, restore_mode

# Utilities
from ragout.utils import visible_width

__all__ = [
    # Core
    "STOPPERS",
    "EditBuffer",
    "History",
    "MissingDraftError",
    # Keys
    "DEFAULT_KEYBINDINGS",
    "EditAction",
    "KeybindingsManager",
    "KeyWriter",
    "KeyId",
    "parse_key",
    "split_keys",
    # Config
    "ConfigError",
    "EditorConfig",
    "load_config",
    "save_config",
    # Diagnostics
    "DiagnosticLog",
    "DiagnosticsError",
    "open_session_logs",
    # Dispatch
    "DebugLog",
    "Writer",
    # Rendering
    "encode",
    "enter_alt_screen",
    "leave_alt_screen",
    "sync_cursor",
    "write_prompt",
    # Session
    "Session",
    "init",
    # Terminal
    "StdoutSink",
    "TerminalSink",
    "enable_raw_mode",
    "restore_mode",
    # Utilities
    "visible_width",
]
