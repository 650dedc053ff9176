"""Editor configuration. Stored at ~/.ragout/config.json.

Environment variables override the file:

* ``RAGOUT_CONFIG_DIR`` -- directory holding ``config.json``
* ``RAGOUT_DEBUG_LOGS`` -- enable the per-session diagnostic logs
* ``RAGOUT_LOG_DIR`` -- where the diagnostic logs are written

The optional ``keybindings`` object overrides the default key ids of edit
actions, e.g. ``{"clearLine": ["ctrl+g"]}``.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import get_args

from ragout.bindings import EditAction, KeybindingsConfig
from ragout.diagnostics import DEFAULT_LOG_DIR
from ragout.render import Measure

_TRUE_VALUES = ("1", "true", "yes", "on")
_MEASURES = ("chars", "cells")


class ConfigError(ValueError):
    """The configuration file exists but cannot be used."""


@dataclass
class EditorConfig:
    prompt: str = "> "
    alt_screen: bool = False
    debug_logs: bool = False
    log_dir: str = str(DEFAULT_LOG_DIR)
    measure: Measure = "chars"
    keybindings: KeybindingsConfig = field(default_factory=dict)


def _get_config_dir() -> Path:
    return Path(os.environ.get("RAGOUT_CONFIG_DIR", Path.home() / ".ragout"))


def get_config_path() -> Path:
    return _get_config_dir() / "config.json"


def _keybindings_from_dict(data: object) -> KeybindingsConfig:
    if not isinstance(data, dict):
        raise ConfigError("keybindings must be an object of action -> key ids")
    bindings: KeybindingsConfig = {}
    for action, keys in data.items():
        if action not in get_args(EditAction):
            raise ConfigError(f"Unknown keybindings action {action!r}")
        if isinstance(keys, str):
            bindings[action] = keys
        elif isinstance(keys, list) and all(isinstance(k, str) for k in keys):
            bindings[action] = list(keys)
        else:
            raise ConfigError(f"keybindings.{action} must be a key id or a list of key ids")
    return bindings


def config_from_dict(data: dict) -> EditorConfig:
    """Deserialize an EditorConfig from a JSON-compatible dict."""
    config = EditorConfig()
    if "prompt" in data:
        config.prompt = str(data["prompt"])
    if "altScreen" in data:
        config.alt_screen = bool(data["altScreen"])
    if "debugLogs" in data:
        config.debug_logs = bool(data["debugLogs"])
    if "logDir" in data:
        config.log_dir = str(data["logDir"])
    if "measure" in data:
        if data["measure"] not in _MEASURES:
            raise ConfigError(
                f"measure must be one of {', '.join(_MEASURES)}, got {data['measure']!r}"
            )
        config.measure = data["measure"]
    if "keybindings" in data:
        config.keybindings = _keybindings_from_dict(data["keybindings"])
    return config


def config_to_dict(config: EditorConfig) -> dict:
    return {
        "prompt": config.prompt,
        "altScreen": config.alt_screen,
        "debugLogs": config.debug_logs,
        "logDir": config.log_dir,
        "measure": config.measure,
        "keybindings": dict(config.keybindings),
    }


def _apply_env(config: EditorConfig) -> EditorConfig:
    debug_logs = os.environ.get("RAGOUT_DEBUG_LOGS")
    if debug_logs is not None:
        config.debug_logs = debug_logs.strip().lower() in _TRUE_VALUES
    log_dir = os.environ.get("RAGOUT_LOG_DIR")
    if log_dir:
        config.log_dir = log_dir
    return config


def load_config(path: str | os.PathLike[str] | None = None) -> EditorConfig:
    """Load the config file (defaults when missing), then apply env overrides."""
    config_path = Path(path) if path is not None else get_config_path()
    if not config_path.exists():
        return _apply_env(EditorConfig())

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Error reading config {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a JSON object")
    return _apply_env(config_from_dict(data))


def save_config(config: EditorConfig, path: str | os.PathLike[str] | None = None) -> Path:
    config_path = Path(path) if path is not None else get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(config_to_dict(config), indent=2), encoding="utf-8")
    return config_path
