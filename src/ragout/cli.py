"""CLI entry point for ragout. Runs a small echo shell on the line editor."""

from __future__ import annotations

import codecs
import logging
import os
import sys
from typing import Callable

import click

from ragout.bindings import KeybindingsManager, KeyWriter
from ragout.config import ConfigError, load_config
from ragout.diagnostics import DiagnosticsError
from ragout.keys import parse_key, split_keys
from ragout.render import encode
from ragout.session import Session

_QUIT_KEYS = ("ctrl+c", "ctrl+d")
_QUIT_COMMANDS = ("exit", "quit")


def _stdin_reader() -> Callable[[], bytes]:
    fd = sys.stdin.fileno()
    return lambda: os.read(fd, 4096)


def _echo_loop(session: Session, writer: KeyWriter, read: Callable[[], bytes]) -> None:
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    while True:
        raw = read()
        if not raw:
            return
        for key in split_keys(decoder.decode(raw)):
            if parse_key(key) in _QUIT_KEYS:
                return
            line = session.apply(writer, key)
            if line is None:
                continue
            if line.strip() in _QUIT_COMMANDS:
                return
            if line:
                session.sink.write(encode(line) + b"\r\n")
            session.redraw()


@click.command()
@click.version_option(package_name="ragout")
@click.option("--prompt", default=None, help="Prompt shown before the input line.")
@click.option(
    "--alt-screen/--no-alt-screen",
    default=None,
    help="Run in the terminal's alternate screen.",
)
@click.option(
    "--debug-logs/--no-debug-logs",
    default=None,
    help="Record every key event in <log-dir>/input and <log-dir>/history.",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory for the diagnostic logs.",
)
@click.option(
    "--measure",
    type=click.Choice(["chars", "cells"]),
    default=None,
    help="Count the cursor position in characters or terminal cells.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, exists=True),
    default=None,
    help="Config file (default: ~/.ragout/config.json).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="warning",
)
def main(prompt, alt_screen, debug_logs, log_dir, measure, config_path, log_level):
    """Echo every submitted line until exit, quit, ctrl+c or ctrl+d."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    # CLI options override config values
    if prompt is not None:
        config.prompt = prompt
    if alt_screen is not None:
        config.alt_screen = alt_screen
    if debug_logs is not None:
        config.debug_logs = debug_logs
    if log_dir is not None:
        config.log_dir = log_dir
    if measure is not None:
        config.measure = measure

    try:
        session = Session.from_config(config)
    except DiagnosticsError as e:
        raise click.ClickException(str(e)) from e

    try:
        writer = KeyWriter(KeybindingsManager(config.keybindings), measure=config.measure)
        _echo_loop(session, writer, _stdin_reader())
    finally:
        session.sink.write(b"\r\n")
        session.sink.flush()
        session.close()
