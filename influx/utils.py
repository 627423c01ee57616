# Influx CLI — (c) 2024 John Dunlap — MIT Licensed
"""
Logging setup for programs that bind their arguments with Influx CLI.

The library only logs to the `influx` logger. Entry points that want output
call `setup_logging()` once, choosing Rich console logs ("cli") or JSON logs
("json"); `INFLUX_LOG_MODE` picks the mode when none is passed.
"""
from __future__ import annotations

import logging
import os

import pythonjsonlogger.json
from rich.logging import RichHandler

LOG_MODES = ("cli", "json")
JSON_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
TEXT_LOG_FORMAT = "%(asctime)s [%(name)s] [%(levelname)s] %(message)s"


def _json_formatter() -> logging.Formatter:
    return pythonjsonlogger.json.JsonFormatter(JSON_LOG_FORMAT)


def _console_handler(mode: str) -> logging.Handler:
    if mode == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(_json_formatter())
        return handler
    return RichHandler(
        rich_tracebacks=True,
        show_path=False,
        markup=False,
        log_time_format="[%Y-%m-%d %H:%M:%S]",
    )


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = "influx.log",
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
) -> None:
    """
    Replace the root logger's handlers with a console handler and, optionally,
    a file handler.

    Args:
        mode (str | None): "cli" for Rich console logs or "json" for JSON lines.
            Defaults to `INFLUX_LOG_MODE`, then "cli".
        log_filename (str | None): Log file path. None disables file logging.
        json_log_to_file (bool): Write the file log as JSON instead of text.
        file_log_level (int): Level for the file handler.
        console_log_level (int): Level for the console handler.

    Raises:
        ValueError: If `mode` is not a known log mode.
    """
    mode = mode or os.getenv("INFLUX_LOG_MODE") or "cli"
    if mode not in LOG_MODES:
        raise ValueError(f"Invalid log mode: {mode}")

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()

    console_handler = _console_handler(mode)
    console_handler.setLevel(console_log_level)
    root.addHandler(console_handler)

    if log_filename:
        file_handler = logging.FileHandler(log_filename, "a", "UTF-8")
        file_handler.setLevel(file_log_level)
        file_handler.setFormatter(
            _json_formatter()
            if json_log_to_file
            else logging.Formatter(TEXT_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )
        root.addHandler(file_handler)

    logging.getLogger("influx").debug("Logging initialized in '%s' mode.", mode)
