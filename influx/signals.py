# Influx CLI — (c) 2024 John Dunlap — MIT Licensed
"""
Defines flow control signals raised while binding command-line arguments.

Signals inherit from `FlowSignal`, a subclass of `BaseException`, so that they
bypass `except Exception` blocks in user converters and accessors.

Signals:
- HelpSignal: A help token was encountered; carries the command type that was
  active so the caller can render help for it.
"""
from __future__ import annotations

from typing import Any


class FlowSignal(BaseException):
    """Base class for all flow control signals in Influx CLI.

    These are not errors. They end a bind early on an expected path.
    """


class HelpSignal(FlowSignal):
    """Raised when a help token halts parsing."""

    def __init__(self, command_type: Any = None, message: str = "Help signal received."):
        super().__init__(message)
        self.command_type = command_type
