# Influx CLI — (c) 2024 John Dunlap — MIT Licensed
"""
Defines `FieldKind`, the classification given to every bindable field.

Each field of a command class is exactly one of:
- NAMED: bound through a long flag (`--name`) or a short code (`-n`).
- POSITIONAL: bound by its position among the non-flag tokens.
- COMMAND: a nested command class selected by a leading token.
"""
from __future__ import annotations

from enum import Enum


class FieldKind(Enum):
    """Classification of a bindable field."""

    NAMED = "named"
    POSITIONAL = "positional"
    COMMAND = "command"

    def __str__(self) -> str:
        return self.value
