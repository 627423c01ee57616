# Influx CLI — (c) 2024 John Dunlap — MIT Licensed
"""
Value types and parse results for Influx argument binding.

Contents:
- `Char`: A single-character string type for fields that accept one character.
- `Bound`: Successful bind carrying the populated instance.
- `HelpRequested`: A help token halted parsing for the given command type.
- `Failed`: The bind stopped on an `InfluxError`.

`InfluxCli.parse` returns one of the three result types, so callers can branch on
help and failure without catching exceptions.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from influx.exceptions import InfluxError

T = TypeVar("T")


class Char(str):
    """A string of exactly one character."""

    def __new__(cls, value: str) -> Char:
        if len(value) != 1:
            raise ValueError(f"'{value}' is not a single character")
        return super().__new__(cls, value)


@dataclass(frozen=True)
class Bound(Generic[T]):
    """A successfully bound instance and the sub-command path that selected it."""

    instance: T
    command_path: tuple[str, ...] = ()


@dataclass(frozen=True)
class HelpRequested:
    """Parsing stopped on a help token while `command_type` was active."""

    command_type: Any


@dataclass(frozen=True)
class Failed:
    """Parsing stopped on an error."""

    error: InfluxError

    @property
    def exit_status(self) -> int:
        return self.error.exit_status


ParseResult = Union[Bound[Any], HelpRequested, Failed]
