"""
Influx CLI

Copyright (c) 2024 John Dunlap.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .exceptions import (
    DuplicateOptionError,
    InaccessibleFieldError,
    InfluxError,
    MissingConstructorError,
    ParseError,
    RequiredFieldError,
    UnsupportedTypeError,
)
from .influx import InfluxCli
from .metadata import Arg, CommandSpec, Ignore, Positional, arg, command, ignore, positional
from .parser import Bound, Char, Failed, HelpRequested, TypeConverter, render_help
from .properties import PropertyStore
from .signals import HelpSignal

logger = logging.getLogger("influx")


__all__ = [
    "Arg",
    "Bound",
    "Char",
    "CommandSpec",
    "DuplicateOptionError",
    "Failed",
    "HelpRequested",
    "HelpSignal",
    "Ignore",
    "InaccessibleFieldError",
    "InfluxCli",
    "InfluxError",
    "MissingConstructorError",
    "ParseError",
    "Positional",
    "PropertyStore",
    "RequiredFieldError",
    "TypeConverter",
    "UnsupportedTypeError",
    "arg",
    "command",
    "ignore",
    "positional",
    "render_help",
]
