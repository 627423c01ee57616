"""
Influx CLI

Copyright (c) 2024 John Dunlap.
Licensed under the MIT License. See LICENSE file for details.
"""

from .converters import CallableConverter, ConverterRegistry, TypeConverter
from .field_descriptor import FieldDescriptor
from .field_kind import FieldKind
from .help import render_help
from .parse_context import ParseContext
from .parser_types import Bound, Char, Failed, HelpRequested, ParseResult
from .schema import Schema, clear_schema_cache, extract_schema
from .states import ParserState
from .subcommands import resolve_command

__all__ = [
    "Bound",
    "CallableConverter",
    "Char",
    "ConverterRegistry",
    "Failed",
    "FieldDescriptor",
    "FieldKind",
    "HelpRequested",
    "ParseContext",
    "ParseResult",
    "ParserState",
    "Schema",
    "TypeConverter",
    "clear_schema_cache",
    "extract_schema",
    "render_help",
    "resolve_command",
]
