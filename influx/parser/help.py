# Influx CLI — (c) 2024 John Dunlap — MIT Licensed
"""
Renders plain-text help for a command class from its `Schema`.

Layout:
- the command's opening text, or a default sentence,
- a `commands:` block listing sub-commands and their descriptions,
- named options grouped by category, the default group first and the other
  categories sorted by name; required options are marked with `*`,
- a `positional:` block listing positional fields in binding order,
- the command's closing text.

Option lines longer than `WORDWRAP_THRESHOLD` wrap with a hanging indent that
lines the continuation up under the description column.
"""
from __future__ import annotations

import textwrap
from decimal import Decimal
from enum import EnumMeta
from fractions import Fraction
from typing import Any

from influx.parser.field_descriptor import FieldDescriptor
from influx.parser.parser_types import Char
from influx.parser.schema import Schema, extract_schema
from influx.parser.utils import type_name

WORDWRAP_THRESHOLD = 80
DEFAULT_OPENING_TEXT = "The following options are accepted: "
DEFAULT_CATEGORY = "default"


def describe_type(value_type: Any) -> str:
    """Default description for a value of `value_type`."""
    if value_type is bool:
        return "Boolean flag which requires no argument"
    if value_type is str:
        return "Accepts a string value"
    if value_type in (float, Decimal):
        return "Accepts a floating point number"
    if value_type is Char:
        return "Accepts a single character"
    if value_type in (int, complex, Fraction):
        return "Accepts a number"
    if isinstance(value_type, EnumMeta):
        return f"Accepts one of: {', '.join(member.name for member in value_type)}"
    return f"Accepts a {type_name(value_type)} value"


def describe(descriptor: FieldDescriptor) -> str:
    if descriptor.description:
        return descriptor.description
    if descriptor.is_collection:
        element = describe_type(descriptor.element_type)
        return f"{element}; may be given more than once"
    return describe_type(descriptor.value_type)


def _wrap(line: str, indent: int) -> str:
    if len(line) <= WORDWRAP_THRESHOLD:
        return line
    return textwrap.fill(
        line,
        width=WORDWRAP_THRESHOLD,
        subsequent_indent=" " * indent,
        break_long_words=False,
        break_on_hyphens=False,
    )


def _render_commands(schema: Schema) -> str:
    lines = ["\ncommands:"]
    for descriptor in schema.commands:
        line = f"\n\t{descriptor.command_name}"
        if descriptor.description:
            line += f"\t\t{descriptor.description}"
        lines.append(line)
    lines.append("\n")
    return "".join(lines)


def _render_option(descriptor: FieldDescriptor, longest: int) -> str:
    marker = "* " if descriptor.required else "  "
    code = f"-{descriptor.code}" if descriptor.code else "  "
    separator = "," if descriptor.code else " "
    flag = descriptor.flag or ""
    line = f"{marker}{code}{separator} --{flag.ljust(longest)}  {describe(descriptor)}"
    return _wrap(line, 10 + longest)


def _render_named(schema: Schema) -> str:
    named = schema.named_fields
    if not named:
        return ""
    longest = max(len(descriptor.flag or "") for descriptor in named)

    categorized: dict[str, list[FieldDescriptor]] = {}
    for descriptor in named:
        category = descriptor.category or DEFAULT_CATEGORY
        categorized.setdefault(category, []).append(descriptor)

    categories = sorted(category for category in categorized if category != DEFAULT_CATEGORY)
    if DEFAULT_CATEGORY in categorized:
        categories.insert(0, DEFAULT_CATEGORY)

    text = ""
    for category in categories:
        if category != DEFAULT_CATEGORY:
            text += f"\n\n{category}:"
        for descriptor in categorized[category]:
            text += "\n" + _render_option(descriptor, longest)
    return text


def _render_positional(schema: Schema) -> str:
    if not schema.positional:
        return ""
    names = [f"<{descriptor.name}>" for descriptor in schema.positional]
    longest = max(len(name) for name in names)
    text = "\n\npositional:"
    for name, descriptor in zip(names, schema.positional):
        marker = "* " if descriptor.required else "  "
        line = f"{marker}{name.ljust(longest)}  {describe(descriptor)}"
        text += "\n" + _wrap(line, 4 + longest)
    return text


def render_help(command_type: type) -> str:
    """Return the help text for `command_type`."""
    schema = extract_schema(command_type)
    spec = schema.spec

    text = spec.opening_text if spec.opening_text is not None else DEFAULT_OPENING_TEXT
    if schema.commands:
        text += _render_commands(schema)
    text += _render_named(schema)
    text += _render_positional(schema)
    if spec.closing_text:
        text += "\n" + spec.closing_text
    return text
