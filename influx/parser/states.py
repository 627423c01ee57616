# Influx CLI — (c) 2024 John Dunlap — MIT Licensed
"""
Defines `ParserState`, the three-state machine that classifies tokens.

States:
- NEUTRAL: Decide what the next token is. Flags move to FLAG without being
  consumed; a cluster such as `-abc` is split into `-a -b -c` and pushed back;
  `--` ends option parsing; anything else is bound as a positional value.
- FLAG: Consume a flag. Help tokens raise `HelpSignal`; otherwise the leading
  dashes are stripped and the name becomes the current option.
- VALUE: Bind the current option. Boolean options take no token and bind
  `true`; other options consume the next token. A trailing option without a
  value ends parsing without error.

Each state's `execute` returns the next state, or None once the tokens run out.
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from influx.signals import HelpSignal

if TYPE_CHECKING:
    from influx.parser.parse_context import ParseContext

END_OF_OPTIONS = "--"


class ParserState(Enum):
    """States of the token machine."""

    NEUTRAL = "neutral"
    FLAG = "flag"
    VALUE = "value"

    def execute(self, context: ParseContext) -> ParserState | None:
        if self is ParserState.NEUTRAL:
            return _neutral(context)
        if self is ParserState.FLAG:
            return _flag(context)
        return _value(context)

    def __str__(self) -> str:
        return self.value


def _neutral(context: ParseContext) -> ParserState | None:
    if not context.has_tokens():
        return None

    token = context.peek()
    if context.options_ended:
        context.bind_positional(context.pop())
        return ParserState.NEUTRAL

    if context.is_help_token(token):
        return ParserState.FLAG

    if token == END_OF_OPTIONS:
        context.pop()
        context.options_ended = True
        return ParserState.NEUTRAL

    if token.startswith("--"):
        return ParserState.FLAG

    if token.startswith("-") and len(token) > 1:
        if len(token) > 2:
            context.pop()
            for char in reversed(token[1:]):
                context.push(f"-{char}")
        return ParserState.FLAG

    context.bind_positional(context.pop())
    return ParserState.NEUTRAL


def _flag(context: ParseContext) -> ParserState:
    token = context.pop()
    if context.is_help_token(token):
        raise HelpSignal(context.command_type)

    if token.startswith("--"):
        context.current_name = token[2:]
    elif token.startswith("-"):
        context.current_name = token[1:]
    else:
        context.current_name = token
    return ParserState.VALUE


def _value(context: ParseContext) -> ParserState | None:
    if context.is_boolean_option(context.current_name):
        context.bind_named("true")
        return ParserState.NEUTRAL

    if not context.has_tokens():
        return None

    if context.is_help_token(context.peek()):
        return ParserState.FLAG

    context.bind_named(context.pop())
    return ParserState.NEUTRAL
