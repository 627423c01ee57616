# Influx CLI — (c) 2024 John Dunlap — MIT Licensed
"""
Defines `ParseContext`, the binder that owns one bind of tokens to a command.

A `ParseContext` holds the destination instance, the command's `Schema`, the
pending token stack and the positional cursor. `ParserState` drives it through
the token stream; the context performs every assignment:

- `bind_named` converts a token for the current option and stores it. Unknown
  options are ignored.
- `bind_positional` stores a token in the next positional slot.
- Collection fields accumulate values in order; scalars are overwritten.
- `apply_fallbacks` fills unset options from the environment, then from the
  `PropertyStore`. A list, tuple or set property fills a collection field one
  element at a time.
- `validate` enforces required fields and collection minimums.

Example:
    context = ParseContext(Deploy, ["-u", "http://x", "v1.2"])
    deploy = context.parse()
"""
from __future__ import annotations

import copy
import os
from collections import defaultdict, deque
from collections.abc import MutableSequence, MutableSet, Sequence
from collections.abc import Set as AbstractSet
from typing import Any, Generic, Sequence as SequenceType, TypeVar

from influx.exceptions import (
    InaccessibleFieldError,
    InfluxError,
    MissingConstructorError,
    ParseError,
    RequiredFieldError,
)
from influx.logger import logger
from influx.parser.converters import ConverterRegistry
from influx.parser.field_descriptor import FieldDescriptor
from influx.parser.schema import Schema, extract_schema
from influx.parser.states import ParserState
from influx.properties import PropertyStore

T = TypeVar("T")

_LIST_KINDS = (list, Sequence, MutableSequence)
_SET_KINDS = (set, AbstractSet, MutableSet)
_PROPERTY_COLLECTIONS = (list, tuple, set, frozenset, deque)


def new_collection(descriptor: FieldDescriptor) -> Any:
    """
    Create an empty collection of the field's concrete kind.

    Raises:
        AssertionError: If the field's collection kind cannot be created.
    """
    kind = descriptor.collection_type
    if kind in (tuple, frozenset, deque):
        return kind()
    if kind in _LIST_KINDS:
        return []
    if kind in _SET_KINDS:
        return set()
    if isinstance(kind, type) and issubclass(kind, (MutableSequence, MutableSet, deque)):
        try:
            return kind()
        except TypeError:
            pass
    raise AssertionError(
        f"Unsupported collection type {getattr(kind, '__name__', kind)!r} "
        f"for field '{descriptor.name}'"
    )


def append_value(descriptor: FieldDescriptor, collection: Any, value: Any) -> Any:
    """Add `value` to `collection`, returning the collection to store."""
    if isinstance(collection, (MutableSequence, deque)):
        collection.append(value)
        return collection
    if isinstance(collection, MutableSet):
        collection.add(value)
        return collection
    if isinstance(collection, tuple):
        return collection + (value,)
    if isinstance(collection, frozenset):
        return collection | {value}
    raise AssertionError(
        f"Unsupported collection type {type(collection).__name__!r} "
        f"for field '{descriptor.name}'"
    )


class ParseContext(Generic[T]):
    """
    Binds a list of tokens to a fresh instance of `command_type`.

    Attributes:
        command_type (type): The command class being bound.
        schema (Schema): Extracted fields of `command_type`.
        instance (T): The destination instance.
        stack (list[str]): Pending tokens; the next token is at the end.
        current_name (str | None): Option name awaiting its value.
        options_ended (bool): True once `--` has been consumed.
        command_path (tuple[str, ...]): Sub-command tokens that selected the type.
    """

    def __init__(
        self,
        command_type: type[T],
        args: SequenceType[str],
        converters: ConverterRegistry | None = None,
        properties: PropertyStore | None = None,
        command_path: tuple[str, ...] = (),
    ) -> None:
        self.command_type = command_type
        self.schema: Schema = extract_schema(command_type)
        self.converters = converters or ConverterRegistry()
        self.properties = properties
        self.command_path = command_path
        self.stack: list[str] = list(reversed(args))
        self.current_name: str | None = None
        self.options_ended = False
        self.position = 0
        self._position_counts: dict[str, int] = defaultdict(int)
        self._supplied: set[str] = set()
        self.instance: T = self._create_instance()
        self._initialize_defaults()

    def _create_instance(self) -> T:
        try:
            return self.command_type()
        except TypeError as error:
            raise MissingConstructorError(self.command_type, str(error)) from error

    def _initialize_defaults(self) -> None:
        for descriptor in self.schema.named_fields:
            if descriptor.is_boolean:
                self._set(descriptor, False, None)

    def has_tokens(self) -> bool:
        return bool(self.stack)

    def peek(self) -> str:
        return self.stack[-1]

    def pop(self) -> str:
        return self.stack.pop()

    def push(self, token: str) -> None:
        self.stack.append(token)

    def is_help_token(self, token: str) -> bool:
        return not self.options_ended and token in self.schema.help_tokens

    def is_boolean_option(self, name: str | None) -> bool:
        descriptor = self.schema.get_named(name)
        return descriptor is not None and descriptor.is_boolean

    def bind_named(self, value: str | None, name: str | None = None) -> None:
        """
        Bind `value` to the option `name`, or to the current option.

        Unknown option names are ignored.
        """
        name = self.current_name if name is None else name
        descriptor = self.schema.get_named(name)
        if descriptor is None:
            logger.debug(
                "Ignoring unrecognized option '%s' on %s",
                name,
                self.command_type.__name__,
            )
            return
        self._assign(descriptor, value)
        self._supplied.add(descriptor.name)

    def bind_positional(self, value: str) -> None:
        """
        Bind `value` to the next positional slot.

        Raises:
            ParseError: If every positional slot is already filled.
        """
        if self.position >= len(self.schema.positional):
            raise ParseError(f"Unexpected positional argument '{value}'", value=value)
        descriptor = self.schema.positional[self.position]
        self._assign(descriptor, value)
        self._supplied.add(descriptor.name)
        self._position_counts[descriptor.name] += 1

        if not descriptor.is_collection or (
            descriptor.max_values is not None
            and self._position_counts[descriptor.name] >= descriptor.max_values
        ):
            self.position += 1

    def _assign(self, descriptor: FieldDescriptor, value: str | None) -> None:
        if not descriptor.is_collection:
            converted = self.converters.convert(
                value, descriptor.value_type, descriptor.converter, descriptor
            )
            self._set(descriptor, converted, value)
            return

        converted = self.converters.convert(
            value, descriptor.element_type, descriptor.converter, descriptor
        )
        current = self._get(descriptor, value)
        if current is None:
            current = new_collection(descriptor)
        elif descriptor.name not in self._supplied:
            current = copy.copy(current)
        if descriptor.max_values is not None and len(current) >= descriptor.max_values:
            raise ParseError(
                f"Accepts at most {descriptor.max_values} value(s)",
                value=value,
                target_type=descriptor.value_type,
                field=descriptor,
            )
        self._set(descriptor, append_value(descriptor, current, converted), value)

    def _get(self, descriptor: FieldDescriptor, value: str | None = None) -> Any:
        try:
            return descriptor.get(self.instance)
        except InfluxError:
            raise
        except Exception as error:
            raise InaccessibleFieldError(descriptor, value) from error

    def _set(self, descriptor: FieldDescriptor, converted: Any, value: str | None) -> None:
        try:
            descriptor.set(self.instance, converted)
        except InfluxError:
            raise
        except Exception as error:
            raise InaccessibleFieldError(descriptor, value) from error

    def apply_fallbacks(self) -> None:
        """Fill unset options from the environment, then from the property store."""
        for descriptor in self.schema.named_fields:
            if not descriptor.env or descriptor.name in self._supplied:
                continue
            value = os.environ.get(descriptor.env)
            source = "environment"
            if value is None and self.properties is not None:
                value = self.properties.get(descriptor.env)
                source = "properties"
            if value is None:
                continue
            logger.debug(
                "Resolved %s from %s variable '%s'",
                descriptor.display_name,
                source,
                descriptor.env,
            )
            values = (
                value
                if descriptor.is_collection and isinstance(value, _PROPERTY_COLLECTIONS)
                else [value]
            )
            for item in values:
                self._assign(descriptor, self.converters.to_string(item))
                self._supplied.add(descriptor.name)

    def validate(self) -> None:
        """
        Check required fields and collection minimums.

        Raises:
            RequiredFieldError: If a required field is unset.
            ParseError: If a collection holds fewer than its minimum of values.
        """
        for descriptor in self.schema.required:
            value = self._get(descriptor)
            if value is None or (descriptor.is_collection and len(value) == 0):
                raise RequiredFieldError(descriptor)

        for descriptor in self.schema.fields:
            if not descriptor.is_collection or descriptor.min_values == 0:
                continue
            value = self._get(descriptor)
            count = 0 if value is None else len(value)
            if 0 < count < descriptor.min_values:
                raise ParseError(
                    f"Requires at least {descriptor.min_values} value(s), got {count}",
                    target_type=descriptor.value_type,
                    field=descriptor,
                )

    def run(self) -> None:
        """Drive the state machine until the token stack is exhausted."""
        state: ParserState | None = ParserState.NEUTRAL
        while state is not None:
            state = state.execute(self)

    def parse(self) -> T:
        """
        Consume every token and return the populated instance.

        Raises:
            HelpSignal: If a help token is encountered.
            InfluxError: On the first binding failure.
        """
        self.run()
        self.apply_fallbacks()
        self.validate()
        return self.instance

    def __repr__(self) -> str:
        return (
            f"ParseContext(command_type={self.command_type.__name__}, "
            f"pending={list(reversed(self.stack))!r}, position={self.position})"
        )
