# Influx CLI — (c) 2024 John Dunlap — MIT Licensed
"""
Type conversion for Influx argument binding.

A `TypeConverter` turns a raw token into a typed value (`read`) and back
(`write`). `ConverterRegistry.convert` resolves the conversion for a target type
in a fixed precedence:

1. `str` and `Any` pass through unchanged.
2. `bool`: a missing value is False, otherwise a boolean literal.
3. Numbers: `int`, `float`, `complex`, `Decimal` and `Fraction`.
4. `Char`: exactly one character.
5. The field's own converter, when one is declared.
6. The registry's per-type table, pre-seeded with date, time, path and UUID
   converters and extended through `register`.
7. Structural types: `Enum`, `Literal` and unions.

Anything else raises `UnsupportedTypeError`. Conversion failures raise
`ParseError` carrying the raw value, the target type and the field.

Example:
    registry = ConverterRegistry()
    registry.register(Version, Version.parse)
    registry.convert("1.2.0", Version)
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum, EnumMeta
from fractions import Fraction
from pathlib import Path
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Generic,
    Literal,
    Mapping,
    TypeVar,
    get_args,
    get_origin,
)
from uuid import UUID

from dateutil import parser as date_parser

from influx.exceptions import MissingConstructorError, ParseError, UnsupportedTypeError
from influx.logger import logger
from influx.parser.parser_types import Char
from influx.parser.utils import coerce_bool, coerce_enum, is_union, type_name

if TYPE_CHECKING:
    from influx.parser.field_descriptor import FieldDescriptor

T = TypeVar("T")

NUMERIC_TYPES: tuple[type, ...] = (int, float, complex, Decimal, Fraction)


class TypeConverter(ABC, Generic[T]):
    """
    Converts between raw tokens and values of one target type.

    Subclasses implement `read`; `write` defaults to `str()`.
    """

    type: Any = None

    @abstractmethod
    def read(self, value: str) -> T:
        """Convert a raw token into a value."""

    def write(self, value: T) -> str:
        """Convert a value back into a token."""
        return str(value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(type={type_name(self.type)})"


class CallableConverter(TypeConverter[T]):
    """Adapts a plain callable, e.g. a constructor or `Version.parse`."""

    def __init__(
        self,
        read: Callable[[str], T],
        write: Callable[[T], str] = str,
        target_type: Any = None,
    ) -> None:
        self._read = read
        self._write = write
        self.type = target_type

    def read(self, value: str) -> T:
        return self._read(value)

    def write(self, value: T) -> str:
        return self._write(value)

    def __repr__(self) -> str:
        return f"CallableConverter(read={self._read!r})"


class DateTimeConverter(TypeConverter[datetime]):
    """Parses most common date and time formats through `dateutil`."""

    type = datetime

    def read(self, value: str) -> datetime:
        return date_parser.parse(value)

    def write(self, value: datetime) -> str:
        return value.isoformat()


class DateConverter(TypeConverter[date]):
    type = date

    def read(self, value: str) -> date:
        return date_parser.parse(value).date()

    def write(self, value: date) -> str:
        return value.isoformat()


class TimeConverter(TypeConverter[time]):
    type = time

    def read(self, value: str) -> time:
        return date_parser.parse(value).timetz()

    def write(self, value: time) -> str:
        return value.isoformat()


class TimedeltaConverter(TypeConverter[timedelta]):
    """Reads a duration given in seconds."""

    type = timedelta

    def read(self, value: str) -> timedelta:
        return timedelta(seconds=float(value))

    def write(self, value: timedelta) -> str:
        return str(value.total_seconds())


class PathConverter(TypeConverter[Path]):
    type = Path

    def read(self, value: str) -> Path:
        return Path(value).expanduser()


class UUIDConverter(TypeConverter[UUID]):
    type = UUID

    def read(self, value: str) -> UUID:
        return UUID(value)


def _is_char(target_type: Any) -> bool:
    return (
        isinstance(target_type, type)
        and get_origin(target_type) is None
        and issubclass(target_type, Char)
    )


def default_converters() -> dict[Any, TypeConverter]:
    """Return a fresh table of the converters every registry starts with."""
    return {
        datetime: DateTimeConverter(),
        date: DateConverter(),
        time: TimeConverter(),
        timedelta: TimedeltaConverter(),
        Path: PathConverter(),
        UUID: UUIDConverter(),
    }


def as_converter(converter: Any, target_type: Any = None) -> TypeConverter | None:
    """
    Normalize a converter declaration.

    Accepts a `TypeConverter` instance, a `TypeConverter` subclass (created
    without arguments) or a plain callable taking the raw token.

    Raises:
        MissingConstructorError: If a converter class needs constructor arguments.
        TypeError: If the declaration is none of the above.
    """
    if converter is None or isinstance(converter, TypeConverter):
        return converter
    if isinstance(converter, type) and issubclass(converter, TypeConverter):
        try:
            return converter()
        except TypeError as error:
            raise MissingConstructorError(converter, str(error)) from error
    if callable(converter):
        return CallableConverter(converter, target_type=target_type)
    raise TypeError(f"{converter!r} is not a TypeConverter or callable")


class ConverterRegistry:
    """
    Per-type converter table plus the built-in conversion rules.

    The registry is only read while a bind is running; register converters
    before binding.
    """

    def __init__(self, converters: Mapping[Any, Any] | None = None) -> None:
        self._converters: dict[Any, TypeConverter] = default_converters()
        if converters:
            for target_type, converter in converters.items():
                self.register(target_type, converter)

    def register(self, target_type: Any, converter: Any) -> None:
        """Register or replace the converter for `target_type`."""
        resolved = as_converter(converter, target_type)
        if resolved is None:
            raise TypeError(f"A converter is required for {type_name(target_type)}")
        self._converters[target_type] = resolved
        logger.debug("Registered %r for %s", resolved, type_name(target_type))

    def get(self, target_type: Any) -> TypeConverter | None:
        return self._converters.get(target_type)

    def __contains__(self, target_type: Any) -> bool:
        return target_type in self._converters

    def convert(
        self,
        value: str | None,
        target_type: Any,
        converter: TypeConverter | None = None,
        field: FieldDescriptor | None = None,
    ) -> Any:
        """
        Convert a raw token into an instance of `target_type`.

        Args:
            value (str | None): The raw token. None is only valid for booleans.
            target_type (Any): The desired type.
            converter (TypeConverter | None): A field-level override.
            field (FieldDescriptor | None): Field attached to raised errors.

        Raises:
            ParseError: If the token is malformed for the target type.
            UnsupportedTypeError: If no rule or converter handles the type.
        """
        try:
            return self._convert(value, target_type, converter)
        except ParseError as error:
            if field is not None:
                error.with_field(field)
            raise

    def _convert(
        self, value: str | None, target_type: Any, converter: TypeConverter | None
    ) -> Any:
        if target_type is str or target_type is Any or target_type is object:
            return value

        if target_type is bool:
            if value is None:
                return False
            try:
                return coerce_bool(value)
            except ValueError as error:
                raise ParseError(value=value, target_type=bool) from error

        if value is None:
            raise ParseError(
                f"A value is required for {type_name(target_type)}",
                target_type=target_type,
            )

        if target_type in NUMERIC_TYPES:
            try:
                return target_type(value.strip())
            except (ValueError, ArithmeticError, InvalidOperation) as error:
                raise ParseError(value=value, target_type=target_type) from error

        if _is_char(target_type):
            if len(value) != 1:
                raise ParseError(
                    f"'{value}' is not a single character",
                    value=value,
                    target_type=target_type,
                )
            return target_type(value)

        if converter is not None:
            return self._read(converter, value, target_type)

        registered = self._converters.get(target_type)
        if registered is not None:
            return self._read(registered, value, target_type)

        return self._convert_structural(value, target_type)

    def _read(self, converter: TypeConverter, value: str, target_type: Any) -> Any:
        try:
            return converter.read(value)
        except ParseError:
            raise
        except Exception as error:
            raise ParseError(
                f"Failed to parse string '{value}' into an instance of "
                f"{type_name(target_type)}: {error}",
                value=value,
                target_type=target_type,
            ) from error

    def _convert_structural(self, value: str, target_type: Any) -> Any:
        if get_origin(target_type) is Literal:
            for literal in get_args(target_type):
                if value == literal or value == str(literal):
                    return literal
            choices = ", ".join(str(literal) for literal in get_args(target_type))
            raise ParseError(
                f"'{value}' should be one of {{{choices}}}",
                value=value,
                target_type=target_type,
            )

        if is_union(target_type):
            for member in get_args(target_type):
                if member is type(None):
                    continue
                try:
                    return self._convert(value, member, None)
                except ParseError:
                    continue
            raise ParseError(
                f"'{value}' could not be converted to any of {get_args(target_type)}",
                value=value,
                target_type=target_type,
            )

        if isinstance(target_type, EnumMeta):
            try:
                return coerce_enum(value, target_type)
            except ValueError as error:
                raise ParseError(
                    str(error), value=value, target_type=target_type
                ) from error

        raise UnsupportedTypeError(value, target_type)

    def to_string(
        self,
        value: Any,
        target_type: Any = None,
        converter: TypeConverter | None = None,
    ) -> str:
        """Convert a typed value back into a token that `convert` accepts."""
        if value is None:
            return ""
        target_type = target_type if target_type is not None else type(value)
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, str) or target_type in NUMERIC_TYPES:
            return str(value)
        if converter is not None:
            return converter.write(value)
        registered = self._converters.get(target_type)
        if registered is not None:
            return registered.write(value)
        if isinstance(value, Enum):
            return value.name
        return str(value)
