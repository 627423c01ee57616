from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import Path
from typing import Literal, Union
from uuid import UUID

import pytest

from influx import MissingConstructorError, ParseError, UnsupportedTypeError
from influx.parser import (
    CallableConverter,
    Char,
    ConverterRegistry,
    FieldDescriptor,
    FieldKind,
    TypeConverter,
)
from influx.parser.converters import as_converter


class Color(Enum):
    RED = "red"
    BLUE = "blue"


class Opaque:
    pass


class Point:
    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y

    @classmethod
    def parse(cls, value: str) -> "Point":
        x, y = value.split(",")
        return cls(int(x), int(y))


@pytest.fixture
def registry():
    return ConverterRegistry()


@pytest.mark.parametrize(
    "value, target_type, expected",
    [
        ("42", int, 42),
        ("3.14", float, 3.14),
        ("hello", str, "hello"),
        ("", str, ""),
        ("true", bool, True),
        ("OFF", bool, False),
        ("yes", bool, True),
        ("1.50", Decimal, Decimal("1.50")),
        ("1/3", Fraction, Fraction(1, 3)),
        ("1+2j", complex, 1 + 2j),
        ("x", Char, "x"),
    ],
)
def test_convert_builtin(registry, value, target_type, expected):
    assert registry.convert(value, target_type) == expected


def test_missing_boolean_value_is_false(registry):
    assert registry.convert(None, bool) is False


def test_char_keeps_its_type(registry):
    assert isinstance(registry.convert("x", Char), Char)


@pytest.mark.parametrize(
    "value, target_type",
    [
        (42, int),
        (-7, int),
        (3.5, float),
        (True, bool),
        (False, bool),
        ("text", str),
        (Char("q"), Char),
        (Decimal("2.25"), Decimal),
        (Fraction(2, 3), Fraction),
        (complex(1, -2), complex),
    ],
)
def test_scalar_round_trip(registry, value, target_type):
    assert registry.convert(registry.to_string(value, target_type), target_type) == value


@pytest.mark.parametrize(
    "value, target_type",
    [
        ("abc", int),
        ("1.2.3", float),
        ("one", Decimal),
        ("1/0", Fraction),
        ("maybe", bool),
        ("abc", Char),
        ("", Char),
    ],
)
def test_convert_malformed(registry, value, target_type):
    with pytest.raises(ParseError) as excinfo:
        registry.convert(value, target_type)
    assert excinfo.value.value == value
    assert excinfo.value.target_type is target_type


def test_parse_error_message(registry):
    with pytest.raises(ParseError) as excinfo:
        registry.convert("abc", int)
    assert str(excinfo.value) == "Failed to parse string 'abc' into an instance of int"


def test_unsupported_type(registry):
    with pytest.raises(UnsupportedTypeError) as excinfo:
        registry.convert("value", Opaque)
    assert "Opaque" in str(excinfo.value)


def test_unsupported_mapping(registry):
    with pytest.raises(UnsupportedTypeError):
        registry.convert("a=b", dict)


def test_default_converters(registry):
    assert registry.convert("2024-01-02 03:04:05", datetime) == datetime(2024, 1, 2, 3, 4, 5)
    assert registry.convert("2024-01-02", date) == date(2024, 1, 2)
    assert registry.convert("13:45", time) == time(13, 45)
    assert registry.convert("90", timedelta) == timedelta(minutes=1, seconds=30)
    assert registry.convert("/tmp/data", Path) == Path("/tmp/data")
    assert registry.convert(
        "12345678-1234-5678-1234-567812345678", UUID
    ) == UUID("12345678-1234-5678-1234-567812345678")


def test_invalid_datetime(registry):
    with pytest.raises(ParseError) as excinfo:
        registry.convert("not a date", datetime)
    assert excinfo.value.target_type is datetime


def test_register_callable(registry):
    registry.register(Point, Point.parse)
    assert Point in registry
    point = registry.convert("3,4", Point)
    assert (point.x, point.y) == (3, 4)


def test_register_replaces_default(registry):
    registry.register(date, lambda value: date.fromordinal(int(value)))
    assert registry.convert("1", date) == date(1, 1, 1)


def test_registered_converter_failure_is_wrapped(registry):
    registry.register(Point, Point.parse)
    with pytest.raises(ParseError) as excinfo:
        registry.convert("nope", Point)
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert excinfo.value.value == "nope"


def test_override_converter_wins_over_registry(registry):
    registry.register(Opaque, lambda value: "registered")
    override = CallableConverter(lambda value: "override")
    assert registry.convert("a", Opaque, override) == "override"


def test_builtin_rules_win_over_override(registry):
    override = CallableConverter(lambda value: -1)
    assert registry.convert("5", int, override) == 5


def test_override_parse_error_gets_field(registry):
    def reject(value):
        raise ParseError("custom failure", value=value)

    descriptor = FieldDescriptor(name="target", kind=FieldKind.NAMED, flag="target")
    with pytest.raises(ParseError) as excinfo:
        registry.convert("a", Opaque, CallableConverter(reject), descriptor)
    assert excinfo.value.field is descriptor
    assert str(excinfo.value) == "--target: custom failure"


def test_enum_by_name_and_value(registry):
    assert registry.convert("RED", Color) is Color.RED
    assert registry.convert("blue", Color) is Color.BLUE
    with pytest.raises(ParseError) as excinfo:
        registry.convert("green", Color)
    assert "should be one of" in str(excinfo.value)


def test_literal(registry):
    assert registry.convert("fast", Literal["fast", "slow"]) == "fast"
    assert registry.convert("2", Literal[1, 2]) == 2
    with pytest.raises(ParseError):
        registry.convert("medium", Literal["fast", "slow"])


def test_union(registry):
    assert registry.convert("42", int | str) == 42
    assert registry.convert("abc", int | str) == "abc"
    assert registry.convert("3.5", Union[int, float]) == 3.5
    with pytest.raises(ParseError) as excinfo:
        registry.convert("abc", int | float)
    assert "could not be converted" in str(excinfo.value)


def test_to_string(registry):
    assert registry.to_string(True) == "true"
    assert registry.to_string(None) == ""
    assert registry.to_string(Color.BLUE) == "BLUE"
    assert registry.to_string(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05"
    assert registry.to_string(timedelta(seconds=90)) == "90.0"


def test_registry_from_mapping():
    registry = ConverterRegistry({Point: Point.parse})
    assert registry.convert("1,2", Point).y == 2


class Upper(TypeConverter[str]):
    type = str

    def read(self, value: str) -> str:
        return value.upper()


class NeedsFormat(TypeConverter[str]):
    def __init__(self, fmt: str):
        self.fmt = fmt

    def read(self, value: str) -> str:
        return self.fmt % value


def test_as_converter():
    assert as_converter(None) is None
    upper = Upper()
    assert as_converter(upper) is upper
    assert isinstance(as_converter(Upper), Upper)
    assert isinstance(as_converter(int), CallableConverter)
    assert Upper().write("abc") == "abc"


def test_as_converter_needs_no_argument_constructor():
    with pytest.raises(MissingConstructorError):
        as_converter(NeedsFormat)


def test_as_converter_rejects_values():
    with pytest.raises(TypeError):
        as_converter("not callable")


def test_register_requires_converter(registry):
    with pytest.raises(TypeError):
        registry.register(Point, None)
