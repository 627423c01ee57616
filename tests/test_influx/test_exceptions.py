import pytest

from influx import (
    DuplicateOptionError,
    HelpSignal,
    InfluxError,
    MissingConstructorError,
    ParseError,
    RequiredFieldError,
    UnsupportedTypeError,
)
from influx.exceptions import DEFAULT_ERROR_EXIT_STATUS
from influx.parser import FieldDescriptor, FieldKind


def make_field(**kwargs):
    defaults = {"name": "port", "kind": FieldKind.NAMED, "flag": "port", "value_type": int}
    defaults.update(kwargs)
    return FieldDescriptor(**defaults)


def test_hierarchy():
    assert issubclass(ParseError, InfluxError)
    assert issubclass(RequiredFieldError, ParseError)
    assert issubclass(DuplicateOptionError, ParseError)
    assert issubclass(UnsupportedTypeError, ParseError)
    assert issubclass(MissingConstructorError, InfluxError)
    assert not issubclass(HelpSignal, Exception)


def test_parse_error_defaults():
    error = ParseError(value="abc", target_type=int)
    assert str(error) == "Failed to parse string 'abc' into an instance of int"
    assert error.exit_status == DEFAULT_ERROR_EXIT_STATUS == 1
    assert error.field is None


@pytest.mark.parametrize(
    "field_status, explicit, expected",
    [
        (None, None, 1),
        (5, None, 5),
        (5, 9, 9),
        (None, 2, 2),
    ],
)
def test_parse_error_exit_status(field_status, explicit, expected):
    error = ParseError(
        value="abc",
        target_type=int,
        field=make_field(exit_status=field_status),
        exit_status=explicit,
    )
    assert error.exit_status == expected


def test_with_field_keeps_existing_field():
    first = make_field()
    second = make_field(name="other", flag="other")
    error = ParseError("bad", field=first)
    assert error.with_field(second) is error
    assert error.field is first
    assert str(error) == "--port: bad"


def test_required_field_error_positional():
    field = make_field(name="source", kind=FieldKind.POSITIONAL, flag=None, order=2)
    error = RequiredFieldError(field)
    assert str(error) == "Required argument <source> (position 2) is not set"


def test_code_only_display_name():
    field = make_field(flag=None, code="p")
    assert RequiredFieldError(field).message == "Required argument -p is not set"


def test_missing_constructor_error():
    error = MissingConstructorError(dict, "needs arguments")
    assert str(error) == "dict must be constructible without arguments: needs arguments"
    assert error.exit_status == 1


def test_help_signal_carries_command_type():
    signal = HelpSignal(int)
    assert signal.command_type is int
    assert str(signal) == "Help signal received."
