from dataclasses import dataclass
from typing import Annotated

import pytest

from influx import Arg, InaccessibleFieldError, RequiredFieldError, arg
from influx.parser import ParseContext
from influx.parser.accessor import resolve_accessor


class Recorder:
    name: str

    def __init__(self):
        self._name = None
        self.calls = []

    def get_name(self):
        self.calls.append("get")
        return self._name

    def set_name(self, value):
        self.calls.append(("set", value))
        self._name = value


@dataclass(frozen=True)
class Frozen:
    level: int = arg(0, code="l")
    quiet: bool = arg(code="q")


class Broken:
    value: str = None

    def set_value(self, value):
        raise RuntimeError("read-only")


class Plain:
    host: Annotated[str, Arg(code="H", required=True)]
    port: int


def bind(command_type, args):
    return ParseContext(command_type, args).parse()


def test_getter_and_setter_methods_are_preferred():
    recorder = bind(Recorder, ["--name", "x"])
    assert recorder._name == "x"
    assert ("set", "x") in recorder.calls


def test_resolve_accessor_uses_methods():
    recorder = Recorder()
    accessor = resolve_accessor(Recorder, "name")
    accessor.set(recorder, "y")
    assert accessor.get(recorder) == "y"
    assert recorder.calls == [("set", "y"), "get"]


def test_frozen_dataclass_is_written_directly():
    frozen = bind(Frozen, ["-l", "3", "-q"])
    assert frozen.level == 3
    assert frozen.quiet is True


def test_failing_setter_is_reported():
    with pytest.raises(InaccessibleFieldError) as excinfo:
        bind(Broken, ["--value", "x"])
    error = excinfo.value
    assert error.field.name == "value"
    assert error.value == "x"
    assert isinstance(error.__cause__, RuntimeError)
    assert str(error) == "Unable to access field 'value' while binding 'x'"


def test_plain_class_annotations():
    plain = bind(Plain, ["-H", "db", "--port", "5432"])
    assert plain.host == "db"
    assert plain.port == 5432


def test_plain_class_unset_attribute_reads_as_none():
    with pytest.raises(RequiredFieldError):
        bind(Plain, ["--port", "1"])
