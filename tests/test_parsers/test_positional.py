from dataclasses import dataclass

import pytest

from influx import ParseError, RequiredFieldError, arg, positional
from influx.parser import ParseContext


@dataclass
class Ordered:
    second: str = positional(1)
    third: list[str] = positional(2, default_factory=list)
    first: str = positional(0)
    fourth: tuple[str, ...] = positional(3, default=())


@dataclass
class Copy:
    verbose: bool = arg(code="v")
    target: str = positional(0, required=True)
    sources: list[str] = positional(1, max_values=None, default_factory=list)


@dataclass
class Window:
    pair: list[int] = positional(0, max_values=2, default_factory=list)
    rest: str = positional(1)


@dataclass
class Counter:
    count: int = positional(0, exit_status=7)


def bind(command_type, args):
    return ParseContext(command_type, args).parse()


def test_positional_order_ignores_declaration_order():
    ordered = bind(Ordered, ["a", "b", "c", "d"])
    assert ordered.first == "a"
    assert ordered.second == "b"
    assert ordered.third == ["c"]
    assert ordered.fourth == ("d",)


def test_partial_positionals():
    ordered = bind(Ordered, ["a"])
    assert ordered.first == "a"
    assert ordered.second is None
    assert ordered.third == []


def test_unbounded_positional_collection():
    copy = bind(Copy, ["dest", "a", "-v", "b"])
    assert copy.target == "dest"
    assert copy.sources == ["a", "b"]
    assert copy.verbose is True


def test_bounded_positional_collection():
    window = bind(Window, ["1", "2", "three"])
    assert window.pair == [1, 2]
    assert window.rest == "three"


def test_required_positional():
    with pytest.raises(RequiredFieldError) as excinfo:
        bind(Copy, ["-v"])
    assert "<target>" in str(excinfo.value)
    assert excinfo.value.field.name == "target"


def test_extra_positional():
    with pytest.raises(ParseError) as excinfo:
        bind(Window, ["1", "2", "three", "four"])
    assert excinfo.value.value == "four"


def test_positional_conversion_error():
    with pytest.raises(ParseError) as excinfo:
        bind(Counter, ["abc"])
    error = excinfo.value
    assert error.value == "abc"
    assert error.target_type is int
    assert error.field.name == "count"
    assert error.exit_status == 7
