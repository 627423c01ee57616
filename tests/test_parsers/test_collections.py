from collections import deque
from collections.abc import Collection, Sequence
from dataclasses import dataclass

import pytest

from influx import ParseError, RequiredFieldError, arg
from influx.parser import ParseContext


@dataclass
class Bag:
    items: list[str] = arg(code="l", default_factory=list)
    numbers: set[int] = arg(code="n")
    pair: tuple[int, ...] = arg(code="t")
    queue: deque[str] = arg(code="q")
    frozen: frozenset[str] = arg(code="f")
    seq: Sequence[int] = arg(code="s")


@dataclass
class Limits:
    tags: list[str] = arg(code="t", max_values=2, default_factory=list)
    hosts: list[str] = arg(code="H", min_values=2, default_factory=list)
    ports: list[int] = arg(code="p", required=True, default_factory=list)


@dataclass
class Unsupported:
    things: Collection[str] = arg(code="c")


def bind(command_type, args):
    return ParseContext(command_type, args).parse()


def test_repeated_flag_accumulates_in_order():
    bag = bind(Bag, ["-l", "one", "-l", "two", "--items", "three"])
    assert bag.items == ["one", "two", "three"]


def test_collection_kinds():
    bag = bind(
        Bag,
        [
            "-n", "1", "-n", "2", "-n", "1",
            "-t", "1", "-t", "2",
            "-q", "a", "-q", "b",
            "-f", "x", "-f", "y",
            "-s", "5", "-s", "6",
        ],
    )
    assert bag.numbers == {1, 2}
    assert bag.pair == (1, 2)
    assert bag.queue == deque(["a", "b"])
    assert bag.frozen == frozenset({"x", "y"})
    assert bag.seq == [5, 6]


def test_unset_collections_stay_unset():
    bag = bind(Bag, [])
    assert bag.items == []
    assert bag.numbers is None
    assert bag.pair is None


def test_default_lists_are_not_shared():
    first = bind(Bag, ["-l", "a"])
    second = bind(Bag, [])
    assert first.items == ["a"]
    assert second.items == []


def test_element_conversion_error():
    with pytest.raises(ParseError) as excinfo:
        bind(Bag, ["-n", "1", "-n", "two"])
    assert excinfo.value.value == "two"
    assert excinfo.value.target_type is int
    assert excinfo.value.field.name == "numbers"


def test_max_values():
    limits = bind(Limits, ["-t", "a", "-t", "b", "-p", "1"])
    assert limits.tags == ["a", "b"]
    with pytest.raises(ParseError) as excinfo:
        bind(Limits, ["-t", "a", "-t", "b", "-t", "c", "-p", "1"])
    assert str(excinfo.value) == "--tags: Accepts at most 2 value(s)"


def test_min_values():
    with pytest.raises(ParseError) as excinfo:
        bind(Limits, ["-H", "a", "-p", "1"])
    assert "at least 2" in str(excinfo.value)
    assert bind(Limits, ["-H", "a", "-H", "b", "-p", "1"]).hosts == ["a", "b"]


def test_required_collection_must_not_be_empty():
    with pytest.raises(RequiredFieldError) as excinfo:
        bind(Limits, [])
    assert str(excinfo.value) == "Required argument --ports is not set"


def test_unsupported_collection_kind():
    with pytest.raises(AssertionError) as excinfo:
        bind(Unsupported, ["-c", "x"])
    assert "things" in str(excinfo.value)


class PlainTags:
    tags: list[str] = []
    labels: set[str] = {"base"}


def test_class_level_collection_defaults_are_not_mutated():
    first = bind(PlainTags, ["--tags", "a", "--labels", "x"])
    second = bind(PlainTags, ["--tags", "b"])
    assert first.tags == ["a"]
    assert first.labels == {"base", "x"}
    assert second.tags == ["b"]
    assert second.labels == {"base"}
    assert PlainTags.tags == []
    assert PlainTags.labels == {"base"}
