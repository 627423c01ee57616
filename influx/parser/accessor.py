# Influx CLI — (c) 2024 John Dunlap — MIT Licensed
"""
Resolves how a field of a command class is read and written.

Each field gets one `FieldAccessor` when its schema is extracted. The accessor
prefers explicit `get_<name>()` / `set_<name>(value)` methods on the class,
then plain attribute access, then `object.__setattr__` for classes that refuse
attribute assignment (frozen dataclasses).

Accessors raise `AttributeError` when every route fails; the binder turns that
into `InaccessibleFieldError` naming the field and the raw value.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from influx.logger import logger

_MISSING = object()


@dataclass(frozen=True)
class FieldAccessor:
    """A getter and setter pair for one field."""

    name: str
    getter: Callable[[Any], Any]
    setter: Callable[[Any, Any], None]

    def get(self, instance: Any) -> Any:
        return self.getter(instance)

    def set(self, instance: Any, value: Any) -> None:
        self.setter(instance, value)


def _read_attribute(name: str) -> Callable[[Any], Any]:
    def getter(instance: Any) -> Any:
        value = getattr(instance, name, _MISSING)
        if value is not _MISSING:
            return value
        namespace = getattr(instance, "__dict__", None)
        if namespace is not None:
            return namespace.get(name)
        if hasattr(type(instance), "__slots__"):
            return None
        raise AttributeError(f"{type(instance).__name__} has no readable '{name}'")

    return getter


def _write_attribute(name: str) -> Callable[[Any, Any], None]:
    def setter(instance: Any, value: Any) -> None:
        try:
            setattr(instance, name, value)
        except AttributeError:
            object.__setattr__(instance, name, value)

    return setter


def resolve_accessor(command_type: type, name: str) -> FieldAccessor:
    """Build the accessor for `name` on `command_type`."""
    getter_name = f"get_{name}"
    setter_name = f"set_{name}"

    if callable(getattr(command_type, getter_name, None)):
        logger.debug("Using %s.%s() to read '%s'", command_type.__name__, getter_name, name)

        def getter(instance: Any) -> Any:
            return getattr(instance, getter_name)()

    else:
        getter = _read_attribute(name)

    if callable(getattr(command_type, setter_name, None)):
        logger.debug("Using %s.%s() to write '%s'", command_type.__name__, setter_name, name)

        def setter(instance: Any, value: Any) -> None:
            getattr(instance, setter_name)(value)

    else:
        setter = _write_attribute(name)

    return FieldAccessor(name=name, getter=getter, setter=setter)
