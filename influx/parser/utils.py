# Influx CLI — (c) 2024 John Dunlap — MIT Licensed
"""
Naming, type introspection and coercion helpers for Influx argument binding.

Functions:
- camel_to_hyphen: Derive a long flag from a field name.
- type_name: Readable name of a type for diagnostics.
- split_annotated: Separate an `Annotated` type from its extras.
- unwrap_optional: Strip `None` from an optional type.
- collection_origin: Concrete collection kind of a list-like type, if any.
- collection_element_type: Element type declared on a collection type.
- coerce_bool: Convert a boolean literal to a bool.
- coerce_enum: Convert a string to an Enum member by name or value.
"""
import re
import types
from collections.abc import Collection, Mapping
from enum import EnumMeta
from typing import Annotated, Any, Union, get_args, get_origin

TRUE_LITERALS = frozenset({"true", "t", "yes", "y", "on", "1"})
FALSE_LITERALS = frozenset({"false", "f", "no", "n", "off", "0"})

_LOWER_UPPER = re.compile(r"(?<=[a-z0-9])([A-Z])")
_ACRONYM_WORD = re.compile(r"(?<=[A-Z])([A-Z][a-z])")


def camel_to_hyphen(name: str) -> str:
    """
    Convert a camelCase or snake_case identifier into a hyphenated flag.

    Examples:
        camel_to_hyphen("longValue")   → "long-value"
        camel_to_hyphen("long_value")  → "long-value"
        camel_to_hyphen("HTTPServer")  → "http-server"
    """
    name = _ACRONYM_WORD.sub(r"-\1", name)
    name = _LOWER_UPPER.sub(r"-\1", name)
    name = name.replace("_", "-").lower()
    return re.sub(r"-{2,}", "-", name).strip("-")


def type_name(target_type: Any) -> str:
    return getattr(target_type, "__name__", None) or repr(target_type)


def split_annotated(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    """Return the underlying type and the metadata extras of an `Annotated` type."""
    if get_origin(annotation) is Annotated:
        base, *extras = get_args(annotation)
        return base, tuple(extras)
    return annotation, ()


def is_union(annotation: Any) -> bool:
    return isinstance(annotation, types.UnionType) or get_origin(annotation) is Union


def unwrap_optional(annotation: Any) -> Any:
    """Strip `None` from `X | None`; other unions are returned unchanged."""
    if not is_union(annotation):
        return annotation
    members = [member for member in get_args(annotation) if member is not type(None)]
    if len(members) == 1:
        return members[0]
    return Union[tuple(members)]


def collection_origin(annotation: Any) -> type | None:
    """
    Return the collection kind of a list-like annotation.

    Strings, bytes and mappings are scalars for binding purposes and return None.
    """
    origin = get_origin(annotation) or annotation
    if not isinstance(origin, type):
        return None
    if issubclass(origin, (str, bytes, bytearray, Mapping)):
        return None
    if issubclass(origin, Collection):
        return origin
    return None


def collection_element_type(annotation: Any) -> Any:
    """Return the first type argument of a collection annotation, or None."""
    args = get_args(annotation)
    if not args or args[0] is Ellipsis:
        return None
    return args[0]


def coerce_bool(value: str) -> bool:
    """
    Convert a boolean literal to a bool.

    Accepts 'true', 'yes', 'on', '1' and their false counterparts in any case.

    Raises:
        ValueError: If the value is not a recognised boolean literal.
    """
    if isinstance(value, bool):
        return value
    normalized = value.strip().lower()
    if normalized in TRUE_LITERALS:
        return True
    if normalized in FALSE_LITERALS:
        return False
    raise ValueError(f"'{value}' is not a boolean literal")


def coerce_enum(value: Any, enum_type: EnumMeta) -> Any:
    """
    Convert a raw value or string to an Enum instance.

    Tries to resolve by member name first, then by value coerced to the type
    of the first member's value.

    Raises:
        ValueError: If the value cannot be resolved to a valid Enum member.
    """
    if isinstance(value, enum_type):
        return value

    if isinstance(value, str):
        try:
            return enum_type[value]
        except KeyError:
            pass

    base_type = type(next(iter(enum_type)).value)
    try:
        coerced_value = base_type(value)
        return enum_type(coerced_value)
    except (ValueError, TypeError):
        values = [str(enum.value) for enum in enum_type]
        raise ValueError(f"'{value}' should be one of {{{', '.join(values)}}}") from None
