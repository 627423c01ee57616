# Influx CLI — (c) 2024 John Dunlap — MIT Licensed
"""
Extracts the bindable fields of a command class into a `Schema`.

Fields are discovered from `dataclasses.fields()` for dataclasses and from the
class annotations otherwise. Metadata comes from dataclass field metadata or
`typing.Annotated` extras (see `influx.metadata`). Each field is classified as:

- a sub-command, when its type is a `@command` class,
- positional, when it carries `Positional` metadata,
- named, otherwise; the long flag defaults to the hyphenated field name.

Private names, `ClassVar` annotations and ignored fields are skipped.

Schemas depend only on the class, so `extract_schema` builds each one once and
caches it behind a lock. `clear_schema_cache()` drops the cache.
"""
from __future__ import annotations

import dataclasses
import inspect
import threading
from dataclasses import dataclass, field
from typing import Any, ClassVar, get_origin, get_type_hints

from influx.exceptions import DuplicateOptionError, MissingConstructorError
from influx.logger import logger
from influx.metadata import (
    METADATA_KEY,
    Arg,
    CommandSpec,
    Ignore,
    Positional,
    get_command_spec,
)
from influx.parser.accessor import resolve_accessor
from influx.parser.converters import as_converter
from influx.parser.field_descriptor import FieldDescriptor
from influx.parser.field_kind import FieldKind
from influx.parser.utils import (
    camel_to_hyphen,
    collection_element_type,
    collection_origin,
    split_annotated,
    unwrap_optional,
)

_SCHEMA_CACHE: dict[type, Schema] = {}
_SCHEMA_LOCK = threading.Lock()


@dataclass
class Schema:
    """
    The bindable fields of one command class.

    Attributes:
        command_type (type): The command class.
        spec (CommandSpec): Command metadata, defaults when undecorated.
        fields (list[FieldDescriptor]): Every field in declaration order.
        named (dict[str, FieldDescriptor]): Named fields keyed by flag and code.
        positional (list[FieldDescriptor]): Positional fields in binding order.
        required (list[FieldDescriptor]): Fields checked after parsing.
        commands (list[FieldDescriptor]): Sub-command fields.
    """

    command_type: type
    spec: CommandSpec
    fields: list[FieldDescriptor] = field(default_factory=list)
    named: dict[str, FieldDescriptor] = field(default_factory=dict)
    positional: list[FieldDescriptor] = field(default_factory=list)
    required: list[FieldDescriptor] = field(default_factory=list)
    commands: list[FieldDescriptor] = field(default_factory=list)

    @property
    def help_tokens(self) -> frozenset[str]:
        return frozenset(self.spec.help_tokens)

    @property
    def named_fields(self) -> list[FieldDescriptor]:
        return [
            descriptor for descriptor in self.fields if descriptor.kind is FieldKind.NAMED
        ]

    def get_named(self, name: str | None) -> FieldDescriptor | None:
        if name is None:
            return None
        return self.named.get(name)

    def find_command(self, token: str) -> FieldDescriptor | None:
        for descriptor in self.commands:
            if descriptor.command_name == token:
                return descriptor
        return None

    def register_named(self, descriptor: FieldDescriptor) -> None:
        for key in descriptor.keys:
            if key in self.named:
                raise DuplicateOptionError(key, self.command_type, descriptor)
            self.named[key] = descriptor


def check_constructor(command_type: type) -> None:
    """
    Ensure `command_type` can be created without arguments.

    Raises:
        MissingConstructorError: If any constructor parameter lacks a default.
    """
    try:
        signature = inspect.signature(command_type)
    except (TypeError, ValueError):
        return
    for parameter in signature.parameters.values():
        if parameter.kind in (
            inspect.Parameter.VAR_POSITIONAL,
            inspect.Parameter.VAR_KEYWORD,
        ):
            continue
        if parameter.default is inspect.Parameter.empty:
            raise MissingConstructorError(
                command_type, f"parameter '{parameter.name}' has no default"
            )


def _iter_candidates(command_type: type) -> list[tuple[str, Any, Any]]:
    hints = get_type_hints(command_type, include_extras=True)
    if dataclasses.is_dataclass(command_type):
        return [
            (item.name, hints.get(item.name, item.type), item.metadata.get(METADATA_KEY))
            for item in dataclasses.fields(command_type)
        ]
    return [(name, annotation, None) for name, annotation in hints.items()]


def _find_metadata(
    declared: Any, extras: tuple[Any, ...]
) -> Arg | Positional | Ignore | None:
    for candidate in (declared, *extras):
        if isinstance(candidate, (Arg, Positional, Ignore)):
            return candidate
    return None


def _build_descriptor(
    command_type: type, name: str, annotation: Any, declared: Any
) -> FieldDescriptor | None:
    base, extras = split_annotated(annotation)
    metadata = _find_metadata(declared, extras)
    if isinstance(metadata, Ignore):
        logger.debug("Ignoring %s.%s", command_type.__name__, name)
        return None

    value_type = unwrap_optional(base)
    accessor = resolve_accessor(command_type, name)

    command_spec = get_command_spec(value_type)
    if command_spec is not None and not isinstance(metadata, Positional):
        return FieldDescriptor(
            name=name,
            kind=FieldKind.COMMAND,
            value_type=value_type,
            description=command_spec.description,
            command_name=command_spec.name or name,
            command_type=value_type,
            accessor=accessor,
        )

    collection_type = collection_origin(value_type)
    element_type = None
    if collection_type is not None:
        element_type = (
            (metadata.element_type if metadata is not None else None)
            or collection_element_type(value_type)
            or str
        )
        element_type = unwrap_optional(element_type)

    if isinstance(metadata, Positional):
        return FieldDescriptor(
            name=name,
            kind=FieldKind.POSITIONAL,
            value_type=value_type,
            order=metadata.order,
            required=metadata.required,
            min_values=metadata.min_values,
            max_values=metadata.max_values,
            collection_type=collection_type,
            element_type=element_type,
            converter=as_converter(metadata.converter, element_type or value_type),
            category=metadata.category,
            description=metadata.description,
            exit_status=metadata.exit_status,
            accessor=accessor,
        )

    spec = metadata if isinstance(metadata, Arg) else Arg()
    return FieldDescriptor(
        name=name,
        kind=FieldKind.NAMED,
        value_type=value_type,
        flag=spec.flag or camel_to_hyphen(name),
        code=spec.code,
        required=spec.required,
        min_values=spec.min_values,
        max_values=spec.max_values,
        collection_type=collection_type,
        element_type=element_type,
        converter=as_converter(spec.converter, element_type or value_type),
        category=spec.category,
        env=spec.env,
        description=spec.description,
        exit_status=spec.exit_status,
        accessor=accessor,
    )


def build_schema(command_type: type) -> Schema:
    """
    Build a `Schema` for `command_type` without consulting the cache.

    Raises:
        TypeError: If `command_type` is not a class.
        MissingConstructorError: If the class cannot be created without arguments.
        DuplicateOptionError: If two named fields share a flag or code.
    """
    if not isinstance(command_type, type):
        raise TypeError(f"{command_type!r} is not a class")
    check_constructor(command_type)

    schema = Schema(
        command_type=command_type,
        spec=get_command_spec(command_type) or CommandSpec(),
    )
    for name, annotation, declared in _iter_candidates(command_type):
        if name.startswith("_"):
            continue
        if annotation is ClassVar or get_origin(annotation) is ClassVar:
            continue
        descriptor = _build_descriptor(command_type, name, annotation, declared)
        if descriptor is None:
            continue

        schema.fields.append(descriptor)
        if descriptor.kind is FieldKind.COMMAND:
            schema.commands.append(descriptor)
            continue
        if descriptor.kind is FieldKind.NAMED:
            schema.register_named(descriptor)
        else:
            schema.positional.append(descriptor)
        if descriptor.required:
            schema.required.append(descriptor)

    schema.positional.sort(key=lambda descriptor: descriptor.order)
    logger.debug(
        "Extracted schema for %s: %d named, %d positional, %d commands",
        command_type.__name__,
        len(schema.named_fields),
        len(schema.positional),
        len(schema.commands),
    )
    return schema


def extract_schema(command_type: type) -> Schema:
    """Return the cached `Schema` for `command_type`, building it on first use."""
    schema = _SCHEMA_CACHE.get(command_type)
    if schema is not None:
        return schema
    with _SCHEMA_LOCK:
        schema = _SCHEMA_CACHE.get(command_type)
        if schema is None:
            schema = build_schema(command_type)
            _SCHEMA_CACHE[command_type] = schema
    return schema


def clear_schema_cache() -> None:
    with _SCHEMA_LOCK:
        _SCHEMA_CACHE.clear()
