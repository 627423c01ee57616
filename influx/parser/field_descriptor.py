# Influx CLI — (c) 2024 John Dunlap — MIT Licensed
"""
Defines the `FieldDescriptor` dataclass, the extracted description of one
bindable field of a command class.

Descriptors are built once per command class by `influx.parser.schema` and are
immutable afterwards. They carry everything the binder needs: classification,
flag and code, positional order, arity, element type, converter override,
environment fallback and the resolved `FieldAccessor`.

Key Attributes:
- `name`: Field identifier on the command class.
- `kind`: `FieldKind` classification.
- `value_type`: Declared type with `Annotated` and `Optional` stripped.
- `flag` / `code`: Long flag and short code of a named field.
- `order`: Position index of a positional field.
- `collection_type` / `element_type`: Collection kind and element type of
  list-like fields.
- `command_name` / `command_type`: Token and class of a sub-command field.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from influx.parser.accessor import FieldAccessor
from influx.parser.field_kind import FieldKind


@dataclass(frozen=True)
class FieldDescriptor:
    """
    Represents one bindable field.

    Attributes:
        name (str): Field identifier on the command class.
        kind (FieldKind): Named, positional or sub-command.
        value_type (Any): Declared type of the field.
        flag (str | None): Long flag without dashes (named fields).
        code (str | None): Single-character short code (named fields).
        order (int | None): Positional index (positional fields).
        required (bool): Whether the field must be set after parsing.
        min_values (int): Minimum number of values for collections.
        max_values (int | None): Maximum number of values for collections.
        collection_type (type | None): Concrete collection kind, None for scalars.
        element_type (Any): Element type for collections.
        converter (Any): Override `TypeConverter`, if declared.
        category (str): Help category.
        env (str | None): Environment variable or property fallback.
        description (str | None): Help text.
        exit_status (int | None): Exit status when binding this field fails.
        command_name (str | None): Selecting token for sub-command fields.
        command_type (type | None): Nested command class for sub-command fields.
        accessor (FieldAccessor | None): Resolved getter and setter pair.
    """

    name: str
    kind: FieldKind
    value_type: Any = str
    flag: str | None = None
    code: str | None = None
    order: int | None = None
    required: bool = False
    min_values: int = 0
    max_values: int | None = None
    collection_type: type | None = None
    element_type: Any = None
    converter: Any = None
    category: str = ""
    env: str | None = None
    description: str | None = None
    exit_status: int | None = None
    command_name: str | None = None
    command_type: type | None = None
    accessor: FieldAccessor | None = field(default=None, repr=False, compare=False)

    @property
    def is_boolean(self) -> bool:
        return self.value_type is bool and self.collection_type is None

    @property
    def is_collection(self) -> bool:
        return self.collection_type is not None

    @property
    def keys(self) -> tuple[str, ...]:
        """Names this field is registered under in the named index."""
        return tuple(key for key in (self.flag, self.code) if key)

    @property
    def display_name(self) -> str:
        """Externally visible name: `--flag`, `-c` or `<name>` at its position."""
        if self.kind is FieldKind.POSITIONAL:
            return f"<{self.name}> (position {self.order})"
        if self.kind is FieldKind.COMMAND:
            return self.command_name or self.name
        if self.flag:
            return f"--{self.flag}"
        return f"-{self.code}"

    def get(self, instance: Any) -> Any:
        if self.accessor is None:
            return getattr(instance, self.name, None)
        return self.accessor.get(instance)

    def set(self, instance: Any, value: Any) -> None:
        if self.accessor is None:
            setattr(instance, self.name, value)
        else:
            self.accessor.set(instance, value)
