# Influx CLI — (c) 2024 John Dunlap — MIT Licensed
"""
Declaration surface for bindable command classes.

Metadata is attached either through dataclass field metadata, using the
`arg()`, `positional()` and `ignore()` helpers, or through `typing.Annotated`
extras holding `Arg`, `Positional` or `Ignore` instances. Command classes are
marked with the `@command` decorator, which makes them eligible as sub-commands
and carries their help text and help tokens.

Example:
    @command(name="deploy", description="Deploy a release")
    @dataclass
    class Deploy:
        url: str = arg(code="u", required=True, description="Target URL")
        verbose: bool = arg(code="v")
        tags: list[str] = arg(code="t", default_factory=list)
        release: str = positional(0, required=True)
        cache: Annotated[Path | None, Arg(env="DEPLOY_CACHE")] = None

Invalid metadata is rejected with `pydantic.ValidationError` when it is declared.
"""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

METADATA_KEY = "influx"
COMMAND_ATTRIBUTE = "__influx_command__"
DEFAULT_HELP_TOKENS = ("-h", "--help")
DEFAULT_COMMAND_DESCRIPTION = "(description unavailable)"

T = TypeVar("T")


class Arg(BaseModel):
    """
    Metadata for a named option.

    Attributes:
        flag (str | None): Long flag without leading dashes. Derived from the field
            name (`long_value` → `long-value`) when omitted.
        code (str | None): Single-character short code.
        required (bool): Fail after parsing if the field is still unset.
        category (str): Help category. The empty string is the default group.
        description (str | None): Help text.
        min_values (int): Minimum number of values for a collection field.
        max_values (int | None): Maximum number of values for a collection field.
        element_type (Any): Element type for bare collection annotations.
        converter (Any): `TypeConverter` instance or class, or a plain callable.
        env (str | None): Environment variable or property consulted when the
            option is not supplied.
        exit_status (int | None): Exit status used when binding this field fails.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    flag: str | None = None
    code: str | None = None
    required: bool = False
    category: str = ""
    description: str | None = None
    min_values: int = Field(default=0, ge=0)
    max_values: int | None = Field(default=None, ge=1)
    element_type: Any = None
    converter: Any = None
    env: str | None = None
    exit_status: int | None = None

    @field_validator("flag")
    @classmethod
    def validate_flag(cls, value: str | None) -> str | None:
        if value is None:
            return value
        if value.startswith("-"):
            raise ValueError(f"flag '{value}' must not start with '-'")
        if len(value) < 2 or any(char.isspace() for char in value):
            raise ValueError(
                f"flag '{value}' must be at least two characters without whitespace"
            )
        return value

    @field_validator("code")
    @classmethod
    def validate_code(cls, value: str | None) -> str | None:
        if value is None:
            return value
        if len(value) != 1 or value == "-" or value.isspace():
            raise ValueError(f"code '{value}' must be a single non-dash character")
        return value

    @model_validator(mode="after")
    def validate_arity(self) -> Arg:
        if self.max_values is not None and self.min_values > self.max_values:
            raise ValueError(
                f"min_values ({self.min_values}) exceeds max_values ({self.max_values})"
            )
        return self


class Positional(BaseModel):
    """
    Metadata for a positional field.

    Positional fields bind in ascending `order`; fields sharing an order keep their
    declaration order. A collection field absorbs up to `max_values` tokens
    (`None` for unbounded) before the next positional field starts.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    order: int = Field(ge=0)
    required: bool = False
    category: str = ""
    description: str | None = None
    min_values: int = Field(default=0, ge=0)
    max_values: int | None = Field(default=1, ge=1)
    element_type: Any = None
    converter: Any = None
    exit_status: int | None = None

    @model_validator(mode="after")
    def validate_arity(self) -> Positional:
        if self.max_values is not None and self.min_values > self.max_values:
            raise ValueError(
                f"min_values ({self.min_values}) exceeds max_values ({self.max_values})"
            )
        return self


class Ignore(BaseModel):
    """Marks a field that is never bound."""

    model_config = ConfigDict(frozen=True)


class CommandSpec(BaseModel):
    """Command-level metadata attached by the `@command` decorator."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    description: str = DEFAULT_COMMAND_DESCRIPTION
    opening_text: str | None = None
    closing_text: str | None = None
    help_tokens: tuple[str, ...] = DEFAULT_HELP_TOKENS

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        if value is not None and (not value or value.startswith("-")):
            raise ValueError(f"command name '{value}' must be non-empty without '-'")
        return value

    @field_validator("help_tokens")
    @classmethod
    def validate_help_tokens(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if any(not token for token in value):
            raise ValueError("help tokens must be non-empty strings")
        return value


def _metadata_field(
    spec: BaseModel,
    default: Any,
    default_factory: Callable[[], Any] | Any,
) -> Any:
    if default_factory is not dataclasses.MISSING:
        return dataclasses.field(
            default_factory=default_factory, metadata={METADATA_KEY: spec}
        )
    return dataclasses.field(default=default, metadata={METADATA_KEY: spec})


def arg(
    default: Any = None,
    *,
    default_factory: Callable[[], Any] | Any = dataclasses.MISSING,
    flag: str | None = None,
    code: str | None = None,
    required: bool = False,
    category: str = "",
    description: str | None = None,
    min_values: int = 0,
    max_values: int | None = None,
    element_type: Any = None,
    converter: Any = None,
    env: str | None = None,
    exit_status: int | None = None,
) -> Any:
    """Declare a named option on a dataclass field."""
    spec = Arg(
        flag=flag,
        code=code,
        required=required,
        category=category,
        description=description,
        min_values=min_values,
        max_values=max_values,
        element_type=element_type,
        converter=converter,
        env=env,
        exit_status=exit_status,
    )
    return _metadata_field(spec, default, default_factory)


def positional(
    order: int,
    default: Any = None,
    *,
    default_factory: Callable[[], Any] | Any = dataclasses.MISSING,
    required: bool = False,
    category: str = "",
    description: str | None = None,
    min_values: int = 0,
    max_values: int | None = 1,
    element_type: Any = None,
    converter: Any = None,
    exit_status: int | None = None,
) -> Any:
    """Declare a positional field on a dataclass field."""
    spec = Positional(
        order=order,
        required=required,
        category=category,
        description=description,
        min_values=min_values,
        max_values=max_values,
        element_type=element_type,
        converter=converter,
        exit_status=exit_status,
    )
    return _metadata_field(spec, default, default_factory)


def ignore(
    default: Any = None,
    *,
    default_factory: Callable[[], Any] | Any = dataclasses.MISSING,
) -> Any:
    """Declare a dataclass field that is never bound."""
    return _metadata_field(Ignore(), default, default_factory)


def command(
    cls: type[T] | None = None,
    *,
    name: str | None = None,
    description: str = DEFAULT_COMMAND_DESCRIPTION,
    opening_text: str | None = None,
    closing_text: str | None = None,
    help_tokens: tuple[str, ...] = DEFAULT_HELP_TOKENS,
) -> Any:
    """
    Mark a class as a command.

    Can be used bare (`@command`) or with arguments. A field typed with a command
    class becomes a sub-command selected by `name`, or by the field name when no
    name is given.
    """
    spec = CommandSpec(
        name=name,
        description=description,
        opening_text=opening_text,
        closing_text=closing_text,
        help_tokens=tuple(help_tokens),
    )

    def decorate(target: type[T]) -> type[T]:
        setattr(target, COMMAND_ATTRIBUTE, spec)
        return target

    if cls is None:
        return decorate
    return decorate(cls)


def get_command_spec(target: Any) -> CommandSpec | None:
    """Return the `CommandSpec` of a command class, or None for anything else."""
    if not isinstance(target, type):
        return None
    spec = getattr(target, COMMAND_ATTRIBUTE, None)
    return spec if isinstance(spec, CommandSpec) else None
