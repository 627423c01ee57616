# Influx CLI — (c) 2024 John Dunlap — MIT Licensed
"""
Defines all custom exception classes raised while binding command-line arguments.

Every error carries an `exit_status` so the entry facade can translate a failed
bind into a process exit code. Parse errors additionally carry the raw value,
the target type and, where known, the field being bound.

Exception Hierarchy:
- InfluxError
    ├── ParseError
    │     ├── RequiredFieldError
    │     ├── DuplicateOptionError
    │     └── UnsupportedTypeError
    ├── MissingConstructorError
    └── InaccessibleFieldError

Help requests are not errors; see `influx.signals.HelpSignal`.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from influx.parser.field_descriptor import FieldDescriptor

DEFAULT_ERROR_EXIT_STATUS = 1


def _type_name(target_type: Any) -> str:
    return getattr(target_type, "__name__", None) or repr(target_type)


class InfluxError(Exception):
    """Base exception for every failure raised by Influx CLI."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    @property
    def exit_status(self) -> int:
        return DEFAULT_ERROR_EXIT_STATUS


class ParseError(InfluxError):
    """
    Raised when a raw string could not be bound to a field.

    Attributes:
        value (Any): The raw token that failed to bind.
        target_type (Any): The type the token was being converted into.
        field (FieldDescriptor | None): The field being bound, if known.
    """

    def __init__(
        self,
        message: str | None = None,
        *,
        value: Any = None,
        target_type: Any = None,
        field: FieldDescriptor | None = None,
        exit_status: int | None = None,
    ) -> None:
        if message is None:
            message = (
                f"Failed to parse string '{value}' into an instance of "
                f"{_type_name(target_type)}"
            )
        super().__init__(message)
        self.value = value
        self.target_type = target_type
        self.field = field
        self._exit_status = exit_status

    @property
    def exit_status(self) -> int:
        if self._exit_status is not None:
            return self._exit_status
        if self.field is not None and self.field.exit_status is not None:
            return self.field.exit_status
        return DEFAULT_ERROR_EXIT_STATUS

    def with_field(self, field: FieldDescriptor) -> ParseError:
        """Attach `field` unless the error already names one."""
        if self.field is None:
            self.field = field
        return self

    def __str__(self) -> str:
        if self.field is None:
            return self.message
        return f"{self.field.display_name}: {self.message}"


class RequiredFieldError(ParseError):
    """Raised when a required named or positional field is unset after parsing."""

    def __init__(self, field: FieldDescriptor) -> None:
        super().__init__(
            f"Required argument {field.display_name} is not set",
            target_type=field.value_type,
            field=field,
        )

    def __str__(self) -> str:
        return self.message


class DuplicateOptionError(ParseError):
    """Raised when two fields of one command claim the same flag or code."""

    def __init__(self, key: str, command_type: type, field: FieldDescriptor) -> None:
        super().__init__(
            f"Duplicate option '{key}' declared on {_type_name(command_type)}",
            value=key,
            target_type=command_type,
            field=field,
        )
        self.command_type = command_type

    def __str__(self) -> str:
        return self.message


class UnsupportedTypeError(ParseError):
    """Raised when no converter exists for the requested target type."""

    def __init__(self, value: Any, target_type: Any) -> None:
        super().__init__(
            f"No converter available for type {_type_name(target_type)}",
            value=value,
            target_type=target_type,
        )


class MissingConstructorError(InfluxError):
    """Raised when a command or converter type cannot be created without arguments."""

    def __init__(self, target_type: Any, reason: str | None = None) -> None:
        message = f"{_type_name(target_type)} must be constructible without arguments"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.target_type = target_type


class InaccessibleFieldError(InfluxError):
    """Raised when a field cannot be read or written through any accessor."""

    def __init__(self, field: FieldDescriptor, value: Any = None) -> None:
        message = f"Unable to access field '{field.name}'"
        if value is not None:
            message = f"{message} while binding '{value}'"
        super().__init__(message)
        self.field = field
        self.value = value

    @property
    def exit_status(self) -> int:
        if self.field.exit_status is not None:
            return self.field.exit_status
        return DEFAULT_ERROR_EXIT_STATUS
