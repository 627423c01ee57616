# Influx CLI — (c) 2024 John Dunlap — MIT Licensed
"""
Entry facade for binding command-line arguments to command classes.

`InfluxCli` ties the pieces together: sub-command resolution, the
`ParseContext` binder, environment and property fallbacks, validation and help
rendering. It offers three ways to bind:

- `bind`: return the instance; raise `InfluxError` or `HelpSignal`.
- `parse`: return a `Bound`, `HelpRequested` or `Failed` result.
- `bind_or_exit`: print help or the error and exit with the proper status.

Example:
    cli = InfluxCli().register(Version, Version.parse)
    deploy = cli.bind_or_exit(Deploy)
"""
from __future__ import annotations

import sys
from typing import Any, Callable, Mapping, Sequence, TypeVar

from rich.console import Console

from influx.console import console as default_console
from influx.console import error_console as default_error_console
from influx.exceptions import InfluxError
from influx.logger import logger
from influx.parser.converters import ConverterRegistry
from influx.parser.help import render_help
from influx.parser.parse_context import ParseContext
from influx.parser.parser_types import Bound, Failed, HelpRequested, ParseResult
from influx.parser.subcommands import resolve_command
from influx.properties import PropertyStore
from influx.signals import HelpSignal

T = TypeVar("T")


class InfluxCli:
    """
    Binds argument lists to command classes.

    Args:
        converters (ConverterRegistry | Mapping | None): Registry, or a mapping of
            target types to converters, used for every bind.
        properties (PropertyStore | None): Fallback store for `env` options.
        console (Console | None): Console that receives help output.
        error_console (Console | None): Console that receives error messages.
        exit_mechanism (Callable[[int], Any]): Called with the exit status by
            `bind_or_exit`. Defaults to `sys.exit`.
    """

    def __init__(
        self,
        converters: ConverterRegistry | Mapping[Any, Any] | None = None,
        properties: PropertyStore | None = None,
        console: Console | None = None,
        error_console: Console | None = None,
        exit_mechanism: Callable[[int], Any] = sys.exit,
    ) -> None:
        if isinstance(converters, ConverterRegistry):
            self.converters = converters
        else:
            self.converters = ConverterRegistry(converters)
        self.properties = properties or PropertyStore()
        self.console = console or default_console
        self.error_console = error_console or default_error_console
        self.exit_mechanism = exit_mechanism

    def register(self, target: Any, converter: Any = None) -> InfluxCli:
        """
        Register a converter for a type, or a mapping of types to converters.

        Returns the facade so registrations can be chained.
        """
        if isinstance(target, Mapping):
            for target_type, target_converter in target.items():
                self.converters.register(target_type, target_converter)
        elif converter is None:
            raise TypeError("register() needs a converter when given a single type")
        else:
            self.converters.register(target, converter)
        return self

    def set_property(self, name: str, value: Any) -> InfluxCli:
        """Set a fallback property consulted after the environment."""
        self.properties.set(name, value)
        return self

    def bind_context(
        self, command_type: type[T], args: Sequence[str] | None = None
    ) -> ParseContext[T]:
        """
        Resolve sub-commands, bind `args` and return the finished `ParseContext`.

        Raises:
            HelpSignal: If a help token is encountered.
            InfluxError: On the first binding failure.
        """
        args = sys.argv[1:] if args is None else list(args)
        selected, remaining, command_path = resolve_command(command_type, args)
        context = ParseContext(
            selected,
            remaining,
            converters=self.converters,
            properties=self.properties,
            command_path=command_path,
        )
        context.parse()
        logger.debug("Bound %r", context)
        return context

    def bind(self, command_type: type[T], args: Sequence[str] | None = None) -> Any:
        """
        Bind `args` and return the populated instance.

        The instance belongs to the selected sub-command class when the leading
        tokens name one.
        """
        return self.bind_context(command_type, args).instance

    def parse(self, command_type: type[T], args: Sequence[str] | None = None) -> ParseResult:
        """Bind `args` and report the outcome as a result value."""
        try:
            context = self.bind_context(command_type, args)
        except HelpSignal as signal:
            return HelpRequested(signal.command_type)
        except InfluxError as error:
            logger.debug("Binding %s failed: %s", command_type.__name__, error)
            return Failed(error)
        return Bound(context.instance, context.command_path)

    def help(self, command_type: type) -> str:
        """Return the help text for `command_type`."""
        return render_help(command_type)

    def bind_or_exit(self, command_type: type[T], args: Sequence[str] | None = None) -> Any:
        """
        Bind `args`, printing help and exiting 0 on a help token, or printing the
        error and exiting with its exit status on failure.
        """
        result = self.parse(command_type, args)
        if isinstance(result, HelpRequested):
            self.console.print(
                self.help(result.command_type),
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
            self.exit_mechanism(0)
            return None
        if isinstance(result, Failed):
            self.error_console.print(
                str(result.error), markup=False, highlight=False, soft_wrap=True
            )
            self.exit_mechanism(result.exit_status)
            return None
        return result.instance
