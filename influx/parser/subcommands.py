# Influx CLI — (c) 2024 John Dunlap — MIT Licensed
"""
Resolves sub-commands before any token is parsed.

When the first token is not a flag and names a sub-command field of the current
command class, the token is dropped and resolution continues in the nested
class. Resolution stops at the first token that is a flag or names no
sub-command.

Example:
    resolve_command(Cli, ["remote", "add", "-u", "http://x"])
    → (RemoteAdd, ["-u", "http://x"], ("remote", "add"))
"""
from __future__ import annotations

from typing import Sequence

from influx.logger import logger
from influx.parser.schema import extract_schema


def resolve_command(
    command_type: type,
    args: Sequence[str],
    command_path: tuple[str, ...] = (),
) -> tuple[type, list[str], tuple[str, ...]]:
    """
    Select the command class named by the leading tokens of `args`.

    Returns:
        tuple: The selected class, the remaining tokens and the sub-command
        tokens consumed on the way.
    """
    args = list(args)
    if not args or args[0].startswith("-"):
        return command_type, args, command_path

    descriptor = extract_schema(command_type).find_command(args[0])
    if descriptor is None or descriptor.command_type is None:
        return command_type, args, command_path

    logger.debug(
        "Resolved sub-command '%s' of %s to %s",
        args[0],
        command_type.__name__,
        descriptor.command_type.__name__,
    )
    return resolve_command(
        descriptor.command_type, args[1:], (*command_path, args[0])
    )
