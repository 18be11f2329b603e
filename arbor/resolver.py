# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Command resolution: map an argument vector to the command that should run.

Resolution walks the tree from the command it starts at. At every level:

1. The first token must be the current command's name.
2. Flag tokens of the current command's effective flags are skipped to find
   the positional tokens.
3. A first positional `help` stops resolution with a `HelpSignal` for the
   current command.
4. No positional tokens left: the current command is the target, and the
   remaining tokens (flags included) are the residual arguments.
5. Otherwise the first positional token must name a subcommand, and
   resolution continues there.

Flags given before a subcommand name stay in the residual arguments of the
command that is finally selected, where they are parsed against its
effective flags.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from arbor.exceptions import CommandNotFoundError
from arbor.flags import positional_indices
from arbor.logger import logger
from arbor.signals import HelpSignal

if TYPE_CHECKING:
    from arbor.command import Command

HELP_TOKEN = "help"


def _resolve(command: Command, args: list[str]) -> tuple[Command, list[str]]:
    token = args[0] if args else ""
    if token != command.name:
        raise CommandNotFoundError("Command", token, command=command)

    remaining = args[1:]
    indices = positional_indices(remaining, command.flags)

    if indices and remaining[indices[0]] == HELP_TOKEN:
        logger.debug("[Command:%s] Help requested.", command.name)
        raise HelpSignal(command)

    if not indices:
        return command, remaining

    index = indices[0]
    sub_name = remaining[index]
    sub_command = command.find_sub_command(sub_name)
    if sub_command is None:
        raise CommandNotFoundError("Command", sub_name, command=command)

    return _resolve(
        sub_command, [sub_name, *remaining[:index], *remaining[index + 1 :]]
    )


def resolve(command: Command, args: Sequence[str]) -> tuple[Command, list[str]]:
    """
    Resolve `args` starting at `command`.

    Args:
        command (Command): Where resolution starts, usually the root.
        args (Sequence[str]): Argument vector, starting with `command`'s name.

    Returns:
        tuple[Command, list[str]]: The selected command and its residual
        arguments.

    Raises:
        CommandNotFoundError: If a token does not match the expected command.
        HelpSignal: If help was requested. `signal.command` is the command whose
            usage should be shown and `signal.residual` is empty.
    """
    target, residual = _resolve(command, list(args))
    logger.debug(
        "[Command:%s] Resolved '%s' with args: %s",
        command.name,
        target.command_path(),
        residual,
    )
    return target, residual
