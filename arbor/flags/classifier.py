# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Flag-token classification for command routing.

`strip_flags()` looks at a token slice the way `FlagSet.parse()` would, but
instead of setting values it drops every flag token (and the value token a
flag consumes) and returns what is left: the positional tokens used to pick
the next subcommand.

Unknown flags are dropped as well and never consume a value, since routing
must not fail on a flag that only a deeper command defines.
"""
from __future__ import annotations

from typing import Sequence

from arbor.flags.flag_set import FlagSet


def _long_takes_value(token: str, flags: FlagSet) -> bool:
    if "=" in token:
        return False
    flag = flags.lookup(token[2:])
    return flag is not None and flag.takes_value


def _short_takes_value(token: str, flags: FlagSet) -> bool:
    """Whether a short group like `-vo` ends in a flag waiting for its value."""
    shorthands = token[1:]
    for index, char in enumerate(shorthands):
        flag = flags.shorthand_lookup(char)
        if flag is None:
            return False
        if index + 1 < len(shorthands) and shorthands[index + 1] == "=":
            return False
        if flag.takes_value:
            return index == len(shorthands) - 1
    return False


def positional_indices(args: Sequence[str], flags: FlagSet) -> list[int]:
    """Return the indices of the positional tokens of `args`."""
    indices: list[int] = []
    index = 0
    while index < len(args):
        token = args[index]
        index += 1
        if token == "--":
            break
        if token.startswith("--"):
            if _long_takes_value(token, flags) and index < len(args):
                index += 1
        elif token.startswith("-") and len(token) > 1:
            if _short_takes_value(token, flags) and index < len(args):
                index += 1
        elif token:
            indices.append(index - 1)
    return indices


def strip_flags(args: Sequence[str], flags: FlagSet) -> list[str]:
    """
    Return only the positional tokens of `args`.

    Args:
        args (Sequence[str]): Tokens after the current command's name.
        flags (FlagSet): The current command's effective flags.

    Returns:
        list[str]: Positional tokens in their original order.
    """
    return [args[index] for index in positional_indices(args, flags)]
