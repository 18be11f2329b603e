# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Flag` dataclass used by `FlagSet` to represent a single
command-line option together with its current value.

A `Flag` is a definition and a value cell at the same time. Flag sets that
merge each other's definitions share the same `Flag` objects, so a value
parsed through one set is visible through every set holding that flag. This
is what lets a global flag parsed at a leaf command be read from the root.

Key Attributes:
- `name`: Long name, used as `--name`
- `shorthand`: Optional one-letter name, used as `-n`
- `type`: `FlagType` describing value semantics
- `default`: Value before parsing
- `value`: Current value
- `changed`: Whether the flag was set on the command line
"""
from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any

from arbor.flags.flag_type import FlagType
from arbor.flags.utils import coerce_value, format_default


@dataclass(eq=False)
class Flag:
    """
    Represents a command-line flag.

    Attributes:
        name (str): Long name of the flag, without leading dashes.
        shorthand (str): One-letter alias, without the leading dash, or "".
        type (FlagType): The kind of value the flag holds.
        default (Any): The value before anything is parsed.
        usage (str): Help text for the flag.
        hidden (bool): Hidden flags parse normally but are left out of usage.
        deprecated (str): If set, using the flag prints this deprecation notice.
        value (Any): Current value, initialised from `default`.
        changed (bool): True once the flag has been set from the command line.
    """

    name: str
    shorthand: str = ""
    type: FlagType = FlagType.STRING
    default: Any = None
    usage: str = ""
    hidden: bool = False
    deprecated: str = ""
    value: Any = field(default=None, init=False)
    changed: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.type = FlagType(self.type)
        if self.default is None:
            self.default = self._zero_value()
        self.value = deepcopy(self.default)

    def _zero_value(self) -> Any:
        if self.type is FlagType.STRING:
            return ""
        if self.type is FlagType.BOOL:
            return False
        if self.type in (FlagType.INT, FlagType.COUNT):
            return 0
        if self.type is FlagType.FLOAT:
            return 0.0
        if self.type is FlagType.STRING_LIST:
            return []
        return None

    @property
    def takes_value(self) -> bool:
        return self.type.takes_value

    def set(self, raw: str | None) -> None:
        """
        Set the flag from a raw command-line value.

        `raw` is None when the flag was given without a value, which is only
        allowed for flags that do not take one.

        Raises:
            ValueError: If the raw value cannot be coerced.
        """
        if raw is None:
            if self.type is FlagType.COUNT:
                self.value += 1
            else:
                self.value = True
        elif self.type is FlagType.STRING_LIST:
            items = coerce_value(raw, self.type)
            self.value = (self.value + items) if self.changed else items
        else:
            self.value = coerce_value(raw, self.type)
        self.changed = True

    def get_flags_text(self) -> str:
        """Return the `-s, --name` portion of a usage line."""
        if self.shorthand:
            return f"-{self.shorthand}, --{self.name}"
        return f"    --{self.name}"

    def get_usage_text(self) -> str:
        """Return the help portion of a usage line, including the default."""
        text = self.usage + format_default(self.default, self.type)
        if self.deprecated:
            text += f" (DEPRECATED: {self.deprecated})"
        return text

    def __str__(self) -> str:
        return (
            f"Flag(name='{self.name}', shorthand='{self.shorthand}', "
            f"type={self.type}, value={self.value!r})"
        )
