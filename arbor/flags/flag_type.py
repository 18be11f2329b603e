# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `FlagType`, an enum used to standardize the value semantics of flags
registered on a `FlagSet`.

Each member decides how a raw string token is coerced, whether the flag needs
a value token at all, and how the value placeholder is shown in usage text.

Supports alias coercion for shorthand or config-friendly values, so that flag
definitions loaded from YAML or TOML can say `type: str` or `type: list`.

Example:
    FlagType("string")  → FlagType.STRING
    FlagType("boolean") → FlagType.BOOL (via alias)
    FlagType("list")    → FlagType.STRING_LIST (via alias)
"""
from __future__ import annotations

from enum import Enum


class FlagType(Enum):
    """
    Defines the kind of value a flag holds.

    Members:
        STRING: Store the provided value as-is (default).
        BOOL: Presence sets `True`; `--flag=false` is accepted.
        INT: Store the provided value as an int.
        FLOAT: Store the provided value as a float.
        COUNT: Each occurrence increments the value; `--flag=3` sets it.
        STRING_LIST: Comma separated values, accumulated across occurrences.
        DATETIME: Parse the provided value as a datetime.

    Aliases:
        - "str" → "string"
        - "boolean" → "bool"
        - "integer" → "int"
        - "list", "strings" → "string_list"
    """

    STRING = "string"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    COUNT = "count"
    STRING_LIST = "string_list"
    DATETIME = "datetime"

    @property
    def takes_value(self) -> bool:
        """Whether the flag consumes a value token when given without `=`."""
        return self not in (FlagType.BOOL, FlagType.COUNT)

    @property
    def placeholder(self) -> str:
        """Value placeholder shown in usage listings."""
        if not self.takes_value:
            return ""
        if self is FlagType.STRING_LIST:
            return "strings"
        return self.value

    @classmethod
    def choices(cls) -> list[FlagType]:
        """Return a list of all flag types."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "str": "string",
            "boolean": "bool",
            "integer": "int",
            "list": "string_list",
            "strings": "string_list",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> FlagType:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls.choices())
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        """Return the string representation of the flag type."""
        return self.value
