# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Contains value coercion utilities for Arbor flag parsing.

This module converts the raw string given on the command line into the
Python value a `Flag` stores, according to its `FlagType`.

Functions:
- coerce_bool: Convert a string to a boolean.
- split_list: Split a comma separated value into its items.
- coerce_value: Convert a raw string to the value of a given flag type.
"""
from datetime import datetime
from typing import Any

from dateutil import parser as date_parser

from arbor.flags.flag_type import FlagType


def coerce_bool(value: str | bool) -> bool:
    """
    Convert a string to a boolean.

    Accepts truthy and falsy representations such as 'true', 'yes', '0', 'off'.

    Raises:
        ValueError: If the string is not a recognised boolean.
    """
    if isinstance(value, bool):
        return value
    value = value.strip().lower()
    if value in {"true", "t", "1", "yes", "y", "on"}:
        return True
    elif value in {"false", "f", "0", "no", "n", "off"}:
        return False
    raise ValueError(f"'{value}' is not a valid boolean")


def split_list(value: str) -> list[str]:
    """Split a comma separated value, dropping surrounding whitespace."""
    if not value:
        return []
    return [item.strip() for item in value.split(",")]


def coerce_value(value: str, flag_type: FlagType) -> Any:
    """
    Attempt to convert a string to the value type of a flag.

    Args:
        value (str): The raw command-line value.
        flag_type (FlagType): The type of the flag receiving the value.

    Returns:
        Any: The coerced value.

    Raises:
        ValueError: If conversion fails or the value is invalid.
    """
    if flag_type is FlagType.STRING:
        return value
    if flag_type is FlagType.BOOL:
        return coerce_bool(value)
    if flag_type in (FlagType.INT, FlagType.COUNT):
        return int(value, 0)
    if flag_type is FlagType.FLOAT:
        return float(value)
    if flag_type is FlagType.STRING_LIST:
        return split_list(value)
    if flag_type is FlagType.DATETIME:
        try:
            return date_parser.parse(value)
        except (ValueError, OverflowError) as error:
            raise ValueError(
                f"Value '{value}' could not be parsed as a datetime"
            ) from error
    raise ValueError(f"Unsupported flag type: {flag_type}")


def format_default(default: Any, flag_type: FlagType) -> str:
    """Return the `(default ...)` text for a flag, or an empty string."""
    if flag_type is FlagType.STRING:
        return f' (default "{default}")' if default else ""
    if flag_type is FlagType.BOOL:
        return " (default true)" if default else ""
    if flag_type in (FlagType.INT, FlagType.COUNT, FlagType.FLOAT):
        return f" (default {default})" if default else ""
    if flag_type is FlagType.STRING_LIST:
        return f" (default [{','.join(default)}])" if default else ""
    if isinstance(default, datetime):
        return f" (default {default.isoformat()})"
    return f" (default {default})" if default else ""
