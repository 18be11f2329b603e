"""
Arbor CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .command import Command
from .exceptions import (
    ArborError,
    CommandNotFoundError,
    ConfigError,
    FlagError,
    FlagNotDefinedError,
    FlagRedefinedError,
    InvalidCommandError,
    UsageTemplateError,
)
from .flags import Flag, FlagSet, FlagType
from .logger import logger
from .signals import HelpSignal
from .version import __version__

__all__ = [
    "ArborError",
    "Command",
    "CommandNotFoundError",
    "ConfigError",
    "Flag",
    "FlagError",
    "FlagNotDefinedError",
    "FlagRedefinedError",
    "FlagSet",
    "FlagType",
    "HelpSignal",
    "InvalidCommandError",
    "UsageTemplateError",
    "logger",
    "__version__",
]
