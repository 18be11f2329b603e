# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used in the Arbor CLI framework.

These exceptions provide structured error handling for the failure cases of
building and running a command tree: invalid tree wiring, unmatched routing
tokens, flag definition and parsing errors, and configuration problems.

All exceptions inherit from `ArborError`, the base exception for the framework.

Exception Hierarchy:
- ArborError
    ├── InvalidCommandError
    ├── CommandNotFoundError
    ├── ConfigError
    ├── UsageTemplateError
    └── FlagError
        ├── FlagRedefinedError
        └── FlagNotDefinedError

Help requests are not errors; see `arbor.signals.HelpSignal`.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from arbor.command import Command


class ArborError(Exception):
    """Base exception for the Arbor CLI framework."""


class InvalidCommandError(ArborError):
    """Exception raised when a command is wired into the tree incorrectly."""


class CommandNotFoundError(ArborError):
    """Exception raised when an argument token does not match any command.

    Attributes:
        kind (str): The kind of object that was looked up, e.g. "Command".
        name (str): The unmatched token.
        command (Command | None): The command where resolution stopped.
    """

    def __init__(self, kind: str, name: str, command: Command | None = None):
        super().__init__(f"{kind} '{name}' not found")
        self.kind = kind
        self.name = name
        self.command = command


class ConfigError(ArborError):
    """Exception raised when a configuration file cannot be loaded."""


class FlagError(ArborError):
    """Exception raised when a flag cannot be defined, parsed or set."""


class FlagRedefinedError(FlagError):
    """Exception raised when a flag name or shorthand is already defined."""


class FlagNotDefinedError(FlagError):
    """Exception raised when a flag is accessed but was never defined."""


class UsageTemplateError(ArborError):
    """Exception raised when a usage template cannot be rendered."""
