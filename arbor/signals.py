# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals used internally by the Arbor CLI framework.

These signals are raised to interrupt or redirect command resolution
(e.g., displaying help instead of running a command) without being treated
as traditional exceptions.

All signals inherit from `FlowSignal`, which is a subclass of `BaseException`
to ensure they bypass standard `except Exception` blocks.

Signals:
- HelpSignal: Resolution stopped because help was requested for a command.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from arbor.command import Command


class FlowSignal(BaseException):
    """Base class for all flow control signals in Arbor.

    These are not errors. They're used to control flow like showing help
    from user input at any depth of the command tree.
    """


class HelpSignal(FlowSignal):
    """Raised to display help information for a command.

    Attributes:
        command (Command | None): The command whose usage should be shown.
            `None` when raised by a bare `FlagSet` that has no command.
        residual (list[str]): Residual arguments, always empty for help.
    """

    def __init__(
        self,
        command: Command | None = None,
        message: str = "Help signal received.",
    ):
        super().__init__(message)
        self.command = command
        self.residual: list[str] = []
