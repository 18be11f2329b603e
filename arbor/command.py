# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""command.py

Defines the Command class for Arbor CLI.

Commands are the nodes of a command tree. Each one is either runnable (it has
a `run` callable) or only a router to its subcommands. They provide:

- Tree wiring with weak parent back-references (`add_command`)
- Three-tier flag scoping: global (inherited by every descendant), local
  (this command only) and effective (what parsing actually uses)
- Resolution of an argument vector to the command that should run
- Usage rendering with per-command or inherited overrides
- Execution of the matched command with its positional arguments

Example:
    root = Command(use="app", long="An example application.")
    serve = Command(use="serve", short="Start the server", run=serve_callback)
    root.add_command(serve)
    root.global_flags.add("verbose", "v", type="bool", usage="verbose output")
    serve.local_flags.add("port", "p", default="8000", usage="port to bind")

    root.execute(["app", "serve", "-v", "-p", "9000"])
"""
from __future__ import annotations

import asyncio
import inspect
import sys
import weakref
from typing import Any, Callable, Sequence

from pydantic import BaseModel, ConfigDict, PrivateAttr, field_validator

from arbor.console import console
from arbor.exceptions import CommandNotFoundError, InvalidCommandError
from arbor.flags import FlagSet
from arbor.logger import logger
from arbor.resolver import resolve
from arbor.scope import FlagScope
from arbor.signals import HelpSignal
from arbor.usage import DEFAULT_USAGE_TEMPLATE, default_usage_func


class Command(BaseModel):
    """
    Represents a node of an Arbor command tree.

    Attributes:
        use (str): Name of the command, optionally followed by an args hint,
            e.g. "build [target]". The name is everything before the first space.
        short (str): Short description shown in the parent's command listing.
        long (str): Long description shown at the top of the usage text.
        example (str): Usage examples shown in the usage text.
        run (Callable | None): Called as `run(command, args)` with the
            positional arguments left after flag parsing. If it returns a
            coroutine, the coroutine is run to completion. `None` makes the
            command a router that only shows its usage.
        usage_func (Callable | None): Replaces the usage renderer for this
            command and its descendants.
        usage_template (str): Replaces the usage template for this command and
            its descendants.

    Commands compare and hash by identity.
    """

    use: str
    short: str = ""
    long: str = ""
    example: str = ""
    run: Callable[..., Any] | None = None
    usage_func: Callable[..., Any] | None = None
    usage_template: str = ""

    _parent: weakref.ReferenceType | None = PrivateAttr(default=None)
    _commands: list[Command] = PrivateAttr(default_factory=list)
    _flag_scope: FlagScope | None = PrivateAttr(default=None)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @field_validator("use")
    @classmethod
    def validate_use(cls, use: str) -> str:
        use = use.strip()
        if not use:
            raise ValueError("use must contain a command name")
        return use

    def model_post_init(self, _: Any) -> None:
        self._flag_scope = FlagScope(self.name)

    @property
    def name(self) -> str:
        """The command name: `use` up to the first space."""
        name, _, _ = self.use.partition(" ")
        return name

    @property
    def parent(self) -> Command | None:
        if self._parent is None:
            return None
        return self._parent()

    @property
    def commands(self) -> list[Command]:
        """Direct subcommands in registration order."""
        return list(self._commands)

    def has_parent(self) -> bool:
        return self.parent is not None

    def has_sub_commands(self) -> bool:
        return len(self._commands) > 0

    def root(self) -> Command:
        """Walk parent references up to the root of the tree."""
        command = self
        while command.parent is not None:
            command = command.parent
        return command

    def _is_ancestor(self, command: Command) -> bool:
        ancestor = self.parent
        while ancestor is not None:
            if ancestor is command:
                return True
            ancestor = ancestor.parent
        return False

    def add_command(self, *commands: Command) -> None:
        """
        Register subcommands.

        All commands are validated before any of them is attached, including
        the global flags they defined before joining the tree.

        Raises:
            InvalidCommandError: If a command is not a `Command`, is this
                command itself or one of its ancestors, or already has a
                different parent.
            FlagRedefinedError: If a command's global flags clash with the
                global flags of this tree.
        """
        pending: FlagSet | None = None
        for command in commands:
            if not isinstance(command, Command):
                raise InvalidCommandError(
                    f"[Command:{self.name}] Subcommands must be Command instances, "
                    f"got {type(command).__name__}"
                )
            if command is self:
                raise InvalidCommandError(
                    f"[Command:{self.name}] Command can't be a child of itself"
                )
            if self._is_ancestor(command):
                raise InvalidCommandError(
                    f"[Command:{self.name}] Command '{command.name}' is an ancestor "
                    "and can't be added as a child"
                )
            parent = command.parent
            if parent is not None and parent is not self:
                raise InvalidCommandError(
                    f"[Command:{command.name}] Command already belongs to "
                    f"'{parent.command_path()}'"
                )
            own_globals = command.flag_scope.owned_global()
            if parent is None and own_globals is not None:
                if pending is None:
                    pending = FlagSet(self.name)
                    pending.add_flag_set(self.global_flags)
                pending.add_flag_set(own_globals)

        for command in commands:
            if command.parent is self:
                logger.warning(
                    "[Command:%s] '%s' is already a subcommand, skipping.",
                    self.name,
                    command.name,
                )
                continue
            command._parent = weakref.ref(self)
            self._commands.append(command)
            command._inherit_global_flags()
            logger.debug("[Command:%s] Added subcommand '%s'.", self.name, command.name)

    def find_sub_command(self, name: str) -> Command | None:
        """Return the first direct subcommand called `name`, or None."""
        for command in self._commands:
            if command.name == name:
                return command
        return None

    def command_path(self) -> str:
        """Space-joined names from the root down to this command."""
        parent = self.parent
        if parent is not None:
            return f"{parent.command_path()} {self.name}"
        return self.name

    def use_line(self) -> str:
        """The full usage line, e.g. `app build [target] [flags]`."""
        parent = self.parent
        if parent is not None:
            use_line = f"{parent.command_path()} {self.use}"
        else:
            use_line = self.use

        if self.has_available_flags() and "[flags]" not in use_line:
            use_line += " [flags]"
        return use_line

    def runnable(self) -> bool:
        return self.run is not None

    def is_available(self) -> bool:
        """Whether the command can run or leads to a command that can."""
        return self.runnable() or self.has_available_sub_commands()

    def has_available_sub_commands(self) -> bool:
        return any(command.is_available() for command in self._commands)

    def _inherit_global_flags(self) -> None:
        parent = self.parent
        if parent is None:
            return
        self._flag_scope.inherit(parent.global_flags)

    @property
    def flag_scope(self) -> FlagScope:
        return self._flag_scope

    @property
    def global_flags(self) -> FlagSet:
        """Flags shared by this command and every command in its tree."""
        self._inherit_global_flags()
        return self._flag_scope.ensure_global()

    @property
    def local_flags(self) -> FlagSet:
        """Flags usable only at this command."""
        self._inherit_global_flags()
        return self._flag_scope.ensure_local()

    @property
    def flags(self) -> FlagSet:
        """Effective flags: local and inherited global flags, merged on every access."""
        self._inherit_global_flags()
        return self._flag_scope.merge()

    def set_global_flags(self, flags: FlagSet) -> None:
        self._flag_scope.set_global(flags)

    def has_available_flags(self) -> bool:
        return self.flags.has_available_flags()

    def has_available_global_flags(self) -> bool:
        return self.global_flags.has_available_flags()

    def has_available_local_flags(self) -> bool:
        return self.local_flags.has_available_flags()

    def parse_flags(self, args: Sequence[str]) -> None:
        """
        Parse `args` into the effective flags.

        Diagnostics written by the flag sets without an error (such as
        deprecation notices) are printed as informational output.

        Raises:
            FlagError: If parsing fails.
            HelpSignal: If `-h`/`--help` is given and not defined.
        """
        before = len(self._flag_scope.buffered_output())
        self.flags.parse(args)
        output = self._flag_scope.buffered_output()[before:]
        if output:
            logger.debug("[Command:%s] Flag parsing output: %s", self.name, output)
            console.print(output.rstrip("\n"), markup=False, emoji=False)

    def find(self, args: Sequence[str]) -> tuple[Command, list[str]]:
        """
        Resolve the command that `args` selects in this command's tree.

        Raises:
            CommandNotFoundError: If a token does not match a command.
            HelpSignal: If help was requested; carries the command.
        """
        return resolve(self, args)

    def execute(self, args: Sequence[str] | None = None) -> Any:
        """
        Resolve, parse flags and run the selected command.

        Args:
            args (Sequence[str] | None): Argument vector starting with this
                command's name. Defaults to this command's name followed by
                `sys.argv[1:]`.

        Returns:
            Any: The result of the selected command's `run`, or None when
            usage was shown instead.

        Raises:
            CommandNotFoundError: If resolution fails (also logged).
            FlagError: If flag parsing fails.
        """
        if args is None:
            args = [self.name, *sys.argv[1:]]
        try:
            command, residual = self.find(args)
        except HelpSignal as signal:
            (signal.command or self).usage()
            return None
        except CommandNotFoundError as error:
            logger.error("[Command:%s] %s", self.name, error)
            raise
        return command._execute(residual)

    def _execute(self, args: list[str]) -> Any:
        try:
            self.parse_flags(args)
        except HelpSignal:
            self.usage()
            return None

        if not self.runnable():
            logger.debug("[Command:%s] Not runnable, showing usage.", self.name)
            self.usage()
            return None

        positional = self.flags.args
        logger.debug("[Command:%s] Running with args: %s", self.name, positional)
        result = self.run(self, positional)
        if inspect.iscoroutine(result):
            result = asyncio.run(result)
        return result

    def usage(self) -> None:
        """Show the usage text for this command."""
        self.get_usage_func()(self)

    def get_usage_func(self) -> Callable[[Command], Any]:
        """Own usage function, else the closest ancestor's, else the default."""
        if self.usage_func is not None:
            return self.usage_func
        parent = self.parent
        if parent is not None:
            return parent.get_usage_func()
        return default_usage_func

    def get_usage_template(self) -> str:
        """Own usage template, else the closest ancestor's, else the default."""
        if self.usage_template:
            return self.usage_template
        parent = self.parent
        if parent is not None:
            return parent.get_usage_template()
        return DEFAULT_USAGE_TEMPLATE

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __str__(self) -> str:
        return (
            f"Command(use='{self.use}', short='{self.short}', "
            f"runnable={self.runnable()}, commands={len(self._commands)})"
        )
