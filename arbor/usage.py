# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Usage rendering for Arbor commands.

Rendering happens in two steps:

1. `build_usage_view()` reads a command, its subcommands and its flag scopes
   once and stores everything the usage text needs in a `UsageView`.
2. `render_usage()` formats a template string with the view's fields and a
   set of pre-rendered sections.

Templates are `str.format` strings. Available names are every `UsageView`
field plus the sections `description`, `usage`, `examples`, `commands`,
`local_flags`, `global_flags` and `hint`. Literal braces must be doubled.

Example:
    root.usage_template = "{command_path}: {short}\\n{usage}\\n"
"""
from __future__ import annotations

import textwrap
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

from arbor.console import console
from arbor.exceptions import UsageTemplateError
from arbor.logger import logger

if TYPE_CHECKING:
    from arbor.command import Command


DEFAULT_USAGE_TEMPLATE = (
    "{description}Usage:{usage}{examples}{commands}{local_flags}{global_flags}{hint}\n"
)


@dataclass(frozen=True)
class UsageView:
    """Snapshot of everything a usage template can show for one command."""

    name: str
    command_path: str
    use_line: str
    long: str = ""
    short: str = ""
    example: str = ""
    runnable: bool = False
    has_available_sub_commands: bool = False
    sub_commands: tuple[tuple[str, str], ...] = ()
    local_flag_usages: str = ""
    global_flag_usages: str = ""

    def sections(self) -> dict[str, str]:
        """Pre-rendered optional blocks of the default template."""
        description = self.long or self.short
        usage = ""
        if self.runnable:
            usage += f"\n  {self.use_line}"
        if self.has_available_sub_commands:
            usage += f"\n  {self.command_path} [command]"

        commands = ""
        hint = ""
        if self.has_available_sub_commands and self.sub_commands:
            width = max(len(name) for name, _ in self.sub_commands)
            commands = "\n\nAvailable Commands:" + "".join(
                f"\n  {name:<{width}}   {short}".rstrip()
                for name, short in self.sub_commands
            )
            hint = (
                f'\n\nUse "{self.command_path} [command] --help" '
                "for more information about a command."
            )

        return {
            "description": f"{description}\n\n" if description else "",
            "usage": usage,
            "examples": (
                f"\n\nExamples:\n{textwrap.indent(self.example.strip(), '  ')}"
                if self.example
                else ""
            ),
            "commands": commands,
            "local_flags": (
                f"\n\nLocal Flags:\n{self.local_flag_usages}"
                if self.local_flag_usages
                else ""
            ),
            "global_flags": (
                f"\n\nGlobal Flags:\n{self.global_flag_usages}"
                if self.global_flag_usages
                else ""
            ),
            "hint": hint,
        }


def build_usage_view(command: Command) -> UsageView:
    """Assemble the `UsageView` of a command from its live state."""
    return UsageView(
        name=command.name,
        command_path=command.command_path(),
        use_line=command.use_line(),
        long=command.long,
        short=command.short,
        example=command.example,
        runnable=command.runnable(),
        has_available_sub_commands=command.has_available_sub_commands(),
        sub_commands=tuple(
            (sub_command.name, sub_command.short)
            for sub_command in command.commands
            if sub_command.is_available()
        ),
        local_flag_usages=(
            command.local_flags.flag_usages()
            if command.has_available_local_flags()
            else ""
        ),
        global_flag_usages=(
            command.global_flags.flag_usages()
            if command.has_available_global_flags()
            else ""
        ),
    )


def render_usage(view: UsageView, template: str = DEFAULT_USAGE_TEMPLATE) -> str:
    """
    Format `template` with the fields and sections of `view`.

    Raises:
        UsageTemplateError: If the template refers to unknown names or is malformed.
    """
    try:
        return template.format(**asdict(view), **view.sections())
    except (AttributeError, IndexError, KeyError, TypeError, ValueError) as error:
        raise UsageTemplateError(f"Invalid usage template: {error}") from error


def default_usage_func(command: Command) -> None:
    """Render the command's usage template and print it to the console."""
    try:
        text = render_usage(build_usage_view(command), command.get_usage_template())
    except UsageTemplateError as error:
        logger.error("[Command:%s] %s", command.name, error)
        raise
    console.print(text, markup=False, emoji=False, end="")
