# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `FlagSet`, a named collection of `Flag` definitions with
POSIX/GNU style parsing, used by every `Command` for its global, local and
effective flag scopes.

It is not a general argument parser: it parses flags only, and leaves every
non-flag token in `args` for the command tree to route or hand to the command.

Key Features:
- Long flags: `--name=value`, `--name value`, `--name` for bool/count flags
- Short flags: `-a123`, `-a 123`, `-a=123`
- POSIX-style bundling for single-character flags (`-vx`, `-vo out.txt`)
- `--` terminates flag parsing
- Interspersed positional arguments collected in order
- Shared-definition merging via `add_flag_set()` without modifying the source
- An output sink that receives diagnostics (errors, deprecation notices)
- Aligned usage listings via `flag_usages()`

Example Usage:
    flags = FlagSet("build")
    flags.add("output", "o", default="out", usage="output directory")
    flags.add("verbose", "v", type=FlagType.BOOL, usage="verbose output")

    flags.parse(["-vo", "dist", "src"])

    # flags.get("output") == "dist", flags.get("verbose") is True
    # flags.args == ["src"]
"""
from __future__ import annotations

import sys
from typing import Any, Iterator, Sequence, TextIO

from arbor.exceptions import FlagError, FlagNotDefinedError, FlagRedefinedError
from arbor.flags.flag import Flag
from arbor.flags.flag_type import FlagType
from arbor.signals import HelpSignal


class FlagSet:
    """
    A named, ordered collection of flags.

    Flags are looked up by long name and by shorthand. Parsing stores values
    on the `Flag` objects themselves, so sets that share flags through
    `add_flag_set()` observe each other's parsed values.

    Attributes:
        name (str): Name of the owner, used in error messages.
        parsed (bool): True once `parse()` has been called.
    """

    def __init__(
        self,
        name: str = "",
        output: TextIO | None = None,
    ) -> None:
        self.name: str = name
        self.parsed: bool = False
        self._output: TextIO | None = output
        self._flags: dict[str, Flag] = {}
        self._shorthands: dict[str, Flag] = {}
        self._args: list[str] = []

    @property
    def output(self) -> TextIO:
        """The diagnostic sink, `sys.stderr` unless one was set."""
        if self._output is None:
            return sys.stderr
        return self._output

    def set_output(self, output: TextIO | None) -> None:
        self._output = output

    @property
    def args(self) -> list[str]:
        """Positional arguments left over from the last `parse()`."""
        return list(self._args)

    def add_flag(self, flag: Flag) -> Flag:
        """
        Register an existing `Flag` object.

        Raises:
            FlagError: If the name or shorthand is malformed.
            FlagRedefinedError: If the name or shorthand is already taken.
        """
        if not flag.name or flag.name.startswith("-"):
            raise FlagError(f"{self.name} flag has an invalid name: '{flag.name}'")
        if flag.name in self._flags:
            raise FlagRedefinedError(f"{self.name} flag redefined: {flag.name}")
        if flag.shorthand:
            if len(flag.shorthand) != 1 or flag.shorthand == "-":
                raise FlagError(
                    f"'{flag.shorthand}' shorthand for '{flag.name}' "
                    "must be a single character"
                )
            existing = self._shorthands.get(flag.shorthand)
            if existing is not None:
                raise self._shorthand_redefined(flag, existing)
            self._shorthands[flag.shorthand] = flag
        self._flags[flag.name] = flag
        return flag

    def _shorthand_redefined(self, flag: Flag, existing: Flag) -> FlagRedefinedError:
        return FlagRedefinedError(
            f"unable to redefine '{flag.shorthand}' shorthand in "
            f"'{self.name}' flagset: it's already used for "
            f"'{existing.name}' flag"
        )

    def add(
        self,
        name: str,
        shorthand: str = "",
        default: Any = None,
        usage: str = "",
        type: FlagType | str = FlagType.STRING,
        hidden: bool = False,
        deprecated: str = "",
    ) -> Flag:
        """Define a new flag with an optional one-letter shorthand."""
        return self.add_flag(
            Flag(
                name=name,
                shorthand=shorthand,
                type=FlagType(type),
                default=default,
                usage=usage,
                hidden=hidden,
                deprecated=deprecated,
            )
        )

    def add_flag_set(self, other: FlagSet | None) -> None:
        """
        Add every flag of `other` whose name is not defined here yet.

        The flag objects are shared, not copied; `other` is left untouched.
        Nothing is added if any of the new flags would clash.

        Raises:
            FlagRedefinedError: If a new flag's shorthand is already taken.
        """
        if other is None:
            return
        pending = [flag for flag in other if flag.name not in self._flags]
        shorthands: dict[str, Flag] = {}
        for flag in pending:
            if not flag.shorthand:
                continue
            existing = self._shorthands.get(flag.shorthand) or shorthands.get(
                flag.shorthand
            )
            if existing is not None and existing is not flag:
                raise self._shorthand_redefined(flag, existing)
            shorthands[flag.shorthand] = flag
        for flag in pending:
            self.add_flag(flag)

    def clear(self) -> None:
        """Remove every flag definition. Parsed positional arguments are kept."""
        self._flags.clear()
        self._shorthands.clear()

    def lookup(self, name: str) -> Flag | None:
        return self._flags.get(name)

    def shorthand_lookup(self, shorthand: str) -> Flag | None:
        return self._shorthands.get(shorthand)

    def get(self, name: str) -> Any:
        """
        Return the current value of a flag.

        Raises:
            FlagNotDefinedError: If no flag with that name is defined.
        """
        flag = self._flags.get(name)
        if flag is None:
            raise FlagNotDefinedError(f"flag accessed but not defined: {name}")
        return flag.value

    def changed(self, name: str) -> bool:
        """Whether the flag was set on the command line."""
        flag = self._flags.get(name)
        return flag is not None and flag.changed

    def has_flags(self) -> bool:
        return len(self._flags) > 0

    def has_available_flags(self) -> bool:
        """Whether any flag is defined that is not hidden."""
        return any(not flag.hidden for flag in self._flags.values())

    def parse(self, args: Sequence[str]) -> None:
        """
        Parse flags from `args`, storing positional tokens in `args`.

        Raises:
            FlagError: On unknown flags, missing values or invalid values. The
                message is also written to the output sink.
            HelpSignal: If `-h` or `--help` is given and not defined.
        """
        self.parsed = True
        self._args = []
        remaining = list(args)
        try:
            while remaining:
                token = remaining.pop(0)
                if token == "--":
                    self._args.extend(remaining)
                    break
                if len(token) < 2 or not token.startswith("-"):
                    self._args.append(token)
                    continue
                if token.startswith("--"):
                    self._parse_long(token, remaining)
                else:
                    self._parse_short(token, remaining)
        except FlagError as error:
            self.output.write(f"{error}\n")
            raise

    def _parse_long(self, token: str, remaining: list[str]) -> None:
        name, has_value, value = token[2:].partition("=")
        if not name or name.startswith("-"):
            raise FlagError(f"bad flag syntax: {token}")

        flag = self._flags.get(name)
        if flag is None:
            if name == "help":
                raise HelpSignal()
            raise FlagError(f"unknown flag: --{name}")

        raw: str | None
        if has_value:
            raw = value
        elif not flag.takes_value:
            raw = None
        elif remaining:
            raw = remaining.pop(0)
        else:
            raise FlagError(f"flag needs an argument: --{name}")
        self._set(flag, raw)

    def _parse_short(self, token: str, remaining: list[str]) -> None:
        shorthands = token[1:]
        while shorthands:
            char = shorthands[0]
            flag = self._shorthands.get(char)
            if flag is None:
                if char == "h":
                    raise HelpSignal()
                raise FlagError(f"unknown shorthand flag: '{char}' in {token}")

            raw: str | None
            if len(shorthands) > 2 and shorthands[1] == "=":
                raw, shorthands = shorthands[2:], ""
            elif not flag.takes_value:
                raw, shorthands = None, shorthands[1:]
            elif len(shorthands) > 1:
                raw, shorthands = shorthands[1:], ""
            elif remaining:
                raw, shorthands = remaining.pop(0), ""
            else:
                raise FlagError(f"flag needs an argument: '{char}' in {token}")
            self._set(flag, raw)

    def _set(self, flag: Flag, raw: str | None) -> None:
        try:
            flag.set(raw)
        except ValueError as error:
            raise FlagError(
                f'invalid argument "{raw}" for "{flag.get_flags_text().strip()}" '
                f"flag: {error}"
            ) from error
        if flag.deprecated:
            self.output.write(
                f"Flag --{flag.name} has been deprecated, {flag.deprecated}\n"
            )

    def flag_usages(self) -> str:
        """
        Render all visible flags as an aligned, name-sorted listing.

        Returns:
            str: One line per flag, e.g. `  -o, --output string   output dir`.
        """
        lines: list[tuple[str, str]] = []
        for flag in sorted(self._flags.values(), key=lambda f: f.name):
            if flag.hidden:
                continue
            flags_text = f"  {flag.get_flags_text()}"
            if flag.type.placeholder:
                flags_text += f" {flag.type.placeholder}"
            lines.append((flags_text, flag.get_usage_text()))
        if not lines:
            return ""
        width = max(len(flags_text) for flags_text, _ in lines)
        return "\n".join(
            f"{flags_text:<{width}}   {usage}".rstrip() for flags_text, usage in lines
        )

    def __contains__(self, name: object) -> bool:
        return name in self._flags

    def __iter__(self) -> Iterator[Flag]:
        return iter(list(self._flags.values()))

    def __len__(self) -> int:
        return len(self._flags)

    def __str__(self) -> str:
        return (
            f"FlagSet(name='{self.name}', flags={len(self._flags)}, "
            f"shorthands={len(self._shorthands)}, parsed={self.parsed})"
        )

    def __repr__(self) -> str:
        return str(self)
