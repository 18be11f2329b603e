# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration loader for Arbor command trees.

A configuration file describes the root command; nested `commands` describe
its subcommands. `action` is a dotted import path to the callable that runs
the command (`pkg.module.func` or `pkg.module:func`).

Example (YAML):
    use: app
    long: An example application.
    global_flags:
      - name: verbose
        shorthand: v
        type: bool
        usage: verbose output
    commands:
      - use: build [target]
        short: Build a target
        action: app.cli:build
        flags:
          - name: output
            shorthand: o
            default: dist
            usage: output directory
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from arbor.command import Command
from arbor.exceptions import ConfigError, FlagError
from arbor.flags import FlagType
from arbor.importer import resolve_action
from arbor.logger import logger


class RawFlag(BaseModel):
    """Raw flag model for Arbor configuration."""

    name: str
    shorthand: str = ""
    type: FlagType = FlagType.STRING
    default: Any = None
    usage: str = ""
    hidden: bool = False
    deprecated: str = ""

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, value: Any) -> FlagType:
        return FlagType(value)


class RawCommand(BaseModel):
    """Raw command model for Arbor configuration."""

    use: str
    short: str = ""
    long: str = ""
    example: str = ""
    action: str | None = None
    usage_template: str = ""
    flags: list[RawFlag] = Field(default_factory=list)
    global_flags: list[RawFlag] = Field(default_factory=list)
    commands: list[RawCommand] = Field(default_factory=list)

    def to_command(self) -> Command:
        """Build the `Command` tree described by this model."""
        run = None
        if self.action:
            try:
                run = resolve_action(self.action)
            except (ImportError, ValueError) as error:
                logger.error("Failed to resolve action '%s': %s", self.action, error)
                raise ConfigError(
                    f"Could not import action '{self.action}' for '{self.use}': {error}"
                ) from error

        command = Command(
            use=self.use,
            short=self.short,
            long=self.long,
            example=self.example,
            run=run,
            usage_template=self.usage_template,
        )
        try:
            for raw_flag in self.flags:
                command.local_flags.add(**raw_flag.model_dump())
            for raw_flag in self.global_flags:
                command.global_flags.add(**raw_flag.model_dump())
        except FlagError as error:
            raise ConfigError(f"Invalid flag for '{self.use}': {error}") from error

        sub_commands = [raw_command.to_command() for raw_command in self.commands]
        try:
            command.add_command(*sub_commands)
        except FlagError as error:
            raise ConfigError(
                f"Conflicting global flags under '{self.use}': {error}"
            ) from error
        return command


def loader(file_path: Path | str) -> Command:
    """
    Load an Arbor command tree from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to the config file (YAML or TOML).

    Returns:
        Command: The root command of the loaded tree.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If the file format is unsupported or the content is invalid.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        try:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(config_file)
            elif suffix == ".toml":
                raw_config = toml.load(config_file)
            else:
                raise ConfigError(f"Unsupported config format: {suffix}")
        except (yaml.YAMLError, toml.TomlDecodeError) as error:
            raise ConfigError(f"Could not parse {path}: {error}") from error

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a dictionary describing the root command.\n"
            "Example:\n"
            "use: 'app'\n"
            "commands:\n"
            "  - use: 'build'\n"
            "    short: 'Build the project'\n"
            "    action: 'my_module.build'"
        )

    try:
        raw_command = RawCommand.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigError(f"Invalid configuration in {path}:\n{error}") from error

    logger.debug("Loaded configuration from '%s'.", path)
    return raw_command.to_command()
