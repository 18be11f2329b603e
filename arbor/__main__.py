"""
Arbor CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import os
import sys
from pathlib import Path
from typing import Sequence

from rich.markup import escape

from arbor.config import loader
from arbor.console import console
from arbor.exceptions import ArborError
from arbor.logger import logger
from arbor.utils import setup_logging


def find_arbor_config() -> Path | None:
    candidates = [
        Path.cwd() / "arbor.yaml",
        Path.cwd() / "arbor.toml",
        Path.cwd() / ".arbor.yaml",
        Path.cwd() / ".arbor.toml",
        Path(os.environ.get("ARBOR_CONFIG", "arbor.yaml")),
        Path.home() / ".config" / "arbor" / "arbor.yaml",
        Path.home() / ".config" / "arbor" / "arbor.toml",
    ]
    return next((p for p in candidates if p.is_file()), None)


def bootstrap() -> Path | None:
    config_path = find_arbor_config()
    if config_path and str(config_path.parent) not in sys.path:
        sys.path.insert(0, str(config_path.parent))
    return config_path


def main(argv: Sequence[str] | None = None) -> int:
    """Load the command tree from the nearest config file and run it."""
    setup_logging()
    config_path = bootstrap()
    if not config_path:
        console.print(
            "[bold red]No Arbor configuration found.[/] "
            "Create arbor.yaml or arbor.toml, or set ARBOR_CONFIG."
        )
        return 1

    args = list(sys.argv[1:] if argv is None else argv)
    try:
        root = loader(config_path)
        root.execute([root.name, *args])
    except ArborError as error:
        logger.debug("Execution failed: %s", error)
        console.print(f"[bold red]Error:[/] {escape(str(error))}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
