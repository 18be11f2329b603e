# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance for Arbor CLI applications."""
from rich.console import Console

console = Console(highlight=False, soft_wrap=True)
