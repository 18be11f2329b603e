# Arbor CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for Arbor CLI applications."""
import logging

logger: logging.Logger = logging.getLogger("arbor")
