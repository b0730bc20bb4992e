"""
Utility functions and helpers.

Logging configuration and external command execution.
"""

from kubectl_ai.utils.command import run_command
from kubectl_ai.utils.logging import configure_logging, get_logger

__all__ = [
    "run_command",
    "configure_logging",
    "get_logger",
]
