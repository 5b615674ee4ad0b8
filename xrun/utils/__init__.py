"""
Utility functions and helpers.

Logging setup and terminal output clean-up shared by the runner and the CLI.
"""

from xrun.utils.ansi import strip_ansi
from xrun.utils.logging import configure_logging, get_logger

__all__ = [
    "strip_ansi",
    "configure_logging",
    "get_logger",
]
