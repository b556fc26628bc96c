"""
Logging configuration.
"""

import logging

from rich.logging import RichHandler


def setup_logging(level: str = "INFO") -> None:
    """Route all log records through a rich handler."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
        force=True,
    )
