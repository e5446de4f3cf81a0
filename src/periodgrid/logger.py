"""Log sinks for the periodgrid console script.

The library only emits records through loguru; sinks are attached here,
never on import.
"""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(level: str = "INFO", log_file: str | None = None) -> None:
    """Send records at ``level`` and above to stderr, and to ``log_file`` if given."""
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(path, format=FILE_FORMAT, level=level, rotation="10 MB")

    logger.debug(f"Logging at {level}" + (f" to {log_file}" if log_file else ""))
