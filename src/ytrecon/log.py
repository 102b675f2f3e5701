from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .errors import ConfigError

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """Route loguru output to stderr (and optionally a file).

    The report is printed to stdout, so log lines never interleave with it
    when the output is redirected.
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=CONSOLE_FORMAT)
    if log_file is not None:
        # The file always gets the full detail.
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            logger.add(
                str(log_file),
                level="DEBUG",
                format=FILE_FORMAT,
                rotation="10 MB",
                retention=5,
                encoding="utf-8",
                backtrace=True,
            )
        except OSError as e:
            raise ConfigError(f"Cannot open log file {log_file}: {e}") from e
