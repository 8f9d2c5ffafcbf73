"""Logging utilities for DepDiff."""

import logging
import sys
from pathlib import Path
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

LOGGER_PREFIX = "depdiff"

_default_level = logging.INFO


class DepDiffLogger:
    """Logger wrapper with rich formatting on stderr."""

    def __init__(self, name: str, level: Optional[int] = None) -> None:
        self.logger = logging.getLogger(f"{LOGGER_PREFIX}.{name}")
        self.logger.setLevel(level if level is not None else _default_level)
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Setup rich console handler with custom theme."""
        console = Console(stderr=True, theme=Theme({
            "info": "cyan",
            "warning": "yellow",
            "error": "red",
            "critical": "red bold",
            "debug": "dim",
        }))

        handler = RichHandler(
            console=console,
            show_time=True,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter(fmt="%(name)s: %(message)s", datefmt="[%X]"))

        # get_logger may be called repeatedly for one name
        self.logger.handlers.clear()
        self.logger.addHandler(handler)
        self.logger.propagate = False

    def set_level(self, level: int) -> None:
        self.logger.setLevel(level)

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log info message."""
        self.logger.info(msg, extra=kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log warning message."""
        self.logger.warning(msg, extra=kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        """Log error message."""
        self.logger.error(msg, extra=kwargs)

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log debug message."""
        self.logger.debug(msg, extra=kwargs)


def setup_logging(
    level: int = logging.WARNING,
    log_file: Optional[Path] = None,
    verbose: bool = False
) -> None:
    """Setup logging configuration for DepDiff.

    Args:
        level: Logging level for DepDiff loggers
        log_file: Optional log file path
        verbose: Enable debug logging
    """
    global _default_level

    if verbose:
        level = logging.DEBUG
    _default_level = level

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
            *([logging.FileHandler(log_file)] if log_file else [])
        ]
    )

    # Loggers created through get_logger do not propagate, so set them directly
    for name, existing in logging.Logger.manager.loggerDict.items():
        if name.startswith(f"{LOGGER_PREFIX}.") and isinstance(existing, logging.Logger):
            existing.setLevel(level)

    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str) -> DepDiffLogger:
    """Get a DepDiff logger instance.

    Args:
        name: Logger name

    Returns:
        Configured logger instance
    """
    return DepDiffLogger(name)
