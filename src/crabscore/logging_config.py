"""
Logging configuration for CrabScore.

Provides structured logging with rich formatting on the diagnostic stream.
The level comes from the resolved configuration, never from ambient state.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.INFO,
    "debug": logging.DEBUG,
}


def level_for(verbosity: str) -> int:
    """Map a verbosity name to a logging level (unknown names → WARNING)."""
    return _LEVELS.get(verbosity, logging.WARNING)


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure logging with rich handler for colored output.

    Args:
        verbosity: One of ``quiet``, ``normal``, ``verbose``, ``debug``
        log_file: Optional file path to write logs to

    Returns:
        Configured logger instance for crabscore
    """
    level = level_for(verbosity)
    debug = level <= logging.DEBUG

    console = Console(stderr=True)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=console,
            rich_tracebacks=True,
            tracebacks_show_locals=debug,
            markup=False,
            show_time=True,
            show_path=debug,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger("crabscore")
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'crabscore.pipeline')
              If None, returns the root crabscore logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger("crabscore")

    if not name.startswith("crabscore"):
        name = f"crabscore.{name}"

    return logging.getLogger(name)
