"""
Logging configuration for the SWAPI fetcher.
Provides consistent logging across all modules.

Console output goes to stderr: stdout is reserved for flushed items.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (usually module name)
        level: Logging level (default INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(f"swapi.{name}")

    if not logger.handlers:
        # Console handler
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)

        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
        console_handler.setFormatter(formatter)

        logger.addHandler(console_handler)
        logger.setLevel(level)

    return logger


def set_level(level: Union[int, str]) -> None:
    """Apply a level to every swapi.* logger created so far."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    manager = logging.Logger.manager
    for name, logger in list(manager.loggerDict.items()):
        if name.startswith("swapi.") and isinstance(logger, logging.Logger):
            logger.setLevel(level)
            for handler in logger.handlers:
                handler.setLevel(level)


def setup_file_logging(log_dir: Optional[Path] = None, level: int = logging.DEBUG) -> Path:
    """
    Add file handler to root swapi logger.

    Args:
        log_dir: Directory for log files. If None, uses ./logs
        level: File logging level (default DEBUG)

    Returns:
        Path of the log file
    """
    if log_dir is None:
        log_dir = Path.cwd() / "logs"

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "swapi.log"

    root_logger = logging.getLogger("swapi")
    root_logger.setLevel(level)

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger.addHandler(file_handler)
    return log_file
