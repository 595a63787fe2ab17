"""
Logging Configuration for the testnet token deployer

Provides structured logging with:
- Timestamps
- Console output on stderr (stdout is reserved for JSON results)
- Optional daily file rotation and a separate error log when LOG_DIR is set
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from pathlib import Path
from typing import Optional


ROOT_LOGGER_NAME = "token_deployer"

# Log formats
DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_log_dir() -> Optional[Path]:
    """Return the directory for file logs, or None when file logging is off."""
    value = os.getenv("LOG_DIR")
    if not value:
        return None
    log_dir = Path(value)
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    console: bool = True,
    detailed: bool = False,
) -> logging.Logger:
    """
    Setup a logger with console and (optionally) file handlers.

    Args:
        name: Logger name (module loggers under ``token_deployer`` inherit it)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file name (defaults to name.log)
        console: Whether to log to the console (stderr)
        detailed: Whether to use detailed format (includes file/line)

    Returns:
        Configured logger instance

    Example:
        >>> logger = setup_logger(level=logging.DEBUG)
        >>> logger.info("Deploying WBTC")
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    log_format = DETAILED_FORMAT if detailed else SIMPLE_FORMAT
    formatter = logging.Formatter(log_format, datefmt=DATE_FORMAT)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    log_dir = get_log_dir()
    if log_dir is None:
        return logger

    if log_file is None:
        log_file = f"{name}.log"

    file_handler = TimedRotatingFileHandler(
        log_dir / log_file,
        when="midnight",
        interval=1,
        backupCount=30,  # Keep 30 days of logs
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # Separate error log
    error_handler = RotatingFileHandler(
        log_dir / f"{name}_errors.log",
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(error_handler)

    return logger


def get_cli_logger(verbose: bool = False) -> logging.Logger:
    """Get the package logger configured for a CLI run."""
    level = logging.DEBUG if verbose else logging.INFO
    return setup_logger(ROOT_LOGGER_NAME, level=level, detailed=verbose)
