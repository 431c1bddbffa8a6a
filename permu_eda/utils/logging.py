"""
Logging utilities for permu-eda.

This module provides the standard logging setup with console and file
handlers, plus a separate error log, for the 'permu_eda' logger hierarchy.
Library modules only create module loggers; configuring handlers is left to
applications and the command-line entry point.
"""

import logging
from pathlib import Path
from typing import Union

LOGGER_NAME = 'permu_eda'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

_LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL
}


def _resolve_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    return _LEVELS.get(str(level).upper(), logging.INFO)


def setup_logging(
    log_dir: Union[str, Path] = "results/logs",
    log_level: Union[str, int] = "INFO",
    log_to_file: bool = False,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Set up standard logging configuration for permu-eda.

    Args:
        log_dir: Directory to store log files
        log_level: Logging level as string ('DEBUG', 'INFO', ...) or int
        log_to_file: Whether to log to file
        log_to_console: Whether to log to console

    Returns:
        Configured 'permu_eda' logger
    """
    log_level_int = _resolve_level(log_level)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level_int)

    # Clear existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if log_to_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level_int)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_to_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path / 'permu_eda.log', mode='a')
        file_handler.setLevel(log_level_int)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        # Error log file (separate file for errors only)
        error_handler = logging.FileHandler(log_path / 'errors.log', mode='a')
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        logger.addHandler(error_handler)

    logger.info(f"Logging initialized at level {logging.getLevelName(log_level_int)}")
    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance by name.

    Args:
        name: Logger name (default: 'permu_eda')

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
