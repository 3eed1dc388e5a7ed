# -*- coding: utf-8 -*-
"""
Centralized logging configuration for the population pipeline

Provides consistent logging setup across all modules with optional file output.
The CLI entry point calls setup_logging() once, then every module uses
logger = get_logger(__name__).

Examples:
# In main script or entry point
    from ontocsv.utils.logger import setup_logging
    setup_logging(log_file="logs/population.log")

    # In any module
    from ontocsv.utils.logger import get_logger
    logger = get_logger(__name__)
    logger.info("Ontology loaded")

"""
# Standard library
import logging
import sys
from pathlib import Path
from typing import Optional, Union

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Global flag to prevent duplicate configuration
_logging_configured = False


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    format_string: str = DEFAULT_FORMAT
) -> None:
    """
    Configure logging for the application.

    Sets up console output and optional file output with consistent formatting.
    Safe to call multiple times (will only configure on first call).

    Args:
        level: Logging level, as int or level name (default: logging.INFO)
        log_file: Optional path to log file. If provided, creates the parent
                  directory and writes to file in addition to console
        format_string: Log message format

    Example:
        >>> setup_logging(level="DEBUG")
        >>> logger = get_logger(__name__)
        >>> logger.debug("Skipping empty field")
    """
    global _logging_configured

    if _logging_configured:
        return

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    formatter = logging.Formatter(format_string)

    handlers = []

    # Console handler (always included). stderr keeps stdout free for the
    # summary printed by the CLI.
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True  # Override any existing configuration
    )

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
