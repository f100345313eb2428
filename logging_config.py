"""
Centralized logging configuration for the vote tally tools.

Usage:
    from logging_config import setup_logging, get_logger

    # Setup logging at application start
    setup_logging(level="INFO")

    # Get a logger in any module
    logger = get_logger(__name__)
    logger.info("Tallying ballots...")
"""

import functools
import logging
import os
import sys
from datetime import datetime


# Log format with timestamp, level, module, and message
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = None, log_file: str = None) -> None:
    """
    Configure logging for the application.

    Console output goes to stderr; stdout is reserved for the report itself.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to env var LOG_LEVEL or INFO.
        log_file: Optional path to log file. If provided, logs will also be written to file.
    """
    if level is None:
        level = os.environ.get("LOG_LEVEL", "INFO")

    level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root_logger.addHandler(file_handler)

    # reportlab is chatty at DEBUG
    logging.getLogger("reportlab").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


class LogContext:
    """
    Context manager for timing operations.

    Usage:
        with LogContext(logger, "Tallying ballots"):
            # ... code to time ...
    """

    def __init__(self, logger: logging.Logger, operation: str):
        self.logger = logger
        self.operation = operation
        self.start_time = None

    def __enter__(self):
        self.start_time = datetime.now()
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = (datetime.now() - self.start_time).total_seconds()
        if exc_type is None:
            self.logger.debug(f"Completed: {self.operation} ({elapsed:.2f}s)")
        else:
            self.logger.error(f"Failed: {self.operation} ({elapsed:.2f}s) - {exc_val}")
        return False  # Don't suppress exceptions


def log_function_call(func):
    """
    Decorator to log function entry and exit.

    Usage:
        @log_function_call
        def parse_organizations(rows, existing_tokens):
            ...
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger(func.__module__)
        func_name = func.__name__
        logger.debug(f"Calling: {func_name}()")
        try:
            result = func(*args, **kwargs)
            logger.debug(f"Returned: {func_name}()")
            return result
        except Exception as e:
            logger.error(f"Error in {func_name}(): {e}")
            raise
    return wrapper
