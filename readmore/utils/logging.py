"""Simple logging utilities for readmore."""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given module name."""
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)

    return logger


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Configure the package logger from the CLI verbosity flags.

    Args:
        verbose: Log everything down to DEBUG
        quiet: Only log warnings and errors

    Returns:
        The configured ``readmore`` logger
    """
    logger = get_logger("readmore")
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
    return logger
