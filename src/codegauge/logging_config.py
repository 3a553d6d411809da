"""
Logging configuration for codegauge.

Only the ``codegauge`` logger is configured, so embedding applications keep
control of the root logger. Records go to stderr through Rich, leaving stdout
to the report; they still propagate, so host handlers see them too.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "codegauge"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _level_for(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def _rich_handler(verbose: bool) -> logging.Handler:
    # File paths and user-supplied names are logged verbatim, so no markup
    return RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=True,
        show_path=verbose,
    )


def _file_handler(log_file: str) -> logging.Handler:
    handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATEFMT))
    return handler


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Attach codegauge's handlers and set its level.

    Calling this again replaces the handlers from the previous call, so the
    CLI and the library API can both call it without doubling output.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging (wins over ``verbose``)
        log_file: Optional file path to append logs to

    Returns:
        Configured ``codegauge`` logger
    """
    level = _level_for(verbose, quiet)
    logger = logging.getLogger(ROOT_LOGGER)

    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    logger.addHandler(_rich_handler(verbose))
    if log_file:
        logger.addHandler(_file_handler(log_file))

    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the ``codegauge`` namespace.

    Args:
        name: Module name (e.g. ``codegauge.scanning.discovery``).
              If None, returns the root ``codegauge`` logger.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
