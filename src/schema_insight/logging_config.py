"""
Logging for Schema Insight.

All modules log under the ``schema_insight`` namespace. Handlers are only
installed by :func:`setup_logging` (the CLI calls it); library users who
never call it get the standard ``logging`` behaviour of their application.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "schema_insight"

VERBOSITY_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


def verbosity_for(verbose: bool = False, quiet: bool = False) -> str:
    """Map the CLI flag pair to a verbosity name (quiet wins)."""
    if quiet:
        return "quiet"
    if verbose:
        return "verbose"
    return "normal"


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[str] = None,
    verbosity: Optional[str] = None,
) -> logging.Logger:
    """
    Install a rich stderr handler (and optionally a file handler) on the
    package logger.

    Calling it again replaces the handlers from the previous call, so
    repeated CLI invocations in one process do not duplicate output.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path to append logs to
        verbosity: Explicit level name ("quiet", "normal", "verbose");
            takes precedence over the flags

    Returns:
        The configured ``schema_insight`` logger
    """
    name = verbosity or verbosity_for(verbose, quiet)
    level = VERBOSITY_LEVELS.get(name, logging.WARNING)
    detailed = level <= logging.DEBUG

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    rich_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=detailed,
        markup=False,
        show_time=True,
        show_path=detailed,
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(rich_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        logger.addHandler(file_handler)

    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Logger for a module, always inside the ``schema_insight`` namespace.

    ``get_logger(__name__)`` from ``schema_insight.engine`` returns
    ``schema_insight.engine``; a bare name such as ``"loader"`` becomes
    ``schema_insight.loader``.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)

    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(name)
