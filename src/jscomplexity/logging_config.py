"""
Logging configuration for jscomplexity.

Records go to stderr through a rich handler so reports printed on stdout
(JSON, XML, checkstyle) stay machine readable. Only the ``jscomplexity``
logger tree is configured; the root logger of a host application is left
alone.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "jscomplexity"


def _level_for(verbose: bool, quiet: bool) -> int:
    # quiet wins so `-q -v` still yields clean output
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[str] = None,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Attach a rich handler to the jscomplexity logger.

    Calling this again replaces the previous handler, so repeated CLI
    invocations in one process (as under a test runner) do not duplicate
    records.

    Args:
        verbose: Log per-module progress at DEBUG level, with paths and times
        quiet: Only log errors
        log_file: Also append plain records to this file
        console: Console to render to; a fresh stderr console by default

    Returns:
        The configured package logger
    """
    level = _level_for(verbose, quiet)

    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=verbose,
        show_path=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logger = logging.getLogger(ROOT_LOGGER)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    logger.addHandler(handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
        )
        logger.addHandler(file_handler)

    logger.setLevel(level)
    logger.propagate = False

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``jscomplexity`` tree, e.g. ``jscomplexity.walker``."""
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
