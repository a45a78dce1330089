"""Logging setup for the usermeta package and its CLI."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

_LOGGER_NAME = "usermeta"
_CONSOLE_FORMAT = "%(name)s: %(levelname)s %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``usermeta.<name>``, or the package root logger when ``name`` is empty."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def resolve_level(*, verbose: bool = False, quiet: bool = False) -> int:
    """Map the CLI verbosity switches onto a logging level.

    The default level keeps locale canonicalization warnings visible; ``quiet``
    hides them and leaves only errors, ``verbose`` adds hashing and generation
    debug records.
    """
    if verbose and quiet:
        raise ValueError("verbose and quiet logging are mutually exclusive")
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, stream: TextIO | None = None
) -> logging.Logger:
    """Attach a single console handler to the package logger.

    Records go to ``stream`` (stderr by default) so they never interleave with a
    metadata block printed on stdout.
    """
    level = resolve_level(verbose=verbose, quiet=quiet)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Repeated CLI invocations in one process must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)
    return logger


__all__ = ["configure_logging", "get_logger", "resolve_level"]
