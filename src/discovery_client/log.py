"""Logging setup for applications embedding discovery_client.

Every module logs through ``logging.getLogger(__name__)`` and the library
installs no handlers on import. :func:`configure_logging` is an opt-in
helper that sends the package's records to stderr through a Rich handler,
so diagnostics never mix with data written to stdout.

Colour follows the usual conventions: it is turned off when ``NO_COLOR`` is
set (any value), when ``TERM=dumb``, or when the caller asks for it.
"""

from __future__ import annotations

import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "discovery_client"


def configure_logging(
    verbose: bool = False,
    quiet: bool = False,
    no_color: bool = False,
) -> logging.Logger:
    """Attach a stderr :class:`~rich.logging.RichHandler` to the package logger.

    Calling this again replaces the handler installed by the previous call
    rather than adding a second one.

    Args:
        verbose: Log at ``DEBUG`` instead of ``INFO``.
        quiet: Only log errors. Wins over *verbose*.
        no_color: Disable colour even on a capable terminal.

    Returns:
        The configured ``discovery_client`` logger.
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    console = Console(
        file=sys.stderr,
        no_color=no_color or _should_disable_color(),
        stderr=True,
    )
    handler = RichHandler(
        console=console,
        show_path=verbose,
        rich_tracebacks=verbose,
        markup=False,
    )
    handler.set_name(LOGGER_NAME)

    logger = logging.getLogger(LOGGER_NAME)
    for existing in list(logger.handlers):
        if existing.get_name() == LOGGER_NAME:
            logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (any value) or ``TERM=dumb``."""
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False
