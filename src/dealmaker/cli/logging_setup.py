"""Logging configuration for the CLI.

Log records are rendered on stderr through ``rich.logging.RichHandler``
when Rich is installed, else through a plain stream handler.  Nothing
is logged to stdout, which carries only command results.
"""

from __future__ import annotations

import logging

from dealmaker.exceptions import EnvironmentError

_LEVELS: tuple[int, ...] = (logging.WARNING, logging.INFO, logging.DEBUG)


def level_for_verbosity(verbosity: int) -> int:
    """Map the number of ``-v`` flags to a logging level."""
    index = max(0, min(verbosity, len(_LEVELS) - 1))
    return _LEVELS[index]


def configure_logging(verbosity: int = 0) -> None:
    """Install a single stderr handler on the ``dealmaker`` logger."""
    logger = logging.getLogger("dealmaker")
    logger.setLevel(level_for_verbosity(verbosity))
    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    handler: logging.Handler
    try:
        from rich.logging import RichHandler

        from dealmaker.cli.console import get_rich_console

        handler = RichHandler(
            console=get_rich_console(),
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    except (ModuleNotFoundError, EnvironmentError):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    logger.addHandler(handler)
    logger.propagate = False
