"""
Rich consoles and logging setup.

Log records go to standard error through ``rich``; standard output is
reserved for the result line.
"""
from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

err_console = Console(stderr=True)


def verbosity_level(verbose: int) -> int:
    """Map the ``--verbose`` counter to a logging level."""
    if verbose <= 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(verbose: int = 0, console: Console = err_console) -> None:
    """Configure application-wide logging for the given verbosity."""
    handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    logging.basicConfig(
        level=verbosity_level(verbose),
        format="%(message)s",
        handlers=[handler],
        force=True,
    )
