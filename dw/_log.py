"""Logowanie — standardowy `logging` z RichHandler na stderr."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_LEVELS = {0: None, 1: logging.INFO}


def setup_logging(verbosity: int = 0, default_level: str = "WARNING") -> None:
    """
    -v → INFO, -vv → DEBUG, inaczej `default_level` (DW_LOG_LEVEL).
    Wywoływane raz przez CLI; moduły biblioteczne tylko pobierają loggery.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    else:
        level = _LEVELS.get(verbosity) or getattr(logging, default_level, logging.WARNING)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
