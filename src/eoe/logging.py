from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "eoe"


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def configure_logging(*, level: int = logging.WARNING, console: Optional[Console] = None) -> logging.Logger:
    """
    Configure the "eoe" logger with a Rich console handler on stderr.

    Returns
    -------
    logger
        The configured logger. Calling this again replaces earlier handlers.

    Usage example
    -------------
        logger = configure_logging(level=logging.DEBUG)
        logger.debug("Hello")
    """
    logger = get_logger()
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    handler = RichHandler(
        console=console if console is not None else Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)

    logger.debug("Logging configured (level=%s)", logging.getLevelName(level))
    return logger
