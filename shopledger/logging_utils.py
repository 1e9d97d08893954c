"""Logging helpers for shopledger.

Modules call ``get_logger(__name__)``. The CLI calls ``configure_logging``
once at start-up; repeated calls only adjust the level so handlers are
never duplicated.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

_CONFIGURED = False

LOG_FORMAT = "%(name)s - %(message)s"


def configure_logging(level: int | str = logging.WARNING) -> None:
    """Configure the shopledger logger with a rich handler on stderr.

    Args:
        level: Logging level as an int or a name such as "DEBUG".
    """
    global _CONFIGURED
    logger = logging.getLogger("shopledger")
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    if _CONFIGURED:
        return

    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    logger.propagate = False
    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the shopledger namespace."""
    return logging.getLogger(name)
