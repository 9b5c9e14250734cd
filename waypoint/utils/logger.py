"""
Logging setup for Waypoint PDF.

Modules log through ``logging.getLogger(__name__)``; ``setup_logging``
attaches the handler to the ``waypoint`` logger they all descend from.
"""
import logging
import sys
from typing import Optional, Union

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ROOT_LOGGER_NAME = "waypoint"


def setup_logging(level: Union[int, str] = logging.INFO,
                  log_format: Optional[str] = None) -> logging.Logger:
    """
    Configure the application's root logger.

    Installs a single stdout handler on the ``waypoint`` logger. Calling
    it again only changes the level.

    Args:
        level: Logging level, as an int or a name such as ``"DEBUG"``
        log_format: Custom format string (optional)

    Returns:
        The configured ``waypoint`` logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(
            fmt=log_format or DEFAULT_FORMAT,
            datefmt=DEFAULT_DATE_FORMAT,
        ))
        logger.addHandler(handler)
        logger.propagate = False

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger

