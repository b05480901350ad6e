"""Logging configuration for menu-sync."""

import sys

from loguru import logger

_FORMAT = "{level.icon} {message}"
# Debug runs also show where a sync decision was logged.
_VERBOSE_FORMAT = "{time:HH:mm:ss} {level.icon} {name}:{function} {message}"


def configure_logging(*, verbose: bool = False) -> None:
    """Send menu-sync logs to stderr, INFO by default or DEBUG when verbose."""
    logger.remove()
    if verbose:
        logger.add(sys.stderr, level="DEBUG", format=_VERBOSE_FORMAT)
    else:
        logger.add(sys.stderr, level="INFO", format=_FORMAT)
