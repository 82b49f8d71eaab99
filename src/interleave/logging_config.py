"""Logging configuration for interleave."""

import sys

from loguru import logger

_FORMAT = "{level.icon} {message}"
_VERBOSE_FORMAT = "{level.icon} <dim>{name}:{function}</dim> {message}"


def configure_logging(*, verbose: bool = False) -> None:
    """Send interleave's logs to stderr, at DEBUG with ``verbose`` and INFO otherwise."""
    logger.remove()
    if verbose:
        logger.add(sys.stderr, level="DEBUG", format=_VERBOSE_FORMAT)
    else:
        logger.add(sys.stderr, level="INFO", format=_FORMAT)
