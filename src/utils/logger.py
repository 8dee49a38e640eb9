"""
Logging Module

Logging setup shared by the version check application.
"""

import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Client libraries that are chatty at DEBUG
NOISY_LOGGERS = ('urllib3', 'kubernetes', 'slack_sdk')


def setup_logging(level: str = 'INFO', debug: bool = False) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level name (e.g. 'INFO')
        debug: Force DEBUG level and quiet the client libraries
    """
    log_level = logging.DEBUG if debug else getattr(logging, str(level).upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True
    )

    if debug:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger."""
    return logging.getLogger(name)
