"""
Logging configuration for the tournament engine.

Library modules log through module loggers under the "americano" namespace
(logging.getLogger(__name__)) and never configure handlers themselves.
setup_logging() is called once by the command-line entry point.
"""

import logging
import sys

APP_LOGGER_NAME = "americano"


def setup_logging(level: int = logging.INFO) -> None:
    """
    Configure logging for the command line.

    The root logger stays at WARNING so third-party libraries are quiet; the
    "americano" namespace logs at level.

    Args:
        level: The logging level for engine modules (default: INFO)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING)

    # Avoid adding duplicate handlers if setup is called multiple times
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        ))
        root_logger.addHandler(handler)

    logging.getLogger(APP_LOGGER_NAME).setLevel(level)
