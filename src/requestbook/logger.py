"""Logging configuration."""

import logging
import sys

LOGGER_NAME = "requestbook"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Send requestbook log records to stdout at the given level."""
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger(LOGGER_NAME).setLevel(numeric_level)
    # urllib3 logs every connection at DEBUG.
    logging.getLogger("urllib3").setLevel(max(numeric_level, logging.INFO))
