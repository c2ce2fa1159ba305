"""Logging configuration for the eligibility service."""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(log_level: str = "INFO") -> None:
    """
    Configure standard library logging for the service.

    Args:
        log_level: Level name, case-insensitive (e.g. "info", "DEBUG")
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        format=LOG_FORMAT,
        stream=sys.stdout,
        level=level,
    )
    logging.getLogger("eligibility").setLevel(level)
