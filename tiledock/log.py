"""Logging configuration for tiledock."""

import logging
import os

LOG_LEVEL = os.environ.get("TILEDOCK_LOG_LEVEL", "WARNING").upper()

logging.basicConfig(
    format="%(asctime)s.%(msecs)03d %(name)-24s %(levelname)-5s %(message)s",
    datefmt="%H:%M:%S",
    level=getattr(logging, LOG_LEVEL, logging.WARNING),
)


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the 'tiledock.' namespace.

    Level controlled by TILEDOCK_LOG_LEVEL env var (default WARNING).
    """
    return logging.getLogger(f"tiledock.{name}")
