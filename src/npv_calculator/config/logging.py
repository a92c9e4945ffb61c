"""Logging setup for the API process.

One stdout handler on the root logger; ``npv_calculator.*`` loggers inherit
it.  Uvicorn's per-request access log is held at its own level so request
lines do not drown out calculation logs.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

ACCESS_LOGGER = "uvicorn.access"


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def setup_logging(level: str = "INFO", access_level: str = "WARNING") -> None:
    """
    Configure the root handler and the uvicorn access log level.
    """
    logging.basicConfig(
        level=_level(level),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger(ACCESS_LOGGER).setLevel(_level(access_level))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
