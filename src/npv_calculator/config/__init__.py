"""Configuration — environment settings and logging setup."""

from npv_calculator.config.settings import Settings, get_settings
from npv_calculator.config.logging import get_logger, setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "get_logger",
    "setup_logging",
]
