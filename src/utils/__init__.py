"""Utility modules for logging."""

from .logger import LOGGER_NAME, setup_logger

__all__ = ["LOGGER_NAME", "setup_logger"]
