"""Shared utilities: logging setup."""

from cinelist.utils.logger import setup_logger

__all__ = ["setup_logger"]
