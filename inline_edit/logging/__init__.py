"""
Logging configuration and utilities for the inline edit controller.
"""
from .config import configure_logging, get_logger, get_state_logger

__all__ = ["configure_logging", "get_logger", "get_state_logger"]
