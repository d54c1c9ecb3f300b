"""
Core utilities and configuration for Mentor-Link.

This package provides core functionality including logging configuration,
monitoring, database setup, and other shared utilities.
"""

from mentor_link.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
