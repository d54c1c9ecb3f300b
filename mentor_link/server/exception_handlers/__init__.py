"""
Exception handlers for the Mentor-Link server.

This package contains custom exception handlers for different error types
and a setup function to register them with the FastAPI application.
"""

from .domain_handlers import lifecycle_exception_handler, meeting_exception_handler
from .global_handler import global_exception_handler, setup_exception_handlers

__all__ = [
    "global_exception_handler",
    "lifecycle_exception_handler",
    "meeting_exception_handler",
    "setup_exception_handlers",
]
