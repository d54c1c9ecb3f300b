"""
Middleware modules for the Mentor-Link server.
"""

from .logfire_middleware import REQUEST_ID_HEADER, LogfireMiddleware

__all__ = ["LogfireMiddleware", "REQUEST_ID_HEADER"]
