"""
Mentor-Link Server Package.

This package contains the web server of Mentor-Link: the HTTP surface over
the task lifecycle, the score ledger, member records and meeting booking.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration and constants.
    exception_handlers: Mapping of domain errors to HTTP responses.
    middleware: Request logging and tracing.
    services: FastAPI dependencies wiring sessions, repositories and services.
"""
