"""Error types specific to the meeting platform client.

Catch ``MeetingApiError`` for any failed exchange with the platform and inspect
``status_code`` or ``details`` (the raw response body) for diagnosis.
"""

from __future__ import annotations

from typing import Any, Optional


class MeetingApiError(Exception):
    """Base error for meeting platform API failures.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code associated with the failure.
        details: Optional payload returned by the platform.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class MeetingConfigError(MeetingApiError):
    """Raised when credentials needed for the configured auth mode are missing."""
