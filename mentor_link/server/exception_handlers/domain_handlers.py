"""
Exception handlers for domain errors.

Lifecycle errors carry their own HTTP status. Meeting platform failures are
reported as a bad gateway, except missing credentials which mean the service
is not configured for booking.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from mentor_link.core.logging_config import get_logger
from mentor_link.lifecycle.errors import LifecycleError
from mentor_link.meeting.errors import MeetingApiError, MeetingConfigError

logger = get_logger(__name__)


async def lifecycle_exception_handler(request: Request, exc: LifecycleError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error_type": type(exc).__name__},
    )


async def meeting_exception_handler(request: Request, exc: MeetingApiError) -> JSONResponse:
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE if isinstance(exc, MeetingConfigError) else status.HTTP_502_BAD_GATEWAY
    logger.error(
        f"Meeting platform error in {request.method} {request.url.path}: {exc.message}",
        extra={"upstream_status": exc.status_code, "error_type": type(exc).__name__},
    )
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": exc.message,
            "error_type": type(exc).__name__,
            "upstream_status": exc.status_code,
        },
    )
