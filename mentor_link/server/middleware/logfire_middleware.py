"""
Request Logging Middleware for FastAPI.

Times every request, reports it through ``log_api_request`` and tags the
response with a request ID and the processing time. Requests slower than
``slow_request_ms`` are logged as warnings.
"""

import time
import uuid
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from mentor_link.core.logging_config import get_logger
from mentor_link.core.monitoring import log_api_request

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class LogfireMiddleware(BaseHTTPMiddleware):
    """Middleware for tracing API requests with Logfire."""

    def __init__(self, app: ASGIApp, slow_request_ms: float = 1000.0) -> None:
        super().__init__(app)
        self.slow_request_ms = slow_request_ms

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"API request failed: {method} {path} [{request_id}]",
                exc_info=True,
                extra={"method": method, "path": path, "duration_ms": duration_ms, "error": str(e)},
            )
            log_api_request(method=method, path=path, status_code=500, duration_ms=duration_ms)
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        log_api_request(method=method, path=path, status_code=response.status_code, duration_ms=duration_ms)
        response.headers["X-Process-Time"] = f"{duration_ms:.2f}"
        response.headers[REQUEST_ID_HEADER] = request_id

        if duration_ms > self.slow_request_ms:
            logger.warning(
                f"Slow API request: {method} {path} took {duration_ms:.2f}ms",
                extra={"method": method, "path": path, "duration_ms": duration_ms, "status_code": response.status_code},
            )
        else:
            logger.debug(f"{method} {path} -> {response.status_code} in {duration_ms:.2f}ms")
        return response
