"""
Monitoring and Tracing Configuration Module.

This module provides integration with Pydantic Logfire for tracing the
Mentor-Link server, including:
- API endpoint tracing
- Database operation monitoring
- Outbound HTTP calls to the meeting platform
- Task transition and notification events

Logfire is only configured when ``LOGFIRE_ENABLED`` is true and a token is
available. Every ``log_*`` helper is safe to call when it is not configured.
"""

import logging
import os
from typing import Optional

import logfire
from fastapi import FastAPI

logger = logging.getLogger(__name__)

# Logfire configuration from environment
LOGFIRE_ENABLED = os.getenv("LOGFIRE_ENABLED", "false").lower() in ("true", "1", "yes")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "mentor-link-api")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "0.1.0")

# Feature flags
LOGFIRE_TRACE_SQLALCHEMY = os.getenv("LOGFIRE_TRACE_SQLALCHEMY", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_HTTPX = os.getenv("LOGFIRE_TRACE_HTTPX", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_FASTAPI = os.getenv("LOGFIRE_TRACE_FASTAPI", "true").lower() in ("true", "1", "yes")


def initialize_logfire(app: FastAPI | None = None) -> bool:
    """
    Initialize Logfire for monitoring and tracing.

    Sets up automatic instrumentation for SQLAlchemy, HTTPX and, when ``app``
    is given, the FastAPI endpoints.

    Args:
        app: FastAPI application instance for endpoint instrumentation (optional).

    Returns:
        True when Logfire was configured, False otherwise.
    """
    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return False

    if not LOGFIRE_TOKEN:
        logger.warning(
            "Logfire is enabled but LOGFIRE_TOKEN is not set. "
            "Monitoring will not work. Set LOGFIRE_TOKEN to enable Logfire."
        )
        return False

    try:
        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)
        return False

    if LOGFIRE_TRACE_SQLALCHEMY:
        try:
            logfire.instrument_sqlalchemy()
            logger.info("Logfire: SQLAlchemy instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument SQLAlchemy: {e}")

    if LOGFIRE_TRACE_HTTPX:
        try:
            logfire.instrument_httpx()
            logger.info("Logfire: HTTPX instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument HTTPX: {e}")

    if LOGFIRE_TRACE_FASTAPI and app is not None:
        try:
            logfire.instrument_fastapi(app=app)
            logger.info("Logfire: FastAPI instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument FastAPI: {e}")

    logger.info(
        f"Logfire monitoring initialized: environment={LOGFIRE_ENVIRONMENT}, service={LOGFIRE_SERVICE_NAME}"
    )
    return True


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
    """
    try:
        logfire.info(
            "API request completed",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=duration_ms,
        )
    except Exception:
        logger.debug(f"Could not log API request to Logfire: {method} {path}")


def log_task_transition(task_id: int, from_status: str, to_status: str, actor: Optional[str] = None) -> None:
    """
    Log a committed task transition.

    Args:
        task_id: The task primary key
        from_status: Status observed before the transition
        to_status: Status written by the transition
        actor: Who requested the transition, when known
    """
    try:
        logfire.info(
            "Task transition committed",
            task_id=task_id,
            from_status=from_status,
            to_status=to_status,
            actor=actor,
        )
    except Exception:
        logger.debug(f"Could not log task transition to Logfire: task_id={task_id}")


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """
    Log an error with context for debugging.

    Args:
        error_type: Type of error
        error_message: Error message
        context: Additional context dictionary
    """
    try:
        logfire.error(
            f"{error_type}: {error_message}",
            **(context or {}),
        )
    except Exception:
        logger.debug(f"Could not log error to Logfire: {error_type}")
