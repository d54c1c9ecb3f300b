"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request logging), registers exception handlers and includes all API routers.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mentor_link.core.database.session import init_db
from mentor_link.core.logging_config import get_logger, setup_logging
from mentor_link.core.monitoring import initialize_logfire

from .api.v1 import conferences, health, members, scores, tasks
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates missing tables on startup. A database failure is logged and the
    server keeps starting, so that health checks still answer.
    """
    try:
        logger.info("Starting up Mentor-Link Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    logger.info("Shutting down Mentor-Link Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Mentor-Link Server API

    Tracks GitHub issues as mentored tasks, moves them through their lifecycle,
    keeps the monthly score ledger of students, books the weekly mentoring
    meeting and sends the related notification emails.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)

app.include_router(health.router, tags=["health"], include_in_schema=False)
app.include_router(health.router, prefix=constant.API_V1_STR, tags=["health"])
app.include_router(conferences.router, prefix=f"{constant.API_V1_STR}/conference", tags=["conference"])
app.include_router(tasks.router, prefix=f"{constant.API_V1_STR}/tasks", tags=["tasks"])
app.include_router(members.students_router, prefix=f"{constant.API_V1_STR}/students", tags=["students"])
app.include_router(members.mentors_router, prefix=f"{constant.API_V1_STR}/mentors", tags=["mentors"])
app.include_router(scores.router, prefix=f"{constant.API_V1_STR}/scores", tags=["scores"])
