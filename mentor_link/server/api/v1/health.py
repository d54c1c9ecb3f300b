"""
Liveness and version endpoints.

``/health`` answers 200 while the database accepts a trivial query and 503
when it does not, so a load balancer stops routing to an instance that cannot
read the ledger. Both routes are mounted at the root and under ``/api/v1``.
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from mentor_link.core.logging_config import get_logger
from mentor_link.server.core import constant
from mentor_link.server.services.deps import SessionDep

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Report whether the server can reach its database.",
    responses={503: {"description": "Database unreachable"}},
)
async def health_check(session: SessionDep):
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error(f"Health check failed, database unreachable: {exc}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "database": "unreachable"},
        )
    return {"status": "ok", "database": "ok"}


@router.get(
    "/version",
    summary="Get Version",
    description="Service name, release and API schema version.",
)
async def version():
    return {"service": constant.PROJECT_NAME, "version": constant.VERSION, "schema_version": "v1"}
