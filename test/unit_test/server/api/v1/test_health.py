from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from mentor_link.core.database.session import get_session
from mentor_link.server.core import constant
from mentor_link.server.main import app

pytestmark = pytest.mark.asyncio


async def test_health_check(client: AsyncClient):
    response = await client.get("http://localhost/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "ok"}


async def test_health_check_under_api_prefix(client: AsyncClient):
    response = await client.get("/api/v1/health")
    assert response.status_code == 200


async def test_health_check_reports_unreachable_database(client: AsyncClient):
    broken = AsyncMock()
    broken.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))

    async def broken_session():
        yield broken

    app.dependency_overrides[get_session] = broken_session
    response = await client.get("/health")

    assert response.status_code == 503
    assert response.json() == {"status": "unavailable", "database": "unreachable"}


async def test_version(client: AsyncClient):
    response = await client.get("/api/v1/version")
    assert response.status_code == 200
    assert response.json() == {
        "service": constant.PROJECT_NAME,
        "version": constant.VERSION,
        "schema_version": "v1",
    }


async def test_response_carries_request_id(client: AsyncClient):
    response = await client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
    assert "X-Process-Time" in response.headers
