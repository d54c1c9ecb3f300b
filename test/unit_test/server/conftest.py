"""Fixtures for API tests.

The app runs against the per-test in-memory database of the unit test suite.
SMTP is replaced by a mock mailer and the meeting platform by an
``httpx.MockTransport`` handler.
"""

from typing import AsyncGenerator, Callable, Dict
from unittest.mock import Mock

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from mentor_link.meeting import MeetingApiClient
from mentor_link.notifications import SmtpMailer

MEETING_BASE_URL = "http://mock-meeting"


class MeetingPlatform:
    """Canned meeting platform responses, keyed by path."""

    def __init__(self) -> None:
        self.calls = []
        self.routes: Dict[str, Callable[[httpx.Request], httpx.Response]] = {
            "/v1/usg/acs/auth/account": lambda r: httpx.Response(200, json={"accessToken": "tok"}),
            "/v1/mmc/management/conferences": lambda r: httpx.Response(
                200,
                json=[{"conferenceID": "960000001", "subject": "R2CN Weekly Meeting", "startTime": "2025-03-11 20:00"}],
            ),
        }

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request.url.path)
        return self.routes[request.url.path](request)


@pytest.fixture
def mailer() -> Mock:
    return Mock(spec=SmtpMailer)


@pytest.fixture
def meeting_platform() -> MeetingPlatform:
    return MeetingPlatform()


@pytest.fixture
def meeting_credentials() -> Dict[str, str]:
    return {"account": "r2cn", "password": "secret"}


@pytest_asyncio.fixture(name="client")
async def client_fixture(
    session: AsyncSession, mailer, meeting_platform, meeting_credentials
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with overridden dependencies."""
    from mentor_link.core.database.session import get_session
    from mentor_link.server.main import app
    from mentor_link.server.services.deps import get_mailer, get_meeting_client

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    async def get_meeting_client_override() -> AsyncGenerator[MeetingApiClient, None]:
        meeting_client = MeetingApiClient(
            MEETING_BASE_URL,
            client=httpx.AsyncClient(transport=httpx.MockTransport(meeting_platform)),
            **meeting_credentials,
        )
        try:
            yield meeting_client
        finally:
            await meeting_client.aclose()

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_meeting_client] = get_meeting_client_override

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()
