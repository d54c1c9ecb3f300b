"""Fixtures for meeting platform tests.

Requests are served by ``httpx.MockTransport`` handlers; each fixture records
the requests it received so tests can assert on headers and bodies.
"""

import json
from typing import Callable, List

import httpx
import pytest


CONFERENCE_PAYLOAD = [
    {
        "conferenceID": "960123456",
        "subject": "R2CN Weekly Meeting",
        "startTime": "2025-03-11 20:00",
        "endTime": "2025-03-11 21:00",
        "conferenceState": "Schedule",
        "language": "zh-CN",
        "recordType": 2,
        "isAutoRecord": 1,
        "confType": "COMMON",
        "chairJoinUri": "https://meeting.example.com/chair",
        "guestJoinUri": "https://meeting.example.com/guest",
        "scheduserName": "r2cn",
        "someNewField": "ignored",
    }
]


class RecordingHandler:
    """MockTransport handler routing on path and keeping every request."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.routes = {
            "/v1/usg/acs/auth/account": lambda r: httpx.Response(200, json={"accessToken": "account-token", "validPeriod": 3600}),
            "/v2/usg/acs/auth/appauth": lambda r: httpx.Response(200, json={"accessToken": "app-token", "expireTime": 1}),
            "/v1/mmc/management/conferences": lambda r: httpx.Response(200, json=CONFERENCE_PAYLOAD),
        }

    def route(self, path: str, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[path] = respond

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        respond = self.routes.get(request.url.path)
        if respond is None:
            return httpx.Response(404, json={"error_code": "NOT_FOUND"})
        return respond(request)

    def body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def http_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))
