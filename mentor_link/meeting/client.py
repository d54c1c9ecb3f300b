"""Huawei Meeting API client

Overview
--------
Thin async HTTP client for the parts of the Huawei Meeting REST API used to
book the weekly mentoring meeting: the two token exchanges and conference
creation.

Authentication
--------------
- ``account_auth``: Basic auth with the platform account and password.
- ``app_auth``: HMAC-SHA256 app authentication. The signature covers
  ``"appId:userId:expireTime:nonce"`` keyed with the app key; the token is
  requested for ten minutes.

Both return an ``AppAuth`` whose ``access_token`` is sent as ``X-Access-Token``
on management calls.

Errors
------
Non-2xx responses and bodies that do not match the expected DTO raise
``MeetingApiError`` carrying the status code and the raw body. The raw body is
logged as well.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
import string
import time
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from mentor_link.core.logging_config import get_logger
from mentor_link.server.core.config import MeetingConfig

from .errors import MeetingApiError, MeetingConfigError
from .models import AppAuth, ConferenceInfo, CreateConferenceRequest

logger = get_logger(__name__)

CLIENT_TYPE = 72
APP_AUTH_TTL_SECONDS = 600
NONCE_ALPHABET = string.ascii_letters + string.digits
JSON_CONTENT_TYPE = "application/json;charset=UTF-8"

T = TypeVar("T")


def calculate_hmac_sha256(key: bytes, data: bytes) -> str:
    """Hex-encoded HMAC-SHA256 of ``data`` keyed with ``key``."""
    return hmac.new(key, data, hashlib.sha256).hexdigest()


def generate_nonce(length: int = 32) -> str:
    return "".join(secrets.choice(NONCE_ALPHABET) for _ in range(length))


class MeetingApiClient:
    """Async client for the Huawei Meeting REST API.

    Args:
        base_url: API endpoint, e.g. ``https://api.meeting.huaweicloud.com``.
        account: Account name for ``account_auth``.
        password: Account password for ``account_auth``.
        app_id: App ID for ``app_auth``.
        app_key: App key signing ``app_auth`` requests.
        user_id: User the app token is issued for.
        timeout: Default HTTP timeout for the internal client.
        client: Optional preconfigured ``httpx.AsyncClient`` to use.
    """

    def __init__(
        self,
        base_url: str,
        *,
        account: Optional[str] = None,
        password: Optional[str] = None,
        app_id: Optional[str] = None,
        app_key: Optional[str] = None,
        user_id: Optional[str] = None,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.account = account
        self.password = password
        self.app_id = app_id
        self.app_key = app_key
        self.user_id = user_id
        self.access_token: Optional[str] = None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_config(cls, config: MeetingConfig, *, client: Optional[httpx.AsyncClient] = None) -> "MeetingApiClient":
        return cls(
            config.api_endpoint,
            account=config.account,
            password=config.password,
            app_id=config.app_id,
            app_key=config.app_key,
            user_id=config.user_id,
            timeout=config.timeout,
            client=client,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def account_auth(self) -> AppAuth:
        """Exchange the platform account credentials for an access token.

        API
        ---
        - Method/Path: ``POST /v1/usg/acs/auth/account``
        - Auth: ``Basic base64(account:password)``

        Raises:
            MeetingConfigError: If the account or password is not configured.
            MeetingApiError: On a non-2xx response or an unexpected body.
        """
        if not self.account or not self.password:
            raise MeetingConfigError("Account authentication needs HUAWEI_MEETING_ACCOUNT and HUAWEI_MEETING_PASSWORD")
        credentials = base64.b64encode(f"{self.account}:{self.password}".encode()).decode()
        headers = {"Authorization": f"Basic {credentials}", "Content-Type": JSON_CONTENT_TYPE}
        body = {"clientType": CLIENT_TYPE, "account": self.account}
        auth = await self._post("/v1/usg/acs/auth/account", AppAuth, headers=headers, json=body)
        self.access_token = auth.access_token
        return auth

    async def app_auth(self, *, expire_time: Optional[int] = None, nonce: Optional[str] = None) -> AppAuth:
        """Exchange a signed app credential for an access token.

        API
        ---
        - Method/Path: ``POST /v2/usg/acs/auth/appauth``
        - Auth: ``HMAC-SHA256 signature=<hex>,access=<base64(appId)>``

        Args:
            expire_time: Epoch seconds the token should expire at. Defaults to ten minutes from now.
            nonce: 32 alphanumeric characters. Generated when omitted.

        Raises:
            MeetingConfigError: If the app ID, app key or user ID is not configured.
            MeetingApiError: On a non-2xx response or an unexpected body.
        """
        if not self.app_id or not self.app_key or not self.user_id:
            raise MeetingConfigError(
                "App authentication needs HUAWEI_MEETING_APP_ID, HUAWEI_MEETING_APP_KEY and HUAWEI_MEETING_USER_ID"
            )
        if expire_time is None:
            expire_time = int(time.time()) + APP_AUTH_TTL_SECONDS
        if nonce is None:
            nonce = generate_nonce()

        data = f"{self.app_id}:{self.user_id}:{expire_time}:{nonce}"
        signature = calculate_hmac_sha256(self.app_key.encode(), data.encode())
        access = base64.b64encode(self.app_id.encode()).decode()
        headers = {
            "Authorization": f"HMAC-SHA256 signature={signature},access={access}",
            "Content-Type": JSON_CONTENT_TYPE,
        }
        body = {
            "appId": self.app_id,
            "clientType": CLIENT_TYPE,
            "expireTime": expire_time,
            "nonce": nonce,
            "userId": self.user_id,
        }
        logger.debug(f"Requesting app token for user {self.user_id}, expiring at {expire_time}")
        auth = await self._post("/v2/usg/acs/auth/appauth", AppAuth, headers=headers, json=body)
        self.access_token = auth.access_token
        return auth

    async def create_conference(
        self,
        start_time: str,
        *,
        subject: str,
        access_token: Optional[str] = None,
        length: int = 60,
        media_types: str = "HDVideo",
        is_auto_record: int = 1,
        record_type: int = 2,
    ) -> List[ConferenceInfo]:
        """Book a conference.

        API
        ---
        - Method/Path: ``POST /v1/mmc/management/conferences``
        - Auth: ``X-Access-Token``

        Args:
            start_time: UTC start, formatted ``%Y-%m-%d %H:%M``.
            subject: Meeting subject.
            access_token: Token to use. Defaults to the one obtained by the last
                successful ``account_auth`` or ``app_auth``.

        Returns:
            The conference records created by the platform.

        Raises:
            MeetingApiError: If no token is available, or on a failed request.
        """
        token = access_token or self.access_token
        if not token:
            raise MeetingApiError("No access token; authenticate before creating a conference")
        request = CreateConferenceRequest(
            start_time=start_time,
            media_types=media_types,
            length=length,
            subject=subject,
            is_auto_record=is_auto_record,
            record_type=record_type,
        )
        headers = {"X-Access-Token": token, "Content-Type": JSON_CONTENT_TYPE}
        conferences = await self._post(
            "/v1/mmc/management/conferences",
            List[ConferenceInfo],
            headers=headers,
            json=request.model_dump(by_alias=True),
        )
        logger.info(f"Booked {len(conferences)} conference(s) starting {start_time}")
        return conferences

    async def _post(self, path: str, model: Type[T] | Any, *, headers: Dict[str, str], json: Dict[str, Any]) -> T:
        url = f"{self.base_url}{path}"
        try:
            r = await self._client.post(url, headers=headers, json=json)
        except httpx.HTTPError as e:
            raise MeetingApiError(f"Meeting API request to {path} failed: {e}") from e

        if r.is_error:
            logger.error(f"Meeting API {path} returned {r.status_code}: {r.text}")
            raise MeetingApiError(
                f"Meeting API {path} failed: {r.status_code}",
                status_code=r.status_code,
                details=r.text,
            )

        try:
            if isinstance(model, type) and issubclass(model, BaseModel):
                return model.model_validate_json(r.content)
            return TypeAdapter(model).validate_json(r.content)
        except ValidationError as e:
            logger.error(f"Meeting API {path} returned an unexpected body: {r.text}")
            raise MeetingApiError(
                f"Unexpected response from meeting API {path}",
                status_code=r.status_code,
                details=r.text,
            ) from e
