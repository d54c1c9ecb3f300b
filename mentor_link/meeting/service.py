"""Weekly meeting booking."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from mentor_link.core.database.entities.conferences import Conference
from mentor_link.core.database.repositories.conferences import ConferenceRepository
from mentor_link.core.logging_config import get_logger
from mentor_link.server.core.config import MeetingConfig

from .client import MeetingApiClient
from .errors import MeetingApiError
from .schedule import next_weekday_at

logger = get_logger(__name__)


class ConferenceService:
    """Books the weekly meeting on the platform and mirrors it locally."""

    def __init__(self, client: MeetingApiClient, conferences: ConferenceRepository, config: MeetingConfig) -> None:
        self.client = client
        self.conferences = conferences
        self.config = config

    async def authenticate(self) -> str:
        if self.config.auth_mode == "app":
            auth = await self.client.app_auth()
        else:
            auth = await self.client.account_auth()
        return auth.access_token

    async def schedule_weekly(self, now: Optional[datetime] = None) -> Conference:
        """Book next week's meeting slot and store the returned conference.

        Raises:
            MeetingApiError: If authentication or booking fails, or the platform
                returns no conference.
        """
        token = await self.authenticate()
        start_time = next_weekday_at(now, tz=self.config.timezone)
        logger.debug(f"Next weekly meeting slot is {start_time} UTC")

        booked = await self.client.create_conference(start_time, subject=self.config.subject, access_token=token)
        if not booked:
            raise MeetingApiError("Meeting API returned no conference")

        conference = await self.conferences.save_conf(booked[0].to_entity())
        logger.info(f"Stored conference {conference.conference_id} starting {conference.start_time}")
        return conference

    async def list_conferences(self, limit: Optional[int] = None, offset: Optional[int] = None):
        return await self.conferences.list(limit=limit, offset=offset)
