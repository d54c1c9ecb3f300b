"""
Conference repository.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select

from ..entities.conferences import Conference
from .base import AsyncBaseRepository


class ConferenceRepository(AsyncBaseRepository[Conference]):
    """Repository for meetings mirrored from the meeting platform."""

    def __init__(self, session) -> None:
        super().__init__(session, Conference)

    async def get_by_conference_id(self, conference_id: str) -> Optional[Conference]:
        result = await self.session.execute(select(Conference).where(Conference.conference_id == conference_id))
        return result.scalars().first()

    async def save_conf(self, conference: Conference) -> Conference:
        """Insert a conference, or refresh the stored copy if the platform ID is already known."""
        existing = await self.get_by_conference_id(conference.conference_id)
        if existing is None:
            return await self.create(conference)
        for field, value in conference.model_dump(exclude={"id", "created_at"}).items():
            setattr(existing, field, value)
        return await self.update(existing)
