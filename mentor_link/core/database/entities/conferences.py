"""
Conference entity models.

A conference mirrors a meeting booked on the third-party meeting platform.
Only the fields the platform returns on creation are kept.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class Conference(Base, table=True):
    """Entity for a booked meeting.

    Table: conferences
    """

    __tablename__ = "conferences"

    id: Optional[int] = Field(default=None, primary_key=True)
    platform_type: str = Field(default="huaweimeeting", max_length=32)
    conference_id: str = Field(max_length=64, unique=True, index=True)

    subject: str = Field(default="", max_length=256)
    start_time: str = Field(default="", max_length=32)
    end_time: str = Field(default="", max_length=32)
    conference_state: str = Field(default="", max_length=32)
    language: str = Field(default="", max_length=16)
    scheduler_name: str = Field(default="", max_length=128)
    record_type: int = Field(default=0)
    is_auto_record: int = Field(default=0)
    conf_type: str = Field(default="", max_length=32)
    chair_join_uri: str = Field(default="", max_length=512)
    guest_join_uri: str = Field(default="", max_length=512)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Conference(id={self.conference_id}, start={self.start_time}, state={self.conference_state})"
