"""Meeting platform DTO models

Pydantic DTOs for the payloads exchanged with the Huawei Meeting REST API.
Field aliases follow the wire schema (camelCase, with the platform's own
spellings such as ``conferenceID`` and ``scheduserName``). Unknown fields are
ignored so that additions on the platform side never break parsing.

Endpoint mapping
----------------
- ``POST /v1/usg/acs/auth/account`` → ``AppAuth``
- ``POST /v2/usg/acs/auth/appauth`` → ``AppAuth``
- ``POST /v1/mmc/management/conferences`` → ``List[ConferenceInfo]``
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from mentor_link.core.database.entities.conferences import Conference


class MeetingDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class AppAuth(MeetingDTO):
    """Access token issued by either authentication endpoint."""

    access_token: str = Field(alias="accessToken")
    valid_period: Optional[int] = Field(default=None, alias="validPeriod", description="Token lifetime in seconds")
    expire_time: Optional[int] = Field(default=None, alias="expireTime")
    token_ip: Optional[str] = Field(default=None, alias="tokenIp")


class CreateConferenceRequest(MeetingDTO):
    """Body of a conference booking."""

    start_time: str = Field(alias="startTime", description="UTC start, formatted ``%Y-%m-%d %H:%M``")
    media_types: str = Field(default="HDVideo", alias="mediaTypes")
    length: int = Field(default=60, description="Duration in minutes")
    subject: str
    is_auto_record: int = Field(default=1, alias="isAutoRecord")
    record_type: int = Field(default=2, alias="recordType")


class ConferenceInfo(MeetingDTO):
    """One conference record as returned by the booking endpoint."""

    conference_id: str = Field(alias="conferenceID")
    subject: str = ""
    start_time: str = Field(default="", alias="startTime")
    end_time: str = Field(default="", alias="endTime")
    conference_state: str = Field(default="", alias="conferenceState")
    language: str = ""
    record_type: int = Field(default=0, alias="recordType")
    is_auto_record: int = Field(default=0, alias="isAutoRecord")
    conf_type: str = Field(default="", alias="confType")
    chair_join_uri: str = Field(default="", alias="chairJoinUri")
    guest_join_uri: str = Field(default="", alias="guestJoinUri")
    scheduser_name: str = Field(default="", alias="scheduserName")

    def to_entity(self) -> Conference:
        return Conference(
            platform_type="huaweimeeting",
            conference_id=self.conference_id,
            subject=self.subject,
            start_time=self.start_time,
            end_time=self.end_time,
            conference_state=self.conference_state,
            language=self.language,
            record_type=self.record_type,
            is_auto_record=self.is_auto_record,
            conf_type=self.conf_type,
            chair_join_uri=self.chair_join_uri,
            guest_join_uri=self.guest_join_uri,
            scheduler_name=self.scheduser_name,
        )
