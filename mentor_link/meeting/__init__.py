"""
Meeting platform integration.

- ``client``: Huawei Meeting API client (token exchange, conference booking)
- ``schedule``: weekly slot calculation
- ``service``: books the weekly meeting and stores it as a ``Conference``
"""

from .client import MeetingApiClient, calculate_hmac_sha256, generate_nonce
from .errors import MeetingApiError, MeetingConfigError
from .models import AppAuth, ConferenceInfo, CreateConferenceRequest
from .schedule import next_weekday_at
from .service import ConferenceService

__all__ = [
    "AppAuth",
    "ConferenceInfo",
    "ConferenceService",
    "CreateConferenceRequest",
    "MeetingApiClient",
    "MeetingApiError",
    "MeetingConfigError",
    "calculate_hmac_sha256",
    "generate_nonce",
    "next_weekday_at",
]
