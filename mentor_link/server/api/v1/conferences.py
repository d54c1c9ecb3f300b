"""
Conference Endpoints.

Books the weekly mentoring meeting on the meeting platform and lists the
meetings booked so far.
"""

from typing import List

from fastapi import APIRouter, Query, status

from mentor_link.server.schemas import ConferenceRead
from mentor_link.server.services.deps import ConferenceDep

router = APIRouter()


@router.post(
    "/new",
    response_model=ConferenceRead,
    status_code=status.HTTP_201_CREATED,
    summary="Book Weekly Meeting",
    description="Book the next weekly meeting slot on the meeting platform and store the returned conference.",
    response_description="The stored conference.",
    responses={
        502: {"description": "The meeting platform rejected the request or returned an unexpected body"},
        503: {"description": "Meeting platform credentials are not configured"},
    },
)
async def create_conference(service: ConferenceDep) -> ConferenceRead:
    """
    Book the weekly meeting.

    Authenticates against the platform, books the next Tuesday 20:00 slot and
    stores the first conference the platform returns.
    """
    conference = await service.schedule_weekly()
    return ConferenceRead.model_validate(conference)


@router.get(
    "",
    response_model=List[ConferenceRead],
    summary="List Conferences",
    description="List stored conferences ordered by creation.",
)
async def list_conferences(
    service: ConferenceDep,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> List[ConferenceRead]:
    conferences = await service.list_conferences(limit=limit, offset=offset)
    return [ConferenceRead.model_validate(c) for c in conferences]
