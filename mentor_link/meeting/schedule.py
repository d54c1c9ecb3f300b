"""Weekly meeting slot calculation."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

START_TIME_FORMAT = "%Y-%m-%d %H:%M"


def next_weekday_at(
    now: datetime | None = None,
    weekday: int = 1,
    hour: int = 20,
    tz: str = "UTC",
) -> str:
    """Next ``weekday`` at ``hour``:00 in ``tz``, as a UTC ``%Y-%m-%d %H:%M`` string.

    On the target weekday itself the same day is used while it is still before
    ``hour``; from ``hour`` on, the slot moves a week later.

    Args:
        now: Reference instant; naive values are taken as UTC. Defaults to now.
        weekday: Target weekday, Monday is 0 (default Tuesday).
        hour: Local start hour.
        tz: IANA timezone the slot is defined in.
    """
    zone = ZoneInfo(tz)
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    local_now = now.astimezone(zone)

    days_ahead = (weekday - local_now.weekday()) % 7
    if days_ahead == 0 and local_now.hour >= hour:
        days_ahead = 7

    target_date = (local_now + timedelta(days=days_ahead)).date()
    slot = datetime(target_date.year, target_date.month, target_date.day, hour, tzinfo=zone)
    return slot.astimezone(timezone.utc).strftime(START_TIME_FORMAT)
