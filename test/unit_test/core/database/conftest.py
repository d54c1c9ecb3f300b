"""Test configuration for database unit tests.

The engine, session and repository fixtures live in ``test/unit_test/conftest.py``;
this module adds sample rows used across the repository tests.
"""

from __future__ import annotations

import pytest

from mentor_link.core.database.entities import Conference, Score


@pytest.fixture
def sample_conference() -> Conference:
    return Conference(
        conference_id="960123456",
        subject="R2CN Weekly Meeting",
        start_time="2025-03-04 20:00",
        end_time="2025-03-04 21:00",
        conference_state="Schedule",
        language="zh-CN",
        scheduler_name="r2cn",
        record_type=2,
        is_auto_record=1,
        conf_type="COMMON",
        chair_join_uri="https://meeting.example/chair",
        guest_join_uri="https://meeting.example/guest",
    )


@pytest.fixture
def score_factory():
    def _make(github_login: str, year: int, month: int, *, carryover: int = 0, new: int = 0, consumed: int = 0) -> Score:
        return Score(
            github_login=github_login,
            year=year,
            month=month,
            carryover_score=carryover,
            new_score=new,
            consumption_score=consumed,
        )

    return _make
