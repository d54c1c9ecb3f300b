"""Unit tests for member, score and conference entities."""

import pytest
from sqlalchemy.exc import IntegrityError

from mentor_link.core.database.entities import MemberStatus, Mentor, Score

pytestmark = pytest.mark.asyncio


class TestMemberEntities:
    async def test_student_defaults_to_active(self, make_student):
        student = await make_student("alice")
        assert student.status == MemberStatus.active

    async def test_student_login_is_unique(self, make_student, session):
        await make_student("alice")
        with pytest.raises(IntegrityError):
            await make_student("alice")
        await session.rollback()

    def test_mentor_is_active(self):
        assert Mentor(github_login="m", name="M", email="m@example.com").is_active
        assert not Mentor(github_login="m", name="M", email="m@example.com", status=MemberStatus.inactive).is_active


class TestScoreEntity:
    def test_balance(self):
        score = Score(github_login="s", year=2025, month=3, carryover_score=10, new_score=5, consumption_score=3)
        assert score.balance() == 12

    async def test_one_row_per_login_and_month(self, session, score_factory):
        session.add(score_factory("s", 2025, 3))
        await session.commit()

        session.add(score_factory("s", 2025, 3))
        with pytest.raises(IntegrityError):
            await session.commit()
        await session.rollback()

    async def test_same_month_for_different_students(self, session, score_factory):
        session.add_all([score_factory("a", 2025, 3), score_factory("b", 2025, 3)])
        await session.commit()


class TestConferenceEntity:
    async def test_defaults_platform_type(self, session, sample_conference):
        session.add(sample_conference)
        await session.commit()
        await session.refresh(sample_conference)

        assert sample_conference.platform_type == "huaweimeeting"
        assert sample_conference.id is not None
