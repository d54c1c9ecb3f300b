"""
Student and mentor repositories.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import select

from ..entities.members import Mentor, Student
from .base import AsyncBaseRepository


class StudentRepository(AsyncBaseRepository[Student]):
    """Repository for student data access operations."""

    def __init__(self, session) -> None:
        super().__init__(session, Student)

    async def get_student_by_login(self, github_login: str) -> Optional[Student]:
        result = await self.session.execute(select(Student).where(Student.github_login == github_login))
        return result.scalars().first()

    async def get_students_by_logins(self, github_logins: Iterable[str]) -> List[Student]:
        logins = list(github_logins)
        if not logins:
            return []
        result = await self.session.execute(select(Student).where(Student.github_login.in_(logins)))  # type: ignore[attr-defined]
        return list(result.scalars().all())


class MentorRepository(AsyncBaseRepository[Mentor]):
    """Repository for mentor data access operations."""

    def __init__(self, session) -> None:
        super().__init__(session, Mentor)

    async def get_mentor_by_login(self, github_login: str) -> Optional[Mentor]:
        result = await self.session.execute(select(Mentor).where(Mentor.github_login == github_login))
        return result.scalars().first()

    async def get_mentors_by_logins(self, github_logins: Iterable[str]) -> List[Mentor]:
        """Get the mentors matching any of the given logins, ordered by login."""
        logins = list(github_logins)
        if not logins:
            return []
        stmt = select(Mentor).where(Mentor.github_login.in_(logins)).order_by(Mentor.github_login)  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
