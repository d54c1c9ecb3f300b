"""Shared fixtures for unit tests.

Provides a fresh in-memory SQLite database per test, a session bound to it
and the repository bundle, plus small factories for members and tasks.
"""

from __future__ import annotations

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlmodel.pool import StaticPool

from mentor_link.core.database import create_all, create_sessionmaker
from mentor_link.core.database.entities import MemberStatus, Mentor, Student, Task, TaskStatus
from mentor_link.core.database.repositories import SqlRepoBundle, build_sql_repos_from_session

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Create an isolated in-memory database for one test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    async with create_sessionmaker(test_engine)() as session:
        yield session


@pytest.fixture
def repos(session: AsyncSession) -> SqlRepoBundle:
    return build_sql_repos_from_session(session=session)


@pytest.fixture
def make_student(repos: SqlRepoBundle):
    async def _make(
        github_login: str = "student-1",
        *,
        student_name: str = "Li Lei",
        email: str | None = None,
        status: MemberStatus = MemberStatus.active,
    ) -> Student:
        student = Student(
            github_login=github_login,
            student_name=student_name,
            email=email or f"{github_login}@example.com",
            status=status,
        )
        return await repos.students.create(student)

    return _make


@pytest.fixture
def make_mentor(repos: SqlRepoBundle):
    async def _make(
        github_login: str = "mentor-1",
        *,
        name: str = "Mona",
        email: str | None = None,
        status: MemberStatus = MemberStatus.active,
    ) -> Mentor:
        mentor = Mentor(github_login=github_login, name=name, email=email or f"{github_login}@example.com", status=status)
        return await repos.mentors.create(mentor)

    return _make


@pytest.fixture
def make_task(repos: SqlRepoBundle):
    issue_ids = iter(range(1000, 100000))

    async def _make(
        *,
        score: int = 10,
        status: TaskStatus = TaskStatus.open,
        student_github_login: str | None = None,
        mentor_github_login: str = "mentor-1",
        github_issue_id: int | None = None,
    ) -> Task:
        task = Task(
            github_repo_id=42,
            github_issue_id=github_issue_id or next(issue_ids),
            owner="r2cn-dev",
            repo="mentor-link",
            github_issue_title="Write the monthly report",
            github_issue_link="https://github.com/r2cn-dev/mentor-link/issues/1",
            score=score,
            task_status=status,
            student_github_login=student_github_login,
            mentor_github_login=mentor_github_login,
        )
        return await repos.tasks.create(task)

    return _make
