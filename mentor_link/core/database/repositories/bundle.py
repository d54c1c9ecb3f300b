"""
Repository bundle for dependency injection.

This module provides a convenience bundle of all repository instances
bound to one session, so services share a single unit of work.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .conferences import ConferenceRepository
from .members import MentorRepository, StudentRepository
from .scores import ScoreRepository
from .tasks import TaskRepository


@dataclass(frozen=True)
class SqlRepoBundle:
    """Convenience bundle of all SQL repositories sharing one session."""

    session: AsyncSession
    tasks: TaskRepository
    students: StudentRepository
    mentors: MentorRepository
    scores: ScoreRepository
    conferences: ConferenceRepository


def build_sql_repos_from_session(*, session: AsyncSession) -> SqlRepoBundle:
    """Build a SqlRepoBundle from an existing session.

    Args:
        session: Existing async session

    Returns:
        Bundle containing all repository instances
    """
    return SqlRepoBundle(
        session=session,
        tasks=TaskRepository(session),
        students=StudentRepository(session),
        mentors=MentorRepository(session),
        scores=ScoreRepository(session),
        conferences=ConferenceRepository(session),
    )
