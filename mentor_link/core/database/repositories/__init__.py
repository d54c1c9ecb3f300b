"""
Database repository layer using SQLModel.

Modules:
- base: AsyncBaseRepository and QueryBuilder utilities
- tasks: Task repository with compare-and-set status updates
- members: Student and mentor repositories
- scores: Monthly score ledger repository
- conferences: Conference repository
- bundle: SqlRepoBundle for dependency injection
"""

from .bundle import SqlRepoBundle, build_sql_repos_from_session
from .conferences import ConferenceRepository
from .members import MentorRepository, StudentRepository
from .scores import ScoreRepository
from .tasks import TaskRepository

__all__ = [
    "ConferenceRepository",
    "MentorRepository",
    "ScoreRepository",
    "SqlRepoBundle",
    "StudentRepository",
    "TaskRepository",
    "build_sql_repos_from_session",
]
