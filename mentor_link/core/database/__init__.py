"""
Database layer for Mentor-Link.

Structure:
- entities/: SQLModel table models (tasks, students, mentors, scores, conferences)
- repositories/: Async data access layer, one repository per table
- session.py: Global engine and session factory management
- utils.py: Engine, session factory and table creation helpers
"""

from .base import Base, utc_now
from .utils import create_all, create_engine, create_sessionmaker

__all__ = [
    "Base",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "utc_now",
]
