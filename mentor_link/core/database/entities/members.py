"""
Student and mentor entity models.

Both are identified by their GitHub login. Mentors are CC'd on student
notifications only while their status is ``active``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now
from .enums import MemberStatus


class Student(Base, table=True):
    """Entity for a student working on tasks.

    Table: students
    """

    __tablename__ = "students"

    id: Optional[int] = Field(default=None, primary_key=True)
    github_login: str = Field(max_length=128, unique=True, index=True)
    student_name: str = Field(max_length=128)
    email: str = Field(max_length=256)
    status: MemberStatus = Field(default=MemberStatus.active)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Student(login={self.github_login}, status={self.status})"


class Mentor(Base, table=True):
    """Entity for a maintainer who mentors students on tasks.

    Table: mentors
    """

    __tablename__ = "mentors"

    id: Optional[int] = Field(default=None, primary_key=True)
    github_login: str = Field(max_length=128, unique=True, index=True)
    name: str = Field(max_length=128)
    email: str = Field(max_length=256)
    status: MemberStatus = Field(default=MemberStatus.active)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    @property
    def is_active(self) -> bool:
        return self.status == MemberStatus.active

    def __repr__(self) -> str:
        return f"Mentor(login={self.github_login}, status={self.status})"
