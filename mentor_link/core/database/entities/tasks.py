"""
Task entity models.

A task is a GitHub issue tracked for assignment and scoring. The lifecycle
engine is the only writer of ``task_status`` and ``student_github_login``;
every successful write is mirrored into ``task_transitions``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, Column
from sqlmodel import Field

from ..base import Base, utc_now
from .enums import TaskStatus


class Task(Base, table=True):
    """Entity for a GitHub issue tracked as a task.

    Table: tasks
    """

    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)

    # GitHub identity
    github_repo_id: int = Field(sa_column=Column(BigInteger, nullable=False, index=True))
    github_issue_id: int = Field(sa_column=Column(BigInteger, nullable=False, unique=True))
    owner: str = Field(max_length=128)
    repo: str = Field(max_length=128)
    github_issue_title: str = Field(default="", max_length=512)
    github_issue_link: str = Field(default="", max_length=512)

    # Scoring and assignment
    score: int = Field(default=0)
    task_status: TaskStatus = Field(default=TaskStatus.open, index=True)
    student_github_login: Optional[str] = Field(default=None, max_length=128, index=True)
    mentor_github_login: str = Field(max_length=128, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Task(id={self.id}, issue={self.github_issue_id}, status={self.task_status})"


class TaskTransition(Base, table=True):
    """Append-only audit record of a committed task transition.

    Table: task_transitions
    """

    __tablename__ = "task_transitions"

    id: Optional[int] = Field(default=None, primary_key=True)
    task_id: int = Field(index=True)
    from_status: TaskStatus
    to_status: TaskStatus
    student_github_login: Optional[str] = Field(default=None, max_length=128)
    actor: Optional[str] = Field(default=None, max_length=128)
    created_at: datetime = Field(default_factory=utc_now, index=True)


def project_link(task: Task) -> str:
    """Link to the GitHub repository the task belongs to."""
    return f"https://github.com/{task.owner}/{task.repo}"
