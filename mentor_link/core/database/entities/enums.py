"""Enumerations persisted by the database entities."""

from __future__ import annotations

from enum import Enum
from typing import List


class TaskStatus(str, Enum):
    """
    Lifecycle status of a task.

    ``completed``, ``failed`` and ``invalid`` are terminal.
    """

    open = "open"
    request_assign = "request_assign"  # A student asked to take the task.
    assigned = "assigned"
    request_finish = "request_finish"  # The student reported the work as done.
    completed = "completed"
    failed = "failed"
    invalid = "invalid"  # Withdrawn before anyone worked on it.

    @classmethod
    def finish_task_status(cls) -> List["TaskStatus"]:
        """Statuses that count as finished work in monthly reports."""
        return [cls.completed]

    @classmethod
    def terminal(cls) -> List["TaskStatus"]:
        return [cls.completed, cls.failed, cls.invalid]


class MemberStatus(str, Enum):
    """Participation status shared by students and mentors."""

    active = "active"
    inactive = "inactive"
