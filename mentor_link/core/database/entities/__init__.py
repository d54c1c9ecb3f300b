"""
Database entity models.

Modules:
- enums: TaskStatus and MemberStatus
- tasks: Tasks and their transition audit log
- members: Students and mentors
- scores: Monthly score ledger
- conferences: Meetings booked on the meeting platform
"""

from .conferences import Conference
from .enums import MemberStatus, TaskStatus
from .members import Mentor, Student
from .scores import Score
from .tasks import Task, TaskTransition, project_link

__all__ = [
    "Conference",
    "MemberStatus",
    "Mentor",
    "Score",
    "Student",
    "Task",
    "TaskStatus",
    "TaskTransition",
    "project_link",
]
