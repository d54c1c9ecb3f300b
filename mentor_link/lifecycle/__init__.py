"""
Task lifecycle and scoring reconciliation engine.

- ``transitions``: the state machine (allowed edges and their student effect)
- ``service``: exactly-once transitions with score credit and notifications
- ``scoring``: the monthly score ledger
- ``reports``: monthly score report emails
"""

from .errors import (
    DuplicateTaskError,
    InactiveStudentError,
    InsufficientPointsError,
    InvalidScoreError,
    InvalidTransitionError,
    LifecycleError,
    OpenPeriodError,
    StudentNotFoundError,
    TaskNotFoundError,
    TransitionConflictError,
)
from .reports import MonthlyReportService
from .scoring import ScoreLedger, ScoreSummary
from .service import TaskLifecycleService, TransitionResult
from .transitions import (
    TRANSITIONS,
    StudentEffect,
    can_transition,
    ensure_transition,
    requires_student,
    student_effect,
)

__all__ = [
    "DuplicateTaskError",
    "InactiveStudentError",
    "InsufficientPointsError",
    "InvalidScoreError",
    "InvalidTransitionError",
    "LifecycleError",
    "MonthlyReportService",
    "OpenPeriodError",
    "ScoreLedger",
    "ScoreSummary",
    "StudentEffect",
    "StudentNotFoundError",
    "TRANSITIONS",
    "TaskLifecycleService",
    "TaskNotFoundError",
    "TransitionConflictError",
    "TransitionResult",
    "can_transition",
    "ensure_transition",
    "requires_student",
    "student_effect",
]
