"""Error types raised by the task lifecycle and score ledger.

The HTTP layer maps them to status codes through ``status_code``; every other
caller can catch ``LifecycleError`` for all of them.
"""

from __future__ import annotations

from typing import Optional


class LifecycleError(Exception):
    """Base error for lifecycle and scoring failures.

    Args:
        message: Human-readable error description.
    """

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TaskNotFoundError(LifecycleError):
    status_code = 404

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class StudentNotFoundError(LifecycleError):
    status_code = 404

    def __init__(self, github_login: str) -> None:
        super().__init__(f"Student {github_login} not found")
        self.github_login = github_login


class InactiveStudentError(LifecycleError):
    status_code = 409

    def __init__(self, github_login: str) -> None:
        super().__init__(f"Student {github_login} is not active")
        self.github_login = github_login


class DuplicateTaskError(LifecycleError):
    status_code = 409

    def __init__(self, github_issue_id: int) -> None:
        super().__init__(f"Issue {github_issue_id} is already tracked as a task")
        self.github_issue_id = github_issue_id


class InvalidTransitionError(LifecycleError):
    """Raised when the state machine has no edge between two statuses."""

    status_code = 409

    def __init__(self, from_status: str, to_status: str, reason: Optional[str] = None) -> None:
        message = f"Cannot move task from {from_status} to {to_status}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.from_status = from_status
        self.to_status = to_status


class TransitionConflictError(LifecycleError):
    """Raised when the task changed between reading it and writing the transition."""

    status_code = 409

    def __init__(self, task_id: int, expected: str) -> None:
        super().__init__(f"Task {task_id} is no longer {expected}; another transition won")
        self.task_id = task_id
        self.expected = expected


class InvalidScoreError(LifecycleError):
    status_code = 422


class InsufficientPointsError(LifecycleError):
    status_code = 409

    def __init__(self, github_login: str, requested: int, balance: int) -> None:
        super().__init__(f"Student {github_login} has {balance} points, cannot redeem {requested}")
        self.github_login = github_login
        self.requested = requested
        self.balance = balance


class OpenPeriodError(LifecycleError):
    """Raised when a month that has not ended yet is rolled over."""

    status_code = 409

    def __init__(self, year: int, month: int) -> None:
        super().__init__(f"{year}-{month:02d} has not ended yet")
        self.year = year
        self.month = month
