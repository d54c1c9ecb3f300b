"""Task state machine.

The allowed edges, and what each target status does besides changing the
status, live in ``TRANSITIONS``. Terminal statuses have no outgoing edges.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet

from mentor_link.core.database.entities.enums import TaskStatus

from .errors import InvalidTransitionError


class StudentEffect(str, Enum):
    """What a transition does to ``student_github_login``."""

    keep = "keep"
    set = "set"  # The request must name an active student.
    clear = "clear"


TRANSITIONS: Dict[TaskStatus, FrozenSet[TaskStatus]] = {
    TaskStatus.open: frozenset({TaskStatus.request_assign, TaskStatus.assigned, TaskStatus.invalid}),
    TaskStatus.request_assign: frozenset({TaskStatus.assigned, TaskStatus.open}),
    TaskStatus.assigned: frozenset({TaskStatus.request_finish, TaskStatus.open, TaskStatus.failed}),
    TaskStatus.request_finish: frozenset({TaskStatus.assigned, TaskStatus.completed, TaskStatus.failed}),
    TaskStatus.completed: frozenset(),
    TaskStatus.failed: frozenset(),
    TaskStatus.invalid: frozenset(),
}


def can_transition(from_status: TaskStatus, to_status: TaskStatus) -> bool:
    return to_status in TRANSITIONS.get(TaskStatus(from_status), frozenset())


def ensure_transition(from_status: TaskStatus, to_status: TaskStatus) -> None:
    """Raise ``InvalidTransitionError`` unless ``from_status -> to_status`` is an edge."""
    from_status = TaskStatus(from_status)
    to_status = TaskStatus(to_status)
    if from_status in TaskStatus.terminal():
        raise InvalidTransitionError(from_status.value, to_status.value, "task is closed")
    if not can_transition(from_status, to_status):
        raise InvalidTransitionError(from_status.value, to_status.value)


def requires_student(to_status: TaskStatus, from_status: TaskStatus = TaskStatus.open) -> bool:
    """Whether moving to ``to_status`` must name an active student."""
    return from_status == TaskStatus.open and to_status in (TaskStatus.request_assign, TaskStatus.assigned)


def student_effect(from_status: TaskStatus, to_status: TaskStatus) -> StudentEffect:
    """Decide how a transition treats the task's student.

    Taking an open task names the student; going back to ``open`` releases it.
    Every other edge keeps whoever holds the task.
    """
    if to_status == TaskStatus.open:
        return StudentEffect.clear
    if requires_student(to_status, from_status):
        return StudentEffect.set
    return StudentEffect.keep
