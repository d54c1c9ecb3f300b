"""
Task repository.

Besides CRUD, this repository provides the compare-and-set status update the
lifecycle engine relies on: the ``UPDATE`` only matches while the row still
holds the status the caller observed, so two concurrent transitions of the
same task can never both succeed.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional, Sequence

from sqlalchemy import select, update

from ..entities.enums import TaskStatus
from ..entities.tasks import Task, TaskTransition
from .base import AsyncBaseRepository


class TaskRepository(AsyncBaseRepository[Task]):
    """Repository for task data access operations."""

    def __init__(self, session) -> None:
        super().__init__(session, Task)

    async def get_by_issue_id(self, github_issue_id: int) -> Optional[Task]:
        """Get the task tracking a GitHub issue."""
        result = await self.session.execute(select(Task).where(Task.github_issue_id == github_issue_id))
        return result.scalars().first()

    async def compare_and_set_status(
        self,
        task_id: int,
        *,
        expected: TaskStatus,
        new_status: TaskStatus,
        **values: Any,
    ) -> bool:
        """Move a task to ``new_status`` only if it still holds ``expected``.

        Flushes without committing.

        Args:
            task_id: Task primary key
            expected: Status the caller read before deciding on the transition
            new_status: Status to write
            **values: Extra columns to write in the same statement

        Returns:
            True if this call performed the update, False if the row changed meanwhile
        """
        stmt = (
            update(Task)
            .where(Task.id == task_id, Task.task_status == expected)
            .values(task_status=new_status, **values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def add_transition(self, transition: TaskTransition) -> TaskTransition:
        """Append an audit record. Flushes without committing."""
        self.session.add(transition)
        await self.session.flush()
        return transition

    async def list_transitions(self, task_id: int) -> List[TaskTransition]:
        result = await self.session.execute(
            select(TaskTransition).where(TaskTransition.task_id == task_id).order_by(TaskTransition.id)
        )
        return list(result.scalars().all())

    async def get_student_tasks_with_status_in_period(
        self,
        github_login: str,
        statuses: Sequence[TaskStatus],
        start: datetime,
        end: datetime,
    ) -> List[Task]:
        """Tasks of a student in one of ``statuses`` last updated within ``[start, end)``.

        Args:
            github_login: Student GitHub login
            statuses: Accepted task statuses
            start: Inclusive lower bound on ``updated_at``
            end: Exclusive upper bound on ``updated_at``

        Returns:
            Matching tasks ordered by primary key
        """
        stmt = (
            select(Task)
            .where(
                Task.student_github_login == github_login,
                Task.task_status.in_(list(statuses)),  # type: ignore[attr-defined]
                Task.updated_at >= start,
                Task.updated_at < end,
            )
            .order_by(Task.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
