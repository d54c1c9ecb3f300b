"""Task lifecycle service.

Moves tasks through the state machine and reconciles the score ledger. A
transition is committed by a compare-and-set update on ``task_status``: only
the request that still observes the expected status writes, so the audit
record, the score credit and the notification of a transition happen exactly
once even when two requests race on the same task.

Side effects run after the commit. A failing email is logged and dropped; it
never undoes the transition.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from mentor_link.core.database.base import utc_now
from mentor_link.core.database.entities.enums import MemberStatus, TaskStatus
from mentor_link.core.database.entities.tasks import Task, TaskTransition
from mentor_link.core.database.repositories.bundle import SqlRepoBundle
from mentor_link.core.logging_config import get_logger
from mentor_link.core.monitoring import log_task_transition

from .errors import (
    DuplicateTaskError,
    InactiveStudentError,
    InvalidScoreError,
    InvalidTransitionError,
    StudentNotFoundError,
    TaskNotFoundError,
    TransitionConflictError,
)
from .scoring import ScoreLedger
from .transitions import StudentEffect, ensure_transition, student_effect

if TYPE_CHECKING:
    from mentor_link.notifications.notifier import TaskNotifier

logger = get_logger(__name__)


@dataclass(frozen=True)
class TransitionResult:
    """Outcome of a committed transition."""

    task: Task
    from_status: TaskStatus
    to_status: TaskStatus
    balance: Optional[int] = None  # Student balance after a completion credit.


class TaskLifecycleService:
    """Creates tasks and drives them through their lifecycle."""

    def __init__(
        self,
        repos: SqlRepoBundle,
        *,
        notifier: Optional["TaskNotifier"] = None,
        min_score: int = 2,
        max_score: int = 50,
    ) -> None:
        self.repos = repos
        self.session = repos.session
        self.ledger = ScoreLedger(repos.scores)
        self.notifier = notifier
        self.min_score = min_score
        self.max_score = max_score

    # ------------------------------------------------------------------
    # Queries and creation
    # ------------------------------------------------------------------

    async def create_task(
        self,
        *,
        github_repo_id: int,
        github_issue_id: int,
        owner: str,
        repo: str,
        mentor_github_login: str,
        score: int,
        github_issue_title: str = "",
        github_issue_link: str = "",
    ) -> Task:
        """Start tracking a GitHub issue as an ``open`` task.

        Raises:
            InvalidScoreError: If ``score`` lies outside the configured bounds.
            DuplicateTaskError: If the issue is already tracked.
        """
        if not self.min_score <= score <= self.max_score:
            raise InvalidScoreError(f"Task score must be between {self.min_score} and {self.max_score}, got {score}")
        if await self.repos.tasks.get_by_issue_id(github_issue_id) is not None:
            raise DuplicateTaskError(github_issue_id)

        task = Task(
            github_repo_id=github_repo_id,
            github_issue_id=github_issue_id,
            owner=owner,
            repo=repo,
            github_issue_title=github_issue_title,
            github_issue_link=github_issue_link or f"https://github.com/{owner}/{repo}/issues",
            score=score,
            task_status=TaskStatus.open,
            mentor_github_login=mentor_github_login,
        )
        task = await self.repos.tasks.create(task)
        logger.info(f"Tracking issue {github_issue_id} of {owner}/{repo} as task {task.id} ({score} points)")
        return task

    async def get_task(self, task_id: int) -> Task:
        task = await self.repos.tasks.get_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    async def list_tasks(
        self,
        *,
        status: Optional[TaskStatus] = None,
        student_github_login: Optional[str] = None,
        mentor_github_login: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Task]:
        filters = {
            "task_status": status,
            "student_github_login": student_github_login,
            "mentor_github_login": mentor_github_login,
        }
        return await self.repos.tasks.list(limit=limit, offset=offset, filters=filters)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def transition(
        self,
        task_id: int,
        to_status: TaskStatus,
        *,
        student_github_login: Optional[str] = None,
        actor: Optional[str] = None,
    ) -> TransitionResult:
        """Move a task to ``to_status`` and run the transition's side effects once.

        Args:
            task_id: Task primary key
            to_status: Target status
            student_github_login: Student taking the task; required when an open task
                is requested or assigned, otherwise it must match the current holder
            actor: Who requested the transition, kept in the audit log

        Raises:
            TaskNotFoundError: If the task does not exist.
            InvalidTransitionError: If the state machine forbids the move.
            StudentNotFoundError: If the named student is unknown.
            InactiveStudentError: If the named student is not active.
            TransitionConflictError: If another transition committed first.
        """
        task = await self.get_task(task_id)
        from_status = TaskStatus(task.task_status)
        to_status = TaskStatus(to_status)
        ensure_transition(from_status, to_status)

        values = {"updated_at": utc_now()}
        effect = student_effect(from_status, to_status)
        if effect == StudentEffect.set:
            if not student_github_login:
                raise InvalidTransitionError(from_status.value, to_status.value, "a student is required")
            await self._require_active_student(student_github_login)
            values["student_github_login"] = student_github_login
        elif effect == StudentEffect.clear:
            values["student_github_login"] = None
        elif student_github_login and student_github_login != task.student_github_login:
            raise InvalidTransitionError(
                from_status.value, to_status.value, f"task is held by {task.student_github_login}"
            )

        holder = values.get("student_github_login", task.student_github_login)
        balance: Optional[int] = None
        try:
            won = await self.repos.tasks.compare_and_set_status(
                task_id, expected=from_status, new_status=to_status, **values
            )
            if not won:
                raise TransitionConflictError(task_id, from_status.value)

            await self.repos.tasks.add_transition(
                TaskTransition(
                    task_id=task_id,
                    from_status=from_status,
                    to_status=to_status,
                    student_github_login=holder,
                    actor=actor,
                )
            )
            if to_status == TaskStatus.completed:
                balance = await self.ledger.credit(holder, task.score)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        await self.session.refresh(task)
        logger.info(f"Task {task_id}: {from_status.value} -> {to_status.value} (student={holder}, actor={actor})")
        log_task_transition(task_id, from_status.value, to_status.value, actor)

        await self._notify(task, to_status, balance)
        return TransitionResult(task=task, from_status=from_status, to_status=to_status, balance=balance)

    async def request_assign(self, task_id: int, student_github_login: str, actor: Optional[str] = None):
        return await self.transition(
            task_id, TaskStatus.request_assign, student_github_login=student_github_login, actor=actor
        )

    async def assign(self, task_id: int, student_github_login: Optional[str] = None, actor: Optional[str] = None):
        return await self.transition(
            task_id, TaskStatus.assigned, student_github_login=student_github_login, actor=actor
        )

    async def release(self, task_id: int, actor: Optional[str] = None):
        return await self.transition(task_id, TaskStatus.open, actor=actor)

    async def request_finish(self, task_id: int, actor: Optional[str] = None):
        return await self.transition(task_id, TaskStatus.request_finish, actor=actor)

    async def complete(self, task_id: int, actor: Optional[str] = None):
        return await self.transition(task_id, TaskStatus.completed, actor=actor)

    async def fail(self, task_id: int, actor: Optional[str] = None):
        return await self.transition(task_id, TaskStatus.failed, actor=actor)

    async def invalidate(self, task_id: int, actor: Optional[str] = None):
        return await self.transition(task_id, TaskStatus.invalid, actor=actor)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _require_active_student(self, github_login: str) -> None:
        student = await self.repos.students.get_student_by_login(github_login)
        if student is None:
            raise StudentNotFoundError(github_login)
        if student.status != MemberStatus.active:
            raise InactiveStudentError(github_login)

    async def _notify(self, task: Task, to_status: TaskStatus, balance: Optional[int]) -> None:
        if self.notifier is None:
            return
        try:
            if to_status == TaskStatus.assigned:
                await self.notifier.assigned_email(task)
            elif to_status == TaskStatus.failed:
                await self.notifier.failed_email(task)
            elif to_status == TaskStatus.completed:
                await self.notifier.complete_email(task, balance or 0)
        except Exception:
            logger.error(f"Notification for task {task.id} ({to_status.value}) failed", exc_info=True)
