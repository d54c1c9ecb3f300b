"""Task notification emails.

``TaskNotifier`` turns lifecycle events into emails to the student, CC'ing
the task's mentor while the mentor is active. Rendering and SMTP delivery are
blocking, so each email is sent from a worker thread.
"""

from __future__ import annotations

import asyncio
import calendar
from typing import Any, Dict, Iterable, Optional, Tuple

from mentor_link.core.database.entities.members import Mentor, Student
from mentor_link.core.database.entities.tasks import Task, project_link
from mentor_link.core.database.repositories.bundle import SqlRepoBundle
from mentor_link.core.logging_config import get_logger
from mentor_link.lifecycle.scoring import ScoreSummary

from .sender import EmailSender, SmtpMailer
from .templates import MONTHLY_SUMMARY, TASK_ASSIGNED, TASK_COMPLETED, TASK_FAILED, TemplateRenderer

logger = get_logger(__name__)

SUBJECT_ASSIGNED = "R2CN任务认领通知/R2CN Task Assigned"
SUBJECT_FAILED = "R2CN任务失败通知/R2CN Task Failure"
SUBJECT_COMPLETED = "R2CN任务完成通知/R2CN Task Successful"


def monthly_subject(month: int) -> str:
    return f"R2CN{month}月积分报告/R2CN Monthly Score Report - {calendar.month_abbr[month]}."


class TaskNotifier:
    """Sends the student-facing emails of the task lifecycle.

    Args:
        repos: Repositories used to resolve students and mentors
        renderer: Template renderer
        mailer: SMTP relay
        sender_address: ``From`` address of every email
    """

    def __init__(
        self,
        repos: SqlRepoBundle,
        renderer: TemplateRenderer,
        mailer: SmtpMailer,
        sender_address: str = "no-reply@r2cn.dev",
    ) -> None:
        self.repos = repos
        self.renderer = renderer
        self.mailer = mailer
        self.sender_address = sender_address

    async def assigned_email(self, task: Task) -> bool:
        return await self._task_email(task, TASK_ASSIGNED, SUBJECT_ASSIGNED)

    async def failed_email(self, task: Task) -> bool:
        return await self._task_email(task, TASK_FAILED, SUBJECT_FAILED)

    async def complete_email(self, task: Task, balance: int) -> bool:
        return await self._task_email(task, TASK_COMPLETED, SUBJECT_COMPLETED, points_total=balance)

    async def monthly_score_email(
        self,
        student: Student,
        summary: ScoreSummary,
        cc_emails: Iterable[Optional[str]] = (),
    ) -> bool:
        """Send a student the points report of one month."""
        context = {
            "student_name": student.student_name,
            "points_earned_month": summary.new_score,
            "points_redeemed_month": summary.consumption_score,
            "points_balance": summary.score_balance(),
        }
        sender = EmailSender(MONTHLY_SUMMARY, monthly_subject(summary.month), context, student.email, cc_emails)
        return await self._deliver(sender)

    async def _task_email(self, task: Task, template_name: str, subject: str, **extra: Any) -> bool:
        student, mentor = await self._participants(task)
        if student is None:
            return False

        context: Dict[str, Any] = {
            "student_name": student.student_name,
            "task_title": task.github_issue_title,
            "task_link": task.github_issue_link,
            "mentor_name": task.mentor_github_login,
            "project_link": project_link(task),
            **extra,
        }
        cc = [mentor.email] if mentor is not None and mentor.is_active else []
        sender = EmailSender(template_name, subject, context, student.email, cc)
        return await self._deliver(sender)

    async def _participants(self, task: Task) -> Tuple[Optional[Student], Optional[Mentor]]:
        if not task.student_github_login:
            logger.debug(f"Task {task.id} has no student, no email sent")
            return None, None
        student = await self.repos.students.get_student_by_login(task.student_github_login)
        if student is None:
            logger.warning(f"Student {task.student_github_login} of task {task.id} not found, no email sent")
            return None, None
        mentor = await self.repos.mentors.get_mentor_by_login(task.mentor_github_login)
        return student, mentor

    async def _deliver(self, sender: EmailSender) -> bool:
        return await asyncio.to_thread(sender.send, self.renderer, self.mailer, self.sender_address)
