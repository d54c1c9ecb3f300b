"""Monthly score reports.

For every student with a score row in the reported month, send a summary of
points earned, redeemed and left, CC'ing the active mentors of the tasks the
student finished that month.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from mentor_link.core.database.entities.enums import TaskStatus
from mentor_link.core.database.repositories.bundle import SqlRepoBundle
from mentor_link.core.logging_config import get_logger

from .scoring import ScoreSummary, period_bounds

if TYPE_CHECKING:
    from mentor_link.notifications.notifier import TaskNotifier

logger = get_logger(__name__)


class MonthlyReportService:
    def __init__(self, repos: SqlRepoBundle, notifier: "TaskNotifier") -> None:
        self.repos = repos
        self.notifier = notifier

    async def mentor_emails_for(self, github_login: str, year: int, month: int) -> List[str]:
        """Emails of the active mentors of tasks the student finished in the month."""
        start, end = period_bounds(year, month)
        finished = await self.repos.tasks.get_student_tasks_with_status_in_period(
            github_login, TaskStatus.finish_task_status(), start, end
        )
        logins = {t.mentor_github_login for t in finished if t.mentor_github_login}
        mentors = await self.repos.mentors.get_mentors_by_logins(sorted(logins))
        return [m.email for m in mentors if m.is_active]

    async def send_reports(self, year: int, month: int) -> int:
        """Send one report per student with points activity in the month.

        Returns:
            Number of reports handed to the mail relay successfully.
        """
        sent = 0
        for score in await self.repos.scores.list_for_period(year, month):
            student = await self.repos.students.get_student_by_login(score.github_login)
            if student is None:
                logger.warning(f"Skipping report for unknown student {score.github_login}")
                continue
            cc_emails = await self.mentor_emails_for(student.github_login, year, month)
            delivered = await self.notifier.monthly_score_email(
                student, ScoreSummary.from_entity(score), cc_emails=cc_emails
            )
            if delivered:
                sent += 1
        logger.info(f"Sent {sent} monthly reports for {year}-{month:02d}")
        return sent
