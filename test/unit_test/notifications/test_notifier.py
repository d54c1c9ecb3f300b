"""Unit tests for lifecycle notification emails."""

import pytest

from mentor_link.core.database.entities import MemberStatus, TaskStatus
from mentor_link.lifecycle import ScoreSummary
from mentor_link.notifications import TaskNotifier
from mentor_link.notifications.notifier import (
    SUBJECT_ASSIGNED,
    SUBJECT_COMPLETED,
    SUBJECT_FAILED,
    monthly_subject,
)

pytestmark = pytest.mark.asyncio


@pytest.fixture
def notifier(repos, renderer, mailer) -> TaskNotifier:
    return TaskNotifier(repos, renderer, mailer, sender_address="no-reply@r2cn.dev")


def sent_message(mailer):
    mailer.send.assert_called_once()
    return mailer.send.call_args.args[0]


class TestTaskEmails:
    async def test_assigned_email_cc_active_mentor(self, notifier, mailer, make_student, make_mentor, make_task):
        await make_student("alice", student_name="Alice")
        await make_mentor("mona", name="Mona")
        task = await make_task(status=TaskStatus.assigned, student_github_login="alice", mentor_github_login="mona")

        assert await notifier.assigned_email(task) is True

        message = sent_message(mailer)
        assert message["Subject"] == SUBJECT_ASSIGNED
        assert message["To"] == "alice@example.com"
        assert message["Cc"] == "mona@example.com"
        html = message.get_body(("html",)).get_content()
        assert "Alice" in html and "mona" in html
        assert "https://github.com/r2cn-dev/mentor-link" in html

    async def test_inactive_mentor_not_cc(self, notifier, mailer, make_student, make_mentor, make_task):
        await make_student("alice")
        await make_mentor("mona", status=MemberStatus.inactive)
        task = await make_task(status=TaskStatus.failed, student_github_login="alice", mentor_github_login="mona")

        assert await notifier.failed_email(task) is True

        message = sent_message(mailer)
        assert message["Subject"] == SUBJECT_FAILED
        assert message["Cc"] is None

    async def test_unknown_mentor_still_named(self, notifier, mailer, make_student, make_task):
        await make_student("alice")
        task = await make_task(status=TaskStatus.assigned, student_github_login="alice", mentor_github_login="ghost")

        await notifier.assigned_email(task)

        html = sent_message(mailer).get_body(("html",)).get_content()
        assert "ghost" in html

    async def test_complete_email_carries_balance(self, notifier, mailer, make_student, make_task):
        await make_student("alice")
        task = await make_task(status=TaskStatus.completed, student_github_login="alice")

        assert await notifier.complete_email(task, 137) is True

        message = sent_message(mailer)
        assert message["Subject"] == SUBJECT_COMPLETED
        assert "137" in message.get_body(("html",)).get_content()

    async def test_no_student_no_email(self, notifier, mailer, make_task):
        task = await make_task()
        assert await notifier.assigned_email(task) is False
        mailer.send.assert_not_called()

    async def test_unknown_student_no_email(self, notifier, mailer, make_task):
        task = await make_task(status=TaskStatus.assigned, student_github_login="ghost")
        assert await notifier.assigned_email(task) is False
        mailer.send.assert_not_called()

    async def test_relay_failure_reported(self, notifier, mailer, make_student, make_task):
        mailer.send.side_effect = OSError("connection refused")
        await make_student("alice")
        task = await make_task(status=TaskStatus.assigned, student_github_login="alice")

        assert await notifier.assigned_email(task) is False


class TestMonthlyEmail:
    def test_subject(self):
        assert monthly_subject(3) == "R2CN3月积分报告/R2CN Monthly Score Report - Mar."

    async def test_monthly_score_email(self, notifier, mailer, make_student):
        student = await make_student("alice")
        summary = ScoreSummary("alice", 2025, 3, carryover_score=20, new_score=12, consumption_score=5)

        assert await notifier.monthly_score_email(student, summary, cc_emails=["mona@example.com", None]) is True

        message = sent_message(mailer)
        assert message["Subject"] == monthly_subject(3)
        assert message["Cc"] == "mona@example.com"
        html = message.get_body(("html",)).get_content()
        assert "27" in html
