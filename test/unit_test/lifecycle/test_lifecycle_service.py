"""Unit tests for the task lifecycle service."""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import update

from mentor_link.core.database.base import utc_now
from mentor_link.core.database.entities import MemberStatus, Task, TaskStatus
from mentor_link.lifecycle import (
    DuplicateTaskError,
    InactiveStudentError,
    InvalidScoreError,
    InvalidTransitionError,
    StudentNotFoundError,
    TaskLifecycleService,
    TaskNotFoundError,
    TransitionConflictError,
)
from mentor_link.notifications.notifier import TaskNotifier

pytestmark = pytest.mark.asyncio


@pytest.fixture
def notifier():
    return AsyncMock(spec=TaskNotifier)


@pytest.fixture
def service(repos, notifier) -> TaskLifecycleService:
    return TaskLifecycleService(repos, notifier=notifier, min_score=2, max_score=50)


@pytest.fixture
async def alice(make_student):
    return await make_student("alice")


class TestCreateTask:
    async def test_creates_open_task_with_default_link(self, service):
        task = await service.create_task(
            github_repo_id=1,
            github_issue_id=101,
            owner="r2cn-dev",
            repo="mentor-link",
            mentor_github_login="mona",
            score=10,
        )

        assert task.task_status == TaskStatus.open
        assert task.github_issue_link == "https://github.com/r2cn-dev/mentor-link/issues"

    @pytest.mark.parametrize("score", [1, 51, -5])
    async def test_score_out_of_bounds(self, service, score):
        with pytest.raises(InvalidScoreError):
            await service.create_task(
                github_repo_id=1, github_issue_id=102, owner="o", repo="r", mentor_github_login="m", score=score
            )

    async def test_duplicate_issue(self, service, make_task):
        await make_task(github_issue_id=103)
        with pytest.raises(DuplicateTaskError) as exc_info:
            await service.create_task(
                github_repo_id=1, github_issue_id=103, owner="o", repo="r", mentor_github_login="m", score=5
            )
        assert exc_info.value.status_code == 409

    async def test_list_tasks_filters(self, service, make_task):
        await make_task(status=TaskStatus.assigned, student_github_login="alice")
        await make_task()

        tasks = await service.list_tasks(status=TaskStatus.assigned)
        assert [t.student_github_login for t in tasks] == ["alice"]

    async def test_get_missing_task(self, service):
        with pytest.raises(TaskNotFoundError):
            await service.get_task(404)


class TestAssignment:
    async def test_assign_open_task(self, service, repos, notifier, make_task, alice):
        task = await make_task()

        result = await service.assign(task.id, "alice", actor="mona")

        assert result.from_status == TaskStatus.open
        assert result.task.task_status == TaskStatus.assigned
        assert result.task.student_github_login == "alice"
        notifier.assigned_email.assert_awaited_once_with(result.task)

        history = await repos.tasks.list_transitions(task.id)
        assert len(history) == 1
        assert (history[0].student_github_login, history[0].actor) == ("alice", "mona")

    async def test_assign_requires_student(self, service, make_task):
        task = await make_task()
        with pytest.raises(InvalidTransitionError, match="a student is required"):
            await service.assign(task.id)

    async def test_unknown_student(self, service, make_task):
        task = await make_task()
        with pytest.raises(StudentNotFoundError):
            await service.request_assign(task.id, "ghost")

    async def test_inactive_student(self, service, make_task, make_student):
        await make_student("sleepy", status=MemberStatus.inactive)
        task = await make_task()
        with pytest.raises(InactiveStudentError):
            await service.request_assign(task.id, "sleepy")

    async def test_request_then_approve_keeps_requester(self, service, notifier, make_task, alice):
        task = await make_task()

        await service.request_assign(task.id, "alice")
        notifier.assigned_email.assert_not_awaited()

        result = await service.assign(task.id)
        assert result.task.student_github_login == "alice"
        notifier.assigned_email.assert_awaited_once()

    async def test_approve_for_another_student_rejected(self, service, make_task, make_student, alice):
        await make_student("bob")
        task = await make_task()
        await service.request_assign(task.id, "alice")

        with pytest.raises(InvalidTransitionError, match="task is held by alice"):
            await service.assign(task.id, "bob")

    async def test_release_clears_student(self, service, make_task, alice):
        task = await make_task()
        await service.assign(task.id, "alice")

        result = await service.release(task.id)

        assert result.task.task_status == TaskStatus.open
        assert result.task.student_github_login is None


class TestCompletionAndFailure:
    async def test_complete_credits_score_once(self, service, repos, notifier, make_task, alice):
        task = await make_task(score=12)
        await service.assign(task.id, "alice")
        await service.request_finish(task.id)

        result = await service.complete(task.id, actor="mona")

        assert result.balance == 12
        now = utc_now()
        row = await repos.scores.get_for_period("alice", now.year, now.month)
        assert row.new_score == 12
        notifier.complete_email.assert_awaited_once_with(result.task, 12)

        with pytest.raises(InvalidTransitionError, match="task is closed"):
            await service.complete(task.id)
        await repos.session.refresh(row)
        assert row.new_score == 12

    async def test_completion_can_be_rejected(self, service, make_task, alice):
        task = await make_task()
        await service.assign(task.id, "alice")
        await service.request_finish(task.id)

        result = await service.assign(task.id)

        assert result.task.task_status == TaskStatus.assigned
        assert result.task.student_github_login == "alice"

    async def test_fail_sends_failure_email(self, service, notifier, make_task, alice):
        task = await make_task()
        await service.assign(task.id, "alice")

        result = await service.fail(task.id)

        assert result.task.task_status == TaskStatus.failed
        assert result.balance is None
        notifier.failed_email.assert_awaited_once_with(result.task)

    async def test_invalidate_open_task(self, service, notifier, make_task):
        task = await make_task()
        result = await service.invalidate(task.id)
        assert result.task.task_status == TaskStatus.invalid
        notifier.assigned_email.assert_not_awaited()
        notifier.failed_email.assert_not_awaited()

    async def test_cannot_complete_without_finish_request(self, service, make_task, alice):
        task = await make_task()
        await service.assign(task.id, "alice")
        with pytest.raises(InvalidTransitionError):
            await service.complete(task.id)


class TestExactlyOnce:
    async def test_stale_read_loses_the_race(self, service, repos, session, notifier, make_task, alice):
        task = await make_task()
        task_id = task.id
        # Another writer closes the task behind this session's cached copy.
        await session.execute(
            update(Task)
            .where(Task.id == task_id)
            .values(task_status=TaskStatus.invalid)
            .execution_options(synchronize_session=False)
        )
        await session.commit()

        with pytest.raises(TransitionConflictError):
            await service.assign(task_id, "alice")

        assert await repos.tasks.list_transitions(task_id) == []
        notifier.assigned_email.assert_not_awaited()

    async def test_lost_compare_and_set_has_no_side_effects(self, service, repos, notifier, make_task, alice):
        task = await make_task(status=TaskStatus.request_finish, student_github_login="alice")

        with patch.object(repos.tasks, "compare_and_set_status", AsyncMock(return_value=False)):
            with pytest.raises(TransitionConflictError) as exc_info:
                await service.complete(task.id)

        assert exc_info.value.status_code == 409
        assert await repos.scores.get_latest("alice") is None
        notifier.complete_email.assert_not_awaited()

    async def test_failed_credit_rolls_back_transition(self, service, repos, session, make_task, alice):
        task = await make_task(status=TaskStatus.request_finish, student_github_login="alice")
        task_id = task.id

        with patch.object(service.ledger, "credit", AsyncMock(side_effect=RuntimeError("db down"))):
            with pytest.raises(RuntimeError):
                await service.complete(task_id)

        await session.refresh(task)
        assert task.task_status == TaskStatus.request_finish
        assert await repos.tasks.list_transitions(task_id) == []


class TestNotificationFailures:
    async def test_email_failure_does_not_undo_transition(self, service, notifier, make_task, alice):
        notifier.assigned_email.side_effect = RuntimeError("smtp down")
        task = await make_task()

        with patch("mentor_link.lifecycle.service.logger") as mock_logger:
            result = await service.assign(task.id, "alice")

        assert result.task.task_status == TaskStatus.assigned
        mock_logger.error.assert_called_once()

    async def test_works_without_notifier(self, repos, make_task, alice):
        service = TaskLifecycleService(repos)
        task = await make_task()
        result = await service.assign(task.id, "alice")
        assert result.task.task_status == TaskStatus.assigned
