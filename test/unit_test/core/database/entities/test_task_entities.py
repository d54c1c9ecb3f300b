"""Unit tests for task entities."""

import pytest
from sqlalchemy.exc import IntegrityError

from mentor_link.core.database.entities import Task, TaskStatus, TaskTransition, project_link

pytestmark = pytest.mark.asyncio


class TestTaskEntity:
    async def test_defaults(self, make_task):
        task = await make_task()

        assert task.id is not None
        assert task.task_status == TaskStatus.open
        assert task.student_github_login is None
        assert task.created_at is not None
        assert task.updated_at is not None

    async def test_large_github_ids_round_trip(self, make_task, session):
        task = await make_task(github_issue_id=3_000_000_000)
        await session.refresh(task)
        assert task.github_issue_id == 3_000_000_000

    async def test_issue_id_is_unique(self, make_task, session):
        await make_task(github_issue_id=77)
        with pytest.raises(IntegrityError):
            await make_task(github_issue_id=77)
        await session.rollback()

    def test_project_link(self):
        task = Task(
            github_repo_id=1,
            github_issue_id=2,
            owner="r2cn-dev",
            repo="mentor-link",
            mentor_github_login="mona",
        )
        assert project_link(task) == "https://github.com/r2cn-dev/mentor-link"

    def test_repr(self):
        task = Task(id=3, github_repo_id=1, github_issue_id=2, owner="o", repo="r", mentor_github_login="m")
        assert "issue=2" in repr(task)


class TestTaskStatus:
    def test_terminal_statuses(self):
        assert set(TaskStatus.terminal()) == {TaskStatus.completed, TaskStatus.failed, TaskStatus.invalid}

    def test_finished_statuses_count_only_completed(self):
        assert TaskStatus.finish_task_status() == [TaskStatus.completed]

    def test_values_are_snake_case_strings(self):
        assert TaskStatus("request_assign") is TaskStatus.request_assign


class TestTaskTransitionEntity:
    async def test_persists_audit_row(self, session):
        transition = TaskTransition(
            task_id=1, from_status=TaskStatus.open, to_status=TaskStatus.assigned, student_github_login="s", actor="m"
        )
        session.add(transition)
        await session.commit()
        await session.refresh(transition)

        assert transition.id is not None
        assert transition.to_status == TaskStatus.assigned
        assert transition.created_at is not None
