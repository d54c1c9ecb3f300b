"""Initial schema for Mentor-Link

Revision ID: 20250301_000000
Revises: None
Create Date: 2025-03-01 00:00:00.000000

Creates the tables of the task lifecycle (tasks, task_transitions), members
(students, mentors), the monthly score ledger (scores) and booked meetings
(conferences).

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20250301_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TASK_STATUSES = ("open", "request_assign", "assigned", "request_finish", "completed", "failed", "invalid")
MEMBER_STATUSES = ("active", "inactive")


def upgrade() -> None:
    """Create all tables."""
    task_status = sa.Enum(*TASK_STATUSES, name="taskstatus")
    member_status = sa.Enum(*MEMBER_STATUSES, name="memberstatus")

    op.create_table(
        "tasks",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("github_repo_id", sa.BigInteger(), nullable=False),
        sa.Column("github_issue_id", sa.BigInteger(), nullable=False),
        sa.Column("owner", sa.String(128), nullable=False),
        sa.Column("repo", sa.String(128), nullable=False),
        sa.Column("github_issue_title", sa.String(512), nullable=False),
        sa.Column("github_issue_link", sa.String(512), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("task_status", task_status, nullable=False),
        sa.Column("student_github_login", sa.String(128), nullable=True),
        sa.Column("mentor_github_login", sa.String(128), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("github_issue_id"),
    )
    op.create_index("ix_tasks_github_repo_id", "tasks", ["github_repo_id"])
    op.create_index("ix_tasks_task_status", "tasks", ["task_status"])
    op.create_index("ix_tasks_student_github_login", "tasks", ["student_github_login"])
    op.create_index("ix_tasks_mentor_github_login", "tasks", ["mentor_github_login"])

    op.create_table(
        "task_transitions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("task_id", sa.Integer(), nullable=False),
        sa.Column("from_status", task_status, nullable=False),
        sa.Column("to_status", task_status, nullable=False),
        sa.Column("student_github_login", sa.String(128), nullable=True),
        sa.Column("actor", sa.String(128), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_task_transitions_task_id", "task_transitions", ["task_id"])
    op.create_index("ix_task_transitions_created_at", "task_transitions", ["created_at"])

    op.create_table(
        "students",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("github_login", sa.String(128), nullable=False),
        sa.Column("student_name", sa.String(128), nullable=False),
        sa.Column("email", sa.String(256), nullable=False),
        sa.Column("status", member_status, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_students_github_login", "students", ["github_login"], unique=True)

    op.create_table(
        "mentors",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("github_login", sa.String(128), nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("email", sa.String(256), nullable=False),
        sa.Column("status", member_status, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_mentors_github_login", "mentors", ["github_login"], unique=True)

    op.create_table(
        "scores",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("github_login", sa.String(128), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("carryover_score", sa.Integer(), nullable=False),
        sa.Column("new_score", sa.Integer(), nullable=False),
        sa.Column("consumption_score", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("github_login", "year", "month", name="uq_scores_login_period"),
    )
    op.create_index("ix_scores_github_login", "scores", ["github_login"])

    op.create_table(
        "conferences",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("platform_type", sa.String(32), nullable=False),
        sa.Column("conference_id", sa.String(64), nullable=False),
        sa.Column("subject", sa.String(256), nullable=False),
        sa.Column("start_time", sa.String(32), nullable=False),
        sa.Column("end_time", sa.String(32), nullable=False),
        sa.Column("conference_state", sa.String(32), nullable=False),
        sa.Column("language", sa.String(16), nullable=False),
        sa.Column("scheduler_name", sa.String(128), nullable=False),
        sa.Column("record_type", sa.Integer(), nullable=False),
        sa.Column("is_auto_record", sa.Integer(), nullable=False),
        sa.Column("conf_type", sa.String(32), nullable=False),
        sa.Column("chair_join_uri", sa.String(512), nullable=False),
        sa.Column("guest_join_uri", sa.String(512), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_conferences_conference_id", "conferences", ["conference_id"], unique=True)


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("conferences")
    op.drop_table("scores")
    op.drop_table("mentors")
    op.drop_table("students")
    op.drop_table("task_transitions")
    op.drop_table("tasks")
    sa.Enum(name="memberstatus").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="taskstatus").drop(op.get_bind(), checkfirst=True)
