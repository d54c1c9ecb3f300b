"""
API Schemas.

This module contains Pydantic models used for API request bodies and response validation.
These schemas define the interface contract between the client and the server.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from mentor_link.core.database.entities.enums import MemberStatus, TaskStatus


class ReadModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# -----------------------------
# Tasks
# -----------------------------


class TaskCreate(BaseModel):
    """
    Schema for tracking a GitHub issue as a task.
    """

    github_repo_id: int = Field(..., description="GitHub repository ID.", examples=[123456])
    github_issue_id: int = Field(..., description="GitHub issue ID, unique across tasks.", examples=[987654321])
    owner: str = Field(..., description="Repository owner.", examples=["r2cn-dev"])
    repo: str = Field(..., description="Repository name.", examples=["mentor-link"])
    github_issue_title: str = Field(default="", description="Issue title shown in emails.")
    github_issue_link: str = Field(default="", description="Issue URL. Defaults to the repository issues page.")
    score: int = Field(..., description="Points credited to the student on completion.", examples=[10])
    mentor_github_login: str = Field(..., description="GitHub login of the mentor.", examples=["octocat"])

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "github_repo_id": 123456,
                "github_issue_id": 987654321,
                "owner": "r2cn-dev",
                "repo": "mentor-link",
                "github_issue_title": "Add monthly report",
                "score": 10,
                "mentor_github_login": "octocat",
            }
        }
    )


class TaskRead(ReadModel):
    id: int
    github_repo_id: int
    github_issue_id: int
    owner: str
    repo: str
    github_issue_title: str
    github_issue_link: str
    score: int
    task_status: TaskStatus
    student_github_login: Optional[str] = None
    mentor_github_login: str
    created_at: datetime
    updated_at: datetime


class TransitionRequest(BaseModel):
    """
    Schema for moving a task to another status.

    ``student_github_login`` is required when an open task is requested or
    assigned, and must match the current student otherwise.
    """

    to_status: TaskStatus = Field(..., description="Target status.", examples=[TaskStatus.assigned])
    student_github_login: Optional[str] = Field(default=None, description="Student taking or holding the task.")
    actor: Optional[str] = Field(default=None, description="Who requested the transition, kept in the audit log.")


class TransitionRead(BaseModel):
    task: TaskRead
    from_status: TaskStatus
    to_status: TaskStatus
    balance: Optional[int] = Field(default=None, description="Student balance after a completion credit.")


class TaskTransitionRead(ReadModel):
    id: int
    task_id: int
    from_status: TaskStatus
    to_status: TaskStatus
    student_github_login: Optional[str] = None
    actor: Optional[str] = None
    created_at: datetime


# -----------------------------
# Members
# -----------------------------


class StudentCreate(BaseModel):
    github_login: str = Field(..., examples=["student-1"])
    student_name: str = Field(..., examples=["Li Lei"])
    email: str = Field(..., examples=["lilei@example.com"])
    status: MemberStatus = Field(default=MemberStatus.active)


class StudentRead(ReadModel):
    id: int
    github_login: str
    student_name: str
    email: str
    status: MemberStatus
    created_at: datetime
    updated_at: datetime


class MentorCreate(BaseModel):
    github_login: str = Field(..., examples=["octocat"])
    name: str = Field(..., examples=["Mona"])
    email: str = Field(..., examples=["mona@example.com"])
    status: MemberStatus = Field(default=MemberStatus.active)


class MentorRead(ReadModel):
    id: int
    github_login: str
    name: str
    email: str
    status: MemberStatus
    created_at: datetime
    updated_at: datetime


# -----------------------------
# Scores
# -----------------------------


class ScoreRead(BaseModel):
    """Points of one student, optionally with the breakdown of one month."""

    github_login: str
    balance: int = Field(..., description="Current balance across all months.")
    year: Optional[int] = None
    month: Optional[int] = None
    carryover_score: Optional[int] = None
    new_score: Optional[int] = None
    consumption_score: Optional[int] = None


class RedeemRequest(BaseModel):
    points: int = Field(..., gt=0, description="Points to consume from the balance.", examples=[5])


class PeriodRequest(BaseModel):
    year: int = Field(..., ge=2000, examples=[2025])
    month: int = Field(..., ge=1, le=12, examples=[3])


class PeriodResult(BaseModel):
    year: int
    month: int
    count: int = Field(..., description="Rows created by a rollover, or reports sent.")


# -----------------------------
# Conferences
# -----------------------------


class ConferenceRead(ReadModel):
    id: int
    platform_type: str
    conference_id: str
    subject: str
    start_time: str
    end_time: str
    conference_state: str
    language: str
    scheduler_name: str
    record_type: int
    is_auto_record: int
    conf_type: str
    chair_join_uri: str
    guest_join_uri: str
    created_at: datetime
    updated_at: datetime
