"""
Task Endpoints.

This module exposes task tracking and the task lifecycle: creating tasks from
GitHub issues, querying them and moving them between statuses. Every
transition goes through the lifecycle service, which commits it exactly once
and sends the matching email afterwards.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from mentor_link.core.database.entities.enums import TaskStatus
from mentor_link.server.schemas import TaskCreate, TaskRead, TaskTransitionRead, TransitionRead, TransitionRequest
from mentor_link.server.services.deps import LifecycleDep

router = APIRouter()


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Task",
    description="Start tracking a GitHub issue as an open task.",
    response_description="The created task.",
    responses={
        409: {"description": "The issue is already tracked"},
        422: {"description": "The score is outside the allowed range"},
    },
)
async def create_task(task_in: TaskCreate, service: LifecycleDep) -> TaskRead:
    task = await service.create_task(**task_in.model_dump())
    return TaskRead.model_validate(task)


@router.get(
    "",
    response_model=List[TaskRead],
    summary="List Tasks",
    description="List tasks, optionally filtered by status, student or mentor.",
)
async def list_tasks(
    service: LifecycleDep,
    task_status: Optional[TaskStatus] = Query(None, alias="status"),
    student: Optional[str] = Query(None, description="Student GitHub login"),
    mentor: Optional[str] = Query(None, description="Mentor GitHub login"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> List[TaskRead]:
    tasks = await service.list_tasks(
        status=task_status,
        student_github_login=student,
        mentor_github_login=mentor,
        limit=limit,
        offset=offset,
    )
    return [TaskRead.model_validate(t) for t in tasks]


@router.get(
    "/{task_id}",
    response_model=TaskRead,
    summary="Get Task",
    responses={404: {"description": "Task not found"}},
)
async def get_task(task_id: int, service: LifecycleDep) -> TaskRead:
    return TaskRead.model_validate(await service.get_task(task_id))


@router.get(
    "/{task_id}/transitions",
    response_model=List[TaskTransitionRead],
    summary="Get Task History",
    description="List the committed transitions of a task, oldest first.",
    responses={404: {"description": "Task not found"}},
)
async def list_task_transitions(task_id: int, service: LifecycleDep) -> List[TaskTransitionRead]:
    await service.get_task(task_id)
    transitions = await service.repos.tasks.list_transitions(task_id)
    return [TaskTransitionRead.model_validate(t) for t in transitions]


@router.post(
    "/{task_id}/transition",
    response_model=TransitionRead,
    summary="Transition Task",
    description="Move a task to another status. Completing a task credits its score to the student.",
    response_description="The task after the transition.",
    responses={
        404: {"description": "Task or student not found"},
        409: {"description": "Transition not allowed, or another transition won the race"},
    },
)
async def transition_task(task_id: int, request: TransitionRequest, service: LifecycleDep) -> TransitionRead:
    """
    Transition a task.

    The task must still be in the status it had when the request was
    validated; if a concurrent request moved it first, this one fails with 409
    and has no effect.
    """
    result = await service.transition(
        task_id,
        request.to_status,
        student_github_login=request.student_github_login,
        actor=request.actor,
    )
    return TransitionRead(
        task=TaskRead.model_validate(result.task),
        from_status=result.from_status,
        to_status=result.to_status,
        balance=result.balance,
    )
