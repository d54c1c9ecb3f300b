"""
Student and Mentor Endpoints.
"""

from fastapi import APIRouter, HTTPException, status

from mentor_link.core.database.entities.members import Mentor, Student
from mentor_link.core.logging_config import get_logger
from mentor_link.server.schemas import MentorCreate, MentorRead, StudentCreate, StudentRead
from mentor_link.server.services.deps import ReposDep

logger = get_logger(__name__)

students_router = APIRouter()
mentors_router = APIRouter()


@students_router.post(
    "",
    response_model=StudentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register Student",
    responses={409: {"description": "A student with this GitHub login exists"}},
)
async def create_student(student_in: StudentCreate, repos: ReposDep) -> StudentRead:
    if await repos.students.get_student_by_login(student_in.github_login) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"Student {student_in.github_login} exists")
    student = await repos.students.create(Student.model_validate(student_in))
    logger.info(f"Registered student {student.github_login}")
    return StudentRead.model_validate(student)


@students_router.get(
    "/{github_login}",
    response_model=StudentRead,
    summary="Get Student",
    responses={404: {"description": "Student not found"}},
)
async def get_student(github_login: str, repos: ReposDep) -> StudentRead:
    student = await repos.students.get_student_by_login(github_login)
    if student is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student {github_login} not found")
    return StudentRead.model_validate(student)


@mentors_router.post(
    "",
    response_model=MentorRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register Mentor",
    responses={409: {"description": "A mentor with this GitHub login exists"}},
)
async def create_mentor(mentor_in: MentorCreate, repos: ReposDep) -> MentorRead:
    if await repos.mentors.get_mentor_by_login(mentor_in.github_login) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"Mentor {mentor_in.github_login} exists")
    mentor = await repos.mentors.create(Mentor.model_validate(mentor_in))
    logger.info(f"Registered mentor {mentor.github_login}")
    return MentorRead.model_validate(mentor)


@mentors_router.get(
    "/{github_login}",
    response_model=MentorRead,
    summary="Get Mentor",
    responses={404: {"description": "Mentor not found"}},
)
async def get_mentor(github_login: str, repos: ReposDep) -> MentorRead:
    mentor = await repos.mentors.get_mentor_by_login(github_login)
    if mentor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Mentor {github_login} not found")
    return MentorRead.model_validate(mentor)
