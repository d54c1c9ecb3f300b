"""
Service Dependencies.

Wires a request-scoped session into repositories and services for the API
endpoints. Override ``get_session`` (and, in tests, ``get_mailer`` or
``get_meeting_client``) through ``app.dependency_overrides``.
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from mentor_link.core.database.repositories.bundle import SqlRepoBundle, build_sql_repos_from_session
from mentor_link.core.database.session import get_session
from mentor_link.lifecycle.reports import MonthlyReportService
from mentor_link.lifecycle.scoring import ScoreLedger
from mentor_link.lifecycle.service import TaskLifecycleService
from mentor_link.meeting.client import MeetingApiClient
from mentor_link.meeting.service import ConferenceService
from mentor_link.notifications.notifier import TaskNotifier
from mentor_link.notifications.sender import SmtpMailer
from mentor_link.notifications.templates import TemplateRenderer
from mentor_link.server.core.config import settings

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_repos(session: SessionDep) -> SqlRepoBundle:
    return build_sql_repos_from_session(session=session)


ReposDep = Annotated[SqlRepoBundle, Depends(get_repos)]


def get_renderer() -> TemplateRenderer:
    return TemplateRenderer(settings.template_dir)


def get_mailer() -> SmtpMailer:
    return SmtpMailer.from_config(settings.smtp)


def get_notifier(
    repos: ReposDep,
    renderer: Annotated[TemplateRenderer, Depends(get_renderer)],
    mailer: Annotated[SmtpMailer, Depends(get_mailer)],
) -> TaskNotifier:
    return TaskNotifier(repos, renderer, mailer, sender_address=settings.smtp.sender)


NotifierDep = Annotated[TaskNotifier, Depends(get_notifier)]


def get_lifecycle_service(repos: ReposDep, notifier: NotifierDep) -> TaskLifecycleService:
    return TaskLifecycleService(
        repos,
        notifier=notifier,
        min_score=settings.task_min_score,
        max_score=settings.task_max_score,
    )


LifecycleDep = Annotated[TaskLifecycleService, Depends(get_lifecycle_service)]


def get_score_ledger(repos: ReposDep) -> ScoreLedger:
    return ScoreLedger(repos.scores)


LedgerDep = Annotated[ScoreLedger, Depends(get_score_ledger)]


def get_report_service(repos: ReposDep, notifier: NotifierDep) -> MonthlyReportService:
    return MonthlyReportService(repos, notifier)


ReportDep = Annotated[MonthlyReportService, Depends(get_report_service)]


async def get_meeting_client() -> AsyncGenerator[MeetingApiClient, None]:
    client = MeetingApiClient.from_config(settings.meeting)
    try:
        yield client
    finally:
        await client.aclose()


def get_conference_service(
    repos: ReposDep,
    client: Annotated[MeetingApiClient, Depends(get_meeting_client)],
) -> ConferenceService:
    return ConferenceService(client, repos.conferences, settings.meeting)


ConferenceDep = Annotated[ConferenceService, Depends(get_conference_service)]
