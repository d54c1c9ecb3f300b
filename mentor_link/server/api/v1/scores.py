"""
Score Endpoints.

Balances, redemptions and the monthly jobs of the score ledger (rolling
balances over to the next month, sending the monthly reports).
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from mentor_link.lifecycle.scoring import ScoreSummary
from mentor_link.server.schemas import PeriodRequest, PeriodResult, RedeemRequest, ScoreRead
from mentor_link.server.services.deps import LedgerDep, ReportDep

router = APIRouter()


def _score_read(github_login: str, balance: int, summary: Optional[ScoreSummary] = None) -> ScoreRead:
    if summary is None:
        return ScoreRead(github_login=github_login, balance=balance)
    return ScoreRead(
        github_login=github_login,
        balance=balance,
        year=summary.year,
        month=summary.month,
        carryover_score=summary.carryover_score,
        new_score=summary.new_score,
        consumption_score=summary.consumption_score,
    )


@router.post(
    "/rollover",
    response_model=PeriodResult,
    summary="Roll Over Balances",
    description=(
        "Open the following month for every student with points in the given month. Safe to repeat. "
        "Only months that have ended can be rolled over."
    ),
    responses={409: {"description": "The month has not ended yet"}},
)
async def rollover(period: PeriodRequest, ledger: LedgerDep) -> PeriodResult:
    created = await ledger.rollover(period.year, period.month)
    return PeriodResult(year=period.year, month=period.month, count=created)


@router.post(
    "/reports",
    response_model=PeriodResult,
    summary="Send Monthly Reports",
    description="Email every student with points activity in the given month a summary of that month.",
)
async def send_reports(period: PeriodRequest, reports: ReportDep) -> PeriodResult:
    sent = await reports.send_reports(period.year, period.month)
    return PeriodResult(year=period.year, month=period.month, count=sent)


@router.get(
    "/{github_login}",
    response_model=ScoreRead,
    summary="Get Score",
    description="Current balance of a student, with the breakdown of one month when year and month are given.",
    responses={404: {"description": "No score row for the requested month"}},
)
async def get_score(
    github_login: str,
    ledger: LedgerDep,
    year: Optional[int] = Query(None, ge=2000),
    month: Optional[int] = Query(None, ge=1, le=12),
) -> ScoreRead:
    if (year is None) != (month is None):
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Give both year and month")
    balance = await ledger.current_balance(github_login)
    if year is None:
        return _score_read(github_login, balance)

    summary = await ledger.monthly_summary(github_login, year, month)
    if summary is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No score for {github_login} in {year}-{month:02d}",
        )
    return _score_read(github_login, balance, summary)


@router.post(
    "/{github_login}/redeem",
    response_model=ScoreRead,
    summary="Redeem Points",
    responses={409: {"description": "The balance does not cover the requested points"}},
)
async def redeem(github_login: str, request: RedeemRequest, ledger: LedgerDep) -> ScoreRead:
    summary = await ledger.redeem(github_login, request.points)
    return _score_read(github_login, summary.score_balance(), summary)
