"""Monthly score ledger.

Each student has at most one ``Score`` row per calendar month. A row is
created lazily the first time the month is touched, carrying over the balance
of the student's latest earlier row, so balances survive months without
activity. Points earned or consumed in a month are carried forward into
every later row of the student, so the latest row always holds the balance.

``credit`` only flushes: it runs inside the transaction of the task
transition that earned the points. ``redeem`` and ``rollover`` are standalone
operations and commit their own work.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from mentor_link.core.database.base import utc_now
from mentor_link.core.database.entities.scores import Score
from mentor_link.core.database.repositories.scores import ScoreRepository
from mentor_link.core.logging_config import get_logger

from .errors import InsufficientPointsError, InvalidScoreError, OpenPeriodError

logger = get_logger(__name__)


def period_of(at: datetime) -> Tuple[int, int]:
    return at.year, at.month


def next_period(year: int, month: int) -> Tuple[int, int]:
    if month == 12:
        return year + 1, 1
    return year, month + 1


def period_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    """Naive UTC ``[start, end)`` of a calendar month."""
    next_year, next_month = next_period(year, month)
    return datetime(year, month, 1), datetime(next_year, next_month, 1)


@dataclass(frozen=True)
class ScoreSummary:
    """Read-only view of one student's month."""

    github_login: str
    year: int
    month: int
    carryover_score: int = 0
    new_score: int = 0
    consumption_score: int = 0

    def score_balance(self) -> int:
        return self.carryover_score + self.new_score - self.consumption_score

    @classmethod
    def from_entity(cls, score: Score) -> "ScoreSummary":
        return cls(
            github_login=score.github_login,
            year=score.year,
            month=score.month,
            carryover_score=score.carryover_score,
            new_score=score.new_score,
            consumption_score=score.consumption_score,
        )


class ScoreLedger:
    """Credits, redeems and rolls over monthly points."""

    def __init__(self, scores: ScoreRepository) -> None:
        self.scores = scores

    async def ensure_period(self, github_login: str, year: int, month: int) -> Score:
        """Get the row for a month, creating it with the carried-over balance if missing."""
        score = await self.scores.get_for_period(github_login, year, month)
        if score is not None:
            return score
        previous = await self.scores.get_latest_before(github_login, year, month)
        carryover = previous.balance() if previous is not None else 0
        score = Score(github_login=github_login, year=year, month=month, carryover_score=carryover)
        logger.debug(f"Opening score period {year}-{month:02d} for {github_login} with carryover {carryover}")
        return await self.scores.add(score)

    async def credit(self, github_login: str, points: int, at: Optional[datetime] = None) -> int:
        """Add earned points to the month of ``at``. Flushes without committing.

        Later months of the student carry the credit forward.

        Returns:
            The student's current balance after the credit.
        """
        if points < 0:
            raise InvalidScoreError(f"Cannot credit a negative score: {points}")
        year, month = period_of(at or utc_now())
        await self.ensure_period(github_login, year, month)
        await self.scores.add_points(github_login, year, month, earned=points)
        logger.info(f"Credited {points} points to {github_login} for {year}-{month:02d}")
        return await self.current_balance(github_login)

    async def redeem(self, github_login: str, points: int, at: Optional[datetime] = None) -> ScoreSummary:
        """Consume points from the current balance and commit.

        Raises:
            InvalidScoreError: If ``points`` is not positive.
            InsufficientPointsError: If the balance does not cover ``points``.
        """
        if points <= 0:
            raise InvalidScoreError(f"Redeemed points must be positive: {points}")
        balance = await self.current_balance(github_login)
        if points > balance:
            raise InsufficientPointsError(github_login, points, balance)
        year, month = period_of(at or utc_now())
        await self.ensure_period(github_login, year, month)
        if not await self.scores.add_points(github_login, year, month, consumed=points):
            # A concurrent redemption spent the points first.
            await self.scores.session.rollback()
            raise InsufficientPointsError(github_login, points, await self.current_balance(github_login))
        await self.scores.session.commit()
        logger.info(f"{github_login} redeemed {points} points in {year}-{month:02d}")
        return await self.monthly_summary(github_login, year, month)

    async def current_balance(self, github_login: str) -> int:
        latest = await self.scores.get_latest(github_login)
        return latest.balance() if latest is not None else 0

    async def monthly_summary(self, github_login: str, year: int, month: int) -> Optional[ScoreSummary]:
        score = await self.scores.get_for_period(github_login, year, month)
        return ScoreSummary.from_entity(score) if score is not None else None

    async def rollover(self, year: int, month: int, now: Optional[datetime] = None) -> int:
        """Open the following month for every student active in ``year``/``month``.

        Idempotent: months that already exist are left untouched.

        Returns:
            Number of rows created.

        Raises:
            OpenPeriodError: If ``year``/``month`` has not ended yet.
        """
        if (year, month) >= period_of(now or utc_now()):
            raise OpenPeriodError(year, month)
        next_year, next_month = next_period(year, month)
        created = 0
        for score in await self.scores.list_for_period(year, month):
            if await self.scores.get_for_period(score.github_login, next_year, next_month) is not None:
                continue
            await self.ensure_period(score.github_login, next_year, next_month)
            created += 1
        await self.scores.session.commit()
        logger.info(f"Rolled over {created} score rows from {year}-{month:02d} to {next_year}-{next_month:02d}")
        return created
