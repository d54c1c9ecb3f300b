"""
Score ledger repository.

Rows are keyed by ``(github_login, year, month)``. Methods here flush without
committing; the score ledger service decides when its unit of work commits.

Point changes are written as single ``UPDATE ... SET col = col + :n``
statements so concurrent writers never overwrite each other. Reads use
``populate_existing`` so rows already in the session reflect those updates.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import and_, or_, select, update

from ..base import utc_now
from ..entities.scores import Score
from .base import AsyncBaseRepository


def _later_than(year: int, month: int):
    return or_(Score.year > year, and_(Score.year == year, Score.month > month))


def _earlier_than(year: int, month: int):
    return or_(Score.year < year, and_(Score.year == year, Score.month < month))


class ScoreRepository(AsyncBaseRepository[Score]):
    """Repository for monthly score rows."""

    def __init__(self, session) -> None:
        super().__init__(session, Score)

    async def _first(self, stmt) -> Optional[Score]:
        result = await self.session.execute(stmt.execution_options(populate_existing=True))
        return result.scalars().first()

    async def get_for_period(self, github_login: str, year: int, month: int) -> Optional[Score]:
        return await self._first(
            select(Score).where(Score.github_login == github_login, Score.year == year, Score.month == month)
        )

    async def get_latest_before(self, github_login: str, year: int, month: int) -> Optional[Score]:
        """Get the most recent row strictly earlier than the given month."""
        return await self._first(
            select(Score)
            .where(Score.github_login == github_login, _earlier_than(year, month))
            .order_by(Score.year.desc(), Score.month.desc())  # type: ignore[attr-defined]
            .limit(1)
        )

    async def get_latest(self, github_login: str) -> Optional[Score]:
        return await self._first(
            select(Score)
            .where(Score.github_login == github_login)
            .order_by(Score.year.desc(), Score.month.desc())  # type: ignore[attr-defined]
            .limit(1)
        )

    async def list_for_period(self, year: int, month: int) -> List[Score]:
        stmt = select(Score).where(Score.year == year, Score.month == month).order_by(Score.github_login)
        result = await self.session.execute(stmt.execution_options(populate_existing=True))
        return list(result.scalars().all())

    async def add(self, score: Score) -> Score:
        """Stage a new row. Flushes without committing."""
        self.session.add(score)
        await self.session.flush()
        return score

    async def add_points(
        self,
        github_login: str,
        year: int,
        month: int,
        *,
        earned: int = 0,
        consumed: int = 0,
    ) -> bool:
        """Atomically add earned and consumed points to an existing month.

        The net change is carried into ``carryover_score`` of every later month
        of the student, so the latest row always holds the current balance.
        Consumption only applies while the month's balance covers it.

        Returns:
            True if the month was updated, False if the row is missing or its
            balance does not cover ``consumed``
        """
        now = utc_now()
        stmt = update(Score).where(Score.github_login == github_login, Score.year == year, Score.month == month)
        if consumed:
            stmt = stmt.where(Score.carryover_score + Score.new_score - Score.consumption_score >= consumed)
        stmt = stmt.values(
            new_score=Score.new_score + earned,
            consumption_score=Score.consumption_score + consumed,
            updated_at=now,
        ).execution_options(synchronize_session=False)
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return False

        delta = earned - consumed
        if delta:
            await self.session.execute(
                update(Score)
                .where(Score.github_login == github_login, _later_than(year, month))
                .values(carryover_score=Score.carryover_score + delta, updated_at=now)
                .execution_options(synchronize_session=False)
            )
        return True
