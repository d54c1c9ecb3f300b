"""
Score ledger entity models.

One row per student and calendar month. The balance of a month is
``carryover_score + new_score - consumption_score``; the carryover of a month
is the balance of the latest earlier month.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import Base, utc_now


class Score(Base, table=True):
    """Entity for a student's monthly points.

    Table: scores
    """

    __tablename__ = "scores"
    __table_args__ = (UniqueConstraint("github_login", "year", "month", name="uq_scores_login_period"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    github_login: str = Field(max_length=128, index=True)
    year: int
    month: int = Field(ge=1, le=12)

    carryover_score: int = Field(default=0)
    new_score: int = Field(default=0)
    consumption_score: int = Field(default=0)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def balance(self) -> int:
        return self.carryover_score + self.new_score - self.consumption_score

    def __repr__(self) -> str:
        return f"Score(login={self.github_login}, period={self.year}-{self.month:02d}, balance={self.balance()})"
