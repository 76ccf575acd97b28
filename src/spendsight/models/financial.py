"""
Financial data models — monetary records and period totals.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class MonetaryRecord(BaseModel):
    """A single dated spend record.

    Produced by the ingestion layer and never mutated afterwards. Amounts
    must be finite and non-negative; anything else is rejected here so the
    analyzers can treat their inputs as clean.
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    amount: float = Field(ge=0, allow_inf_nan=False)
    category: str
    occurred_on: date
    description: str = ""

    @property
    def period(self) -> str:
        """Monthly bucket label, e.g. ``"2025-03"``."""
        return f"{self.occurred_on.year}-{self.occurred_on.month:02d}"

    @property
    def day_of_month(self) -> int:
        return self.occurred_on.day


class PeriodTotal(BaseModel):
    """Aggregate spend for one period of a chronological series."""

    period: str  # "2025-03"
    total: float = Field(ge=0, allow_inf_nan=False)
