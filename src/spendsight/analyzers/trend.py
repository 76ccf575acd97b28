"""
Trend Forecaster — least-squares projection of the next period's spend.

The series is treated as evenly spaced: entry ``i`` sits at ``x = i + 1``.
A straight line is fitted by ordinary least squares and evaluated at
``x = n + 1``. Forecasts are clamped at zero since spend cannot go negative.

Closed form, no iteration, no randomness.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from spendsight.models.financial import MonetaryRecord, PeriodTotal

logger = logging.getLogger("spendsight.analyzers.trend")

MIN_POINTS = 2


class TrendDirection(str, Enum):
    """Sign of the fitted slope."""

    UP = "up"
    DOWN = "down"
    FLAT = "flat"


@dataclass
class TrendForecast:
    """Historical series plus the projected next period."""

    periods: list[str] = field(default_factory=list)
    totals: list[float] = field(default_factory=list)
    prediction: float = 0.0
    next_period: str | None = None
    slope: float = 0.0
    intercept: float = 0.0
    direction: TrendDirection = TrendDirection.FLAT

    def to_dict(self) -> dict[str, Any]:
        return {
            "periods": list(self.periods),
            "totals": list(self.totals),
            "prediction": self.prediction,
            "next_period": self.next_period,
            "slope": self.slope,
            "intercept": self.intercept,
            "direction": self.direction.value,
        }


def fit_line(series: Sequence[float]) -> tuple[float, float] | None:
    """Fit ``y = a*x + b`` over ``x = 1..n``. Returns ``(a, b)`` or None if n < 2."""
    n = len(series)
    if n < MIN_POINTS:
        return None

    sum_x = 0.0
    sum_y = 0.0
    sum_xy = 0.0
    sum_xx = 0.0
    for i, y in enumerate(series):
        x = i + 1
        sum_x += x
        sum_y += y
        sum_xy += x * y
        sum_xx += x * x

    # n >= 2 with distinct x keeps the denominator positive
    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n
    return slope, intercept


def predict_next(series: Sequence[float]) -> float:
    """Project the value at ``x = n + 1``; ``0.0`` when fewer than two points."""
    fitted = fit_line(series)
    if fitted is None:
        return 0.0
    slope, intercept = fitted
    next_y = slope * (len(series) + 1) + intercept
    return max(next_y, 0.0)


def monthly_totals(records: Iterable[MonetaryRecord]) -> list[PeriodTotal]:
    """Sum records per calendar month, oldest month first."""
    buckets: dict[str, float] = defaultdict(float)
    for r in records:
        buckets[r.period] += r.amount
    return [PeriodTotal(period=p, total=buckets[p]) for p in sorted(buckets)]


def next_period_label(period: str) -> str:
    """``"2025-03"`` -> ``"2025-04"``, ``"2025-12"`` -> ``"2026-01"``."""
    year_str, month_str = period.split("-", 1)
    year, month = int(year_str), int(month_str)
    if month == 12:
        return f"{year + 1}-01"
    return f"{year}-{month + 1:02d}"


class TrendForecaster:
    """Forecast next-period spend from a chronological series of period totals."""

    @classmethod
    def forecast(cls, series: Sequence[PeriodTotal]) -> TrendForecast:
        """Fit the series and project one period ahead.

        Args:
            series: Period totals ordered oldest to newest.

        Returns:
            TrendForecast with the input series, prediction and fitted line.
        """
        periods = [p.period for p in series]
        totals = [p.total for p in series]
        result = TrendForecast(periods=periods, totals=totals)

        if periods:
            result.next_period = next_period_label(periods[-1])

        fitted = fit_line(totals)
        if fitted is None:
            logger.debug("Only %d period(s), forecast defaults to 0.0", len(totals))
            return result

        result.slope, result.intercept = fitted
        result.prediction = predict_next(totals)
        result.direction = cls._direction(result.slope)
        logger.debug(
            "Trend fit over %d periods: slope=%.2f intercept=%.2f next=%.2f",
            len(totals),
            result.slope,
            result.intercept,
            result.prediction,
        )
        return result

    @classmethod
    def forecast_records(cls, records: Iterable[MonetaryRecord]) -> TrendForecast:
        """Aggregate records into monthly totals, then forecast."""
        return cls.forecast(monthly_totals(records))

    @staticmethod
    def _direction(slope: float) -> TrendDirection:
        if slope > 0:
            return TrendDirection.UP
        if slope < 0:
            return TrendDirection.DOWN
        return TrendDirection.FLAT
