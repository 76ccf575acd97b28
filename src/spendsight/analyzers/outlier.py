"""
Outlier Detector — z-score verdict for a new amount against its category history.

A candidate is anomalous when it sits more than ``z_threshold`` sample
standard deviations from the historical mean. With the default of 2.0 that
is roughly the outer 5% of a normally distributed category spend.

Insufficient history (fewer than ``MIN_HISTORY`` amounts) and zero-variance
history both yield ``False``: the detector always answers, it never raises.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from spendsight.analyzers.stats import mean, sample_std_dev
from spendsight.models.financial import MonetaryRecord

logger = logging.getLogger("spendsight.analyzers.outlier")

MIN_HISTORY = 5
DEFAULT_Z_THRESHOLD = 2.0


class AnomalyClassifier(Protocol):
    """Classify a candidate amount as anomalous given historical context."""

    def is_anomaly(self, candidate_amount: float, history: Sequence[float]) -> bool: ...


def z_score(candidate_amount: float, history: Sequence[float]) -> float | None:
    """Absolute z-score of ``candidate_amount``.

    Returns ``None`` when no meaningful score exists: fewer than
    ``MIN_HISTORY`` values, or every historical value identical.
    """
    if len(history) < MIN_HISTORY:
        return None

    mean_val = mean(history)
    std_val = sample_std_dev(history)
    if std_val == 0:
        return None

    return abs(candidate_amount - mean_val) / std_val


def is_anomaly(
    candidate_amount: float,
    history: Sequence[float],
    *,
    z_threshold: float = DEFAULT_Z_THRESHOLD,
) -> bool:
    """Return True if ``candidate_amount`` is a statistical outlier of ``history``.

    Args:
        candidate_amount: The new amount to judge.
        history: Amounts of the same user and category, excluding the candidate.
        z_threshold: Number of standard deviations beyond which a value is flagged.
    """
    z = z_score(candidate_amount, history)
    if z is None:
        return False
    return z > z_threshold


class ZScoreOutlierDetector:
    """Statistical anomaly classifier over per-category history.

    Usage::

        detector = ZScoreOutlierDetector()
        detector.is_anomaly(150.0, [100, 102, 98, 101, 99])  # True
        detector.check_record(new_record, user_records)
    """

    def __init__(self, z_threshold: float = DEFAULT_Z_THRESHOLD) -> None:
        self.z_threshold = z_threshold

    def is_anomaly(self, candidate_amount: float, history: Sequence[float]) -> bool:
        return is_anomaly(candidate_amount, history, z_threshold=self.z_threshold)

    def check_record(
        self,
        candidate: MonetaryRecord,
        records: Sequence[MonetaryRecord],
    ) -> bool:
        """Judge ``candidate`` against the other records of its category."""
        history = self._history_for(candidate, records)
        verdict = self.is_anomaly(candidate.amount, history)
        if verdict:
            logger.info(
                "Anomalous %s spend %.2f (history of %d, mean %.2f)",
                candidate.category,
                candidate.amount,
                len(history),
                mean(history),
            )
        return verdict

    def flag_records(self, records: Sequence[MonetaryRecord]) -> list[MonetaryRecord]:
        """Leave-one-out pass: every record judged against the rest of its category."""
        flagged = [r for r in records if self.check_record(r, records)]
        logger.debug("Flagged %d of %d records", len(flagged), len(records))
        return flagged

    @staticmethod
    def _history_for(
        candidate: MonetaryRecord,
        records: Sequence[MonetaryRecord],
    ) -> list[float]:
        history: list[float] = []
        for r in records:
            if r is candidate or r.category != candidate.category:
                continue
            if candidate.id is not None and r.id == candidate.id:
                continue
            history.append(r.amount)
        return history
