"""
SpendSight — analytics facade.

The SpendAnalytics class is the entry point the presentation layer calls.
It wires configuration into the three analyzers and hands back plain
result objects ready for serialization.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from spendsight.analyzers.clustering import (
    ClusterResult,
    ClusterSummary,
    KMeansClusterer,
    describe_clusters,
)
from spendsight.analyzers.outlier import ZScoreOutlierDetector
from spendsight.analyzers.trend import TrendForecast, TrendForecaster
from spendsight.config import SpendSightConfig
from spendsight.models.financial import MonetaryRecord

logger = logging.getLogger("spendsight")


@dataclass
class AnalyticsSnapshot:
    """All three artifacts for one record snapshot."""

    record_count: int
    forecast: TrendForecast | None = None
    clusters: list[ClusterSummary] = field(default_factory=list)
    flagged: list[MonetaryRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "record_count": self.record_count,
            "forecast": self.forecast.to_dict() if self.forecast else None,
            "clusters": [c.to_dict() for c in self.clusters],
            "flagged": [r.model_dump(mode="json") for r in self.flagged],
        }


@dataclass
class SpendAnalytics:
    """Stateless analytics over a user's monetary records.

    Usage::

        from spendsight import SpendAnalytics

        analytics = SpendAnalytics.from_config("spendsight.yaml")
        analytics.check_anomaly(new_record, history_records)
        forecast = analytics.forecast(records)
        clusters = analytics.cluster(records)

    Only configuration is kept on the instance. Every call recomputes from
    the records it is given, so stale results never outlive a data change.
    """

    config: SpendSightConfig = field(default_factory=SpendSightConfig)

    @classmethod
    def from_config(cls, config_path: str | None = None, **overrides: Any) -> SpendAnalytics:
        """Create an instance from a config file or keyword arguments."""
        return cls(config=SpendSightConfig.load(config_path, **overrides))

    @property
    def detector(self) -> ZScoreOutlierDetector:
        """Built fresh on each access so no analyzer outlives a call."""
        return ZScoreOutlierDetector(z_threshold=self.config.outlier.z_threshold)

    @property
    def clusterer(self) -> KMeansClusterer:
        """Built fresh on each access, seeded from the current config."""
        cfg = self.config.clustering
        return KMeansClusterer(k=cfg.k, max_iterations=cfg.max_iterations, seed=cfg.seed)

    def check_anomaly(
        self,
        candidate: MonetaryRecord,
        records: Sequence[MonetaryRecord],
    ) -> bool:
        """Verdict for ``candidate`` against same-category ``records``."""
        return self.detector.check_record(candidate, records)

    def forecast(self, records: Sequence[MonetaryRecord]) -> TrendForecast:
        """Forecast next month's total from monthly sums of ``records``."""
        result = TrendForecaster.forecast_records(records)
        logger.info(
            "Forecast for %s: %.2f (%d months of history)",
            result.next_period or "next period",
            result.prediction,
            len(result.periods),
        )
        return result

    def cluster(
        self,
        records: Sequence[MonetaryRecord],
        *,
        rng: random.Random | None = None,
    ) -> ClusterResult:
        """Group ``records`` by (day-of-month, amount)."""
        result = self.clusterer.fit_records(records, rng=rng)
        logger.info(
            "Clustered %d records into %d groups in %d iteration(s)",
            len(result.points),
            len(result.centroids),
            result.iterations,
        )
        return result

    def snapshot(
        self,
        records: Sequence[MonetaryRecord],
        *,
        rng: random.Random | None = None,
    ) -> AnalyticsSnapshot:
        """Run every enabled analyzer over one record snapshot."""
        snap = AnalyticsSnapshot(record_count=len(records))
        if self.config.forecast.enabled:
            snap.forecast = self.forecast(records)
        if self.config.clustering.enabled:
            snap.clusters = describe_clusters(self.cluster(records, rng=rng))
        if self.config.outlier.enabled:
            snap.flagged = self.detector.flag_records(records)
        return snap
