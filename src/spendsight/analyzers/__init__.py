"""
SpendSight analyzers — pure computation modules.

Each analyzer is a stateless function of its inputs: no I/O, no caching,
safe to call concurrently as long as callers do not share the point lists
handed to the cluster analyzer.
"""

from spendsight.analyzers.clustering import (
    ClusterPoint,
    ClusterResult,
    ClusterSummary,
    KMeansClusterer,
    describe_clusters,
    fit,
    points_from_records,
    refine,
)
from spendsight.analyzers.outlier import (
    AnomalyClassifier,
    ZScoreOutlierDetector,
    is_anomaly,
    z_score,
)
from spendsight.analyzers.trend import (
    TrendDirection,
    TrendForecast,
    TrendForecaster,
    fit_line,
    monthly_totals,
    next_period_label,
    predict_next,
)

__all__ = [
    # Outlier detection
    "AnomalyClassifier",
    "ZScoreOutlierDetector",
    "is_anomaly",
    "z_score",
    # Trend forecasting
    "TrendDirection",
    "TrendForecast",
    "TrendForecaster",
    "fit_line",
    "monthly_totals",
    "next_period_label",
    "predict_next",
    # Clustering
    "ClusterPoint",
    "ClusterResult",
    "ClusterSummary",
    "KMeansClusterer",
    "describe_clusters",
    "fit",
    "points_from_records",
    "refine",
]
