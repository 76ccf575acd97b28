"""
SpendSight — spend analytics engine.

Anomaly verdicts, next-period forecasts and spending-pattern clusters
computed from a user's dated monetary records.
"""

__version__ = "0.1.0"
__all__ = ["SpendAnalytics"]

from spendsight.engine import SpendAnalytics  # noqa: E402
