"""
Shared numeric helpers — sample statistics and planar distance.

Every dispersion figure in SpendSight goes through here so that the
Bessel-corrected (n-1) divisor is applied consistently. Mean and variance
come from ``statistics``, which sums exactly: identical values always give
their own value back as the mean and a spread of exactly ``0.0``.
"""

from __future__ import annotations

import math
import statistics
from collections.abc import Sequence


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean, ``0.0`` for an empty sequence."""
    if not values:
        return 0.0
    return float(statistics.mean(values))


def sample_variance(values: Sequence[float]) -> float:
    """Unbiased sample variance. Needs at least two values, else ``0.0``."""
    return float(statistics.variance(values)) if len(values) > 1 else 0.0


def sample_std_dev(values: Sequence[float]) -> float:
    return float(statistics.stdev(values)) if len(values) > 1 else 0.0


def euclidean_distance(a: tuple[float, float], b: tuple[float, float]) -> float:
    """Straight-line distance between two (x, y) points."""
    return math.sqrt((a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2)
