"""
Cluster Analyzer — K-Means grouping of (day-of-month, amount) spend points.

Runs Lloyd's algorithm:

1. Pick ``k`` seed centroids from the points (uniformly, with replacement).
2. Assignment: move every point to its nearest centroid.
3. Update: move every centroid to the mean of its members.
4. Repeat 2-3 until no assignment changes or ``max_iterations`` is hit.

Seeding is the only random step and always draws from an injected
``random.Random``, so a seeded generator gives a reproducible fit. Each call
re-fits from scratch; nothing is cached between calls.

With ``k = 3`` the clusters usually read as daily small spend, moderate
spend, and large recurring payments (rent, equipment, travel).
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from spendsight.analyzers.stats import euclidean_distance
from spendsight.models.financial import MonetaryRecord

logger = logging.getLogger("spendsight.analyzers.clustering")

Centroid = tuple[float, float]


@dataclass
class ClusterPoint:
    """One spend point. ``cluster_index`` is None until assigned."""

    x: float  # day of month, 1-31
    y: float  # amount
    cluster_index: int | None = None
    source: MonetaryRecord | None = field(default=None, repr=False, compare=False)

    @property
    def coords(self) -> Centroid:
        return (self.x, self.y)


@dataclass
class ClusterResult:
    """Final assignments and centroid positions of a single fit."""

    points: list[ClusterPoint] = field(default_factory=list)
    centroids: list[Centroid] = field(default_factory=list)
    iterations: int = 0
    converged: bool = False

    def members(self, index: int) -> list[ClusterPoint]:
        return [p for p in self.points if p.cluster_index == index]

    def to_dict(self) -> dict[str, Any]:
        return {
            "points": [
                {"x": p.x, "y": p.y, "cluster": p.cluster_index} for p in self.points
            ],
            "centroids": [{"x": cx, "y": cy} for cx, cy in self.centroids],
            "iterations": self.iterations,
            "converged": self.converged,
        }


@dataclass
class ClusterSummary:
    """Human-readable digest of one cluster."""

    index: int
    size: int
    share: float  # fraction of all points, 0-1
    centroid_day: float
    centroid_amount: float
    label: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "size": self.size,
            "share": round(self.share, 4),
            "centroid_day": round(self.centroid_day, 2),
            "centroid_amount": round(self.centroid_amount, 2),
            "label": self.label,
        }


def points_from_records(records: Iterable[MonetaryRecord]) -> list[ClusterPoint]:
    """Project records onto the (day-of-month, amount) plane."""
    return [
        ClusterPoint(x=float(r.day_of_month), y=r.amount, source=r) for r in records
    ]


def fit(
    points: list[ClusterPoint],
    k: int,
    max_iterations: int,
    *,
    rng: random.Random | None = None,
) -> ClusterResult:
    """Cluster ``points`` into ``k`` groups.

    Args:
        points: Points to cluster. Their ``cluster_index`` is updated in place.
        k: Number of clusters.
        max_iterations: Upper bound on assign/update rounds.
        rng: Source of randomness for seeding. A fresh unseeded generator is
            used when omitted.

    Returns:
        ClusterResult. When there are fewer points than ``k`` (or ``k < 1``)
        the points are returned untouched with no centroids.
    """
    if k < 1 or len(points) < k:
        logger.warning("Cannot form %d clusters from %d points", k, len(points))
        return ClusterResult(points=points, centroids=[])

    if rng is None:
        rng = random.Random()

    seeds = [points[rng.randrange(len(points))].coords for _ in range(k)]
    return refine(points, seeds, max_iterations)


def refine(
    points: list[ClusterPoint],
    centroids: Sequence[Centroid],
    max_iterations: int,
) -> ClusterResult:
    """Run the Lloyd loop starting from explicit ``centroids``.

    With no centroids the points are returned untouched, as in :func:`fit`.
    """
    if not centroids:
        return ClusterResult(points=points, centroids=[])

    current = list(centroids)
    changed = True
    iterations = 0

    while changed and iterations < max_iterations:
        changed = False
        iterations += 1

        for p in points:
            nearest = _nearest(p.coords, current)
            if p.cluster_index != nearest:
                p.cluster_index = nearest
                changed = True

        current = _recompute(points, current)

    logger.debug(
        "K-Means finished after %d iteration(s), converged=%s",
        iterations,
        not changed,
    )
    return ClusterResult(
        points=points,
        centroids=current,
        iterations=iterations,
        converged=not changed,
    )


def describe_clusters(result: ClusterResult) -> list[ClusterSummary]:
    """Label each cluster by where its centroid amount ranks."""
    if not result.centroids:
        return []

    total = len(result.points)
    by_amount = sorted(range(len(result.centroids)), key=lambda i: result.centroids[i][1])
    rank = {index: pos for pos, index in enumerate(by_amount)}

    summaries: list[ClusterSummary] = []
    for index, (cx, cy) in enumerate(result.centroids):
        size = len(result.members(index))
        summaries.append(ClusterSummary(
            index=index,
            size=size,
            share=size / total if total else 0.0,
            centroid_day=cx,
            centroid_amount=cy,
            label=_label_for(rank[index], len(result.centroids)),
        ))
    return summaries


class KMeansClusterer:
    """Configured K-Means runner.

    Holds parameters only; every :meth:`fit` builds its own generator from
    ``seed`` so repeated calls on the same data agree.
    """

    def __init__(self, k: int = 3, max_iterations: int = 100, seed: int | None = None) -> None:
        self.k = k
        self.max_iterations = max_iterations
        self.seed = seed

    def fit(
        self,
        points: list[ClusterPoint],
        *,
        rng: random.Random | None = None,
    ) -> ClusterResult:
        if rng is None:
            rng = random.Random(self.seed)
        return fit(points, self.k, self.max_iterations, rng=rng)

    def fit_records(
        self,
        records: Iterable[MonetaryRecord],
        *,
        rng: random.Random | None = None,
    ) -> ClusterResult:
        return self.fit(points_from_records(records), rng=rng)


# ------------------------------------------------------------------ #
#  Internals                                                          #
# ------------------------------------------------------------------ #

def _nearest(coords: Centroid, centroids: Sequence[Centroid]) -> int:
    # strict < keeps the lowest index on ties
    nearest = 0
    min_dist = euclidean_distance(coords, centroids[0])
    for i in range(1, len(centroids)):
        dist = euclidean_distance(coords, centroids[i])
        if dist < min_dist:
            min_dist = dist
            nearest = i
    return nearest


def _recompute(points: Sequence[ClusterPoint], previous: list[Centroid]) -> list[Centroid]:
    sums = [[0.0, 0.0, 0] for _ in previous]
    for p in points:
        if p.cluster_index is None:
            continue
        acc = sums[p.cluster_index]
        acc[0] += p.x
        acc[1] += p.y
        acc[2] += 1

    updated: list[Centroid] = []
    for i, (sum_x, sum_y, count) in enumerate(sums):
        if count > 0:
            updated.append((sum_x / count, sum_y / count))
        else:
            # empty cluster keeps its previous position
            updated.append(previous[i])
    return updated


def _label_for(rank: int, k: int) -> str:
    if k == 1:
        return "typical spend"
    if rank == 0:
        return "daily small spend"
    if rank == k - 1:
        return "recurring large payment"
    return "moderate spend"
