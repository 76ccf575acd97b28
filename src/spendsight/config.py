"""
SpendSight configuration management.

Supports loading from YAML files, environment variables, and keyword overrides.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


class OutlierConfig(BaseModel):
    """Z-score anomaly detection settings."""

    enabled: bool = True
    z_threshold: float = Field(default=2.0, gt=0.0, description="Std devs beyond which an amount is flagged")


class ForecastConfig(BaseModel):
    """Next-period trend forecast settings."""

    enabled: bool = True


class ClusteringConfig(BaseModel):
    """K-Means spending pattern settings."""

    enabled: bool = True
    k: int = Field(default=3, ge=1, description="Number of spending clusters")
    max_iterations: int = Field(default=100, ge=1)
    seed: int | None = Field(default=None, description="Seed for centroid initialization")


class SpendSightConfig(BaseModel):
    """Root configuration for SpendSight."""

    outlier: OutlierConfig = Field(default_factory=OutlierConfig)
    forecast: ForecastConfig = Field(default_factory=ForecastConfig)
    clustering: ClusteringConfig = Field(default_factory=ClusteringConfig)

    @classmethod
    def load(cls, config_path: str | None = None, **overrides: Any) -> SpendSightConfig:
        """Load configuration from file, env vars, and overrides.

        Priority: overrides > env vars > config file > defaults.
        """
        data: dict[str, Any] = {}

        # 1. Load from YAML file if provided
        if config_path:
            path = Path(config_path)
            if path.exists():
                with open(path) as f:
                    data = yaml.safe_load(f) or {}

        # 2. Override from environment variables
        env_threshold = os.environ.get("SPENDSIGHT_Z_THRESHOLD")
        env_clusters = os.environ.get("SPENDSIGHT_CLUSTERS")
        env_iterations = os.environ.get("SPENDSIGHT_MAX_ITERATIONS")
        env_seed = os.environ.get("SPENDSIGHT_SEED")

        if env_threshold:
            outlier = data.get("outlier", {})
            outlier["z_threshold"] = env_threshold
            data["outlier"] = outlier

        if env_clusters or env_iterations or env_seed:
            clustering = data.get("clustering", {})
            if env_clusters:
                clustering["k"] = env_clusters
            if env_iterations:
                clustering["max_iterations"] = env_iterations
            if env_seed:
                clustering["seed"] = env_seed
            data["clustering"] = clustering

        # 3. Apply keyword overrides
        data.update(overrides)

        return cls.model_validate(data)
