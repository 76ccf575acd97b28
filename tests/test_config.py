"""Tests for configuration management."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from spendsight.config import SpendSightConfig


class TestConfig:
    def test_default_config(self) -> None:
        config = SpendSightConfig()
        assert config.outlier.z_threshold == 2.0
        assert config.clustering.k == 3
        assert config.clustering.max_iterations == 100
        assert config.clustering.seed is None
        assert config.forecast.enabled is True

    def test_load_from_yaml(self, tmp_path: Path) -> None:
        yaml_content = {
            "outlier": {"z_threshold": 2.5},
            "clustering": {"k": 4, "seed": 7},
        }
        config_file = tmp_path / "spendsight.yaml"
        config_file.write_text(yaml.dump(yaml_content))

        config = SpendSightConfig.load(str(config_file))
        assert config.outlier.z_threshold == 2.5
        assert config.clustering.k == 4
        assert config.clustering.seed == 7

    def test_load_with_overrides(self) -> None:
        config = SpendSightConfig.load(None, clustering={"k": 2, "max_iterations": 15})
        assert config.clustering.k == 2
        assert config.clustering.max_iterations == 15

    def test_env_var_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPENDSIGHT_Z_THRESHOLD", "3.0")
        monkeypatch.setenv("SPENDSIGHT_CLUSTERS", "5")
        monkeypatch.setenv("SPENDSIGHT_MAX_ITERATIONS", "20")
        monkeypatch.setenv("SPENDSIGHT_SEED", "99")

        config = SpendSightConfig.load()
        assert config.outlier.z_threshold == 3.0
        assert config.clustering.k == 5
        assert config.clustering.max_iterations == 20
        assert config.clustering.seed == 99

    def test_env_beats_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "spendsight.yaml"
        config_file.write_text(yaml.dump({"clustering": {"k": 4, "max_iterations": 30}}))
        monkeypatch.setenv("SPENDSIGHT_CLUSTERS", "2")

        config = SpendSightConfig.load(str(config_file))
        assert config.clustering.k == 2
        assert config.clustering.max_iterations == 30

    def test_missing_config_file(self) -> None:
        config = SpendSightConfig.load("/nonexistent/config.yaml")
        assert config.clustering.k == 3

    def test_invalid_values_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SpendSightConfig.load(None, clustering={"k": 0})
        with pytest.raises(ValidationError):
            SpendSightConfig.load(None, outlier={"z_threshold": -1})
