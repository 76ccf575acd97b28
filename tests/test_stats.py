"""Tests for shared numeric helpers."""

import math

import pytest

from spendsight.analyzers.stats import euclidean_distance, mean, sample_std_dev, sample_variance


class TestStats:
    def test_mean(self) -> None:
        assert mean([100, 102, 98, 101, 99]) == 100.0

    def test_mean_empty(self) -> None:
        assert mean([]) == 0.0

    def test_sample_variance_uses_n_minus_one(self) -> None:
        # squared deviations sum to 10 over 5 values
        assert sample_variance([100, 102, 98, 101, 99]) == pytest.approx(2.5)

    def test_sample_std_dev(self) -> None:
        assert sample_std_dev([100, 102, 98, 101, 99]) == pytest.approx(math.sqrt(2.5))

    def test_single_value_has_no_spread(self) -> None:
        assert sample_variance([42.0]) == 0.0
        assert sample_std_dev([42.0]) == 0.0

    @pytest.mark.parametrize("value", [0.1, 0.3, 0.7, 19.99])
    def test_identical_inexact_values_have_no_spread(self, value: float) -> None:
        values = [value] * 7
        assert mean(values) == value
        assert sample_variance(values) == 0.0
        assert sample_std_dev(values) == 0.0

    def test_euclidean_distance(self) -> None:
        assert euclidean_distance((0.0, 0.0), (3.0, 4.0)) == 5.0
        assert euclidean_distance((7.0, 7.0), (7.0, 7.0)) == 0.0
