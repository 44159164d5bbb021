"""Tests for order-statistic helpers."""

import pytest

from theme_mcp.utils.stats import clamp, mean, median, percentile, top_mean


class TestMedian:
    """Tests for median()."""

    def test_odd(self) -> None:
        assert median([3.0, 1.0, 2.0]) == 2.0

    def test_even(self) -> None:
        assert median([1.0, 2.0, 3.0, 4.0]) == 2.5

    def test_empty(self) -> None:
        assert median([]) == 0.0


class TestPercentile:
    """Tests for percentile()."""

    def test_exact_index(self) -> None:
        values = [-5.0, -2.0, 3.0, 8.0, 10.0, 20.0]
        assert percentile(values, 0.8) == 10.0
        assert percentile(values, 0.2) == -2.0

    def test_interpolates(self) -> None:
        assert percentile([0.0, 10.0], 0.25) == pytest.approx(2.5)

    def test_bounds(self) -> None:
        values = [1.0, 2.0, 3.0]
        assert percentile(values, 0.0) == 1.0
        assert percentile(values, 1.0) == 3.0

    def test_empty(self) -> None:
        assert percentile([], 0.5) == 0.0


class TestMeans:
    """Tests for mean(), top_mean() and clamp()."""

    def test_mean(self) -> None:
        assert mean([1.0, 2.0, 3.0]) == 2.0
        assert mean([]) == 0.0

    def test_top_mean(self) -> None:
        assert top_mean([1.0, 5.0, 3.0], 2) == 4.0

    def test_top_mean_count_clamped(self) -> None:
        assert top_mean([1.0, 5.0], 10) == 3.0
        assert top_mean([1.0, 5.0], 0) == 5.0

    def test_clamp(self) -> None:
        assert clamp(120.0, 0, 100) == 100
        assert clamp(-3.0, 0, 100) == 0
        assert clamp(42.0, 0, 100) == 42.0
