"""
Unit tests for the log-gamma/log-beta approximations and the Dirichlet
log-likelihood metric.
"""

import pytest
import numpy as np
from numpy.testing import assert_allclose

from fast_distances.core.exceptions import DimensionMismatchError
from fast_distances.distance import (
    approx_log_gamma,
    log_single_beta,
    log_beta,
    ll_dirichlet,
)


class TestApproxLogGamma:
    """Tests for the Stirling approximation."""

    def test_exact_zero_at_one(self):
        assert approx_log_gamma(1.0) == 0.0

    @pytest.mark.parametrize(
        "x, expected",
        [
            (2.0, 0.00032597071125731875),
            (3.0, 0.6932470326527248),
            (5.0, 3.1780758058247907),
            (10.0, 12.801830249981444),
            (0.5, 0.5856051998713393),
        ],
    )
    def test_reference_values(self, x, expected):
        assert_allclose(approx_log_gamma(x), expected, rtol=1e-9)

    def test_close_to_true_log_gamma(self):
        """log(4!) and log(9!)."""
        assert_allclose(approx_log_gamma(5.0), np.log(24.0), rtol=1e-4)
        assert_allclose(approx_log_gamma(10.0), np.log(362880.0), rtol=1e-6)

    def test_float32(self):
        assert approx_log_gamma(np.float32(5.0)).dtype == np.float32


class TestLogSingleBeta:
    """Tests for the large-x approximation of log(Beta(x, x))."""

    @pytest.mark.parametrize(
        "x, expected",
        [
            (1.0, 0.004217762364754796),
            (2.0, -1.7911501890351085),
            (3.0, -3.401010437542415),
        ],
    )
    def test_reference_values(self, x, expected):
        assert_allclose(log_single_beta(x), expected, rtol=1e-9)


class TestLogBeta:
    """Tests for the two-regime log(Beta(x, y))."""

    def test_one_two(self):
        assert_allclose(log_beta(1.0, 2.0), -0.6931471805599453, rtol=1e-12)

    def test_one_two_float32(self):
        result = log_beta(np.float32(1.0), np.float32(2.0))
        assert result.dtype == np.float32
        assert_allclose(result, np.float32(-0.6931472), rtol=1e-6)

    @pytest.mark.parametrize(
        "x, y, beta",
        [
            (2.0, 3.0, 1.0 / 12.0),
            (3.0, 4.0, 1.0 / 60.0),
            (1.0, 4.5, 1.0 / 4.5),
        ],
    )
    def test_exact_series(self, x, y, beta):
        """With an integer smaller argument the series is exact."""
        assert_allclose(log_beta(x, y), np.log(beta), rtol=1e-12)

    def test_symmetry(self):
        assert log_beta(2.0, 3.0) == log_beta(3.0, 2.0)
        assert log_beta(10.0, 7.0) == log_beta(7.0, 10.0)

    def test_loop_count_truncates(self):
        """a = 2.7 runs the same single loop step as a = 2."""
        expected = -np.log(3.0) + (np.log(1.0) - np.log(4.0))
        assert_allclose(log_beta(2.7, 3.0), expected, rtol=1e-12)

    def test_asymptotic_path(self):
        result = log_beta(10.0, 10.0)
        assert np.isfinite(result)
        expected = 2 * log_single_beta(10.0) - log_single_beta(20.0)
        assert_allclose(result, expected, rtol=1e-12)

    def test_regime_boundary(self):
        """b == 5 already uses the asymptotic expression."""
        expected = log_single_beta(1.0) + log_single_beta(5.0) - log_single_beta(6.0)
        assert_allclose(log_beta(1.0, 5.0), expected, rtol=1e-12)


class TestDirichlet:
    """Tests for the Dirichlet log-likelihood metric."""

    def test_reference_value(self):
        result = ll_dirichlet([1.0, 2.0, 3.0, 4.0], [5.0, 6.0, 7.0, 8.0])
        assert_allclose(result, 0.36789301898248805, rtol=1e-10)

    def test_reference_value_float32(self):
        data1 = np.array([1.0, 2.0, 3.0, 4.0], dtype=np.float32)
        data2 = np.array([5.0, 6.0, 7.0, 8.0], dtype=np.float32)
        result = ll_dirichlet(data1, data2)
        assert result.dtype == np.float32
        assert_allclose(result, 0.36789307, rtol=1e-5)

    def test_one_sided_counts(self):
        """A coordinate positive in one vector only feeds that vector's denominator."""
        data1 = [2.0, 0.0, 3.0]
        data2 = [1.0, 4.0, 0.0]

        log_b = log_beta(2.0, 1.0)
        self1 = log_single_beta(2.0) + log_single_beta(3.0)
        self2 = log_single_beta(1.0) + log_single_beta(4.0)
        n = 5.0
        with np.errstate(invalid="ignore"):
            expected = np.sqrt(
                1.0 / n * (log_b - log_beta(n, n) - (self2 - log_single_beta(n)))
                + 1.0 / n * (log_b - log_beta(n, n) - (self1 - log_single_beta(n)))
            )

        assert_allclose(ll_dirichlet(data1, data2), expected, rtol=1e-12)

    def test_threshold(self):
        """Counts at or below 0.9 are treated as absent."""
        data1 = np.array([2.0, 0.5, 3.0])
        data2 = np.array([1.0, 0.9, 4.0])
        with_small = ll_dirichlet(data1, data2)

        log_b = log_beta(2.0, 1.0) + log_beta(3.0, 4.0)
        self1 = log_single_beta(2.0) + log_single_beta(3.0)
        self2 = log_single_beta(1.0) + log_single_beta(4.0)
        n1, n2 = np.sum(data1), np.sum(data2)
        with np.errstate(invalid="ignore"):
            expected = np.sqrt(
                1.0 / n2 * (log_b - log_beta(n1, n2) - (self2 - log_single_beta(n2)))
                + 1.0 / n1 * (log_b - log_beta(n2, n1) - (self1 - log_single_beta(n1)))
            )
        assert_allclose(with_small, expected, rtol=1e-12)

    def test_length_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            ll_dirichlet([1.0, 2.0], [1.0, 2.0, 3.0])
