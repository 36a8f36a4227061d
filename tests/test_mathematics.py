"""
Unit Tests for the QuantMetrics Module.

This module contains pytest tests to verify the mathematical correctness
of portfolio calculations. Tests use simple, known inputs to validate
formulas against hand-calculated expected values.

Run with: pytest tests/test_mathematics.py -v
"""

import numpy as np
import pandas as pd
import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from portfolio_sim.exceptions import DivisionByZeroError, NumericalError
from portfolio_sim.mathematics import QuantMetrics


class TestAnnualization:
    """Tests for scaling periodic statistics to a yearly basis."""

    def test_monthly_mean(self):
        """Monthly mean times 12."""
        result = QuantMetrics.annualize_mean(0.01, periods_per_year=12)

        # Expected: 0.01 * 12 = 0.12
        assert abs(result - 0.12) < 1e-12

    def test_monthly_volatility(self):
        """Monthly std times sqrt(12)."""
        result = QuantMetrics.annualize_volatility(0.05, periods_per_year=12)

        expected = 0.05 * np.sqrt(12)
        assert abs(result - expected) < 1e-12

    def test_vector_input(self):
        """Arrays are annualized element-wise."""
        result = QuantMetrics.annualize_mean(np.array([0.01, 0.02]), periods_per_year=12)

        assert np.allclose(result, [0.12, 0.24])


class TestPortfolioReturn:
    """Tests for portfolio return calculation."""

    def test_equal_weights(self):
        """50/50 split of 10% and 20% assets."""
        weights = np.array([0.5, 0.5])
        mean_returns = np.array([0.10, 0.20])

        result = QuantMetrics.portfolio_return(weights, mean_returns)

        # Expected: 0.5 * 0.10 + 0.5 * 0.20 = 0.15
        assert abs(result - 0.15) < 1e-12

    def test_single_asset(self):
        """100% allocation to single asset."""
        weights = np.array([1.0, 0.0])
        mean_returns = np.array([0.08, 0.12])

        result = QuantMetrics.portfolio_return(weights, mean_returns)

        assert abs(result - 0.08) < 1e-12


class TestPortfolioVolatility:
    """Tests for portfolio volatility calculation."""

    def test_uncorrelated_two_assets(self):
        """Known scenario: std devs 15% and 30%, zero correlation, 50/50."""
        weights = np.array([0.5, 0.5])
        cov_matrix = np.diag([0.15 ** 2, 0.30 ** 2])

        result = QuantMetrics.portfolio_volatility(weights, cov_matrix)

        # Expected: sqrt(0.25 * 0.0225 + 0.25 * 0.09) = 0.16770...
        expected = np.sqrt(0.5 ** 2 * 0.15 ** 2 + 0.5 ** 2 * 0.30 ** 2)
        assert abs(result - expected) < 1e-12
        assert abs(result - 0.1677) < 1e-4

    def test_diversification_reduces_risk(self):
        """Diversification should reduce portfolio volatility."""
        cov_matrix = np.array([
            [0.04, 0.0],
            [0.0, 0.04]
        ])

        single_vol = QuantMetrics.portfolio_volatility(np.array([1.0, 0.0]), cov_matrix)
        diversified_vol = QuantMetrics.portfolio_volatility(np.array([0.5, 0.5]), cov_matrix)

        assert diversified_vol < single_vol

    def test_perfect_correlation_no_diversification(self):
        """Perfectly correlated assets provide no diversification benefit."""
        var = 0.2 ** 2
        cov_matrix = np.array([
            [var, var],
            [var, var]
        ])

        single_vol = QuantMetrics.portfolio_volatility(np.array([1.0, 0.0]), cov_matrix)
        split_vol = QuantMetrics.portfolio_volatility(np.array([0.5, 0.5]), cov_matrix)

        assert abs(single_vol - split_vol) < 1e-12

    def test_negative_variance_raises(self):
        """A non-PSD covariance matrix can give negative variance."""
        cov_matrix = np.array([
            [1.0, 2.0],
            [2.0, 1.0]
        ])

        # w^T S w = 1 + 1 - 4 = -2
        with pytest.raises(NumericalError):
            QuantMetrics.portfolio_volatility(np.array([1.0, -1.0]), cov_matrix)

    def test_infinite_variance_raises(self):
        """An infinite covariance entry gives no usable volatility."""
        with pytest.raises(NumericalError):
            QuantMetrics.portfolio_volatility(np.array([1.0]), np.array([[np.inf]]))

    def test_nan_variance_raises(self):
        """NaN variance is rejected instead of slipping past the sign check."""
        with pytest.raises(NumericalError):
            QuantMetrics.portfolio_volatility(
                np.array([0.5, 0.5]),
                np.array([[np.nan, 0.0], [0.0, 0.04]])
            )

    def test_rounding_noise_clamped_to_zero(self):
        """Negative variance within tolerance is treated as zero."""
        cov_matrix = np.array([[-1e-15]])

        result = QuantMetrics.portfolio_volatility(np.array([1.0]), cov_matrix)

        assert result == 0.0


class TestSharpeRatio:
    """Tests for Sharpe ratio calculation."""

    def test_basic_sharpe(self):
        """Known scenario: return 15%, risk 16.77%, rf 2%."""
        risk = np.sqrt(0.5 ** 2 * 0.15 ** 2 + 0.5 ** 2 * 0.30 ** 2)

        result = QuantMetrics.sharpe_ratio(0.15, risk, 0.02)

        expected = (0.15 - 0.02) / risk
        assert abs(result - expected) < 1e-12
        assert abs(result - 0.775) < 1e-3

    def test_negative_sharpe(self):
        """Returns below risk-free rate give negative Sharpe."""
        result = QuantMetrics.sharpe_ratio(0.01, 0.15, 0.02)

        assert result < 0

    def test_zero_volatility_raises(self):
        """Zero volatility makes the ratio undefined."""
        with pytest.raises(DivisionByZeroError):
            QuantMetrics.sharpe_ratio(0.10, 0.0, 0.02)

    def test_zero_volatility_is_zero_division(self):
        """The error is also a ZeroDivisionError for generic handlers."""
        with pytest.raises(ZeroDivisionError):
            QuantMetrics.sharpe_ratio(0.10, 0.0, 0.02)


class TestCovarianceMatrix:
    """Tests for covariance matrix calculation."""

    def test_sample_covariance_annualized(self):
        """Matches numpy's N-1 covariance scaled by periods per year."""
        returns = pd.DataFrame({
            "A": [0.01, 0.02, 0.015, -0.01, 0.005],
            "B": [0.02, 0.01, 0.02, -0.005, 0.01]
        })

        result = QuantMetrics.calculate_covariance_matrix(returns, periods_per_year=12)

        expected = np.cov(returns.values, rowvar=False, ddof=1) * 12
        assert np.allclose(result, expected)

    def test_diagonal_is_annualized_variance(self):
        """Diagonal entries equal each asset's annualized variance."""
        rng = np.random.default_rng(0)
        returns = pd.DataFrame(rng.normal(0.01, 0.05, size=(60, 3)), columns=["A", "B", "C"])

        result = QuantMetrics.calculate_covariance_matrix(returns, periods_per_year=12)

        assert np.allclose(np.diag(result), returns.var(ddof=1).values * 12)

    def test_symmetric_matrix(self):
        """Covariance matrix should be symmetric."""
        rng = np.random.default_rng(1)
        returns = pd.DataFrame(rng.normal(size=(100, 3)), columns=["A", "B", "C"])

        result = QuantMetrics.calculate_covariance_matrix(returns)

        assert np.allclose(result, result.T)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
