"""
Quantitative Metrics Module for the Portfolio Simulator.

This module provides the mathematical primitives used in Modern Portfolio
Theory (MPT): annualization of periodic statistics, portfolio return,
portfolio volatility and the Sharpe ratio.

Mathematical Background:
------------------------
Modern Portfolio Theory, developed by Harry Markowitz in 1952, is based on the idea
that investors can construct portfolios to maximize expected return for a given level
of risk. The key insight is that an asset's risk and return should not be assessed
alone, but by how it contributes to a portfolio's overall risk and return.

Key Formulas:
    - Annualized Mean: μ_annual = μ_period * P
    - Annualized Volatility: σ_annual = σ_period * √P
    - Portfolio Return: R_p = Σ(w_i * r_i)
    - Portfolio Volatility: σ_p = √(w^T * Σ * w)
    - Sharpe Ratio: SR = (R_p - R_f) / σ_p

Zero volatility raises DivisionByZeroError; negative or non-finite variance
raises NumericalError.
"""

import numpy as np
import pandas as pd

from portfolio_sim.config import NEGATIVE_VARIANCE_TOLERANCE, PERIODS_PER_YEAR
from portfolio_sim.exceptions import DivisionByZeroError, NumericalError


class QuantMetrics:
    """
    A collection of static methods for calculating quantitative financial metrics.

    All inputs are expected to be annualized already, except for the
    annualize_* helpers which perform the conversion.

    All methods are static to allow for easy testing and standalone usage.
    """

    @staticmethod
    def annualize_mean(
        periodic_mean,
        periods_per_year: int = PERIODS_PER_YEAR
    ):
        """
        Scale a periodic mean return to a yearly basis.

        Formula: μ_annual = μ_period * P

        Args:
            periodic_mean: Mean return per period (scalar or array).
            periods_per_year: Number of periods per year (default: 12).

        Returns:
            Annualized mean return.
        """
        return periodic_mean * periods_per_year

    @staticmethod
    def annualize_volatility(
        periodic_std,
        periods_per_year: int = PERIODS_PER_YEAR
    ):
        """
        Scale a periodic standard deviation to a yearly basis.

        Formula: σ_annual = σ_period * √P

        Args:
            periodic_std: Standard deviation per period (scalar or array).
            periods_per_year: Number of periods per year (default: 12).

        Returns:
            Annualized standard deviation.
        """
        return periodic_std * np.sqrt(periods_per_year)

    @staticmethod
    def calculate_covariance_matrix(
        returns: pd.DataFrame,
        periods_per_year: int = PERIODS_PER_YEAR
    ) -> np.ndarray:
        """
        Calculate the annualized sample covariance matrix of returns.

        Uses the N-1 denominator. The diagonal equals each asset's annualized
        sample variance.

        Args:
            returns: DataFrame of periodic returns (rows=periods, columns=assets).
            periods_per_year: Number of periods per year.

        Returns:
            Annualized covariance matrix as numpy array (n x n).
        """
        return returns.cov(ddof=1).values * periods_per_year

    @staticmethod
    def portfolio_return(
        weights: np.ndarray,
        mean_returns: np.ndarray
    ) -> float:
        """
        Calculate the expected portfolio return.

        Formula: R_p = Σ(w_i * r_i)

        Args:
            weights: Array of portfolio weights (must sum to 1).
            mean_returns: Array of annualized mean returns for each asset.

        Returns:
            Annualized expected portfolio return as a decimal (e.g., 0.12 = 12%).

        Example:
            >>> QuantMetrics.portfolio_return(np.array([0.5, 0.5]), np.array([0.10, 0.20]))
            0.15
        """
        return float(np.dot(weights, mean_returns))

    @staticmethod
    def portfolio_variance(
        weights: np.ndarray,
        cov_matrix: np.ndarray
    ) -> float:
        """
        Calculate the portfolio variance using the quadratic form w^T * Σ * w.

        Args:
            weights: Array of portfolio weights.
            cov_matrix: Annualized covariance matrix (n x n).

        Returns:
            Annualized portfolio variance.
        """
        return float(np.dot(weights.T, np.dot(cov_matrix, weights)))

    @staticmethod
    def portfolio_volatility(
        weights: np.ndarray,
        cov_matrix: np.ndarray,
        tolerance: float = NEGATIVE_VARIANCE_TOLERANCE
    ) -> float:
        """
        Calculate the portfolio volatility (standard deviation).

        Portfolio volatility accounts for the correlations between assets,
        which is why diversification can reduce overall portfolio risk.

        Formula: σ_p = √(w^T * Σ * w)

        Args:
            weights: Array of portfolio weights (must sum to 1).
            cov_matrix: Annualized covariance matrix (n x n).
            tolerance: Largest negative variance treated as rounding noise.

        Returns:
            Annualized portfolio volatility as a decimal (e.g., 0.15 = 15%).

        Raises:
            NumericalError: If the variance is negative beyond tolerance,
                which means the covariance matrix is not positive semi-definite,
                or is not finite.
        """
        variance = QuantMetrics.portfolio_variance(weights, cov_matrix)
        if not np.isfinite(variance):
            raise NumericalError(f"Non-finite portfolio variance {variance}.")
        if variance < -tolerance:
            raise NumericalError(
                f"Negative portfolio variance {variance:.3e}; "
                "covariance matrix is not positive semi-definite."
            )
        return float(np.sqrt(max(variance, 0.0)))

    @staticmethod
    def sharpe_ratio(
        portfolio_return: float,
        portfolio_volatility: float,
        risk_free_rate: float
    ) -> float:
        """
        Calculate the Sharpe Ratio of a portfolio.

        The Sharpe Ratio measures risk-adjusted return, showing how much
        excess return (above risk-free rate) is earned per unit of volatility.

        Formula: SR = (R_p - R_f) / σ_p

        Args:
            portfolio_return: Annualized portfolio return (decimal).
            portfolio_volatility: Annualized portfolio volatility (decimal).
            risk_free_rate: Annualized risk-free rate (decimal).

        Returns:
            Sharpe Ratio (dimensionless).

        Raises:
            DivisionByZeroError: If volatility is exactly zero.
        """
        if portfolio_volatility == 0.0:
            raise DivisionByZeroError(
                "Portfolio volatility is zero; Sharpe ratio is undefined."
            )
        return (portfolio_return - risk_free_rate) / portfolio_volatility
