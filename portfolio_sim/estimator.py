"""
Statistics Estimation Module.

Turns a table of aligned periodic returns into the annualized inputs of the
simulation: a mean return vector, a covariance matrix and a per-asset
summary of mean return and standard deviation.

Sample (N-1) statistics are used throughout, following the usual financial
convention.
"""

import logging
from dataclasses import dataclass
from typing import List, Mapping, Sequence

import numpy as np
import pandas as pd

from portfolio_sim.config import PERIODS_PER_YEAR
from portfolio_sim.exceptions import ConfigurationError, InsufficientDataError
from portfolio_sim.mathematics import QuantMetrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetStatistics:
    """
    Annualized risk/return figures of a single asset.

    Attributes:
        ticker: Asset identifier.
        mean_return: Annualized mean return.
        volatility: Annualized standard deviation.
    """
    ticker: str
    mean_return: float
    volatility: float


@dataclass(frozen=True, eq=False)
class MarketStatistics:
    """
    Annualized statistics of an asset universe.

    Attributes:
        tickers: Asset identifiers, in column order.
        mean_returns: Annualized mean return vector (n,).
        volatilities: Annualized standard deviations (n,).
        cov_matrix: Annualized covariance matrix (n x n).
        periods_per_year: Annualization factor used.
        n_periods: Number of return observations the estimates are based on.
    """
    tickers: List[str]
    mean_returns: np.ndarray
    volatilities: np.ndarray
    cov_matrix: np.ndarray
    periods_per_year: int
    n_periods: int

    @property
    def n_assets(self) -> int:
        return len(self.tickers)

    @property
    def asset_statistics(self) -> List[AssetStatistics]:
        return [
            AssetStatistics(ticker, float(mean), float(vol))
            for ticker, mean, vol in zip(self.tickers, self.mean_returns, self.volatilities)
        ]

    def summary_frame(self) -> pd.DataFrame:
        """
        Build the stock summary table.

        Returns:
            DataFrame with columns Ticker, Avg Annual Return, Annual Std Dev.
        """
        return pd.DataFrame({
            "Ticker": self.tickers,
            "Avg Annual Return": self.mean_returns,
            "Annual Std Dev": self.volatilities,
        })

    def correlation_frame(self) -> pd.DataFrame:
        """Correlation matrix derived from the covariance matrix, labelled by ticker."""
        std = np.sqrt(np.diag(self.cov_matrix))
        corr = self.cov_matrix / np.outer(std, std)
        return pd.DataFrame(corr, index=self.tickers, columns=self.tickers)


class StatisticsEstimator:
    """
    Estimates annualized asset statistics from periodic returns.

    Example:
        >>> estimator = StatisticsEstimator(periods_per_year=12)
        >>> stats = estimator.estimate(monthly_returns)
        >>> stats.summary_frame()
    """

    def __init__(self, periods_per_year: int = PERIODS_PER_YEAR) -> None:
        if periods_per_year <= 0:
            raise ConfigurationError("periods_per_year must be a positive integer.")
        self.periods_per_year: int = periods_per_year

    def estimate(self, returns: pd.DataFrame) -> MarketStatistics:
        """
        Estimate annualized statistics from a table of periodic returns.

        Args:
            returns: DataFrame of periodic returns (rows=periods, columns=tickers).
                     All columns must share the index and contain no gaps.

        Returns:
            MarketStatistics for the universe.

        Raises:
            InsufficientDataError: If the table is empty, has gaps or infinite
                values, or holds fewer than two periods.
        """
        self._check_returns(returns)

        periodic_mean = returns.mean().values

        mean_returns = QuantMetrics.annualize_mean(periodic_mean, self.periods_per_year)
        cov_matrix = QuantMetrics.calculate_covariance_matrix(returns, self.periods_per_year)
        # Same square root as portfolio_volatility, so a one-asset portfolio
        # carries exactly its asset's volatility
        volatilities = np.sqrt(np.diag(cov_matrix))

        logger.info(
            f"Estimated statistics for {returns.shape[1]} assets "
            f"from {returns.shape[0]} periods"
        )

        return MarketStatistics(
            tickers=[str(c) for c in returns.columns],
            mean_returns=mean_returns,
            volatilities=volatilities,
            cov_matrix=cov_matrix,
            periods_per_year=self.periods_per_year,
            n_periods=returns.shape[0],
        )

    def estimate_from_series(
        self,
        series: Mapping[str, Sequence[float]]
    ) -> MarketStatistics:
        """
        Estimate statistics from per-asset sequences aligned by position.

        Args:
            series: Mapping of ticker to its ordered periodic returns.

        Returns:
            MarketStatistics for the universe.

        Raises:
            InsufficientDataError: If any series is empty or lengths differ.
        """
        if not series:
            raise InsufficientDataError("No return series supplied.")

        lengths = {ticker: len(values) for ticker, values in series.items()}
        empty = [ticker for ticker, length in lengths.items() if length == 0]
        if empty:
            raise InsufficientDataError(f"Empty return series for: {empty}")
        if len(set(lengths.values())) > 1:
            raise InsufficientDataError(f"Return series lengths differ: {lengths}")

        frame = pd.DataFrame({ticker: list(values) for ticker, values in series.items()})
        return self.estimate(frame)

    @staticmethod
    def _check_returns(returns: pd.DataFrame) -> None:
        if returns.shape[1] == 0:
            raise InsufficientDataError("Return table has no assets.")
        if returns.shape[0] == 0:
            raise InsufficientDataError("Return table has no periods.")

        gaps = returns.columns[returns.isna().any()].tolist()
        if gaps:
            raise InsufficientDataError(
                f"Return series are not aligned; missing values for: {gaps}"
            )
        finite = np.isfinite(returns.to_numpy(dtype=float)).all(axis=0)
        non_finite = returns.columns[~finite].tolist()
        if non_finite:
            raise InsufficientDataError(f"Non-finite returns for: {non_finite}")
        if returns.shape[0] < 2:
            raise InsufficientDataError(
                "At least two periods are required to estimate sample variance."
            )
