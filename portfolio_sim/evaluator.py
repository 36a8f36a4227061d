"""
Portfolio Evaluation Module.

Computes the mean return, risk and Sharpe ratio of each simulated weight
vector and wraps them, together with the weights and the generation index,
in an immutable PortfolioSample record.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from portfolio_sim.exceptions import ConfigurationError
from portfolio_sim.mathematics import QuantMetrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class PortfolioSample:
    """
    One simulated portfolio.

    Attributes:
        index: Position in generation order.
        weights: Read-only weight vector (non-negative, sums to 1).
        mean_return: Annualized expected return.
        risk: Annualized standard deviation.
        sharpe_ratio: (mean_return - risk_free_rate) / risk.
    """
    index: int
    weights: np.ndarray
    mean_return: float
    risk: float
    sharpe_ratio: float

    def weights_dict(self, tickers: Sequence[str]) -> Dict[str, float]:
        """Map each ticker to its weight."""
        return {ticker: float(w) for ticker, w in zip(tickers, self.weights)}

    def to_record(self, tickers: Sequence[str]) -> Dict[str, float]:
        """Flatten into a row with Return, Risk, Sharpe and one column per ticker."""
        record = {
            "Return": self.mean_return,
            "Risk": self.risk,
            "Sharpe": self.sharpe_ratio,
        }
        record.update(self.weights_dict(tickers))
        return record


def samples_to_frame(
    samples: Sequence[PortfolioSample],
    tickers: Sequence[str]
) -> pd.DataFrame:
    """
    Tabulate portfolio samples.

    Args:
        samples: Portfolio samples in the order they should appear.
        tickers: Asset identifiers matching the weight vectors.

    Returns:
        DataFrame indexed by generation index with columns
        Return, Risk, Sharpe and one weight column per ticker.
    """
    columns = ["Return", "Risk", "Sharpe"] + list(tickers)
    frame = pd.DataFrame(
        [sample.to_record(tickers) for sample in samples],
        index=pd.Index([sample.index for sample in samples], name="Portfolio"),
        columns=columns,
    )
    return frame


class PortfolioEvaluator:
    """
    Evaluates weight vectors against annualized market statistics.

    Attributes:
        mean_returns: Annualized mean return vector (n,).
        cov_matrix: Annualized covariance matrix (n x n).
        risk_free_rate: Annualized risk-free rate.
    """

    def __init__(
        self,
        mean_returns: np.ndarray,
        cov_matrix: np.ndarray,
        risk_free_rate: float
    ) -> None:
        self.mean_returns: np.ndarray = np.asarray(mean_returns, dtype=float).flatten()
        self.cov_matrix: np.ndarray = np.asarray(cov_matrix, dtype=float)
        self.risk_free_rate: float = risk_free_rate

        n_assets = len(self.mean_returns)
        if self.cov_matrix.shape != (n_assets, n_assets):
            raise ConfigurationError(
                f"Covariance matrix shape {self.cov_matrix.shape} doesn't match "
                f"number of assets {n_assets}"
            )

    @property
    def n_assets(self) -> int:
        return len(self.mean_returns)

    def evaluate(self, weights: np.ndarray, index: int = 0) -> PortfolioSample:
        """
        Evaluate a single weight vector.

        Args:
            weights: Portfolio weights (length n).
            index: Generation index to record on the sample.

        Returns:
            PortfolioSample with return, risk and Sharpe ratio.

        Raises:
            NumericalError: If the portfolio variance is negative beyond tolerance.
            DivisionByZeroError: If the portfolio risk is exactly zero.
        """
        weights = np.array(weights, dtype=float).flatten()
        if weights.shape != self.mean_returns.shape:
            raise ConfigurationError(
                f"Weight vector length {weights.size} doesn't match "
                f"number of assets {self.n_assets}"
            )
        weights.setflags(write=False)

        mean_return = QuantMetrics.portfolio_return(weights, self.mean_returns)
        risk = QuantMetrics.portfolio_volatility(weights, self.cov_matrix)
        sharpe = QuantMetrics.sharpe_ratio(mean_return, risk, self.risk_free_rate)

        return PortfolioSample(
            index=index,
            weights=weights,
            mean_return=mean_return,
            risk=risk,
            sharpe_ratio=sharpe,
        )

    def evaluate_all(self, weights_matrix: np.ndarray) -> List[PortfolioSample]:
        """
        Evaluate every row of a weight matrix.

        Args:
            weights_matrix: Array of shape (m, n); row i gets generation index i.

        Returns:
            List of m PortfolioSample records in generation order.
        """
        population = [
            self.evaluate(weights, index=i)
            for i, weights in enumerate(np.atleast_2d(weights_matrix))
        ]
        logger.info(f"Evaluated {len(population)} portfolios")
        return population
