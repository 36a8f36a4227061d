"""
Capital Market Line Module.

The Capital Market Line (CML) starts at the risk-free rate and passes
through the optimal (maximum Sharpe) portfolio:

    E[R] = R_f + SR_opt * σ

where SR_opt = (R_opt - R_f) / σ_opt. The line is sampled at evenly spaced
risk values from 0 to the largest risk in the simulated population.
"""

from dataclasses import dataclass

import numpy as np
import pandas as pd

from portfolio_sim.config import NUM_CML_POINTS
from portfolio_sim.evaluator import PortfolioSample
from portfolio_sim.exceptions import ConfigurationError
from portfolio_sim.mathematics import QuantMetrics


@dataclass(frozen=True, eq=False)
class CapitalMarketLine:
    """
    Sampled Capital Market Line.

    Attributes:
        risk_free_rate: Intercept of the line.
        slope: Sharpe ratio of the optimal portfolio.
        risk_values: Evenly spaced risk values from 0 to the maximum risk.
        line_returns: Line return at each risk value.
    """
    risk_free_rate: float
    slope: float
    risk_values: np.ndarray
    line_returns: np.ndarray

    @classmethod
    def from_optimal(
        cls,
        optimal: PortfolioSample,
        risk_free_rate: float,
        max_risk: float,
        n_points: int = NUM_CML_POINTS
    ) -> "CapitalMarketLine":
        """
        Build the CML through the optimal portfolio.

        Args:
            optimal: Maximum Sharpe portfolio.
            risk_free_rate: Annualized risk-free rate.
            max_risk: Largest risk in the population (end of the sampled range).
            n_points: Number of sample points, both ends included.

        Returns:
            CapitalMarketLine.

        Raises:
            DivisionByZeroError: If the optimal portfolio has zero risk.
            ConfigurationError: If fewer than two points are requested.
        """
        if n_points < 2:
            raise ConfigurationError("The CML needs at least two sample points.")

        slope = QuantMetrics.sharpe_ratio(optimal.mean_return, optimal.risk, risk_free_rate)
        risk_values = np.linspace(0.0, max_risk, n_points)
        line_returns = risk_free_rate + slope * risk_values

        return cls(
            risk_free_rate=risk_free_rate,
            slope=slope,
            risk_values=risk_values,
            line_returns=line_returns,
        )

    def expected_return(self, risk: float) -> float:
        """Return on the line at the given risk."""
        return self.risk_free_rate + self.slope * risk

    def to_frame(self) -> pd.DataFrame:
        """Tabulate the sampled points with columns Risk and Return."""
        return pd.DataFrame({"Risk": self.risk_values, "Return": self.line_returns})
