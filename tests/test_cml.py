"""
Unit Tests for the Capital Market Line Module.

Run with: pytest tests/test_cml.py -v
"""

import numpy as np
import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from portfolio_sim.cml import CapitalMarketLine
from portfolio_sim.evaluator import PortfolioSample
from portfolio_sim.exceptions import ConfigurationError, DivisionByZeroError


@pytest.fixture
def optimal():
    """Return 12%, risk 10%, Sharpe 1.0 at rf 2%."""
    return PortfolioSample(
        index=0,
        weights=np.array([0.4, 0.6]),
        mean_return=0.12,
        risk=0.10,
        sharpe_ratio=1.0,
    )


class TestCapitalMarketLine:
    """Tests for the line through the optimal portfolio."""

    def test_slope_is_optimal_sharpe(self, optimal):
        cml = CapitalMarketLine.from_optimal(optimal, 0.02, max_risk=0.25)

        assert abs(cml.slope - 1.0) < 1e-12

    def test_sampled_points(self, optimal):
        """100 points from zero to the maximum risk."""
        cml = CapitalMarketLine.from_optimal(optimal, 0.02, max_risk=0.25)

        assert len(cml.risk_values) == 100
        assert cml.risk_values[0] == 0.0
        assert cml.risk_values[-1] == 0.25
        assert cml.line_returns[0] == 0.02
        assert abs(cml.line_returns[-1] - 0.27) < 1e-12

    def test_passes_through_optimal(self, optimal):
        cml = CapitalMarketLine.from_optimal(optimal, 0.02, max_risk=0.25)

        assert abs(cml.expected_return(optimal.risk) - optimal.mean_return) < 1e-12

    def test_custom_point_count(self, optimal):
        cml = CapitalMarketLine.from_optimal(optimal, 0.02, max_risk=0.2, n_points=5)

        assert np.allclose(cml.risk_values, [0.0, 0.05, 0.10, 0.15, 0.20])

    def test_to_frame(self, optimal):
        frame = CapitalMarketLine.from_optimal(optimal, 0.02, max_risk=0.2).to_frame()

        assert list(frame.columns) == ["Risk", "Return"]
        assert len(frame) == 100

    def test_zero_risk_optimal_raises(self):
        riskless = PortfolioSample(
            index=0, weights=np.array([1.0]), mean_return=0.05, risk=0.0, sharpe_ratio=0.0
        )

        with pytest.raises(DivisionByZeroError):
            CapitalMarketLine.from_optimal(riskless, 0.02, max_risk=0.1)

    def test_too_few_points(self, optimal):
        with pytest.raises(ConfigurationError):
            CapitalMarketLine.from_optimal(optimal, 0.02, max_risk=0.2, n_points=1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
