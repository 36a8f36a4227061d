"""
Unit Tests for the Portfolio Selection Module.

Run with: pytest tests/test_selector.py -v
"""

import numpy as np
import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from portfolio_sim.evaluator import PortfolioEvaluator, PortfolioSample
from portfolio_sim.exceptions import EmptyPopulationError
from portfolio_sim.sampler import PortfolioSampler
from portfolio_sim.selector import PortfolioSelector

RISK_FREE = 0.02


def make_sample(index, mean_return, risk):
    """Build a sample with placeholder weights."""
    return PortfolioSample(
        index=index,
        weights=np.array([0.5, 0.5]),
        mean_return=mean_return,
        risk=risk,
        sharpe_ratio=(mean_return - RISK_FREE) / risk,
    )


@pytest.fixture
def simulated_population():
    """A realistic population of 600 portfolios over three assets."""
    mean_returns = np.array([0.08, 0.12, 0.15])
    cov_matrix = np.array([
        [0.04, 0.006, 0.002],
        [0.006, 0.09, 0.018],
        [0.002, 0.018, 0.16]
    ])
    weights = PortfolioSampler(3, n_portfolios=600, rng=np.random.default_rng(12)).sample()
    return PortfolioEvaluator(mean_returns, cov_matrix, RISK_FREE).evaluate_all(weights)


class TestEfficientFrontier:
    """Tests for the running-maximum frontier filter."""

    def test_three_point_scenario(self):
        """All three points survive, ordered by risk."""
        population = [
            make_sample(0, 0.12, 0.10),
            make_sample(1, 0.08, 0.05),
            make_sample(2, 0.12, 0.08),
        ]

        frontier = PortfolioSelector(population).compute_efficient_frontier()

        assert [s.risk for s in frontier] == [0.05, 0.08, 0.10]
        assert [s.index for s in frontier] == [1, 2, 0]

    def test_dominated_point_excluded(self):
        """A lower return at higher risk than the running maximum is dropped."""
        population = [
            make_sample(0, 0.12, 0.10),
            make_sample(1, 0.08, 0.05),
            make_sample(2, 0.12, 0.08),
            make_sample(3, 0.05, 0.12),
        ]

        frontier = PortfolioSelector(population).compute_efficient_frontier()

        assert 3 not in [s.index for s in frontier]
        assert len(frontier) == 3

    def test_equal_risk_ordered_by_index(self):
        """Samples with identical risk are visited in generation order."""
        population = [
            make_sample(2, 0.10, 0.07),
            make_sample(0, 0.10, 0.07),
        ]

        frontier = PortfolioSelector(population).compute_efficient_frontier()

        assert [s.index for s in frontier] == [0, 2]

    def test_minimum_risk_sample_always_included(self, simulated_population):
        selector = PortfolioSelector(simulated_population)

        frontier = selector.compute_efficient_frontier()

        assert frontier[0] is selector.find_min_variance()

    def test_returns_non_decreasing(self, simulated_population):
        frontier = PortfolioSelector(simulated_population).compute_efficient_frontier()

        risks = [s.risk for s in frontier]
        returns = [s.mean_return for s in frontier]
        assert risks == sorted(risks)
        assert all(b >= a for a, b in zip(returns, returns[1:]))

    def test_subset_of_population(self, simulated_population):
        frontier = PortfolioSelector(simulated_population).compute_efficient_frontier()

        population_ids = {id(s) for s in simulated_population}
        assert all(id(s) in population_ids for s in frontier)
        assert len(frontier) < len(simulated_population)


class TestOptimalPortfolio:
    """Tests for maximum Sharpe selection."""

    def test_highest_sharpe(self, simulated_population):
        optimal = PortfolioSelector(simulated_population).find_optimal()

        assert all(s.sharpe_ratio <= optimal.sharpe_ratio for s in simulated_population)

    def test_tie_goes_to_first_generated(self):
        """Equal Sharpe ratios resolve to the lowest index, whatever the input order."""
        population = [
            make_sample(3, 0.12, 0.10),
            make_sample(1, 0.12, 0.10),
            make_sample(2, 0.07, 0.10),
        ]

        optimal = PortfolioSelector(population).find_optimal()

        assert optimal.index == 1


class TestMinVariancePortfolio:
    """Tests for minimum risk selection."""

    def test_lowest_risk(self, simulated_population):
        min_var = PortfolioSelector(simulated_population).find_min_variance()

        assert all(s.risk >= min_var.risk for s in simulated_population)

    def test_tie_goes_to_first_generated(self):
        population = [
            make_sample(5, 0.09, 0.05),
            make_sample(4, 0.08, 0.05),
            make_sample(6, 0.12, 0.10),
        ]

        min_var = PortfolioSelector(population).find_min_variance()

        assert min_var.index == 4


class TestSelectorValidation:

    def test_empty_population(self):
        with pytest.raises(EmptyPopulationError):
            PortfolioSelector([])

    def test_population_ordered_by_index(self):
        population = [make_sample(2, 0.1, 0.1), make_sample(0, 0.1, 0.2)]

        selector = PortfolioSelector(population)

        assert [s.index for s in selector.population] == [0, 2]
        assert selector.max_risk == 0.2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
