"""
Portfolio Selection Module.

Picks the distinguished portfolios of a simulated population and extracts
its efficient frontier.

Key Concepts:
    - Optimal Portfolio: highest Sharpe ratio in the population.
    - Minimum Variance Portfolio: lowest risk in the population.
    - Efficient Frontier: after sorting by risk, the portfolios whose return
      is a running maximum. This approximates the analytical frontier with
      simulated points; it is not globally Pareto-optimal.

Ties are always resolved by generation index, so results do not depend on
the order in which samples were produced.
"""

import logging
from typing import List, Sequence

from portfolio_sim.evaluator import PortfolioSample
from portfolio_sim.exceptions import EmptyPopulationError

logger = logging.getLogger(__name__)


class PortfolioSelector:
    """
    Selects optimal, minimum variance and frontier portfolios.

    Attributes:
        population: Portfolio samples ordered by generation index.

    Example:
        >>> selector = PortfolioSelector(population)
        >>> optimal = selector.find_optimal()
        >>> frontier = selector.compute_efficient_frontier()
    """

    def __init__(self, population: Sequence[PortfolioSample]) -> None:
        if len(population) == 0:
            raise EmptyPopulationError("Cannot select from an empty population.")
        self.population: List[PortfolioSample] = sorted(population, key=lambda s: s.index)

    def find_optimal(self) -> PortfolioSample:
        """
        Find the portfolio with the maximum Sharpe ratio.

        Returns:
            The first sample (in generation order) with the highest Sharpe ratio.
        """
        # max() keeps the first of equal keys
        return max(self.population, key=lambda s: s.sharpe_ratio)

    def find_min_variance(self) -> PortfolioSample:
        """
        Find the portfolio with the minimum risk.

        Returns:
            The first sample (in generation order) with the lowest risk.
        """
        return min(self.population, key=lambda s: s.risk)

    def compute_efficient_frontier(self) -> List[PortfolioSample]:
        """
        Extract the simulated efficient frontier.

        Sorts by risk (ties by generation index), then keeps each sample
        whose return equals the running maximum of returns seen so far.

        Returns:
            Frontier samples in ascending order of risk; their returns are
            non-decreasing.
        """
        by_risk = sorted(self.population, key=lambda s: (s.risk, s.index))

        frontier: List[PortfolioSample] = []
        running_max = float("-inf")
        for sample in by_risk:
            if sample.mean_return >= running_max:
                running_max = sample.mean_return
                frontier.append(sample)

        logger.info(
            f"Efficient frontier holds {len(frontier)} of {len(self.population)} portfolios"
        )
        return frontier

    @property
    def max_risk(self) -> float:
        """Largest risk in the population."""
        return max(s.risk for s in self.population)
