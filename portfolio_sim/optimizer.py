"""
Monte Carlo Portfolio Optimization Module.

This module wires the simulation pipeline together:

    returns -> statistics -> sampled weights -> evaluated portfolios
            -> optimal / minimum variance / efficient frontier -> CML

It does not solve an optimization problem numerically. The "optimal"
portfolio is the best of the simulated population, and the efficient
frontier is approximated by filtering the simulated points.

Key Concepts:
    - Efficient Frontier: The set of portfolios offering the highest expected
      return for each level of risk.
    - Maximum Sharpe Ratio Portfolio: The portfolio with the highest risk-adjusted
      return (tangent to the Capital Market Line).
    - Minimum Variance Portfolio: The portfolio with the lowest risk.

Every stage is named. When a stage fails, the error is tagged with the
stage, logged and re-raised unchanged; no partial result is returned.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterator, List, Optional, Sequence

import numpy as np
import pandas as pd

from portfolio_sim.cml import CapitalMarketLine
from portfolio_sim.config import SimulationConfig
from portfolio_sim.data_loader import FinancialDataLoader
from portfolio_sim.estimator import MarketStatistics, StatisticsEstimator
from portfolio_sim.evaluator import PortfolioEvaluator, PortfolioSample, samples_to_frame
from portfolio_sim.exceptions import PortfolioSimError
from portfolio_sim.sampler import PortfolioSampler
from portfolio_sim.selector import PortfolioSelector

logger = logging.getLogger(__name__)

STAGE_CONFIGURATION = "configuration"
STAGE_DATA = "data retrieval"
STAGE_STATISTICS = "statistics estimation"
STAGE_SAMPLING = "portfolio sampling"
STAGE_EVALUATION = "portfolio evaluation"
STAGE_SELECTION = "portfolio selection"
STAGE_CML = "capital market line"


@contextmanager
def pipeline_stage(name: str) -> Iterator[None]:
    """
    Run a block as a named pipeline stage.

    Simulator errors raised inside the block get `stage` set to the name
    (unless an inner stage already set it) and propagate unchanged.
    """
    logger.info(f"Starting: {name}")
    try:
        yield
    except PortfolioSimError as e:
        if e.stage is None:
            e.stage = name
        logger.error(f"Stage '{e.stage}' failed: {e}")
        raise
    logger.info(f"Completed: {name}")


@dataclass(frozen=True, eq=False)
class SimulationResult:
    """
    Container for the outputs of a simulation run.

    Attributes:
        tickers: Asset identifiers, in weight order.
        statistics: Annualized market statistics the run was based on.
        risk_free_rate: Annualized risk-free rate.
        population: All simulated portfolios in generation order.
        optimal: Maximum Sharpe ratio portfolio.
        min_variance: Minimum risk portfolio.
        efficient_frontier: Frontier portfolios in ascending order of risk.
        cml: Capital Market Line through the optimal portfolio.
        config: Configuration the run used.
    """
    tickers: List[str]
    statistics: MarketStatistics
    risk_free_rate: float
    population: List[PortfolioSample]
    optimal: PortfolioSample
    min_variance: PortfolioSample
    efficient_frontier: List[PortfolioSample]
    cml: CapitalMarketLine
    config: SimulationConfig

    def stock_summary(self) -> pd.DataFrame:
        """Per-asset annualized mean return and standard deviation."""
        return self.statistics.summary_frame()

    def population_frame(self) -> pd.DataFrame:
        """Every simulated portfolio with Return, Risk, Sharpe and weights."""
        return samples_to_frame(self.population, self.tickers)

    def frontier_frame(self) -> pd.DataFrame:
        """Efficient frontier portfolios in ascending order of risk."""
        return samples_to_frame(self.efficient_frontier, self.tickers)

    def optimal_frame(self) -> pd.DataFrame:
        """Single-row table of the optimal portfolio."""
        return samples_to_frame([self.optimal], self.tickers)

    def min_variance_frame(self) -> pd.DataFrame:
        """Single-row table of the minimum variance portfolio."""
        return samples_to_frame([self.min_variance], self.tickers)

    @property
    def max_risk(self) -> float:
        return float(self.cml.risk_values[-1])


class MonteCarloOptimizer:
    """
    Runs the Monte Carlo mean-variance simulation on a table of returns.

    Attributes:
        returns: DataFrame of periodic returns (rows=periods, columns=tickers).
        risk_free_rate: Annualized risk-free rate.
        config: Simulation parameters (counts, seed, sampling method).

    Example:
        >>> optimizer = MonteCarloOptimizer(monthly_returns, risk_free_rate=0.02)
        >>> result = optimizer.run()
        >>> print(result.optimal.sharpe_ratio)
    """

    def __init__(
        self,
        returns: pd.DataFrame,
        risk_free_rate: Optional[float] = None,
        config: Optional[SimulationConfig] = None
    ) -> None:
        self.config: SimulationConfig = config if config is not None else SimulationConfig()
        self.returns: pd.DataFrame = returns
        self.risk_free_rate: float = (
            risk_free_rate if risk_free_rate is not None else self.config.risk_free_rate
        )

    def run(self) -> SimulationResult:
        """
        Execute the full pipeline.

        Returns:
            SimulationResult with every output of the run.

        Raises:
            PortfolioSimError: Any stage failure, tagged with the stage name.
        """
        with pipeline_stage(STAGE_CONFIGURATION):
            self.config.validate_counts()

        with pipeline_stage(STAGE_STATISTICS):
            statistics = StatisticsEstimator(self.config.periods_per_year).estimate(self.returns)

        with pipeline_stage(STAGE_SAMPLING):
            sampler = PortfolioSampler(
                statistics.n_assets,
                n_portfolios=self.config.portfolio_count(statistics.n_assets),
                rng=np.random.default_rng(self.config.seed),
                method=self.config.sampling_method,
            )
            weights = sampler.sample()

        with pipeline_stage(STAGE_EVALUATION):
            evaluator = PortfolioEvaluator(
                statistics.mean_returns, statistics.cov_matrix, self.risk_free_rate
            )
            population = evaluator.evaluate_all(weights)

        with pipeline_stage(STAGE_SELECTION):
            selector = PortfolioSelector(population)
            optimal = selector.find_optimal()
            min_variance = selector.find_min_variance()
            frontier = selector.compute_efficient_frontier()

        with pipeline_stage(STAGE_CML):
            cml = CapitalMarketLine.from_optimal(
                optimal,
                self.risk_free_rate,
                selector.max_risk,
                n_points=self.config.cml_points,
            )

        logger.info(
            f"Optimal portfolio: return={optimal.mean_return:.4f}, "
            f"risk={optimal.risk:.4f}, sharpe={optimal.sharpe_ratio:.4f}"
        )

        return SimulationResult(
            tickers=statistics.tickers,
            statistics=statistics,
            risk_free_rate=self.risk_free_rate,
            population=selector.population,
            optimal=optimal,
            min_variance=min_variance,
            efficient_frontier=frontier,
            cml=cml,
            config=self.config,
        )


def run_mean_variance(
    tickers: Sequence[str],
    start_date: datetime,
    end_date: datetime,
    risk_free_rate: float,
    config: Optional[SimulationConfig] = None,
    loader_factory: Callable[..., FinancialDataLoader] = FinancialDataLoader
) -> SimulationResult:
    """
    Download returns for the tickers and run the simulation end to end.

    Args:
        tickers: Asset identifiers.
        start_date: First date of the price history.
        end_date: Last date of the price history.
        risk_free_rate: Annualized risk-free rate.
        config: Optional simulation parameters; tickers, dates and rate
                given here take precedence.
        loader_factory: Callable building the data loader from
                (tickers, start_date, end_date).

    Returns:
        SimulationResult for the run.

    Raises:
        ConfigurationError: If the inputs are invalid.
        DataRetrievalError: If market data cannot be fetched.
        PortfolioSimError: If any core stage fails.
    """
    base = config if config is not None else SimulationConfig()
    run_config = SimulationConfig(
        tickers=list(tickers),
        start_date=start_date,
        end_date=end_date,
        risk_free_rate=risk_free_rate,
        periods_per_year=base.periods_per_year,
        simulations_per_asset=base.simulations_per_asset,
        n_portfolios=base.n_portfolios,
        seed=base.seed,
        sampling_method=base.sampling_method,
        cml_points=base.cml_points,
    )

    with pipeline_stage(STAGE_CONFIGURATION):
        run_config.validate()

    with pipeline_stage(STAGE_DATA):
        loader = loader_factory(run_config.tickers, run_config.start_date, run_config.end_date)
        loader.download_data()
        returns = loader.returns

    return MonteCarloOptimizer(returns, risk_free_rate, run_config).run()
