"""
Monte Carlo Portfolio Simulator - Source Package

This package estimates annualized asset statistics, simulates random
long-only portfolios, and selects the maximum Sharpe and minimum variance
portfolios, the simulated efficient frontier and the Capital Market Line.

Modules:
    - data_loader: Financial data acquisition and preprocessing
    - mathematics: Quantitative metrics and calculations
    - estimator: Annualized return and covariance estimation
    - sampler: Random portfolio weight generation
    - evaluator: Portfolio return, risk and Sharpe ratio
    - selector: Optimal, minimum variance and frontier selection
    - cml: Capital Market Line
    - optimizer: Simulation pipeline
    - visualizer: Interactive chart generation
"""

from portfolio_sim.cml import CapitalMarketLine
from portfolio_sim.config import SimulationConfig
from portfolio_sim.data_loader import FinancialDataLoader
from portfolio_sim.estimator import AssetStatistics, MarketStatistics, StatisticsEstimator
from portfolio_sim.evaluator import PortfolioEvaluator, PortfolioSample
from portfolio_sim.mathematics import QuantMetrics
from portfolio_sim.optimizer import MonteCarloOptimizer, SimulationResult, run_mean_variance
from portfolio_sim.sampler import PortfolioSampler
from portfolio_sim.selector import PortfolioSelector
from portfolio_sim.visualizer import DashboardCharts

__all__ = [
    "AssetStatistics",
    "CapitalMarketLine",
    "DashboardCharts",
    "FinancialDataLoader",
    "MarketStatistics",
    "MonteCarloOptimizer",
    "PortfolioEvaluator",
    "PortfolioSample",
    "PortfolioSampler",
    "PortfolioSelector",
    "QuantMetrics",
    "SimulationConfig",
    "SimulationResult",
    "StatisticsEstimator",
    "run_mean_variance",
]

__version__ = "1.0.0"
