"""
Central configuration for the Monte Carlo Portfolio Simulator.

This module contains all configurable parameters including default tickers,
date ranges, simulation sizes and financial constants used throughout the
application, plus the SimulationConfig container that bundles them for a run.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from portfolio_sim.exceptions import ConfigurationError

# =============================================================================
# Default Stock Universe
# =============================================================================
DEFAULT_TICKERS: List[str] = ["GE", "XOM", "GBX", "SBUX", "PFE", "HMC", "NVDA"]

# =============================================================================
# Date Configuration
# =============================================================================
DEFAULT_START_DATE: datetime = datetime(2014, 1, 1)
DEFAULT_END_DATE: datetime = datetime(2017, 12, 31)

# Month-end resampling of daily prices (pandas offset alias)
RESAMPLE_FREQUENCY: str = "ME"

# =============================================================================
# Financial Constants
# =============================================================================
# Risk-free rate (annualized)
RISK_FREE_RATE: float = 0.02

# Return observations per year (monthly data)
PERIODS_PER_YEAR: int = 12

# =============================================================================
# Simulation Parameters
# =============================================================================
# Random portfolios generated per asset in the universe
SIMULATIONS_PER_ASSET: int = 100

# Seed of the random stream used to draw portfolio weights
RANDOM_SEED: int = 12

# "uniform" normalizes independent U(0,1) draws, "dirichlet" samples the
# simplex uniformly
SAMPLING_METHOD: str = "uniform"
SAMPLING_METHODS = ("uniform", "dirichlet")

# Number of points sampled along the Capital Market Line
NUM_CML_POINTS: int = 100

# =============================================================================
# Numerical Tolerances
# =============================================================================
# Allowed deviation of a weight vector's sum from 1
WEIGHT_TOLERANCE: float = 1e-9

# Portfolio variances below -tolerance indicate a non-PSD covariance matrix
NEGATIVE_VARIANCE_TOLERANCE: float = 1e-12


@dataclass
class SimulationConfig:
    """
    Parameters of a single simulation run.

    Attributes:
        tickers: Asset identifiers (non-empty, unique).
        start_date: First date of the price history.
        end_date: Last date of the price history (must be after start_date).
        risk_free_rate: Annualized risk-free rate.
        periods_per_year: Return observations per year.
        simulations_per_asset: Portfolios simulated per asset.
        n_portfolios: Explicit population size; overrides simulations_per_asset.
        seed: Seed of the weight sampling stream.
        sampling_method: "uniform" or "dirichlet".
        cml_points: Number of points sampled along the CML.
    """
    tickers: List[str] = field(default_factory=lambda: DEFAULT_TICKERS.copy())
    start_date: datetime = DEFAULT_START_DATE
    end_date: datetime = DEFAULT_END_DATE
    risk_free_rate: float = RISK_FREE_RATE
    periods_per_year: int = PERIODS_PER_YEAR
    simulations_per_asset: int = SIMULATIONS_PER_ASSET
    n_portfolios: Optional[int] = None
    seed: int = RANDOM_SEED
    sampling_method: str = SAMPLING_METHOD
    cml_points: int = NUM_CML_POINTS

    def validate(self) -> "SimulationConfig":
        """
        Check the configuration for consistency.

        Returns:
            The config itself, so calls can be chained.

        Raises:
            ConfigurationError: If any parameter is out of range.
        """
        if not self.tickers:
            raise ConfigurationError("At least one ticker is required.")
        duplicates = sorted({t for t in self.tickers if self.tickers.count(t) > 1})
        if duplicates:
            raise ConfigurationError(f"Duplicate tickers: {duplicates}")
        if self.end_date <= self.start_date:
            raise ConfigurationError(
                f"End date {self.end_date:%Y-%m-%d} must be after "
                f"start date {self.start_date:%Y-%m-%d}."
            )
        self.validate_counts()
        return self

    def validate_counts(self) -> "SimulationConfig":
        """Check only the numeric simulation parameters."""
        if self.periods_per_year <= 0:
            raise ConfigurationError("periods_per_year must be a positive integer.")
        if self.simulations_per_asset <= 0:
            raise ConfigurationError("simulations_per_asset must be a positive integer.")
        if self.n_portfolios is not None and self.n_portfolios <= 0:
            raise ConfigurationError("n_portfolios must be a positive integer.")
        if self.cml_points < 2:
            raise ConfigurationError("cml_points must be at least 2.")
        if self.sampling_method not in SAMPLING_METHODS:
            raise ConfigurationError(
                f"Unknown sampling method '{self.sampling_method}'. "
                f"Use one of {SAMPLING_METHODS}."
            )
        return self

    def portfolio_count(self, n_assets: int) -> int:
        """Resolve the population size for a universe of n_assets."""
        if self.n_portfolios is not None:
            return self.n_portfolios
        return self.simulations_per_asset * n_assets
