"""
Random Portfolio Sampling Module.

Generates long-only, fully invested weight vectors for the Monte Carlo
simulation. Weights come from an explicitly seeded numpy Generator that is
consumed in generation order, so identical seeds give identical populations.

Two methods are available:
    - "uniform": draw n independent U(0,1) values and divide by their sum.
      This is not uniform over the simplex; it concentrates mass toward
      equal weights. It is the default.
    - "dirichlet": Dirichlet(1, ..., 1) draws, uniform over the simplex.
"""

import logging
from typing import Optional

import numpy as np

from portfolio_sim.config import (
    RANDOM_SEED,
    SAMPLING_METHOD,
    SAMPLING_METHODS,
    SIMULATIONS_PER_ASSET,
)
from portfolio_sim.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class PortfolioSampler:
    """
    Draws random portfolio weight vectors.

    Attributes:
        n_assets: Number of assets per weight vector.
        n_portfolios: Number of weight vectors to draw.
        rng: Random generator the draws are taken from.
        method: Sampling method ("uniform" or "dirichlet").

    Example:
        >>> sampler = PortfolioSampler(3, rng=np.random.default_rng(12))
        >>> weights = sampler.sample()
        >>> weights.shape
        (300, 3)
    """

    def __init__(
        self,
        n_assets: int,
        n_portfolios: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        method: str = SAMPLING_METHOD
    ) -> None:
        if n_assets <= 0:
            raise ConfigurationError("n_assets must be a positive integer.")
        if n_portfolios is None:
            n_portfolios = SIMULATIONS_PER_ASSET * n_assets
        if n_portfolios <= 0:
            raise ConfigurationError("n_portfolios must be a positive integer.")
        if method not in SAMPLING_METHODS:
            raise ConfigurationError(
                f"Unknown sampling method '{method}'. Use one of {SAMPLING_METHODS}."
            )

        self.n_assets: int = n_assets
        self.n_portfolios: int = n_portfolios
        self.rng: np.random.Generator = (
            rng if rng is not None else np.random.default_rng(RANDOM_SEED)
        )
        self.method: str = method

    def sample(self) -> np.ndarray:
        """
        Draw the full set of weight vectors.

        Row i is the i-th portfolio in generation order. Every row is
        non-negative and sums to 1 within floating-point tolerance.

        Returns:
            Array of shape (n_portfolios, n_assets).
        """
        if self.method == "dirichlet":
            weights = self.rng.dirichlet(np.ones(self.n_assets), size=self.n_portfolios)
        else:
            # Row-major fill keeps each row a contiguous block of the stream
            draws = self.rng.random((self.n_portfolios, self.n_assets))
            weights = draws / draws.sum(axis=1, keepdims=True)

        logger.info(
            f"Sampled {self.n_portfolios} portfolios over {self.n_assets} assets "
            f"({self.method})"
        )
        return weights
