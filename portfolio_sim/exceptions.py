"""
Error types raised by the portfolio simulator.

Core computations raise these errors without retrying; the orchestrator
records the stage that failed on the exception and re-raises it.
"""

from typing import Optional


class PortfolioSimError(Exception):
    """Base class for all simulator errors."""

    def __init__(self, message: str, stage: Optional[str] = None) -> None:
        super().__init__(message)
        self.stage: Optional[str] = stage

    def __str__(self) -> str:
        message = super().__str__()
        if self.stage:
            return f"[{self.stage}] {message}"
        return message


class InsufficientDataError(PortfolioSimError, ValueError):
    """Return series are empty, too short or not aligned."""


class NumericalError(PortfolioSimError, ArithmeticError):
    """Negative portfolio variance from a non positive semi-definite covariance matrix."""


class DivisionByZeroError(PortfolioSimError, ZeroDivisionError):
    """Zero portfolio risk in a Sharpe ratio or CML slope."""


class EmptyPopulationError(PortfolioSimError, ValueError):
    """Selection or frontier extraction on an empty population."""


class ConfigurationError(PortfolioSimError, ValueError):
    """Invalid tickers, date range or simulation counts."""


class DataRetrievalError(PortfolioSimError):
    """Market data could not be downloaded for one or more tickers."""
