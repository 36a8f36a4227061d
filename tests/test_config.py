"""
Unit Tests for SimulationConfig validation.

Run with: pytest tests/test_config.py -v
"""

from datetime import datetime

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from portfolio_sim.config import DEFAULT_TICKERS, SimulationConfig
from portfolio_sim.exceptions import ConfigurationError


class TestValidate:
    """Tests for run configuration checks."""

    def test_defaults_are_valid(self):
        config = SimulationConfig()

        assert config.validate() is config
        assert config.tickers == DEFAULT_TICKERS
        assert config.tickers is not DEFAULT_TICKERS

    def test_empty_tickers(self):
        with pytest.raises(ConfigurationError):
            SimulationConfig(tickers=[]).validate()

    def test_duplicate_tickers(self):
        with pytest.raises(ConfigurationError, match="GE"):
            SimulationConfig(tickers=["GE", "XOM", "GE"]).validate()

    def test_end_before_start(self):
        config = SimulationConfig(
            start_date=datetime(2017, 12, 31),
            end_date=datetime(2014, 1, 1)
        )

        with pytest.raises(ConfigurationError):
            config.validate()

    def test_equal_dates(self):
        config = SimulationConfig(
            start_date=datetime(2017, 1, 1),
            end_date=datetime(2017, 1, 1)
        )

        with pytest.raises(ConfigurationError):
            config.validate()

    @pytest.mark.parametrize("field,value", [
        ("periods_per_year", 0),
        ("simulations_per_asset", -1),
        ("n_portfolios", 0),
        ("cml_points", 1),
        ("sampling_method", "halton"),
    ])
    def test_invalid_counts(self, field, value):
        config = SimulationConfig(**{field: value})

        with pytest.raises(ConfigurationError):
            config.validate_counts()


class TestPortfolioCount:
    """Tests for population size resolution."""

    def test_scales_with_assets(self):
        assert SimulationConfig().portfolio_count(7) == 700

    def test_explicit_override(self):
        assert SimulationConfig(n_portfolios=250).portfolio_count(7) == 250


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
