"""
Financial Data Loader Module.

This module handles the acquisition, cleaning, and preprocessing of financial
market data using the yfinance library. It turns daily adjusted prices into
aligned periodic log returns, the only market input the simulation consumes.

Features:
    - Download adjusted close prices from Yahoo Finance
    - Resample daily prices to period ends (month end by default)
    - Calculate log returns for statistical accuracy
    - Align all assets on a common, gap-free index
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

import numpy as np
import pandas as pd
import yfinance as yf

from portfolio_sim.config import (
    DEFAULT_END_DATE,
    DEFAULT_START_DATE,
    DEFAULT_TICKERS,
    RESAMPLE_FREQUENCY,
)
from portfolio_sim.exceptions import DataRetrievalError

logger = logging.getLogger(__name__)


class FinancialDataLoader:
    """
    Handles downloading and preprocessing of financial market data.

    A ticker that cannot be fetched fails the whole load.

    Attributes:
        tickers: List of stock ticker symbols.
        start_date: Start date for historical data.
        end_date: End date for historical data.
        frequency: pandas offset alias the prices are resampled to.
        prices: DataFrame of period-end adjusted close prices.
        returns: DataFrame of periodic log returns.
        failed_tickers: List of tickers that failed to download.

    Example:
        >>> loader = FinancialDataLoader(["GE", "XOM", "NVDA"])
        >>> loader.download_data()
        >>> loader.returns.head()
    """

    def __init__(
        self,
        tickers: Optional[List[str]] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        frequency: str = RESAMPLE_FREQUENCY
    ) -> None:
        """
        Initialize the FinancialDataLoader.

        Args:
            tickers: List of ticker symbols. Defaults to config DEFAULT_TICKERS.
            start_date: Start date for data. Defaults to config DEFAULT_START_DATE.
            end_date: End date for data. Defaults to config DEFAULT_END_DATE.
            frequency: Resampling rule for prices (default: month end).
        """
        self.tickers: List[str] = list(tickers) if tickers else DEFAULT_TICKERS.copy()
        self.start_date: datetime = start_date if start_date else DEFAULT_START_DATE
        self.end_date: datetime = end_date if end_date else DEFAULT_END_DATE
        self.frequency: str = frequency

        self.prices: Optional[pd.DataFrame] = None
        self.returns: Optional[pd.DataFrame] = None
        self.failed_tickers: List[str] = []

    def download_data(self) -> pd.DataFrame:
        """
        Download adjusted close prices for all tickers and derive returns.

        Returns:
            DataFrame of period-end adjusted close prices (rows=dates, columns=tickers).

        Raises:
            DataRetrievalError: If any ticker fails to download or no aligned
                returns remain after cleaning.
        """
        logger.info(f"Downloading data for {len(self.tickers)} tickers...")

        all_data: Dict[str, pd.Series] = {}
        self.failed_tickers = []

        for ticker in self.tickers:
            try:
                data = self._download_single_ticker(ticker)
            except Exception as e:
                self.failed_tickers.append(ticker)
                logger.warning(f"Failed to download {ticker}: {str(e)}")
                continue

            if data is not None and len(data) > 0:
                all_data[ticker] = data
                logger.info(f"Successfully downloaded {ticker}")
            else:
                self.failed_tickers.append(ticker)
                logger.warning(f"No data available for {ticker}")

        if self.failed_tickers:
            raise DataRetrievalError(
                f"Failed to download data for: {self.failed_tickers}"
            )

        daily = pd.DataFrame(all_data)[self.tickers]
        self.prices = self._resample_prices(daily)
        self.returns = self._calculate_log_returns(self.prices)

        if self.returns.empty:
            raise DataRetrievalError(
                "No aligned returns remain after cleaning; widen the date range."
            )

        logger.info(
            f"Loaded {len(self.returns)} periods of returns for {len(self.tickers)} tickers"
        )

        return self.prices

    def _download_single_ticker(self, ticker: str) -> Optional[pd.Series]:
        """
        Download data for a single ticker.

        Args:
            ticker: Stock ticker symbol.

        Returns:
            Series of adjusted close prices, or None if nothing was returned.
        """
        stock = yf.Ticker(ticker)
        hist = stock.history(
            start=self.start_date.strftime("%Y-%m-%d"),
            end=self.end_date.strftime("%Y-%m-%d"),
            auto_adjust=True  # Use adjusted prices
        )

        if hist.empty:
            return None

        return hist["Close"]

    def _resample_prices(self, prices: pd.DataFrame) -> pd.DataFrame:
        """
        Reduce daily prices to the last observation of each period.

        Timezone info is removed first so that period boundaries do not
        depend on the exchange's timezone.

        Args:
            prices: DataFrame of daily prices.

        Returns:
            DataFrame of period-end prices indexed by period end date.
        """
        if prices.index.tz is not None:
            prices = prices.copy()
            prices.index = prices.index.tz_localize(None)

        return prices.resample(self.frequency).last()

    def _calculate_log_returns(
        self,
        prices: pd.DataFrame
    ) -> pd.DataFrame:
        """
        Calculate log returns from price data.

        Formula: r_t = ln(P_t / P_{t-1})

        The first period has no predecessor; it and any period where an
        asset is missing are dropped so every column shares one index.

        Args:
            prices: DataFrame of period-end prices.

        Returns:
            DataFrame of aligned log returns.
        """
        log_returns = np.log(prices / prices.shift(1))
        aligned = log_returns.dropna()

        dropped = len(log_returns) - len(aligned) - 1
        if dropped > 0:
            logger.warning(f"Dropped {dropped} periods with missing prices")

        return aligned
