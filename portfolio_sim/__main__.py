"""
Command line report for the Monte Carlo Portfolio Simulator.

Downloads monthly returns (or reads them from a CSV), runs the simulation
and prints the stock summary, the optimal and minimum variance portfolios
and the efficient frontier.

Usage:
    python -m portfolio_sim
    python -m portfolio_sim --tickers GE XOM NVDA --start 2014-01-01 --end 2017-12-31
    python -m portfolio_sim --returns-csv monthly_returns.csv --rf-rate 0.03
"""

import argparse
import logging
import sys
from datetime import datetime
from typing import List, Optional

import pandas as pd

from portfolio_sim.config import (
    DEFAULT_END_DATE,
    DEFAULT_START_DATE,
    DEFAULT_TICKERS,
    NUM_CML_POINTS,
    PERIODS_PER_YEAR,
    RANDOM_SEED,
    RISK_FREE_RATE,
    SAMPLING_METHOD,
    SAMPLING_METHODS,
    SIMULATIONS_PER_ASSET,
    SimulationConfig,
)
from portfolio_sim.exceptions import PortfolioSimError
from portfolio_sim.optimizer import MonteCarloOptimizer, SimulationResult, run_mean_variance

logger = logging.getLogger("portfolio_sim")


def _parse_date(value: str) -> datetime:
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="portfolio_sim",
        description="Monte Carlo mean-variance portfolio simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m portfolio_sim                                  # Default universe
  python -m portfolio_sim --tickers GE XOM NVDA --seed 7
  python -m portfolio_sim --returns-csv returns.csv        # Offline run
        """
    )
    parser.add_argument(
        "--tickers", "-t",
        nargs="+",
        default=DEFAULT_TICKERS,
        help="Ticker symbols (default: %(default)s)"
    )
    parser.add_argument(
        "--start",
        type=_parse_date,
        default=DEFAULT_START_DATE,
        help="Start date YYYY-MM-DD"
    )
    parser.add_argument(
        "--end",
        type=_parse_date,
        default=DEFAULT_END_DATE,
        help="End date YYYY-MM-DD"
    )
    parser.add_argument(
        "--rf-rate", "-r",
        type=float,
        default=RISK_FREE_RATE,
        help="Annual risk-free rate (default: %(default)s)"
    )
    parser.add_argument(
        "--periods-per-year",
        type=int,
        default=PERIODS_PER_YEAR,
        help="Return observations per year (default: %(default)s)"
    )
    parser.add_argument(
        "--simulations-per-asset",
        type=int,
        default=SIMULATIONS_PER_ASSET,
        help="Random portfolios per asset (default: %(default)s)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=RANDOM_SEED,
        help="Random seed (default: %(default)s)"
    )
    parser.add_argument(
        "--sampling",
        choices=SAMPLING_METHODS,
        default=SAMPLING_METHOD,
        help="Weight sampling method (default: %(default)s)"
    )
    parser.add_argument(
        "--cml-points",
        type=int,
        default=NUM_CML_POINTS,
        help="Points sampled along the CML (default: %(default)s)"
    )
    parser.add_argument(
        "--returns-csv",
        type=str,
        help="CSV of periodic returns (first column dates, one column per ticker)"
    )
    return parser


def format_report(result: SimulationResult) -> str:
    """Render the result tables as plain text."""
    sections = [
        ("Stock Summary:", result.stock_summary().to_string(index=False)),
        ("Optimal Portfolio:", result.optimal_frame().to_string()),
        ("Minimum Variance Portfolio:", result.min_variance_frame().to_string()),
        ("Efficient Frontier Portfolios:", result.frontier_frame().to_string()),
        (
            "Capital Market Line:",
            f"E[R] = {result.risk_free_rate:.4f} + {result.cml.slope:.4f} * risk"
        ),
    ]
    return "\n\n".join(f"{title}\n{body}" for title, body in sections)


def run_from_csv(path: str, config: SimulationConfig) -> SimulationResult:
    """
    Run the simulation on a CSV of periodic returns.

    The CSV columns replace the configured tickers.
    """
    returns = pd.read_csv(path, index_col=0, parse_dates=True)
    config.tickers = [str(c) for c in returns.columns]
    return MonteCarloOptimizer(returns, config.risk_free_rate, config).run()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the simulation report."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    config = SimulationConfig(
        tickers=list(args.tickers),
        start_date=args.start,
        end_date=args.end,
        risk_free_rate=args.rf_rate,
        periods_per_year=args.periods_per_year,
        simulations_per_asset=args.simulations_per_asset,
        seed=args.seed,
        sampling_method=args.sampling,
        cml_points=args.cml_points,
    )

    try:
        if args.returns_csv:
            result = run_from_csv(args.returns_csv, config)
        else:
            result = run_mean_variance(
                config.tickers, config.start_date, config.end_date, args.rf_rate, config
            )
    except PortfolioSimError as e:
        logger.error(f"Run aborted: {e}")
        return 1

    print(format_report(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
