"""
Monte Carlo Portfolio Simulator - Streamlit Application.

This is the interactive front end of the simulator. It provides a
user-friendly interface for:
    - Selecting assets, date range and risk-free rate
    - Running the Monte Carlo simulation
    - Visualizing simulated portfolios, the efficient frontier and the CML
    - Inspecting the optimal and minimum variance portfolios

Run with: streamlit run app.py
"""

import logging
from datetime import datetime
from typing import Dict

import pandas as pd
import streamlit as st

from portfolio_sim.config import (
    DEFAULT_END_DATE,
    DEFAULT_START_DATE,
    DEFAULT_TICKERS,
    RANDOM_SEED,
    RISK_FREE_RATE,
    SAMPLING_METHODS,
    SIMULATIONS_PER_ASSET,
    SimulationConfig,
)
from portfolio_sim.exceptions import DataRetrievalError, PortfolioSimError
from portfolio_sim.optimizer import SimulationResult, run_mean_variance
from portfolio_sim.visualizer import DashboardCharts

logging.basicConfig(level=logging.INFO)

# Page configuration
st.set_page_config(
    page_title="Portfolio Simulator",
    page_icon="📈",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Custom CSS for styling
st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: 700;
        color: #1f77b4;
        margin-bottom: 0;
    }
    .sub-header {
        font-size: 1.1rem;
        color: #666;
        margin-top: 0;
    }
</style>
""", unsafe_allow_html=True)


def initialize_session_state() -> None:
    """Initialize session state variables."""
    if "simulation_run" not in st.session_state:
        st.session_state.simulation_run = False


def render_sidebar() -> Dict:
    """
    Render the sidebar with input controls.

    Returns:
        Dictionary of user inputs.
    """
    st.sidebar.markdown("## Configuration")

    st.sidebar.markdown("### Asset Selection")
    ticker_text = st.sidebar.text_input(
        "Tickers (comma-separated)",
        value=", ".join(DEFAULT_TICKERS),
        help="Ticker symbols of the asset universe"
    )
    tickers = [t.strip().upper() for t in ticker_text.split(",") if t.strip()]

    st.sidebar.markdown("### Date Range")
    start_date = st.sidebar.date_input("Start Date", value=DEFAULT_START_DATE)
    end_date = st.sidebar.date_input(
        "End Date",
        value=DEFAULT_END_DATE,
        max_value=datetime.now()
    )

    st.sidebar.markdown("### Risk Parameters")
    risk_free_rate = st.sidebar.slider(
        "Risk-Free Rate (%)",
        min_value=0.0,
        max_value=10.0,
        value=RISK_FREE_RATE * 100,
        step=0.25,
        help="Annual risk-free rate (e.g., Treasury yield)"
    ) / 100

    st.sidebar.markdown("### Simulation")
    simulations_per_asset = st.sidebar.number_input(
        "Portfolios per Asset",
        min_value=1,
        value=SIMULATIONS_PER_ASSET,
        step=50
    )
    seed = st.sidebar.number_input("Random Seed", min_value=0, value=RANDOM_SEED, step=1)
    sampling_method = st.sidebar.selectbox(
        "Weight Sampling",
        options=list(SAMPLING_METHODS),
        help="'uniform' normalizes U(0,1) draws; 'dirichlet' samples the simplex uniformly"
    )

    st.sidebar.markdown("---")
    run_simulation = st.sidebar.button(
        "Run Simulation",
        type="primary",
        use_container_width=True
    )

    return {
        "config": SimulationConfig(
            tickers=tickers,
            start_date=datetime.combine(start_date, datetime.min.time()),
            end_date=datetime.combine(end_date, datetime.min.time()),
            risk_free_rate=risk_free_rate,
            simulations_per_asset=int(simulations_per_asset),
            seed=int(seed),
            sampling_method=sampling_method,
        ),
        "run_simulation": run_simulation
    }


def render_header() -> None:
    """Render the main header."""
    st.markdown('<p class="main-header">Monte Carlo Portfolio Simulator</p>', unsafe_allow_html=True)
    st.markdown(
        '<p class="sub-header">Mean-Variance Analysis | Efficient Frontier | Capital Market Line</p>',
        unsafe_allow_html=True
    )
    st.markdown("---")


def render_metrics_row(result: SimulationResult) -> None:
    """Render key metrics in a row of cards."""
    optimal = result.optimal
    min_var = result.min_variance
    col1, col2, col3, col4, col5 = st.columns(5)

    with col1:
        st.metric(
            "Max Sharpe Ratio",
            f"{optimal.sharpe_ratio:.2f}",
            help="Sharpe ratio of the optimal portfolio"
        )

    with col2:
        st.metric(
            "Expected Return",
            f"{optimal.mean_return*100:.1f}%",
            help="Annualized return of the optimal portfolio"
        )

    with col3:
        st.metric(
            "Risk",
            f"{optimal.risk*100:.1f}%",
            help="Annualized standard deviation of the optimal portfolio"
        )

    with col4:
        st.metric(
            "Min Variance Risk",
            f"{min_var.risk*100:.1f}%",
            help="Lowest simulated portfolio risk"
        )

    with col5:
        st.metric(
            "Frontier Portfolios",
            f"{len(result.efficient_frontier)} / {len(result.population)}",
            help="Simulated portfolios on the efficient frontier"
        )


def format_portfolio_table(frame: pd.DataFrame) -> pd.DataFrame:
    """Format return, risk and weight columns as percentages."""
    display = frame.copy()
    for col in display.columns:
        if col == "Sharpe":
            display[col] = display[col].apply(lambda x: f"{x:.3f}")
        else:
            display[col] = display[col].apply(lambda x: f"{x*100:.2f}%")
    return display


def main() -> None:
    """Main application function."""
    initialize_session_state()
    render_header()

    inputs = render_sidebar()
    config: SimulationConfig = inputs["config"]

    if inputs["run_simulation"]:
        with st.spinner("Downloading data and simulating portfolios..."):
            try:
                result = run_mean_variance(
                    config.tickers,
                    config.start_date,
                    config.end_date,
                    config.risk_free_rate,
                    config
                )
                st.session_state.result = result
                st.session_state.simulation_run = True

            except DataRetrievalError as e:
                st.error(f"Market data unavailable: {e}")
                return
            except PortfolioSimError as e:
                st.error(f"Simulation failed: {e}")
                return

    if st.session_state.simulation_run:
        result: SimulationResult = st.session_state.result

        render_metrics_row(result)
        st.markdown("---")

        tab1, tab2, tab3 = st.tabs(["Simulation", "Portfolios", "Assets"])

        with tab1:
            fig = DashboardCharts.plot_efficient_frontier(result)
            st.plotly_chart(fig, use_container_width=True)
            st.caption(
                f"Capital Market Line: E[R] = {result.risk_free_rate*100:.2f}% "
                f"+ {result.cml.slope:.4f} × risk"
            )

        with tab2:
            col1, col2 = st.columns(2)
            with col1:
                st.markdown("### Optimal Portfolio")
                st.dataframe(
                    format_portfolio_table(result.optimal_frame()),
                    use_container_width=True
                )
                fig = DashboardCharts.plot_weights_bar(
                    result.optimal.weights_dict(result.tickers),
                    title="Optimal Portfolio Weights",
                    colorscale="Reds"
                )
                st.plotly_chart(fig, use_container_width=True)

            with col2:
                st.markdown("### Minimum Variance Portfolio")
                st.dataframe(
                    format_portfolio_table(result.min_variance_frame()),
                    use_container_width=True
                )
                fig = DashboardCharts.plot_weights_bar(
                    result.min_variance.weights_dict(result.tickers),
                    title="Minimum Variance Portfolio Weights",
                    colorscale="Purples"
                )
                st.plotly_chart(fig, use_container_width=True)

            st.markdown("### Efficient Frontier Portfolios")
            st.dataframe(
                format_portfolio_table(result.frontier_frame()),
                use_container_width=True
            )

        with tab3:
            st.markdown("### Stock Summary")
            summary = result.stock_summary()
            summary["Avg Annual Return"] = summary["Avg Annual Return"].apply(
                lambda x: f"{x*100:.2f}%"
            )
            summary["Annual Std Dev"] = summary["Annual Std Dev"].apply(
                lambda x: f"{x*100:.2f}%"
            )
            st.dataframe(summary, hide_index=True, use_container_width=True)

            cov = pd.DataFrame(
                result.statistics.cov_matrix,
                index=result.tickers,
                columns=result.tickers
            )
            st.markdown("### Annualized Covariance Matrix")
            st.dataframe(cov.style.format("{:.5f}"), use_container_width=True)

            if len(result.tickers) > 1:
                fig = DashboardCharts.plot_correlation_heatmap(
                    result.statistics.correlation_frame()
                )
                st.plotly_chart(fig, use_container_width=True)

    else:
        st.info(
            "Configure the simulation in the sidebar and click "
            "'Run Simulation' to begin."
        )

        st.markdown("""
        ### How to Use

        1. **Select Assets**: Enter the tickers of your asset universe
        2. **Set Date Range**: Define the historical period for monthly returns
        3. **Adjust Risk-Free Rate**: Set the benchmark rate for Sharpe calculations
        4. **Configure Simulation**: Choose portfolios per asset and the random seed
        5. **Run Simulation**: Click the button to simulate random portfolios

        ### What You'll See

        - **Simulated Portfolios**: Risk-return cloud colored by Sharpe ratio
        - **Efficient Frontier**: Simulated portfolios with the best return for their risk
        - **Capital Market Line**: Line from the risk-free rate through the optimal portfolio
        - **Portfolio Tables**: Weights of the optimal and minimum variance portfolios
        """)


if __name__ == "__main__":
    main()
