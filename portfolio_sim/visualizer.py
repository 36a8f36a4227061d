"""
Dashboard Visualization Module.

This module provides interactive Plotly charts for the simulation results.
All charts are designed for professional presentation and include proper
formatting, colors, and interactivity.

Charts Included:
    - Simulated portfolios with efficient frontier and Capital Market Line
    - Portfolio weights bar chart
    - Correlation heatmap
"""

from typing import Dict

import pandas as pd
import plotly.graph_objects as go

from portfolio_sim.optimizer import SimulationResult

# Professional color palette
COLORS = {
    "secondary": "#ff7f0e",    # Orange
    "success": "#2ca02c",      # Green
    "danger": "#d62728",       # Red
    "purple": "#9467bd",       # Purple
}


class DashboardCharts:
    """
    Creates interactive Plotly charts for simulation results.

    All methods are static and return Plotly figure objects that can be
    displayed directly in Streamlit using st.plotly_chart().

    Example:
        >>> fig = DashboardCharts.plot_efficient_frontier(result)
        >>> st.plotly_chart(fig, use_container_width=True)
    """

    @staticmethod
    def plot_efficient_frontier(
        result: SimulationResult,
        height: int = 600
    ) -> go.Figure:
        """
        Create an interactive risk/return chart of the simulation.

        Displays:
        - Scatter plot of simulated portfolios colored by Sharpe ratio
        - Efficient frontier line
        - Optimal (maximum Sharpe) portfolio (star marker)
        - Minimum variance portfolio (diamond marker)
        - Capital Market Line (dashed)

        Args:
            result: SimulationResult of a run.
            height: Chart height in pixels.

        Returns:
            Plotly Figure object.
        """
        population = result.population_frame()
        frontier = result.frontier_frame()
        cml = result.cml.to_frame()
        optimal = result.optimal
        min_var = result.min_variance

        fig = go.Figure()

        fig.add_trace(
            go.Scatter(
                x=population["Risk"] * 100,
                y=population["Return"] * 100,
                mode="markers",
                marker=dict(
                    size=6,
                    color=population["Sharpe"],
                    colorscale="Viridis",
                    colorbar=dict(
                        title=dict(text="Sharpe Ratio", side="right")
                    ),
                    opacity=0.5,
                    line=dict(width=0)
                ),
                text=[
                    f"Return: {r:.2f}%<br>Risk: {v:.2f}%<br>Sharpe: {s:.2f}"
                    for r, v, s in zip(
                        population["Return"] * 100,
                        population["Risk"] * 100,
                        population["Sharpe"]
                    )
                ],
                hoverinfo="text",
                name="Simulated Portfolios"
            )
        )

        if not frontier.empty:
            fig.add_trace(
                go.Scatter(
                    x=frontier["Risk"] * 100,
                    y=frontier["Return"] * 100,
                    mode="lines",
                    line=dict(color=COLORS["success"], width=3),
                    name="Efficient Frontier"
                )
            )

        fig.add_trace(
            go.Scatter(
                x=cml["Risk"] * 100,
                y=cml["Return"] * 100,
                mode="lines",
                line=dict(color=COLORS["secondary"], width=2, dash="dash"),
                name=f"Capital Market Line (slope: {result.cml.slope:.2f})"
            )
        )

        fig.add_trace(
            go.Scatter(
                x=[optimal.risk * 100],
                y=[optimal.mean_return * 100],
                mode="markers",
                marker=dict(
                    size=20,
                    color=COLORS["danger"],
                    symbol="star",
                    line=dict(color="white", width=2)
                ),
                name=f"Optimal Portfolio (SR: {optimal.sharpe_ratio:.2f})",
                hovertext=f"Optimal Portfolio<br>"
                         f"Return: {optimal.mean_return*100:.2f}%<br>"
                         f"Risk: {optimal.risk*100:.2f}%<br>"
                         f"Sharpe: {optimal.sharpe_ratio:.2f}",
                hoverinfo="text"
            )
        )

        fig.add_trace(
            go.Scatter(
                x=[min_var.risk * 100],
                y=[min_var.mean_return * 100],
                mode="markers",
                marker=dict(
                    size=18,
                    color=COLORS["purple"],
                    symbol="diamond",
                    line=dict(color="white", width=2)
                ),
                name=f"Min Variance (Risk: {min_var.risk*100:.1f}%)",
                hovertext=f"Minimum Variance Portfolio<br>"
                         f"Return: {min_var.mean_return*100:.2f}%<br>"
                         f"Risk: {min_var.risk*100:.2f}%<br>"
                         f"Sharpe: {min_var.sharpe_ratio:.2f}",
                hoverinfo="text"
            )
        )

        fig.update_layout(
            title=dict(
                text="Simulated Portfolios: Risk vs. Return with Efficient Frontier and CML",
                font=dict(size=20)
            ),
            xaxis=dict(
                title="Portfolio Risk (Standard Deviation, %)",
                tickformat=".1f",
                gridcolor="lightgray"
            ),
            yaxis=dict(
                title="Portfolio Mean Return (%)",
                tickformat=".1f",
                gridcolor="lightgray"
            ),
            legend=dict(
                yanchor="top",
                y=0.99,
                xanchor="left",
                x=0.01,
                bgcolor="rgba(255,255,255,1)",
                font=dict(color="black")
            ),
            height=height,
            template="plotly_white",
            hovermode="closest"
        )

        return fig

    @staticmethod
    def plot_correlation_heatmap(
        corr_matrix: pd.DataFrame,
        height: int = 500
    ) -> go.Figure:
        """
        Create a correlation matrix heatmap.

        Args:
            corr_matrix: Square correlation table labelled by ticker.
            height: Chart height in pixels.

        Returns:
            Plotly Figure object.
        """
        fig = go.Figure(
            data=go.Heatmap(
                z=corr_matrix.values,
                x=corr_matrix.columns,
                y=corr_matrix.index,
                colorscale="RdBu_r",
                zmin=-1,
                zmax=1,
                hovertemplate="<b>%{x}</b> vs <b>%{y}</b><br>"
                             "Correlation: %{z:.3f}<extra></extra>"
            )
        )

        fig.update_layout(
            title=dict(
                text="Asset Correlation Matrix",
                font=dict(size=20)
            ),
            height=height,
            xaxis=dict(tickangle=45),
            template="plotly_white"
        )

        return fig

    @staticmethod
    def plot_weights_bar(
        weights: Dict[str, float],
        height: int = 400,
        title: str = "Portfolio Weights",
        colorscale: str = "Blues"
    ) -> go.Figure:
        """
        Create a horizontal bar chart of portfolio weights.

        Simulated portfolios hold every asset, so no weights are filtered out.

        Args:
            weights: Dictionary of {ticker: weight}.
            height: Chart height in pixels.
            title: Chart title.
            colorscale: Plotly colorscale name for bar colors.

        Returns:
            Plotly Figure object.
        """
        sorted_items = sorted(weights.items(), key=lambda x: x[1], reverse=True)
        tickers = [item[0] for item in sorted_items]
        weight_values = [item[1] * 100 for item in sorted_items]
        max_weight = max(weight_values) if weight_values else 0

        fig = go.Figure(
            data=[
                go.Bar(
                    x=weight_values,
                    y=tickers,
                    orientation="h",
                    marker=dict(
                        color=weight_values,
                        colorscale=colorscale,
                        line=dict(color="white", width=1)
                    ),
                    text=[f"{w:.1f}%" for w in weight_values],
                    textposition="outside",
                    hovertemplate="<b>%{y}</b><br>Weight: %{x:.2f}%<extra></extra>"
                )
            ]
        )

        fig.update_layout(
            title=dict(
                text=title,
                font=dict(size=20)
            ),
            xaxis=dict(
                title="Weight (%)",
                range=[0, max_weight * 1.15] if max_weight else None
            ),
            yaxis=dict(
                title="",
                autorange="reversed"
            ),
            height=height,
            template="plotly_white"
        )

        return fig
