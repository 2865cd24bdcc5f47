"""Interactive plotly charts: daily count line and forecast with interval bands."""

import logging
from pathlib import Path
from typing import Sequence

import numpy as np
import pandas as pd
import plotly.graph_objects as go

logger = logging.getLogger(__name__)

# Band opacity range; outer levels drawn lighter
BAND_ALPHA_RANGE = (0.2, 0.5)


def daily_count_figure(daily: pd.DataFrame) -> go.Figure:
    """Line chart of total count against the calendar date"""
    df = daily[["dteday", "cnt"]].copy()
    df["dteday"] = pd.to_datetime(df["dteday"], errors="raise").dt.date

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=df["dteday"],
        y=df["cnt"],
        mode="lines",
        name="Total count",
        line=dict(color="#1f77b4", width=1.5),
    ))
    fig.update_layout(
        title="Daily bike rentals",
        xaxis_title="Date",
        yaxis_title="Total count",
        hovermode="x unified",
        xaxis=dict(rangeslider=dict(visible=True)),
    )
    return fig


def forecast_figure(
    history: pd.Series,
    forecast: pd.DataFrame,
    levels: Sequence[int] = (80, 95),
) -> go.Figure:
    """Create Plotly figure with history, point forecast and prediction intervals.

    Args:
        history: Observed series indexed by date
        forecast: Forecast frame with ds, yhat, yhat_lo_<L>, yhat_hi_<L>
        levels: Interval levels to draw
    """
    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=history.index,
        y=history.values,
        mode="lines",
        name="Observed",
        line=dict(color="#2ca02c", width=1),
    ))

    ordered = sorted(levels, reverse=True)
    alphas = np.linspace(*BAND_ALPHA_RANGE, num=len(ordered))
    for level, alpha in zip(ordered, alphas):
        lo_col, hi_col = f"yhat_lo_{level}", f"yhat_hi_{level}"
        if lo_col not in forecast.columns or hi_col not in forecast.columns:
            continue
        fig.add_trace(go.Scatter(
            x=pd.concat([forecast["ds"], forecast["ds"][::-1]]),
            y=pd.concat([forecast[hi_col], forecast[lo_col][::-1]]),
            fill="toself",
            fillcolor=f"rgba(68, 138, 255, {alpha:.2f})",
            line=dict(color="rgba(255,255,255,0)"),
            name=f"{level}% Interval",
            hoverinfo="skip",
        ))

    fig.add_trace(go.Scatter(
        x=forecast["ds"],
        y=forecast["yhat"],
        mode="lines",
        name="Forecast",
        line=dict(color="#1f77b4", width=2),
    ))

    fig.update_layout(
        title="ARIMA forecast of daily rentals",
        xaxis_title="Date",
        yaxis_title="Total count",
        hovermode="x unified",
        legend=dict(orientation="h", yanchor="bottom", y=1.02),
    )
    return fig


def write_figure(fig: go.Figure, path: Path) -> Path:
    """Save a figure as standalone HTML"""
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(str(path), include_plotlyjs="cdn")
    logger.info(f"Interactive chart written: {path}")
    return path
