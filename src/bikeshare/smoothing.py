"""
LOESS Smoothing of the Daily Count

Local regression of count on the date ordinal, evaluated back at every
observed date. Span is a fixed hyperparameter (default 0.5), not tuned.
"""

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from statsmodels.nonparametric.smoothers_lowess import lowess

logger = logging.getLogger(__name__)


def daily_series(daily: pd.DataFrame, value_col: str = "cnt") -> pd.Series:
    """
    Daily count as a float series with a sorted DatetimeIndex.

    Raises:
        ValueError: duplicate dates
    """
    dates = pd.to_datetime(daily["dteday"], errors="raise")
    series = pd.Series(daily[value_col].to_numpy(dtype=float), index=pd.DatetimeIndex(dates), name=value_col)
    series = series.sort_index()

    if series.index.has_duplicates:
        raise ValueError("Daily series has duplicate dates")

    series.index.name = "ds"
    return series


def loess_smooth(series: pd.Series, span: float = 0.5, robust_iterations: int = 0) -> pd.Series:
    """
    Smooth a date-indexed series with LOWESS.

    Args:
        series: Values indexed by date
        span: Fraction of observations in each local window, in (0, 1]
        robust_iterations: Reweighting passes (0 = plain local regression)

    Returns:
        Smoothed series with the same length and index as the input
    """
    if not 0 < span <= 1:
        raise ValueError(f"span must be in (0, 1], got {span}")
    if len(series) < 2:
        raise ValueError("Need at least 2 observations to smooth")

    ordinals = np.array([ts.toordinal() for ts in pd.DatetimeIndex(series.index)], dtype=float)
    fitted = lowess(
        series.to_numpy(dtype=float),
        ordinals,
        frac=span,
        it=robust_iterations,
        return_sorted=False,
    )

    smoothed = pd.Series(fitted, index=series.index, name=f"{series.name}_loess")
    logger.info(f"LOESS smoothing: span={span}, n={len(smoothed)}")
    return smoothed


def plot_smoothing(series: pd.Series, smoothed: pd.Series, path: Path, span: float = 0.5) -> Path:
    """Overlay chart of original and smoothed series"""
    path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(12, 4))
    ax.plot(series.index, series.values, color="#999999", linewidth=1, label="Original")
    ax.plot(smoothed.index, smoothed.values, color="#d62728", linewidth=2, label=f"LOESS (span={span})")
    ax.set_title("Daily rentals with LOESS smoothing")
    ax.set_xlabel("Date")
    ax.set_ylabel("Total count")
    ax.legend()
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return path
