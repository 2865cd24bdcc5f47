"""
Classical Decomposition of the Daily Count

Moving-average decomposition into trend, seasonal and residual parts:
- trend: centered moving average with window = period
- seasonal: per-position average of detrended ratios, normalized to unit mean
- resid: observed / (trend * seasonal)

Trend and residual are NaN for the first and last period // 2 observations.
The daily series is treated as an exact 365-observation annual cycle.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd
from statsmodels.tsa.seasonal import seasonal_decompose

logger = logging.getLogger(__name__)

MODELS = ("multiplicative", "additive")


@dataclass
class Decomposition:
    """Components of a decomposed series, all sharing the observed index"""
    observed: pd.Series
    trend: pd.Series
    seasonal: pd.Series
    resid: pd.Series
    period: int
    model: str

    def recombine(self) -> pd.Series:
        """trend (x or +) seasonal (x or +) resid; NaN where trend is undefined"""
        if self.model == "multiplicative":
            return self.trend * self.seasonal * self.resid
        return self.trend + self.seasonal + self.resid

    def seasonal_factors(self) -> pd.Series:
        """One full cycle of the seasonal component"""
        return self.seasonal.iloc[: self.period]


def decompose(series: pd.Series, period: int = 365, model: str = "multiplicative") -> Decomposition:
    """
    Decompose a series with a fixed period.

    Args:
        series: Values indexed by date
        period: Cycle length in observations (365 = annual for daily data)
        model: "multiplicative" or "additive"

    Returns:
        Decomposition with observed, trend, seasonal and resid

    Raises:
        ValueError: unknown model, fewer than two full cycles, missing values,
            or non-positive values with the multiplicative model
    """
    if model not in MODELS:
        raise ValueError(f"model must be one of {MODELS}, got {model!r}")
    if period < 2:
        raise ValueError(f"period must be >= 2, got {period}")
    if len(series) < 2 * period:
        raise ValueError(
            f"Need at least two full cycles ({2 * period} observations), got {len(series)}"
        )
    if series.isna().any():
        raise ValueError("Series contains missing values")
    if model == "multiplicative" and (series <= 0).any():
        raise ValueError("Multiplicative decomposition requires strictly positive values")

    result = seasonal_decompose(series, model=model, period=period, two_sided=True)

    logger.info(
        f"Decomposition: model={model}, period={period}, "
        f"trend defined on {result.trend.notna().sum()}/{len(series)} observations"
    )

    return Decomposition(
        observed=result.observed,
        trend=result.trend,
        seasonal=result.seasonal,
        resid=result.resid,
        period=period,
        model=model,
    )


def plot_decomposition(decomposition: Decomposition, path: Path) -> Path:
    """Four stacked panels: original, trend, seasonal, residual"""
    path.parent.mkdir(parents=True, exist_ok=True)

    panels = [
        ("Original", decomposition.observed),
        ("Trend", decomposition.trend),
        ("Seasonal", decomposition.seasonal),
        ("Residual", decomposition.resid),
    ]

    fig, axes = plt.subplots(len(panels), 1, figsize=(12, 10), sharex=True)
    for ax, (title, component) in zip(axes, panels):
        if title == "Residual":
            ax.scatter(component.index, component.values, s=4, color="#555555")
            ax.axhline(1.0 if decomposition.model == "multiplicative" else 0.0, color="red", linestyle="--")
        else:
            ax.plot(component.index, component.values, linewidth=1)
        ax.set_ylabel(title)
        ax.grid(True, alpha=0.3)

    axes[0].set_title(f"{decomposition.model.capitalize()} decomposition (period={decomposition.period})")
    axes[-1].set_xlabel("Date")

    fig.tight_layout()
    fig.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return path
