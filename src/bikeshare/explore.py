# file: src/bikeshare/explore.py
"""
Descriptive Exploration of the Daily Table

Printed tables and static charts only; nothing here feeds later steps:
1. Summary statistics (min/max/mean/quartiles) over numeric fields
2. Correlation matrix (dteday, yr excluded)
3. Season and weather frequencies
4. Charts: count over time, monthly boxplots by season, category bars,
   correlation heatmap, hourly profile (from the hourly table)

Charts are written as PNG files into the run's report directory.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from .validate import SEASON_LABELS, WEATHER_LABELS

logger = logging.getLogger(__name__)

# Suppress matplotlib warnings for cleaner output
warnings.filterwarnings('ignore', category=UserWarning, module='matplotlib')

plt.rcParams['figure.figsize'] = (12, 6)
plt.rcParams['figure.dpi'] = 100

EXCLUDED_FROM_CORRELATION = ["dteday", "yr"]
SEASON_COLORS = {1: "#8fd175", 2: "#f2c14e", 3: "#e07a5f", 4: "#5fa8d3"}


@dataclass
class ExplorationSummary:
    """Tables and chart paths produced by explore()"""
    summary: pd.DataFrame
    correlation: pd.DataFrame
    season_counts: pd.Series
    weather_counts: pd.Series
    charts: Dict[str, Path] = field(default_factory=dict)


def summary_statistics(daily: pd.DataFrame) -> pd.DataFrame:
    """Field-wise describe() over the numeric columns"""
    return daily.drop(columns=["dteday"], errors="ignore").describe()


def correlation_matrix(daily: pd.DataFrame) -> pd.DataFrame:
    """Pearson correlation over numeric fields, date and year columns excluded"""
    numeric = daily.drop(columns=EXCLUDED_FROM_CORRELATION, errors="ignore")
    numeric = numeric.select_dtypes(include=[np.number])
    return numeric.corr()


def category_counts(daily: pd.DataFrame, column: str) -> pd.Series:
    """
    Frequency of each code of a closed enumeration.

    Every code appears, unobserved ones with a zero count. The index holds
    the human-readable label.
    """
    labels: Mapping[int, str]
    if column == "season":
        labels = SEASON_LABELS
    elif column == "weathersit":
        labels = WEATHER_LABELS
    else:
        raise ValueError(f"No label set for column: {column}")

    counts = daily[column].value_counts().reindex(list(labels), fill_value=0)
    counts.index = [labels[code] for code in counts.index]
    counts.name = "days"
    return counts


def _save(fig, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return path


def plot_count_over_time(daily: pd.DataFrame, path: Path) -> Path:
    """Line chart of total count against date"""
    fig, ax = plt.subplots(figsize=(12, 4))
    ax.plot(daily["dteday"], daily["cnt"], color="#1f77b4", linewidth=1)
    ax.set_title("Daily bike rentals")
    ax.set_xlabel("Date")
    ax.set_ylabel("Total count")
    ax.grid(True, alpha=0.3)
    return _save(fig, path)


def plot_monthly_boxplot_by_season(daily: pd.DataFrame, path: Path) -> Path:
    """
    Boxplot of count per month, one box per (month, season) pair.

    Months that straddle two seasons get two side-by-side boxes.
    """
    fig, ax = plt.subplots(figsize=(14, 5))
    width = 0.35

    for month in range(1, 13):
        in_month = daily[daily["mnth"] == month]
        seasons = sorted(in_month["season"].unique())
        offsets = np.linspace(-width / 2, width / 2, len(seasons)) if len(seasons) > 1 else [0.0]

        for offset, season in zip(offsets, seasons):
            values = in_month.loc[in_month["season"] == season, "cnt"]
            box = ax.boxplot(
                values,
                positions=[month + offset],
                widths=width * 0.9,
                patch_artist=True,
                manage_ticks=False,
            )
            for patch in box["boxes"]:
                patch.set_facecolor(SEASON_COLORS[season])

    handles = [
        plt.Rectangle((0, 0), 1, 1, facecolor=SEASON_COLORS[code], label=label)
        for code, label in SEASON_LABELS.items()
    ]
    ax.legend(handles=handles, title="Season")
    ax.set_xticks(range(1, 13))
    ax.set_xlabel("Month")
    ax.set_ylabel("Total count")
    ax.set_title("Daily rentals by month and season")
    return _save(fig, path)


def plot_category_counts(counts: pd.Series, title: str, path: Path) -> Path:
    """Bar chart of a category_counts() result"""
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.bar(counts.index.astype(str), counts.values, color="#4c72b0")
    for i, value in enumerate(counts.values):
        ax.text(i, value, str(int(value)), ha="center", va="bottom")
    ax.set_title(title)
    ax.set_ylabel("Days")
    return _save(fig, path)


def plot_correlation_matrix(corr: pd.DataFrame, path: Path) -> Path:
    """Coloured correlation matrix with value annotations"""
    fig, ax = plt.subplots(figsize=(10, 8))
    im = ax.imshow(corr.values, cmap="RdBu_r", vmin=-1, vmax=1)
    fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04)

    ax.set_xticks(range(len(corr.columns)))
    ax.set_yticks(range(len(corr.index)))
    ax.set_xticklabels(corr.columns, rotation=45, ha="right")
    ax.set_yticklabels(corr.index)

    for i in range(len(corr.index)):
        for j in range(len(corr.columns)):
            value = corr.iat[i, j]
            color = "white" if abs(value) > 0.6 else "black"
            ax.text(j, i, f"{value:.2f}", ha="center", va="center", fontsize=7, color=color)

    ax.set_title("Correlation matrix (daily fields)")
    return _save(fig, path)


def plot_hourly_profile(hourly: pd.DataFrame, path: Path) -> Path:
    """Mean count by hour of day, working days vs non-working days"""
    profile = hourly.groupby(["workingday", "hr"])["cnt"].mean().unstack(level=0)

    fig, ax = plt.subplots(figsize=(10, 4))
    for flag, label in ((1, "Working day"), (0, "Non-working day")):
        if flag in profile.columns:
            ax.plot(profile.index, profile[flag], marker="o", label=label)
    ax.set_xticks(range(0, 24))
    ax.set_xlabel("Hour of day")
    ax.set_ylabel("Mean count")
    ax.set_title("Hourly rental profile")
    ax.legend()
    ax.grid(True, alpha=0.3)
    return _save(fig, path)


def explore(daily: pd.DataFrame, hourly: pd.DataFrame, output_dir: Path) -> ExplorationSummary:
    """
    Run the descriptive step end to end.

    Args:
        daily: Daily table
        hourly: Hourly table (used for the hourly profile only)
        output_dir: Directory for PNG charts

    Returns:
        ExplorationSummary with tables and chart paths
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    summary = summary_statistics(daily)
    corr = correlation_matrix(daily)
    season_counts = category_counts(daily, "season")
    weather_counts = category_counts(daily, "weathersit")

    charts = {
        "count_over_time": plot_count_over_time(daily, output_dir / "count_over_time.png"),
        "monthly_boxplot": plot_monthly_boxplot_by_season(daily, output_dir / "monthly_boxplot.png"),
        "weather_counts": plot_category_counts(
            weather_counts, "Days per weather situation", output_dir / "weather_counts.png"
        ),
        "season_counts": plot_category_counts(
            season_counts, "Days per season", output_dir / "season_counts.png"
        ),
        "correlation": plot_correlation_matrix(corr, output_dir / "correlation.png"),
        "hourly_profile": plot_hourly_profile(hourly, output_dir / "hourly_profile.png"),
    }

    logger.info(f"Exploration charts written: {len(charts)} files in {output_dir}")

    return ExplorationSummary(
        summary=summary,
        correlation=corr,
        season_counts=season_counts,
        weather_counts=weather_counts,
        charts=charts,
    )
