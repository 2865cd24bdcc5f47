# file: src/bikeshare/report.py
"""
Bike Sharing Report Pipeline

Runs the analysis steps top to bottom, each one depending only on the
loaded tables:
1. ingest      - download, unzip, load day.csv / hour.csv
2. validate    - fail-loud gates on both tables
3. explore     - summary tables + static charts
4. interactive - daily count line chart (HTML)
5. smooth      - LOESS overlay
6. decompose   - multiplicative decomposition
7. forecast    - AutoARIMA fit + forecast chart

Any failure propagates; nothing is retried and no partial summary is written.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

import pandas as pd
import requests

from .config import ReportConfig
from .decomposition import decompose, plot_decomposition
from .explore import explore
from .forecasting import ForecastConfig, forecast_daily_counts, format_model_summary
from .ingest import BikeSharingData, load_datasets
from .interactive import daily_count_figure, forecast_figure, write_figure
from .io_utils import atomic_write_json, ensure_dir
from .smoothing import daily_series, loess_smooth, plot_smoothing
from .validate import assert_valid, print_validation_report, validate_daily, validate_hourly

logger = logging.getLogger(__name__)


def validate_tables(data: BikeSharingData) -> Dict[str, bool]:
    """Validate both tables, print the reports, raise on failure"""
    results = {}
    for result in (validate_daily(data.daily), validate_hourly(data.hourly)):
        print_validation_report(result)
        assert_valid(result)
        results[result.table] = result.is_valid
    return results


def run_exploration(data: BikeSharingData, run_dir: Path) -> Dict[str, str]:
    summary = explore(data.daily, data.hourly, run_dir / "explore")

    with pd.option_context("display.width", 160, "display.max_columns", 20):
        print("\n=== Summary statistics (daily) ===")
        print(summary.summary.round(3))
        print("\n=== Correlation matrix ===")
        print(summary.correlation.round(2))
    print("\n=== Days per season ===")
    print(summary.season_counts.to_string())
    print("\n=== Days per weather situation ===")
    print(summary.weather_counts.to_string())

    return {name: str(path) for name, path in summary.charts.items()}


def run_smoothing(series: pd.Series, config: ReportConfig, run_dir: Path) -> str:
    smoothed = loess_smooth(series, span=config.loess_span)
    return str(plot_smoothing(series, smoothed, run_dir / "loess.png", span=config.loess_span))


def run_decomposition(series: pd.Series, config: ReportConfig, run_dir: Path) -> str:
    decomposition = decompose(
        series,
        period=config.decomposition_period,
        model=config.decomposition_model,
    )
    return str(plot_decomposition(decomposition, run_dir / "decomposition.png"))


def run_forecast(series: pd.Series, config: ReportConfig, run_dir: Path) -> Dict:
    report = forecast_daily_counts(
        series,
        ForecastConfig(
            horizon=config.horizon,
            confidence_levels=tuple(config.confidence_levels),
            seasonal=config.seasonal,
        ),
    )

    print("\n=== ARIMA model ===")
    print(format_model_summary(report))

    fig = forecast_figure(series, report.forecast, levels=config.confidence_levels)
    chart = write_figure(fig, run_dir / "forecast.html")

    out = report.to_dict()
    out["chart"] = str(chart)
    return out


def run_report(
    config: ReportConfig,
    session: Optional[requests.Session] = None,
) -> Dict:
    """
    Runs steps in order and returns a summary dict (also written as JSON).
    """
    logger.info("=" * 60)
    logger.info("START REPORT")
    logger.info("=" * 60)

    run_id = config.run_id()
    run_dir = config.reports_path() / run_id
    ensure_dir(run_dir)
    logger.info(f"Report run_id: {run_id} -> {run_dir}")

    data = load_datasets(config, session=session)
    integrity = validate_tables(data)

    charts = run_exploration(data, run_dir)
    charts["daily_count"] = str(write_figure(daily_count_figure(data.daily), run_dir / "daily_count.html"))

    series = daily_series(data.daily)
    charts["loess"] = run_smoothing(series, config, run_dir)
    charts["decomposition"] = run_decomposition(series, config, run_dir)
    forecast = run_forecast(series, config, run_dir)
    charts["forecast"] = forecast.pop("chart")

    out = {
        "run_id": run_id,
        "daily_rows": len(data.daily),
        "hourly_rows": len(data.hourly),
        "date_min": str(series.index.min().date()),
        "date_max": str(series.index.max().date()),
        "integrity": integrity,
        "loess_span": config.loess_span,
        "decomposition_period": config.decomposition_period,
        "horizon": config.horizon,
        "arima": forecast,
        "charts": charts,
    }
    atomic_write_json(out, config.summary_path(run_dir))

    logger.info("=" * 60)
    logger.info("REPORT COMPLETE")
    logger.info("=" * 60)
    return out
