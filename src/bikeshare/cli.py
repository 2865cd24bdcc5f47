# file: src/bikeshare/cli.py
from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from bikeshare.config import load_config
from bikeshare.forecasting import ForecastConfig, forecast_daily_counts, format_model_summary
from bikeshare.ingest import load_datasets
from bikeshare.report import run_report
from bikeshare.smoothing import daily_series
from bikeshare.validate import print_validation_report, validate_daily, validate_hourly

app = typer.Typer(add_completion=False, help="UCI Bike Sharing daily demand report.")
console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )


def _flatten(results: dict, prefix: str = ""):
    for k, v in results.items():
        key = f"{prefix}{k}"
        if isinstance(v, dict):
            yield from _flatten(v, prefix=f"{key}.")
        else:
            yield key, v


@app.command()
def run(
    data_dir: Optional[str] = None,
    reports_dir: Optional[str] = None,
    span: float = 0.5,
    period: int = 365,
    horizon: int = 30,
    overwrite: bool = False,
):
    """Run the full report: explore, smooth, decompose, forecast."""
    cfg = load_config(
        data_dir=data_dir,
        reports_dir=reports_dir,
        loess_span=span,
        decomposition_period=period,
        horizon=horizon,
        overwrite=overwrite,
    )

    results = run_report(cfg)

    table = Table(title="Report Results")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="green")

    for k, v in _flatten(results):
        table.add_row(str(k), str(v))

    console.print(table)


@app.command()
def validate(data_dir: Optional[str] = None, overwrite: bool = False):
    """Load both tables and print their validation reports."""
    cfg = load_config(data_dir=data_dir, overwrite=overwrite)
    data = load_datasets(cfg)

    results = [validate_daily(data.daily), validate_hourly(data.hourly)]
    for result in results:
        print_validation_report(result)

    if not all(r.is_valid for r in results):
        raise typer.Exit(code=1)


@app.command()
def forecast(data_dir: Optional[str] = None, horizon: int = 30):
    """Fit AutoARIMA on the daily count and print the forecast table."""
    cfg = load_config(data_dir=data_dir, horizon=horizon)
    data = load_datasets(cfg)
    series = daily_series(data.daily)

    report = forecast_daily_counts(
        series,
        ForecastConfig(horizon=cfg.horizon, confidence_levels=cfg.confidence_levels, seasonal=cfg.seasonal),
    )
    console.print(format_model_summary(report))

    table = Table(title=f"ARIMA{report.order} forecast")
    for col in report.forecast.columns:
        table.add_column(col, style="cyan" if col == "ds" else "green")
    for row in report.forecast.itertuples(index=False):
        table.add_row(str(row[0].date()), *[f"{v:,.0f}" for v in row[1:]])

    console.print(table)


if __name__ == "__main__":
    app()
