"""
Bike Sharing Daily Demand Report

Step-by-step analysis of the UCI Bike Sharing dataset:
1. ingest - Download, unzip, load day.csv / hour.csv
2. validate - Schema, contiguity and count gates
3. explore - Summary statistics, correlation, category counts, charts
4. interactive - Plotly line and forecast charts
5. smoothing - LOESS of the daily count
6. decomposition - Multiplicative trend / seasonal / residual split
7. forecasting - Non-seasonal AutoARIMA with prediction intervals
"""

from .config import ReportConfig, load_config
from .decomposition import Decomposition, decompose
from .forecasting import AutoArimaForecaster, ForecastConfig, ForecastReport, forecast_daily_counts
from .ingest import BikeSharingData, load_datasets
from .smoothing import daily_series, loess_smooth
from .validate import check_known_dataset, validate_daily, validate_hourly

__version__ = "0.1.0"

__all__ = [
    "ReportConfig",
    "load_config",
    "BikeSharingData",
    "load_datasets",
    "validate_daily",
    "validate_hourly",
    "check_known_dataset",
    "daily_series",
    "loess_smooth",
    "Decomposition",
    "decompose",
    "AutoArimaForecaster",
    "ForecastConfig",
    "ForecastReport",
    "forecast_daily_counts",
]
