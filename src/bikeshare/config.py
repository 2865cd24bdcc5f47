# file: src/bikeshare/config.py
"""
Report Configuration

Every modelling literal of the analysis lives here as a dataclass default:
LOESS span, decomposition period, forecast horizon, interval levels.
Paths can be overridden from .env (local) or the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path
from typing import Tuple

from dotenv import load_dotenv

DATA_URL = "https://archive.ics.uci.edu/ml/machine-learning-databases/00275/Bike-Sharing-Dataset.zip"


@dataclass(frozen=True)
class ReportConfig:
    # Data acquisition
    data_url: str = DATA_URL
    data_dir: str = "data"
    timeout: int = 60
    overwrite: bool = False

    # Outputs
    reports_dir: str = "reports"

    # Smoothing
    loess_span: float = 0.5

    # Decomposition (annual cycle, leap days ignored)
    decomposition_period: int = 365
    decomposition_model: str = "multiplicative"

    # Forecasting
    horizon: int = 30
    confidence_levels: Tuple[int, ...] = (80, 95)
    seasonal: bool = False

    def run_id(self) -> str:
        return datetime.now().strftime("%Y%m%d_%H%M%S_%f")

    def data_path(self) -> Path:
        return Path(self.data_dir)

    def archive_path(self) -> Path:
        return self.data_path() / "Bike-Sharing-Dataset.zip"

    def day_csv_path(self) -> Path:
        return self.data_path() / "day.csv"

    def hour_csv_path(self) -> Path:
        return self.data_path() / "hour.csv"

    def reports_path(self) -> Path:
        return Path(self.reports_dir)

    def summary_path(self, run_dir: Path) -> Path:
        return run_dir / "summary.json"


def load_config(**overrides) -> ReportConfig:
    """
    Build a ReportConfig.

    Reads BIKESHARE_DATA_URL, BIKESHARE_DATA_DIR and BIKESHARE_REPORTS_DIR
    from .env or the environment. Explicit keyword overrides win.
    """
    load_dotenv()

    env = {
        "data_url": os.getenv("BIKESHARE_DATA_URL"),
        "data_dir": os.getenv("BIKESHARE_DATA_DIR"),
        "reports_dir": os.getenv("BIKESHARE_REPORTS_DIR"),
    }
    values = {k: v for k, v in env.items() if v}
    values.update({k: v for k, v in overrides.items() if v is not None})

    cfg = replace(ReportConfig(), **values)

    if not 0 < cfg.loess_span <= 1:
        raise ValueError(f"loess_span must be in (0, 1], got {cfg.loess_span}")
    if cfg.decomposition_period < 2:
        raise ValueError(f"decomposition_period must be >= 2, got {cfg.decomposition_period}")
    if cfg.horizon < 1:
        raise ValueError(f"horizon must be >= 1, got {cfg.horizon}")

    return cfg
