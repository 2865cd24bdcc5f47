"""Synthetic bike sharing tables and a fake HTTP session for offline tests."""

import io
import zipfile

import numpy as np
import pandas as pd
import pytest
import requests

MONTH_TO_SEASON = {12: 4, 1: 1, 2: 1, 3: 1, 4: 2, 5: 2, 6: 2, 7: 3, 8: 3, 9: 3, 10: 4, 11: 4}


def make_daily(start="2011-01-01", periods=731, seed=42) -> pd.DataFrame:
    """Daily table with the UCI schema and an annual demand cycle"""
    rng = np.random.default_rng(seed)
    dates = pd.date_range(start, periods=periods, freq="D")
    t = np.arange(periods)

    level = 4000 + 3 * t + 1500 * np.sin(2 * np.pi * (t - 100) / 365)
    casual = np.maximum(50, level * 0.2 + rng.normal(0, 80, periods)).round().astype(int)
    registered = np.maximum(100, level * 0.8 + rng.normal(0, 250, periods)).round().astype(int)

    weekday = ((dates.dayofweek + 1) % 7).to_numpy()
    return pd.DataFrame({
        "instant": t + 1,
        "dteday": dates,
        "season": dates.month.map(MONTH_TO_SEASON).to_numpy(),
        "yr": (dates.year - dates.year.min()).to_numpy(),
        "mnth": dates.month.to_numpy(),
        "holiday": 0,
        "weekday": weekday,
        "workingday": ((weekday >= 1) & (weekday <= 5)).astype(int),
        "weathersit": rng.choice([1, 2, 3], size=periods, p=[0.6, 0.35, 0.05]),
        "temp": rng.uniform(0.1, 0.9, periods).round(4),
        "atemp": rng.uniform(0.1, 0.9, periods).round(4),
        "hum": rng.uniform(0.2, 0.95, periods).round(4),
        "windspeed": rng.uniform(0.02, 0.5, periods).round(4),
        "casual": casual,
        "registered": registered,
        "cnt": casual + registered,
    })


def make_hourly(daily: pd.DataFrame, seed=7) -> pd.DataFrame:
    """Hourly table: 24 rows per date of the daily table"""
    rng = np.random.default_rng(seed)
    hourly = daily.loc[daily.index.repeat(24)].reset_index(drop=True)
    hourly.insert(5, "hr", np.tile(np.arange(24), len(daily)))

    n = len(hourly)
    casual = rng.integers(0, 40, n)
    registered = rng.integers(1, 200, n)
    hourly["casual"] = casual
    hourly["registered"] = registered
    hourly["cnt"] = casual + registered
    hourly["instant"] = np.arange(1, n + 1)
    return hourly


def make_archive_bytes(daily: pd.DataFrame, hourly: pd.DataFrame, members=("day.csv", "hour.csv")) -> bytes:
    """Zip with the same member layout as Bike-Sharing-Dataset.zip"""
    tables = {"day.csv": daily, "hour.csv": hourly}
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("Readme.txt", "synthetic bike sharing data")
        for name in members:
            zf.writestr(name, tables[name].to_csv(index=False, date_format="%Y-%m-%d"))
    return buf.getvalue()


class FakeResponse:
    def __init__(self, content: bytes, status_code: int = 200):
        self.content = content
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")


class FakeSession:
    """Stands in for requests.Session; records every GET"""

    def __init__(self, content: bytes = b"", status_code: int = 200):
        self.content = content
        self.status_code = status_code
        self.calls = []

    def get(self, url, timeout=None, **kwargs):
        self.calls.append((url, timeout))
        return FakeResponse(self.content, self.status_code)


@pytest.fixture(scope="session")
def daily_df() -> pd.DataFrame:
    return make_daily()


@pytest.fixture(scope="session")
def hourly_df(daily_df) -> pd.DataFrame:
    return make_hourly(daily_df.head(60))


@pytest.fixture
def daily(daily_df) -> pd.DataFrame:
    return daily_df.copy()


@pytest.fixture
def hourly(hourly_df) -> pd.DataFrame:
    return hourly_df.copy()


@pytest.fixture
def archive_bytes(daily_df) -> bytes:
    return make_archive_bytes(daily_df, make_hourly(daily_df))
