"""
Ingest the UCI Bike Sharing archive

One-time fetch, no retries:
- Downloads Bike-Sharing-Dataset.zip (skipped when cached, unless overwrite)
- Extracts day.csv / hour.csv
- Parses both tables with the schema gate
"""

import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import pandas as pd
import requests

from .config import ReportConfig
from .io_utils import atomic_write_bytes, ensure_dir
from .validate import DAILY_COLUMNS, HOURLY_COLUMNS, check_schema

logger = logging.getLogger(__name__)

CSV_MEMBERS = ("day.csv", "hour.csv")


@dataclass
class BikeSharingData:
    """Daily and hourly rental tables, read-only after loading"""
    daily: pd.DataFrame
    hourly: pd.DataFrame


def create_session() -> requests.Session:
    """Plain session; a failed download is terminal for the run"""
    session = requests.Session()
    session.headers.update({"User-Agent": "bikeshare-report"})
    return session


def download_archive(cfg: ReportConfig, session: Optional[requests.Session] = None) -> Path:
    """
    Download the dataset archive to cfg.archive_path().

    Args:
        cfg: Report configuration (URL, data_dir, timeout, overwrite)
        session: Optional session (tests inject a fake one)

    Returns:
        Path to the local archive
    """
    target = cfg.archive_path()
    if target.exists() and not cfg.overwrite:
        logger.info(f"Using cached archive: {target}")
        return target

    session = session or create_session()
    logger.info(f"Downloading {cfg.data_url}")

    response = session.get(cfg.data_url, timeout=cfg.timeout)
    response.raise_for_status()

    atomic_write_bytes(response.content, target)

    logger.info(f"Saved archive: {target} ({len(response.content)} bytes)")
    return target


def extract_archive(archive: Path, dest: Path) -> List[Path]:
    """
    Extract day.csv and hour.csv from the archive into dest.

    Raises:
        zipfile.BadZipFile: archive is corrupt
        FileNotFoundError: a CSV member is missing
    """
    ensure_dir(dest)
    extracted = []

    with zipfile.ZipFile(archive) as zf:
        by_name = {Path(name).name: name for name in zf.namelist()}
        for member in CSV_MEMBERS:
            if member not in by_name:
                raise FileNotFoundError(f"{member} not found in {archive}")
            out = dest / member
            out.write_bytes(zf.read(by_name[member]))
            extracted.append(out)

    logger.info(f"Extracted {[p.name for p in extracted]} to {dest}")
    return extracted


def _read_table(path: Path, required: List[str]) -> pd.DataFrame:
    df = pd.read_csv(path)
    check_schema(df, required)
    df["dteday"] = pd.to_datetime(df["dteday"], errors="raise")
    return df


def read_daily(path: Path) -> pd.DataFrame:
    """Parse day.csv (dteday as datetime)"""
    df = _read_table(path, DAILY_COLUMNS)
    return df.sort_values("dteday").reset_index(drop=True)


def read_hourly(path: Path) -> pd.DataFrame:
    """Parse hour.csv (dteday as datetime, sorted by date then hour)"""
    df = _read_table(path, HOURLY_COLUMNS)
    return df.sort_values(["dteday", "hr"]).reset_index(drop=True)


def load_datasets(cfg: ReportConfig, session: Optional[requests.Session] = None) -> BikeSharingData:
    """
    Download, extract and parse both tables.

    Implementation pattern:
    1. Fetch archive (or reuse the cached one)
    2. Unzip the two CSV members into data_dir
    3. Read with schema check
    """
    archive = download_archive(cfg, session=session)
    extract_archive(archive, cfg.data_path())

    daily = read_daily(cfg.day_csv_path())
    hourly = read_hourly(cfg.hour_csv_path())

    logger.info(
        f"Loaded daily={len(daily)} rows "
        f"({daily['dteday'].min().date()} to {daily['dteday'].max().date()}), "
        f"hourly={len(hourly)} rows"
    )
    return BikeSharingData(daily=daily, hourly=hourly)
