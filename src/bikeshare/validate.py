"""
Validate Bike Sharing Tables

Hard gates for data quality:
- Schema: every documented column present
- Uniqueness: no duplicate dates (daily) or (date, hour) pairs (hourly)
- Contiguity: expected daily calendar vs observed
- Counts: cnt == casual + registered on every row
- Codes: season and weathersit inside their closed enumerations
"""

from dataclasses import dataclass, field
from typing import Iterable, List

import pandas as pd

DAILY_COLUMNS = [
    "instant", "dteday", "season", "yr", "mnth", "holiday", "weekday",
    "workingday", "weathersit", "temp", "atemp", "hum", "windspeed",
    "casual", "registered", "cnt",
]
HOURLY_COLUMNS = DAILY_COLUMNS[:5] + ["hr"] + DAILY_COLUMNS[5:]

SEASON_LABELS = {1: "spring", 2: "summer", 3: "fall", 4: "winter"}
WEATHER_LABELS = {
    1: "clear",
    2: "mist",
    3: "light precipitation",
    4: "heavy precipitation",
}

KNOWN_DAILY_ROWS = 731
KNOWN_DATE_MIN = pd.Timestamp("2011-01-01")
KNOWN_DATE_MAX = pd.Timestamp("2012-12-31")


def check_schema(df: pd.DataFrame, required: Iterable[str]) -> None:
    """Raise ValueError if any required column is missing"""
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")


@dataclass
class ValidationResult:
    """Results of table validation"""
    table: str
    is_valid: bool
    n_rows: int
    n_duplicates: int
    n_missing_dates: int
    missing_dates: List[pd.Timestamp]
    n_count_mismatches: int
    invalid_seasons: List[int] = field(default_factory=list)
    invalid_weather: List[int] = field(default_factory=list)
    is_monotonic: bool = True
    date_min: pd.Timestamp = None
    date_max: pd.Timestamp = None


def _validate(df: pd.DataFrame, table: str, keys: List[str]) -> ValidationResult:
    duplicates = df.duplicated(subset=keys, keep=False)
    n_duplicates = int(duplicates.sum())

    dates = pd.to_datetime(df["dteday"], errors="raise")
    expected_range = pd.date_range(start=dates.min(), end=dates.max(), freq="D")
    missing_dates = sorted(set(expected_range) - set(dates))

    is_monotonic = bool(dates.is_monotonic_increasing)

    mismatches = df["cnt"] != df["casual"] + df["registered"]
    n_count_mismatches = int(mismatches.sum())

    invalid_seasons = sorted(set(df["season"].unique()) - set(SEASON_LABELS))
    invalid_weather = sorted(set(df["weathersit"].unique()) - set(WEATHER_LABELS))

    is_valid = (
        n_duplicates == 0
        and not missing_dates
        and is_monotonic
        and n_count_mismatches == 0
        and not invalid_seasons
        and not invalid_weather
    )

    return ValidationResult(
        table=table,
        is_valid=is_valid,
        n_rows=len(df),
        n_duplicates=n_duplicates,
        n_missing_dates=len(missing_dates),
        missing_dates=missing_dates[:10],  # First 10 only
        n_count_mismatches=n_count_mismatches,
        invalid_seasons=[int(s) for s in invalid_seasons],
        invalid_weather=[int(w) for w in invalid_weather],
        is_monotonic=is_monotonic,
        date_min=dates.min(),
        date_max=dates.max(),
    )


def validate_daily(df: pd.DataFrame) -> ValidationResult:
    """
    Validate the daily table.

    Args:
        df: Daily table as loaded from day.csv

    Returns:
        ValidationResult with detailed findings
    """
    check_schema(df, DAILY_COLUMNS)
    return _validate(df, "daily", ["dteday"])


def validate_hourly(df: pd.DataFrame) -> ValidationResult:
    """
    Validate the hourly table.

    Dates must still cover a contiguous calendar; individual hours may be
    absent (the published data has hours with no rentals recorded).
    """
    check_schema(df, HOURLY_COLUMNS)
    return _validate(df, "hourly", ["dteday", "hr"])


def assert_valid(result: ValidationResult) -> None:
    """Raise ValueError if the table failed any gate"""
    if not result.is_valid:
        raise ValueError(
            f"{result.table} table failed validation: "
            f"duplicates={result.n_duplicates}, "
            f"missing_dates={result.n_missing_dates}, "
            f"count_mismatches={result.n_count_mismatches}, "
            f"invalid_seasons={result.invalid_seasons}, "
            f"invalid_weather={result.invalid_weather}, "
            f"monotonic={result.is_monotonic}"
        )


def check_known_dataset(daily: pd.DataFrame) -> None:
    """
    Check the published facts of the UCI daily table.

    731 rows spanning 2011-01-01 through 2012-12-31, every documented
    column present, cnt == casual + registered on every row.
    """
    check_schema(daily, DAILY_COLUMNS)

    if len(daily) != KNOWN_DAILY_ROWS:
        raise ValueError(f"Expected {KNOWN_DAILY_ROWS} daily rows, got {len(daily)}")

    dates = pd.to_datetime(daily["dteday"], errors="raise")
    if dates.min() != KNOWN_DATE_MIN or dates.max() != KNOWN_DATE_MAX:
        raise ValueError(
            f"Expected dates {KNOWN_DATE_MIN.date()}..{KNOWN_DATE_MAX.date()}, "
            f"got {dates.min().date()}..{dates.max().date()}"
        )

    if not (daily["cnt"] == daily["casual"] + daily["registered"]).all():
        raise ValueError("cnt != casual + registered on at least one row")


def print_validation_report(result: ValidationResult) -> None:
    """Print a human-readable validation report"""
    status = "PASS" if result.is_valid else "FAIL"
    print(f"\n=== Validation Report ({result.table}): {status} ===")
    print(f"Rows: {result.n_rows}")
    print(f"Date range: {result.date_min.date()} to {result.date_max.date()}")
    print(f"Duplicates: {result.n_duplicates}")
    print(f"Missing dates: {result.n_missing_dates}")
    if result.missing_dates:
        print(f"  First missing: {result.missing_dates[:5]}")
    print(f"cnt != casual + registered: {result.n_count_mismatches}")
    if result.invalid_seasons:
        print(f"Invalid season codes: {result.invalid_seasons}")
    if result.invalid_weather:
        print(f"Invalid weather codes: {result.invalid_weather}")
    print(f"Monotonic: {result.is_monotonic}")
