"""Automatic ARIMA forecasting of the daily count.

This module wraps statsforecast's AutoARIMA with:
- Non-seasonal search (seasonal differencing and terms disabled)
- Order selection by information criterion, delegated to AutoARIMA
- Maximum likelihood fit, fixed horizon with dual prediction intervals (80%, 95%)
- In-sample RMSE / MAE / MAPE, interval coverage and AIC / BIC / AICc
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

import numpy as np
import pandas as pd

from .evaluation import ForecastMetrics, in_sample_metrics

logger = logging.getLogger(__name__)

MODEL_ALIAS = "AutoARIMA"
SERIES_ID = "daily_cnt"


@dataclass
class ForecastConfig:
    """Configuration for the daily count forecast."""

    horizon: int = 30
    confidence_levels: Tuple[int, ...] = (80, 95)
    seasonal: bool = False
    season_length: int = 1
    freq: str = "D"


@dataclass
class ForecastReport:
    """Fitted model summary and forecast frame."""

    order: Tuple[int, int, int]
    forecast: pd.DataFrame
    fitted: pd.Series
    metrics: Dict[str, float]
    aic: float
    bic: float
    aicc: float
    confidence_levels: Tuple[int, ...] = field(default=(80, 95))

    def to_dict(self) -> dict:
        return {
            "order": list(self.order),
            "aic": self.aic,
            "bic": self.bic,
            "aicc": self.aicc,
            **self.metrics,
        }


class AutoArimaForecaster:
    """Single-series AutoARIMA forecaster.

    Example:
        >>> model = AutoArimaForecaster(ForecastConfig(horizon=30))
        >>> model.fit(series)
        >>> forecast = model.predict()
        >>> print(forecast[["ds", "yhat", "yhat_lo_95", "yhat_hi_95"]])
    """

    def __init__(self, config: Optional[ForecastConfig] = None):
        self.config = config or ForecastConfig()
        self.sf = None
        self._train_df = None
        self.fitted = False

    def _check_fitted(self) -> None:
        if not self.fitted:
            raise RuntimeError("Model must be fitted before use. Call fit() first.")

    def fit(self, series: pd.Series) -> "AutoArimaForecaster":
        """Select the ARIMA order and fit it by maximum likelihood.

        Args:
            series: Observations indexed by date (no missing values)
        """
        from statsforecast import StatsForecast
        from statsforecast.models import AutoARIMA

        if series.isna().any():
            raise ValueError("Series contains missing values")

        self._train_df = pd.DataFrame({
            "unique_id": SERIES_ID,
            "ds": pd.DatetimeIndex(series.index),
            "y": series.to_numpy(dtype=float),
        })

        self.sf = StatsForecast(
            models=[
                AutoARIMA(
                    season_length=self.config.season_length,
                    seasonal=self.config.seasonal,
                    alias=MODEL_ALIAS,
                )
            ],
            freq=self.config.freq,
            n_jobs=1,
        )
        self.sf.fit(df=self._train_df)
        self.fitted = True

        logger.info(f"AutoARIMA fit: {len(series)} observations, selected ARIMA{self.order}")
        return self

    @property
    def _model(self):
        self._check_fitted()
        return self.sf.fitted_[0, 0].model_

    @property
    def order(self) -> Tuple[int, int, int]:
        """Selected (p, d, q)"""
        # arma layout: (p, q, P, Q, season_length, d, D)
        arma = self._model["arma"]
        return int(arma[0]), int(arma[5]), int(arma[1])

    def information_criteria(self) -> Dict[str, float]:
        model = self._model
        return {
            "aic": float(model["aic"]),
            "bic": float(model["bic"]),
            "aicc": float(model["aicc"]),
        }

    def fitted_values(self) -> pd.Series:
        """One-step-ahead in-sample fitted values"""
        self._check_fitted()
        in_sample = self.sf.fitted_[0, 0].predict_in_sample()
        return pd.Series(
            np.asarray(in_sample["fitted"], dtype=float),
            index=pd.DatetimeIndex(self._train_df["ds"]),
            name="fitted",
        )

    def fitted_intervals(self) -> pd.DataFrame:
        """In-sample fitted values with fitted_lo_<level> / fitted_hi_<level> bands"""
        self._check_fitted()
        levels = list(self.config.confidence_levels)
        in_sample = self.sf.fitted_[0, 0].predict_in_sample(level=levels)

        result = pd.DataFrame(
            {"fitted": np.asarray(in_sample["fitted"], dtype=float)},
            index=pd.DatetimeIndex(self._train_df["ds"]),
        )
        for level in levels:
            result[f"fitted_lo_{level}"] = np.asarray(in_sample[f"fitted-lo-{level}"], dtype=float)
            result[f"fitted_hi_{level}"] = np.asarray(in_sample[f"fitted-hi-{level}"], dtype=float)
        return result

    def predict(self) -> pd.DataFrame:
        """Generate forecasts with prediction intervals.

        Returns:
            DataFrame with columns:
            - ds, yhat
            - yhat_lo_<level>, yhat_hi_<level> for each confidence level
        """
        self._check_fitted()

        forecasts = self.sf.predict(h=self.config.horizon, level=list(self.config.confidence_levels))
        if "unique_id" not in forecasts.columns:
            forecasts = forecasts.reset_index()

        result = pd.DataFrame({
            "ds": pd.to_datetime(forecasts["ds"]),
            "yhat": forecasts[MODEL_ALIAS].to_numpy(dtype=float),
        })
        for level in self.config.confidence_levels:
            result[f"yhat_lo_{level}"] = forecasts[f"{MODEL_ALIAS}-lo-{level}"].to_numpy(dtype=float)
            result[f"yhat_hi_{level}"] = forecasts[f"{MODEL_ALIAS}-hi-{level}"].to_numpy(dtype=float)

        logger.info(f"Predictions generated: {len(result)} rows, {self.config.horizon}d horizon")
        return result


def forecast_daily_counts(series: pd.Series, config: Optional[ForecastConfig] = None) -> ForecastReport:
    """
    Fit AutoARIMA to the series and forecast config.horizon days ahead.

    Deterministic: the same series and configuration give the same order
    and forecast values.
    """
    config = config or ForecastConfig()
    model = AutoArimaForecaster(config).fit(series)

    forecast = model.predict()
    fitted = model.fitted_values()
    actual = series.to_numpy(dtype=float)
    metrics = in_sample_metrics(actual, fitted.to_numpy())

    bands = model.fitted_intervals()
    for level in config.confidence_levels:
        metrics[f"coverage_{level}"] = ForecastMetrics.coverage(
            actual,
            bands[f"fitted_lo_{level}"].to_numpy(),
            bands[f"fitted_hi_{level}"].to_numpy(),
        )

    criteria = model.information_criteria()

    logger.info(
        f"ARIMA{model.order}: AIC={criteria['aic']:.1f}, BIC={criteria['bic']:.1f}, "
        f"RMSE={metrics['rmse']:.1f}, MAE={metrics['mae']:.1f}, MAPE={metrics['mape']:.2f}%"
    )

    return ForecastReport(
        order=model.order,
        forecast=forecast,
        fitted=fitted,
        metrics=metrics,
        aic=criteria["aic"],
        bic=criteria["bic"],
        aicc=criteria["aicc"],
        confidence_levels=tuple(config.confidence_levels),
    )


def format_model_summary(report: ForecastReport) -> str:
    """Printable fit summary"""
    p, d, q = report.order
    lines = [
        f"Selected model: ARIMA({p},{d},{q})",
        f"  AIC:  {report.aic:.2f}",
        f"  AICc: {report.aicc:.2f}",
        f"  BIC:  {report.bic:.2f}",
        "In-sample fit:",
        f"  RMSE: {report.metrics['rmse']:.2f}",
        f"  MAE:  {report.metrics['mae']:.2f}",
        f"  MAPE: {report.metrics['mape']:.2f}%",
        *[
            f"  Coverage {level}%: {report.metrics[f'coverage_{level}']:.1f}%"
            for level in report.confidence_levels
            if f"coverage_{level}" in report.metrics
        ],
        f"Forecast: {len(report.forecast)} days, "
        f"{report.forecast['ds'].min().date()} to {report.forecast['ds'].max().date()}",
    ]
    return "\n".join(lines)
