# file: src/bikeshare/evaluation.py
"""
Forecast Fit Metrics

Computes error measures with explicit NaN handling (fail-loud principle).
"""

import logging
from typing import Dict

import numpy as np

logger = logging.getLogger(__name__)


class ForecastMetrics:
    """Compute forecasting evaluation metrics"""

    @staticmethod
    def rmse(y_true: np.ndarray, y_pred: np.ndarray) -> float:
        """
        Root Mean Squared Error

        Explicit NaN masking (fail-loud):
        - Returns NaN if no valid predictions
        - Masks NaN/inf values before computation
        """
        y_true, y_pred = np.asarray(y_true, dtype=float), np.asarray(y_pred, dtype=float)
        valid_mask = np.isfinite(y_pred) & np.isfinite(y_true)

        if valid_mask.sum() == 0:
            return np.nan

        return float(np.sqrt(np.mean((y_pred[valid_mask] - y_true[valid_mask]) ** 2)))

    @staticmethod
    def mae(y_true: np.ndarray, y_pred: np.ndarray) -> float:
        """
        Mean Absolute Error

        Explicit NaN masking (fail-loud):
        - Returns NaN if no valid predictions
        - Masks NaN/inf values before computation
        """
        y_true, y_pred = np.asarray(y_true, dtype=float), np.asarray(y_pred, dtype=float)
        valid_mask = np.isfinite(y_pred) & np.isfinite(y_true)

        if valid_mask.sum() == 0:
            return np.nan

        return float(np.mean(np.abs(y_pred[valid_mask] - y_true[valid_mask])))

    @staticmethod
    def mape(y_true: np.ndarray, y_pred: np.ndarray) -> float:
        """
        Mean Absolute Percentage Error (%)

        Masks NaN/inf values and zero y_true before computation.
        """
        y_true, y_pred = np.asarray(y_true, dtype=float), np.asarray(y_pred, dtype=float)
        valid_mask = (
            np.isfinite(y_pred) &
            np.isfinite(y_true) &
            (np.abs(y_true) > 1e-10)
        )

        if valid_mask.sum() == 0:
            return np.nan

        ape = np.abs((y_pred[valid_mask] - y_true[valid_mask]) / np.abs(y_true[valid_mask]))
        return float(100 * np.mean(ape))

    @staticmethod
    def coverage(y_true: np.ndarray, lower: np.ndarray, upper: np.ndarray) -> float:
        """
        Share (%) of actuals inside [lower, upper].

        Denominator is the valid rows, not the total rows.
        """
        y_true = np.asarray(y_true, dtype=float)
        lower, upper = np.asarray(lower, dtype=float), np.asarray(upper, dtype=float)
        valid_mask = np.isfinite(y_true) & np.isfinite(lower) & np.isfinite(upper)

        if valid_mask.sum() == 0:
            return np.nan

        inside = (y_true[valid_mask] >= lower[valid_mask]) & (y_true[valid_mask] <= upper[valid_mask])
        return float(100 * inside.mean())


def in_sample_metrics(actual: np.ndarray, fitted: np.ndarray) -> Dict[str, float]:
    """RMSE, MAE and MAPE of fitted values against the observed series"""
    metrics = {
        "rmse": ForecastMetrics.rmse(actual, fitted),
        "mae": ForecastMetrics.mae(actual, fitted),
        "mape": ForecastMetrics.mape(actual, fitted),
    }
    if any(np.isnan(v) for v in metrics.values()):
        logger.warning(f"In-sample metrics contain NaN: {metrics}")
    return metrics
