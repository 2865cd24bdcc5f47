"""
Decomposition Properties

- observed ≈ trend × seasonal × resid where trend is defined
- seasonal factors average to 1 over one full cycle
- trend absent for exactly the first and last period // 2 observations
"""

import numpy as np
import pandas as pd
import pytest

from bikeshare.decomposition import decompose, plot_decomposition
from bikeshare.smoothing import daily_series


def seasonal_series(n_cycles=5, period=12, seed=0) -> pd.Series:
    rng = np.random.default_rng(seed)
    n = n_cycles * period + 3
    t = np.arange(n)
    values = (100 + t) * (1 + 0.3 * np.sin(2 * np.pi * t / period)) * rng.uniform(0.95, 1.05, n)
    return pd.Series(values, index=pd.date_range("2020-01-01", periods=n, freq="D"))


class TestDecomposeProperties:

    @pytest.mark.parametrize("period", [7, 12])
    def test_trend_edges_undefined(self, period):
        series = seasonal_series(period=period)
        result = decompose(series, period=period)
        half = period // 2

        assert result.trend.iloc[:half].isna().all()
        assert result.trend.iloc[-half:].isna().all()
        assert result.trend.iloc[half:-half].notna().all()
        assert result.resid.isna().sum() == 2 * half

    @pytest.mark.parametrize("period", [7, 12])
    def test_seasonal_factors_unit_mean(self, period):
        result = decompose(seasonal_series(period=period), period=period)
        assert result.seasonal_factors().mean() == pytest.approx(1.0, abs=1e-10)
        assert len(result.seasonal_factors()) == period

    def test_seasonal_component_is_periodic(self):
        result = decompose(seasonal_series(period=12), period=12)
        seasonal = result.seasonal.to_numpy()
        np.testing.assert_allclose(seasonal[:12], seasonal[12:24])

    def test_product_recovers_observed(self):
        series = seasonal_series()
        result = decompose(series, period=12)
        defined = result.trend.notna()

        np.testing.assert_allclose(
            result.recombine()[defined].to_numpy(),
            series[defined].to_numpy(),
            rtol=1e-10,
        )

    def test_additive_model(self):
        series = seasonal_series()
        result = decompose(series, period=12, model="additive")
        assert result.seasonal_factors().mean() == pytest.approx(0.0, abs=1e-8)
        defined = result.trend.notna()
        np.testing.assert_allclose(result.recombine()[defined], series[defined])

    def test_annual_period_on_daily_table(self, daily):
        series = daily_series(daily)
        result = decompose(series, period=365)

        assert len(result.trend) == 731
        assert result.trend.isna().sum() == 2 * 182
        assert result.trend.iloc[182:-182].notna().all()
        assert result.seasonal_factors().mean() == pytest.approx(1.0)
        assert result.observed.index.equals(series.index)


@pytest.mark.fail_loud
class TestDecomposeErrors:

    def test_too_short_raises(self):
        series = seasonal_series(n_cycles=1, period=12)
        with pytest.raises(ValueError, match="two full cycles"):
            decompose(series, period=12)

    def test_non_positive_raises_for_multiplicative(self):
        series = seasonal_series()
        series.iloc[5] = 0.0
        with pytest.raises(ValueError, match="positive"):
            decompose(series, period=12)

    def test_missing_values_raise(self):
        series = seasonal_series()
        series.iloc[5] = np.nan
        with pytest.raises(ValueError, match="missing"):
            decompose(series, period=12)

    def test_unknown_model_raises(self):
        with pytest.raises(ValueError, match="model"):
            decompose(seasonal_series(), period=12, model="stl")


def test_plot_decomposition(tmp_path):
    result = decompose(seasonal_series(), period=12)
    path = plot_decomposition(result, tmp_path / "decomp.png")
    assert path.exists()
