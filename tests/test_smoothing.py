"""LOESS smoothing contract: same length, same index"""

import numpy as np
import pandas as pd
import pytest

from bikeshare.smoothing import daily_series, loess_smooth, plot_smoothing


class TestDailySeries:

    def test_indexed_by_date(self, daily):
        series = daily_series(daily)
        assert isinstance(series.index, pd.DatetimeIndex)
        assert len(series) == 731
        assert series.dtype == float
        assert series.index.is_monotonic_increasing

    def test_unsorted_input_sorted(self, daily):
        series = daily_series(daily.iloc[::-1])
        assert series.index.is_monotonic_increasing
        assert series.iloc[0] == daily["cnt"].iloc[0]

    @pytest.mark.fail_loud
    def test_duplicate_dates_raise(self, daily):
        with pytest.raises(ValueError, match="duplicate"):
            daily_series(pd.concat([daily, daily.iloc[:1]]))


class TestLoessSmooth:

    def test_same_length_and_index(self, daily):
        series = daily_series(daily)
        smoothed = loess_smooth(series, span=0.5)

        assert len(smoothed) == len(series)
        assert smoothed.index.equals(series.index)
        assert smoothed.notna().all()

    def test_smoother_than_input(self, daily):
        series = daily_series(daily)
        smoothed = loess_smooth(series)
        assert smoothed.diff().abs().mean() < series.diff().abs().mean()

    def test_linear_series_recovered(self):
        idx = pd.date_range("2020-01-01", periods=100, freq="D")
        series = pd.Series(10.0 + 2.0 * np.arange(100), index=idx)

        smoothed = loess_smooth(series, span=0.5)

        np.testing.assert_allclose(smoothed.to_numpy(), series.to_numpy(), rtol=1e-6)

    def test_span_changes_result(self, daily):
        series = daily_series(daily)
        narrow = loess_smooth(series, span=0.1)
        wide = loess_smooth(series, span=0.9)
        assert not np.allclose(narrow.to_numpy(), wide.to_numpy())

    @pytest.mark.fail_loud
    @pytest.mark.parametrize("span", [0.0, -0.1, 1.01])
    def test_invalid_span_raises(self, span):
        series = pd.Series([1.0, 2.0, 3.0], index=pd.date_range("2020-01-01", periods=3))
        with pytest.raises(ValueError, match="span"):
            loess_smooth(series, span=span)

    def test_plot_written(self, daily, tmp_path):
        series = daily_series(daily)
        path = plot_smoothing(series, loess_smooth(series), tmp_path / "loess.png")
        assert path.exists()
