"""Tests for the technical indicator service."""

import pandas as pd
import pytest

from src.application.services.indicator_engine import (
    ONE_MONTH_TRADING_DAYS,
    compute_indicator_set,
    moving_average,
    percent_return,
    relative_strength_index,
    to_close_series,
)


class TestMovingAverage:
    """Test simple moving average."""

    def test_short_series_is_absent(self):
        assert moving_average([1.0, 2.0], 3) is None

    def test_exact_window_is_mean_of_whole_series(self):
        assert moving_average([1.0, 2.0, 3.0], 3) == 2.0

    def test_uses_only_last_window_values(self):
        assert moving_average([100.0, 1.0, 2.0, 3.0, 4.0], 2) == 3.5

    def test_empty_series(self):
        assert moving_average([], 1) is None


class TestRelativeStrengthIndex:
    """Test single-window RSI."""

    def test_monotonic_increase_is_100(self):
        closes = [float(x) for x in range(1, 16)]
        assert relative_strength_index(closes, 14) == 100.0

    def test_monotonic_increase_any_period(self):
        closes = [float(x) for x in range(1, 40)]
        for period in (2, 5, 14, 30):
            assert relative_strength_index(closes, period) == 100.0

    def test_requires_period_plus_one_points(self):
        closes = [float(x) for x in range(1, 15)]
        assert relative_strength_index(closes, 14) is None

    def test_monotonic_decrease_is_zero(self):
        closes = [float(x) for x in range(20, 0, -1)]
        assert relative_strength_index(closes, 14) == 0.0

    def test_equal_gains_and_losses_is_50(self):
        assert relative_strength_index([1.0, 2.0, 1.0], 2) == pytest.approx(50.0)

    def test_only_last_window_counts(self):
        """A large earlier drop outside the window does not affect the value."""
        assert relative_strength_index([100.0, 1.0, 2.0, 1.0], 2) == pytest.approx(50.0)

    def test_flat_series_has_no_losses(self):
        assert relative_strength_index([5.0] * 15, 14) == 100.0

    def test_classic_ratio(self):
        # gains 2 + 2 = 4, losses 1 -> avg_gain 4/3, avg_loss 1/3 -> rs 4
        closes = [10.0, 12.0, 11.0, 13.0]
        assert relative_strength_index(closes, 3) == pytest.approx(80.0)


class TestPercentReturn:
    """Test period returns."""

    def test_equal_prices_is_zero(self):
        assert percent_return([100.0, 50.0, 100.0], 2) == 0.0

    def test_rising_price_is_positive(self):
        assert percent_return([100.0, 110.0], 1) == pytest.approx(10.0)

    def test_falling_price_is_negative(self):
        assert percent_return([100.0, 90.0], 1) == pytest.approx(-10.0)

    def test_series_not_longer_than_offset_is_absent(self):
        assert percent_return([1.0, 2.0], 2) is None

    def test_zero_past_price_is_absent(self):
        assert percent_return([0.0, 5.0], 1) is None


class TestComputeIndicatorSet:
    """Test the combined indicator set."""

    def test_long_series_fills_every_field(self):
        closes = [float(x) for x in range(1, 301)]
        indicators = compute_indicator_set(closes)

        assert indicators.sma_short == pytest.approx(sum(closes[-50:]) / 50)
        assert indicators.sma_long == pytest.approx(sum(closes[-200:]) / 200)
        assert indicators.rsi == 100.0
        assert indicators.return_1m == pytest.approx((300 / 279 - 1) * 100)
        assert indicators.return_6m is not None
        assert indicators.return_1y == pytest.approx((300 / 48 - 1) * 100)

    def test_short_series_leaves_fields_absent(self):
        closes = [10.0] * (ONE_MONTH_TRADING_DAYS + 1)
        indicators = compute_indicator_set(closes)

        assert indicators.sma_short is None
        assert indicators.sma_long is None
        assert indicators.return_6m is None
        assert indicators.return_1y is None
        assert indicators.return_1m == 0.0
        assert indicators.rsi == 100.0

    def test_accepts_dated_series(self):
        index = pd.date_range("2024-01-01", periods=300, freq="B")
        series = pd.Series([float(x) for x in range(1, 301)], index=index)
        indicators = compute_indicator_set(series)

        assert indicators.sma_short == pytest.approx(275.5)
        assert indicators.return_1m == pytest.approx((300 / 279 - 1) * 100)
        assert isinstance(indicators.sma_short, float)

    def test_nan_close_is_absent_not_nan(self):
        closes = [float("nan")] + [10.0] * ONE_MONTH_TRADING_DAYS
        indicators = compute_indicator_set(closes)

        assert indicators.return_1m is None


class TestToCloseSeries:
    """Test conversion of closes into a positional Series."""

    def test_list_becomes_float_series(self):
        series = to_close_series([1, 2, 3])

        assert series.dtype == "float64"
        assert series.tolist() == [1.0, 2.0, 3.0]

    def test_series_index_is_dropped(self):
        series = to_close_series(pd.Series([5.0, 6.0], index=["a", "b"]))

        assert series.index.tolist() == [0, 1]
