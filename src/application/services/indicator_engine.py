"""
Application service: technical indicators over a daily closing-price series.

Business decisions owned here:
  - Indicator windows (SMA 50/200, RSI 14).
  - Nominal trading-day offsets for period returns. These approximate calendar
    months and are configuration, not derived from dates.

Every function takes closes oldest first, either as a pandas Series or as any
sequence of floats, and returns None when the series is too short; None is
never a stand-in for zero.
"""

from typing import Optional, Sequence, Union

import pandas as pd

from src.domain.entities.analysis import IndicatorSet

SMA_SHORT_WINDOW: int = 50
SMA_LONG_WINDOW: int = 200
RSI_PERIOD: int = 14
RSI_MAX: float = 100.0

ONE_MONTH_TRADING_DAYS: int = 21
SIX_MONTH_TRADING_DAYS: int = 126
ONE_YEAR_TRADING_DAYS: int = 252

Closes = Union[pd.Series, Sequence[float]]


def to_close_series(closes: Closes) -> pd.Series:
    """Positional float Series of *closes*; an existing Series keeps its values."""
    if isinstance(closes, pd.Series):
        return closes.astype("float64").reset_index(drop=True)
    return pd.Series(list(closes), dtype="float64")


def _finite(value: float) -> Optional[float]:
    if pd.isna(value):
        return None
    return float(value)


def moving_average(closes: Closes, window: int) -> Optional[float]:
    """Unweighted mean of the last *window* closes."""
    series = to_close_series(closes)
    if window <= 0 or len(series) < window:
        return None
    return _finite(series.rolling(window=window).mean().iloc[-1])


def relative_strength_index(closes: Closes, period: int = RSI_PERIOD) -> Optional[float]:
    """Single-window RSI over the last *period* price changes.

    Gains and losses are plain averages over the window (no Wilder smoothing
    carried across earlier windows). A window with no losses is pinned to 100.
    """
    series = to_close_series(closes)
    if period <= 0 or len(series) < period + 1:
        return None

    delta = series.iloc[-(period + 1):].diff()
    avg_gain = delta.where(delta > 0, 0.0).rolling(window=period).mean().iloc[-1]
    avg_loss = (-delta.where(delta < 0, 0.0)).rolling(window=period).mean().iloc[-1]
    if pd.isna(avg_gain) or pd.isna(avg_loss):
        return None
    if avg_loss == 0:
        return RSI_MAX
    rs = avg_gain / avg_loss
    return float(RSI_MAX - RSI_MAX / (1 + rs))


def percent_return(closes: Closes, offset_days: int) -> Optional[float]:
    """Percent change from the close *offset_days* back to the latest close."""
    series = to_close_series(closes)
    if offset_days < 0 or len(series) <= offset_days:
        return None
    past = series.iloc[-1 - offset_days]
    if pd.isna(past) or past == 0:
        return None
    return _finite((series.iloc[-1] / past - 1) * 100)


def compute_indicator_set(closes: Closes) -> IndicatorSet:
    series = to_close_series(closes)
    return IndicatorSet(
        sma_short=moving_average(series, SMA_SHORT_WINDOW),
        sma_long=moving_average(series, SMA_LONG_WINDOW),
        rsi=relative_strength_index(series, RSI_PERIOD),
        return_1m=percent_return(series, ONE_MONTH_TRADING_DAYS),
        return_6m=percent_return(series, SIX_MONTH_TRADING_DAYS),
        return_1y=percent_return(series, ONE_YEAR_TRADING_DAYS),
    )
