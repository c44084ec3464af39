"""Technical indicator calculations."""

from typing import Optional, Sequence

import pandas as pd

MIN_INDICATOR_CLOSES = 20


def moving_average(prices: Sequence[float], period: int) -> Optional[float]:
    """
    Simple moving average of the last ``period`` prices.

    Args:
        prices: Close prices, oldest first
        period: Number of periods for the average

    Returns:
        Average rounded to 2 decimals, or None with fewer than ``period`` prices
    """
    series = pd.Series(prices, dtype="float64")
    if len(series) < period:
        return None
    return round(float(series.rolling(window=period).mean().iloc[-1]), 2)


def rsi(prices: Sequence[float], period: int = 14) -> Optional[float]:
    """
    Relative Strength Index over the last ``period`` price changes.

    Gains and losses are plain averages over the window, not Wilder-smoothed.

    Args:
        prices: Close prices, oldest first
        period: RSI period (default: 14)

    Returns:
        RSI (0-100 scale) rounded to 2 decimals, or None with too few prices
    """
    series = pd.Series(prices, dtype="float64")
    if len(series) < period + 1:
        return None

    delta = series.diff().tail(period)
    avg_gain = delta.clip(lower=0).sum() / period
    avg_loss = (-delta).clip(lower=0).sum() / period

    if avg_loss == 0:
        return 100.0

    rs = avg_gain / avg_loss
    return round(float(100 - (100 / (1 + rs))), 2)
