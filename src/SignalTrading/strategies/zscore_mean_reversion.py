"""
Z-Score Mean Reversion Strategy - Statistical approach to mean reversion.

Uses z-score (standard deviations from mean) to identify extreme deviations
and trade the reversion.

Best for: range-bound assets
"""

from typing import Sequence

import numpy as np

from SignalTrading.models import PricePoint
from . import register
from .base import TradingStrategy, tail_prices


@register("zscore_mean_reversion")
class ZScoreMeanReversionStrategy(TradingStrategy):
    """
    Z-Score based mean reversion strategy (long only).

    Logic:
    1. Calculate rolling mean and standard deviation
    2. Compute z-score: (price - mean) / std
    3. Buy when z-score < -entry_threshold (oversold)
    4. Sell when z-score >= exit_threshold (reverted)

    Parameters:
        lookback_period: Period for mean/std calculation (default: 20)
        entry_threshold: Z-score to enter (default: 2.0 = 2 std devs)
        exit_threshold: Z-score to exit (default: 0.0 = at mean)
    """

    def __init__(
        self,
        lookback_period: int = 20,
        entry_threshold: float = 2.0,
        exit_threshold: float = 0.0,
    ):
        super().__init__("ZScoreMeanReversion")

        if lookback_period <= 1:
            raise ValueError(f"lookback_period must be > 1, got {lookback_period}")
        if entry_threshold <= 0:
            raise ValueError(f"entry_threshold must be positive, got {entry_threshold}")
        if exit_threshold >= entry_threshold:
            raise ValueError(
                f"exit_threshold ({exit_threshold}) must be less than "
                f"entry_threshold ({entry_threshold})"
            )

        self.lookback_period = lookback_period
        self.entry_threshold = entry_threshold
        self.exit_threshold = exit_threshold

    def zscore(self, history: Sequence[PricePoint]) -> float | None:
        """Z-score of the newest price relative to the lookback window."""
        prices = tail_prices(history, self.lookback_period)
        if not prices:
            return None

        window = np.asarray(prices, dtype=float)
        std = float(window.std())
        if std == 0:
            return None

        return float((window[-1] - window.mean()) / std)

    def should_buy(self, history: Sequence[PricePoint]) -> bool:
        zscore = self.zscore(history)
        return zscore is not None and zscore < -self.entry_threshold

    def should_sell(self, history: Sequence[PricePoint]) -> bool:
        zscore = self.zscore(history)
        return zscore is not None and zscore >= self.exit_threshold

    def __repr__(self) -> str:
        return (
            f"ZScoreMeanReversionStrategy(lookback={self.lookback_period}, "
            f"entry={self.entry_threshold}, exit={self.exit_threshold})"
        )
