"""
Momentum Strategy - Trade based on price velocity.

Buys when price momentum is positive and strong, sells when negative.
"""

from typing import Sequence

from SignalTrading.models import PricePoint
from . import register
from .base import TradingStrategy, tail_prices


@register("momentum")
class MomentumStrategy(TradingStrategy):
    """
    Momentum-based trading strategy.

    Logic:
    1. Calculate price momentum (rate of change over lookback period)
    2. Buy when momentum > threshold (uptrend)
    3. Sell when momentum < -threshold (downtrend)

    Parameters:
        lookback_period: Number of ticks to calculate momentum (default: 20)
        momentum_threshold: Minimum momentum to trigger trade (default: 0.01 = 1%)
    """

    def __init__(self, lookback_period: int = 20, momentum_threshold: float = 0.01):
        super().__init__("MomentumStrategy")

        if lookback_period < 2:
            raise ValueError(f"lookback_period must be >= 2, got {lookback_period}")
        if momentum_threshold < 0:
            raise ValueError(
                f"momentum_threshold must be non-negative, got {momentum_threshold}"
            )

        self.lookback_period = lookback_period
        self.momentum_threshold = momentum_threshold

    def momentum(self, history: Sequence[PricePoint]) -> float | None:
        """Percentage change over the lookback window, or None."""
        prices = tail_prices(history, self.lookback_period)
        if not prices or prices[0] <= 0:
            return None
        return (prices[-1] - prices[0]) / prices[0]

    def should_buy(self, history: Sequence[PricePoint]) -> bool:
        momentum = self.momentum(history)
        return momentum is not None and momentum > self.momentum_threshold

    def should_sell(self, history: Sequence[PricePoint]) -> bool:
        momentum = self.momentum(history)
        return momentum is not None and momentum < -self.momentum_threshold

    def __repr__(self) -> str:
        return (
            f"MomentumStrategy(lookback={self.lookback_period}, "
            f"threshold={self.momentum_threshold:.3f})"
        )
