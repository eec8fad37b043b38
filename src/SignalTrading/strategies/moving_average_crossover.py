"""
Moving Average Crossover Strategy.

Trades based on short-term vs long-term moving average relationship.
"""

from typing import Sequence

from SignalTrading.models import PricePoint
from . import register
from .base import TradingStrategy, tail_prices


@register("moving_average_crossover")
class MovingAverageCrossoverStrategy(TradingStrategy):
    """
    Trend-following strategy using moving average crossover.

    Logic:
    1. Calculate short-term and long-term simple moving averages over the
       tail of the history
    2. Buy while the short MA is above the long MA
    3. Sell while the short MA is below the long MA

    Equal averages give no signal on either side. Both averages are
    recomputed from the history on every call, so evaluation is idempotent.

    Parameters:
        short_window: Short-term MA period (default: 10)
        long_window: Long-term MA period (default: 30)
    """

    def __init__(self, short_window: int = 10, long_window: int = 30):
        super().__init__("MA_Crossover")

        # Parameter validation
        if short_window <= 0:
            raise ValueError(f"short_window must be positive, got {short_window}")
        if long_window <= 0:
            raise ValueError(f"long_window must be positive, got {long_window}")
        if short_window >= long_window:
            raise ValueError(
                f"short_window ({short_window}) must be less than long_window ({long_window})"
            )

        self.short_window = short_window
        self.long_window = long_window

    def moving_averages(
        self, history: Sequence[PricePoint]
    ) -> tuple[float, float] | None:
        """
        Short and long moving averages, or None with insufficient data.
        """
        prices = tail_prices(history, self.long_window)
        if not prices:
            return None

        short_ma = sum(prices[-self.short_window:]) / self.short_window
        long_ma = sum(prices) / self.long_window
        return short_ma, long_ma

    def should_buy(self, history: Sequence[PricePoint]) -> bool:
        averages = self.moving_averages(history)
        if averages is None:
            return False
        short_ma, long_ma = averages
        return short_ma > long_ma

    def should_sell(self, history: Sequence[PricePoint]) -> bool:
        averages = self.moving_averages(history)
        if averages is None:
            return False
        short_ma, long_ma = averages
        return short_ma < long_ma

    def __repr__(self) -> str:
        return (
            f"MovingAverageCrossoverStrategy(short={self.short_window}, "
            f"long={self.long_window})"
        )
