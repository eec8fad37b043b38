"""
Base class for trading strategies.

All trading strategies must inherit from TradingStrategy and implement
should_buy() and should_sell().
"""

from abc import ABC, abstractmethod
from itertools import islice
from typing import Sequence

from SignalTrading.models import PricePoint


def tail_prices(history: Sequence[PricePoint], count: int) -> list[float]:
    """
    Prices of the last `count` points in history.

    Returns an empty list when the history holds fewer than `count` points.
    Works on lists and deques alike.
    """
    size = len(history)
    if count <= 0 or size < count:
        return []
    return [point.price for point in islice(history, size - count, None)]


class TradingStrategy(ABC):
    """
    Abstract base class for all trading strategies.

    A strategy looks at the bounded price history of one symbol
    (ordered oldest to newest) and answers two independent questions:
    should we open a position, and should we close the one we hold.

    Both checks must be pure: they must not mutate the history, must not
    carry state between calls, and must return False when the history is
    too short for the strategy's lookback.

    Example:
        @register("breakout")
        class BreakoutStrategy(TradingStrategy):
            def should_buy(self, history):
                prices = tail_prices(history, 20)
                return bool(prices) and prices[-1] > max(prices[:-1])

            def should_sell(self, history):
                prices = tail_prices(history, 20)
                return bool(prices) and prices[-1] < min(prices[:-1])
    """

    def __init__(self, name: str | None = None):
        """
        Initialize strategy.

        Args:
            name: Strategy name (defaults to class name)
        """
        self.name = name or self.__class__.__name__

    @abstractmethod
    def should_buy(self, history: Sequence[PricePoint]) -> bool:
        """
        Decide whether to open a position.

        Args:
            history: Recent price points for one symbol, oldest first

        Returns:
            True to buy, False for no signal
        """
        pass

    @abstractmethod
    def should_sell(self, history: Sequence[PricePoint]) -> bool:
        """
        Decide whether to liquidate the held position.

        Args:
            history: Recent price points for one symbol, oldest first

        Returns:
            True to sell, False for no signal
        """
        pass

    def __repr__(self) -> str:
        return f"{self.name}()"
