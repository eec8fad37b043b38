"""Trading components for position sizing and execution."""

from .position_sizing import FixedNotionalSizer, FixedQuantitySizer, PositionSizer
from .trading_system import TradingSystem

__all__ = [
    "PositionSizer",
    "FixedQuantitySizer",
    "FixedNotionalSizer",
    "TradingSystem",
]
