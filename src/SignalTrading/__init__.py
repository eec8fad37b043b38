"""Per-symbol signal trading simulation: bounded price history, pluggable strategies, position P&L."""

from .config import SystemConfig
from .logging_config import get_logger, setup_logging
from .models import OrderSide, Position, PricePoint, TradeRecord
from .trading.trading_system import TradingSystem

__all__ = [
    "SystemConfig",
    "get_logger",
    "setup_logging",
    "OrderSide",
    "Position",
    "PricePoint",
    "TradeRecord",
    "TradingSystem",
]
