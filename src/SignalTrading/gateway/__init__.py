"""Gateway components for price replay and trade reporting."""

from .data_gateway import DataGateway
from .trade_gateway import (
    LoggingTradeReporter,
    QueuedTradeReporter,
    TradeGateway,
    TradeReporter,
)

__all__ = [
    "DataGateway",
    "TradeReporter",
    "LoggingTradeReporter",
    "TradeGateway",
    "QueuedTradeReporter",
]
