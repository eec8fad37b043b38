"""
Trading System - Routes price points through history, strategy and execution.

For every incoming price point:
1. Append to the symbol's bounded history (oldest point evicted when full)
2. Ask the symbol's strategy for a buy or sell signal
3. Fill the resulting order at the newest price and update the position
4. Deliver the trade record to the reporters
"""

from collections import deque
import logging
import threading
from typing import Iterable

from SignalTrading.gateway.trade_gateway import LoggingTradeReporter, TradeReporter
from SignalTrading.models import OrderSide, Position, PricePoint, TradeRecord
from SignalTrading.strategies.base import TradingStrategy
from SignalTrading.trading.position_sizing import FixedQuantitySizer, PositionSizer

logger = logging.getLogger(__name__)


class TradingSystem:
    """
    Per-symbol simulated trading driven by price points.

    Each symbol owns a bounded history, at most one strategy and a lazily
    created long-only position. A flat symbol is only checked for buy
    signals; a held symbol is only checked for sell signals, and a sell
    always liquidates the whole position.

    Thread safety: all work for one symbol runs under that symbol's lock,
    so ingestion and evaluation for a symbol never interleave. Different
    symbols may be fed from different threads.

    Reporters are called under the symbol lock, which keeps each symbol's
    trade records in execution order. They must return quickly: wrap any
    sink that does I/O (e.g. TradeGateway) in a QueuedTradeReporter.

    Example:
        system = TradingSystem(max_history_size=50)
        system.set_strategy("AAPL", MovingAverageCrossoverStrategy(5, 20))

        for point in DataGateway("data/ticks.csv").stream():
            system.add_price_point(point)

        print(system.get_position("AAPL"))
    """

    def __init__(
        self,
        max_history_size: int,
        position_sizer: PositionSizer | None = None,
        reporters: list[TradeReporter] | None = None,
    ):
        """
        Initialize trading system.

        Args:
            max_history_size: Price points kept per symbol (must be positive)
            position_sizer: Entry sizing policy (default: 100 units per buy)
            reporters: Trade sinks, called synchronously (default: log line per trade)
        """
        if max_history_size <= 0:
            raise ValueError(f"max_history_size must be positive, got {max_history_size}")

        self.max_history_size = max_history_size
        self.position_sizer = position_sizer or FixedQuantitySizer()
        self.reporters = reporters if reporters is not None else [LoggingTradeReporter()]

        self._histories: dict[str, deque[PricePoint]] = {}
        self._strategies: dict[str, TradingStrategy] = {}
        self._positions: dict[str, Position] = {}
        self._trades: list[TradeRecord] = []

        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()
        self._trades_lock = threading.Lock()

    def _symbol_lock(self, symbol: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(symbol)
            if lock is None:
                lock = self._locks[symbol] = threading.Lock()
            return lock

    # ------------------------------------------------------------------
    # Inbound
    # ------------------------------------------------------------------

    def add_price_point(self, point: PricePoint) -> TradeRecord | None:
        """
        Ingest one price point and act on the symbol's strategy.

        Args:
            point: New price observation

        Returns:
            The trade executed in response, or None
        """
        with self._symbol_lock(point.symbol):
            history = self._histories.get(point.symbol)
            if history is None:
                history = deque(maxlen=self.max_history_size)
                self._histories[point.symbol] = history
            history.append(point)

            return self._analyze_trades(point.symbol)

    def run(self, points: Iterable[PricePoint]) -> int:
        """
        Feed a sequence of price points in order.

        Returns:
            Number of points processed
        """
        count = 0
        for point in points:
            self.add_price_point(point)
            count += 1
        return count

    def set_strategy(self, symbol: str, strategy: TradingStrategy) -> None:
        """
        Bind (or replace) the strategy for a symbol.

        Takes effect on the next price point; past history is not re-evaluated.
        """
        with self._symbol_lock(symbol):
            previous = self._strategies.get(symbol)
            self._strategies[symbol] = strategy
        if previous is None:
            logger.info(f"{symbol}: strategy set to {strategy!r}")
        else:
            logger.info(f"{symbol}: strategy replaced {previous!r} -> {strategy!r}")

    def remove_strategy(self, symbol: str) -> TradingStrategy | None:
        """Unbind a symbol's strategy; its history and position are kept."""
        with self._symbol_lock(symbol):
            return self._strategies.pop(symbol, None)

    def get_strategy(self, symbol: str) -> TradingStrategy | None:
        return self._strategies.get(symbol)

    def discard_symbol(self, symbol: str) -> None:
        """Drop everything held for a symbol: history, strategy and position."""
        with self._symbol_lock(symbol):
            self._histories.pop(symbol, None)
            self._strategies.pop(symbol, None)
            self._positions.pop(symbol, None)
        logger.info(f"{symbol}: discarded")

    # ------------------------------------------------------------------
    # Evaluation and execution (caller holds the symbol lock)
    # ------------------------------------------------------------------

    def _analyze_trades(self, symbol: str) -> TradeRecord | None:
        strategy = self._strategies.get(symbol)
        if strategy is None:
            return None

        history = list(self._histories.get(symbol, ()))
        position = self._positions.get(symbol)
        quantity = position.quantity if position else 0

        try:
            if quantity == 0:
                side = OrderSide.BUY if strategy.should_buy(history) else None
            else:
                side = OrderSide.SELL if strategy.should_sell(history) else None
        except Exception as e:
            logger.error(
                f"{strategy.name} error evaluating {symbol}: {e}",
                exc_info=True,
            )
            return None

        if side is OrderSide.BUY:
            price = history[-1].price if history else 0.0
            buy_quantity = self.position_sizer.size(symbol, price, position)
            if buy_quantity <= 0:
                logger.debug(f"{symbol}: buy signal sized to {buy_quantity}, skipping")
                return None
            return self._execute_buy(symbol, buy_quantity)

        if side is OrderSide.SELL:
            return self._execute_sell(symbol, quantity)

        return None

    def _execute_buy(self, symbol: str, quantity: int) -> TradeRecord | None:
        history = self._histories.get(symbol)
        if not history:
            return None

        last = history[-1]
        position = self._positions.get(symbol)
        if position is None:
            position = self._positions[symbol] = Position(symbol)
        position.buy(quantity, last.price)

        return self._record_trade(
            TradeRecord(
                symbol=symbol,
                side=OrderSide.BUY,
                quantity=quantity,
                price=last.price,
                timestamp=last.timestamp,
            )
        )

    def _execute_sell(self, symbol: str, quantity: int) -> TradeRecord | None:
        history = self._histories.get(symbol)
        position = self._positions.get(symbol)
        if not history or position is None or position.quantity == 0:
            return None

        last = history[-1]
        sold = min(quantity, position.quantity)
        pnl = position.sell(sold, last.price)

        return self._record_trade(
            TradeRecord(
                symbol=symbol,
                side=OrderSide.SELL,
                quantity=sold,
                price=last.price,
                timestamp=last.timestamp,
                realized_pnl=pnl,
            )
        )

    def _record_trade(self, record: TradeRecord) -> TradeRecord:
        with self._trades_lock:
            self._trades.append(record)

        for reporter in self.reporters:
            try:
                reporter.report(record)
            except Exception as e:
                logger.error(f"{reporter!r} failed to report {record}: {e}", exc_info=True)

        return record

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    def get_history(self, symbol: str) -> list[PricePoint]:
        """Snapshot of a symbol's history, oldest first."""
        with self._symbol_lock(symbol):
            return list(self._histories.get(symbol, ()))

    def get_position(self, symbol: str) -> Position | None:
        return self._positions.get(symbol)

    @property
    def positions(self) -> dict[str, Position]:
        return dict(self._positions)

    @property
    def symbols(self) -> list[str]:
        """Symbols with price history, in first-seen order."""
        return list(self._histories)

    @property
    def trades(self) -> list[TradeRecord]:
        with self._trades_lock:
            return list(self._trades)

    def total_pnl(self) -> float:
        """Realized P&L across all symbols."""
        return sum(p.total_pnl for p in self.positions.values())

    def get_summary(self) -> dict:
        """
        Per-symbol and total P&L.

        Unrealized P&L is marked at each symbol's newest price.

        Returns:
            Dictionary with:
            - symbols: {symbol: {quantity, average_price, last_price,
              realized_pnl, unrealized_pnl}}
            - total_trades, realized_pnl, unrealized_pnl
        """
        symbols = {}
        for symbol, position in self.positions.items():
            history = self.get_history(symbol)
            last_price = history[-1].price if history else position.average_price
            symbols[symbol] = {
                "quantity": position.quantity,
                "average_price": position.average_price,
                "last_price": last_price,
                "realized_pnl": position.total_pnl,
                "unrealized_pnl": position.unrealized_pnl(last_price),
            }

        return {
            "symbols": symbols,
            "total_trades": len(self.trades),
            "realized_pnl": sum(s["realized_pnl"] for s in symbols.values()),
            "unrealized_pnl": sum(s["unrealized_pnl"] for s in symbols.values()),
        }

    def __repr__(self) -> str:
        return (
            f"TradingSystem(max_history_size={self.max_history_size}, "
            f"symbols={len(self._histories)}, trades={len(self._trades)})"
        )
