"""
Trade Gateway - Delivers executed trade records to reporting sinks.

Sinks:
- LoggingTradeReporter: one human-readable log line per trade
- TradeGateway: CSV audit trail
- QueuedTradeReporter: fire-and-forget wrapper running any sink on a
  background thread so reporting never stalls price ingestion
"""

from abc import ABC, abstractmethod
import csv
from datetime import datetime
import logging
from pathlib import Path
import queue
import threading

from SignalTrading.models import OrderSide, TradeRecord

logger = logging.getLogger(__name__)


class TradeReporter(ABC):
    """Receives every trade the trading system executes."""

    @abstractmethod
    def report(self, record: TradeRecord) -> None:
        """Deliver one trade record."""
        pass

    def close(self) -> None:
        """Release any resources held by the reporter."""


class LoggingTradeReporter(TradeReporter):
    """Writes each trade as a log line, e.g. "BUY 100 AAPL @ 150.25"."""

    def __init__(self, trade_logger: logging.Logger | None = None):
        self.logger = trade_logger or logger

    def report(self, record: TradeRecord) -> None:
        self.logger.info(
            f"{record.side.value} {record.quantity} {record.symbol} @ {record.price:.2f}"
        )


class TradeGateway(TradeReporter):
    """
    Logs all executed trades to CSV for audit trail and analysis.

    CSV Format:
    timestamp, symbol, side, quantity, price, value, realized_pnl
    """

    HEADER = [
        "timestamp",
        "symbol",
        "side",
        "quantity",
        "price",
        "value",
        "realized_pnl",
    ]

    def __init__(self, log_file: str | Path, append: bool = False):
        """
        Initialize trade gateway with log file.

        Args:
            log_file: Path to CSV log file
            append: If True, append to existing file. If False, create new file.
        """
        self.log_file = Path(log_file)
        self.append = append
        self._lock = threading.Lock()

        # Create directory if it doesn't exist
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

        # Initialize file with headers if not appending
        if not append or not self.log_file.exists():
            self._write_header()

    def _write_header(self) -> None:
        """Write CSV header to log file."""
        with self.log_file.open("w", newline="") as f:
            csv.writer(f).writerow(self.HEADER)

    def report(self, record: TradeRecord) -> None:
        with self._lock, self.log_file.open("a", newline="") as f:
            csv.writer(f).writerow(
                [
                    record.timestamp.isoformat(),
                    record.symbol,
                    record.side.value,
                    record.quantity,
                    record.price,
                    record.value,
                    record.realized_pnl,
                ]
            )

    def get_trade_history(self, symbol: str | None = None) -> list[TradeRecord]:
        """
        Read trades back from the log file.

        Args:
            symbol: If provided, filter to one symbol. Otherwise return all.
        """
        if not self.log_file.exists():
            return []

        trades = []
        with self.log_file.open("r") as f:
            for row in csv.DictReader(f):
                if symbol is not None and row["symbol"] != symbol:
                    continue
                trades.append(
                    TradeRecord(
                        symbol=row["symbol"],
                        side=OrderSide(row["side"]),
                        quantity=int(row["quantity"]),
                        price=float(row["price"]),
                        timestamp=datetime.fromisoformat(row["timestamp"]),
                        realized_pnl=float(row["realized_pnl"]),
                    )
                )
        return trades

    def clear_log(self) -> None:
        """Clear the log file and write new header."""
        with self._lock:
            self._write_header()

    def __repr__(self) -> str:
        return f"TradeGateway(log_file={self.log_file})"


class QueuedTradeReporter(TradeReporter):
    """
    Hands trade records to a worker thread that feeds the wrapped reporter.

    report() only enqueues, so a slow sink cannot block the caller.

    Usage:
        reporter = QueuedTradeReporter(TradeGateway("logs/trades.csv"))
        system = TradingSystem(max_history_size=50, reporters=[reporter])
        ...
        reporter.close()  # drains the queue
    """

    _STOP = object()

    def __init__(self, reporter: TradeReporter):
        self.reporter = reporter
        self._queue: queue.Queue = queue.Queue()
        self._worker = threading.Thread(
            target=self._drain, name="trade-reporter", daemon=True
        )
        self._closed = False
        self._lock = threading.Lock()
        self._worker.start()

    def report(self, record: TradeRecord) -> None:
        with self._lock:
            if not self._closed:
                self._queue.put(record)
                return
        logger.warning(f"Reporter closed, dropping trade {record}")

    def _drain(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is self._STOP:
                    return
                self.reporter.report(item)
            except Exception as e:
                logger.error(f"{self.reporter!r} failed to report {item}: {e}", exc_info=True)
            finally:
                self._queue.task_done()

    def flush(self) -> None:
        """Block until every queued record has been delivered."""
        self._queue.join()

    def close(self) -> None:
        # No record can be enqueued behind the stop marker.
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(self._STOP)
        self._worker.join()
        self.reporter.close()

    def __repr__(self) -> str:
        return f"QueuedTradeReporter({self.reporter!r})"
