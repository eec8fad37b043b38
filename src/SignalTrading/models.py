from dataclasses import dataclass
import datetime
from enum import Enum


# ============================================================================
# ENUMS
# ============================================================================


class OrderSide(Enum):
    """Order side (buy or sell)"""
    BUY = "BUY"
    SELL = "SELL"


# ============================================================================
# MARKET DATA
# ============================================================================


@dataclass(frozen=True)
class PricePoint:
    """Immutable price observation for one symbol"""
    timestamp: datetime.datetime
    symbol: str
    price: float
    volume: int = 0


# ============================================================================
# TRADES
# ============================================================================


@dataclass(frozen=True)
class TradeRecord:
    """
    Record of one simulated fill, emitted to trade reporters.

    Fields:
        symbol: Asset symbol
        side: BUY or SELL
        quantity: Units filled
        price: Fill price (most recent price in the symbol's history)
        timestamp: Timestamp of the price point that triggered the fill
        realized_pnl: P&L booked by this fill (sells only)
    """
    symbol: str
    side: OrderSide
    quantity: int
    price: float
    timestamp: datetime.datetime
    realized_pnl: float = 0.0

    @property
    def value(self) -> float:
        """Calculate trade notional value"""
        return self.quantity * self.price


# ============================================================================
# POSITIONS
# ============================================================================


class Position:
    """
    Long-only holding in a single symbol with realized P&L tracking.

    Attributes:
        symbol: Asset symbol
        quantity: Units held (never negative)
        average_price: Average entry price, 0.0 while flat
        total_pnl: Realized P&L accumulated over all sells
    """

    def __init__(
        self,
        symbol: str,
        quantity: int = 0,
        average_price: float = 0.0,
        total_pnl: float = 0.0
    ):
        self.symbol = symbol
        self.quantity = quantity
        self.average_price = average_price
        self.total_pnl = total_pnl

    @property
    def is_flat(self) -> bool:
        return self.quantity == 0

    def buy(self, quantity: int, price: float) -> None:
        """
        Add to the position, blending the average price by quantity.
        """
        if quantity <= 0:
            raise ValueError(f"Buy quantity must be positive, got {quantity}")

        if self.quantity == 0:
            self.average_price = price
        else:
            total_cost = self.average_price * self.quantity + price * quantity
            self.average_price = total_cost / (self.quantity + quantity)
        self.quantity += quantity

    def sell(self, quantity: int, price: float) -> float:
        """
        Reduce the position and realize P&L on the sold units.

        Selling more than is held sells the whole position; the position
        never goes short.

        Returns:
            Realized P&L for this sell
        """
        if quantity <= 0:
            raise ValueError(f"Sell quantity must be positive, got {quantity}")

        sold = min(quantity, self.quantity)
        pnl = (price - self.average_price) * sold
        self.total_pnl += pnl
        self.quantity -= sold

        if self.quantity == 0:
            self.average_price = 0.0

        return pnl

    def market_value(self, price: float) -> float:
        return self.quantity * price

    def unrealized_pnl(self, current_price: float) -> float:
        """Open P&L based on current market price"""
        if self.quantity == 0:
            return 0.0
        return (current_price - self.average_price) * self.quantity

    def __repr__(self) -> str:
        return (f"Position(symbol={self.symbol}, qty={self.quantity}, "
                f"avg_price={self.average_price:.2f}, total_pnl={self.total_pnl:.2f})")
