"""
Position sizing policies.

The trading system asks its sizer how many units to buy when a strategy
signals an entry. Sells always liquidate the full position and are not sized.
"""

from abc import ABC, abstractmethod

from SignalTrading.models import Position


class PositionSizer(ABC):
    """Decides the quantity of a new entry."""

    @abstractmethod
    def size(self, symbol: str, price: float, position: Position | None) -> int:
        """
        Quantity to buy.

        Args:
            symbol: Asset symbol
            price: Expected fill price
            position: Current position (None if the symbol was never traded)

        Returns:
            Units to buy; zero or less skips the entry
        """
        pass


class FixedQuantitySizer(PositionSizer):
    """Always buys the same number of units (default: 100)."""

    def __init__(self, quantity: int = 100):
        if quantity <= 0:
            raise ValueError(f"quantity must be positive, got {quantity}")
        self.quantity = quantity

    def size(self, symbol: str, price: float, position: Position | None) -> int:
        return self.quantity

    def __repr__(self) -> str:
        return f"FixedQuantitySizer(quantity={self.quantity})"


class FixedNotionalSizer(PositionSizer):
    """
    Buys as many whole units as fit in a dollar amount.

    Parameters:
        notional: Target position size in dollars
        max_quantity: Optional cap on units per entry
    """

    def __init__(self, notional: float, max_quantity: int | None = None):
        if notional <= 0:
            raise ValueError(f"notional must be positive, got {notional}")
        if max_quantity is not None and max_quantity <= 0:
            raise ValueError(f"max_quantity must be positive, got {max_quantity}")
        self.notional = notional
        self.max_quantity = max_quantity

    def size(self, symbol: str, price: float, position: Position | None) -> int:
        if price <= 0:
            return 0
        quantity = int(self.notional / price)
        if self.max_quantity is not None:
            quantity = min(quantity, self.max_quantity)
        return quantity

    def __repr__(self) -> str:
        return (
            f"FixedNotionalSizer(notional={self.notional:,.2f}, "
            f"max_quantity={self.max_quantity})"
        )
