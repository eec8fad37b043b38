"""
Trading strategy implementations.

Strategies register themselves by name with the @register decorator so they
can be built from configuration without touching the trading system:

    strategy = create_strategy("moving_average_crossover", short_window=5, long_window=20)
"""

from typing import Any

from .base import TradingStrategy, tail_prices

# strategy name -> strategy class
STRATEGY_REGISTRY: dict[str, type[TradingStrategy]] = {}


def register(name: str):
    """Class decorator adding a strategy to STRATEGY_REGISTRY."""
    def decorator(cls: type[TradingStrategy]) -> type[TradingStrategy]:
        STRATEGY_REGISTRY[name] = cls
        return cls
    return decorator


def create_strategy(name: str, **params: Any) -> TradingStrategy:
    """
    Build a registered strategy by name.

    Args:
        name: Registered strategy name (e.g. "momentum")
        **params: Constructor arguments for the strategy

    Raises:
        ValueError: Unknown strategy name
    """
    if name not in STRATEGY_REGISTRY:
        available = ", ".join(list_strategies())
        raise ValueError(f"Unknown strategy '{name}'. Available: {available}")
    return STRATEGY_REGISTRY[name](**params)


def list_strategies() -> list[str]:
    """Sorted names of all registered strategies."""
    return sorted(STRATEGY_REGISTRY.keys())


# Imported after the registry exists so their @register calls succeed
from .moving_average_crossover import MovingAverageCrossoverStrategy  # noqa: E402
from .momentum import MomentumStrategy  # noqa: E402
from .zscore_mean_reversion import ZScoreMeanReversionStrategy  # noqa: E402

__all__ = [
    "TradingStrategy",
    "tail_prices",
    "STRATEGY_REGISTRY",
    "register",
    "create_strategy",
    "list_strategies",
    "MovingAverageCrossoverStrategy",
    "MomentumStrategy",
    "ZScoreMeanReversionStrategy",
]
