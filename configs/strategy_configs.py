"""
Strategy Configuration Templates

Defines named strategy configurations for replay runs.
Each config binds one strategy to a list of symbols. Strategies are
stateless, so one instance can safely serve every symbol in its config.
"""

from SignalTrading.strategies import (
    MomentumStrategy,
    MovingAverageCrossoverStrategy,
    ZScoreMeanReversionStrategy,
)


# ============================================================================
# STRATEGY CONFIGURATIONS
# ============================================================================

STRATEGY_CONFIGS = {
    # Fast crossover for intraday ticks
    "ma_crossover_fast": {
        "strategy": MovingAverageCrossoverStrategy(short_window=5, long_window=20),
        "symbols": ["AAPL", "MSFT", "GOOGL", "NVDA"],
        "description": "5/20 moving average crossover"
    },

    # Slow crossover, classic golden/death cross on daily bars
    "ma_crossover_slow": {
        "strategy": MovingAverageCrossoverStrategy(short_window=50, long_window=200),
        "symbols": ["SPY", "QQQ", "DIA", "IWM"],
        "description": "50/200 moving average crossover for daily bars"
    },

    "momentum_aggressive": {
        "strategy": MomentumStrategy(
            lookback_period=10,
            momentum_threshold=0.015  # 1.5% momentum required
        ),
        "symbols": ["AAPL", "MSFT", "GOOGL", "TSLA", "NVDA"],
        "description": "Aggressive momentum trader for strong trends"
    },

    "momentum_conservative": {
        "strategy": MomentumStrategy(
            lookback_period=20,
            momentum_threshold=0.01  # 1% momentum
        ),
        "symbols": ["SPY", "QQQ", "DIA", "IWM"],
        "description": "Conservative momentum for index ETFs"
    },

    "zscore_reversion": {
        "strategy": ZScoreMeanReversionStrategy(
            lookback_period=20,
            entry_threshold=2.0,
            exit_threshold=0.0
        ),
        "symbols": ["TLT", "IEF", "LQD", "HYG"],
        "description": "Z-score mean reversion for range-bound bond ETFs"
    },
}


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def get_config(config_name: str):
    """
    Get a strategy configuration by name.

    Args:
        config_name: Name of the configuration (e.g., 'ma_crossover_fast')

    Returns:
        Configuration dictionary

    Example:
        config = get_config('ma_crossover_fast')
        for symbol in config['symbols']:
            system.set_strategy(symbol, config['strategy'])
    """
    if config_name not in STRATEGY_CONFIGS:
        available = ', '.join(STRATEGY_CONFIGS.keys())
        raise ValueError(f"Unknown config '{config_name}'. Available: {available}")

    return STRATEGY_CONFIGS[config_name]


def list_configs():
    """List all available configurations with descriptions."""
    print("\nAvailable Configurations:")
    print("=" * 80)

    for name, config in STRATEGY_CONFIGS.items():
        print(f"\n{name}:")
        print(f"  Strategy: {config['strategy']}")
        print(f"  Symbols: {', '.join(config['symbols'])}")
        print(f"  Description: {config['description']}")

    print("\n" + "=" * 80)
