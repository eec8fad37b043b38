#!/usr/bin/env python3
"""
Replay recorded prices through the trading system.

Usage:
    python main.py --data data/ticks.csv --config ma_crossover_fast
    python main.py --data data/ticks.csv --strategy moving_average_crossover \
        --param short_window=2 --param long_window=4 --symbols X
    python main.py --list  # List configs and registered strategies
"""

import argparse
from dataclasses import asdict
import logging
from pathlib import Path
import sys

import pandas as pd

from SignalTrading import SystemConfig, TradingSystem, setup_logging
from SignalTrading.gateway import DataGateway, LoggingTradeReporter, QueuedTradeReporter, TradeGateway
from SignalTrading.strategies import create_strategy, list_strategies
from SignalTrading.trading import FixedQuantitySizer
from configs.strategy_configs import get_config, list_configs

logger = logging.getLogger("SignalTrading.main")


def parse_params(pairs: list[str]) -> dict:
    """Turn ["short_window=5", "entry_threshold=1.5"] into typed kwargs."""
    params = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Strategy parameter must look like key=value, got {pair!r}")
        try:
            value = int(raw)
        except ValueError:
            try:
                value = float(raw)
            except ValueError:
                value = raw
        params[key] = value
    return params


def build_system(args: argparse.Namespace, config: SystemConfig) -> tuple[TradingSystem, list]:
    """Create the trading system and its reporters from CLI arguments."""
    reporters = [LoggingTradeReporter()]
    trade_log = args.trade_log or config.trade_log_file
    if trade_log:
        reporters.append(QueuedTradeReporter(TradeGateway(trade_log)))

    system = TradingSystem(
        max_history_size=config.max_history_size,
        position_sizer=FixedQuantitySizer(config.position_quantity),
        reporters=reporters,
    )
    return system, reporters


def bind_strategies(system: TradingSystem, args: argparse.Namespace, gateway: DataGateway) -> None:
    if args.config:
        template = get_config(args.config)
        strategy = template["strategy"]
        symbols = args.symbols or template["symbols"]
    else:
        strategy = create_strategy(args.strategy, **parse_params(args.param))
        symbols = args.symbols or sorted(gateway.get_symbols())

    for symbol in symbols:
        system.set_strategy(symbol, strategy)


def print_summary(system: TradingSystem, ticks: int) -> None:
    summary = system.get_summary()

    print(f"\n{'=' * 80}")
    print("REPLAY RESULTS")
    print(f"{'=' * 80}")
    print(f"Ticks processed:     {ticks:,}")
    print(f"Total trades:        {summary['total_trades']}")
    print(f"Realized P&L:        ${summary['realized_pnl']:,.2f}")
    print(f"Unrealized P&L:      ${summary['unrealized_pnl']:,.2f}")

    if summary["symbols"]:
        print("\nPOSITIONS:")
        for symbol, stats in summary["symbols"].items():
            print(
                f"  {symbol:<8} qty={stats['quantity']:<6} "
                f"avg=${stats['average_price']:,.2f} last=${stats['last_price']:,.2f} "
                f"realized=${stats['realized_pnl']:,.2f} "
                f"unrealized=${stats['unrealized_pnl']:,.2f}"
            )
    print(f"{'=' * 80}\n")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Replay price data through per-symbol trading strategies",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--data', type=str, help='Path to price data CSV file')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--config', type=str, help='Named strategy configuration')
    group.add_argument('--strategy', type=str, help='Registered strategy name')
    parser.add_argument('--param', action='append', default=[], help='Strategy parameter key=value (repeatable)')
    parser.add_argument('--symbols', nargs='+', help='Symbols to trade (default: from config or data file)')
    parser.add_argument('--max-history', type=int, help='Price points kept per symbol')
    parser.add_argument('--position-size', type=int, help='Units bought per entry')
    parser.add_argument('--trade-log', type=str, help='CSV trade audit log')
    parser.add_argument('--output', type=str, help='Write executed trades to this CSV')
    parser.add_argument('--log-level', type=str, help='Logging level (default: INFO)')
    parser.add_argument('--list', action='store_true', help='List configurations and strategies')
    args = parser.parse_args(argv)

    if args.list:
        list_configs()
        print(f"Registered strategies: {', '.join(list_strategies())}")
        return 0

    if not args.data or not (args.config or args.strategy):
        parser.error("--data and one of --config/--strategy are required")

    env_config = SystemConfig.from_env()
    config = SystemConfig(
        max_history_size=(
            args.max_history if args.max_history is not None else env_config.max_history_size
        ),
        position_quantity=(
            args.position_size if args.position_size is not None else env_config.position_quantity
        ),
        log_level=args.log_level or env_config.log_level,
        log_file=env_config.log_file,
        trade_log_file=env_config.trade_log_file,
    )
    setup_logging(level=config.log_level, log_file=config.log_file)

    gateway = DataGateway(args.data)
    system, reporters = build_system(args, config)
    bind_strategies(system, args, gateway)

    try:
        ticks = system.run(gateway.stream())
    finally:
        for reporter in reporters:
            reporter.close()

    print_summary(system, ticks)

    if args.output:
        Path(args.output).parent.mkdir(parents=True, exist_ok=True)
        trades_df = pd.DataFrame(
            [{**asdict(t), "side": t.side.value, "value": t.value} for t in system.trades]
        )
        trades_df.to_csv(args.output, index=False)
        logger.info(f"Wrote {len(trades_df)} trades to {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
