"""
Integration tests: CSV replay through the trading system into trade logs.
"""

import pytest
from datetime import datetime, timedelta
from pathlib import Path

import pandas as pd

from SignalTrading.gateway import DataGateway, QueuedTradeReporter, TradeGateway
from SignalTrading.models import OrderSide
from SignalTrading.strategies import create_strategy
from SignalTrading.trading import TradingSystem

import main


@pytest.fixture
def ticks_csv(tmp_path) -> Path:
    """Two symbols: X rises then falls, Y only rises."""
    x_prices = [10, 11, 12, 13, 14, 15, 12, 11]
    y_prices = [50, 51, 52, 53, 54, 55, 56, 57]
    base = datetime(2024, 1, 2, 9, 30)

    rows = ["timestamp,symbol,price,volume"]
    for i, (x, y) in enumerate(zip(x_prices, y_prices)):
        ts = (base + timedelta(minutes=i)).isoformat()
        rows.append(f"{ts},X,{x},100")
        rows.append(f"{ts},Y,{y},200")

    path = tmp_path / "ticks.csv"
    path.write_text("\n".join(rows) + "\n")
    return path


class TestReplay:
    def test_replay_into_trade_log(self, ticks_csv, tmp_path):
        gateway = TradeGateway(tmp_path / "trades.csv")
        reporter = QueuedTradeReporter(gateway)
        system = TradingSystem(max_history_size=5, reporters=[reporter])
        strategy = create_strategy("moving_average_crossover", short_window=2, long_window=4)
        system.set_strategy("X", strategy)
        system.set_strategy("Y", strategy)

        processed = system.run(DataGateway(ticks_csv).stream())
        reporter.close()

        assert processed == 16
        logged = gateway.get_trade_history()
        assert logged == system.trades

        x_trades = [(t.side, t.quantity, t.price) for t in gateway.get_trade_history("X")]
        assert x_trades == [(OrderSide.BUY, 100, 13.0), (OrderSide.SELL, 100, 11.0)]

        y_trades = gateway.get_trade_history("Y")
        assert [t.side for t in y_trades] == [OrderSide.BUY]

        assert system.get_position("X").total_pnl == pytest.approx(-200.0)
        assert system.get_position("Y").quantity == 100
        summary = system.get_summary()
        assert summary["unrealized_pnl"] == pytest.approx((57 - 53) * 100)


class TestCommandLine:
    def test_strategy_run_writes_outputs(self, ticks_csv, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        output = tmp_path / "out" / "trades.csv"
        trade_log = tmp_path / "audit.csv"

        exit_code = main.main([
            "--data", str(ticks_csv),
            "--strategy", "moving_average_crossover",
            "--param", "short_window=2",
            "--param", "long_window=4",
            "--symbols", "X",
            "--max-history", "5",
            "--trade-log", str(trade_log),
            "--output", str(output),
        ])

        assert exit_code == 0
        trades = pd.read_csv(output)
        assert list(trades["side"]) == ["BUY", "SELL"]
        assert list(trades["symbol"]) == ["X", "X"]
        assert trades["realized_pnl"].iloc[-1] == pytest.approx(-200.0)

        assert len(TradeGateway(trade_log, append=True).get_trade_history()) == 2
        assert "Total trades:        2" in capsys.readouterr().out

    def test_named_config(self, ticks_csv, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        exit_code = main.main([
            "--data", str(ticks_csv),
            "--config", "momentum_aggressive",
            "--symbols", "X", "Y",
        ])
        assert exit_code == 0

    def test_list(self, capsys):
        assert main.main(["--list"]) == 0
        out = capsys.readouterr().out
        assert "ma_crossover_fast" in out
        assert "moving_average_crossover" in out

    def test_requires_data_and_strategy(self):
        with pytest.raises(SystemExit):
            main.main(["--data", "ticks.csv"])

    def test_parse_params(self):
        assert main.parse_params(["a=1", "b=1.5", "c=x"]) == {"a": 1, "b": 1.5, "c": "x"}
        with pytest.raises(ValueError, match="key=value"):
            main.parse_params(["oops"])

    @pytest.mark.parametrize("flag, message", [
        ("--max-history", "max_history_size must be positive"),
        ("--position-size", "position_quantity must be positive"),
    ])
    def test_zero_overrides_are_rejected(self, ticks_csv, tmp_path, monkeypatch, flag, message):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ValueError, match=message):
            main.main([
                "--data", str(ticks_csv),
                "--strategy", "moving_average_crossover",
                flag, "0",
            ])
