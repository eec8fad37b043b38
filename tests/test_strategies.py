import pytest
from collections import deque
from datetime import datetime, timedelta

from SignalTrading.models import PricePoint
from SignalTrading.strategies import (
    STRATEGY_REGISTRY,
    MomentumStrategy,
    MovingAverageCrossoverStrategy,
    TradingStrategy,
    ZScoreMeanReversionStrategy,
    create_strategy,
    list_strategies,
    register,
    tail_prices,
)


def make_history(prices, symbol="TEST"):
    """Build a price history with one point per second."""
    base_time = datetime(2024, 1, 1, 9, 30, 0)
    return [
        PricePoint(timestamp=base_time + timedelta(seconds=i), symbol=symbol, price=p)
        for i, p in enumerate(prices)
    ]


class TestTailPrices:
    def test_returns_last_prices(self):
        history = make_history([1, 2, 3, 4, 5])
        assert tail_prices(history, 3) == [3, 4, 5]

    def test_insufficient_history(self):
        assert tail_prices(make_history([1, 2]), 3) == []

    def test_works_on_deque(self):
        history = deque(make_history([1, 2, 3, 4]), maxlen=4)
        assert tail_prices(history, 2) == [3, 4]

    def test_non_positive_count(self):
        assert tail_prices(make_history([1, 2]), 0) == []


class TestMovingAverageCrossoverValidation:
    def test_short_window_positive(self):
        with pytest.raises(ValueError, match="short_window must be positive"):
            MovingAverageCrossoverStrategy(short_window=0, long_window=4)

    def test_long_window_positive(self):
        with pytest.raises(ValueError, match="long_window must be positive"):
            MovingAverageCrossoverStrategy(short_window=2, long_window=-1)

    @pytest.mark.parametrize("short, long", [(4, 4), (5, 4)])
    def test_short_must_be_less_than_long(self, short, long):
        with pytest.raises(ValueError, match="must be less than long_window"):
            MovingAverageCrossoverStrategy(short_window=short, long_window=long)


class TestMovingAverageCrossover:
    def setup_method(self):
        self.strategy = MovingAverageCrossoverStrategy(short_window=2, long_window=4)

    @pytest.mark.parametrize("prices", [[], [10], [10, 20, 30], [30, 20, 10]])
    def test_insufficient_history_gives_no_signal(self, prices):
        history = make_history(prices)
        assert self.strategy.should_buy(history) is False
        assert self.strategy.should_sell(history) is False

    def test_increasing_prices_buy(self):
        history = make_history([10, 11, 12, 13, 14])
        assert self.strategy.should_buy(history) is True
        assert self.strategy.should_sell(history) is False

    def test_decreasing_prices_sell(self):
        history = make_history([14, 13, 12, 11])
        assert self.strategy.should_buy(history) is False
        assert self.strategy.should_sell(history) is True

    def test_equal_averages_give_no_signal(self):
        history = make_history([10, 10, 10, 10])
        assert self.strategy.should_buy(history) is False
        assert self.strategy.should_sell(history) is False

    def test_uses_only_tail_of_history(self):
        # Old prices beyond long_window must not matter
        history = make_history([1000, 1000, 10, 11, 12, 13])
        assert self.strategy.moving_averages(history) == (12.5, 11.5)
        assert self.strategy.should_buy(history) is True

    def test_moving_averages_none_when_short(self):
        assert self.strategy.moving_averages(make_history([1, 2, 3])) is None

    def test_idempotent_and_does_not_mutate(self):
        history = make_history([10, 12, 11, 15, 13])
        snapshot = list(history)

        first = (self.strategy.should_buy(history), self.strategy.should_sell(history))
        second = (self.strategy.should_buy(history), self.strategy.should_sell(history))

        assert first == second
        assert history == snapshot

    def test_works_on_deque_history(self):
        history = deque(make_history([10, 11, 12, 13]), maxlen=4)
        assert self.strategy.should_buy(history) is True


class TestMomentumStrategy:
    def test_validation(self):
        with pytest.raises(ValueError, match="lookback_period must be >= 2"):
            MomentumStrategy(lookback_period=1)
        with pytest.raises(ValueError, match="momentum_threshold must be non-negative"):
            MomentumStrategy(momentum_threshold=-0.1)

    def test_insufficient_history(self):
        strategy = MomentumStrategy(lookback_period=5, momentum_threshold=0.01)
        history = make_history([100, 110, 120])
        assert strategy.should_buy(history) is False
        assert strategy.should_sell(history) is False

    def test_uptrend_buys(self):
        strategy = MomentumStrategy(lookback_period=5, momentum_threshold=0.01)
        history = make_history([100, 101, 102, 103, 105])
        assert strategy.momentum(history) == pytest.approx(0.05)
        assert strategy.should_buy(history) is True
        assert strategy.should_sell(history) is False

    def test_downtrend_sells(self):
        strategy = MomentumStrategy(lookback_period=5, momentum_threshold=0.01)
        history = make_history([100, 99, 98, 97, 95])
        assert strategy.should_buy(history) is False
        assert strategy.should_sell(history) is True

    def test_below_threshold_no_signal(self):
        strategy = MomentumStrategy(lookback_period=3, momentum_threshold=0.05)
        history = make_history([100, 101, 102])
        assert strategy.should_buy(history) is False
        assert strategy.should_sell(history) is False

    def test_non_positive_base_price(self):
        strategy = MomentumStrategy(lookback_period=3, momentum_threshold=0.0)
        history = make_history([0, 1, 2])
        assert strategy.momentum(history) is None
        assert strategy.should_buy(history) is False


class TestZScoreMeanReversion:
    def test_validation(self):
        with pytest.raises(ValueError, match="lookback_period must be > 1"):
            ZScoreMeanReversionStrategy(lookback_period=1)
        with pytest.raises(ValueError, match="entry_threshold must be positive"):
            ZScoreMeanReversionStrategy(entry_threshold=0)
        with pytest.raises(ValueError, match="must be less than entry_threshold"):
            ZScoreMeanReversionStrategy(entry_threshold=1.0, exit_threshold=1.0)

    def test_flat_prices_no_signal(self):
        strategy = ZScoreMeanReversionStrategy(lookback_period=5)
        history = make_history([100] * 5)
        assert strategy.zscore(history) is None
        assert strategy.should_buy(history) is False
        assert strategy.should_sell(history) is False

    def test_sharp_drop_buys(self):
        strategy = ZScoreMeanReversionStrategy(lookback_period=10, entry_threshold=2.0)
        history = make_history([100] * 9 + [80])
        assert strategy.zscore(history) == pytest.approx(-3.0)
        assert strategy.should_buy(history) is True
        assert strategy.should_sell(history) is False

    def test_reversion_sells(self):
        strategy = ZScoreMeanReversionStrategy(lookback_period=4, entry_threshold=2.0, exit_threshold=0.0)
        history = make_history([90, 95, 100, 105])
        assert strategy.zscore(history) > 0
        assert strategy.should_sell(history) is True
        assert strategy.should_buy(history) is False

    def test_insufficient_history(self):
        strategy = ZScoreMeanReversionStrategy(lookback_period=10)
        history = make_history([100, 50])
        assert strategy.should_buy(history) is False
        assert strategy.should_sell(history) is False


class TestRegistry:
    def test_builtin_strategies_registered(self):
        assert list_strategies() == [
            "momentum",
            "moving_average_crossover",
            "zscore_mean_reversion",
        ]

    def test_create_strategy_by_name(self):
        strategy = create_strategy("moving_average_crossover", short_window=3, long_window=7)
        assert isinstance(strategy, MovingAverageCrossoverStrategy)
        assert strategy.short_window == 3
        assert strategy.long_window == 7

    def test_create_strategy_validates_params(self):
        with pytest.raises(ValueError, match="must be less than long_window"):
            create_strategy("moving_average_crossover", short_window=7, long_window=3)

    def test_unknown_strategy(self):
        with pytest.raises(ValueError, match="Unknown strategy 'nope'"):
            create_strategy("nope")

    def test_register_new_strategy(self):
        @register("always_buy_test")
        class AlwaysBuy(TradingStrategy):
            def should_buy(self, history):
                return bool(history)

            def should_sell(self, history):
                return False

        try:
            strategy = create_strategy("always_buy_test")
            assert strategy.name == "AlwaysBuy"
            assert repr(strategy) == "AlwaysBuy()"
            assert strategy.should_buy(make_history([1])) is True
        finally:
            STRATEGY_REGISTRY.pop("always_buy_test", None)
