"""
System configuration.

Values come from keyword arguments or from the environment (a .env file is
loaded first when present):

    SIGNAL_MAX_HISTORY_SIZE   price points kept per symbol (default: 100)
    SIGNAL_POSITION_QUANTITY  units bought per entry (default: 100)
    SIGNAL_LOG_LEVEL          logging level (default: INFO)
    SIGNAL_LOG_FILE           log file path (default: timestamped file in logs/)
    SIGNAL_TRADE_LOG          CSV trade audit log (default: none)
"""

from dataclasses import dataclass
import os

from dotenv import load_dotenv


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


@dataclass
class SystemConfig:
    """
    Settings for a TradingSystem run.

    Attributes:
        max_history_size: Price points kept per symbol
        position_quantity: Units bought per entry by the default sizer
        log_level: Logging level name
        log_file: Optional log file path
        trade_log_file: Optional CSV trade audit log path
    """

    max_history_size: int = 100
    position_quantity: int = 100
    log_level: str = "INFO"
    log_file: str | None = None
    trade_log_file: str | None = None

    def __post_init__(self):
        """Validate configuration values"""
        if self.max_history_size <= 0:
            raise ValueError(
                f"max_history_size must be positive, got {self.max_history_size}"
            )
        if self.position_quantity <= 0:
            raise ValueError(
                f"position_quantity must be positive, got {self.position_quantity}"
            )

    @classmethod
    def from_env(cls) -> "SystemConfig":
        """
        Load configuration from environment variables.

        Returns:
            SystemConfig instance
        """
        load_dotenv()

        return cls(
            max_history_size=_env_int("SIGNAL_MAX_HISTORY_SIZE", 100),
            position_quantity=_env_int("SIGNAL_POSITION_QUANTITY", 100),
            log_level=os.getenv("SIGNAL_LOG_LEVEL", "INFO"),
            log_file=os.getenv("SIGNAL_LOG_FILE") or None,
            trade_log_file=os.getenv("SIGNAL_TRADE_LOG") or None,
        )
