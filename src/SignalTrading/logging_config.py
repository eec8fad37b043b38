"""
Logging configuration for SignalTrading.

All modules log through child loggers of the "SignalTrading" package logger;
this module attaches the handlers once at application startup.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

PACKAGE_LOGGER = "SignalTrading"
DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(
    level: int | str = logging.INFO,
    log_file: str | Path | None = None,
    log_dir: str | Path = "logs",
    format_string: str | None = None,
    datefmt: str = "%Y-%m-%d %H:%M:%S",
    console_output: bool = True,
    file_output: bool = True,
) -> logging.Logger:
    """
    Configure logging for the SignalTrading package.

    Args:
        level: Logging level (e.g., logging.DEBUG, "INFO")
        log_file: Path to write logs to. If None, a timestamped file is created in log_dir
        log_dir: Directory for the timestamped log file
        format_string: Custom format string (DEFAULT_FORMAT if None)
        datefmt: Date format for timestamps
        console_output: Also write to stdout
        file_output: Write to a log file at all

    Returns:
        The SignalTrading package logger

    Example:
        from SignalTrading import setup_logging

        setup_logging()                                  # INFO, console + logs/
        setup_logging("DEBUG", log_file="logs/run.log")  # custom file
        setup_logging(file_output=False)                 # console only
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Repeated calls replace handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt=datefmt)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if file_output:
        if log_file is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = Path(log_dir) / f"signal_trading_{timestamp}.log"
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False

    logger.info(
        f"Logging configured: level={logging.getLevelName(level)}, "
        f"file={log_file if file_output else None}"
    )

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Names outside the package are nested under it so they share its handlers.

    Example:
        logger = get_logger(__name__)
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
