"""
Data Gateway - Replays recorded price data as a stream of price points.

Supports CSV files with multi-symbol rows in arrival order.
"""

import csv
from datetime import datetime
import logging
from pathlib import Path
from typing import Iterator
import pandas as pd

from SignalTrading.models import PricePoint

logger = logging.getLogger(__name__)

# Accepted spellings per field, in order of preference (matched case-insensitively)
TIMESTAMP_ALIASES = ('timestamp', 'datetime', 'date', 'time')
PRICE_ALIASES = ('price', 'close')


class DataGateway:
    """
    Streams price data from a CSV file row by row, as a recorded feed.

    Header names are matched case-insensitively and resolved once, when the
    gateway is created:
    - timestamp: first of timestamp / datetime / date / time
    - symbol
    - price: price, else close
    - volume (optional, blank or missing reads as 0)

    Timestamps are parsed as ISO 8601 first, then by pandas.

    Usage:
        gateway = DataGateway("data/ticks.csv")
        for point in gateway.stream():
            system.add_price_point(point)
    """

    def __init__(self, data_source: str | Path):
        self.data_source = Path(data_source)
        self._resolve_columns()

    def _resolve_columns(self) -> None:
        """Check the file and map each field to its header as written."""
        if not self.data_source.exists():
            raise FileNotFoundError(f"Data file not found: {self.data_source}")

        with self.data_source.open('r', newline='') as f:
            headers = csv.DictReader(f).fieldnames
        if not headers:
            raise ValueError(f"CSV file {self.data_source} has no headers")

        by_lower = {}
        for header in headers:
            by_lower.setdefault(header.strip().lower(), header)

        def first_of(aliases):
            return next((by_lower[a] for a in aliases if a in by_lower), None)

        self._timestamp_col = first_of(TIMESTAMP_ALIASES)
        if self._timestamp_col is None:
            raise ValueError(
                f"CSV must have a timestamp column. Found: {headers}. "
                f"Expected one of: {list(TIMESTAMP_ALIASES)}"
            )

        self._symbol_col = by_lower.get('symbol')
        if self._symbol_col is None:
            raise ValueError(f"CSV must have 'symbol' column. Found: {headers}")

        self._price_col = first_of(PRICE_ALIASES)
        if self._price_col is None:
            raise ValueError(f"CSV must have 'price' or 'close' column. Found: {headers}")

        self._volume_col = by_lower.get('volume')

        logger.debug(
            f"{self.data_source}: timestamp={self._timestamp_col!r} symbol={self._symbol_col!r} "
            f"price={self._price_col!r} volume={self._volume_col!r}"
        )

    @staticmethod
    def _parse_timestamp(value: str) -> datetime:
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return pd.to_datetime(value).to_pydatetime()

    def _rows(self) -> Iterator[dict]:
        with self.data_source.open('r', newline='') as f:
            yield from csv.DictReader(f)

    def stream(self) -> Iterator[PricePoint]:
        """
        Stream price points one at a time, in file order.

        Raises:
            ValueError: A row has an empty timestamp, symbol or price
        """
        for line, row in enumerate(self._rows(), start=2):
            timestamp = row.get(self._timestamp_col)
            symbol = row.get(self._symbol_col)
            price = row.get(self._price_col)
            if not (timestamp and symbol and price):
                raise ValueError(f"{self.data_source}:{line}: incomplete row {row}")

            volume = (row.get(self._volume_col) if self._volume_col else None) or '0'

            yield PricePoint(
                timestamp=self._parse_timestamp(timestamp),
                symbol=symbol,
                price=float(price),
                volume=int(float(volume)),
            )

    def load_all(self) -> list[PricePoint]:
        """Load every row into memory; prefer stream() for large files."""
        return list(self.stream())

    def get_symbols(self) -> set[str]:
        return {row[self._symbol_col] for row in self._rows() if row.get(self._symbol_col)}

    def __repr__(self) -> str:
        return f"DataGateway(source={self.data_source})"
