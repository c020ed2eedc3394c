"""
In-memory trade store.
Records trades in timestamp order and answers VWAP and geometric mean queries.

Not thread-safe: callers sharing a store across threads must lock around it.
"""

import os
import time
import logging
from bisect import bisect_left, bisect_right
from datetime import datetime
from typing import Iterator, List, Optional, Union

import pandas as pd
from dotenv import load_dotenv

from trading.trade import Trade
from trading.calculations.averages import volume_weighted_price, geometric_mean

# Load environment variables
load_dotenv()

# Set up logger
logger = logging.getLogger(__name__)

DEFAULT_WINDOW_MINUTES = 15

TimePoint = Union[datetime, float, int]


class NoTradesFound(Exception):
    """Raised when no trades match the query."""

    def __init__(self, message: str = "No Trades Found"):
        super().__init__(message)


def to_epoch_seconds(point: TimePoint) -> float:
    if isinstance(point, datetime):
        return point.timestamp()
    return float(point)


def current_epoch_seconds() -> int:
    """Wall-clock time truncated to whole seconds, the resolution of trade timestamps."""
    return int(time.time())


class TradeStore:
    """
    Append-only collection of trades ordered by timestamp.

    Trades sharing a timestamp keep their insertion order.

    Appending in time order is amortised O(1); an out-of-order insert shifts
    the later entries, so bulk loads should be fed oldest first. Window
    lookups are O(log n) regardless of insert order.
    """

    def __init__(self, window_minutes: Optional[int] = None):
        """
        Args:
            window_minutes: VWAP window (default: TRADE_VWAP_WINDOW_MINUTES env, else 15)
        """
        if window_minutes is None:
            window_minutes = int(os.getenv('TRADE_VWAP_WINDOW_MINUTES', str(DEFAULT_WINDOW_MINUTES)))

        self.window_minutes = window_minutes
        # Parallel lists: _keys[i] is the epoch time of _trades[i]
        self._keys: List[float] = []
        self._trades: List[Trade] = []

    def __len__(self) -> int:
        return len(self._trades)

    def __iter__(self) -> Iterator[Trade]:
        return iter(list(self._trades))

    @property
    def window_seconds(self) -> int:
        return self.window_minutes * 60

    def record_trade(self, timestamp: str, quantity: int, side: str, price: int) -> None:
        """
        Record a trade.

        Args:
            timestamp: Trade time as YYYY-MM-DD HH:MM:SS (local time)
            quantity: Number of shares
            side: Buy/sell indicator, e.g. 'B' or 'S'
            price: Trade price

        Raises:
            TimestampFormatError: If timestamp is malformed (store unchanged)
        """
        trade = Trade.from_record(timestamp, quantity, side, price)
        key = trade.epoch_seconds

        # bisect_right places the new trade after any with the same key
        index = bisect_right(self._keys, key)
        self._keys.insert(index, key)
        self._trades.insert(index, trade)

        logger.debug(f"Recorded trade {trade.timestamp_str} {side} {quantity}@{price} ({len(self._trades)} total)")

    def trades_since(self, lower_bound: TimePoint) -> List[Trade]:
        """
        Return trades at or after lower_bound, through the most recent.

        There is no upper bound, so future-dated trades are included.
        """
        start = bisect_left(self._keys, to_epoch_seconds(lower_bound))
        return self._trades[start:]

    def get_volume_weighted_stock_price(self, now: Optional[TimePoint] = None) -> float:
        """
        Calculate volume weighted stock price over the trailing window.

        Args:
            now: Reference time (default: current wall-clock time)

        Returns:
            Σ(quantity × price) / Σ(quantity) over trades in the window

        Raises:
            NoTradesFound: If the window is empty or its total quantity is zero
        """
        now_epoch = current_epoch_seconds() if now is None else to_epoch_seconds(now)
        lower_bound = now_epoch - self.window_seconds

        window = self.trades_since(lower_bound)
        vwap = volume_weighted_price(
            [t.quantity for t in window],
            [t.price for t in window]
        )

        if vwap is None:
            logger.info(f"No trades in last {self.window_minutes} minutes ({len(self._trades)} stored)")
            raise NoTradesFound()

        logger.debug(f"VWAP over {len(window)} trades: {vwap}")
        return vwap

    def calculate_geometric_mean(self) -> float:
        """
        Calculate geometric mean of all recorded trade prices.

        Raises:
            NoTradesFound: If no trades have been recorded
        """
        result = geometric_mean([t.price for t in self._trades])

        if result is None:
            raise NoTradesFound()

        return result

    def to_dataframe(self) -> pd.DataFrame:
        """Trades as a DataFrame in timestamp order."""
        columns = ['timestamp', 'quantity', 'side', 'price']
        if not self._trades:
            return pd.DataFrame(columns=columns)

        return pd.DataFrame(
            [
                {
                    'timestamp': t.timestamp,
                    'quantity': t.quantity,
                    'side': t.side,
                    'price': t.price
                }
                for t in self._trades
            ],
            columns=columns
        )
