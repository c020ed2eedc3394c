"""
Trade value object and timestamp parsing.
Pure data - no IO or side effects.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'

BUY = 'B'
SELL = 'S'


class TimestampFormatError(ValueError):
    """Raised when a trade timestamp does not match YYYY-MM-DD HH:MM:SS."""
    pass


def parse_trade_timestamp(text: str) -> datetime:
    """
    Parse a trade timestamp in local time.

    Args:
        text: Timestamp string, e.g. '2024-01-01 10:00:00'

    Returns:
        Naive datetime in local time

    Raises:
        TimestampFormatError: If text is not a string in the expected format
    """
    if not isinstance(text, str):
        raise TimestampFormatError(f"timestamp must be string, got {type(text)}")

    try:
        return datetime.strptime(text, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise TimestampFormatError(
            f"Invalid timestamp '{text}': expected YYYY-MM-DD HH:MM:SS"
        ) from e


@dataclass(frozen=True)
class Trade:
    """A single executed trade."""

    timestamp: datetime
    quantity: int
    side: str
    price: int
    # Timestamp string exactly as recorded; excluded from equality
    raw_timestamp: Optional[str] = field(default=None, compare=False)

    @classmethod
    def from_record(cls, timestamp: str, quantity: int, side: str, price: int) -> 'Trade':
        """Build a trade from its raw recorded form."""
        return cls(
            timestamp=parse_trade_timestamp(timestamp),
            quantity=quantity,
            side=side,
            price=price,
            raw_timestamp=timestamp
        )

    @property
    def epoch_seconds(self) -> float:
        # Naive datetimes are interpreted as local time
        return self.timestamp.timestamp()

    @property
    def timestamp_str(self) -> str:
        if self.raw_timestamp is not None:
            return self.raw_timestamp
        return self.timestamp.strftime(TIMESTAMP_FORMAT)

    @property
    def notional(self) -> int:
        return self.quantity * self.price

    @property
    def is_buy(self) -> bool:
        return self.side == BUY

    @property
    def is_sell(self) -> bool:
        return self.side == SELL

    def to_dict(self) -> Dict[str, Any]:
        return {
            'timestamp': self.timestamp_str,
            'quantity': self.quantity,
            'side': self.side,
            'price': self.price
        }
