"""
Metrics aggregator - composes trade store queries into a single metrics dict.
Query failures map to None so the result is always complete.
"""

from datetime import datetime
from typing import Dict, Any, Optional

from trading.trade_store import (
    TradeStore,
    NoTradesFound,
    TimePoint,
    to_epoch_seconds,
    current_epoch_seconds
)


CALCULATION_VERSION = '1.0.0'


def compose_trade_metrics(
    store: TradeStore,
    now: Optional[TimePoint] = None
) -> Dict[str, Any]:
    """
    Compose all trade metrics for a store.

    Args:
        store: Trade store to summarise
        now: Reference time for the VWAP window (default: current time)

    Returns:
        Metrics dictionary
    """
    now_epoch = current_epoch_seconds() if now is None else to_epoch_seconds(now)

    try:
        vwap = store.get_volume_weighted_stock_price(now=now_epoch)
    except NoTradesFound:
        vwap = None

    try:
        geo_mean = store.calculate_geometric_mean()
    except NoTradesFound:
        geo_mean = None

    trades = list(store)
    window_trades = store.trades_since(now_epoch - store.window_seconds)

    return {
        'as_of': datetime.fromtimestamp(now_epoch).isoformat(timespec='seconds'),
        'trade_count': len(trades),
        'window_minutes': store.window_minutes,
        'window_trade_count': len(window_trades),
        'volume_weighted_price': vwap,
        'geometric_mean': geo_mean,
        'buy_volume': sum(t.quantity for t in trades if t.is_buy),
        'sell_volume': sum(t.quantity for t in trades if t.is_sell),
        'first_trade': trades[0].timestamp.isoformat() if trades else None,
        'last_trade': trades[-1].timestamp.isoformat() if trades else None,
        'metadata': {
            'calculated_at': datetime.now().isoformat(),
            'calculation_version': CALCULATION_VERSION
        }
    }
