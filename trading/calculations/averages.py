"""
Average price utilities.
Pure functions for volume weighted price and geometric mean.
"""

import math
import numpy as np
from typing import Optional, Sequence


class AveragesError(Exception):
    """Raised when average calculation fails."""
    pass


def volume_weighted_price(
    quantities: Sequence[int],
    prices: Sequence[int]
) -> Optional[float]:
    """
    Calculate volume weighted price.

    Formula: VWAP = Σ(quantity × price) / Σ(quantity)

    Args:
        quantities: Traded quantities
        prices: Traded prices, same order as quantities

    Returns:
        Volume weighted price, or None if total quantity is zero

    Raises:
        AveragesError: If quantities and prices differ in length
    """
    if len(quantities) != len(prices):
        raise AveragesError("Quantities and prices must have same length")

    if len(quantities) == 0:
        return None

    # float64 so large notional sums don't wrap around
    quantity_array = np.asarray(quantities, dtype=np.float64)
    price_array = np.asarray(prices, dtype=np.float64)

    total_quantity = quantity_array.sum()
    if total_quantity == 0:
        return None

    total_notional = np.dot(quantity_array, price_array)

    return float(total_notional / total_quantity)


def geometric_mean(prices: Sequence[int]) -> Optional[float]:
    """
    Calculate geometric mean of prices.

    Formula: (p_1 × p_2 × ... × p_n)^(1/n), computed as exp(mean(ln|p|))
    so the product never overflows.

    Results match the direct product:
    - a single price is returned unchanged
    - any zero price gives 0.0
    - a negative product gives NaN (no real root)
    - an even count of negative prices gives the positive root

    Args:
        prices: Trade prices

    Returns:
        Geometric mean, or None if prices is empty
    """
    if len(prices) == 0:
        return None

    price_array = np.asarray(prices, dtype=np.float64)

    # First root of a single price, negative or not
    if len(price_array) == 1:
        return float(price_array[0])

    if np.any(price_array == 0):
        return 0.0

    negative_count = int(np.count_nonzero(price_array < 0))
    if negative_count % 2 == 1:
        return math.nan

    log_mean = np.log(np.abs(price_array)).mean()

    return float(np.exp(log_mean))
