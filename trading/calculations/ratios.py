"""
Ratio calculation utilities.
Pure functions for dividend yield and P/E ratio.
"""

from typing import Union


COMMON = "Common"
PREFERRED = "Preferred"

Number = Union[int, float]


class InvalidTradeTypeError(ValueError):
    """Raised when a trade type is neither Common nor Preferred."""
    pass


def calculate_dividend_yield(
    price: Number,
    trade_type: str,
    last_dividend: float,
    fixed_dividend: float,
    par_value: Number
) -> float:
    """
    Calculate dividend yield for a stock.

    Formula:
        Common:    last_dividend / price
        Preferred: (fixed_dividend × par_value) / price

    Args:
        price: Stock price
        trade_type: "Common" or "Preferred"
        last_dividend: Last dividend, used only for Common stock
        fixed_dividend: Fixed dividend rate, used only for Preferred stock
        par_value: Par value, used only for Preferred stock

    Returns:
        Dividend yield as decimal

    Raises:
        InvalidTradeTypeError: If trade_type is not Common or Preferred
        ZeroDivisionError: If price is zero
    """
    if trade_type == COMMON:
        return last_dividend / price

    if trade_type == PREFERRED:
        return (fixed_dividend * par_value) / price

    raise InvalidTradeTypeError(f"Invalid Trade Type: {trade_type}")


def calculate_pe_ratio(price: Number, dividend: float) -> float:
    """
    Calculate P/E ratio.

    Formula: price / dividend

    Raises:
        ZeroDivisionError: If dividend is zero
    """
    return price / dividend
