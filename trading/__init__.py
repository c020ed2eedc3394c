"""
Trading Metrics Module

Calculates stock trading metrics:
- Dividend yield (Common, Preferred)
- P/E ratio
- Volume weighted stock price (trailing 15 minutes)
- Geometric mean of all trade prices
"""

__version__ = "0.1.0"
