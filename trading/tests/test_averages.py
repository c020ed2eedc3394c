"""
Tests for average price utilities.
"""

import math
import pytest

from trading.calculations.averages import (
    volume_weighted_price,
    geometric_mean,
    AveragesError
)


class TestVolumeWeightedPrice:
    """Tests for volume weighted price."""

    def test_vwap_basic(self):
        """(100×10 + 200×20) / 300 = 16.666..."""
        result = volume_weighted_price([100, 200], [10, 20])

        assert abs(result - 50.0 / 3.0) < 1e-9

    def test_vwap_single_trade(self):
        """Single trade returns its own price."""
        assert volume_weighted_price([500], [42]) == 42.0

    def test_vwap_empty(self):
        """No trades gives None."""
        assert volume_weighted_price([], []) is None

    def test_vwap_zero_quantity(self):
        """Zero total quantity gives None."""
        assert volume_weighted_price([0, 0], [10, 20]) is None

    def test_vwap_large_values_do_not_overflow(self):
        """Large notionals are summed in floating point."""
        quantities = [10**12, 10**12]
        prices = [10**9, 3 * 10**9]

        result = volume_weighted_price(quantities, prices)

        assert abs(result - 2 * 10**9) < 1e-3

    def test_vwap_length_mismatch(self):
        """Mismatched inputs raise AveragesError."""
        with pytest.raises(AveragesError, match="same length"):
            volume_weighted_price([1, 2], [10])


class TestGeometricMean:
    """Tests for geometric mean."""

    def test_geometric_mean_two_prices(self):
        """sqrt(50 × 60) ≈ 54.77"""
        result = geometric_mean([50, 60])

        assert abs(result - math.sqrt(3000)) < 1e-9

    def test_geometric_mean_known_cube(self):
        """(2 × 4 × 8)^(1/3) = 4"""
        assert abs(geometric_mean([2, 4, 8]) - 4.0) < 1e-9

    def test_geometric_mean_empty(self):
        """Empty input gives None."""
        assert geometric_mean([]) is None

    def test_geometric_mean_single_price(self):
        """Single price is returned unchanged."""
        assert geometric_mean([37]) == 37.0

    def test_geometric_mean_single_negative_price(self):
        """First root of a negative price is the price itself."""
        assert geometric_mean([-5]) == -5.0

    def test_geometric_mean_zero_price(self):
        """Any zero price makes the product zero."""
        assert geometric_mean([10, 0, 30]) == 0.0

    def test_geometric_mean_negative_product(self):
        """Negative product has no real root."""
        assert math.isnan(geometric_mean([-10, 20, 30]))

    def test_geometric_mean_even_negatives(self):
        """Two negatives give a positive product."""
        result = geometric_mean([-2, -8])

        assert abs(result - 4.0) < 1e-9

    def test_geometric_mean_many_large_prices(self):
        """Product of 1000 prices of 10^6 would overflow a float."""
        result = geometric_mean([10**6] * 1000)

        assert math.isfinite(result)
        assert abs(result - 10**6) / 10**6 < 1e-9
