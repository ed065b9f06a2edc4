"""
Tests for efficiency calculations
"""

import pytest
from fueltrack.calculations.efficiency import (
    calculate_distance_delta,
    calculate_efficiency,
    calculate_weighted_efficiency,
    is_valid_efficiency,
)


class TestDistanceDelta:
    """Test odometer delta calculations"""

    def test_distance_delta_typical(self):
        """1000 -> 1300 = 300"""
        assert calculate_distance_delta(1000, 1300) == 300

    def test_distance_delta_rollback(self):
        """Odometer going backwards is zero distance, not negative"""
        assert calculate_distance_delta(1300, 1000) == 0.0

    def test_distance_delta_unchanged(self):
        assert calculate_distance_delta(1000, 1000) == 0.0

    def test_distance_delta_none_values(self):
        assert calculate_distance_delta(None, 1000) == 0.0
        assert calculate_distance_delta(1000, None) == 0.0

    def test_distance_delta_fractional(self):
        assert calculate_distance_delta(1000.5, 1001.0) == pytest.approx(0.5)


class TestEfficiency:
    """Test distance-per-gallon calculations"""

    def test_efficiency_typical(self):
        """300 distance on 12 gallons = 25"""
        assert calculate_efficiency(300, 12) == 25.0

    def test_efficiency_zero_distance(self):
        assert calculate_efficiency(0, 12) == 0.0

    def test_efficiency_zero_gallons(self):
        """Zero gallons must not divide by zero"""
        assert calculate_efficiency(300, 0) == 0.0

    def test_efficiency_negative_gallons(self):
        assert calculate_efficiency(300, -5) == 0.0

    def test_efficiency_none_values(self):
        assert calculate_efficiency(None, 10) == 0.0
        assert calculate_efficiency(300, None) == 0.0

    def test_is_valid_efficiency(self):
        assert is_valid_efficiency(25.0)
        assert not is_valid_efficiency(0.0)
        assert not is_valid_efficiency(None)


class TestWeightedEfficiency:
    """Test gallons-weighted average efficiency"""

    def test_weighted_by_gallons(self):
        """Bigger fill-ups count proportionally more"""
        # (20*10 + 30*30) / 40 = 27.5, simple mean would be 25
        assert calculate_weighted_efficiency([(20.0, 10.0), (30.0, 30.0)]) == 27.5

    def test_equal_gallons_matches_simple_mean(self):
        samples = [(20.0, 10.0), (25.0, 10.0), (30.0, 10.0)]
        assert calculate_weighted_efficiency(samples) == pytest.approx(25.0)

    def test_invalid_samples_skipped(self):
        """Zero efficiency points do not dilute the average"""
        assert calculate_weighted_efficiency([(0.0, 50.0), (25.0, 12.0)]) == 25.0

    def test_empty(self):
        assert calculate_weighted_efficiency([]) == 0.0

    def test_all_invalid(self):
        assert calculate_weighted_efficiency([(0.0, 10.0), (0.0, 12.0)]) == 0.0

    def test_accepts_generator(self):
        result = calculate_weighted_efficiency((e, 10.0) for e in [10.0, 30.0])
        assert result == 20.0
