"""
Tests for the advice summary
"""

from datetime import date, timedelta

import pytest
from fueltrack.services.advice_service import (
    INSUFFICIENT_DATA_MESSAGES,
    build_advice_summary,
    calculate_subwindow_size,
)

from factories import FuelRecordFactory


def _fills(gallons_list, distance=300, prices=None):
    """Chronological fills, each distance after the last, with the given volumes."""
    records = []
    for i, gallons in enumerate(gallons_list):
        records.append(FuelRecordFactory.create(
            id=f"f{i}",
            date=date(2024, 1, 1) + timedelta(days=i * 7),
            odometer=1000 + i * distance,
            gallons=gallons,
            price_per_gallon=prices[i] if prices else 3.0,
        ))
    return records


class TestSubwindowSize:
    """Test recent/previous window sizing"""

    @pytest.mark.parametrize("valid_points,expected", [
        (0, 0),
        (1, 0),
        (2, 1),
        (3, 1),
        (5, 2),
        (6, 3),
        (20, 3),
    ])
    def test_subwindow_size(self, valid_points, expected):
        assert calculate_subwindow_size(valid_points) == expected


class TestBuildAdviceSummary:
    """Test the numeric summary handed to the advice service"""

    def test_no_records(self):
        assert build_advice_summary([]) is None

    def test_single_record(self):
        assert build_advice_summary([FuelRecordFactory.create()]) is None

    def test_no_valid_intervals(self):
        """Two records with an odometer rollback give nothing to summarize"""
        records = [
            FuelRecordFactory.create(id="a", date="2024-01-01", odometer=5000),
            FuelRecordFactory.create(id="b", date="2024-01-10", odometer=4800),
        ]
        assert build_advice_summary(records) is None

    def test_two_fills(self, two_fills):
        summary = build_advice_summary(two_fills)
        assert summary.total_records == 2
        assert summary.avg_efficiency == 25.0
        assert summary.trend == "stable"
        assert summary.recent_avg_efficiency == 0.0
        assert summary.previous_avg_efficiency == 0.0
        assert summary.avg_price == pytest.approx(3.1)
        assert summary.first_price == 3.00
        assert summary.last_price == 3.20

    def test_worsening(self):
        # Efficiencies: 30, 30, 30, 20, 20, 20
        summary = build_advice_summary(_fills([10, 10, 10, 10, 15, 15, 15]))
        assert summary.recent_avg_efficiency == 20.0
        assert summary.previous_avg_efficiency == 30.0
        assert summary.trend == "worsening"
        # 1800 distance over 75 gallons
        assert summary.avg_efficiency == 24.0

    def test_improving(self):
        summary = build_advice_summary(_fills([10, 15, 15, 15, 10, 10, 10]))
        assert summary.trend == "improving"

    def test_stable(self):
        summary = build_advice_summary(_fills([10] * 8))
        assert summary.trend == "stable"
        assert summary.recent_avg_efficiency == summary.previous_avg_efficiency == 30.0

    def test_three_records_compare_single_intervals(self):
        summary = build_advice_summary(_fills([10, 10, 12]))
        assert summary.recent_avg_efficiency == 25.0
        assert summary.previous_avg_efficiency == 30.0
        assert summary.trend == "worsening"

    def test_invalid_intervals_skipped(self):
        """Rollback intervals are excluded from efficiency but records still count"""
        records = _fills([10, 10, 10])
        records.append(FuelRecordFactory.create(
            id="rollback", date=date(2024, 2, 1), odometer=500, gallons=10,
        ))
        summary = build_advice_summary(records)
        assert summary.total_records == 4
        assert summary.avg_efficiency == 30.0
        assert summary.recent_avg_efficiency == 30.0

    def test_average_price_includes_first_record(self):
        summary = build_advice_summary(_fills([10, 10, 10], prices=[2.0, 3.0, 4.0]))
        assert summary.avg_price == 3.0
        assert summary.first_price == 2.0
        assert summary.last_price == 4.0

    def test_to_dict_rounds(self):
        summary = build_advice_summary(_fills([10, 3]))
        data = summary.to_dict()
        assert data["avgEfficiency"] == 100.0
        assert data["totalRecords"] == 2
        assert data["trend"] == "stable"
        summary = build_advice_summary(_fills([10, 9]))
        assert summary.to_dict()["avgEfficiency"] == 33.33


class TestMessages:
    """Test insufficient-data messages"""

    def test_messages_for_both_languages(self):
        assert set(INSUFFICIENT_DATA_MESSAGES) == {"es", "en"}
