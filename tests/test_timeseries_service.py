"""
Tests for the derived time-series (distance and efficiency per refuel)
"""

from datetime import date

from fueltrack.services.timeseries_service import DerivedPoint, derive_points, sort_records

from factories import FuelRecordFactory


class TestSortRecords:
    """Test chronological ordering"""

    def test_sorts_by_date(self):
        late = FuelRecordFactory.create(id="late", date="2024-02-01")
        early = FuelRecordFactory.create(id="early", date="2024-01-01")
        assert [r.id for r in sort_records([late, early])] == ["early", "late"]

    def test_equal_dates_keep_input_order(self):
        """Same-day refuels stay in the order they were stored"""
        first = FuelRecordFactory.create(id="first", date="2024-01-01")
        second = FuelRecordFactory.create(id="second", date="2024-01-01")
        assert [r.id for r in sort_records([first, second])] == ["first", "second"]
        assert [r.id for r in sort_records([second, first])] == ["second", "first"]


class TestDerivePoints:
    """Test distance and efficiency derivation"""

    def test_empty(self):
        assert derive_points([]) == []

    def test_single_record_has_no_efficiency(self):
        points = derive_points([FuelRecordFactory.create()])
        assert len(points) == 1
        assert points[0].distance_since_last == 0.0
        assert points[0].efficiency_since_last == 0.0
        assert not points[0].has_efficiency

    def test_two_fills(self, two_fills):
        """1000 -> 1300 on 12 gallons = 300 distance, 25 per gallon"""
        first, second = derive_points(two_fills)
        assert first.distance_since_last == 0.0
        assert second.distance_since_last == 300
        assert second.efficiency_since_last == 25.0

    def test_unordered_input_is_sorted(self, two_fills):
        points = derive_points(list(reversed(two_fills)))
        assert [p.record.id for p in points] == ["a", "b"]
        assert points[1].efficiency_since_last == 25.0

    def test_odometer_rollback(self):
        """Going backwards gives zero distance and no efficiency, never negative"""
        records = [
            FuelRecordFactory.create(id="a", date="2024-01-01", odometer=5000),
            FuelRecordFactory.create(id="b", date="2024-01-10", odometer=4800),
            FuelRecordFactory.create(id="c", date="2024-01-20", odometer=5100, gallons=10),
        ]
        points = derive_points(records)
        assert points[1].distance_since_last == 0.0
        assert points[1].efficiency_since_last == 0.0
        # Next interval is measured from the rolled-back reading
        assert points[2].distance_since_last == 300
        assert points[2].efficiency_since_last == 30.0

    def test_zero_gallons(self):
        """A zero-volume record keeps its distance but has no efficiency"""
        records = [
            FuelRecordFactory.create(id="a", date="2024-01-01", odometer=1000),
            FuelRecordFactory.create(id="b", date="2024-01-10", odometer=1200, gallons=0),
        ]
        points = derive_points(records)
        assert points[1].distance_since_last == 200
        assert points[1].efficiency_since_last == 0.0

    def test_same_day_uses_stored_order(self):
        """Second fill on the same day is measured against the first"""
        records = [
            FuelRecordFactory.create(id="a", date="2024-01-01", odometer=1000),
            FuelRecordFactory.create(id="b", date="2024-01-01", odometer=1100, gallons=4),
        ]
        points = derive_points(records)
        assert points[1].record.id == "b"
        assert points[1].efficiency_since_last == 25.0

    def test_one_point_per_record(self):
        records = FuelRecordFactory.create_series(6)
        assert len(derive_points(records)) == 6


class TestDerivedPoint:
    """Test DerivedPoint accessors and serialization"""

    def test_properties_delegate_to_record(self):
        record = FuelRecordFactory.create(date=date(2024, 3, 1), gallons=8, price_per_gallon=3.5)
        point = DerivedPoint(record=record)
        assert point.date == date(2024, 3, 1)
        assert point.gallons == 8
        assert point.price_per_gallon == 3.5
        assert point.total_cost == 28.0

    def test_to_dict_adds_derived_fields(self, two_fills):
        data = derive_points(two_fills)[1].to_dict()
        assert data["id"] == "b"
        assert data["date"] == "2024-01-15"
        assert data["distanceSinceLast"] == 300
        assert data["efficiencySinceLast"] == 25.0

    def test_to_dict_rounds_efficiency(self):
        records = [
            FuelRecordFactory.create(id="a", date="2024-01-01", odometer=1000),
            FuelRecordFactory.create(id="b", date="2024-01-10", odometer=1100, gallons=3),
        ]
        point = derive_points(records)[1]
        assert point.efficiency_since_last == 100 / 3
        assert point.to_dict()["efficiencySinceLast"] == 33.33
