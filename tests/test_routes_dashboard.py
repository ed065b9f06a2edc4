"""
Tests for dashboard, status, derived and advice routes.
"""

import json

from freezegun import freeze_time

from factories import FuelRecordFactory


class TestStatus:
    """Tests for GET /api/status."""

    def test_status_empty(self, client):
        response = client.get("/api/status")

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["status"] == "online"
        assert data["record_count"] == 0

    def test_status_counts_records(self, client, stored_fills):
        data = json.loads(client.get("/api/status").data)
        assert data["record_count"] == 2


@freeze_time("2024-01-20 12:00:00")
class TestDashboard:
    """Tests for GET /api/dashboard."""

    def test_dashboard_empty_store(self, client):
        """Test an empty store gives zero stats and empty series."""
        response = client.get("/api/dashboard")

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["stats"]["recordCount"] == 0
        assert data["stats"]["totalCost"] == 0
        assert data["barChartData"] == []
        assert data["trendChartData"] == []

    def test_dashboard_default_window(self, client, stored_fills):
        """Test the default window is the last 30 days with daily buckets."""
        data = json.loads(client.get("/api/dashboard").data)

        assert data["window"]["kind"] == "last30days"
        assert data["granularity"] == "daily"
        assert data["isDailyView"] is True
        assert data["stats"]["totalCost"] == 68.4
        assert data["stats"]["avgConsumption"] == 25.0
        assert data["stats"]["lastRefuelDate"] == "2024-01-15"
        assert [b["name"] for b in data["barChartData"]] == ["Jan 1", "Jan 15"]

    def test_dashboard_display_strings(self, client, stored_fills):
        """Test currency display strings follow the requested language."""
        en = json.loads(client.get("/api/dashboard?lang=en").data)
        es = json.loads(client.get("/api/dashboard?lang=es").data)

        assert en["display"]["totalCost"] == "$68.4"
        assert es["display"]["totalCost"] == "$68,4"
        assert en["display"]["avgCostPerUnit"] == "$0.23"

    def test_dashboard_last7days(self, client, stored_fills):
        """Test only records within 7 days of today are included."""
        data = json.loads(client.get("/api/dashboard?range=last7days").data)
        assert data["stats"]["recordCount"] == 1
        # Distance is still measured from the record outside the window
        assert data["stats"]["totalDistance"] == 300

    def test_dashboard_all_time_monthly(self, client, stored_fills):
        data = json.loads(client.get("/api/dashboard?range=all&chart=volume").data)

        assert data["window"]["kind"] == "allTime"
        assert data["granularity"] == "monthly"
        assert data["barMetric"] == "volume"
        assert data["barChartData"] == [
            {"key": "2024-01-01", "name": "Jan 24", "value": 22, "cost": 68.4, "volume": 22}
        ]

    def test_dashboard_efficiency_trend(self, client, stored_fills):
        """Test the efficiency trend omits the first record."""
        data = json.loads(client.get("/api/dashboard?trend=efficiency").data)

        assert data["trendMetric"] == "efficiency"
        assert data["trendChartData"] == [
            {"date": "2024-01-15", "name": "Jan 15", "value": 25.0, "recordId": "b"}
        ]

    def test_dashboard_explicit_range(self, client, stored_fills):
        data = json.loads(client.get(
            "/api/dashboard?range=explicitRange&start=2024-01-10&end=2024-01-31"
        ).data)

        assert data["window"] == {"kind": "explicitRange", "start": "2024-01-10", "end": "2024-01-31"}
        assert data["stats"]["recordCount"] == 1
        assert data["granularity"] == "daily"

    def test_dashboard_explicit_range_defaults(self, client, stored_fills):
        """Test missing bounds default to the current month so far."""
        data = json.loads(client.get("/api/dashboard?range=custom").data)
        assert data["window"]["start"] == "2024-01-01"
        assert data["window"]["end"] == "2024-01-20"

    def test_dashboard_unknown_params_fall_back(self, client, stored_fills):
        """Test unknown window and metric names never fail the request."""
        response = client.get("/api/dashboard?range=bogus&chart=bogus&trend=bogus")

        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["window"]["kind"] == "last30days"
        assert data["barMetric"] == "cost"
        assert data["trendMetric"] == "price"

    def test_dashboard_rollback_excluded(self, client, db_session):
        """Test an odometer rollback does not produce negative distance."""
        FuelRecordFactory.create(db_session, id="a", date="2024-01-01", odometer=5000)
        FuelRecordFactory.create(db_session, id="b", date="2024-01-10", odometer=4800)

        data = json.loads(client.get("/api/dashboard?trend=efficiency").data)
        assert data["stats"]["totalDistance"] == 0
        assert data["stats"]["avgConsumption"] == 0
        assert data["stats"]["avgCostPerUnit"] == 0
        assert data["trendChartData"] == []


class TestDerived:
    """Tests for GET /api/derived."""

    def test_derived(self, client, stored_fills):
        data = json.loads(client.get("/api/derived").data)

        assert [p["id"] for p in data] == ["a", "b"]
        assert data[0]["efficiencySinceLast"] == 0
        assert data[1]["distanceSinceLast"] == 300
        assert data[1]["efficiencySinceLast"] == 25.0


class TestAdviceSummary:
    """Tests for GET /api/advice/summary."""

    def test_insufficient_data(self, client):
        data = json.loads(client.get("/api/advice/summary").data)

        assert data["summary"] is None
        assert data["message"] == "I need at least 2 records to calculate consumption trends."

    def test_insufficient_data_spanish(self, client):
        data = json.loads(client.get("/api/advice/summary?lang=es").data)
        assert data["message"].startswith("Necesito")

    def test_summary(self, client, stored_fills):
        data = json.loads(client.get("/api/advice/summary").data)

        assert data["summary"]["totalRecords"] == 2
        assert data["summary"]["avgEfficiency"] == 25.0
        assert data["summary"]["avgPrice"] == 3.1
        assert data["summary"]["trend"] == "stable"
