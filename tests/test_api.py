"""
Integration tests for FastAPI endpoints.

Tests verify request validation, rule loading through the provider, and
the response shape the daily report form consumes.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from conftest import ACME_RULES_PATH


class TestHealth:
    def test_health_endpoint_returns_ok(self, test_client):
        """GET /health should return 200 OK for monitoring."""
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_request_id_header(self, test_client):
        response = test_client.get("/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"

        generated = test_client.get("/health")
        assert generated.headers["X-Request-ID"]


class TestCalculateHours:
    def test_weekday_with_default_rules(self, test_client, fake_loader):
        response = test_client.post("/api/config/calculate-hours", json={"totalHours": 10, "date": "2026-10-14"})

        assert response.status_code == 200
        data = response.json()
        assert data["regularHours"] == 8
        assert data["overtimeHours"] == 2
        assert data["doubleTimeHours"] == 0
        assert data["totalHours"] == 10
        assert data["isStatHoliday"] is False
        assert data["isWeekend"] is False
        assert data["dayOfWeek"] == "Wednesday"
        assert data["rulesSource"] == "default"
        assert fake_loader.calls == []

    def test_stat_holiday(self, test_client):
        response = test_client.post("/api/config/calculate-hours", json={"totalHours": 14, "date": "2026-07-01"})

        data = response.json()
        assert data["isStatHoliday"] is True
        assert (data["regularHours"], data["overtimeHours"], data["doubleTimeHours"]) == (0, 12, 2)

    def test_weekend_with_weekly_hours(self, test_client):
        response = test_client.post(
            "/api/config/calculate-hours",
            json={"totalHours": 6, "date": "2026-10-17", "employeeWeeklyRegularHours": 35},
        )

        data = response.json()
        assert data["isWeekend"] is True
        assert data["weeklyRegularHoursSoFar"] == 35
        assert (data["regularHours"], data["overtimeHours"]) == (5, 1)

    def test_weekend_with_prior_labor_lines(self, test_client):
        lines = [{"date": f"2026-10-{day}", "regularHours": 8} for day in (12, 13, 14, 15, 16)]
        response = test_client.post(
            "/api/config/calculate-hours",
            json={"totalHours": 6, "date": "2026-10-17", "priorLaborLines": lines},
        )

        data = response.json()
        assert data["weeklyRegularHoursSoFar"] == 40
        assert (data["regularHours"], data["overtimeHours"]) == (0, 6)

    def test_client_rules_loaded_then_cached(self, test_client, fake_loader):
        body = {"totalHours": 11, "date": "2026-10-14", "clientName": "Acme"}

        first = test_client.post("/api/config/calculate-hours", json=body).json()
        second = test_client.post("/api/config/calculate-hours", json=body).json()

        # Acme pays DT after 10
        assert (first["regularHours"], first["overtimeHours"], first["doubleTimeHours"]) == (8, 2, 1)
        assert first["rulesSource"] == ACME_RULES_PATH
        assert second["rulesSource"] == "cache"
        assert fake_loader.calls == [ACME_RULES_PATH]

    def test_unknown_client_falls_back_to_defaults(self, test_client):
        response = test_client.post(
            "/api/config/calculate-hours",
            json={"totalHours": 11, "date": "2026-10-14", "clientName": "Nobody"},
        )

        assert response.status_code == 200
        data = response.json()
        assert (data["regularHours"], data["overtimeHours"], data["doubleTimeHours"]) == (8, 3, 0)
        assert data["rulesSource"] == "default"

    def test_blank_client_name_uses_defaults(self, test_client, fake_loader):
        response = test_client.post(
            "/api/config/calculate-hours",
            json={"totalHours": 8, "date": "2026-10-14", "clientName": "   "},
        )

        assert response.json()["rulesSource"] == "default"
        assert fake_loader.calls == []

    def test_negative_hours_rejected(self, test_client):
        response = test_client.post("/api/config/calculate-hours", json={"totalHours": -2, "date": "2026-10-14"})
        assert response.status_code == 422

    def test_missing_date_rejected(self, test_client):
        response = test_client.post("/api/config/calculate-hours", json={"totalHours": 8})
        assert response.status_code == 422


class TestStatHolidays:
    def test_default_holidays_sorted_by_date(self, test_client):
        response = test_client.get("/api/config/stat-holidays/2026")

        assert response.status_code == 200
        holidays = response.json()
        assert len(holidays) == 11
        assert holidays[0] == {"name": "New Years Day", "date": "2026-01-01"}
        assert holidays[-1] == {"name": "Christmas Day", "date": "2026-12-25"}
        assert {"name": "Good Friday", "date": "2026-04-03"} in holidays

    def test_client_holidays_drop_unknown_names(self, test_client):
        response = test_client.get("/api/config/stat-holidays/2026", params={"clientName": "Acme"})

        names = [h["name"] for h in response.json()]
        assert names == ["New Years Day", "Good Friday", "Canada Day", "Christmas Day"]

    def test_year_out_of_range(self, test_client):
        assert test_client.get("/api/config/stat-holidays/1200").status_code == 400


class TestClearCache:
    def test_clear_one_client(self, test_client, fake_loader):
        body = {"totalHours": 8, "date": "2026-10-14", "clientName": "Acme"}
        test_client.post("/api/config/calculate-hours", json=body)

        response = test_client.post("/api/config/rules-cache/clear", params={"clientName": "Acme"})
        assert response.json() == {"cleared": "Acme"}

        test_client.post("/api/config/calculate-hours", json=body)
        assert len(fake_loader.calls) == 2

    def test_clear_all(self, test_client, rules_provider):
        test_client.post("/api/config/calculate-hours", json={"totalHours": 8, "date": "2026-10-14", "clientName": "Acme"})

        response = test_client.post("/api/config/rules-cache/clear")

        assert response.json() == {"cleared": "all"}
        assert len(rules_provider.cache) == 0
