"""Tests for the dashboard API."""

from datetime import datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from wxsim.config.schema import SimulatorConfig
from wxsim.dashboard import create_app

FIXED_NOW = datetime(2026, 3, 14, 10, 30, 0)


@pytest.fixture
def client(tmp_path: Path, default_config: SimulatorConfig):
    app = create_app(default_config, tmp_path / "dash.db", clock=lambda: FIXED_NOW)
    with TestClient(app) as c:
        yield c


class TestDashboard:
    def test_health(self, client: TestClient):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["playback"] == "playing"
        assert data["forecast_version"] == 1
        assert data["forecast_date"] == "2026-03-14"
        assert data["complete_forecast"] is True

    def test_snapshot(self, client: TestClient):
        data = client.get("/api/snapshot").json()
        assert data["taken_at"] == "2026-03-14T10:30:00"
        assert data["state_version"] == 1
        assert len(data["hourly"]) == 24
        assert data["hourly"][0]["hour"] == 10
        assert data["hourly"][0]["label"] == "Now"
        assert data["hourly"][1]["label"] == "11 AM"
        assert len(data["outlook"]) == 5

    def test_snapshot_is_interpolated(self, client: TestClient):
        forecast = client.get("/api/forecast").json()
        by_hour = {s["hour"]: s for s in forecast["samples"]}
        expected = (by_hour[10]["temperature"] + by_hour[11]["temperature"]) / 2

        data = client.get("/api/snapshot").json()
        assert data["temperature"] == pytest.approx(expected, abs=0.05)

    def test_forecast(self, client: TestClient):
        data = client.get("/api/forecast").json()
        assert data["version"] == 1
        assert data["front"] in ("cold", "warm")
        assert [s["hour"] for s in data["samples"]] == list(range(24))

    def test_outlook(self, client: TestClient):
        days = client.get("/api/outlook").json()
        assert [d["day_offset"] for d in days] == [0, 1, 2, 3, 4]
        assert days[0]["label"] == "Today"

    def test_warnings(self, client: TestClient):
        warnings = client.get("/api/warnings").json()
        assert warnings[0]["kind"] == "FRONT"

    def test_regenerate(self, client: TestClient):
        resp = client.post("/api/regenerate")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "regenerated"
        assert data["version"] == 2

        assert client.get("/api/snapshot").json()["state_version"] == 2

        runs = client.get("/api/generations").json()
        assert [r["reason"] for r in runs] == ["manual", "startup"]

    def test_generations_limit(self, client: TestClient):
        client.post("/api/regenerate")
        client.post("/api/regenerate")
        assert len(client.get("/api/generations", params={"limit": 2}).json()) == 2

    @pytest.mark.parametrize("limit", [-1, 0, 501])
    def test_generations_limit_bounded(self, client: TestClient, limit: int):
        resp = client.get("/api/generations", params={"limit": limit})
        assert resp.status_code == 422
