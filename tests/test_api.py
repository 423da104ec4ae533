"""
Tests for calculator_api/main.py using FastAPI's TestClient.
"""
import pytest
from fastapi.testclient import TestClient

from calculator_api.main import app


@pytest.fixture
def client():
    return TestClient(app)


class TestLookupEndpoints:

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_modes(self, client):
        body = client.get("/api/modes").json()
        assert body["baseline_mode"] == "car"
        assert [m["mode"] for m in body["modes"]] == ["bicycle", "car", "bus", "truck"]

    def test_cities(self, client):
        cities = client.get("/api/cities").json()
        assert len(cities) == 15
        assert cities == sorted(cities)

    def test_distance_found(self, client):
        resp = client.get(
            "/api/distance",
            params={"origin": "rio de janeiro, rj", "destination": "São Paulo, SP"},
        )
        assert resp.status_code == 200
        assert resp.json()["distance_km"] == 430

    def test_distance_not_found(self, client):
        resp = client.get("/api/distance", params={"origin": "Campinas, SP", "destination": "Manaus, AM"})
        assert resp.status_code == 404
        assert "Route not found" in resp.json()["detail"]


class TestCompareEndpoint:

    def test_ranked_comparison(self, client):
        rows = client.get("/api/compare", params={"distance_km": 430}).json()
        assert [r["mode"] for r in rows] == ["bicycle", "bus", "car", "truck"]
        assert rows[1]["percentage_vs_baseline"] == 74.17

    def test_negative_distance_is_422(self, client):
        assert client.get("/api/compare", params={"distance_km": -1}).status_code == 422

    def test_rounded_zero_baseline_is_422(self, client):
        response = client.get("/api/compare", params={"distance_km": 0.04})
        assert response.status_code == 422
        assert "zero" in response.json()["detail"]


class TestEstimateEndpoint:

    def test_route_table_estimate(self, client):
        resp = client.post(
            "/api/estimate",
            json={"origin": "São Paulo, SP", "destination": "Rio de Janeiro, RJ", "mode": "bus"},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["distance_km"] == 430
        assert body["distance_source"] == "route_table"
        assert body["emission"] == 38.27
        assert body["savings"] == {"saved_kg": 13.33, "percentage": 25.83}
        assert body["price"] == {"min": 1.92, "max": 5.75, "average": 3.83}

    def test_unknown_mode_is_422(self, client):
        resp = client.post(
            "/api/estimate",
            json={"origin": "A", "destination": "B", "mode": "train", "distance_km": 10},
        )
        assert resp.status_code == 422
        assert "train" in resp.json()["detail"]

    def test_unknown_route_is_404(self, client):
        resp = client.post(
            "/api/estimate",
            json={"origin": "Campinas, SP", "destination": "Manaus, AM", "mode": "car"},
        )
        assert resp.status_code == 404

    def test_zero_distance_rejected_by_schema(self, client):
        resp = client.post(
            "/api/estimate",
            json={"origin": "A", "destination": "B", "mode": "car", "distance_km": 0},
        )
        assert resp.status_code == 422


class TestCreditsEndpoint:

    def test_truck_scenario(self, client):
        body = client.post("/api/credits", json={"emission_kg": 960}).json()
        assert body["credits"] == 0.96
        assert body["price"] == {"min": 48.0, "max": 144.0, "average": 96.0}
        assert body["currency"] == "BRL"

    def test_negative_emission_is_422(self, client):
        assert client.post("/api/credits", json={"emission_kg": -1}).status_code == 422
