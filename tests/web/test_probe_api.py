"""GET /api/probe and POST /api/crossing."""

from __future__ import annotations

import pytest

from tests.web.conftest import north


def _probe(client, north_m: float, east_m: float):
    lat, lng = north(north_m, east_m)
    return client.get("/api/probe", params={"lat": lat, "lng": lng})


class TestProbe:
    def test_near_course(self, loaded_client):
        resp = _probe(loaded_client, 1000, 20)
        assert resp.status_code == 200

        data = resp.json()
        assert data["on_course"] is True
        assert data["distance_m"] == pytest.approx(20.0, abs=0.5)
        assert data["along_course_m"] == pytest.approx(1000.0, abs=0.5)
        assert data["distance_label"] == "1.0km"
        assert data["eta_label"] == "(Set pace)"

    def test_eta_uses_saved_preferences(self, loaded_client):
        loaded_client.put(
            "/api/preferences", json={"runner_pace": "6:00", "race_start_time": "09:00"}
        )
        data = _probe(loaded_client, 2000, 5).json()
        assert data["eta_label"] in ("ETA: 09:11", "ETA: 09:12")

    def test_duration_without_start_time(self, loaded_client):
        loaded_client.put("/api/preferences", json={"runner_pace": "6:00"})
        data = _probe(loaded_client, 2500, 5).json()
        assert data["eta_label"].startswith("Duration: ")

    def test_far_from_course(self, loaded_client):
        data = _probe(loaded_client, 1000, 200).json()
        assert data["on_course"] is False
        assert data["along_course_m"] is None
        assert data["distance_m"] == pytest.approx(200.0, abs=1.0)

    def test_without_course_returns_409(self, client):
        assert _probe(client, 0, 0).status_code == 409

    def test_missing_query_returns_422(self, loaded_client):
        assert loaded_client.get("/api/probe", params={"lat": 51.5}).status_code == 422


class TestCrossing:
    @staticmethod
    def _body(a, b):
        return {"a": {"lat": a[0], "lng": a[1]}, "b": {"lat": b[0], "lng": b[1]}}

    def test_path_across_course(self, loaded_client):
        body = self._body(north(1000, -150), north(1000, 150))
        assert loaded_client.post("/api/crossing", json=body).json() == {"crosses": True}

    def test_path_beside_course(self, loaded_client):
        body = self._body(north(1000, 150), north(3000, 150))
        assert loaded_client.post("/api/crossing", json=body).json() == {"crosses": False}

    def test_invalid_latitude_returns_422(self, loaded_client):
        body = {"a": {"lat": 95.0, "lng": 0.0}, "b": {"lat": 0.0, "lng": 0.0}}
        assert loaded_client.post("/api/crossing", json=body).status_code == 422

    def test_without_course_returns_409(self, client):
        body = self._body(north(0, -10), north(0, 10))
        assert client.post("/api/crossing", json=body).status_code == 409
