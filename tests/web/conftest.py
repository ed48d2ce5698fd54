"""Shared fixtures for web tests."""

from __future__ import annotations

import math
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from cheerchaser.course.geometry import EARTH_RADIUS_M
from cheerchaser.storage import PreferenceStore
from cheerchaser.web.app import app
from cheerchaser.web.service import PlannerService

LAT0, LNG0 = 51.5, -0.1
DEG_PER_M = 180 / (math.pi * EARTH_RADIUS_M)


def north(metres: float, east_m: float = 0.0) -> tuple[float, float]:
    """(lat, lng) offset from the course start by metres north and east."""
    return (
        LAT0 + metres * DEG_PER_M,
        LNG0 + east_m * DEG_PER_M / math.cos(math.radians(LAT0)),
    )


def make_gpx(points: list[tuple[float, float]] | None = None) -> str:
    """GPX document with one track; defaults to 4.5 km due north in 500 m steps."""
    if points is None:
        points = [north(i * 500.0) for i in range(10)]
    trkpts = "".join(f'<trkpt lat="{lat!r}" lon="{lng!r}"></trkpt>' for lat, lng in points)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<gpx version="1.1" creator="tests" xmlns="http://www.topografix.com/GPX/1/1">'
        f"<trk><name>test course</name><trkseg>{trkpts}</trkseg></trk>"
        "</gpx>"
    )


def upload(client: TestClient, gpx: str | bytes | None = None):
    body = make_gpx() if gpx is None else gpx
    return client.post(
        "/api/course", files={"file": ("course.gpx", body, "application/gpx+xml")}
    )


@pytest.fixture
def router():
    """Mocked OSRM client; no routed durations unless a test sets them."""
    mock_router = MagicMock()
    mock_router.leg_durations.return_value = None
    return mock_router


@pytest.fixture
def service(router):
    store = PreferenceStore(":memory:")
    yield PlannerService(store, router=router)
    store.close()


@pytest.fixture
def client(service):
    """FastAPI test client backed by an in-memory planning session."""
    with patch("cheerchaser.web.app._planner", return_value=service):
        with TestClient(app) as c:
            yield c


@pytest.fixture
def loaded_client(client):
    """Test client with the default course already uploaded."""
    resp = upload(client)
    assert resp.status_code == 200
    return client
