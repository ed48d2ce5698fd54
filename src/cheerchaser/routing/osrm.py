"""OSRM routing client: per-leg spectator travel times between cheer spots.

The base URL defaults to the public OSRM demo server and can be overridden
with the ``CHEERCHASER_OSRM_URL`` environment variable.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence

import requests

from cheerchaser.course.models import GeoPoint
from cheerchaser.planning.models import TravelProfile

_logger = logging.getLogger(__name__)


class OsrmClient:
    """Fetch spectator travel durations from an OSRM ``route`` service.

    Args:
        base_url: Service root; falls back to ``CHEERCHASER_OSRM_URL``.
        timeout: Request timeout in seconds.
        session: Optional :class:`requests.Session` (injected in tests).
    """

    DEFAULT_BASE_URL = "https://router.project-osrm.org"
    USER_AGENT = "CheerChaser/0.1"

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 20.0,
        session: requests.Session | None = None,
    ) -> None:
        url = base_url or os.environ.get("CHEERCHASER_OSRM_URL", "") or self.DEFAULT_BASE_URL
        self._base_url = url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def route_url(self, points: Sequence[GeoPoint], profile: TravelProfile) -> str:
        coords = ";".join(f"{p.lng},{p.lat}" for p in points)
        return f"{self._base_url}/route/v1/{profile.value}/{coords}"

    def leg_durations(
        self, points: Sequence[GeoPoint], profile: TravelProfile
    ) -> list[float] | None:
        """Travel time in seconds for each leg between consecutive *points*.

        Returns ``None`` when there is nothing to route (fewer than two
        points, or public transport) and on any service error.
        """
        profile = TravelProfile(profile)
        if len(points) < 2:
            return None
        if profile is TravelProfile.TRANSIT:
            _logger.info("Transit routing not available; skipping route lookup")
            return None

        try:
            resp = self._session.get(
                self.route_url(points, profile),
                params={"overview": "false", "steps": "false"},
                headers={"User-Agent": self.USER_AGENT},
                timeout=self._timeout,
            )
            resp.raise_for_status()
            data = resp.json()
            if data.get("code") != "Ok" or not data.get("routes"):
                _logger.warning("OSRM returned no route: %s", data.get("code"))
                return None
            legs = data["routes"][0]["legs"]
            durations = [float(leg["duration"]) for leg in legs]
        except (requests.RequestException, ValueError, KeyError, TypeError) as exc:
            _logger.warning("OSRM route lookup failed: %s", exc)
            return None

        _logger.info(
            "OSRM %s route: %d legs, %.0f s total",
            profile.value, len(durations), sum(durations),
        )
        return durations
