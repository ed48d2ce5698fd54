"""Detect spectator paths that cross the race course."""

from __future__ import annotations

from collections.abc import Sequence

from cheerchaser.course.geometry import haversine_distance, segment_intersection
from cheerchaser.course.models import GeoPoint

DEFAULT_TOLERANCE_M = 10.0


class CrossingDetector:
    """Decide whether a straight spectator path crosses the course.

    Two cheer spots on the course always touch it at their own endpoints, so
    an intersection only counts when it lies more than *tolerance_m* away
    from both ends of the path.

    Args:
        tolerance_m: Radius around each path endpoint inside which an
            intersection is treated as an endpoint touch.
    """

    def __init__(self, tolerance_m: float = DEFAULT_TOLERANCE_M) -> None:
        self.tolerance_m = tolerance_m

    def intersections(
        self, course: Sequence[GeoPoint], a: GeoPoint, b: GeoPoint
    ) -> list[GeoPoint]:
        """All points where segment ``a-b`` meets the course path."""
        found: list[GeoPoint] = []
        for p1, p2 in zip(course, course[1:]):
            hit = segment_intersection(p1, p2, a, b)
            if hit is not None:
                found.append(hit)
        return found

    def crosses(self, course: Sequence[GeoPoint], a: GeoPoint, b: GeoPoint) -> bool:
        """True if ``a-b`` crosses *course* away from both endpoints."""
        if len(course) < 2:
            return False
        return any(
            haversine_distance(hit, a) > self.tolerance_m
            and haversine_distance(hit, b) > self.tolerance_m
            for hit in self.intersections(course, a, b)
        )


def detect_crossing(course: Sequence[GeoPoint], a: GeoPoint, b: GeoPoint) -> bool:
    """Functional shortcut for ``CrossingDetector().crosses(course, a, b)``."""
    return CrossingDetector().crosses(course, a, b)
