"""Geometry primitives shared by the course indexer, projector and crossing detector.

Measurements use the haversine great-circle distance.  Interpolation and
intersection treat ``(lng, lat)`` degrees as planar coordinates, which is a
good enough approximation over the tens of kilometres a race course covers.
"""

from __future__ import annotations

import math

from cheerchaser.course.models import GeoPoint

EARTH_RADIUS_M = 6_371_000.0


def haversine_distance(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between *a* and *b* in metres."""
    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    delta_phi = math.radians(b.lat - a.lat)
    delta_lambda = math.radians(b.lng - a.lng)

    h = (math.sin(delta_phi / 2) ** 2
         + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2)
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def interpolate(a: GeoPoint, b: GeoPoint, ratio: float) -> GeoPoint:
    """Linear interpolation between *a* (``ratio=0``) and *b* (``ratio=1``)."""
    return GeoPoint(
        lat=a.lat + (b.lat - a.lat) * ratio,
        lng=a.lng + (b.lng - a.lng) * ratio,
    )


def segment_intersection(
    p1: GeoPoint, p2: GeoPoint, q1: GeoPoint, q2: GeoPoint
) -> GeoPoint | None:
    """Intersection point of segments ``p1-p2`` and ``q1-q2``, or ``None``.

    Touching at an endpoint counts as an intersection.  Parallel and
    collinear segments never intersect.
    """
    x1, y1, x2, y2 = p1.lng, p1.lat, p2.lng, p2.lat
    x3, y3, x4, y4 = q1.lng, q1.lat, q2.lng, q2.lat

    denom = (y4 - y3) * (x2 - x1) - (x4 - x3) * (y2 - y1)
    if denom == 0:
        return None

    u_p = ((x4 - x3) * (y1 - y3) - (y4 - y3) * (x1 - x3)) / denom
    u_q = ((x2 - x1) * (y1 - y3) - (y2 - y1) * (x1 - x3)) / denom
    if 0 <= u_p <= 1 and 0 <= u_q <= 1:
        return GeoPoint(lat=y1 + u_p * (y2 - y1), lng=x1 + u_p * (x2 - x1))
    return None
