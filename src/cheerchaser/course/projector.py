"""Project an arbitrary point onto the course polyline."""

from __future__ import annotations

import math
from collections.abc import Sequence

from cheerchaser.course.geometry import haversine_distance, interpolate
from cheerchaser.course.models import CourseIndex, GeoPoint, Projection


class TrailProjector:
    """Find the nearest location on a course to a query point.

    The projection ratio along each segment is computed in planar
    ``(lng, lat)`` space; only the final distance uses haversine.  Deciding
    whether a projection is close enough to show (e.g. within 40 m of the
    cursor) is left to the caller.
    """

    def project(self, query: GeoPoint, index: CourseIndex) -> Projection:
        """Project *query* onto ``index.points``.

        Raises:
            ValueError: If the course has fewer than two points.
        """
        return self.project_points(query, index.points, index.cumulative_distances)

    def project_points(
        self,
        query: GeoPoint,
        points: Sequence[GeoPoint],
        cumulative: Sequence[float],
    ) -> Projection:
        """Project *query* onto *points* using a matching cumulative table."""
        if len(points) < 2:
            raise ValueError("Course needs at least two points to project onto")

        best_distance = math.inf
        best_point = points[0]
        best_index = 0
        best_ratio = 0.0

        for i in range(len(points) - 1):
            p1, p2 = points[i], points[i + 1]
            if haversine_distance(p1, p2) == 0:
                continue

            vx = p2.lng - p1.lng
            vy = p2.lat - p1.lat
            wx = query.lng - p1.lng
            wy = query.lat - p1.lat
            dot_vv = vx * vx + vy * vy
            t = 0.0 if dot_vv < 1e-12 else (wx * vx + wy * vy) / dot_vv
            ratio = max(0.0, min(1.0, t))

            candidate = interpolate(p1, p2, ratio)
            distance = haversine_distance(query, candidate)
            if distance < best_distance:
                best_distance = distance
                best_point = candidate
                best_index = i
                best_ratio = ratio

        return Projection(
            distance_m=best_distance,
            point=best_point,
            segment_index=best_index,
            ratio=best_ratio,
            along_course_m=along_course_distance(best_index, best_ratio, points, cumulative),
        )


def along_course_distance(
    segment_index: int,
    ratio: float,
    points: Sequence[GeoPoint],
    cumulative: Sequence[float],
) -> float:
    """Distance from the course start to *ratio* along segment *segment_index*."""
    p1 = points[segment_index]
    p2 = points[segment_index + 1]
    return cumulative[segment_index] + ratio * haversine_distance(p1, p2)


def project_onto_course(
    query: GeoPoint,
    points: Sequence[GeoPoint],
    cumulative: Sequence[float],
) -> Projection:
    """Functional shortcut for :meth:`TrailProjector.project_points`."""
    return TrailProjector().project_points(query, points, cumulative)
