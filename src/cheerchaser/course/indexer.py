"""Course indexing: cumulative distances and fixed-interval candidate spots."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from cheerchaser.course.geometry import haversine_distance, interpolate
from cheerchaser.course.models import CourseIndex, GeoPoint

_logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_M = 50.0
DEFAULT_KM_MARKER_INTERVAL_M = 5000.0

# Finish keys closer than this to the last regular key replace it.
_FINISH_TOLERANCE_M = 1e-6


class CourseIndexer:
    """Build a :class:`CourseIndex` from an ordered course polyline.

    Algorithm:
    1. Walk consecutive point pairs, accumulating the haversine length of each
       segment into the cumulative-distance table.
    2. Every time the running total passes the next multiple of *interval_m*
       inside a segment, interpolate the point at exactly that distance and
       record it as a candidate.  A long segment can emit several candidates.
    3. Add one final candidate at the true total distance, located on the
       last course point, so the finish is always selectable.

    Args:
        interval_m: Spacing of candidate spots in metres.
        km_marker_interval_m: Spacing of course markers in metres.
    """

    def __init__(
        self,
        interval_m: float = DEFAULT_INTERVAL_M,
        km_marker_interval_m: float = DEFAULT_KM_MARKER_INTERVAL_M,
    ) -> None:
        if interval_m <= 0:
            raise ValueError("interval_m must be > 0")
        if km_marker_interval_m <= 0:
            raise ValueError("km_marker_interval_m must be > 0")
        self.interval_m = interval_m
        self.km_marker_interval_m = km_marker_interval_m

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(self, points: Sequence[GeoPoint]) -> CourseIndex:
        """Index *points*.

        Returns:
            A :class:`CourseIndex`.  For fewer than two points the tables are
            empty; this is the "no course loaded" case, not an error.
        """
        course = tuple(points)
        if len(course) < 2:
            return CourseIndex(points=course, interval_m=self.interval_m)

        cumulative = self.cumulative_distances(course)
        candidates = self._sample(course, cumulative, self.interval_m)
        km_markers = self._sample(course, cumulative, self.km_marker_interval_m)

        total = cumulative[-1]
        if candidates:
            last_key = next(reversed(candidates))
            if abs(total - last_key) < _FINISH_TOLERANCE_M:
                del candidates[last_key]
        candidates[total] = course[-1]

        _logger.info(
            "Indexed course: %d points, %.1f m, %d candidates",
            len(course), total, len(candidates),
        )
        return CourseIndex(
            points=course,
            cumulative_distances=cumulative,
            candidates=candidates,
            km_markers=km_markers,
            interval_m=self.interval_m,
        )

    @staticmethod
    def cumulative_distances(points: Sequence[GeoPoint]) -> list[float]:
        """Along-course distance of every point; ``[]`` for an empty course."""
        if not points:
            return []
        table = [0.0]
        for prev, curr in zip(points, points[1:]):
            table.append(table[-1] + haversine_distance(prev, curr))
        return table

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _sample(
        points: Sequence[GeoPoint],
        cumulative: list[float],
        step: float,
    ) -> dict[float, GeoPoint]:
        """Interpolated points at every multiple of *step* along the course."""
        samples: dict[float, GeoPoint] = {}
        threshold = step
        for i in range(1, len(points)):
            travelled = cumulative[i - 1]
            segment = cumulative[i] - travelled
            if segment <= 0:
                continue
            while travelled + segment >= threshold:
                ratio = (threshold - travelled) / segment
                samples[threshold] = interpolate(points[i - 1], points[i], ratio)
                threshold += step
        return samples


def build_course_index(
    points: Sequence[GeoPoint], interval_m: float = DEFAULT_INTERVAL_M
) -> CourseIndex:
    """Functional shortcut for ``CourseIndexer(interval_m).build(points)``."""
    return CourseIndexer(interval_m=interval_m).build(points)
