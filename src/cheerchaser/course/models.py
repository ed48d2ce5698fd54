"""Course data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GeoPoint:
    """A geographic coordinate in decimal degrees.

    Equality is exact coordinate equality, which is how the finish point is
    recognised among the candidate positions.
    """

    lat: float
    """Latitude in degrees."""

    lng: float
    """Longitude in degrees."""


@dataclass
class CourseIndex:
    """Derived distance tables for one course.

    Built by :class:`~cheerchaser.course.indexer.CourseIndexer` and treated
    as read-only afterwards.  Rebuild it whenever the course or the interval
    changes.
    """

    points: tuple[GeoPoint, ...] = ()
    """The course polyline, start to finish."""

    cumulative_distances: list[float] = field(default_factory=list)
    """Along-course distance in metres of every course point (``[0] == 0``)."""

    candidates: dict[float, GeoPoint] = field(default_factory=dict)
    """Candidate spots keyed by along-course distance, ascending."""

    km_markers: dict[float, GeoPoint] = field(default_factory=dict)
    """Course markers (every 5 km by default) keyed by distance."""

    interval_m: float = 50.0
    """Spacing of the regular candidates in metres."""

    @property
    def total_distance_m(self) -> float:
        """Total course length in metres (0.0 for an empty course)."""
        return self.cumulative_distances[-1] if self.cumulative_distances else 0.0

    @property
    def is_empty(self) -> bool:
        """True when the course has fewer than two points."""
        return len(self.points) < 2

    @property
    def finish(self) -> GeoPoint | None:
        return self.points[-1] if self.points else None


@dataclass
class Projection:
    """Nearest location on the course to a query point."""

    distance_m: float
    """Great-circle distance from the query point to :attr:`point`."""

    point: GeoPoint
    """Projected point on the course."""

    segment_index: int
    """Index of the start point of the segment holding :attr:`point`."""

    ratio: float
    """Position of :attr:`point` along that segment, in ``[0, 1]``."""

    along_course_m: float
    """Distance from the start of the course to :attr:`point`, in metres."""
