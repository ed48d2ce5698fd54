"""GPX track source: turn a GPX document into a course polyline."""

from __future__ import annotations

import logging
from pathlib import Path

import gpxpy
import gpxpy.gpx

from cheerchaser.course.models import GeoPoint

_logger = logging.getLogger(__name__)


class CourseLoadError(ValueError):
    """The GPX document could not be parsed or holds no track."""


def load_course_from_gpx(text: str) -> tuple[GeoPoint, ...]:
    """Parse GPX *text* and return the first track's points.

    All segments of the first track are concatenated in order.  Further
    tracks are ignored.

    Raises:
        CourseLoadError: If the document is not valid GPX or has no tracks.
    """
    try:
        gpx = gpxpy.parse(text)
    except gpxpy.gpx.GPXException as exc:
        raise CourseLoadError(f"Error parsing GPX file: {exc}") from exc

    if not gpx.tracks:
        raise CourseLoadError("No tracks found in the GPX file.")

    track = gpx.tracks[0]
    if len(gpx.tracks) > 1:
        _logger.info("GPX has %d tracks; using the first (%r)", len(gpx.tracks), track.name)

    points = tuple(
        GeoPoint(lat=p.latitude, lng=p.longitude)
        for segment in track.segments
        for p in segment.points
    )
    _logger.info("Loaded %d track points from GPX", len(points))
    return points


def load_course_from_file(path: str | Path) -> tuple[GeoPoint, ...]:
    """Read a GPX file from disk (UTF-8) and return its first track's points."""
    return load_course_from_gpx(Path(path).read_text(encoding="utf-8"))
