"""Course geometry: indexing, projection and crossing detection."""

from cheerchaser.course.crossing import CrossingDetector, detect_crossing
from cheerchaser.course.gpx import CourseLoadError, load_course_from_file, load_course_from_gpx
from cheerchaser.course.indexer import CourseIndexer, build_course_index
from cheerchaser.course.models import CourseIndex, GeoPoint, Projection
from cheerchaser.course.projector import TrailProjector, project_onto_course

__all__ = [
    "CourseIndex",
    "CourseIndexer",
    "CourseLoadError",
    "CrossingDetector",
    "GeoPoint",
    "Projection",
    "TrailProjector",
    "build_course_index",
    "detect_crossing",
    "load_course_from_file",
    "load_course_from_gpx",
    "project_onto_course",
]
