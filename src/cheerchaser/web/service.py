"""PlannerService — the planning session behind the Web API.

Owns the current course index and spot selection.  Every input change
rebuilds the derived structures from scratch; nothing is updated in place.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence

from cheerchaser.course.crossing import CrossingDetector
from cheerchaser.course.gpx import load_course_from_gpx
from cheerchaser.course.indexer import CourseIndexer
from cheerchaser.course.models import CourseIndex, GeoPoint, Projection
from cheerchaser.course.projector import TrailProjector
from cheerchaser.planning.feasibility import LegCheck, check_legs
from cheerchaser.planning.formatting import eta_label, format_distance
from cheerchaser.planning.models import PlannerConfig, TravelProfile
from cheerchaser.planning.pace import parse_pace
from cheerchaser.planning.selection import SpotSelection
from cheerchaser.planning.selector import SpotSelector
from cheerchaser.routing.osrm import OsrmClient
from cheerchaser.storage import RACE_START_TIME, RUNNER_PACE, PreferenceStore
from cheerchaser.web.schemas import (
    PlanLeg,
    PlanResponse,
    PlanSpot,
    Preferences,
    ProbeResponse,
    SuggestRequest,
)

_logger = logging.getLogger(__name__)


class NoCourseError(LookupError):
    """An operation needs a course but none has been loaded."""


class PlannerService:
    """One spectator's planning session.

    Parameters
    ----------
    store:
        Preference storage (runner pace, race start time).
    config:
        Heuristic constants.  Defaults to :class:`PlannerConfig`.
    router:
        Routing client for plan checks.  If None a default
        :class:`OsrmClient` is created on first use.
    """

    def __init__(
        self,
        store: PreferenceStore,
        config: PlannerConfig | None = None,
        router: OsrmClient | None = None,
    ) -> None:
        self._store = store
        self.config = config or PlannerConfig()
        self._router = router
        self._lock = threading.Lock()
        self._indexer = CourseIndexer(
            interval_m=self.config.candidate_interval_m,
            km_marker_interval_m=self.config.km_marker_interval_m,
        )
        self._projector = TrailProjector()
        self._crossings = CrossingDetector(self.config.crossing_tolerance_m)
        self._selector = SpotSelector(self.config, self._crossings)
        self._index = CourseIndex(interval_m=self.config.candidate_interval_m)
        self._selection = SpotSelection(self._index.candidates)
        self.travel_profile = TravelProfile.WALKING

    # ------------------------------------------------------------------
    # Course
    # ------------------------------------------------------------------

    @property
    def index(self) -> CourseIndex:
        return self._index

    @property
    def selection(self) -> SpotSelection:
        return self._selection

    def load_course(self, gpx_text: str) -> CourseIndex:
        """Parse a GPX upload, rebuild the index and clear the selection.

        Raises
        ------
        CourseLoadError
            If the GPX has no usable track.
        """
        points = load_course_from_gpx(gpx_text)
        return self.set_course(points)

    def set_course(self, points: Sequence[GeoPoint]) -> CourseIndex:
        index = self._indexer.build(points)
        with self._lock:
            self._index = index
            self._selection = SpotSelection(index.candidates)
        return index

    def _snapshot(self) -> tuple[CourseIndex, SpotSelection]:
        """Current (index, selection) pair, taken together under the lock."""
        with self._lock:
            index, selection = self._index, self._selection
        if index.is_empty:
            raise NoCourseError("No course loaded. Upload a GPX file first.")
        return index, selection

    def _require_course(self) -> CourseIndex:
        return self._snapshot()[0]

    def probe(self, lat: float, lng: float) -> ProbeResponse:
        """Describe the course location nearest to ``(lat, lng)``.

        Points farther than ``config.probe_radius_m`` from the course are
        reported as off-course.
        """
        index = self._require_course()
        proj: Projection = self._projector.project(GeoPoint(lat, lng), index)
        if proj.distance_m > self.config.probe_radius_m:
            return ProbeResponse(on_course=False, distance_m=proj.distance_m)

        pace = parse_pace(self._store.get(RUNNER_PACE))
        return ProbeResponse(
            on_course=True,
            distance_m=proj.distance_m,
            along_course_m=proj.along_course_m,
            point={"lat": proj.point.lat, "lng": proj.point.lng},
            distance_label=format_distance(proj.along_course_m),
            eta_label=eta_label(proj.along_course_m, pace, self._store.get(RACE_START_TIME)),
        )

    def crosses(self, a: GeoPoint, b: GeoPoint) -> bool:
        index = self._require_course()
        return self._crossings.crosses(index.points, a, b)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def suggest(self, req: SuggestRequest) -> list[float]:
        """Run the spot selector and replace the selection with its result.

        If the course changes while the selector runs, the result lands on the
        replaced course's selection and is discarded with it.

        Raises
        ------
        PaceValidationError
            For ``minTravel`` without a valid pace; the selection is unchanged.
        """
        index, selection = self._snapshot()
        pace_text = req.pace if req.pace is not None else self._store.get(RUNNER_PACE)
        spots = self._selector.suggest(
            index.candidates,
            req.num_spots,
            req.strategy,
            pace_s_per_m=parse_pace(pace_text),
            travel_profile=req.travel_profile,
            skip_first_km=req.skip_first_km,
            course=index.points,
        )
        with self._lock:
            selection.replace(spots)
            self.travel_profile = req.travel_profile
        if req.pace is not None:
            self._store.set(RUNNER_PACE, req.pace)
        return selection.sorted()

    def toggle(self, distance: float) -> bool:
        """Flip one spot; raises :class:`SpotNotFoundError` for unknown spots."""
        _, selection = self._snapshot()
        with self._lock:
            return selection.toggle(distance)

    def plan(self, travel_profile: TravelProfile | None = None) -> PlanResponse:
        """Selected spots with ETAs, plus routed leg checks when available."""
        index, selection = self._snapshot()
        profile = TravelProfile(travel_profile or self.travel_profile)
        pace = parse_pace(self._store.get(RUNNER_PACE))
        start = self._store.get(RACE_START_TIME)
        with self._lock:
            spots = selection.sorted()
            waypoints = selection.waypoints()

        plan_spots = [
            PlanSpot(
                distance_m=d,
                lat=point.lat,
                lng=point.lng,
                distance_label=format_distance(d),
                eta_label=eta_label(d, pace, start),
                is_finish=d == index.total_distance_m,
            )
            for d, point in zip(spots, waypoints)
        ]
        legs = [self._leg_model(c) for c in self._check_legs(spots, waypoints, pace, profile)]
        return PlanResponse(travel_profile=profile, spots=plan_spots, legs=legs)

    def _check_legs(
        self,
        spots: list[float],
        waypoints: list[GeoPoint],
        pace: float | None,
        profile: TravelProfile,
    ) -> list[LegCheck]:
        if len(spots) < 2 or pace is None or profile is TravelProfile.TRANSIT:
            return []
        if self._router is None:
            self._router = OsrmClient()
        durations = self._router.leg_durations(waypoints, profile)
        return check_legs(spots, pace, durations, self.config.leg_buffer_s)

    @staticmethod
    def _leg_model(check: LegCheck) -> PlanLeg:
        return PlanLeg(
            from_m=check.from_m,
            to_m=check.to_m,
            runner_s=check.runner_s,
            spectator_s=check.spectator_s,
            tight=check.tight,
            warning=check.warning,
        )

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    def preferences(self) -> Preferences:
        return Preferences(
            runner_pace=self._store.get(RUNNER_PACE),
            race_start_time=self._store.get(RACE_START_TIME),
        )

    def save_preferences(self, prefs: Preferences) -> Preferences:
        self._store.set(RUNNER_PACE, prefs.runner_pace)
        self._store.set(RACE_START_TIME, prefs.race_start_time)
        _logger.info(
            "Saved preferences: pace=%r start=%r", prefs.runner_pace, prefs.race_start_time
        )
        return self.preferences()
