"""Cheer spot suggestion.

Two strategies pick a subset of the candidate spots:

* ``maxSpread`` spreads the picks evenly over the available candidates.
* ``minTravel`` walks the course greedily: from the last chosen spot it moves
  to the closest candidate (straight line) that the spectator can still reach
  before the runner, with a fixed margin and a penalty for crossing the
  course.  The walk is greedy, not optimal; it can strand itself early when a
  different earlier choice would have allowed more spots.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence

from cheerchaser.course.crossing import CrossingDetector
from cheerchaser.course.geometry import haversine_distance
from cheerchaser.course.models import GeoPoint
from cheerchaser.planning.models import PlannerConfig, SelectionStrategy, TravelProfile
from cheerchaser.planning.pace import PaceValidationError, parse_pace

_logger = logging.getLogger(__name__)


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


class SpotSelector:
    """Suggest cheer spots from a candidate table.

    Args:
        config: Speeds, buffers and penalties; defaults to :class:`PlannerConfig`.
        crossing_detector: Injected for tests; built from *config* otherwise.
    """

    def __init__(
        self,
        config: PlannerConfig | None = None,
        crossing_detector: CrossingDetector | None = None,
    ) -> None:
        self.config = config or PlannerConfig()
        self.crossing_detector = crossing_detector or CrossingDetector(
            self.config.crossing_tolerance_m
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def suggest(
        self,
        candidates: Mapping[float, GeoPoint],
        num_spots: int,
        strategy: SelectionStrategy,
        pace_s_per_m: float | None = None,
        travel_profile: TravelProfile = TravelProfile.WALKING,
        skip_first_km: float = 0.0,
        course: Sequence[GeoPoint] = (),
    ) -> list[float]:
        """Return the suggested along-course distances, ascending.

        Raises:
            PaceValidationError: For ``minTravel`` without a positive pace.
        """
        strategy = SelectionStrategy(strategy)
        travel_profile = TravelProfile(travel_profile)

        skip_m = skip_first_km * 1000
        available = sorted(
            (item for item in candidates.items() if item[0] >= skip_m),
            key=lambda item: item[0],
        )
        _logger.debug(
            "Suggesting %d spots (%s), %d candidates after skipping %.1f km",
            num_spots, strategy.value, len(available), skip_first_km,
        )
        if not available or num_spots <= 0:
            return []

        num_to_select = min(num_spots, len(available))
        if strategy is SelectionStrategy.MAX_SPREAD:
            result = self._max_spread(available, num_to_select)
        else:
            if pace_s_per_m is None or pace_s_per_m <= 0:
                raise PaceValidationError()
            result = self._min_travel(
                available, num_to_select, pace_s_per_m, travel_profile, course
            )

        _logger.info(
            "Suggested %d of %d requested spots: %s",
            len(result), num_spots, [round(d) for d in result],
        )
        return result

    def is_feasible(
        self,
        start: tuple[float, GeoPoint],
        end: tuple[float, GeoPoint],
        pace_s_per_m: float,
        travel_profile: TravelProfile,
        course: Sequence[GeoPoint] = (),
    ) -> bool:
        """Can the spectator get from *start* to *end* before the runner?

        Both arguments are ``(along_course_m, point)`` pairs.
        """
        straight = haversine_distance(start[1], end[1])
        return self._feasible(start, end, straight, pace_s_per_m, travel_profile, course)

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    @staticmethod
    def _max_spread(available: list[tuple[float, GeoPoint]], k: int) -> list[float]:
        n = len(available)
        if k == 1:
            return [available[-1][0]]
        step = (n - 1) / (k - 1)
        picks: list[float] = []
        for i in range(k):
            idx = max(0, min(_round_half_up(i * step), n - 1))
            picks.append(available[idx][0])
        return picks

    def _min_travel(
        self,
        available: list[tuple[float, GeoPoint]],
        k: int,
        pace_s_per_m: float,
        travel_profile: TravelProfile,
        course: Sequence[GeoPoint],
    ) -> list[float]:
        last = available[0]
        picks = [last[0]]
        used = {0}

        while len(picks) < k:
            best_index = -1
            best_straight = math.inf
            for i, candidate in enumerate(available):
                if i in used:
                    continue
                straight = haversine_distance(last[1], candidate[1])
                if straight >= best_straight:
                    continue
                if self._feasible(last, candidate, straight, pace_s_per_m, travel_profile, course):
                    best_straight = straight
                    best_index = i

            if best_index == -1:
                _logger.warning(
                    "Could not find feasible spot %d of %d; stopping", len(picks) + 1, k
                )
                break

            last = available[best_index]
            picks.append(last[0])
            used.add(best_index)

        return picks

    def _feasible(
        self,
        start: tuple[float, GeoPoint],
        end: tuple[float, GeoPoint],
        straight_m: float,
        pace_s_per_m: float,
        travel_profile: TravelProfile,
        course: Sequence[GeoPoint],
    ) -> bool:
        runner_s = (end[0] - start[0]) * pace_s_per_m
        speed = self.config.speed_for(travel_profile)
        spectator_s = straight_m / speed if speed else math.inf
        if math.isinf(spectator_s):
            return False

        needed = spectator_s + self.config.spectator_buffer_s
        if runner_s <= needed:
            return False
        if self.crossing_detector.crosses(course, start[1], end[1]):
            _logger.debug(
                "Course crossing between %.2f km and %.2f km", start[0] / 1000, end[0] / 1000
            )
            needed += self.config.crossing_penalty_s
        return runner_s > needed


def suggest_spots(
    candidates: Mapping[float, GeoPoint],
    num_spots: int,
    strategy: SelectionStrategy | str,
    pace_s_per_m: float | None = None,
    travel_profile: TravelProfile | str = TravelProfile.WALKING,
    skip_first_km: float = 0.0,
    course: Sequence[GeoPoint] = (),
    *,
    pace: str | None = None,
    config: PlannerConfig | None = None,
) -> list[float]:
    """Suggest cheer spots in one call.

    *pace* is the human ``"MM:SS"`` per-km string; when given it takes the
    place of *pace_s_per_m*.  For ``minTravel`` an unparseable pace raises
    :class:`PaceValidationError`.
    """
    if pace is not None:
        pace_s_per_m = parse_pace(pace)
    return SpotSelector(config).suggest(
        candidates,
        num_spots,
        SelectionStrategy(strategy),
        pace_s_per_m=pace_s_per_m,
        travel_profile=TravelProfile(travel_profile),
        skip_first_km=skip_first_km,
        course=course,
    )
