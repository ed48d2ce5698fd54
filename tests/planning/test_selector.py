"""Tests for SpotSelector: maxSpread and the greedy minTravel walk."""

from __future__ import annotations

import math

import pytest

from cheerchaser.course.geometry import EARTH_RADIUS_M
from cheerchaser.course.models import GeoPoint
from cheerchaser.planning.models import PlannerConfig, SelectionStrategy, TravelProfile
from cheerchaser.planning.pace import PaceValidationError
from cheerchaser.planning.selector import SpotSelector, suggest_spots

# ---------------------------------------------------------------------------
# Test-data helpers
# ---------------------------------------------------------------------------

LAT0, LNG0 = 52.52, 13.40
DEG_PER_M = 180 / (math.pi * EARTH_RADIUS_M)


def offset(north_m: float, east_m: float = 0.0) -> GeoPoint:
    return GeoPoint(
        LAT0 + north_m * DEG_PER_M,
        LNG0 + east_m * DEG_PER_M / math.cos(math.radians(LAT0)),
    )


def straight_candidates(n: int, spacing_m: float) -> dict[float, GeoPoint]:
    """Candidates laid out due north, so straight-line = along-course distance."""
    return {i * spacing_m: offset(i * spacing_m) for i in range(n)}


MAX_SPREAD = SelectionStrategy.MAX_SPREAD
MIN_TRAVEL = SelectionStrategy.MIN_TRAVEL


# ---------------------------------------------------------------------------
# Candidate pool
# ---------------------------------------------------------------------------


class TestCandidatePool:
    def test_skip_first_km_filters_candidates(self):
        candidates = straight_candidates(11, 500.0)
        picks = SpotSelector().suggest(candidates, 11, MAX_SPREAD, skip_first_km=2)
        assert picks[0] == 2000.0
        assert len(picks) == 7

    def test_skip_beyond_course_gives_nothing(self):
        candidates = straight_candidates(5, 500.0)
        assert SpotSelector().suggest(candidates, 3, MAX_SPREAD, skip_first_km=10) == []

    def test_zero_spots_requested(self):
        assert SpotSelector().suggest(straight_candidates(5, 500.0), 0, MAX_SPREAD) == []

    def test_empty_candidates(self):
        assert SpotSelector().suggest({}, 3, MIN_TRAVEL, pace_s_per_m=0.3) == []

    def test_unsorted_input_is_sorted(self):
        candidates = dict(reversed(list(straight_candidates(5, 100.0).items())))
        assert SpotSelector().suggest(candidates, 5, MAX_SPREAD) == [0.0, 100.0, 200.0, 300.0, 400.0]


# ---------------------------------------------------------------------------
# maxSpread
# ---------------------------------------------------------------------------


class TestMaxSpread:
    def test_nine_candidates_three_spots(self):
        candidates = straight_candidates(9, 100.0)
        assert SpotSelector().suggest(candidates, 3, MAX_SPREAD) == [0.0, 400.0, 800.0]

    def test_single_spot_is_the_last_candidate(self):
        candidates = straight_candidates(9, 100.0)
        assert SpotSelector().suggest(candidates, 1, MAX_SPREAD) == [800.0]

    def test_all_candidates_when_k_equals_n(self):
        candidates = straight_candidates(4, 100.0)
        assert SpotSelector().suggest(candidates, 4, MAX_SPREAD) == list(candidates)

    def test_more_spots_than_candidates(self):
        candidates = straight_candidates(3, 100.0)
        assert SpotSelector().suggest(candidates, 10, MAX_SPREAD) == [0.0, 100.0, 200.0]

    def test_half_steps_round_up(self):
        """Six candidates, three spots: step 2.5, so the middle pick is index 3."""
        candidates = straight_candidates(6, 100.0)
        assert SpotSelector().suggest(candidates, 3, MAX_SPREAD) == [0.0, 300.0, 500.0]

    def test_pace_not_needed(self):
        candidates = straight_candidates(6, 100.0)
        assert suggest_spots(candidates, 2, "maxSpread", pace="abc") == [0.0, 500.0]


# ---------------------------------------------------------------------------
# minTravel
# ---------------------------------------------------------------------------


class TestMinTravel:
    def test_requires_a_pace(self):
        with pytest.raises(PaceValidationError):
            SpotSelector().suggest(straight_candidates(5, 500.0), 3, MIN_TRAVEL)

    def test_bad_pace_string_raises(self):
        with pytest.raises(PaceValidationError):
            suggest_spots(straight_candidates(5, 500.0), 3, "minTravel", pace="abc")

    def test_bad_pace_with_empty_pool_returns_nothing(self):
        candidates = straight_candidates(5, 500.0)
        assert suggest_spots(candidates, 3, "minTravel", pace="abc", skip_first_km=50) == []

    def test_seed_is_first_available_candidate(self):
        candidates = straight_candidates(10, 500.0)
        picks = SpotSelector().suggest(
            candidates, 3, MIN_TRAVEL, pace_s_per_m=0.3, skip_first_km=1
        )
        assert picks[0] == 1000.0

    def test_unreachable_next_spot_returns_seed_only(self):
        """1 km at 5:00/km is 300 s; walking 1 km takes ~714 s plus the buffer."""
        candidates = {0.0: offset(0), 1000.0: offset(1000)}
        picks = SpotSelector().suggest(
            candidates, 2, MIN_TRAVEL, pace_s_per_m=0.3, travel_profile=TravelProfile.WALKING
        )
        assert picks == [0.0]

    def test_picks_closest_feasible_candidate(self):
        """A loop brings km 6 back within 100 m of the start."""
        candidates = {
            0.0: offset(0),
            5000.0: offset(500),
            6000.0: offset(0, 100),
        }
        picks = SpotSelector().suggest(candidates, 2, MIN_TRAVEL, pace_s_per_m=0.36)
        assert picks == [0.0, 6000.0]

    def test_greedy_walk_stops_early(self):
        candidates = {
            0.0: offset(0),
            5000.0: offset(500),
            6000.0: offset(0, 100),
        }
        picks = SpotSelector().suggest(candidates, 3, MIN_TRAVEL, pace_s_per_m=0.36)
        assert picks == [0.0, 6000.0]

    def test_cycling_straight_course(self):
        """By bike a leg needs d / 5.5 + 600 < d, i.e. more than ~733 m at 1 s/m."""
        candidates = straight_candidates(11, 500.0)
        picks = SpotSelector().suggest(
            candidates, 3, MIN_TRAVEL, pace_s_per_m=1.0, travel_profile=TravelProfile.CYCLING
        )
        assert picks == [0.0, 1000.0, 2000.0]

    def test_walking_needs_longer_legs(self):
        """On foot the threshold is ~2100 m at 1 s/m."""
        candidates = straight_candidates(11, 500.0)
        picks = SpotSelector().suggest(candidates, 3, MIN_TRAVEL, pace_s_per_m=1.0)
        assert picks == [0.0, 2500.0, 5000.0]

    def test_transit_never_moves(self):
        candidates = straight_candidates(11, 500.0)
        picks = SpotSelector().suggest(
            candidates, 3, MIN_TRAVEL, pace_s_per_m=10.0, travel_profile=TravelProfile.TRANSIT
        )
        assert picks == [0.0]

    def test_buffer_is_configurable(self):
        candidates = {0.0: offset(0), 1000.0: offset(1000)}
        cycling = TravelProfile.CYCLING

        default = SpotSelector().suggest(
            candidates, 2, MIN_TRAVEL, pace_s_per_m=0.3, travel_profile=cycling
        )
        no_buffer = SpotSelector(PlannerConfig(spectator_buffer_s=0)).suggest(
            candidates, 2, MIN_TRAVEL, pace_s_per_m=0.3, travel_profile=cycling
        )
        assert default == [0.0]
        assert no_buffer == [0.0, 1000.0]

    def test_result_is_strictly_increasing_subset(self):
        candidates = straight_candidates(41, 250.0)
        picks = SpotSelector().suggest(
            candidates, 8, MIN_TRAVEL, pace_s_per_m=0.9, travel_profile=TravelProfile.CYCLING
        )
        assert all(b > a for a, b in zip(picks, picks[1:]))
        assert set(picks) <= set(candidates)
        assert len(picks) <= 8

    def test_repeated_calls_agree(self):
        candidates = straight_candidates(41, 250.0)
        selector = SpotSelector()
        first = selector.suggest(candidates, 5, MIN_TRAVEL, pace_s_per_m=1.2)
        second = selector.suggest(candidates, 5, MIN_TRAVEL, pace_s_per_m=1.2)
        assert first == second


# ---------------------------------------------------------------------------
# Course crossings
# ---------------------------------------------------------------------------


class TestCrossingPenalty:
    @pytest.fixture
    def course(self):
        return [offset(-1000), offset(3000)]

    @pytest.fixture
    def spots(self):
        """Two spots 200 m either side of the course (walking ~286 s + 600 s)."""
        return (0.0, offset(0, -200)), (2000.0, offset(0, 200))

    def test_feasible_without_the_course(self, spots):
        start, end = spots
        assert SpotSelector().is_feasible(start, end, 0.5, TravelProfile.WALKING)

    def test_crossing_adds_penalty(self, spots, course):
        start, end = spots
        assert not SpotSelector().is_feasible(start, end, 0.5, TravelProfile.WALKING, course)

    def test_penalty_is_configurable(self, spots, course):
        start, end = spots
        selector = SpotSelector(PlannerConfig(crossing_penalty_s=0))
        assert selector.is_feasible(start, end, 0.5, TravelProfile.WALKING, course)

    def test_suggest_respects_crossings(self, spots, course):
        candidates = dict(spots)
        selector = SpotSelector()
        assert selector.suggest(candidates, 2, MIN_TRAVEL, pace_s_per_m=0.5) == [0.0, 2000.0]
        assert selector.suggest(
            candidates, 2, MIN_TRAVEL, pace_s_per_m=0.5, course=course
        ) == [0.0]
