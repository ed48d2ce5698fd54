"""Planning enums and tunable constants."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum


class TravelProfile(str, Enum):
    """How the spectator moves between cheer spots."""

    WALKING = "walking"
    CYCLING = "cycling"
    TRANSIT = "transit"
    """Public transport: no straight-line heuristic and no route lookups."""


class SelectionStrategy(str, Enum):
    """Which algorithm picks the suggested spots."""

    MAX_SPREAD = "maxSpread"
    MIN_TRAVEL = "minTravel"


# (field name, environment variable)
_ENV_OVERRIDES: tuple[tuple[str, str], ...] = (
    ("candidate_interval_m", "CHEERCHASER_INTERVAL_M"),
    ("walking_speed_mps", "CHEERCHASER_WALKING_SPEED_MPS"),
    ("cycling_speed_mps", "CHEERCHASER_CYCLING_SPEED_MPS"),
    ("spectator_buffer_s", "CHEERCHASER_BUFFER_S"),
    ("crossing_penalty_s", "CHEERCHASER_CROSSING_PENALTY_S"),
)


@dataclass(frozen=True)
class PlannerConfig:
    """Heuristic constants used by the planner.

    Defaults match a spectator on foot (~5 km/h) or by bike (~20 km/h) with a
    10-minute margin for crossing, parking and finding a view.
    """

    walking_speed_mps: float = 1.4
    cycling_speed_mps: float = 5.5
    spectator_buffer_s: float = 600.0
    """Fixed margin added to every spectator move during spot selection."""

    crossing_penalty_s: float = 300.0
    """Extra time when the spectator's direct path crosses the course."""

    candidate_interval_m: float = 50.0
    crossing_tolerance_m: float = 10.0
    probe_radius_m: float = 40.0
    """Maximum cursor distance from the course for a probe to be reported."""

    leg_buffer_s: float = 300.0
    """Margin used when checking routed legs of an existing plan."""

    km_marker_interval_m: float = 5000.0

    def speed_for(self, profile: TravelProfile) -> float | None:
        """Straight-line speed for *profile*, or ``None`` for transit."""
        if profile is TravelProfile.WALKING:
            return self.walking_speed_mps
        if profile is TravelProfile.CYCLING:
            return self.cycling_speed_mps
        return None

    @classmethod
    def from_env(cls) -> PlannerConfig:
        """Build a config, overriding defaults from ``CHEERCHASER_*`` variables.

        Raises:
            ValueError: If a set variable is not a number.
        """
        overrides: dict[str, float] = {}
        for field_name, var in _ENV_OVERRIDES:
            raw = os.environ.get(var)
            if raw is None or raw == "":
                continue
            try:
                overrides[field_name] = float(raw)
            except ValueError:
                raise ValueError(f"{var} must be a number, got {raw!r}") from None
        return cls(**overrides)
