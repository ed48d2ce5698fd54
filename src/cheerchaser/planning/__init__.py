"""Cheer spot selection and plan checks."""

from cheerchaser.planning.feasibility import LegCheck, check_legs
from cheerchaser.planning.models import PlannerConfig, SelectionStrategy, TravelProfile
from cheerchaser.planning.pace import PaceValidationError, parse_pace
from cheerchaser.planning.selection import SpotNotFoundError, SpotSelection
from cheerchaser.planning.selector import SpotSelector, suggest_spots

__all__ = [
    "LegCheck",
    "PaceValidationError",
    "PlannerConfig",
    "SelectionStrategy",
    "SpotNotFoundError",
    "SpotSelection",
    "SpotSelector",
    "TravelProfile",
    "check_legs",
    "parse_pace",
    "suggest_spots",
]
