"""Human-readable labels for durations, distances and runner ETAs."""

from __future__ import annotations

import math
import re
from datetime import datetime, timedelta

_START_TIME = re.compile(r"^\d{2}:\d{2}$")


def _invalid(value: float) -> bool:
    return math.isnan(value) or value < 0


def is_valid_start_time(start: str | None) -> bool:
    """True for a ``HH:MM`` race start time."""
    return bool(start) and _START_TIME.match(start) is not None


def format_seconds_hms(total_seconds: float) -> str:
    """``3725`` → ``"01:02:05"``; ``"--:--:--"`` for negative or NaN."""
    if _invalid(total_seconds):
        return "--:--:--"
    hours = int(total_seconds // 3600)
    minutes = int((total_seconds % 3600) // 60)
    seconds = int(total_seconds % 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_hours_minutes(total_seconds: float) -> str:
    """Compact duration: ``"1h 5m"``, ``"45m"``, ``"< 1m"`` or ``"0m"``."""
    if _invalid(total_seconds):
        return "-:--"
    if total_seconds == 0:
        return "0m"
    hours = int(total_seconds // 3600)
    minutes = int((total_seconds % 3600) // 60)
    if hours > 0:
        return f"{hours}h {minutes}m" if minutes > 0 else f"{hours}h"
    if minutes > 0:
        return f"{minutes}m"
    return "< 1m"


def format_distance(distance_m: float) -> str:
    """Metres below 1 km (``"850m"``), kilometres with one decimal above."""
    if _invalid(distance_m):
        return "Invalid distance"
    if distance_m < 1000:
        return f"{math.floor(distance_m + 0.5)}m"
    return f"{distance_m / 1000:.1f}km"


def real_time_eta(start: str, seconds_to_add: float) -> str:
    """Wall-clock ``HH:MM`` reached *seconds_to_add* after *start* (``HH:MM``).

    Wraps past midnight.  Returns ``"--:--"`` for an invalid start time or a
    negative/NaN duration.
    """
    if not is_valid_start_time(start) or _invalid(seconds_to_add):
        return "--:--"
    hours, minutes = (int(part) for part in start.split(":"))
    eta = datetime(2000, 1, 1) + timedelta(
        hours=hours, minutes=minutes, seconds=int(seconds_to_add)
    )
    return eta.strftime("%H:%M")


def eta_label(
    distance_m: float, pace_s_per_m: float | None, race_start: str | None = None
) -> str:
    """Tooltip text for a spot: ETA when the race start is known, else duration."""
    if pace_s_per_m is None:
        return "(Set pace)"
    seconds = distance_m * pace_s_per_m
    if is_valid_start_time(race_start):
        return f"ETA: {real_time_eta(race_start, seconds)}"
    return f"Duration: {format_hours_minutes(seconds)}"
