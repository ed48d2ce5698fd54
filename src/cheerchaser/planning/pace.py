"""Runner pace parsing."""

from __future__ import annotations

import re

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class PaceValidationError(ValueError):
    """The runner pace is missing or not a valid ``MM:SS`` per-kilometre value."""

    def __init__(self, pace: str | None = None) -> None:
        self.pace = pace
        super().__init__("Please enter a valid runner pace (MM:SS per km, e.g. 5:30).")


def _leading_int(text: str) -> int | None:
    """Integer prefix of *text* (``"30s"`` → 30), or ``None`` if there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def parse_pace(pace: str | None) -> float | None:
    """Convert ``"MM:SS"`` per kilometre into seconds per metre.

    Returns ``None`` for anything unparseable: missing input, not exactly one
    ``:``, a part without a leading integer, or a non-positive total.

    >>> parse_pace("5:00")
    0.3
    """
    if not pace:
        return None
    parts = pace.split(":")
    if len(parts) != 2:
        return None
    minutes = _leading_int(parts[0])
    seconds = _leading_int(parts[1])
    if minutes is None or seconds is None:
        return None
    total_per_km = minutes * 60 + seconds
    if total_per_km <= 0:
        return None
    return total_per_km / 1000
