"""Check an existing plan against routed spectator travel times."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from cheerchaser.planning.formatting import format_seconds_hms

DEFAULT_LEG_BUFFER_S = 300.0


@dataclass
class LegCheck:
    """Feasibility of moving between two consecutive selected spots."""

    from_m: float
    """Along-course distance of the spot the spectator leaves."""

    to_m: float
    """Along-course distance of the next spot."""

    runner_s: float
    """Time the runner needs between the two spots."""

    spectator_s: float
    """Routed travel time for the spectator."""

    tight: bool
    """True if ``spectator_s + buffer`` exceeds ``runner_s``."""

    @property
    def warning(self) -> str | None:
        if not self.tight:
            return None
        return (
            f"Tight connection! Spectator travel (~{format_seconds_hms(self.spectator_s)}) "
            f"+ buffer exceeds runner time (~{format_seconds_hms(self.runner_s)})."
        )


def check_legs(
    spots: Sequence[float],
    pace_s_per_m: float | None,
    leg_durations: Sequence[float] | None,
    buffer_s: float = DEFAULT_LEG_BUFFER_S,
) -> list[LegCheck]:
    """One :class:`LegCheck` per consecutive pair of *spots* (sorted ascending).

    Legs without a routed duration are skipped; no pace or no durations means
    there is nothing to check.
    """
    if pace_s_per_m is None or not leg_durations:
        return []

    checks: list[LegCheck] = []
    for i in range(1, len(spots)):
        if i - 1 >= len(leg_durations):
            break
        runner_s = (spots[i] - spots[i - 1]) * pace_s_per_m
        spectator_s = float(leg_durations[i - 1])
        checks.append(LegCheck(
            from_m=spots[i - 1],
            to_m=spots[i],
            runner_s=runner_s,
            spectator_s=spectator_s,
            tight=spectator_s + buffer_s > runner_s,
        ))
    return checks
