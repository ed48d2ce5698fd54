"""The set of spots the spectator has chosen."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from cheerchaser.course.models import GeoPoint


class SpotNotFoundError(KeyError):
    """The distance is not a candidate spot on the current course."""


class SpotSelection:
    """Selected along-course distances, always a subset of the candidate keys.

    Changes are either a full :meth:`replace` (a suggestion run) or a single
    :meth:`toggle` (user click).  Both validate before mutating.

    Args:
        candidates: The candidate table of the current course.
    """

    def __init__(self, candidates: Mapping[float, GeoPoint]) -> None:
        self._candidates = candidates
        self._spots: set[float] = set()

    def __contains__(self, distance: object) -> bool:
        return distance in self._spots

    def __len__(self) -> int:
        return len(self._spots)

    def __iter__(self) -> Iterator[float]:
        return iter(self.sorted())

    def sorted(self) -> list[float]:
        """Selected distances in course order."""
        return sorted(self._spots)

    def waypoints(self) -> list[GeoPoint]:
        """Locations of the selected spots in course order."""
        return [self._candidates[d] for d in self.sorted()]

    def replace(self, distances: Iterable[float]) -> None:
        """Replace the whole selection.

        Raises:
            SpotNotFoundError: If any distance is not a candidate; the
                selection is left unchanged.
        """
        new_spots = set(distances)
        unknown = [d for d in new_spots if d not in self._candidates]
        if unknown:
            raise SpotNotFoundError(f"Not a candidate spot: {min(unknown)}")
        self._spots = new_spots

    def toggle(self, distance: float) -> bool:
        """Add *distance* if absent, remove it if present.

        Returns:
            True if the spot is selected after the call.
        """
        if distance in self._spots:
            self._spots.discard(distance)
            return False
        if distance not in self._candidates:
            raise SpotNotFoundError(f"Not a candidate spot: {distance}")
        self._spots.add(distance)
        return True

    def clear(self) -> None:
        self._spots = set()
