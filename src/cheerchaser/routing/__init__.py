"""Spectator routing between cheer spots."""

from cheerchaser.routing.osrm import OsrmClient

__all__ = ["OsrmClient"]
