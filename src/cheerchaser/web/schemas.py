"""Pydantic request/response schemas for the Web API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from cheerchaser.planning.models import SelectionStrategy, TravelProfile


class HealthResponse(BaseModel):
    status: str
    version: str


class GeoPointModel(BaseModel):
    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)


class MarkerModel(BaseModel):
    distance_m: float
    lat: float
    lng: float


class CourseSummary(BaseModel):
    point_count: int
    total_distance_m: float
    interval_m: float
    candidate_count: int
    km_markers: list[MarkerModel]


class CandidatesResponse(BaseModel):
    candidates: list[MarkerModel]


class ProbeResponse(BaseModel):
    on_course: bool
    distance_m: float | None = None
    """Distance from the query point to the course."""
    along_course_m: float | None = None
    point: GeoPointModel | None = None
    distance_label: str = ""
    eta_label: str = ""


class CrossingRequest(BaseModel):
    a: GeoPointModel
    b: GeoPointModel


class CrossingResponse(BaseModel):
    crosses: bool


class SuggestRequest(BaseModel):
    num_spots: int = 3
    strategy: SelectionStrategy = SelectionStrategy.MIN_TRAVEL
    pace: str | None = None
    """``MM:SS`` per km; the saved preference is used when omitted."""
    travel_profile: TravelProfile = TravelProfile.WALKING
    skip_first_km: float = Field(default=0.0, ge=0.0)


class SuggestResponse(BaseModel):
    requested: int
    spots: list[float]
    complete: bool
    """False when fewer spots than requested could be suggested."""


class ToggleResponse(BaseModel):
    distance_m: float
    selected: bool
    selected_count: int


class PlanSpot(BaseModel):
    distance_m: float
    lat: float
    lng: float
    distance_label: str
    eta_label: str
    is_finish: bool


class PlanLeg(BaseModel):
    from_m: float
    to_m: float
    runner_s: float
    spectator_s: float
    tight: bool
    warning: str | None = None


class PlanResponse(BaseModel):
    travel_profile: TravelProfile
    spots: list[PlanSpot]
    legs: list[PlanLeg]


class Preferences(BaseModel):
    runner_pace: str = ""
    race_start_time: str = ""
