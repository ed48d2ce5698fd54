"""FastAPI Web application — cheer spot planner API."""

from __future__ import annotations

import os

from dotenv import load_dotenv
from fastapi import FastAPI, File, HTTPException, UploadFile

from cheerchaser import __version__
from cheerchaser.course.models import CourseIndex, GeoPoint
from cheerchaser.planning.models import PlannerConfig, TravelProfile
from cheerchaser.planning.selection import SpotNotFoundError
from cheerchaser.storage import PreferenceStore
from cheerchaser.web.schemas import (
    CandidatesResponse,
    CourseSummary,
    CrossingRequest,
    CrossingResponse,
    HealthResponse,
    MarkerModel,
    PlanResponse,
    Preferences,
    ProbeResponse,
    SuggestRequest,
    SuggestResponse,
    ToggleResponse,
)
from cheerchaser.web.service import NoCourseError, PlannerService

load_dotenv()  # loads .env from project root; must run before env vars are consumed

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = FastAPI(title="CheerChaser", version=__version__)

_DEFAULT_DB = os.environ.get("CHEERCHASER_DB", "cheerchaser.db")

_service: PlannerService | None = None


def _planner() -> PlannerService:
    """The process-wide planning session, created on first use."""
    global _service
    if _service is None:
        _service = PlannerService(PreferenceStore(_DEFAULT_DB), PlannerConfig.from_env())
    return _service


def _markers(table: dict[float, GeoPoint]) -> list[MarkerModel]:
    return [MarkerModel(distance_m=d, lat=p.lat, lng=p.lng) for d, p in table.items()]


def _summary(index: CourseIndex) -> CourseSummary:
    return CourseSummary(
        point_count=len(index.points),
        total_distance_m=index.total_distance_m,
        interval_m=index.interval_m,
        candidate_count=len(index.candidates),
        km_markers=_markers(index.km_markers),
    )


def _no_course(exc: NoCourseError) -> HTTPException:
    return HTTPException(status_code=409, detail=str(exc))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


@app.post("/api/course", response_model=CourseSummary)
def upload_course(file: UploadFile = File(...)) -> CourseSummary:
    """Load a GPX course; clears any selected spots."""
    raw = file.file.read()
    try:
        index = _planner().load_course(raw.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise HTTPException(status_code=422, detail="GPX file must be UTF-8 text") from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _summary(index)


@app.get("/api/course", response_model=CourseSummary)
def course_summary() -> CourseSummary:
    svc = _planner()
    if svc.index.is_empty:
        raise HTTPException(status_code=409, detail="No course loaded")
    return _summary(svc.index)


@app.get("/api/course/candidates", response_model=CandidatesResponse)
def candidates() -> CandidatesResponse:
    svc = _planner()
    if svc.index.is_empty:
        raise HTTPException(status_code=409, detail="No course loaded")
    return CandidatesResponse(candidates=_markers(svc.index.candidates))


@app.get("/api/probe", response_model=ProbeResponse)
def probe(lat: float, lng: float) -> ProbeResponse:
    """Nearest course location to a cursor position."""
    try:
        return _planner().probe(lat, lng)
    except NoCourseError as exc:
        raise _no_course(exc) from exc


@app.post("/api/crossing", response_model=CrossingResponse)
def crossing(req: CrossingRequest) -> CrossingResponse:
    a = GeoPoint(req.a.lat, req.a.lng)
    b = GeoPoint(req.b.lat, req.b.lng)
    try:
        return CrossingResponse(crosses=_planner().crosses(a, b))
    except NoCourseError as exc:
        raise _no_course(exc) from exc


@app.post("/api/suggest", response_model=SuggestResponse)
def suggest(req: SuggestRequest) -> SuggestResponse:
    """Suggest cheer spots and make them the current selection."""
    try:
        spots = _planner().suggest(req)
    except NoCourseError as exc:
        raise _no_course(exc) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return SuggestResponse(
        requested=req.num_spots,
        spots=spots,
        complete=len(spots) >= req.num_spots,
    )


@app.post("/api/spots/{distance}/toggle", response_model=ToggleResponse)
def toggle_spot(distance: float) -> ToggleResponse:
    svc = _planner()
    try:
        selected = svc.toggle(distance)
    except NoCourseError as exc:
        raise _no_course(exc) from exc
    except SpotNotFoundError as exc:
        raise HTTPException(status_code=404, detail=f"No candidate spot at {distance} m") from exc
    return ToggleResponse(distance_m=distance, selected=selected, selected_count=len(svc.selection))


@app.get("/api/plan", response_model=PlanResponse)
def plan(travel_profile: TravelProfile | None = None) -> PlanResponse:
    """Selected spots with ETAs and routed leg checks."""
    try:
        return _planner().plan(travel_profile)
    except NoCourseError as exc:
        raise _no_course(exc) from exc


@app.get("/api/preferences", response_model=Preferences)
def get_preferences() -> Preferences:
    return _planner().preferences()


@app.put("/api/preferences", response_model=Preferences)
def put_preferences(prefs: Preferences) -> Preferences:
    return _planner().save_preferences(prefs)
