import json
import logging
import math
from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from speedmap.api.deps import get_simulator, get_surface, optional_user
from speedmap.core.classify import label_for
from speedmap.core.colors import color_for, gradient_for
from speedmap.core.constants import DEFAULT_HISTOGRAM_BUCKETS, MAX_SPEED
from speedmap.core.geo import path_length_m
from speedmap.core.projection import MapSurface, Region, surface_for
from speedmap.core.stats import compute_histogram, compute_stats
from speedmap.core.config import settings
from speedmap.core.time_utils import parse_iso, seconds_to_hhmmss, to_iso, to_local_datetime, utc_now
from speedmap.db import get_db
from speedmap.models.sample import Sample
from speedmap.models.tracking_session import TrackingSession
from speedmap.schemas.heatmap import HistogramBarRead, ProjectedPoint, ProjectionRead, StatsRead
from speedmap.schemas.sample import GradientRead, SampleCreate, SampleRead
from speedmap.schemas.session import (
    SessionCreate,
    SessionRead,
    SessionSource,
    SessionUpdate,
    SimulationRead,
)
from speedmap.services import exporter
from speedmap.services.simulator import WalkSimulator, WalkState

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_session_or_404(db: Session, session_id: int) -> TrackingSession:
    row = db.get(TrackingSession, session_id)
    if not row:
        raise HTTPException(status_code=404, detail="Session not found")
    return row


def _sample_read(sample: Sample) -> SampleRead:
    g = gradient_for(sample.speed_mbps)
    return SampleRead(
        id=sample.id,
        latitude=sample.latitude,
        longitude=sample.longitude,
        speed_mbps=sample.speed_mbps,
        timestamp=to_iso(sample.recorded_at),
        color=color_for(sample.speed_mbps),
        gradient=GradientRead(inner=g.inner, middle=g.middle, outer=g.outer, hex=g.hex),
        label=label_for(sample.speed_mbps),
    )


def _session_read(row: TrackingSession) -> SessionRead:
    samples = row.samples
    distance = path_length_m((s.latitude, s.longitude) for s in samples)
    duration_seconds = 0
    if len(samples) > 1:
        duration_seconds = int((samples[-1].recorded_at - samples[0].recorded_at).total_seconds())
    stats = compute_stats(s.speed_mbps for s in samples)
    start_date = start_time = None
    if samples:
        local_first = to_local_datetime(samples[0].recorded_at, settings.timezone)
        start_date = local_first.date()
        start_time = local_first.strftime("%H:%M")

    return SessionRead(
        id=row.id,
        title=row.title,
        notes=row.notes,
        source=row.source,
        user_id=row.user_id,
        created_at=row.created_at,
        sample_count=len(samples),
        distance_m=distance,
        duration=seconds_to_hhmmss(duration_seconds),
        average_speed=stats.average,
        start_date=start_date,
        start_time=start_time,
    )


@router.post("/", response_model=SessionRead)
def create_session(payload: SessionCreate, db: Session = Depends(get_db), user=Depends(optional_user)):
    if not payload.title.strip():
        raise HTTPException(status_code=422, detail="title must not be empty")

    row = TrackingSession(
        title=payload.title.strip(),
        notes=payload.notes,
        source=payload.source.value,
        user_id=user.id if user else None,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info("Created session %s (%s)", row.id, row.source)
    return _session_read(row)


@router.get("/", response_model=list[SessionRead])
def list_sessions(
    source: Optional[SessionSource] = Query(None),
    mine: bool = Query(False),
    db: Session = Depends(get_db),
    user=Depends(optional_user),
):
    """
    List sessions, most recent first.

      GET /sessions?source=simulated
      GET /sessions?mine=true   (requires a bearer token)
    """
    query = db.query(TrackingSession)
    if source is not None:
        query = query.filter(TrackingSession.source == source.value)
    if mine:
        if user is None:
            raise HTTPException(status_code=401, detail="mine=true requires a bearer token")
        query = query.filter(TrackingSession.user_id == user.id)

    rows = query.order_by(TrackingSession.created_at.desc(), TrackingSession.id.desc()).all()
    return [_session_read(r) for r in rows]


@router.get("/{session_id}", response_model=SessionRead)
def get_session(session_id: int, db: Session = Depends(get_db)):
    return _session_read(_get_session_or_404(db, session_id))


@router.put("/{session_id}", response_model=SessionRead)
def update_session(session_id: int, payload: SessionUpdate, db: Session = Depends(get_db)):
    row = _get_session_or_404(db, session_id)
    update_data = payload.model_dump(exclude_unset=True)

    if "title" in update_data:
        title = (update_data["title"] or "").strip()
        if not title:
            raise HTTPException(status_code=422, detail="title must not be empty")
        update_data["title"] = title

    for key, value in update_data.items():
        setattr(row, key, value)

    db.commit()
    db.refresh(row)
    return _session_read(row)


@router.delete("/{session_id}", status_code=204)
def delete_session(session_id: int, db: Session = Depends(get_db)):
    row = _get_session_or_404(db, session_id)
    db.delete(row)
    db.commit()
    return Response(status_code=204)


# --------- Samples --------- #

@router.post("/{session_id}/samples", response_model=SampleRead)
def add_sample(session_id: int, payload: SampleCreate, db: Session = Depends(get_db)):
    row = _get_session_or_404(db, session_id)
    try:
        recorded_at = parse_iso(payload.timestamp) or utc_now()
    except ValueError:
        raise HTTPException(status_code=422, detail="timestamp must be ISO-8601")

    speed = payload.speed_mbps
    if math.isnan(speed) or speed < 0:
        speed = 0.0
    elif math.isinf(speed):
        speed = MAX_SPEED

    sample = Sample(
        session_id=row.id,
        latitude=payload.latitude,
        longitude=payload.longitude,
        speed_mbps=speed,
        recorded_at=recorded_at,
    )
    db.add(sample)
    db.commit()
    db.refresh(sample)
    return _sample_read(sample)


@router.get("/{session_id}/samples", response_model=list[SampleRead])
def list_samples(session_id: int, db: Session = Depends(get_db)):
    row = _get_session_or_404(db, session_id)
    return [_sample_read(s) for s in row.samples]


@router.delete("/{session_id}/samples", status_code=204)
def clear_samples(session_id: int, db: Session = Depends(get_db)):
    row = _get_session_or_404(db, session_id)
    db.query(Sample).filter(Sample.session_id == row.id).delete()
    db.commit()
    return Response(status_code=204)


# --------- Stats / histogram / projection --------- #

@router.get("/{session_id}/stats", response_model=StatsRead)
def get_session_stats(session_id: int, db: Session = Depends(get_db)):
    row = _get_session_or_404(db, session_id)
    return StatsRead(**compute_stats(s.speed_mbps for s in row.samples).as_dict())


@router.get("/{session_id}/histogram", response_model=list[HistogramBarRead])
def get_session_histogram(
    session_id: int,
    buckets: int = Query(DEFAULT_HISTOGRAM_BUCKETS, ge=1, le=100),
    db: Session = Depends(get_db),
):
    row = _get_session_or_404(db, session_id)
    bars = compute_histogram((s.speed_mbps for s in row.samples), buckets)
    return [HistogramBarRead(count=b.count, height=b.height, speed=b.speed, color=b.color) for b in bars]


@router.get("/{session_id}/project", response_model=ProjectionRead)
def project_session(
    session_id: int,
    width: Optional[float] = Query(None),
    height: Optional[float] = Query(None),
    center_lat: Optional[float] = Query(None),
    center_lng: Optional[float] = Query(None),
    lat_span_deg: Optional[float] = Query(None),
    lng_span_deg: Optional[float] = Query(None),
    surface: Optional[str] = Query(None),
    radius_m: float = Query(20, gt=0),
    db: Session = Depends(get_db),
    default_surface: MapSurface = Depends(get_surface),
):
    """Screen positions of every sample for the given viewport.

    Until the client knows its region and size, `renderable` is false and
    no points are returned.
    """
    row = _get_session_or_404(db, session_id)
    try:
        surf = surface_for(surface) if surface else default_surface
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    region = None
    if None not in (center_lat, center_lng, lat_span_deg, lng_span_deg):
        region = Region(center_lat, center_lng, lat_span_deg, lng_span_deg)

    points = []
    for idx, s in enumerate(row.samples):
        p = surf.project(s.latitude, s.longitude, region, width, height)
        if p is None:
            continue
        points.append(ProjectedPoint(index=idx, x=p.x, y=p.y, color=color_for(s.speed_mbps)))

    radius = surf.radius_px(radius_m, region, width, height)
    return ProjectionRead(
        surface=surf.name,
        renderable=radius is not None,
        radius_px=radius,
        points=points,
    )


# --------- Export --------- #

MEDIA_TYPES = {
    "json": "application/json",
    "csv": "text/csv",
    "geojson": "application/geo+json",
    "gpx": "application/gpx+xml",
}


@router.get("/{session_id}/export")
def export_session(
    session_id: int,
    fmt: str = Query("json"),
    db: Session = Depends(get_db),
):
    row = _get_session_or_404(db, session_id)
    fmt = fmt.lower()
    if fmt not in exporter.FORMATS:
        raise HTTPException(status_code=422, detail=f"fmt must be one of {', '.join(exporter.FORMATS)}")

    samples = row.samples
    if fmt == "json":
        body = exporter.export_json(samples)
    elif fmt == "csv":
        body = exporter.export_csv(samples)
    elif fmt == "geojson":
        body = json.dumps(exporter.export_geojson(samples))
    else:
        body = exporter.export_gpx(samples, name=row.title)

    filename = f"session-{row.id}.{fmt}"
    return Response(
        content=body,
        media_type=MEDIA_TYPES[fmt],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# --------- Simulated walk --------- #

@router.post("/{session_id}/simulate", response_model=SimulationRead)
def simulate_walk(
    session_id: int,
    steps: int = Query(10, ge=1, le=3600),
    db: Session = Depends(get_db),
    simulator: WalkSimulator = Depends(get_simulator),
):
    """Append `steps` simulated samples, continuing from the last one.

    On an empty session the first sample is the simulator's start point.
    Timestamps advance by the simulator tick from the last sample.
    """
    row = _get_session_or_404(db, session_id)
    tick = timedelta(seconds=simulator.config.update_interval_s)
    samples = row.samples
    last = samples[-1] if samples else None

    state = None
    if last is not None:
        heading = row.sim_heading_rad
        if heading is None:
            heading = simulator.start().heading_rad
        state = WalkState(last.latitude, last.longitude, heading, row.sim_distance_m or 0.0)
        when = last.recorded_at
    else:
        when = utc_now()

    new_samples = []
    for _ in range(steps):
        if state is None:
            state = simulator.start()
            lat, lng = state.lat, state.lng
            speed = simulator.simulated_speed(lat, lng)
        else:
            step = simulator.step(state)
            lat, lng, speed = step.lat, step.lng, step.speed_mbps
            when = when + tick
        new_samples.append(Sample(
            session_id=row.id,
            latitude=lat,
            longitude=lng,
            speed_mbps=speed,
            recorded_at=when,
        ))

    db.add_all(new_samples)
    row.sim_heading_rad = state.heading_rad
    row.sim_distance_m = state.distance_m
    db.commit()
    db.refresh(row)

    logger.info("Simulated %d steps for session %s (%.0f m total)", steps, row.id, state.distance_m)
    return SimulationRead(
        session_id=row.id,
        added=len(new_samples),
        total_distance_m=state.distance_m,
        heading_deg=math.degrees(state.heading_rad) % 360,
        last_speed_mbps=new_samples[-1].speed_mbps,
        sample_count=len(row.samples),
    )


@router.post("/{session_id}/simulate/reset", response_model=SessionRead)
def reset_simulation(session_id: int, db: Session = Depends(get_db)):
    row = _get_session_or_404(db, session_id)
    db.query(Sample).filter(Sample.session_id == row.id).delete()
    row.sim_heading_rad = None
    row.sim_distance_m = 0.0
    db.commit()
    db.expire(row)
    return _session_read(row)
