from fastapi import APIRouter, Depends, HTTPException, Query

from speedmap.api.deps import get_surface
from speedmap.core.classify import label_for
from speedmap.core.colors import color_components, color_for, gradient_for, gradient_legend
from speedmap.core.constants import DEFAULT_OPACITY
from speedmap.core.projection import MapSurface, Region, surface_for
from speedmap.schemas.heatmap import (
    ColorRead,
    LabelRead,
    LegendItem,
    ProjectRequest,
    ProjectedPoint,
    ProjectionRead,
)
from speedmap.schemas.sample import GradientRead


router = APIRouter(prefix="/heatmap", tags=["heatmap"])


@router.get("/color", response_model=ColorRead)
def get_color(
    speed: float = Query(...),
    opacity: float = Query(DEFAULT_OPACITY, ge=0, le=1),
):
    c = color_components(speed)
    return ColorRead(speed_mbps=speed, r=c.r, g=c.g, b=c.b, hex=c.hex, rgba=c.rgba(opacity))


@router.get("/gradient", response_model=GradientRead)
def get_gradient(speed: float = Query(...)):
    g = gradient_for(speed)
    return GradientRead(inner=g.inner, middle=g.middle, outer=g.outer, hex=g.hex)


@router.get("/label", response_model=LabelRead)
def get_label(speed: float = Query(...)):
    return LabelRead(speed_mbps=speed, label=label_for(speed))


@router.get("/legend", response_model=list[LegendItem])
def get_legend(steps: int = Query(10, ge=1, le=100)):
    return gradient_legend(steps)


@router.post("/project", response_model=ProjectionRead)
def project_points(payload: ProjectRequest, default_surface: MapSurface = Depends(get_surface)):
    """Project arbitrary points; same contract as /sessions/{id}/project."""
    try:
        surf = surface_for(payload.surface) if payload.surface else default_surface
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    region = None
    if payload.region is not None:
        r = payload.region
        region = Region(r.center_lat, r.center_lng, r.lat_span_deg, r.lng_span_deg)

    points = []
    for idx, p in enumerate(payload.points):
        xy = surf.project(p.latitude, p.longitude, region, payload.width, payload.height)
        if xy is None:
            continue
        color = color_for(p.speed_mbps) if p.speed_mbps is not None else None
        points.append(ProjectedPoint(index=idx, x=xy.x, y=xy.y, color=color))

    radius = surf.radius_px(payload.radius_m, region, payload.width, payload.height)
    return ProjectionRead(surface=surf.name, renderable=radius is not None, radius_px=radius, points=points)
