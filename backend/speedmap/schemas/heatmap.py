from typing import Optional

from pydantic import BaseModel, Field

from speedmap.core.classify import SpeedQuality


class ColorRead(BaseModel):
    speed_mbps: float
    r: int
    g: int
    b: int
    hex: str
    rgba: str


class LabelRead(BaseModel):
    speed_mbps: float
    label: SpeedQuality


class LegendItem(BaseModel):
    speed: float
    color: str
    label: str


class StatsRead(BaseModel):
    count: int
    average: float
    min: float
    max: float
    excellent: int
    good: int
    fair: int
    poor: int
    very_poor: int


class HistogramBarRead(BaseModel):
    count: int
    height: float
    speed: float
    color: str


class RegionIn(BaseModel):
    center_lat: float
    center_lng: float
    lat_span_deg: float = Field(..., gt=0)
    lng_span_deg: float = Field(..., gt=0)


class PointIn(BaseModel):
    latitude: float
    longitude: float
    speed_mbps: Optional[float] = None


class ProjectRequest(BaseModel):
    points: list[PointIn]
    # Region/viewport may be unknown before the first layout
    region: Optional[RegionIn] = None
    width: Optional[float] = None
    height: Optional[float] = None
    surface: Optional[str] = None  # defaults to the configured surface
    radius_m: float = 20


class ProjectedPoint(BaseModel):
    index: int
    x: float
    y: float
    color: Optional[str] = None


class ProjectionRead(BaseModel):
    surface: str
    renderable: bool
    radius_px: Optional[float] = None
    points: list[ProjectedPoint]
