from typing import Optional

from pydantic import BaseModel, Field

from speedmap.core.classify import SpeedQuality


class SampleCreate(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    # Negative values are clamped to 0, never rejected
    speed_mbps: float
    # ISO-8601; server time when omitted
    timestamp: Optional[str] = None


class GradientRead(BaseModel):
    inner: str
    middle: str
    outer: str
    hex: str


class SampleRead(BaseModel):
    id: int
    latitude: float
    longitude: float
    speed_mbps: float
    timestamp: str
    color: str
    gradient: GradientRead
    label: SpeedQuality
