from typing import Optional

from pydantic import BaseModel, Field

from speedmap.core.classify import SpeedQuality


class SpeedEstimateRequest(BaseModel):
    type: str = "unknown"  # wifi, cellular, ethernet, bluetooth, none, unknown
    is_connected: bool = True
    wifi_strength: Optional[int] = Field(None, ge=0, le=100)
    cellular_generation: Optional[str] = None
    probe: bool = False
    multi: bool = False


class SpeedEstimateRead(BaseModel):
    speed_mbps: float
    estimated_mbps: float
    probed_mbps: Optional[float] = None
    label: SpeedQuality
    color: str
