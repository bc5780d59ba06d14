from datetime import date, datetime
from typing import Optional
from enum import Enum

from pydantic import BaseModel, ConfigDict


class SessionSource(str, Enum):
    device = "device"
    simulated = "simulated"
    imported = "imported"


class SessionBase(BaseModel):
    title: str
    notes: Optional[str] = None
    source: SessionSource = SessionSource.device


class SessionCreate(SessionBase):
    """Schema for starting a new tracking session."""
    pass


class SessionUpdate(BaseModel):
    """Schema for updating an existing session (all fields optional)."""

    title: Optional[str] = None
    notes: Optional[str] = None

    # Be lenient with extra fields from clients
    model_config = ConfigDict(extra="ignore")


class SessionRead(SessionBase):
    """Schema returned to the frontend when reading a session."""

    id: int
    user_id: Optional[str] = None
    created_at: datetime
    sample_count: int
    distance_m: float   # haversine along the recorded path
    duration: str       # "HH:MM:SS" between first and last sample
    average_speed: float
    # first sample in the configured display timezone
    start_date: Optional[date] = None
    start_time: Optional[str] = None  # "HH:MM"

    model_config = ConfigDict(from_attributes=True)


class SimulationRead(BaseModel):
    session_id: int
    added: int
    total_distance_m: float
    heading_deg: float
    last_speed_mbps: Optional[float] = None
    sample_count: int
