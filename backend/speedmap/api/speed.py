from fastapi import APIRouter, Depends, HTTPException

from speedmap.api.deps import get_estimator
from speedmap.core.classify import label_for
from speedmap.core.colors import color_for
from speedmap.core.config import settings
from speedmap.schemas.speed import SpeedEstimateRead, SpeedEstimateRequest
from speedmap.services.speed_probe import ConnectionInfo, SpeedEstimator


router = APIRouter(prefix="/speed", tags=["speed"])


@router.post("/estimate", response_model=SpeedEstimateRead)
def estimate_speed(payload: SpeedEstimateRequest, estimator: SpeedEstimator = Depends(get_estimator)):
    """Rough Mbps for the caller's connection.

    With `probe=true` the server also times a request to one of the probe
    endpoints (three with `multi=true`) and blends that in.
    """
    if payload.probe and not settings.enable_speed_test:
        raise HTTPException(status_code=400, detail="Speed test is disabled")

    info = ConnectionInfo(
        type=payload.type,
        is_connected=payload.is_connected,
        wifi_strength=payload.wifi_strength,
        cellular_generation=payload.cellular_generation,
    )
    result = estimator.measure(info, probe=payload.probe, multi=payload.multi)
    speed = result["speed_mbps"]
    return SpeedEstimateRead(
        speed_mbps=speed,
        estimated_mbps=result["estimated_mbps"],
        probed_mbps=result["probed_mbps"],
        label=label_for(speed),
        color=color_for(speed),
    )
