from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from speedmap.db import get_db
from speedmap.models.app_settings import AppSettings
from speedmap.schemas.settings import AppSettingsRead, AppSettingsUpdate


router = APIRouter(prefix="/settings", tags=["settings"])

SETTINGS_ROW_ID = 1
POSITIVE_FIELDS = ("tracking_interval_ms", "distance_interval_m", "circle_radius_m")


@router.get("/", response_model=AppSettingsRead)
def get_settings(db: Session = Depends(get_db)):
    row = db.get(AppSettings, SETTINGS_ROW_ID)
    if not row:
        # Nothing saved yet
        return AppSettingsRead()
    return row


@router.put("/", response_model=AppSettingsRead)
def update_settings(payload: AppSettingsUpdate, db: Session = Depends(get_db)):
    update_data = payload.model_dump(exclude_unset=True)
    for key in POSITIVE_FIELDS:
        if key in update_data and (update_data[key] is None or update_data[key] <= 0):
            raise HTTPException(status_code=422, detail=f"{key} must be > 0")

    row = db.get(AppSettings, SETTINGS_ROW_ID)
    if not row:
        row = AppSettings(id=SETTINGS_ROW_ID, **AppSettingsRead().model_dump())
        db.add(row)
    for key, value in update_data.items():
        if value is not None:
            setattr(row, key, value)
    db.commit()
    db.refresh(row)
    return row
