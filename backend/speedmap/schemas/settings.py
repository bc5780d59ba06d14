from typing import Optional

from pydantic import BaseModel, ConfigDict


class AppSettingsRead(BaseModel):
    tracking_interval_ms: int = 3000
    distance_interval_m: int = 5
    enable_speed_test: bool = False
    show_path: bool = True
    circle_radius_m: int = 20
    auto_save: bool = True

    model_config = ConfigDict(from_attributes=True)


class AppSettingsUpdate(BaseModel):
    tracking_interval_ms: Optional[int] = None
    distance_interval_m: Optional[int] = None
    enable_speed_test: Optional[bool] = None
    show_path: Optional[bool] = None
    circle_radius_m: Optional[int] = None
    auto_save: Optional[bool] = None

    model_config = ConfigDict(extra="ignore")
