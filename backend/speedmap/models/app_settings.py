from sqlalchemy import Column, Integer, Boolean
from speedmap.db import Base


class AppSettings(Base):
    __tablename__ = "app_settings"

    # Single row, id = 1
    id = Column(Integer, primary_key=True)

    tracking_interval_ms = Column(Integer, nullable=False, default=3000)
    distance_interval_m = Column(Integer, nullable=False, default=5)
    enable_speed_test = Column(Boolean, nullable=False, default=False)
    show_path = Column(Boolean, nullable=False, default=True)
    circle_radius_m = Column(Integer, nullable=False, default=20)
    auto_save = Column(Boolean, nullable=False, default=True)
