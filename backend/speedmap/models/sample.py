from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from speedmap.db import Base


class Sample(Base):
    __tablename__ = "samples"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("tracking_sessions.id", ondelete="CASCADE"), nullable=False, index=True)

    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    speed_mbps = Column(Float, nullable=False)  # clamped >= 0 on insert
    recorded_at = Column(DateTime(timezone=True), nullable=False)

    session = relationship("TrackingSession", back_populates="samples")

    # Color/gradient/label are derived from speed_mbps on read
