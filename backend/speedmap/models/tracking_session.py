from sqlalchemy import Column, Integer, String, DateTime, Float, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from speedmap.db import Base

class TrackingSession(Base):
    __tablename__ = "tracking_sessions"

    id = Column(Integer, primary_key=True, index=True)

    title = Column(String, nullable=False)
    notes = Column(String, nullable=True)

    # Owner (mock auth); anonymous sessions are allowed
    user_id = Column(String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    # Where samples came from
    source = Column(
        String(20),
        nullable=False,
        server_default="device",  # device, simulated, imported
    )

    # Simulator state, only set once a simulated walk has started
    sim_heading_rad = Column(Float, nullable=True)
    sim_distance_m = Column(Float, nullable=False, server_default="0")

    # Timestamps
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    samples = relationship(
        "Sample",
        back_populates="session",
        order_by="Sample.id",
        cascade="all, delete-orphan",
    )

    # Distance and duration are NOT stored, they're computed from samples
