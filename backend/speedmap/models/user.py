from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from speedmap.db import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True)  # e.g. "user-3f9c2a1b7d40"
    email = Column(String, nullable=False, unique=True, index=True)  # stored lowercase
    name = Column(String, nullable=False)
    # Mock auth only: sha256 hex, no salt
    password_hash = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
