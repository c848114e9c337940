"""SQLAlchemy tables for users and assets."""
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import JSON, Column, DateTime, Float, Index, String

from app.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRecord(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(128), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False, default="user")
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)


class AssetRecord(Base):
    """
    An asset stored as a camelCase JSON document.

    Lookup columns are copied out of the document so they can be indexed.
    """

    __tablename__ = "assets"
    __table_args__ = (Index("ix_assets_location", "latitude", "longitude"),)

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    external_id = Column(String(255), nullable=False, unique=True, index=True)
    display_name = Column(String(512), nullable=False, default="", index=True)
    formatted_address = Column(String(1024), nullable=False, default="", index=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    primary_type = Column(String(100), nullable=True)
    category = Column(String(50), nullable=True)
    document = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
