"""SQLAlchemy model for fleet master data."""

from sqlalchemy import Column, Date, DateTime, Integer, String

from fleetdata.infrastructure.database import Base
from fleetdata.utils import now_in_app_naive_datetime


class AircraftModel(Base):
    """Database representation of an aircraft."""

    __tablename__ = "aircraft"

    id = Column(Integer, primary_key=True, index=True)
    registration = Column(String(20), nullable=False, unique=True, index=True)
    fleet_group = Column(String(100), nullable=False, index=True)
    aircraft_type = Column(String(100), nullable=True)
    msn = Column(String(50), nullable=True)
    owner = Column(String(150), nullable=False)
    manufacture_date = Column(Date, nullable=True)
    certification_date = Column(Date, nullable=True)
    in_service_date = Column(Date, nullable=True)
    engines_count = Column(Integer, nullable=False, default=2)
    status = Column(String(20), nullable=False, default="active")
    created_by = Column(String(100), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["AircraftModel"]
