"""SQLAlchemy models for daily operations of the fleet."""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from fleetdata.infrastructure.database import Base


class DailyCounterModel(Base):
    """Cumulative counters recorded for one aircraft and day."""

    __tablename__ = "daily_counter"

    id = Column(Integer, primary_key=True, index=True)
    aircraft_id = Column(
        Integer, ForeignKey("aircraft.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date = Column(Date, nullable=False, index=True)
    airframe_hours_ttsn = Column(Float, nullable=False)
    airframe_cycles_tcsn = Column(Float, nullable=False)
    engine1_hours = Column(Float, nullable=False)
    engine1_cycles = Column(Float, nullable=False)
    engine2_hours = Column(Float, nullable=False)
    engine2_cycles = Column(Float, nullable=False)
    engine3_hours = Column(Float, nullable=True)
    engine3_cycles = Column(Float, nullable=True)
    engine4_hours = Column(Float, nullable=True)
    engine4_cycles = Column(Float, nullable=True)
    apu_hours = Column(Float, nullable=False)
    apu_cycles = Column(Float, nullable=True)
    last_flight_date = Column(Date, nullable=True)
    updated_by = Column(String(100), nullable=True)

    aircraft = relationship("AircraftModel", lazy="joined")


class DailyStatusModel(Base):
    """Availability hours of one aircraft for one day."""

    __tablename__ = "daily_status"
    __table_args__ = (UniqueConstraint("aircraft_id", "date", name="uq_daily_status_day"),)

    id = Column(Integer, primary_key=True, index=True)
    aircraft_id = Column(
        Integer, ForeignKey("aircraft.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date = Column(Date, nullable=False, index=True)
    pos_hours = Column(Float, nullable=False)
    fmc_hours = Column(Float, nullable=False)
    nmcm_s_hours = Column(Float, nullable=False, default=0)
    nmcm_u_hours = Column(Float, nullable=False, default=0)
    nmcs_hours = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)
    updated_by = Column(String(100), nullable=True)

    aircraft = relationship("AircraftModel", lazy="joined")


class AOGEventModel(Base):
    """Period during which an aircraft was grounded or in maintenance."""

    __tablename__ = "aog_event"

    id = Column(Integer, primary_key=True, index=True)
    aircraft_id = Column(
        Integer, ForeignKey("aircraft.id", ondelete="CASCADE"), nullable=False, index=True
    )
    detected_at = Column(DateTime, nullable=False, index=True)
    cleared_at = Column(DateTime, nullable=True)
    category = Column(String(20), nullable=False)
    reason_code = Column(Text, nullable=False)
    location = Column(String(4), nullable=True)
    responsible_party = Column(String(50), nullable=False)
    action_taken = Column(Text, nullable=False)
    manpower_count = Column(Integer, nullable=False, default=1)
    man_hours = Column(Float, nullable=False, default=0)
    total_downtime_hours = Column(Float, nullable=True)
    is_imported = Column(Boolean, nullable=False, default=False)
    updated_by = Column(String(100), nullable=True)

    aircraft = relationship("AircraftModel", lazy="joined")


class MaintenanceTaskModel(Base):
    """Maintenance work performed during a shift."""

    __tablename__ = "maintenance_task"

    id = Column(Integer, primary_key=True, index=True)
    aircraft_id = Column(
        Integer, ForeignKey("aircraft.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date = Column(Date, nullable=False, index=True)
    shift = Column(String(20), nullable=False)
    task_type = Column(String(100), nullable=False)
    task_description = Column(Text, nullable=False)
    manpower_count = Column(Integer, nullable=False)
    man_hours = Column(Float, nullable=False)
    cost = Column(Float, nullable=True)
    work_order_ref = Column(String(50), nullable=True)
    updated_by = Column(String(100), nullable=True)

    aircraft = relationship("AircraftModel", lazy="joined")


__all__ = [
    "AOGEventModel",
    "DailyCounterModel",
    "DailyStatusModel",
    "MaintenanceTaskModel",
]
