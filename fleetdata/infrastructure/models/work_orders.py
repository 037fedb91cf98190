"""SQLAlchemy models for work orders and discrepancies."""

from sqlalchemy import (
    Column,
    Date,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from fleetdata.infrastructure.database import Base


class WorkOrderModel(Base):
    """Individual work order."""

    __tablename__ = "work_order"

    id = Column(Integer, primary_key=True, index=True)
    aircraft_id = Column(
        Integer, ForeignKey("aircraft.id", ondelete="CASCADE"), nullable=False, index=True
    )
    wo_number = Column(String(50), nullable=False, index=True)
    description = Column(Text, nullable=False)
    status = Column(String(30), nullable=False)
    date_in = Column(Date, nullable=False, index=True)
    date_out = Column(Date, nullable=True)
    due_date = Column(Date, nullable=True)
    cost = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)

    aircraft = relationship("AircraftModel", lazy="joined")


class WorkOrderSummaryModel(Base):
    """Monthly work order totals for one aircraft."""

    __tablename__ = "work_order_summary"
    __table_args__ = (
        UniqueConstraint("aircraft_id", "period", name="uq_work_order_summary_period"),
    )

    id = Column(Integer, primary_key=True, index=True)
    aircraft_id = Column(
        Integer, ForeignKey("aircraft.id", ondelete="CASCADE"), nullable=False, index=True
    )
    period = Column(String(7), nullable=False, index=True)
    work_order_count = Column(Integer, nullable=False, default=0)
    total_cost = Column(Float, nullable=True)
    currency = Column(String(3), nullable=False, default="USD")
    notes = Column(Text, nullable=True)
    updated_by = Column(String(100), nullable=True)

    aircraft = relationship("AircraftModel", lazy="joined")


class DiscrepancyModel(Base):
    """Defect recorded against an aircraft."""

    __tablename__ = "discrepancy"

    id = Column(Integer, primary_key=True, index=True)
    aircraft_id = Column(
        Integer, ForeignKey("aircraft.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date_detected = Column(Date, nullable=False, index=True)
    ata_chapter = Column(String(10), nullable=False)
    discrepancy_text = Column(Text, nullable=False)
    date_corrected = Column(Date, nullable=True)
    corrective_action = Column(Text, nullable=True)
    responsibility = Column(String(50), nullable=True)
    downtime_hours = Column(Float, nullable=True)

    aircraft = relationship("AircraftModel", lazy="joined")


__all__ = ["DiscrepancyModel", "WorkOrderModel", "WorkOrderSummaryModel"]
