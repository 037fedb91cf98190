"""SQLAlchemy model for team vacation plans."""

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint

from fleetdata.infrastructure.database import Base
from fleetdata.utils import now_in_app_naive_datetime

from ._types import json_type


class VacationPlanModel(Base):
    """Weekly schedule of one team for one year.

    Only employees are stored; overlap flags are derived when the plan is read.
    """

    __tablename__ = "vacation_plan"
    __table_args__ = (UniqueConstraint("year", "team", name="uq_vacation_plan_team"),)

    id = Column(Integer, primary_key=True, index=True)
    year = Column(Integer, nullable=False, index=True)
    team = Column(String(30), nullable=False)
    employees = Column(json_type, nullable=False, default=list)
    updated_by = Column(String(100), nullable=True)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )


__all__ = ["VacationPlanModel"]
