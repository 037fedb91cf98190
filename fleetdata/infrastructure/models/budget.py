"""SQLAlchemy models for budget plans and actual spend."""

from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text, UniqueConstraint

from fleetdata.infrastructure.database import Base


class BudgetPlanModel(Base):
    """Planned amount for a clause, fiscal year and aircraft group."""

    __tablename__ = "budget_plan"
    __table_args__ = (
        UniqueConstraint(
            "fiscal_year", "clause_id", "aircraft_group", name="uq_budget_plan_clause"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    fiscal_year = Column(Integer, nullable=False, index=True)
    clause_id = Column(Integer, nullable=False)
    clause_description = Column(String(255), nullable=False)
    aircraft_group = Column(String(100), nullable=False)
    planned_amount = Column(Float, nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    updated_by = Column(String(100), nullable=True)


class ActualSpendModel(Base):
    """Amount booked against a budget clause."""

    __tablename__ = "actual_spend"

    id = Column(Integer, primary_key=True, index=True)
    fiscal_year = Column(Integer, nullable=False, index=True)
    clause_id = Column(Integer, nullable=False)
    period = Column(String(7), nullable=False, index=True)
    amount = Column(Float, nullable=False)
    aircraft_group = Column(String(100), nullable=True)
    aircraft_id = Column(
        Integer, ForeignKey("aircraft.id", ondelete="SET NULL"), nullable=True
    )
    currency = Column(String(3), nullable=False, default="USD")
    vendor = Column(String(150), nullable=True)
    notes = Column(Text, nullable=True)


__all__ = ["ActualSpendModel", "BudgetPlanModel"]
