"""Domain entities for planned and actual spend."""

from dataclasses import dataclass


@dataclass
class BudgetPlan:
    """Planned amount of a budget clause for an aircraft group."""

    id: int | None
    fiscal_year: int
    clause_id: int
    clause_description: str
    aircraft_group: str
    planned_amount: float
    currency: str = "USD"
    updated_by: str | None = None


@dataclass
class ActualSpend:
    """Amount booked against a clause in a given period."""

    id: int | None
    fiscal_year: int
    clause_id: int
    period: str
    amount: float
    aircraft_group: str | None = None
    aircraft_id: int | None = None
    currency: str = "USD"
    vendor: str | None = None
    notes: str | None = None


__all__ = ["ActualSpend", "BudgetPlan"]
