"""Domain entities for work orders and reported discrepancies."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass
class WorkOrder:
    """Individual work order raised against an aircraft."""

    id: int | None
    aircraft_id: int
    wo_number: str
    description: str
    status: str
    date_in: date
    date_out: date | None
    due_date: date | None
    cost: float | None
    notes: str | None = None

    @property
    def turnaround_days(self) -> int | None:
        if self.date_out is None:
            return None
        return (self.date_out - self.date_in).days

    @property
    def is_overdue(self) -> bool:
        return (
            self.due_date is not None
            and self.date_out is None
            and self.due_date < date.today()
        )


@dataclass
class WorkOrderSummary:
    """Monthly work order count and cost for one aircraft."""

    id: int | None
    aircraft_id: int
    period: str
    work_order_count: int
    total_cost: float | None
    currency: str = "USD"
    notes: str | None = None
    updated_by: str | None = None


@dataclass
class Discrepancy:
    """Defect recorded against an ATA chapter."""

    id: int | None
    aircraft_id: int
    date_detected: date
    ata_chapter: str
    discrepancy_text: str
    date_corrected: date | None
    corrective_action: str | None
    responsibility: str | None
    downtime_hours: float | None = None


__all__ = ["Discrepancy", "WorkOrder", "WorkOrderSummary"]
