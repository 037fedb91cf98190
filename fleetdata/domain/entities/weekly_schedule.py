"""Domain entities for the 48-week team schedule (vacation plan).

A year is modelled as twelve months of four weeks each. Every employee carries
exactly one value per week and the per-week overlap flags are always derived
from the employees, never stored on their own.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Iterable, Sequence

WEEKS_PER_MONTH = 4
MONTH_LABELS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)
WEEKS_PER_YEAR = len(MONTH_LABELS) * WEEKS_PER_MONTH

OVERLAP_OK = "Ok"
OVERLAP_CHECK = "Check"


class ScheduleTeam(str, Enum):
    """Teams that own a schedule; values double as sheet names."""

    ENGINEERING = "Engineering"
    TPL = "TPL"


def week_headers() -> tuple[str, ...]:
    """Return ``Jan W1`` .. ``Dec W4`` in week order."""

    return tuple(
        f"{month} W{week}"
        for month in MONTH_LABELS
        for week in range(1, WEEKS_PER_MONTH + 1)
    )


@dataclass(frozen=True)
class ScheduleEmployee:
    """One schedule row: a person and their value for each week."""

    name: str
    cells: tuple[float, ...] = field(default=(0,) * WEEKS_PER_YEAR)

    def __post_init__(self) -> None:
        if len(self.cells) != WEEKS_PER_YEAR:
            msg = f"Employee {self.name} must have exactly {WEEKS_PER_YEAR} cells"
            raise ValueError(msg)

    @property
    def total(self) -> float:
        return sum(self.cells)

    def with_cell(self, week_index: int, value: float) -> "ScheduleEmployee":
        cells = list(self.cells)
        cells[week_index] = value
        return replace(self, cells=tuple(cells))


def compute_overlaps(employees: Iterable[ScheduleEmployee]) -> tuple[str, ...]:
    """Flag every week where more than one employee has a positive value."""

    counts = [0] * WEEKS_PER_YEAR
    for employee in employees:
        for index, value in enumerate(employee.cells):
            if value > 0:
                counts[index] += 1
    return tuple(OVERLAP_CHECK if count > 1 else OVERLAP_OK for count in counts)


@dataclass(frozen=True)
class WeeklySchedulePlan:
    """Schedule of one team for one year."""

    id: int | None
    year: int
    team: str
    employees: tuple[ScheduleEmployee, ...] = ()
    updated_by: str | None = None
    updated_at: datetime | None = None

    @property
    def overlaps(self) -> tuple[str, ...]:
        return compute_overlaps(self.employees)

    def find_employee(self, name: str) -> ScheduleEmployee | None:
        for employee in self.employees:
            if employee.name == name:
                return employee
        return None

    def with_employees(
        self, employees: Sequence[ScheduleEmployee]
    ) -> "WeeklySchedulePlan":
        return replace(self, employees=tuple(employees))


__all__ = [
    "MONTH_LABELS",
    "OVERLAP_CHECK",
    "OVERLAP_OK",
    "ScheduleEmployee",
    "ScheduleTeam",
    "WEEKS_PER_MONTH",
    "WEEKS_PER_YEAR",
    "WeeklySchedulePlan",
    "compute_overlaps",
    "week_headers",
]
