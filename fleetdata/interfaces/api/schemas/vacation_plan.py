"""Schemas for the vacation plan endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from .imports import ImportRowErrorRead


class ScheduleEmployeeRead(BaseModel):
    name: str
    cells: list[float]
    total: float


class VacationPlanRead(BaseModel):
    id: int
    year: int
    team: str
    employees: list[ScheduleEmployeeRead]
    overlaps: list[str]
    updated_by: str | None
    updated_at: datetime | None


class ScheduleCellUpdate(BaseModel):
    employee_name: str = Field(min_length=1)
    week_index: int
    value: float


class ScheduleEmployeeCreate(BaseModel):
    name: str = Field(min_length=1)


class ScheduleImportRead(BaseModel):
    import_log_id: int
    success_count: int
    error_count: int
    errors: list[ImportRowErrorRead]
    plans: list[VacationPlanRead]


__all__ = [
    "ScheduleCellUpdate",
    "ScheduleEmployeeCreate",
    "ScheduleEmployeeRead",
    "ScheduleImportRead",
    "VacationPlanRead",
]
