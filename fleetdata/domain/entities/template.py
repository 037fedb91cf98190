"""Domain entities describing the column schema of an import domain."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

COLUMN_TYPE_STRING = "string"
COLUMN_TYPE_NUMBER = "number"
COLUMN_TYPE_DATE = "date"
COLUMN_TYPE_ENUM = "enum"

COLUMN_TYPES = (
    COLUMN_TYPE_STRING,
    COLUMN_TYPE_NUMBER,
    COLUMN_TYPE_DATE,
    COLUMN_TYPE_ENUM,
)


class ImportDomain(str, Enum):
    """Categories of tabular data accepted by the importer."""

    UTILIZATION = "utilization"
    MAINTENANCE_TASKS = "maintenance_tasks"
    AOG_EVENTS = "aog_events"
    BUDGET = "budget"
    AIRCRAFT = "aircraft"
    DAILY_STATUS = "daily_status"
    WORK_ORDER_SUMMARY = "work_order_summary"
    VACATION_PLAN = "vacation_plan"


@dataclass(frozen=True)
class TemplateColumn:
    """Immutable descriptor of one spreadsheet column."""

    header: str
    key: str
    type: str
    required: bool
    description: str | None = None
    enum_values: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.type not in COLUMN_TYPES:
            msg = f"Unsupported column type: {self.type}"
            raise ValueError(msg)
        if self.type == COLUMN_TYPE_ENUM and not self.enum_values:
            msg = f"Enum column {self.header} requires allowed values"
            raise ValueError(msg)


@dataclass(frozen=True)
class Template:
    """Ordered column schema plus example rows for a domain."""

    domain: ImportDomain
    name: str
    columns: tuple[TemplateColumn, ...]
    example_rows: tuple[Mapping[str, Any], ...] = field(default=())

    @property
    def headers(self) -> tuple[str, ...]:
        return tuple(column.header for column in self.columns)

    @property
    def required_columns(self) -> tuple[TemplateColumn, ...]:
        return tuple(column for column in self.columns if column.required)


__all__ = [
    "COLUMN_TYPE_DATE",
    "COLUMN_TYPE_ENUM",
    "COLUMN_TYPE_NUMBER",
    "COLUMN_TYPE_STRING",
    "COLUMN_TYPES",
    "ImportDomain",
    "Template",
    "TemplateColumn",
]
