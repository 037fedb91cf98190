"""Domain entities exposed by the application."""

from .aircraft import AIRCRAFT_STATUSES, Aircraft
from .budget import ActualSpend, BudgetPlan
from .import_log import ImportLog, ImportRowError
from .import_session import ImportSession
from .operations import (
    AOG_CATEGORIES,
    AOGEvent,
    DailyCounter,
    DailyStatus,
    MaintenanceTask,
)
from .parsing import ParsedRow, ParseResult
from .template import (
    COLUMN_TYPE_DATE,
    COLUMN_TYPE_ENUM,
    COLUMN_TYPE_NUMBER,
    COLUMN_TYPE_STRING,
    ImportDomain,
    Template,
    TemplateColumn,
)
from .weekly_schedule import (
    OVERLAP_CHECK,
    OVERLAP_OK,
    WEEKS_PER_YEAR,
    ScheduleEmployee,
    ScheduleTeam,
    WeeklySchedulePlan,
    compute_overlaps,
    week_headers,
)
from .work_orders import Discrepancy, WorkOrder, WorkOrderSummary

__all__ = [
    "AIRCRAFT_STATUSES",
    "AOG_CATEGORIES",
    "AOGEvent",
    "ActualSpend",
    "Aircraft",
    "BudgetPlan",
    "COLUMN_TYPE_DATE",
    "COLUMN_TYPE_ENUM",
    "COLUMN_TYPE_NUMBER",
    "COLUMN_TYPE_STRING",
    "DailyCounter",
    "DailyStatus",
    "Discrepancy",
    "ImportDomain",
    "ImportLog",
    "ImportRowError",
    "ImportSession",
    "MaintenanceTask",
    "OVERLAP_CHECK",
    "OVERLAP_OK",
    "ParsedRow",
    "ParseResult",
    "ScheduleEmployee",
    "ScheduleTeam",
    "Template",
    "TemplateColumn",
    "WEEKS_PER_YEAR",
    "WeeklySchedulePlan",
    "WorkOrder",
    "WorkOrderSummary",
    "compute_overlaps",
    "week_headers",
]
