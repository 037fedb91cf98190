"""ORM models used by the application infrastructure."""

from .aircraft import AircraftModel
from .budget import ActualSpendModel, BudgetPlanModel
from .import_log import ImportLogModel
from .operations import (
    AOGEventModel,
    DailyCounterModel,
    DailyStatusModel,
    MaintenanceTaskModel,
)
from .weekly_schedule import VacationPlanModel
from .work_orders import DiscrepancyModel, WorkOrderModel, WorkOrderSummaryModel

__all__ = [
    "AOGEventModel",
    "ActualSpendModel",
    "AircraftModel",
    "BudgetPlanModel",
    "DailyCounterModel",
    "DailyStatusModel",
    "DiscrepancyModel",
    "ImportLogModel",
    "MaintenanceTaskModel",
    "VacationPlanModel",
    "WorkOrderModel",
    "WorkOrderSummaryModel",
]
