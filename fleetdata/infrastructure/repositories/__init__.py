"""Repository implementations for infrastructure layer."""

from .aircraft_repository import AircraftRepository
from .budget_repositories import ActualSpendRepository, BudgetPlanRepository
from .import_log_repository import ImportLogRepository
from .operation_repositories import (
    AOGEventRepository,
    DailyCounterRepository,
    DailyStatusRepository,
    MaintenanceTaskRepository,
)
from .vacation_plan_repository import VacationPlanRepository
from .work_order_repositories import (
    DiscrepancyRepository,
    WorkOrderRepository,
    WorkOrderSummaryRepository,
)

__all__ = [
    "AOGEventRepository",
    "ActualSpendRepository",
    "AircraftRepository",
    "BudgetPlanRepository",
    "DailyCounterRepository",
    "DailyStatusRepository",
    "DiscrepancyRepository",
    "ImportLogRepository",
    "MaintenanceTaskRepository",
    "VacationPlanRepository",
    "WorkOrderRepository",
    "WorkOrderSummaryRepository",
]
