from .exports import ExportTypeRead
from .imports import (
    ImportConfirmRead,
    ImportConfirmRequest,
    ImportLogRead,
    ImportPreviewRead,
    ImportRowErrorRead,
    ImportTypeRead,
    ParsedRowRead,
)
from .vacation_plan import (
    ScheduleCellUpdate,
    ScheduleEmployeeCreate,
    ScheduleEmployeeRead,
    ScheduleImportRead,
    VacationPlanRead,
)

__all__ = [
    "ExportTypeRead",
    "ImportConfirmRead",
    "ImportConfirmRequest",
    "ImportLogRead",
    "ImportPreviewRead",
    "ImportRowErrorRead",
    "ImportTypeRead",
    "ParsedRowRead",
    "ScheduleCellUpdate",
    "ScheduleEmployeeCreate",
    "ScheduleEmployeeRead",
    "ScheduleImportRead",
    "VacationPlanRead",
]
