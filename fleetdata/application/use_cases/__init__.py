"""Aggregate application use cases."""

from .exports import ExportDomain, ExportFilters, export_data, list_export_domains
from .imports import confirm_import, get_import_log, list_import_logs, preview_import
from .templates import generate_template_workbook, get_template, list_import_domains
from .weekly_schedules import (
    export_weekly_schedule,
    export_weekly_schedules_for_year,
    import_weekly_schedules,
)

__all__ = [
    "ExportDomain",
    "ExportFilters",
    "confirm_import",
    "export_data",
    "export_weekly_schedule",
    "export_weekly_schedules_for_year",
    "generate_template_workbook",
    "get_import_log",
    "get_template",
    "import_weekly_schedules",
    "list_export_domains",
    "list_import_domains",
    "list_import_logs",
    "preview_import",
]
