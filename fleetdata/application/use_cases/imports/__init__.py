"""Spreadsheet import: parsing, validation, preview and confirmation."""

from .parser import parse_workbook
from .rules import ROW_RULES, RuleContext, resolve_aircraft
from .service import (
    ImportConfirmation,
    ImportPreview,
    confirm_import,
    get_import_log,
    get_import_log_file,
    list_import_logs,
    preview_import,
)
from .writers import ROW_WRITERS

__all__ = [
    "ImportConfirmation",
    "ImportPreview",
    "ROW_RULES",
    "ROW_WRITERS",
    "RuleContext",
    "confirm_import",
    "get_import_log",
    "get_import_log_file",
    "list_import_logs",
    "parse_workbook",
    "preview_import",
    "resolve_aircraft",
]
