"""Static catalog of the column schema expected for every import domain."""

from __future__ import annotations

import re

from fleetdata.domain.entities import (
    AIRCRAFT_STATUSES,
    COLUMN_TYPE_DATE,
    COLUMN_TYPE_ENUM,
    COLUMN_TYPE_NUMBER,
    COLUMN_TYPE_STRING,
    ImportDomain,
    Template,
    TemplateColumn,
    week_headers,
)
from fleetdata.infrastructure.template_files import create_template_workbook

SHIFTS = ("Morning", "Evening", "Night", "Other")
AOG_CATEGORY_LABELS = ("AOG", "S-MX", "U-MX", "MRO", "CLEANING")

_DATE_HINT = "YYYY-MM-DD"


def _string(header: str, key: str, required: bool = True, description: str | None = None) -> TemplateColumn:
    return TemplateColumn(header, key, COLUMN_TYPE_STRING, required, description)


def _number(header: str, key: str, required: bool = True, description: str | None = None) -> TemplateColumn:
    return TemplateColumn(header, key, COLUMN_TYPE_NUMBER, required, description)


def _date(header: str, key: str, required: bool = True, description: str | None = _DATE_HINT) -> TemplateColumn:
    return TemplateColumn(header, key, COLUMN_TYPE_DATE, required, description)


def _enum(
    header: str,
    key: str,
    values: tuple[str, ...],
    required: bool = True,
    description: str | None = None,
) -> TemplateColumn:
    return TemplateColumn(header, key, COLUMN_TYPE_ENUM, required, description, values)


def _engine_columns() -> list[TemplateColumn]:
    columns: list[TemplateColumn] = []
    for engine in range(1, 5):
        required = engine <= 2
        columns.append(_number(f"Engine {engine} Hours", f"engine{engine}Hours", required))
        columns.append(_number(f"Engine {engine} Cycles", f"engine{engine}Cycles", required))
    return columns


_TEMPLATES: dict[ImportDomain, Template] = {
    ImportDomain.UTILIZATION: Template(
        domain=ImportDomain.UTILIZATION,
        name="Daily Utilization Counters",
        columns=(
            _string("Aircraft Registration", "aircraftRegistration", description="e.g., HZ-A42"),
            _date("Date", "date"),
            _number("Airframe Hours TTSN", "airframeHoursTtsn"),
            _number("Airframe Cycles TCSN", "airframeCyclesTcsn"),
            *_engine_columns(),
            _number("APU Hours", "apuHours"),
            _number("APU Cycles", "apuCycles", required=False),
            _date("Last Flight Date", "lastFlightDate", required=False),
        ),
        example_rows=(
            {
                "aircraftRegistration": "HZ-A42",
                "date": "2024-01-15",
                "airframeHoursTtsn": 12500.5,
                "airframeCyclesTcsn": 4200,
                "engine1Hours": 8500.2,
                "engine1Cycles": 3100,
                "engine2Hours": 8450.8,
                "engine2Cycles": 3050,
                "apuHours": 6200,
            },
        ),
    ),
    ImportDomain.MAINTENANCE_TASKS: Template(
        domain=ImportDomain.MAINTENANCE_TASKS,
        name="Maintenance Tasks",
        columns=(
            _string("Aircraft Registration", "aircraftRegistration"),
            _date("Date", "date"),
            _enum("Shift", "shift", SHIFTS),
            _string("Task Type", "taskType"),
            _string("Task Description", "taskDescription"),
            _number("Manpower Count", "manpowerCount"),
            _number("Man Hours", "manHours"),
            _number("Cost", "cost", required=False),
            _string("Work Order Reference", "workOrderRef", required=False),
        ),
        example_rows=(
            {
                "aircraftRegistration": "HZ-A42",
                "date": "2024-01-15",
                "shift": "Morning",
                "taskType": "Scheduled Maintenance",
                "taskDescription": "A-Check inspection",
                "manpowerCount": 3,
                "manHours": 24,
                "cost": 5000,
            },
        ),
    ),
    ImportDomain.AOG_EVENTS: Template(
        domain=ImportDomain.AOG_EVENTS,
        name="AOG Events (Simplified)",
        columns=(
            _string("Aircraft", "aircraft", description="Aircraft registration (e.g., HZ-A42) or name"),
            _string("Defect Description", "defectDescription", description="What went wrong"),
            _string("Location", "location", required=False, description="ICAO airport code (e.g., OERK, LFSB)"),
            _enum("Category", "category", AOG_CATEGORY_LABELS, description="Event category"),
            _date("Start Date", "startDate"),
            _string("Start Time", "startTime", description="HH:MM format (24-hour)"),
            _date("Finish Date", "finishDate", required=False, description="YYYY-MM-DD (empty = still active)"),
            _string("Finish Time", "finishTime", required=False, description="HH:MM format (24-hour)"),
        ),
        example_rows=(
            {
                "aircraft": "HZ-A42",
                "defectDescription": "Engine hydraulic leak",
                "location": "OERK",
                "category": "AOG",
                "startDate": "2024-01-15",
                "startTime": "08:30",
                "finishDate": "2024-01-17",
                "finishTime": "14:45",
            },
            {
                "aircraft": "HZ-A10",
                "defectDescription": "Engine replacement",
                "location": "OERK",
                "category": "U-MX",
                "startDate": "2025-01-03",
                "startTime": "07:00",
            },
        ),
    ),
    ImportDomain.BUDGET: Template(
        domain=ImportDomain.BUDGET,
        name="Budget Plan",
        columns=(
            _number("Fiscal Year", "fiscalYear"),
            _number("Clause ID", "clauseId"),
            _string("Clause Description", "clauseDescription"),
            _string("Aircraft Group", "aircraftGroup"),
            _number("Planned Amount", "plannedAmount"),
            _string("Currency", "currency", required=False, description="Default: USD"),
        ),
        example_rows=(
            {
                "fiscalYear": 2024,
                "clauseId": 1,
                "clauseDescription": "Spare Parts",
                "aircraftGroup": "A330",
                "plannedAmount": 500000,
                "currency": "USD",
            },
        ),
    ),
    ImportDomain.AIRCRAFT: Template(
        domain=ImportDomain.AIRCRAFT,
        name="Aircraft Master",
        columns=(
            _string("Registration", "registration", description="e.g., HZ-A42"),
            _string("Fleet Group", "fleetGroup", description="e.g., AIRBUS A320 FAMILY, GULFSTREAM"),
            _string("Aircraft Type", "aircraftType", required=False, description="e.g., A340-642 ACJ, G650ER"),
            _string("MSN", "msn", required=False, description="Manufacturer Serial Number"),
            _string("Owner", "owner"),
            _date("Manufacture Date", "manufactureDate", required=False),
            _date("Certification Date", "certificationDate", required=False),
            _date("In Service Date", "inServiceDate", required=False),
            _number("Engines Count", "enginesCount", description="1 to 4"),
            _enum("Status", "status", AIRCRAFT_STATUSES, description="Default: active"),
        ),
        example_rows=(
            {
                "registration": "HZ-A42",
                "fleetGroup": "AIRBUS 340",
                "aircraftType": "A340-642 ACJ",
                "msn": "924",
                "owner": "Alpha Star Aviation",
                "manufactureDate": "2008-08-04",
                "inServiceDate": "2012-05-25",
                "enginesCount": 4,
                "status": "active",
            },
        ),
    ),
    ImportDomain.DAILY_STATUS: Template(
        domain=ImportDomain.DAILY_STATUS,
        name="Daily Status",
        columns=(
            _string("Aircraft Registration", "aircraftRegistration", description="e.g., HZ-A42"),
            _date("Date", "date"),
            _number("POS Hours", "posHours", description="Possessed hours (0-24, typically 24)"),
            _number("NMCM-S Hours", "nmcmSHours", description="Scheduled maintenance downtime (0-24)"),
            _number("NMCM-U Hours", "nmcmUHours", description="Unscheduled maintenance downtime (0-24)"),
            _number("NMCS Hours", "nmcsHours", required=False, description="Supply-related downtime (0-24)"),
            _string("Notes", "notes", required=False),
        ),
        example_rows=(
            {
                "aircraftRegistration": "HZ-A42",
                "date": "2024-01-15",
                "posHours": 24,
                "nmcmSHours": 2,
                "nmcmUHours": 0,
                "nmcsHours": 0,
                "notes": "Scheduled A-check",
            },
        ),
    ),
    ImportDomain.WORK_ORDER_SUMMARY: Template(
        domain=ImportDomain.WORK_ORDER_SUMMARY,
        name="Work Order Monthly Summary",
        columns=(
            _string("Aircraft Registration", "aircraftRegistration", description="e.g., HZ-A42"),
            _string("Period", "period", description="YYYY-MM format (e.g., 2024-01)"),
            _number("Work Order Count", "workOrderCount", description="Must be >= 0"),
            _number("Total Cost", "totalCost", required=False, description="Total cost in USD (must be >= 0)"),
            _string("Notes", "notes", required=False),
        ),
        example_rows=(
            {
                "aircraftRegistration": "HZ-A42",
                "period": "2024-01",
                "workOrderCount": 5,
                "totalCost": 15000,
                "notes": "Monthly scheduled maintenance",
            },
        ),
    ),
    ImportDomain.VACATION_PLAN: Template(
        domain=ImportDomain.VACATION_PLAN,
        name="Vacation Plan",
        columns=(
            _string("Employee", "employee", description="Employee name"),
            *(
                _number(header, f"week{index}", required=False, description="Days off in the week")
                for index, header in enumerate(week_headers())
            ),
        ),
        example_rows=(
            {"employee": "John Smith", "week0": 1, "week1": 0.5},
        ),
    ),
}


def list_import_domains() -> list[tuple[ImportDomain, str]]:
    """Return every import domain with its display name, in catalog order."""

    return [(domain, template.name) for domain, template in _TEMPLATES.items()]


def get_template(domain: ImportDomain | str) -> Template:
    """Return the template registered for ``domain``.

    Raises :class:`LookupError` for identifiers that are not import domains.
    """

    try:
        key = ImportDomain(domain)
    except ValueError as exc:
        msg = f"Unknown import type: {domain}"
        raise LookupError(msg) from exc
    return _TEMPLATES[key]


def template_filename(template: Template) -> str:
    slug = re.sub(r"[^a-z0-9]+", "_", template.name.lower()).strip("_")
    return f"{slug}_template.xlsx"


def generate_template_workbook(domain: ImportDomain | str) -> tuple[bytes, str]:
    """Return the blank workbook for ``domain`` and its download name."""

    template = get_template(domain)
    return create_template_workbook(template), template_filename(template)


__all__ = [
    "AOG_CATEGORY_LABELS",
    "SHIFTS",
    "generate_template_workbook",
    "get_template",
    "list_import_domains",
    "template_filename",
]
