"""Use cases for team weekly schedules (vacation plans).

Schedules use a fixed layout: the employee name, one column per week
(``Jan W1`` .. ``Dec W4``) and a total, followed by an ``Overlap`` row.
Totals and overlap flags are always derived from the employee cells.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Sequence

from sqlalchemy.orm import Session

from fleetdata.domain.entities import (
    ImportDomain,
    ImportLog,
    ImportRowError,
    ScheduleEmployee,
    ScheduleTeam,
    WEEKS_PER_YEAR,
    WeeklySchedulePlan,
    week_headers,
)
from fleetdata.domain.exceptions import RecordNotFoundError
from fleetdata.infrastructure.repositories import (
    ImportLogRepository,
    VacationPlanRepository,
)
from fleetdata.infrastructure.workbooks import (
    read_workbook_sheets,
    write_fixed_layout_workbook,
)

logger = logging.getLogger(__name__)

NAME_HEADER = "Employee"
TOTAL_HEADER = "Total"
OVERLAP_LABEL = "Overlap"
RESERVED_ROW_LABELS = frozenset({"employee", "name", "total", "overlap"})

NAME_COLUMN_WIDTH = 20
WEEK_COLUMN_WIDTH = 8
TOTAL_COLUMN_WIDTH = 8


@dataclass(frozen=True)
class ScheduleImportResult:
    """Outcome of importing a schedule workbook for one year."""

    import_log_id: int
    success_count: int
    error_count: int
    errors: list[ImportRowError] = field(default_factory=list)
    plans: tuple[WeeklySchedulePlan, ...] = ()


def _format_number(value: float) -> str:
    return f"{value:g}"


def _parse_week_value(raw: Any) -> tuple[float | None, str | None]:
    """Return ``(value, problem)`` for one week cell; blanks count as zero."""

    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return 0, None
    if isinstance(raw, bool):
        return None, f'must be numeric, got "{raw}"'
    if isinstance(raw, (int, float)):
        number = raw
    else:
        try:
            number = float(str(raw).strip())
        except ValueError:
            return None, f'must be numeric, got "{raw}"'
    if isinstance(number, float) and not math.isfinite(number):
        return None, f'must be numeric, got "{raw}"'
    if number < 0:
        return None, f"value must be >= 0, got {_format_number(number)}"
    if isinstance(number, float) and number.is_integer():
        return int(number), None
    return number, None


def parse_schedule_sheet(
    sheet_name: str, rows: Sequence[Sequence[Any]]
) -> tuple[list[ScheduleEmployee], list[ImportRowError]]:
    """Read employee rows from a schedule sheet.

    Rows whose first cell is blank or a reserved label are skipped. A row with
    any invalid week cell is reported and left out entirely.
    """

    employees: list[ScheduleEmployee] = []
    errors: list[ImportRowError] = []
    for row_number, row in enumerate(rows[1:], start=2):
        if not row or row[0] is None:
            continue
        name = str(row[0]).strip()
        if not name or name.lower() in RESERVED_ROW_LABELS:
            continue

        cells: list[float] = []
        row_errors: list[ImportRowError] = []
        for week_index in range(WEEKS_PER_YEAR):
            raw = row[week_index + 1] if week_index + 1 < len(row) else None
            value, problem = _parse_week_value(raw)
            if problem is not None:
                row_errors.append(
                    ImportRowError(
                        row_number,
                        f"{sheet_name} - {name}: Week {week_index + 1} {problem}",
                    )
                )
            cells.append(value if value is not None else 0)

        if row_errors:
            errors.extend(row_errors)
            continue
        employees.append(ScheduleEmployee(name=name, cells=tuple(cells)))
    return employees, errors


def import_weekly_schedules(
    session: Session,
    *,
    file_bytes: bytes,
    filename: str,
    year: int,
    actor_id: str,
) -> ScheduleImportResult:
    """Upsert one plan per recognised team sheet and log the import."""

    if not file_bytes:
        raise ValueError("The uploaded file is empty")

    teams = {team.value: team for team in ScheduleTeam}
    repository = VacationPlanRepository(session)
    errors: list[ImportRowError] = []
    plans: list[WeeklySchedulePlan] = []

    for sheet in read_workbook_sheets(file_bytes):
        team = teams.get(sheet.title)
        if team is None:
            continue
        if len(sheet.rows) < 2:
            errors.append(
                ImportRowError(
                    0,
                    f'Sheet "{sheet.title}" must contain headers and at least one data row',
                )
            )
            continue

        employees, sheet_errors = parse_schedule_sheet(sheet.title, sheet.rows)
        errors.extend(sheet_errors)
        if not employees:
            errors.append(
                ImportRowError(0, f'Sheet "{sheet.title}" contains no valid employee data')
            )
            continue

        plans.append(
            repository.upsert(
                WeeklySchedulePlan(
                    id=None,
                    year=year,
                    team=team.value,
                    employees=tuple(employees),
                    updated_by=actor_id,
                )
            )
        )

    log = ImportLogRepository(session).create(
        ImportLog(
            id=None,
            filename=filename,
            import_type=ImportDomain.VACATION_PLAN.value,
            row_count=len(plans),
            success_count=len(plans),
            error_count=len(errors),
            imported_by=actor_id,
            errors=errors,
        )
    )
    logger.info(
        "Imported %s vacation plan(s) for %s with %s error(s)",
        len(plans),
        year,
        len(errors),
    )
    return ScheduleImportResult(
        import_log_id=log.id,
        success_count=len(plans),
        error_count=len(errors),
        errors=errors,
        plans=tuple(plans),
    )


def build_schedule_rows(plan: WeeklySchedulePlan) -> list[list[Any]]:
    """Return the header, one row per employee and the overlap row."""

    rows: list[list[Any]] = [[NAME_HEADER, *week_headers(), TOTAL_HEADER]]
    for employee in plan.employees:
        rows.append([employee.name, *employee.cells, employee.total])
    rows.append([OVERLAP_LABEL, *plan.overlaps, None])
    return rows


def _schedule_widths() -> list[int]:
    return [NAME_COLUMN_WIDTH, *([WEEK_COLUMN_WIDTH] * WEEKS_PER_YEAR), TOTAL_COLUMN_WIDTH]


def render_schedule_workbook(plans: Sequence[WeeklySchedulePlan]) -> bytes:
    return write_fixed_layout_workbook(
        [(plan.team, build_schedule_rows(plan), _schedule_widths()) for plan in plans]
    )


def list_vacation_plans(
    session: Session, *, year: int | None = None
) -> Sequence[WeeklySchedulePlan]:
    return VacationPlanRepository(session).list(year=year)


def get_vacation_plan(session: Session, *, plan_id: int) -> WeeklySchedulePlan:
    plan = VacationPlanRepository(session).get(plan_id)
    if plan is None:
        msg = f"Vacation plan with ID {plan_id} not found"
        raise RecordNotFoundError(msg)
    return plan


def export_weekly_schedule(session: Session, *, plan_id: int) -> tuple[bytes, str]:
    plan = get_vacation_plan(session, plan_id=plan_id)
    filename = f"vacation_plan_{plan.year}_{plan.team}.xlsx"
    return render_schedule_workbook([plan]), filename


def render_year_schedules(
    repository: VacationPlanRepository, year: int
) -> tuple[bytes, str]:
    """Return one workbook with a sheet per team plan of ``year``."""

    plans = repository.list(year=year)
    if not plans:
        msg = f"No vacation plans found for year {year}"
        raise RecordNotFoundError(msg)
    return render_schedule_workbook(plans), f"vacation_plans_{year}.xlsx"


def export_weekly_schedules_for_year(session: Session, *, year: int) -> tuple[bytes, str]:
    return render_year_schedules(VacationPlanRepository(session), year)


def update_schedule_cell(
    session: Session,
    *,
    plan_id: int,
    employee_name: str,
    week_index: int,
    value: Any,
    actor_id: str,
) -> WeeklySchedulePlan:
    """Set one week value of an employee; totals and overlaps follow."""

    if not 0 <= week_index < WEEKS_PER_YEAR:
        raise ValueError(f"Week index must be between 0 and {WEEKS_PER_YEAR - 1}")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("Cell value must be numeric")
    if not math.isfinite(value):
        raise ValueError("Cell value must be numeric")
    if value < 0:
        raise ValueError("Cell value must be >= 0")

    plan = get_vacation_plan(session, plan_id=plan_id)
    employee = plan.find_employee(employee_name)
    if employee is None:
        msg = f'Employee "{employee_name}" not found in vacation plan'
        raise RecordNotFoundError(msg)

    employees = [
        current.with_cell(week_index, value) if current is employee else current
        for current in plan.employees
    ]
    return _save_employees(session, plan, employees, actor_id)


def add_schedule_employee(
    session: Session, *, plan_id: int, employee_name: str, actor_id: str
) -> WeeklySchedulePlan:
    name = employee_name.strip()
    if not name:
        raise ValueError("Employee name is required")

    plan = get_vacation_plan(session, plan_id=plan_id)
    if plan.find_employee(name) is not None:
        raise ValueError(f'Employee "{name}" already exists in vacation plan')

    employees = [*plan.employees, ScheduleEmployee(name=name)]
    return _save_employees(session, plan, employees, actor_id)


def remove_schedule_employee(
    session: Session, *, plan_id: int, employee_name: str, actor_id: str
) -> WeeklySchedulePlan:
    plan = get_vacation_plan(session, plan_id=plan_id)
    if plan.find_employee(employee_name) is None:
        msg = f'Employee "{employee_name}" not found in vacation plan'
        raise RecordNotFoundError(msg)

    employees = [
        employee for employee in plan.employees if employee.name != employee_name
    ]
    return _save_employees(session, plan, employees, actor_id)


def _save_employees(
    session: Session,
    plan: WeeklySchedulePlan,
    employees: Sequence[ScheduleEmployee],
    actor_id: str,
) -> WeeklySchedulePlan:
    updated = replace(plan.with_employees(employees), updated_by=actor_id)
    return VacationPlanRepository(session).update(updated)


__all__ = [
    "ScheduleImportResult",
    "add_schedule_employee",
    "build_schedule_rows",
    "export_weekly_schedule",
    "export_weekly_schedules_for_year",
    "get_vacation_plan",
    "import_weekly_schedules",
    "list_vacation_plans",
    "parse_schedule_sheet",
    "remove_schedule_employee",
    "render_schedule_workbook",
    "render_year_schedules",
    "update_schedule_cell",
]
