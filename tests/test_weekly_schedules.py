import time
from io import BytesIO

import pytest
from openpyxl import load_workbook

from fleetdata.application.use_cases.weekly_schedules import (
    add_schedule_employee,
    build_schedule_rows,
    export_weekly_schedule,
    export_weekly_schedules_for_year,
    get_vacation_plan,
    import_weekly_schedules,
    list_vacation_plans,
    parse_schedule_sheet,
    remove_schedule_employee,
    render_schedule_workbook,
    update_schedule_cell,
)
from fleetdata.domain.entities import (
    OVERLAP_CHECK,
    OVERLAP_OK,
    ScheduleEmployee,
    WEEKS_PER_YEAR,
    WeeklySchedulePlan,
    week_headers,
)
from fleetdata.domain.exceptions import RecordNotFoundError
from fleetdata.infrastructure.repositories import ImportLogRepository

HEADER = ("Employee", *week_headers(), "Total")


def _cells(**weeks) -> list:
    cells = [0] * WEEKS_PER_YEAR
    for key, value in weeks.items():
        cells[int(key.removeprefix("w"))] = value
    return cells


def _plan(*employees: ScheduleEmployee) -> WeeklySchedulePlan:
    return WeeklySchedulePlan(id=1, year=2025, team="Engineering", employees=employees)


def test_overlap_flags_follow_positive_cells():
    plan = _plan(
        ScheduleEmployee("Ann", tuple(_cells(w0=1, w5=2))),
        ScheduleEmployee("Bob", tuple(_cells(w0=0.5, w6=1))),
    )

    assert plan.overlaps[0] == OVERLAP_CHECK
    assert plan.overlaps[5] == OVERLAP_OK
    assert plan.overlaps[6] == OVERLAP_OK
    assert plan.overlaps.count(OVERLAP_CHECK) == 1


def test_employee_total_tracks_cell_changes():
    employee = ScheduleEmployee("Ann", tuple(_cells(w0=1, w1=2)))

    updated = employee.with_cell(1, 0.5).with_cell(47, 3)

    assert employee.total == 3
    assert updated.total == 4.5 == sum(updated.cells)


def test_employee_requires_one_cell_per_week():
    with pytest.raises(ValueError):
        ScheduleEmployee("Ann", (1, 2))


def test_schedule_rows_end_with_overlap_row():
    plan = _plan(ScheduleEmployee("Ann", tuple(_cells(w0=1))))

    rows = build_schedule_rows(plan)

    assert tuple(rows[0]) == HEADER
    assert rows[1][0] == "Ann"
    assert rows[1][-1] == 1
    assert rows[-1][0] == "Overlap"
    assert rows[-1][1] == OVERLAP_OK
    assert rows[-1][-1] is None
    assert all(len(row) == WEEKS_PER_YEAR + 2 for row in rows)


def test_parse_schedule_sheet_skips_labels_and_reports_bad_cells():
    rows = [
        HEADER,
        ["Ann", 1, None, "2", *([0] * 45)],
        ["Total", *([9] * 48)],
        ["Bob", "x", -1, *([0] * 46)],
        [None, 5],
        ["Overlap", "Ok"],
    ]

    employees, errors = parse_schedule_sheet("Engineering", rows)

    assert [employee.name for employee in employees] == ["Ann"]
    assert employees[0].cells[:3] == (1, 0, 2)
    assert [(error.row, error.message) for error in errors] == [
        (4, 'Engineering - Bob: Week 1 must be numeric, got "x"'),
        (4, "Engineering - Bob: Week 2 value must be >= 0, got -1"),
    ]


def _schedule_workbook(build_workbook):
    return build_workbook(
        {
            "Engineering": [HEADER, ["Ann", *_cells(w0=1)], ["Bob", *_cells(w0=2)]],
            "TPL": [HEADER],
            "Notes": [["anything"], ["else"]],
        }
    )


def test_import_upserts_team_plans_and_logs(db_session, build_workbook):
    result = import_weekly_schedules(
        db_session,
        file_bytes=_schedule_workbook(build_workbook),
        filename="plan.xlsx",
        year=2025,
        actor_id="hr",
    )

    assert result.success_count == 1
    assert [(error.row, error.message) for error in result.errors] == [
        (0, 'Sheet "TPL" must contain headers and at least one data row')
    ]
    (plan,) = list_vacation_plans(db_session, year=2025)
    assert plan.team == "Engineering"
    assert plan.overlaps[0] == OVERLAP_CHECK
    log = ImportLogRepository(db_session).get(result.import_log_id)
    assert log.import_type == "vacation_plan"
    assert log.row_count == log.success_count == 1

    again = import_weekly_schedules(
        db_session,
        file_bytes=build_workbook({"Engineering": [HEADER, ["Cid", *_cells(w3=1)]]}),
        filename="plan.xlsx",
        year=2025,
        actor_id="hr",
    )
    (replaced,) = list_vacation_plans(db_session, year=2025)
    assert replaced.id == plan.id == again.plans[0].id
    assert [employee.name for employee in replaced.employees] == ["Cid"]


def test_sheet_without_valid_employees_is_reported(db_session, build_workbook):
    result = import_weekly_schedules(
        db_session,
        file_bytes=build_workbook({"TPL": [HEADER, ["Total", 1]]}),
        filename="plan.xlsx",
        year=2025,
        actor_id="hr",
    )

    assert result.plans == ()
    assert result.errors[0].message == 'Sheet "TPL" contains no valid employee data'


@pytest.fixture()
def stored_plan(db_session, build_workbook):
    result = import_weekly_schedules(
        db_session,
        file_bytes=_schedule_workbook(build_workbook),
        filename="plan.xlsx",
        year=2025,
        actor_id="hr",
    )
    return result.plans[0]


def test_update_cell_recomputes_totals_and_overlaps(db_session, stored_plan):
    updated = update_schedule_cell(
        db_session,
        plan_id=stored_plan.id,
        employee_name="Bob",
        week_index=0,
        value=0,
        actor_id="lead",
    )

    assert updated.find_employee("Bob").total == 0
    assert updated.overlaps[0] == OVERLAP_OK
    assert updated.updated_by == "lead"
    assert get_vacation_plan(db_session, plan_id=stored_plan.id).overlaps[0] == OVERLAP_OK


@pytest.mark.parametrize(
    ("employee", "week_index", "value", "error"),
    [
        ("Ann", 48, 1, ValueError),
        ("Ann", -1, 1, ValueError),
        ("Ann", 0, -1, ValueError),
        ("Ann", 0, "a", ValueError),
        ("Nobody", 0, 1, LookupError),
    ],
)
def test_update_cell_rejects_bad_input(
    db_session, stored_plan, employee, week_index, value, error
):
    with pytest.raises(error):
        update_schedule_cell(
            db_session,
            plan_id=stored_plan.id,
            employee_name=employee,
            week_index=week_index,
            value=value,
            actor_id="lead",
        )


def test_add_and_remove_employee(db_session, stored_plan):
    added = add_schedule_employee(
        db_session, plan_id=stored_plan.id, employee_name=" Cid ", actor_id="lead"
    )

    assert [employee.name for employee in added.employees] == ["Ann", "Bob", "Cid"]
    assert added.find_employee("Cid").total == 0
    with pytest.raises(ValueError, match='Employee "Ann" already exists'):
        add_schedule_employee(
            db_session, plan_id=stored_plan.id, employee_name="Ann", actor_id="lead"
        )

    removed = remove_schedule_employee(
        db_session, plan_id=stored_plan.id, employee_name="Bob", actor_id="lead"
    )
    assert [employee.name for employee in removed.employees] == ["Ann", "Cid"]
    assert removed.overlaps[0] == OVERLAP_OK
    with pytest.raises(RecordNotFoundError):
        remove_schedule_employee(
            db_session, plan_id=stored_plan.id, employee_name="Bob", actor_id="lead"
        )


def test_export_single_plan_layout(db_session, stored_plan):
    content, filename = export_weekly_schedule(db_session, plan_id=stored_plan.id)

    assert filename == "vacation_plan_2025_Engineering.xlsx"
    worksheet = load_workbook(BytesIO(content))["Engineering"]
    rows = list(worksheet.iter_rows(values_only=True))
    assert rows[0] == HEADER
    assert rows[1][0] == "Ann"
    assert rows[-1][:2] == ("Overlap", OVERLAP_CHECK)
    assert worksheet.column_dimensions["A"].width == 20
    assert worksheet.column_dimensions["B"].width == 8
    assert worksheet.column_dimensions["AX"].width == 8



def test_rendered_schedule_is_byte_identical_across_saves():
    plan = _plan(ScheduleEmployee("Ann", tuple(_cells(w0=1))))

    first = render_schedule_workbook([plan])
    time.sleep(1.1)

    assert render_schedule_workbook([plan]) == first


def test_export_year_and_missing_plans(db_session, stored_plan):
    content, filename = export_weekly_schedules_for_year(db_session, year=2025)

    assert filename == "vacation_plans_2025.xlsx"
    assert load_workbook(BytesIO(content)).sheetnames == ["Engineering"]
    with pytest.raises(RecordNotFoundError, match="No vacation plans found for year 2030"):
        export_weekly_schedules_for_year(db_session, year=2030)
    with pytest.raises(RecordNotFoundError):
        export_weekly_schedule(db_session, plan_id=999)
