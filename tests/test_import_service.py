from datetime import date

import pytest

from fleetdata.application.use_cases.imports import (
    confirm_import,
    get_import_log,
    list_import_logs,
    preview_import,
)
from fleetdata.domain.entities import ImportDomain
from fleetdata.domain.exceptions import ImportSessionNotFoundError, RecordNotFoundError
from fleetdata.infrastructure.import_sessions import InMemoryImportSessionStore
from fleetdata.infrastructure.repositories import (
    AOGEventRepository,
    BudgetPlanRepository,
    DailyStatusRepository,
)

BUDGET_HEADERS = (
    "Fiscal Year",
    "Clause ID",
    "Clause Description",
    "Aircraft Group",
    "Planned Amount",
    "Currency",
)
DAILY_HEADERS = ("Aircraft Registration", "Date", "POS Hours", "NMCM-S Hours", "NMCM-U Hours")


@pytest.fixture()
def store():
    session_store = InMemoryImportSessionStore()
    yield session_store
    session_store.clear()


def _budget_workbook(build_workbook, rows):
    return build_workbook({"Data": [BUDGET_HEADERS, *rows]})


def _preview(db_session, store, content, domain, filename="upload.xlsx"):
    return preview_import(
        db_session,
        file_bytes=content,
        filename=filename,
        domain=domain,
        store=store,
        ttl_seconds=60,
    )


def test_preview_summarises_rows_and_keeps_session(db_session, store, build_workbook):
    content = _budget_workbook(
        build_workbook,
        [
            (2024, 1, "Spare Parts", "A330", 500000, None),
            (2024, "x", "Spare Parts", "A340", 1000, "USD"),
        ],
    )

    preview = _preview(db_session, store, content, "budget", "budget.xlsx")

    assert preview.domain is ImportDomain.BUDGET
    assert preview.filename == "budget.xlsx"
    assert (preview.total_rows, preview.valid_count, preview.error_count) == (2, 1, 1)
    assert preview.valid_rows[0].data["currency"] == "USD"
    assert [(error.row, error.message) for error in preview.errors] == [
        (3, "Clause ID: Invalid number: x")
    ]
    assert preview.session_id in store


def test_preview_rejects_empty_upload_and_vacation_plans(db_session, store, build_workbook):
    with pytest.raises(ValueError, match="empty"):
        _preview(db_session, store, b"", "budget")
    with pytest.raises(ValueError, match="vacation plan importer"):
        _preview(db_session, store, build_workbook({"Data": [("Employee",), ("A",)]}), "vacation_plan")
    with pytest.raises(LookupError):
        _preview(db_session, store, b"x", "fuel")
    assert len(store) == 0


def test_empty_injected_store_holds_the_session(db_session, store, build_workbook):
    from fleetdata.infrastructure.import_sessions import get_import_session_store

    shared_store = get_import_session_store()
    shared_store.clear()
    content = _budget_workbook(build_workbook, [(2024, 1, "Spare Parts", "A330", 1, None)])
    assert len(store) == 0

    preview = _preview(db_session, store, content, ImportDomain.BUDGET)

    assert preview.session_id in store
    assert preview.session_id not in shared_store
    confirmation = confirm_import(
        db_session, session_id=preview.session_id, actor_id="u", store=store
    )
    assert confirmation.success_count == 1
    assert len(store) == 0


def test_confirm_writes_rows_and_logs(db_session, store, build_workbook):
    content = _budget_workbook(
        build_workbook,
        [
            (2024, 1, "Spare Parts", "A330", 500000, None),
            (2024, 2, "Fuel", "A330", 250000, "EUR"),
            (2024, None, "Fuel", "A340", 1, None),
        ],
    )
    preview = _preview(db_session, store, content, ImportDomain.BUDGET, "budget.xlsx")

    confirmation = confirm_import(
        db_session, session_id=preview.session_id, actor_id="planner", store=store
    )

    assert confirmation.success_count == 2
    assert confirmation.error_count == 1
    assert [error.message for error in confirmation.errors] == [
        "Clause ID: Required field is missing"
    ]
    plans = BudgetPlanRepository(db_session).find(fiscal_year=2024)
    assert sorted(plan.currency for plan in plans) == ["EUR", "USD"]

    log = get_import_log(db_session, log_id=confirmation.import_log_id)
    assert log.filename == "budget.xlsx"
    assert log.import_type == "budget"
    assert (log.row_count, log.success_count, log.error_count) == (3, 2, 1)
    assert log.imported_by == "planner"
    assert log.errors[0].row == 4
    assert log.storage_ref is None


def test_confirm_twice_or_unknown_session_is_not_found(db_session, store, build_workbook):
    content = _budget_workbook(build_workbook, [(2024, 1, "Spare Parts", "A330", 1, None)])
    preview = _preview(db_session, store, content, ImportDomain.BUDGET)

    confirm_import(db_session, session_id=preview.session_id, actor_id="u", store=store)

    with pytest.raises(ImportSessionNotFoundError):
        confirm_import(db_session, session_id=preview.session_id, actor_id="u", store=store)
    with pytest.raises(LookupError, match="not found or expired"):
        confirm_import(db_session, session_id="never-issued", actor_id="u", store=store)


def test_failing_row_does_not_abort_the_batch(db_session, store, build_workbook):
    rows = [(2024, clause, f"Clause {clause}", "A330", 100, None) for clause in (1, 2, 3)]
    preview = _preview(
        db_session, store, _budget_workbook(build_workbook, rows), ImportDomain.BUDGET
    )
    written = []

    def _writer(session, data, actor_id):
        if data["clauseId"] == 2:
            raise RuntimeError("storage unavailable")
        written.append(data["clauseId"])

    confirmation = confirm_import(
        db_session,
        session_id=preview.session_id,
        actor_id="u",
        store=store,
        writers={ImportDomain.BUDGET: _writer},
    )

    assert written == [1, 3]
    assert confirmation.success_count == 2
    assert confirmation.error_count == 1
    assert [(error.row, error.message) for error in confirmation.errors] == [
        (3, "storage unavailable")
    ]


def test_log_is_written_when_every_row_fails(db_session, store, build_workbook):
    content = build_workbook(
        {"Data": [DAILY_HEADERS, ("HZ-NONE", "2024-01-15", 24, 0, 0)]}
    )
    preview = _preview(db_session, store, content, ImportDomain.DAILY_STATUS)

    confirmation = confirm_import(
        db_session, session_id=preview.session_id, actor_id="u", store=store
    )

    assert confirmation.success_count == 0
    assert confirmation.errors[0].message == "Aircraft HZ-NONE not found"
    assert get_import_log(db_session, log_id=confirmation.import_log_id).error_count == 1


def test_daily_status_duplicates_fail_per_row(db_session, store, build_workbook, aircraft_factory):
    aircraft_factory("HZ-A42")
    content = build_workbook(
        {
            "Data": [
                DAILY_HEADERS,
                ("hz-a42", "2024-01-15", 24, 2, 0),
                ("HZ-A42", "2024-01-15", 24, 0, 0),
                ("HZ-A42", "2024-01-16", 24, 0, 1),
            ]
        }
    )
    preview = _preview(db_session, store, content, ImportDomain.DAILY_STATUS)

    confirmation = confirm_import(
        db_session, session_id=preview.session_id, actor_id="u", store=store
    )

    assert confirmation.success_count == 2
    assert [(error.row, error.message) for error in confirmation.errors] == [
        (3, "Daily status record already exists for HZ-A42 on 2024-01-15")
    ]
    statuses = DailyStatusRepository(db_session).find()
    assert sorted(status.fmc_hours for status in statuses) == [22, 23]


def test_aog_import_resolves_aircraft(db_session, store, build_workbook, aircraft_factory):
    aircraft = aircraft_factory("HZ-A42", aircraft_type="A340-642 ACJ")
    content = build_workbook(
        {
            "Data": [
                ("Aircraft", "Defect Description", "Location", "Category", "Start Date",
                 "Start Time", "Finish Date", "Finish Time"),
                ("A340", "Hydraulic leak", "oerk", "AOG", "2024-01-15", "08:30",
                 "2024-01-17", "14:45"),
            ]
        }
    )
    preview = _preview(db_session, store, content, ImportDomain.AOG_EVENTS)

    confirm_import(db_session, session_id=preview.session_id, actor_id="u", store=store)

    (event,) = AOGEventRepository(db_session).find()
    assert event.aircraft_id == aircraft.id
    assert event.category == "aog"
    assert event.location == "OERK"
    assert event.reason_code == "Hydraulic leak"
    assert event.total_downtime_hours == pytest.approx(54.25)
    assert event.man_hours == 54
    assert event.is_imported


def test_list_import_logs_filters(db_session, store, build_workbook):
    for actor in ("alice", "bob"):
        content = _budget_workbook(build_workbook, [(2024, 1, "Spare Parts", "A330", 1, None)])
        preview = _preview(db_session, store, content, ImportDomain.BUDGET)
        confirm_import(db_session, session_id=preview.session_id, actor_id=actor, store=store)

    assert len(list_import_logs(db_session)) == 2
    assert [log.imported_by for log in list_import_logs(db_session, imported_by="bob")] == ["bob"]
    assert list_import_logs(db_session, import_type="aircraft") == []
    assert list_import_logs(db_session, end_date=date(2000, 1, 1)) == []


def test_unknown_import_log(db_session):
    with pytest.raises(RecordNotFoundError, match="Import log 99 not found"):
        get_import_log(db_session, log_id=99)
