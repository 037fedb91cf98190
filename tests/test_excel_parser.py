import pytest

from fleetdata.application.use_cases.imports import parse_workbook
from fleetdata.application.use_cases.imports.parser import (
    REQUIRED_FIELD_MESSAGE,
    map_headers,
)
from fleetdata.application.use_cases.templates import get_template
from fleetdata.domain.entities import ImportDomain
from fleetdata.domain.exceptions import WorkbookStructureError

DAILY_HEADERS = (
    "Aircraft Registration",
    "Date",
    "POS Hours",
    "NMCM-S Hours",
    "NMCM-U Hours",
    "NMCS Hours",
    "Notes",
)


def _daily_row(**overrides):
    row = {
        "Aircraft Registration": "HZ-A42",
        "Date": "2024-01-15",
        "POS Hours": 24,
        "NMCM-S Hours": 2,
        "NMCM-U Hours": 0,
        "NMCS Hours": None,
        "Notes": None,
    }
    row.update(overrides)
    return [row[header] for header in DAILY_HEADERS]


def test_valid_invalid_and_blank_rows_are_accounted(build_workbook):
    content = build_workbook(
        {
            "Data": [
                DAILY_HEADERS,
                _daily_row(),
                _daily_row(**{"POS Hours": "abc"}),
                [None] * len(DAILY_HEADERS),
            ]
        }
    )

    result = parse_workbook(content, ImportDomain.DAILY_STATUS)

    assert result.total_rows == 2
    assert len(result.valid_rows) == 1
    assert len(result.invalid_rows) == 1
    assert [row.row_number for row in result.all_rows] == [2, 3]
    assert result.errors == [(3, "POS Hours: Invalid number: abc")]


def test_blank_rows_in_the_middle_keep_source_row_numbers(build_workbook):
    content = build_workbook(
        {"Data": [DAILY_HEADERS, _daily_row(), ["", None, "  "], _daily_row(Date="2024-01-16")]}
    )

    result = parse_workbook(content, ImportDomain.DAILY_STATUS)

    assert [row.row_number for row in result.all_rows] == [2, 4]
    assert result.total_rows == len(result.valid_rows) + len(result.invalid_rows)


def test_headers_match_case_insensitively_in_any_order(build_workbook):
    headers = [header.upper() for header in reversed(DAILY_HEADERS)]
    values = list(reversed(_daily_row()))
    content = build_workbook({"Data": [headers, values]})

    result = parse_workbook(content, ImportDomain.DAILY_STATUS)

    assert result.errors == []
    data = result.valid_rows[0].data
    assert data["aircraftRegistration"] == "HZ-A42"
    assert data["posHours"] == 24
    assert data["fmcHours"] == 22


def test_missing_required_cell_adds_one_error_naming_the_header(build_workbook):
    content = build_workbook(
        {"Data": [DAILY_HEADERS, _daily_row(**{"NMCM-U Hours": None})]}
    )

    result = parse_workbook(content, ImportDomain.DAILY_STATUS)

    assert result.errors == [(2, f"NMCM-U Hours: {REQUIRED_FIELD_MESSAGE}")]


def test_missing_required_column_is_reported_on_every_row(build_workbook):
    headers = [header for header in DAILY_HEADERS if header != "Date"]
    row = [value for header, value in zip(DAILY_HEADERS, _daily_row()) if header != "Date"]
    content = build_workbook({"Data": [headers, row, row]})

    result = parse_workbook(content, ImportDomain.DAILY_STATUS)

    assert result.errors == [
        (2, f"Date: {REQUIRED_FIELD_MESSAGE}"),
        (3, f"Date: {REQUIRED_FIELD_MESSAGE}"),
    ]


def test_cell_error_is_not_repeated_as_missing(build_workbook):
    content = build_workbook({"Data": [DAILY_HEADERS, _daily_row(Date="2024-02-30")]})

    result = parse_workbook(content, ImportDomain.DAILY_STATUS)

    assert result.errors == [(2, "Date: Invalid date: 2024-02-30")]


def test_only_the_first_sheet_is_read(build_workbook):
    content = build_workbook(
        {
            "Data": [DAILY_HEADERS, _daily_row()],
            "Instructions": [("Column",), ("anything",)],
        }
    )

    assert parse_workbook(content, ImportDomain.DAILY_STATUS).total_rows == 1


def test_header_only_sheet_is_a_structural_error(build_workbook):
    content = build_workbook({"Data": [DAILY_HEADERS]})

    with pytest.raises(
        WorkbookStructureError,
        match="Excel file must contain headers and at least one data row",
    ):
        parse_workbook(content, ImportDomain.DAILY_STATUS)


def test_non_workbook_payload_is_a_structural_error():
    with pytest.raises(WorkbookStructureError, match="Invalid Excel file format"):
        parse_workbook(b"not a workbook", ImportDomain.DAILY_STATUS)


def test_duplicate_headers_keep_the_first_column():
    template = get_template(ImportDomain.DAILY_STATUS)

    mapping = map_headers(["Date", "Notes", "date", None], template.columns)

    assert {index: column.key for index, column in mapping.items()} == {
        0: "date",
        1: "notes",
    }
