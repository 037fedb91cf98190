import time
from io import BytesIO

import pytest
from openpyxl import load_workbook

from fleetdata.application.use_cases.templates import (
    generate_template_workbook,
    get_template,
    list_import_domains,
    template_filename,
)
from fleetdata.domain.entities import (
    COLUMN_TYPE_ENUM,
    ImportDomain,
    TemplateColumn,
    WEEKS_PER_YEAR,
)


def _sheet_rows(content: bytes, title: str) -> list[tuple]:
    workbook = load_workbook(BytesIO(content))
    return list(workbook[title].iter_rows(values_only=True))


def test_every_import_domain_has_a_template():
    domains = [domain for domain, _ in list_import_domains()]

    assert domains == list(ImportDomain)
    for domain in ImportDomain:
        template = get_template(domain)
        assert template.domain is domain
        assert template.columns
        assert len({column.key for column in template.columns}) == len(template.columns)


def test_get_template_accepts_raw_value_and_rejects_unknown_domain():
    assert get_template("daily_status").domain is ImportDomain.DAILY_STATUS

    with pytest.raises(LookupError, match="Unknown import type: fuel"):
        get_template("fuel")


def test_enum_column_requires_allowed_values():
    with pytest.raises(ValueError):
        TemplateColumn("Shift", "shift", COLUMN_TYPE_ENUM, True)


def test_vacation_plan_template_has_one_column_per_week():
    template = get_template(ImportDomain.VACATION_PLAN)

    assert template.headers[0] == "Employee"
    assert template.headers[1] == "Jan W1"
    assert template.headers[-1] == "Dec W4"
    assert len(template.columns) == WEEKS_PER_YEAR + 1


def test_generated_template_contains_headers_examples_and_instructions():
    content, filename = generate_template_workbook(ImportDomain.DAILY_STATUS)
    template = get_template(ImportDomain.DAILY_STATUS)

    assert filename == "daily_status_template.xlsx"
    data_rows = _sheet_rows(content, "Data")
    assert data_rows[0] == template.headers
    assert data_rows[1][0] == "HZ-A42"

    instructions = _sheet_rows(content, "Instructions")
    assert instructions[0] == ("Column", "Type", "Required", "Description", "Allowed Values")
    assert [row[0] for row in instructions[1:]] == list(template.headers)
    assert instructions[1][2] == "Yes"


def test_generated_template_header_row_is_stable():
    first, _ = generate_template_workbook(ImportDomain.AOG_EVENTS)
    second, _ = generate_template_workbook(ImportDomain.AOG_EVENTS)

    assert _sheet_rows(first, "Data")[0] == _sheet_rows(second, "Data")[0]


def test_generated_template_is_byte_identical_across_saves():
    first, _ = generate_template_workbook(ImportDomain.AOG_EVENTS)
    time.sleep(1.1)
    second, _ = generate_template_workbook(ImportDomain.AOG_EVENTS)

    assert first == second


def test_template_header_is_styled_and_frozen():
    content, _ = generate_template_workbook(ImportDomain.AIRCRAFT)
    worksheet = load_workbook(BytesIO(content))["Data"]

    assert worksheet.freeze_panes == "A2"
    assert worksheet["A1"].font.bold
    assert worksheet.column_dimensions["A"].width >= 12


def test_template_filename_slugifies_display_name():
    assert (
        template_filename(get_template(ImportDomain.AOG_EVENTS))
        == "aog_events_simplified_template.xlsx"
    )
