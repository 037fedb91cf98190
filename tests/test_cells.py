from datetime import datetime, time

import pytest

from fleetdata.application.use_cases.imports.cells import (
    coerce_cell,
    is_blank,
    parse_date_text,
)
from fleetdata.domain.entities import (
    COLUMN_TYPE_DATE,
    COLUMN_TYPE_ENUM,
    COLUMN_TYPE_NUMBER,
    COLUMN_TYPE_STRING,
    TemplateColumn,
)

NUMBER = TemplateColumn("POS Hours", "posHours", COLUMN_TYPE_NUMBER, True)
DATE = TemplateColumn("Date", "date", COLUMN_TYPE_DATE, True)
TEXT = TemplateColumn("Start Time", "startTime", COLUMN_TYPE_STRING, True)
SHIFT = TemplateColumn(
    "Shift", "shift", COLUMN_TYPE_ENUM, True, enum_values=("Morning", "Night")
)


@pytest.mark.parametrize("value", [None, "", "   ", float("nan")])
def test_blank_values_are_skipped(value):
    assert is_blank(value)
    assert coerce_cell(value, NUMBER) == (None, None)


def test_zero_is_not_blank():
    assert not is_blank(0)
    assert coerce_cell(0, NUMBER) == (0, None)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(24, 24), (12.5, 12.5), ("12.5", 12.5), (" 8 ", 8), (3.0, 3)],
)
def test_numbers_are_coerced(raw, expected):
    value, error = coerce_cell(raw, NUMBER)

    assert error is None
    assert value == expected


@pytest.mark.parametrize("raw", ["abc", True, "inf"])
def test_invalid_numbers_report_the_raw_value(raw):
    value, error = coerce_cell(raw, NUMBER)

    assert value is None
    assert error == f"Invalid number: {raw}"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("2024-01-15", datetime(2024, 1, 15)),
        ("2024-1-5", datetime(2024, 1, 5)),
        ("2024-01-15 08:30", datetime(2024, 1, 15, 8, 30)),
        ("2024-01-15T08:30:00", datetime(2024, 1, 15, 8, 30)),
        ("01/15/2024", datetime(2024, 1, 15)),
        ("15/01/2024", datetime(2024, 1, 15)),
        ("03/04/2024 17:05", datetime(2024, 3, 4, 17, 5)),
    ],
)
def test_date_text_formats(text, expected):
    assert parse_date_text(text) == expected


@pytest.mark.parametrize("text", ["2024-04-31", "31/04/2024", "2024-13-01", "yesterday"])
def test_impossible_dates_do_not_roll_over(text):
    assert parse_date_text(text) is None
    assert coerce_cell(text, DATE) == (None, f"Invalid date: {text}")


def test_date_text_reformats_to_the_same_components():
    parsed = parse_date_text("2024-02-29 23:59")

    assert parsed.strftime("%Y-%m-%d %H:%M") == "2024-02-29 23:59"


def test_serial_dates_use_workbook_epoch():
    value, error = coerce_cell(45306, DATE)

    assert error is None
    assert value == datetime(2024, 1, 15)


def test_serial_dates_below_one_are_rejected():
    assert coerce_cell(0.5, DATE) == (None, "Invalid date: 0.5")


def test_native_datetimes_pass_through():
    moment = datetime(2024, 1, 15, 8, 30)

    assert coerce_cell(moment, DATE) == (moment, None)


def test_strings_render_times_and_whole_numbers():
    assert coerce_cell(time(8, 5), TEXT) == ("08:05", None)
    assert coerce_cell(924.0, TEXT) == ("924", None)
    assert coerce_cell("  HZ-A42 ", TEXT) == ("HZ-A42", None)


def test_enum_membership_is_exact():
    assert coerce_cell("Night", SHIFT) == ("Night", None)
    assert coerce_cell("night", SHIFT) == (
        None,
        "Invalid value: night. Allowed: Morning, Night",
    )
