"""Helpers for generating blank import template workbooks."""

from __future__ import annotations

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from fleetdata.domain.entities import Template
from fleetdata.infrastructure.workbooks import save_workbook_bytes

DATA_SHEET_TITLE = "Data"
INSTRUCTIONS_SHEET_TITLE = "Instructions"
INSTRUCTION_HEADERS = ("Column", "Type", "Required", "Description", "Allowed Values")

_MIN_COLUMN_WIDTH = 12


def _style_header(worksheet: Worksheet) -> None:
    header_fill = PatternFill(fill_type="solid", fgColor="4F81BD")
    header_font = Font(color="FFFFFFFF", bold=True)
    header_alignment = Alignment(horizontal="center", vertical="center")
    for cell in worksheet[1]:
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = header_alignment
    worksheet.freeze_panes = "A2"


def _size_columns(worksheet: Worksheet) -> None:
    for index, column_cells in enumerate(worksheet.iter_cols(), start=1):
        longest = max(
            (len(str(cell.value)) for cell in column_cells if cell.value is not None),
            default=0,
        )
        worksheet.column_dimensions[get_column_letter(index)].width = max(
            longest + 2, _MIN_COLUMN_WIDTH
        )


def _write_data_sheet(worksheet: Worksheet, template: Template) -> None:
    worksheet.title = DATA_SHEET_TITLE
    worksheet.append(list(template.headers))
    for example in template.example_rows:
        worksheet.append([example.get(column.key) for column in template.columns])
    _style_header(worksheet)
    _size_columns(worksheet)


def _write_instructions_sheet(worksheet: Worksheet, template: Template) -> None:
    worksheet.append(list(INSTRUCTION_HEADERS))
    for column in template.columns:
        worksheet.append(
            [
                column.header,
                column.type,
                "Yes" if column.required else "No",
                column.description or "",
                ", ".join(column.enum_values),
            ]
        )
    _style_header(worksheet)
    _size_columns(worksheet)


def create_template_workbook(template: Template) -> bytes:
    """Return an ``.xlsx`` with the header row, example rows and column guide."""

    workbook = Workbook()
    _write_data_sheet(workbook.active, template)
    _write_instructions_sheet(
        workbook.create_sheet(INSTRUCTIONS_SHEET_TITLE), template
    )

    return save_workbook_bytes(workbook)


__all__ = [
    "DATA_SHEET_TITLE",
    "INSTRUCTIONS_SHEET_TITLE",
    "INSTRUCTION_HEADERS",
    "create_template_workbook",
]
