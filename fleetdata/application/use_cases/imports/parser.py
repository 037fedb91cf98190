"""Turn an uploaded workbook into validated rows for one import domain."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Sequence

from fleetdata.domain.entities import (
    ImportDomain,
    ParsedRow,
    ParseResult,
    Template,
    TemplateColumn,
)
from fleetdata.domain.exceptions import WorkbookStructureError
from fleetdata.infrastructure.workbooks import SheetData, read_first_sheet

from ..templates import get_template
from .cells import coerce_cell, is_blank
from .rules import RuleContext, apply_domain_rules

logger = logging.getLogger(__name__)

REQUIRED_FIELD_MESSAGE = "Required field is missing"
_FIRST_DATA_ROW = 2


def map_headers(
    header_row: Sequence[Any], columns: Sequence[TemplateColumn]
) -> dict[int, TemplateColumn]:
    """Map sheet column positions to template columns by case-insensitive header."""

    by_header = {column.header.strip().lower(): column for column in columns}
    mapping: dict[int, TemplateColumn] = {}
    seen: set[str] = set()
    for index, raw_header in enumerate(header_row):
        if is_blank(raw_header):
            continue
        column = by_header.get(str(raw_header).strip().lower())
        if column is None or column.key in seen:
            continue
        mapping[index] = column
        seen.add(column.key)
    return mapping


def validate_row(
    values: Sequence[Any],
    row_number: int,
    template: Template,
    header_map: dict[int, TemplateColumn],
    *,
    epoch: datetime,
) -> ParsedRow:
    """Coerce one source row and check required columns."""

    row = ParsedRow(row_number=row_number)
    failed_keys: set[str] = set()
    for index, column in header_map.items():
        raw = values[index] if index < len(values) else None
        value, error = coerce_cell(raw, column, epoch=epoch)
        if error is not None:
            row.errors.append(f"{column.header}: {error}")
            failed_keys.add(column.key)
        elif value is not None:
            row.data[column.key] = value

    for column in template.required_columns:
        if column.key not in row.data and column.key not in failed_keys:
            row.errors.append(f"{column.header}: {REQUIRED_FIELD_MESSAGE}")
    return row


def parse_sheet(sheet: SheetData, template: Template) -> list[ParsedRow]:
    """Return one :class:`ParsedRow` per non-empty data row of ``sheet``."""

    if len(sheet.rows) < 2:
        raise WorkbookStructureError(
            "Excel file must contain headers and at least one data row"
        )

    header_map = map_headers(sheet.rows[0], template.columns)
    parsed: list[ParsedRow] = []
    for row_number, values in enumerate(sheet.rows[1:], start=_FIRST_DATA_ROW):
        if all(is_blank(value) for value in values):
            continue
        parsed.append(
            validate_row(values, row_number, template, header_map, epoch=sheet.epoch)
        )
    return parsed


def parse_workbook(
    file_bytes: bytes,
    domain: ImportDomain | str,
    *,
    context: RuleContext | None = None,
) -> ParseResult:
    """Parse and validate ``file_bytes`` against the template of ``domain``."""

    template = get_template(domain)
    sheet = read_first_sheet(file_bytes)
    rows = parse_sheet(sheet, template)
    if context is None:
        context = RuleContext()
    rows = apply_domain_rules(template.domain, rows, context)
    result = ParseResult(domain=template.domain, all_rows=tuple(rows))
    logger.debug(
        "Parsed %s rows for %s (%s invalid)",
        result.total_rows,
        template.domain.value,
        len(result.invalid_rows),
    )
    return result


__all__ = [
    "REQUIRED_FIELD_MESSAGE",
    "map_headers",
    "parse_sheet",
    "parse_workbook",
    "validate_row",
]
