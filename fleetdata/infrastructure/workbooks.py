"""Reading uploaded workbooks and rendering export workbooks."""

from __future__ import annotations

import importlib
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from functools import lru_cache
from io import BytesIO
from typing import Any
from zipfile import ZIP_DEFLATED, BadZipFile, ZipFile, ZipInfo

from openpyxl import Workbook, load_workbook
from openpyxl.packaging.core import DocumentProperties
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.xml.constants import ARC_CORE
from openpyxl.xml.functions import tostring

from fleetdata.domain.exceptions import WorkbookStructureError

logger = logging.getLogger(__name__)

EXCEL_CONTENT_TYPE = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
)

_AUTOSIZE_SAMPLE_ROWS = 100
_MIN_AUTOSIZE_WIDTH = 10

# Stamped on document properties and zip entries so equal content saves to equal bytes.
RENDER_TIMESTAMP = datetime(1980, 1, 1)

Row = tuple[Any, ...]


@lru_cache(maxsize=1)
def _get_pandas_module() -> Any:
    """Load :mod:`pandas` lazily to keep it off the import path of the API."""

    return importlib.import_module("pandas")


@dataclass(frozen=True)
class SheetData:
    """Cell values of one worksheet with trailing blank rows removed."""

    title: str
    rows: list[Row]
    epoch: datetime


@dataclass(frozen=True)
class ExportSheet:
    """Named sheet of flat records sharing one ordered set of columns."""

    name: str
    columns: tuple[str, ...]
    rows: list[Mapping[str, Any]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rows


def _row_is_blank(row: Row) -> bool:
    for value in row:
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return False
    return True


def _strip_trailing_blank_rows(rows: list[Row]) -> list[Row]:
    while rows and _row_is_blank(rows[-1]):
        rows.pop()
    return rows


def read_workbook_sheets(file_bytes: bytes) -> list[SheetData]:
    """Return the values of every sheet in ``file_bytes`` in workbook order.

    Raises :class:`WorkbookStructureError` when the payload is not an ``.xlsx``.
    """

    try:
        workbook = load_workbook(BytesIO(file_bytes), read_only=True, data_only=True)
    except (BadZipFile, InvalidFileException, KeyError, OSError, ValueError) as exc:
        logger.info("Rejected unreadable workbook: %s", exc)
        raise WorkbookStructureError("Invalid Excel file format") from exc

    try:
        sheets = [
            SheetData(
                title=worksheet.title,
                rows=_strip_trailing_blank_rows(
                    list(worksheet.iter_rows(values_only=True))
                ),
                epoch=workbook.epoch,
            )
            for worksheet in workbook.worksheets
        ]
    finally:
        workbook.close()
    return sheets


def read_first_sheet(file_bytes: bytes) -> SheetData:
    """Return the data sheet of an upload: the first sheet of the workbook."""

    sheets = read_workbook_sheets(file_bytes)
    if not sheets:
        raise WorkbookStructureError("Excel file contains no sheets")
    return sheets[0]


def _autosize_width(header: str, values: Sequence[Any]) -> int:
    lengths = [len(str(header))]
    lengths.extend(
        len(str(value)) for value in values[:_AUTOSIZE_SAMPLE_ROWS] if value is not None
    )
    return max(max(lengths), _MIN_AUTOSIZE_WIDTH)


def _pin_archive(content: bytes, properties: DocumentProperties) -> bytes:
    """Rewrite a saved workbook with fixed document and zip entry timestamps.

    openpyxl stamps ``modified`` with the current time on every save, so
    ``docProps/core.xml`` is regenerated from the pinned properties here.
    """

    properties.created = RENDER_TIMESTAMP
    properties.modified = RENDER_TIMESTAMP
    date_time = RENDER_TIMESTAMP.timetuple()[:6]

    buffer = BytesIO()
    with ZipFile(BytesIO(content)) as source, ZipFile(buffer, "w", ZIP_DEFLATED) as target:
        for info in source.infolist():
            data = source.read(info.filename)
            if info.filename == ARC_CORE:
                data = tostring(properties.to_tree())
            entry = ZipInfo(info.filename, date_time=date_time)
            entry.compress_type = ZIP_DEFLATED
            entry.external_attr = info.external_attr
            target.writestr(entry, data)
    return buffer.getvalue()


def save_workbook_bytes(workbook: Workbook) -> bytes:
    """Serialize ``workbook`` so that equal content always yields equal bytes."""

    buffer = BytesIO()
    workbook.save(buffer)
    return _pin_archive(buffer.getvalue(), workbook.properties)


def write_tabular_workbook(sheets: Sequence[ExportSheet]) -> bytes:
    """Render ``sheets`` into one workbook with content-sized columns."""

    if not sheets:
        msg = "At least one sheet is required"
        raise ValueError(msg)

    pd = _get_pandas_module()
    buffer = BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        for sheet in sheets:
            dataframe = pd.DataFrame(
                [[row.get(column) for column in sheet.columns] for row in sheet.rows],
                columns=list(sheet.columns),
                dtype=object,
            )
            dataframe.to_excel(writer, sheet_name=sheet.name, index=False)
            worksheet = writer.sheets[sheet.name]
            for index, column in enumerate(sheet.columns, start=1):
                values = [row.get(column) for row in sheet.rows]
                worksheet.column_dimensions[get_column_letter(index)].width = (
                    _autosize_width(column, values)
                )
    return _pin_archive(buffer.getvalue(), writer.book.properties)


def write_fixed_layout_workbook(
    sheets: Sequence[tuple[str, Sequence[Sequence[Any]], Sequence[int]]],
) -> bytes:
    """Render sheets whose rows and column widths are fully precomputed.

    Each entry is ``(title, rows, widths)`` where the first row is the header.
    """

    workbook = Workbook()
    workbook.remove(workbook.active)
    for title, rows, widths in sheets:
        worksheet = workbook.create_sheet(title)
        for row in rows:
            worksheet.append(list(row))
        for index, width in enumerate(widths, start=1):
            worksheet.column_dimensions[get_column_letter(index)].width = width

    return save_workbook_bytes(workbook)


__all__ = [
    "EXCEL_CONTENT_TYPE",
    "ExportSheet",
    "SheetData",
    "read_first_sheet",
    "read_workbook_sheets",
    "save_workbook_bytes",
    "write_fixed_layout_workbook",
    "write_tabular_workbook",
]
