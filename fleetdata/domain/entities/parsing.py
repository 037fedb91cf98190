"""Domain entities produced by parsing an uploaded workbook."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .template import ImportDomain


@dataclass
class ParsedRow:
    """One non-empty source row after coercion and validation.

    ``row_number`` is the spreadsheet row the values came from, so the first
    data row below the header is row 2.
    """

    row_number: int
    data: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class ParseResult:
    """Views over the rows of one upload, preserving source order."""

    domain: ImportDomain
    all_rows: tuple[ParsedRow, ...]

    @property
    def total_rows(self) -> int:
        return len(self.all_rows)

    @property
    def valid_rows(self) -> tuple[ParsedRow, ...]:
        return tuple(row for row in self.all_rows if row.is_valid)

    @property
    def invalid_rows(self) -> tuple[ParsedRow, ...]:
        return tuple(row for row in self.all_rows if not row.is_valid)

    @property
    def errors(self) -> list[tuple[int, str]]:
        """Return ``(row_number, message)`` pairs for every invalid row."""

        return [
            (row.row_number, message)
            for row in self.invalid_rows
            for message in row.errors
        ]


__all__ = ["ParsedRow", "ParseResult"]
