"""Domain entity representing the audit record of a confirmed import."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ImportRowError:
    """Message attributed to a spreadsheet row (``0`` for sheet-level issues)."""

    row: int
    message: str


@dataclass
class ImportLog:
    """Append-only summary written once per confirmed import."""

    id: int | None
    filename: str
    import_type: str
    row_count: int
    success_count: int
    error_count: int
    imported_by: str
    errors: list[ImportRowError] = field(default_factory=list)
    storage_ref: str | None = None
    created_at: datetime | None = None


__all__ = ["ImportLog", "ImportRowError"]
