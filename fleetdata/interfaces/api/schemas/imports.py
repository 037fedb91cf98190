"""Schemas exposed by the import endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ImportTypeRead(BaseModel):
    type: str
    name: str


class ImportRowErrorRead(BaseModel):
    row: int
    message: str

    model_config = ConfigDict(from_attributes=True)


class ParsedRowRead(BaseModel):
    row_number: int
    data: dict[str, Any]


class ImportPreviewRead(BaseModel):
    import_type: str
    filename: str
    total_rows: int
    valid_count: int
    error_count: int
    valid_rows: list[ParsedRowRead]
    errors: list[ImportRowErrorRead]
    session_id: str


class ImportConfirmRequest(BaseModel):
    session_id: str = Field(min_length=1)


class ImportConfirmRead(BaseModel):
    import_log_id: int
    success_count: int
    error_count: int
    errors: list[ImportRowErrorRead]

    model_config = ConfigDict(from_attributes=True)


class ImportLogRead(BaseModel):
    id: int
    filename: str
    import_type: str
    row_count: int
    success_count: int
    error_count: int
    imported_by: str
    errors: list[ImportRowErrorRead]
    storage_ref: str | None
    created_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "ImportConfirmRead",
    "ImportConfirmRequest",
    "ImportLogRead",
    "ImportPreviewRead",
    "ImportRowErrorRead",
    "ImportTypeRead",
    "ParsedRowRead",
]
