"""Schemas exposed by the export endpoints."""

from pydantic import BaseModel


class ExportTypeRead(BaseModel):
    type: str
    name: str


__all__ = ["ExportTypeRead"]
