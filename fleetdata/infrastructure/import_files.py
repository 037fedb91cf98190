"""Archiving of raw import uploads."""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import PurePath

from fleetdata.infrastructure.storage import download_blob, upload_blob
from fleetdata.infrastructure.workbooks import EXCEL_CONTENT_TYPE

IMPORT_PREFIX = "imports"


def _sanitize_filename(name: str) -> str:
    """Return ``name`` transformed into a storage-safe slug."""

    path = PurePath(name.strip() or "upload.xlsx")
    stem = re.sub(r"[^A-Za-z0-9_-]+", "_", path.stem).strip("_") or "upload"
    suffix = re.sub(r"[^A-Za-z0-9.]+", "", path.suffix) or ".xlsx"
    return f"{stem}{suffix}"


def build_import_storage_ref(
    session_id: str, filename: str, *, timestamp: datetime
) -> str:
    stamp = timestamp.strftime("%Y%m%dT%H%M%S")
    return f"{IMPORT_PREFIX}/{stamp}_{session_id}_{_sanitize_filename(filename)}"


def archive_import_file(storage_ref: str, data: bytes) -> str:
    """Upload the original workbook to ``storage_ref`` and return the key."""

    upload_blob(storage_ref, data, content_type=EXCEL_CONTENT_TYPE)
    return storage_ref


def fetch_import_file(storage_ref: str) -> bytes:
    return download_blob(storage_ref)


__all__ = [
    "IMPORT_PREFIX",
    "archive_import_file",
    "build_import_storage_ref",
    "fetch_import_file",
]
