"""Use cases for the two-phase (preview then confirm) spreadsheet import."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Mapping, Sequence
from uuid import uuid4

from sqlalchemy.orm import Session

from fleetdata.config import get_settings
from fleetdata.domain.entities import (
    ImportDomain,
    ImportLog,
    ImportRowError,
    ImportSession,
    ParsedRow,
)
from fleetdata.domain.exceptions import (
    ImportSessionNotFoundError,
    RecordNotFoundError,
)
from fleetdata.infrastructure.import_files import (
    archive_import_file,
    build_import_storage_ref,
    fetch_import_file,
)
from fleetdata.infrastructure.import_sessions import (
    ImportSessionStore,
    get_import_session_store,
    session_ttl_seconds,
)
from fleetdata.infrastructure.repositories import (
    AircraftRepository,
    ImportLogRepository,
)
from fleetdata.utils import now_in_app_naive_datetime

from ..templates import get_template
from .parser import parse_workbook
from .rules import RuleContext
from .writers import ROW_WRITERS, RowWriter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportPreview:
    """Summary returned to the caller after a preview."""

    domain: ImportDomain
    filename: str
    total_rows: int
    valid_count: int
    error_count: int
    valid_rows: tuple[ParsedRow, ...]
    errors: list[ImportRowError]
    session_id: str


@dataclass(frozen=True)
class ImportConfirmation:
    """Outcome of a confirmed import."""

    import_log_id: int
    success_count: int
    error_count: int
    errors: list[ImportRowError] = field(default_factory=list)


def preview_import(
    session: Session,
    *,
    file_bytes: bytes,
    filename: str,
    domain: ImportDomain | str,
    store: ImportSessionStore | None = None,
    ttl_seconds: float | None = None,
    context: RuleContext | None = None,
) -> ImportPreview:
    """Parse ``file_bytes`` and keep the result until it is confirmed or expires."""

    if not filename:
        raise ValueError("No file uploaded")
    if not file_bytes:
        raise ValueError("The uploaded file is empty")

    template = get_template(domain)
    if template.domain is ImportDomain.VACATION_PLAN:
        raise ValueError(
            "Vacation plan workbooks are imported through the vacation plan importer"
        )

    if context is None:
        context = RuleContext(aircraft_source=AircraftRepository(session))
    result = parse_workbook(file_bytes, template.domain, context=context)

    if store is None:
        store = get_import_session_store()
    session_id = uuid4().hex
    store.put(
        ImportSession(
            session_id=session_id,
            parse_result=result,
            original_filename=filename,
            raw_bytes=file_bytes,
            created_at=now_in_app_naive_datetime(),
        )
    )
    store.schedule_eviction(
        session_id, ttl_seconds if ttl_seconds is not None else session_ttl_seconds()
    )

    logger.info(
        "Previewed %s import %s: %s rows, %s valid, %s invalid",
        template.domain.value,
        session_id,
        result.total_rows,
        len(result.valid_rows),
        len(result.invalid_rows),
    )
    return ImportPreview(
        domain=template.domain,
        filename=filename,
        total_rows=result.total_rows,
        valid_count=len(result.valid_rows),
        error_count=len(result.invalid_rows),
        valid_rows=result.valid_rows,
        errors=[ImportRowError(row, message) for row, message in result.errors],
        session_id=session_id,
    )


def _archive_upload(import_session: ImportSession) -> str | None:
    storage_ref = build_import_storage_ref(
        import_session.session_id,
        import_session.original_filename,
        timestamp=import_session.created_at,
    )
    try:
        return archive_import_file(storage_ref, import_session.raw_bytes)
    except Exception:  # pragma: no cover - storage SDK raises many error types
        logger.exception(
            "Could not archive upload of import session %s", import_session.session_id
        )
        return None


def confirm_import(
    session: Session,
    *,
    session_id: str,
    actor_id: str,
    store: ImportSessionStore | None = None,
    storage_ref: str | None = None,
    archive: bool | None = None,
    writers: Mapping[ImportDomain, RowWriter] | None = None,
) -> ImportConfirmation:
    """Write every valid row of a previewed import and record the outcome.

    The session is removed before any row is written, so a second confirm of
    the same id raises :class:`ImportSessionNotFoundError`. A failing row is
    rolled back and reported; the remaining rows are still attempted.
    """

    if store is None:
        store = get_import_session_store()
    import_session = store.take(session_id)
    if import_session is None:
        raise ImportSessionNotFoundError(session_id)

    result = import_session.parse_result
    if writers is None:
        writers = ROW_WRITERS
    writer = writers.get(result.domain)
    if writer is None:
        msg = f"Unsupported import type: {result.domain.value}"
        raise ValueError(msg)

    if archive is None:
        archive = get_settings().archive_enabled
    if storage_ref is None and archive:
        storage_ref = _archive_upload(import_session)

    write_errors: list[ImportRowError] = []
    success_count = 0
    for row in result.valid_rows:
        try:
            writer(session, row.data, actor_id)
        except Exception as exc:
            session.rollback()
            message = str(exc) or "Unknown error"
            logger.warning(
                "Row %s of import %s failed: %s", row.row_number, session_id, message
            )
            write_errors.append(ImportRowError(row.row_number, message))
        else:
            success_count += 1

    errors = [ImportRowError(row, message) for row, message in result.errors]
    errors.extend(write_errors)
    error_count = len(result.invalid_rows) + len(write_errors)

    log = ImportLogRepository(session).create(
        ImportLog(
            id=None,
            filename=import_session.original_filename,
            import_type=result.domain.value,
            row_count=result.total_rows,
            success_count=success_count,
            error_count=error_count,
            imported_by=actor_id,
            errors=errors,
            storage_ref=storage_ref,
        )
    )
    logger.info(
        "Confirmed %s import %s: %s written, %s failed (log %s)",
        result.domain.value,
        session_id,
        success_count,
        error_count,
        log.id,
    )
    return ImportConfirmation(
        import_log_id=log.id,
        success_count=success_count,
        error_count=error_count,
        errors=errors,
    )


def list_import_logs(
    session: Session,
    *,
    import_type: str | None = None,
    imported_by: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    limit: int | None = None,
) -> Sequence[ImportLog]:
    return ImportLogRepository(session).list(
        import_type=import_type,
        imported_by=imported_by,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
    )


def get_import_log(session: Session, *, log_id: int) -> ImportLog:
    log = ImportLogRepository(session).get(log_id)
    if log is None:
        msg = f"Import log {log_id} not found"
        raise RecordNotFoundError(msg)
    return log


def get_import_log_file(session: Session, *, log_id: int) -> tuple[bytes, str]:
    """Return the archived upload of an import and its original filename."""

    log = get_import_log(session, log_id=log_id)
    if not log.storage_ref:
        msg = f"Import log {log_id} has no archived file"
        raise RecordNotFoundError(msg)
    try:
        data = fetch_import_file(log.storage_ref)
    except FileNotFoundError as exc:
        msg = f"Archived file of import log {log_id} not found"
        raise RecordNotFoundError(msg) from exc
    return data, log.filename


__all__ = [
    "ImportConfirmation",
    "ImportPreview",
    "confirm_import",
    "get_import_log",
    "get_import_log_file",
    "list_import_logs",
    "preview_import",
]
