"""Routes for template downloads and the preview/confirm import flow."""

import logging
from datetime import date

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Query,
    Response,
    UploadFile,
    status,
)
from sqlalchemy.orm import Session

from fleetdata.application.use_cases.imports import (
    ImportPreview,
    confirm_import as confirm_import_uc,
    get_import_log as get_import_log_uc,
    get_import_log_file as get_import_log_file_uc,
    list_import_logs as list_import_logs_uc,
    preview_import as preview_import_uc,
)
from fleetdata.application.use_cases.templates import (
    generate_template_workbook as generate_template_workbook_uc,
    list_import_domains as list_import_domains_uc,
)
from fleetdata.domain.entities import ImportLog
from fleetdata.infrastructure.database import get_db
from fleetdata.infrastructure.import_sessions import ImportSessionStore
from fleetdata.interfaces.api.dependencies import get_current_actor, get_session_store
from fleetdata.interfaces.api.routes_helpers import excel_response
from fleetdata.interfaces.api.schemas import (
    ImportConfirmRead,
    ImportConfirmRequest,
    ImportLogRead,
    ImportPreviewRead,
    ImportRowErrorRead,
    ImportTypeRead,
    ParsedRowRead,
)

router = APIRouter(prefix="/import", tags=["import"])
logger = logging.getLogger(__name__)


def _preview_to_read_model(preview: ImportPreview) -> ImportPreviewRead:
    return ImportPreviewRead(
        import_type=preview.domain.value,
        filename=preview.filename,
        total_rows=preview.total_rows,
        valid_count=preview.valid_count,
        error_count=preview.error_count,
        valid_rows=[
            ParsedRowRead(row_number=row.row_number, data=row.data)
            for row in preview.valid_rows
        ],
        errors=[ImportRowErrorRead.model_validate(error) for error in preview.errors],
        session_id=preview.session_id,
    )


def _import_log_to_read_model(log: ImportLog) -> ImportLogRead:
    return ImportLogRead.model_validate(log)


@router.get("/types", response_model=list[ImportTypeRead])
def list_import_types(_: str = Depends(get_current_actor)) -> list[ImportTypeRead]:
    """Return every import type together with its display name."""

    return [
        ImportTypeRead(type=domain.value, name=name)
        for domain, name in list_import_domains_uc()
    ]


@router.get("/template/{import_type}")
def download_template(
    import_type: str,
    _: str = Depends(get_current_actor),
) -> Response:
    """Download the empty template workbook of ``import_type``."""

    try:
        content, filename = generate_template_workbook_uc(import_type)
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return excel_response(content, filename)


@router.post("/upload", response_model=ImportPreviewRead)
def upload_import_file(
    file: UploadFile = File(...),
    import_type: str = Form(...),
    db: Session = Depends(get_db),
    store: ImportSessionStore = Depends(get_session_store),
    _: str = Depends(get_current_actor),
) -> ImportPreviewRead:
    """Parse the uploaded workbook and return a preview of its rows."""

    try:
        file_bytes = file.file.read()
    finally:
        file.file.seek(0)

    try:
        preview = preview_import_uc(
            db,
            file_bytes=file_bytes,
            filename=file.filename or "",
            domain=import_type,
            store=store,
        )
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _preview_to_read_model(preview)


@router.post("/confirm", response_model=ImportConfirmRead)
def confirm_import(
    payload: ImportConfirmRequest,
    db: Session = Depends(get_db),
    store: ImportSessionStore = Depends(get_session_store),
    actor_id: str = Depends(get_current_actor),
) -> ImportConfirmRead:
    """Write the valid rows of a previewed import."""

    try:
        confirmation = confirm_import_uc(
            db, session_id=payload.session_id, actor_id=actor_id, store=store
        )
    except LookupError as exc:
        logger.warning(
            "Import session %s requested by %s is no longer available",
            payload.session_id,
            actor_id,
        )
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ImportConfirmRead.model_validate(confirmation)


@router.get("/history", response_model=list[ImportLogRead])
def list_import_history(
    import_type: str | None = None,
    imported_by: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    limit: int = Query(100, ge=1),
    db: Session = Depends(get_db),
    _: str = Depends(get_current_actor),
) -> list[ImportLogRead]:
    """Return import logs, newest first."""

    logs = list_import_logs_uc(
        db,
        import_type=import_type,
        imported_by=imported_by,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
    )
    return [_import_log_to_read_model(log) for log in logs]


@router.get("/logs/{log_id}", response_model=ImportLogRead)
def read_import_log(
    log_id: int,
    db: Session = Depends(get_db),
    _: str = Depends(get_current_actor),
) -> ImportLogRead:
    try:
        log = get_import_log_uc(db, log_id=log_id)
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _import_log_to_read_model(log)


@router.get("/logs/{log_id}/file")
def download_import_file(
    log_id: int,
    db: Session = Depends(get_db),
    _: str = Depends(get_current_actor),
) -> Response:
    """Download the archived upload of an import."""

    try:
        content, filename = get_import_log_file_uc(db, log_id=log_id)
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return excel_response(content, filename)


__all__ = ["router"]
