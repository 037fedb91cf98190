"""Persistence layer for import audit records."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Sequence

from sqlalchemy.orm import Session

from fleetdata.domain.entities import ImportLog, ImportRowError
from fleetdata.infrastructure.models import ImportLogModel


class ImportLogRepository:
    """Append and query :class:`ImportLog` entries.

    Entries are never updated or deleted once written.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, entry: ImportLog) -> ImportLog:
        model = ImportLogModel(
            filename=entry.filename,
            import_type=entry.import_type,
            row_count=entry.row_count,
            success_count=entry.success_count,
            error_count=entry.error_count,
            errors=[{"row": error.row, "message": error.message} for error in entry.errors],
            imported_by=entry.imported_by,
            storage_ref=entry.storage_ref,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get(self, log_id: int) -> ImportLog | None:
        model = self.session.get(ImportLogModel, log_id)
        return self._to_entity(model) if model else None

    def list(
        self,
        *,
        import_type: str | None = None,
        imported_by: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        limit: int | None = None,
    ) -> Sequence[ImportLog]:
        query = self.session.query(ImportLogModel)
        if import_type is not None:
            query = query.filter(ImportLogModel.import_type == import_type)
        if imported_by is not None:
            query = query.filter(ImportLogModel.imported_by == imported_by)
        if start_date is not None:
            query = query.filter(
                ImportLogModel.created_at >= datetime.combine(start_date, time())
            )
        if end_date is not None:
            query = query.filter(
                ImportLogModel.created_at
                < datetime.combine(end_date + timedelta(days=1), time())
            )
        query = query.order_by(ImportLogModel.created_at.desc(), ImportLogModel.id.desc())
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: ImportLogModel) -> ImportLog:
        return ImportLog(
            id=model.id,
            filename=model.filename,
            import_type=model.import_type,
            row_count=model.row_count,
            success_count=model.success_count,
            error_count=model.error_count,
            errors=[
                ImportRowError(row=int(item["row"]), message=str(item["message"]))
                for item in model.errors or []
            ],
            imported_by=model.imported_by,
            storage_ref=model.storage_ref,
            created_at=model.created_at,
        )


__all__ = ["ImportLogRepository"]
