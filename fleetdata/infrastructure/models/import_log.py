"""SQLAlchemy model for the audit trail of confirmed imports."""

from sqlalchemy import Column, DateTime, Integer, String

from fleetdata.infrastructure.database import Base
from fleetdata.utils import now_in_app_naive_datetime

from ._types import json_type


class ImportLogModel(Base):
    """Database representation of one confirmed import."""

    __tablename__ = "import_log"

    id = Column(Integer, primary_key=True, index=True)
    filename = Column(String(255), nullable=False)
    import_type = Column(String(40), nullable=False, index=True)
    row_count = Column(Integer, nullable=False, default=0)
    success_count = Column(Integer, nullable=False, default=0)
    error_count = Column(Integer, nullable=False, default=0)
    errors = Column(json_type, nullable=False, default=list)
    imported_by = Column(String(100), nullable=False, index=True)
    storage_ref = Column(String(500), nullable=True)
    created_at = Column(
        DateTime, nullable=False, default=now_in_app_naive_datetime, index=True
    )


__all__ = ["ImportLogModel"]
