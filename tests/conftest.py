"""Shared fixtures: environment, a clean SQLite database and workbook builders."""

from __future__ import annotations

import os
import sys
import tempfile
from io import BytesIO
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "fleetdata_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ.pop("AZURE_STORAGE_CONNECTION_STRING", None)
os.environ.pop("AZURE_STORAGE_CONTAINER_NAME", None)

from fleetdata.config import reset_settings_cache  # noqa: E402

reset_settings_cache()


@pytest.fixture()
def db_session():
    """Yield a session bound to freshly created tables."""

    from fleetdata.infrastructure.database import (
        Base,
        SessionLocal,
        engine,
        initialize_database,
    )

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def build_workbook():
    """Return a helper turning ``{sheet title: rows}`` into ``.xlsx`` bytes."""

    from openpyxl import Workbook

    def _build(sheets: dict) -> bytes:
        workbook = Workbook()
        workbook.remove(workbook.active)
        for title, rows in sheets.items():
            worksheet = workbook.create_sheet(title)
            for row in rows:
                worksheet.append(list(row))
        buffer = BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()

    return _build


@pytest.fixture()
def aircraft_factory(db_session):
    """Insert aircraft records and return the stored entities."""

    from fleetdata.domain.entities import Aircraft
    from fleetdata.infrastructure.repositories import AircraftRepository

    repository = AircraftRepository(db_session)

    def _create(
        registration: str = "HZ-A42",
        *,
        fleet_group: str = "AIRBUS 340",
        aircraft_type: str | None = "A340-642 ACJ",
        engines_count: int = 4,
    ) -> Aircraft:
        return repository.create(
            Aircraft(
                id=None,
                registration=registration,
                fleet_group=fleet_group,
                aircraft_type=aircraft_type,
                msn=None,
                owner="Alpha Star Aviation",
                manufacture_date=None,
                certification_date=None,
                in_service_date=None,
                engines_count=engines_count,
            )
        )

    return _create
