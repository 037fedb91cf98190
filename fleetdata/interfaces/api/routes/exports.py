"""Routes generating export workbooks."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from fleetdata.application.use_cases.exports import (
    ExportFilters,
    export_data as export_data_uc,
    list_export_domains as list_export_domains_uc,
)
from fleetdata.infrastructure.database import get_db
from fleetdata.interfaces.api.dependencies import get_current_actor
from fleetdata.interfaces.api.routes_helpers import excel_response
from fleetdata.interfaces.api.schemas import ExportTypeRead

router = APIRouter(prefix="/export", tags=["export"])


@router.get("/types", response_model=list[ExportTypeRead])
def list_export_types(_: str = Depends(get_current_actor)) -> list[ExportTypeRead]:
    return [
        ExportTypeRead(type=domain.value, name=name)
        for domain, name in list_export_domains_uc()
    ]


@router.get("/{export_type}")
def export_workbook(
    export_type: str,
    start_date: date | None = None,
    end_date: date | None = None,
    aircraft_id: int | None = None,
    fiscal_year: int | None = None,
    fleet_group: str | None = None,
    year: int | None = None,
    db: Session = Depends(get_db),
    _: str = Depends(get_current_actor),
) -> Response:
    """Generate the workbook of ``export_type`` for the given filters."""

    filters = ExportFilters(
        start_date=start_date,
        end_date=end_date,
        aircraft_id=aircraft_id,
        fiscal_year=fiscal_year,
        fleet_group=fleet_group,
        year=year,
    )
    try:
        content, filename = export_data_uc(db, export_type=export_type, filters=filters)
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return excel_response(content, filename)


__all__ = ["router"]
