"""Routes for team vacation plans (48-week schedules)."""

from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    HTTPException,
    Response,
    UploadFile,
    status,
)
from sqlalchemy.orm import Session

from fleetdata.application.use_cases.weekly_schedules import (
    add_schedule_employee as add_schedule_employee_uc,
    export_weekly_schedule as export_weekly_schedule_uc,
    export_weekly_schedules_for_year as export_weekly_schedules_for_year_uc,
    get_vacation_plan as get_vacation_plan_uc,
    import_weekly_schedules as import_weekly_schedules_uc,
    list_vacation_plans as list_vacation_plans_uc,
    remove_schedule_employee as remove_schedule_employee_uc,
    update_schedule_cell as update_schedule_cell_uc,
)
from fleetdata.domain.entities import WeeklySchedulePlan
from fleetdata.infrastructure.database import get_db
from fleetdata.interfaces.api.dependencies import get_current_actor
from fleetdata.interfaces.api.routes_helpers import excel_response
from fleetdata.interfaces.api.schemas import (
    ImportRowErrorRead,
    ScheduleCellUpdate,
    ScheduleEmployeeCreate,
    ScheduleEmployeeRead,
    ScheduleImportRead,
    VacationPlanRead,
)

router = APIRouter(prefix="/vacation-plans", tags=["vacation_plans"])


def _plan_to_read_model(plan: WeeklySchedulePlan) -> VacationPlanRead:
    return VacationPlanRead(
        id=plan.id,
        year=plan.year,
        team=plan.team,
        employees=[
            ScheduleEmployeeRead(
                name=employee.name, cells=list(employee.cells), total=employee.total
            )
            for employee in plan.employees
        ],
        overlaps=list(plan.overlaps),
        updated_by=plan.updated_by,
        updated_at=plan.updated_at,
    )


@router.get("", response_model=list[VacationPlanRead])
def list_vacation_plans(
    year: int | None = None,
    db: Session = Depends(get_db),
    _: str = Depends(get_current_actor),
) -> list[VacationPlanRead]:
    return [_plan_to_read_model(plan) for plan in list_vacation_plans_uc(db, year=year)]


@router.get("/export")
def export_vacation_plans_for_year(
    year: int,
    db: Session = Depends(get_db),
    _: str = Depends(get_current_actor),
) -> Response:
    """Download every team plan of ``year`` as one workbook."""

    try:
        content, filename = export_weekly_schedules_for_year_uc(db, year=year)
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return excel_response(content, filename)


@router.post("/import", response_model=ScheduleImportRead)
def import_vacation_plans(
    file: UploadFile = File(...),
    year: int = Form(...),
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> ScheduleImportRead:
    """Upsert the plan of every team sheet found in the uploaded workbook."""

    try:
        file_bytes = file.file.read()
    finally:
        file.file.seek(0)

    try:
        result = import_weekly_schedules_uc(
            db,
            file_bytes=file_bytes,
            filename=file.filename or "",
            year=year,
            actor_id=actor_id,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return ScheduleImportRead(
        import_log_id=result.import_log_id,
        success_count=result.success_count,
        error_count=result.error_count,
        errors=[ImportRowErrorRead.model_validate(error) for error in result.errors],
        plans=[_plan_to_read_model(plan) for plan in result.plans],
    )


@router.get("/{plan_id}", response_model=VacationPlanRead)
def read_vacation_plan(
    plan_id: int,
    db: Session = Depends(get_db),
    _: str = Depends(get_current_actor),
) -> VacationPlanRead:
    try:
        plan = get_vacation_plan_uc(db, plan_id=plan_id)
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _plan_to_read_model(plan)


@router.get("/{plan_id}/export")
def export_vacation_plan(
    plan_id: int,
    db: Session = Depends(get_db),
    _: str = Depends(get_current_actor),
) -> Response:
    try:
        content, filename = export_weekly_schedule_uc(db, plan_id=plan_id)
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return excel_response(content, filename)


@router.patch("/{plan_id}/cells", response_model=VacationPlanRead)
def update_vacation_plan_cell(
    plan_id: int,
    payload: ScheduleCellUpdate,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> VacationPlanRead:
    """Set one week of an employee; totals and overlaps are recomputed."""

    try:
        plan = update_schedule_cell_uc(
            db,
            plan_id=plan_id,
            employee_name=payload.employee_name,
            week_index=payload.week_index,
            value=payload.value,
            actor_id=actor_id,
        )
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _plan_to_read_model(plan)


@router.post(
    "/{plan_id}/employees",
    response_model=VacationPlanRead,
    status_code=status.HTTP_201_CREATED,
)
def add_vacation_plan_employee(
    plan_id: int,
    payload: ScheduleEmployeeCreate,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> VacationPlanRead:
    try:
        plan = add_schedule_employee_uc(
            db, plan_id=plan_id, employee_name=payload.name, actor_id=actor_id
        )
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _plan_to_read_model(plan)


@router.delete("/{plan_id}/employees/{employee_name}", response_model=VacationPlanRead)
def remove_vacation_plan_employee(
    plan_id: int,
    employee_name: str,
    db: Session = Depends(get_db),
    actor_id: str = Depends(get_current_actor),
) -> VacationPlanRead:
    try:
        plan = remove_schedule_employee_uc(
            db, plan_id=plan_id, employee_name=employee_name, actor_id=actor_id
        )
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _plan_to_read_model(plan)


__all__ = ["router"]
