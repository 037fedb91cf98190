"""Row writers replaying validated import rows against storage.

Each writer persists exactly one row and raises :class:`ValueError` (or lets a
storage error propagate) when the row cannot be written.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable, Mapping

from sqlalchemy.orm import Session

from fleetdata.domain.entities import (
    AOGEvent,
    Aircraft,
    BudgetPlan,
    DailyCounter,
    DailyStatus,
    ImportDomain,
    MaintenanceTask,
    WorkOrderSummary,
)
from fleetdata.infrastructure.repositories import (
    AOGEventRepository,
    AircraftRepository,
    BudgetPlanRepository,
    DailyCounterRepository,
    DailyStatusRepository,
    MaintenanceTaskRepository,
    WorkOrderSummaryRepository,
)
from fleetdata.utils import hours_between, now_in_app_naive_datetime

RowWriter = Callable[[Session, Mapping[str, Any], str], None]

IMPORTED_AOG_RESPONSIBLE_PARTY = "Other"
IMPORTED_AOG_ACTION_TAKEN = "See defect description"
IMPORTED_AOG_REASON = "Historical AOG Event"


def _as_date(value: Any) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    return value


def _optional_float(value: Any) -> float | None:
    return float(value) if value is not None else None


def _require_aircraft(session: Session, registration: str) -> Aircraft:
    aircraft = AircraftRepository(session).get_by_registration(registration)
    if aircraft is None:
        msg = f"Aircraft {registration} not found"
        raise ValueError(msg)
    return aircraft


def write_aircraft(session: Session, data: Mapping[str, Any], actor_id: str) -> None:
    repository = AircraftRepository(session)
    registration = str(data["registration"]).upper()
    if repository.get_by_registration(registration) is not None:
        msg = f"Aircraft {registration} already exists"
        raise ValueError(msg)
    repository.create(
        Aircraft(
            id=None,
            registration=registration,
            fleet_group=str(data["fleetGroup"]),
            aircraft_type=data.get("aircraftType"),
            msn=data.get("msn"),
            owner=str(data["owner"]),
            manufacture_date=_as_date(data.get("manufactureDate")),
            certification_date=_as_date(data.get("certificationDate")),
            in_service_date=_as_date(data.get("inServiceDate")),
            engines_count=int(data["enginesCount"]),
            status=str(data.get("status") or "active"),
            created_by=actor_id,
        )
    )


def write_utilization(session: Session, data: Mapping[str, Any], actor_id: str) -> None:
    aircraft = _require_aircraft(session, str(data["aircraftRegistration"]))
    DailyCounterRepository(session).create(
        DailyCounter(
            id=None,
            aircraft_id=aircraft.id,
            date=_as_date(data["date"]),
            airframe_hours_ttsn=float(data["airframeHoursTtsn"]),
            airframe_cycles_tcsn=float(data["airframeCyclesTcsn"]),
            engine1_hours=float(data["engine1Hours"]),
            engine1_cycles=float(data["engine1Cycles"]),
            engine2_hours=float(data["engine2Hours"]),
            engine2_cycles=float(data["engine2Cycles"]),
            engine3_hours=_optional_float(data.get("engine3Hours")),
            engine3_cycles=_optional_float(data.get("engine3Cycles")),
            engine4_hours=_optional_float(data.get("engine4Hours")),
            engine4_cycles=_optional_float(data.get("engine4Cycles")),
            apu_hours=float(data["apuHours"]),
            apu_cycles=_optional_float(data.get("apuCycles")),
            last_flight_date=_as_date(data.get("lastFlightDate")),
            updated_by=actor_id,
        )
    )


def write_maintenance_task(
    session: Session, data: Mapping[str, Any], actor_id: str
) -> None:
    aircraft = _require_aircraft(session, str(data["aircraftRegistration"]))
    MaintenanceTaskRepository(session).create(
        MaintenanceTask(
            id=None,
            aircraft_id=aircraft.id,
            date=_as_date(data["date"]),
            shift=str(data["shift"]),
            task_type=str(data["taskType"]),
            task_description=str(data["taskDescription"]),
            manpower_count=int(data["manpowerCount"]),
            man_hours=float(data["manHours"]),
            cost=_optional_float(data.get("cost")),
            work_order_ref=data.get("workOrderRef"),
            updated_by=actor_id,
        )
    )


def write_aog_event(session: Session, data: Mapping[str, Any], actor_id: str) -> None:
    aircraft_id = data.get("aircraftId")
    if aircraft_id is None:
        raise ValueError("Aircraft ID not found in parsed data")

    detected_at: datetime = data["detectedAt"]
    cleared_at: datetime | None = data.get("clearedAt")
    if cleared_at is not None:
        duration = max(0.0, hours_between(detected_at, cleared_at))
        man_hours = float(round(duration))
    else:
        duration = max(0.0, hours_between(detected_at, now_in_app_naive_datetime()))
        man_hours = 0.0

    AOGEventRepository(session).create(
        AOGEvent(
            id=None,
            aircraft_id=int(aircraft_id),
            detected_at=detected_at,
            cleared_at=cleared_at,
            category=str(data.get("categoryMapped") or "unscheduled"),
            reason_code=str(data.get("defectDescription") or IMPORTED_AOG_REASON),
            location=data.get("location"),
            responsible_party=IMPORTED_AOG_RESPONSIBLE_PARTY,
            action_taken=IMPORTED_AOG_ACTION_TAKEN,
            manpower_count=1,
            man_hours=man_hours,
            total_downtime_hours=duration,
            is_imported=True,
            updated_by=actor_id,
        )
    )


def write_budget_plan(session: Session, data: Mapping[str, Any], actor_id: str) -> None:
    BudgetPlanRepository(session).upsert(
        BudgetPlan(
            id=None,
            fiscal_year=int(data["fiscalYear"]),
            clause_id=int(data["clauseId"]),
            clause_description=str(data["clauseDescription"]),
            aircraft_group=str(data["aircraftGroup"]),
            planned_amount=float(data["plannedAmount"]),
            currency=str(data.get("currency") or "USD"),
            updated_by=actor_id,
        )
    )


def write_daily_status(session: Session, data: Mapping[str, Any], actor_id: str) -> None:
    registration = str(data["aircraftRegistration"])
    aircraft = _require_aircraft(session, registration)
    day = _as_date(data["date"])
    repository = DailyStatusRepository(session)
    if repository.get_for_day(aircraft.id, day) is not None:
        msg = (
            f"Daily status record already exists for {registration} "
            f"on {day:%Y-%m-%d}"
        )
        raise ValueError(msg)

    pos = float(data["posHours"])
    scheduled = float(data["nmcmSHours"])
    unscheduled = float(data["nmcmUHours"])
    supply = _optional_float(data.get("nmcsHours"))
    fmc = data.get("fmcHours")
    if fmc is None:
        fmc = max(0.0, min(pos, pos - (scheduled + unscheduled + (supply or 0))))
    repository.create(
        DailyStatus(
            id=None,
            aircraft_id=aircraft.id,
            date=day,
            pos_hours=pos,
            fmc_hours=float(fmc),
            nmcm_s_hours=scheduled,
            nmcm_u_hours=unscheduled,
            nmcs_hours=supply,
            notes=data.get("notes"),
            updated_by=actor_id,
        )
    )


def write_work_order_summary(
    session: Session, data: Mapping[str, Any], actor_id: str
) -> None:
    aircraft = _require_aircraft(session, str(data["aircraftRegistration"]))
    WorkOrderSummaryRepository(session).upsert(
        WorkOrderSummary(
            id=None,
            aircraft_id=aircraft.id,
            period=str(data["period"]),
            work_order_count=int(data["workOrderCount"]),
            total_cost=_optional_float(data.get("totalCost")),
            notes=data.get("notes") or None,
            updated_by=actor_id,
        )
    )


ROW_WRITERS: dict[ImportDomain, RowWriter] = {
    ImportDomain.AIRCRAFT: write_aircraft,
    ImportDomain.UTILIZATION: write_utilization,
    ImportDomain.MAINTENANCE_TASKS: write_maintenance_task,
    ImportDomain.AOG_EVENTS: write_aog_event,
    ImportDomain.BUDGET: write_budget_plan,
    ImportDomain.DAILY_STATUS: write_daily_status,
    ImportDomain.WORK_ORDER_SUMMARY: write_work_order_summary,
}


__all__ = [
    "ROW_WRITERS",
    "RowWriter",
    "write_aircraft",
    "write_aog_event",
    "write_budget_plan",
    "write_daily_status",
    "write_maintenance_task",
    "write_utilization",
    "write_work_order_summary",
]
