"""Export generator assembling computed sheets into one workbook.

Every sheet is produced by an independent builder that only reads from the
repositories in :class:`ExportSources`. Composite exports call several
builders and drop the sheets that came back empty.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Any, Callable, Mapping, Sequence

from sqlalchemy.orm import Session

from fleetdata.domain.entities import Aircraft, DailyStatus
from fleetdata.domain.exceptions import RecordNotFoundError
from fleetdata.infrastructure.repositories import (
    AOGEventRepository,
    ActualSpendRepository,
    AircraftRepository,
    BudgetPlanRepository,
    DailyCounterRepository,
    DailyStatusRepository,
    DiscrepancyRepository,
    MaintenanceTaskRepository,
    VacationPlanRepository,
    WorkOrderRepository,
    WorkOrderSummaryRepository,
)
from fleetdata.infrastructure.workbooks import ExportSheet, write_tabular_workbook
from fleetdata.utils import (
    format_date,
    format_timestamp,
    hours_between,
    now_in_app_timezone,
)

from .weekly_schedules import render_year_schedules

logger = logging.getLogger(__name__)

DASHBOARD_WINDOW_DAYS = 30
AVAILABILITY_WARNING = 85
AVAILABILITY_CRITICAL = 70


class ExportDomain(str, Enum):
    """Export types offered to callers."""

    AIRCRAFT = "aircraft"
    UTILIZATION = "utilization"
    DAILY_STATUS = "daily-status"
    AOG_EVENTS = "aog-events"
    MAINTENANCE_TASKS = "maintenance-tasks"
    WORK_ORDERS = "work-orders"
    WORK_ORDER_SUMMARIES = "work-order-summaries"
    DISCREPANCIES = "discrepancies"
    BUDGET_PLANS = "budget-plans"
    ACTUAL_SPEND = "actual-spend"
    DASHBOARD = "dashboard"
    AIRCRAFT_DETAIL = "aircraft-detail"
    VACATION_PLAN = "vacation-plan"


EXPORT_DISPLAY_NAMES: dict[ExportDomain, str] = {
    ExportDomain.AIRCRAFT: "Aircraft",
    ExportDomain.UTILIZATION: "Utilization",
    ExportDomain.DAILY_STATUS: "Daily Status",
    ExportDomain.AOG_EVENTS: "AOG Events",
    ExportDomain.MAINTENANCE_TASKS: "Maintenance Tasks",
    ExportDomain.WORK_ORDERS: "Work Orders",
    ExportDomain.WORK_ORDER_SUMMARIES: "Work Order Summaries",
    ExportDomain.DISCREPANCIES: "Discrepancies",
    ExportDomain.BUDGET_PLANS: "Budget Plans",
    ExportDomain.ACTUAL_SPEND: "Actual Spend",
    ExportDomain.DASHBOARD: "Dashboard Summary",
    ExportDomain.AIRCRAFT_DETAIL: "Aircraft Detail",
    ExportDomain.VACATION_PLAN: "Vacation Plan",
}


@dataclass(frozen=True)
class ExportFilters:
    """Optional narrowing applied by the sheet builders that support it."""

    start_date: date | None = None
    end_date: date | None = None
    aircraft_id: int | None = None
    fiscal_year: int | None = None
    fleet_group: str | None = None
    year: int | None = None


@dataclass(frozen=True)
class ExportSources:
    """Read collaborators consumed by the sheet builders."""

    aircraft: AircraftRepository
    counters: DailyCounterRepository
    daily_status: DailyStatusRepository
    aog_events: AOGEventRepository
    maintenance_tasks: MaintenanceTaskRepository
    work_orders: WorkOrderRepository
    work_order_summaries: WorkOrderSummaryRepository
    discrepancies: DiscrepancyRepository
    budget_plans: BudgetPlanRepository
    actual_spend: ActualSpendRepository
    vacation_plans: VacationPlanRepository

    @classmethod
    def from_session(cls, session: Session) -> "ExportSources":
        return cls(
            aircraft=AircraftRepository(session),
            counters=DailyCounterRepository(session),
            daily_status=DailyStatusRepository(session),
            aog_events=AOGEventRepository(session),
            maintenance_tasks=MaintenanceTaskRepository(session),
            work_orders=WorkOrderRepository(session),
            work_order_summaries=WorkOrderSummaryRepository(session),
            discrepancies=DiscrepancyRepository(session),
            budget_plans=BudgetPlanRepository(session),
            actual_spend=ActualSpendRepository(session),
            vacation_plans=VacationPlanRepository(session),
        )


Fleet = Mapping[int, Aircraft]
SheetBuilder = Callable[[ExportSources, ExportFilters, Fleet], ExportSheet]


def _fleet(sources: ExportSources) -> Fleet:
    return {aircraft.id: aircraft for aircraft in sources.aircraft.list_all()}


def _registration(fleet: Fleet, aircraft_id: int | None) -> str:
    if aircraft_id is None:
        return ""
    aircraft = fleet.get(aircraft_id)
    return aircraft.registration if aircraft else str(aircraft_id)


def _percentage(part: float, whole: float) -> float:
    if whole <= 0:
        return 0
    return round(part / whole * 100, 2)


def _period(value: date | None) -> str | None:
    return value.strftime("%Y-%m") if value else None


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


AIRCRAFT_COLUMNS = (
    "Registration",
    "Fleet Group",
    "Aircraft Type",
    "MSN",
    "Owner",
    "Manufacture Date",
    "Certification Date",
    "In Service Date",
    "Engines Count",
    "Status",
)


def _aircraft_row(aircraft: Aircraft) -> dict[str, Any]:
    return {
        "Registration": aircraft.registration,
        "Fleet Group": aircraft.fleet_group,
        "Aircraft Type": aircraft.aircraft_type,
        "MSN": aircraft.msn,
        "Owner": aircraft.owner,
        "Manufacture Date": format_date(aircraft.manufacture_date),
        "Certification Date": format_date(aircraft.certification_date),
        "In Service Date": format_date(aircraft.in_service_date),
        "Engines Count": aircraft.engines_count,
        "Status": aircraft.status,
    }


def aircraft_sheet(sources: ExportSources, filters: ExportFilters, fleet: Fleet) -> ExportSheet:
    fleet_aircraft = sources.aircraft.list(fleet_group=filters.fleet_group)
    return ExportSheet(
        "Aircraft", AIRCRAFT_COLUMNS, [_aircraft_row(aircraft) for aircraft in fleet_aircraft]
    )


UTILIZATION_COLUMNS = (
    "Aircraft Registration",
    "Date",
    "Airframe Hours TTSN",
    "Airframe Cycles TCSN",
    "Engine 1 Hours",
    "Engine 1 Cycles",
    "Engine 2 Hours",
    "Engine 2 Cycles",
    "Engine 3 Hours",
    "Engine 3 Cycles",
    "Engine 4 Hours",
    "Engine 4 Cycles",
    "APU Hours",
    "APU Cycles",
    "Last Flight Date",
)


def utilization_sheet(sources: ExportSources, filters: ExportFilters, fleet: Fleet) -> ExportSheet:
    counters = sources.counters.find(
        aircraft_id=filters.aircraft_id,
        start_date=filters.start_date,
        end_date=filters.end_date,
    )
    rows = [
        {
            "Aircraft Registration": _registration(fleet, counter.aircraft_id),
            "Date": format_date(counter.date),
            "Airframe Hours TTSN": counter.airframe_hours_ttsn,
            "Airframe Cycles TCSN": counter.airframe_cycles_tcsn,
            "Engine 1 Hours": counter.engine1_hours,
            "Engine 1 Cycles": counter.engine1_cycles,
            "Engine 2 Hours": counter.engine2_hours,
            "Engine 2 Cycles": counter.engine2_cycles,
            "Engine 3 Hours": counter.engine3_hours,
            "Engine 3 Cycles": counter.engine3_cycles,
            "Engine 4 Hours": counter.engine4_hours,
            "Engine 4 Cycles": counter.engine4_cycles,
            "APU Hours": counter.apu_hours,
            "APU Cycles": counter.apu_cycles,
            "Last Flight Date": format_date(counter.last_flight_date),
        }
        for counter in counters
    ]
    return ExportSheet("Utilization", UTILIZATION_COLUMNS, rows)


DAILY_STATUS_COLUMNS = (
    "Aircraft Registration",
    "Fleet Group",
    "Date",
    "POS Hours",
    "FMC Hours",
    "NMCM-S Hours",
    "NMCM-U Hours",
    "NMCS Hours",
    "Total Downtime",
    "Availability %",
    "Notes",
)


def _filtered_statuses(
    sources: ExportSources, filters: ExportFilters, fleet: Fleet
) -> list[DailyStatus]:
    statuses = sources.daily_status.find(
        aircraft_id=filters.aircraft_id,
        start_date=filters.start_date,
        end_date=filters.end_date,
    )
    if not filters.fleet_group:
        return list(statuses)
    return [
        status
        for status in statuses
        if status.aircraft_id in fleet
        and fleet[status.aircraft_id].fleet_group == filters.fleet_group
    ]


def _daily_status_row(status: DailyStatus, fleet: Fleet) -> dict[str, Any]:
    aircraft = fleet.get(status.aircraft_id)
    return {
        "Aircraft Registration": _registration(fleet, status.aircraft_id),
        "Fleet Group": aircraft.fleet_group if aircraft else "",
        "Date": format_date(status.date),
        "POS Hours": status.pos_hours,
        "FMC Hours": status.fmc_hours,
        "NMCM-S Hours": status.nmcm_s_hours,
        "NMCM-U Hours": status.nmcm_u_hours,
        "NMCS Hours": status.nmcs_hours or 0,
        "Total Downtime": status.total_downtime_hours,
        "Availability %": status.availability_percentage,
        "Notes": status.notes or "",
    }


def daily_status_sheet(sources: ExportSources, filters: ExportFilters, fleet: Fleet) -> ExportSheet:
    statuses = _filtered_statuses(sources, filters, fleet)
    return ExportSheet(
        "Daily Status",
        DAILY_STATUS_COLUMNS,
        [_daily_status_row(status, fleet) for status in statuses],
    )


def daily_status_summary_sheet(
    sources: ExportSources, filters: ExportFilters, fleet: Fleet
) -> ExportSheet:
    """Key figures over the filtered daily status records."""

    statuses = _filtered_statuses(sources, filters, fleet)
    total_pos = sum(status.pos_hours for status in statuses)
    total_fmc = sum(status.fmc_hours for status in statuses)
    availability = [status.availability_percentage for status in statuses]
    period = (
        f"{format_date(filters.start_date) or 'All'} to "
        f"{format_date(filters.end_date) or 'All'}"
    )
    metrics = [
        ("Report Period", period),
        ("Fleet Group Filter", filters.fleet_group or "All Fleets"),
        ("Total Records", len(statuses)),
        ("Unique Aircraft", len({status.aircraft_id for status in statuses})),
        ("Average Availability %", _percentage(total_fmc, total_pos)),
        ("Total POS Hours", total_pos),
        ("Total FMC Hours", total_fmc),
        (
            "Total Scheduled Downtime (NMCM-S)",
            sum(status.nmcm_s_hours for status in statuses),
        ),
        (
            "Total Unscheduled Downtime (NMCM-U + NMCS)",
            sum(status.nmcm_u_hours + (status.nmcs_hours or 0) for status in statuses),
        ),
        (
            "Records with Downtime",
            sum(1 for status in statuses if status.total_downtime_hours > 0),
        ),
        (
            f"Records Below {AVAILABILITY_WARNING}% Availability",
            sum(1 for value in availability if value < AVAILABILITY_WARNING),
        ),
        (
            f"Records Below {AVAILABILITY_CRITICAL}% Availability (Critical)",
            sum(1 for value in availability if value < AVAILABILITY_CRITICAL),
        ),
    ]
    return ExportSheet(
        "Summary",
        ("Metric", "Value"),
        [{"Metric": metric, "Value": value} for metric, value in metrics],
    )


AVAILABILITY_COLUMNS = (
    "Aircraft Registration",
    "Fleet Group",
    "Total POS Hours",
    "Total FMC Hours",
    "Availability %",
    "Days Tracked",
)


def _availability_by_aircraft(
    statuses: Sequence[DailyStatus], fleet: Fleet
) -> list[dict[str, Any]]:
    totals: dict[int, list[float]] = {}
    for status in statuses:
        bucket = totals.setdefault(status.aircraft_id, [0.0, 0.0, 0])
        bucket[0] += status.pos_hours
        bucket[1] += status.fmc_hours
        bucket[2] += 1

    rows = []
    for aircraft_id, (pos, fmc, days) in totals.items():
        aircraft = fleet.get(aircraft_id)
        rows.append(
            {
                "Aircraft Registration": _registration(fleet, aircraft_id),
                "Fleet Group": aircraft.fleet_group if aircraft else "",
                "Total POS Hours": pos,
                "Total FMC Hours": fmc,
                "Availability %": _percentage(fmc, pos),
                "Days Tracked": days,
            }
        )
    return sorted(rows, key=lambda row: row["Availability %"])


def availability_by_aircraft_sheet(
    sources: ExportSources, filters: ExportFilters, fleet: Fleet
) -> ExportSheet:
    statuses = _filtered_statuses(sources, filters, fleet)
    return ExportSheet(
        "By Aircraft", AVAILABILITY_COLUMNS, _availability_by_aircraft(statuses, fleet)
    )


AOG_EVENT_COLUMNS = (
    "Aircraft Registration",
    "Detected At",
    "Cleared At",
    "Downtime Hours",
    "Category",
    "Reason Code",
    "Location",
    "Responsible Party",
    "Action Taken",
    "Manpower Count",
    "Man Hours",
    "Total Downtime Hours",
    "Current Status",
    "Imported",
)


def aog_events_sheet(sources: ExportSources, filters: ExportFilters, fleet: Fleet) -> ExportSheet:
    events = sources.aog_events.find(
        aircraft_id=filters.aircraft_id,
        start_date=filters.start_date,
        end_date=filters.end_date,
    )
    rows = []
    for event in events:
        downtime = None
        if event.cleared_at is not None:
            downtime = round(hours_between(event.detected_at, event.cleared_at), 2)
        rows.append(
            {
                "Aircraft Registration": _registration(fleet, event.aircraft_id),
                "Detected At": format_timestamp(event.detected_at),
                "Cleared At": format_timestamp(event.cleared_at),
                "Downtime Hours": downtime,
                "Category": event.category,
                "Reason Code": event.reason_code,
                "Location": event.location or "",
                "Responsible Party": event.responsible_party,
                "Action Taken": event.action_taken,
                "Manpower Count": event.manpower_count,
                "Man Hours": event.man_hours,
                "Total Downtime Hours": event.total_downtime_hours or 0,
                "Current Status": "Active" if event.is_active else "Resolved",
                "Imported": _yes_no(event.is_imported),
            }
        )
    return ExportSheet("AOG Events", AOG_EVENT_COLUMNS, rows)


MAINTENANCE_TASK_COLUMNS = (
    "Aircraft Registration",
    "Date",
    "Shift",
    "Task Type",
    "Task Description",
    "Manpower Count",
    "Man Hours",
    "Cost",
    "Work Order Ref",
)


def maintenance_tasks_sheet(
    sources: ExportSources, filters: ExportFilters, fleet: Fleet
) -> ExportSheet:
    tasks = sources.maintenance_tasks.find(
        aircraft_id=filters.aircraft_id,
        start_date=filters.start_date,
        end_date=filters.end_date,
    )
    rows = [
        {
            "Aircraft Registration": _registration(fleet, task.aircraft_id),
            "Date": format_date(task.date),
            "Shift": task.shift,
            "Task Type": task.task_type,
            "Task Description": task.task_description,
            "Manpower Count": task.manpower_count,
            "Man Hours": task.man_hours,
            "Cost": task.cost,
            "Work Order Ref": task.work_order_ref,
        }
        for task in tasks
    ]
    return ExportSheet("Maintenance Tasks", MAINTENANCE_TASK_COLUMNS, rows)


WORK_ORDER_COLUMNS = (
    "WO Number",
    "Aircraft Registration",
    "Description",
    "Status",
    "Date In",
    "Date Out",
    "Due Date",
    "Cost",
    "Turnaround Days",
    "Overdue",
)


def work_orders_sheet(sources: ExportSources, filters: ExportFilters, fleet: Fleet) -> ExportSheet:
    work_orders = sources.work_orders.find(
        aircraft_id=filters.aircraft_id,
        start_date=filters.start_date,
        end_date=filters.end_date,
    )
    rows = [
        {
            "WO Number": work_order.wo_number,
            "Aircraft Registration": _registration(fleet, work_order.aircraft_id),
            "Description": work_order.description,
            "Status": work_order.status,
            "Date In": format_date(work_order.date_in),
            "Date Out": format_date(work_order.date_out),
            "Due Date": format_date(work_order.due_date),
            "Cost": work_order.cost,
            "Turnaround Days": work_order.turnaround_days,
            "Overdue": _yes_no(work_order.is_overdue),
        }
        for work_order in work_orders
    ]
    return ExportSheet("Work Orders", WORK_ORDER_COLUMNS, rows)


WORK_ORDER_SUMMARY_COLUMNS = (
    "Aircraft Registration",
    "Period",
    "Work Order Count",
    "Total Cost",
    "Currency",
    "Notes",
)


def work_order_summaries_sheet(
    sources: ExportSources, filters: ExportFilters, fleet: Fleet
) -> ExportSheet:
    summaries = sources.work_order_summaries.find(
        aircraft_id=filters.aircraft_id,
        start_period=_period(filters.start_date),
        end_period=_period(filters.end_date),
    )
    rows = [
        {
            "Aircraft Registration": _registration(fleet, summary.aircraft_id),
            "Period": summary.period,
            "Work Order Count": summary.work_order_count,
            "Total Cost": summary.total_cost,
            "Currency": summary.currency or "USD",
            "Notes": summary.notes or "",
        }
        for summary in summaries
    ]
    return ExportSheet("Work Order Summaries", WORK_ORDER_SUMMARY_COLUMNS, rows)


DISCREPANCY_COLUMNS = (
    "Aircraft Registration",
    "Date Detected",
    "ATA Chapter",
    "Discrepancy Text",
    "Date Corrected",
    "Corrective Action",
    "Responsibility",
    "Downtime Hours",
)


def discrepancies_sheet(
    sources: ExportSources, filters: ExportFilters, fleet: Fleet
) -> ExportSheet:
    discrepancies = sources.discrepancies.find(
        aircraft_id=filters.aircraft_id,
        start_date=filters.start_date,
        end_date=filters.end_date,
    )
    rows = [
        {
            "Aircraft Registration": _registration(fleet, item.aircraft_id),
            "Date Detected": format_date(item.date_detected),
            "ATA Chapter": item.ata_chapter,
            "Discrepancy Text": item.discrepancy_text,
            "Date Corrected": format_date(item.date_corrected),
            "Corrective Action": item.corrective_action,
            "Responsibility": item.responsibility,
            "Downtime Hours": item.downtime_hours,
        }
        for item in discrepancies
    ]
    return ExportSheet("Discrepancies", DISCREPANCY_COLUMNS, rows)


BUDGET_PLAN_COLUMNS = (
    "Fiscal Year",
    "Clause ID",
    "Clause Description",
    "Aircraft Group",
    "Planned Amount",
    "Currency",
)


def budget_plans_sheet(
    sources: ExportSources, filters: ExportFilters, fleet: Fleet
) -> ExportSheet:
    plans = sources.budget_plans.find(fiscal_year=filters.fiscal_year)
    rows = [
        {
            "Fiscal Year": plan.fiscal_year,
            "Clause ID": plan.clause_id,
            "Clause Description": plan.clause_description,
            "Aircraft Group": plan.aircraft_group,
            "Planned Amount": plan.planned_amount,
            "Currency": plan.currency,
        }
        for plan in plans
    ]
    return ExportSheet("Budget Plans", BUDGET_PLAN_COLUMNS, rows)


ACTUAL_SPEND_COLUMNS = (
    "Fiscal Year",
    "Period",
    "Aircraft Group",
    "Aircraft Registration",
    "Clause ID",
    "Amount",
    "Currency",
    "Vendor",
    "Notes",
)


def actual_spend_sheet(
    sources: ExportSources, filters: ExportFilters, fleet: Fleet
) -> ExportSheet:
    spends = sources.actual_spend.find(fiscal_year=filters.fiscal_year)
    if filters.aircraft_id is not None:
        spends = [spend for spend in spends if spend.aircraft_id == filters.aircraft_id]
    rows = [
        {
            "Fiscal Year": spend.fiscal_year,
            "Period": spend.period,
            "Aircraft Group": spend.aircraft_group,
            "Aircraft Registration": _registration(fleet, spend.aircraft_id),
            "Clause ID": spend.clause_id,
            "Amount": spend.amount,
            "Currency": spend.currency,
            "Vendor": spend.vendor,
            "Notes": spend.notes,
        }
        for spend in spends
    ]
    return ExportSheet("Actual Spend", ACTUAL_SPEND_COLUMNS, rows)


FLEET_SUMMARY_COLUMNS = (
    "Registration",
    "Fleet Group",
    "Aircraft Type",
    "Owner",
    "Status",
    "Engines Count",
)


def fleet_summary_sheet(
    sources: ExportSources, filters: ExportFilters, fleet: Fleet
) -> ExportSheet:
    rows = [
        {column: _aircraft_row(aircraft)[column] for column in FLEET_SUMMARY_COLUMNS}
        for aircraft in fleet.values()
    ]
    return ExportSheet("Fleet Summary", FLEET_SUMMARY_COLUMNS, rows)


def fleet_availability_sheet(
    sources: ExportSources, filters: ExportFilters, fleet: Fleet
) -> ExportSheet:
    statuses = sources.daily_status.find(
        start_date=filters.start_date, end_date=filters.end_date
    )
    return ExportSheet(
        "Availability", AVAILABILITY_COLUMNS, _availability_by_aircraft(statuses, fleet)
    )


PERIOD_UTILIZATION_COLUMNS = (
    "Aircraft Registration",
    "Period Flight Hours",
    "Period Cycles",
    "Current Total Hours",
    "Current Total Cycles",
)


def period_utilization_sheet(
    sources: ExportSources, filters: ExportFilters, fleet: Fleet
) -> ExportSheet:
    """Flight hours and cycles accumulated between the first and last counter."""

    counters = sources.counters.find(
        start_date=filters.start_date, end_date=filters.end_date
    )
    spans: dict[int, tuple[Any, Any]] = {}
    for counter in counters:
        first, _ = spans.get(counter.aircraft_id, (counter, counter))
        spans[counter.aircraft_id] = (first, counter)

    rows = [
        {
            "Aircraft Registration": _registration(fleet, aircraft_id),
            "Period Flight Hours": round(
                last.airframe_hours_ttsn - first.airframe_hours_ttsn, 1
            ),
            "Period Cycles": last.airframe_cycles_tcsn - first.airframe_cycles_tcsn,
            "Current Total Hours": last.airframe_hours_ttsn,
            "Current Total Cycles": last.airframe_cycles_tcsn,
        }
        for aircraft_id, (first, last) in spans.items()
    ]
    return ExportSheet("Utilization", PERIOD_UTILIZATION_COLUMNS, rows)


def aircraft_info_sheet(aircraft: Aircraft) -> ExportSheet:
    return ExportSheet("Aircraft Info", AIRCRAFT_COLUMNS, [_aircraft_row(aircraft)])


def assemble_sheets(sheets: Sequence[ExportSheet]) -> list[ExportSheet]:
    """Drop empty sheets, keeping the first one when every sheet is empty."""

    populated = [sheet for sheet in sheets if not sheet.is_empty]
    if populated:
        return populated
    return list(sheets[:1])


def _build(
    builders: Sequence[SheetBuilder],
    sources: ExportSources,
    filters: ExportFilters,
    fleet: Fleet,
) -> list[ExportSheet]:
    return [builder(sources, filters, fleet) for builder in builders]


_SINGLE_SHEET_EXPORTS: dict[ExportDomain, SheetBuilder] = {
    ExportDomain.AIRCRAFT: aircraft_sheet,
    ExportDomain.UTILIZATION: utilization_sheet,
    ExportDomain.AOG_EVENTS: aog_events_sheet,
    ExportDomain.MAINTENANCE_TASKS: maintenance_tasks_sheet,
    ExportDomain.WORK_ORDERS: work_orders_sheet,
    ExportDomain.WORK_ORDER_SUMMARIES: work_order_summaries_sheet,
    ExportDomain.DISCREPANCIES: discrepancies_sheet,
    ExportDomain.BUDGET_PLANS: budget_plans_sheet,
    ExportDomain.ACTUAL_SPEND: actual_spend_sheet,
}

_DAILY_STATUS_SHEETS: tuple[SheetBuilder, ...] = (
    daily_status_summary_sheet,
    daily_status_sheet,
    availability_by_aircraft_sheet,
)

_DASHBOARD_SHEETS: tuple[SheetBuilder, ...] = (
    fleet_summary_sheet,
    fleet_availability_sheet,
    period_utilization_sheet,
    aog_events_sheet,
    work_orders_sheet,
    maintenance_tasks_sheet,
    discrepancies_sheet,
)

_AIRCRAFT_DETAIL_SHEETS: tuple[SheetBuilder, ...] = (
    utilization_sheet,
    daily_status_sheet,
    aog_events_sheet,
    work_orders_sheet,
    discrepancies_sheet,
    maintenance_tasks_sheet,
)


def _export_daily_status(
    sources: ExportSources, filters: ExportFilters, today: date
) -> tuple[bytes, str]:
    sheets = assemble_sheets(_build(_DAILY_STATUS_SHEETS, sources, filters, _fleet(sources)))
    start = format_date(filters.start_date) or "all"
    end = format_date(filters.end_date) or "all"
    return write_tabular_workbook(sheets), f"daily_status_{start}_to_{end}.xlsx"


def _export_dashboard(
    sources: ExportSources, filters: ExportFilters, today: date
) -> tuple[bytes, str]:
    start = filters.start_date or today - timedelta(days=DASHBOARD_WINDOW_DAYS)
    end = filters.end_date or today
    window = ExportFilters(start_date=start, end_date=end)
    sheets = assemble_sheets(_build(_DASHBOARD_SHEETS, sources, window, _fleet(sources)))
    return write_tabular_workbook(sheets), f"dashboard_summary_{format_date(today)}.xlsx"


def _export_aircraft_detail(
    sources: ExportSources, filters: ExportFilters, today: date
) -> tuple[bytes, str]:
    if filters.aircraft_id is None:
        raise ValueError("Aircraft ID is required for aircraft-detail export")
    aircraft = sources.aircraft.get(filters.aircraft_id)
    if aircraft is None:
        raise RecordNotFoundError("Aircraft not found")

    related = _build(_AIRCRAFT_DETAIL_SHEETS, sources, filters, _fleet(sources))
    sheets = assemble_sheets([aircraft_info_sheet(aircraft), *related])
    filename = f"aircraft_{aircraft.registration}_detail_{format_date(today)}.xlsx"
    return write_tabular_workbook(sheets), filename


def _export_vacation_plans(
    sources: ExportSources, filters: ExportFilters, today: date
) -> tuple[bytes, str]:
    if filters.year is None:
        raise ValueError("Vacation plan export requires a year")
    return render_year_schedules(sources.vacation_plans, filters.year)


_COMPOSITE_EXPORTS: dict[
    ExportDomain, Callable[[ExportSources, ExportFilters, date], tuple[bytes, str]]
] = {
    ExportDomain.DAILY_STATUS: _export_daily_status,
    ExportDomain.DASHBOARD: _export_dashboard,
    ExportDomain.AIRCRAFT_DETAIL: _export_aircraft_detail,
    ExportDomain.VACATION_PLAN: _export_vacation_plans,
}


def list_export_domains() -> list[tuple[ExportDomain, str]]:
    return list(EXPORT_DISPLAY_NAMES.items())


def export_domain(
    sources: ExportSources,
    export_type: ExportDomain | str,
    filters: ExportFilters | None = None,
    *,
    today: date | None = None,
) -> tuple[bytes, str]:
    """Return the workbook bytes and suggested filename for ``export_type``."""

    try:
        domain = ExportDomain(export_type)
    except ValueError as exc:
        msg = f"Unknown export type: {export_type}"
        raise ValueError(msg) from exc

    filters = filters or ExportFilters()
    today = today or now_in_app_timezone().date()
    composite = _COMPOSITE_EXPORTS.get(domain)
    if composite is not None:
        content, filename = composite(sources, filters, today)
    else:
        sheet = _SINGLE_SHEET_EXPORTS[domain](sources, filters, _fleet(sources))
        content = write_tabular_workbook([sheet])
        filename = f"{domain.value.replace('-', '_')}_export.xlsx"
    logger.info("Generated %s export %s", domain.value, filename)
    return content, filename


def export_data(
    session: Session,
    *,
    export_type: ExportDomain | str,
    filters: ExportFilters | None = None,
) -> tuple[bytes, str]:
    return export_domain(ExportSources.from_session(session), export_type, filters)


__all__ = [
    "EXPORT_DISPLAY_NAMES",
    "ExportDomain",
    "ExportFilters",
    "ExportSources",
    "assemble_sheets",
    "export_data",
    "export_domain",
    "list_export_domains",
]
