"""Business rules layered on top of the generic row validation.

Every import domain registers one validator in :data:`ROW_RULES`. Validators
only append to ``row.errors`` and enrich ``row.data`` with derived fields; they
never remove earlier errors and never write to storage.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from functools import cached_property
from typing import Callable, Protocol, Sequence

from fleetdata.domain.entities import Aircraft, ImportDomain, ParsedRow
from fleetdata.utils import now_in_app_naive_datetime

MAX_DAILY_HOURS = 24

AOG_CATEGORY_MAP = {
    "AOG": "aog",
    "S-MX": "scheduled",
    "U-MX": "unscheduled",
    "MRO": "mro",
    "CLEANING": "cleaning",
}

_TIME_PATTERN = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")
_ICAO_PATTERN = re.compile(r"^[A-Z]{4}$")
_PERIOD_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")

_DAILY_HOUR_FIELDS = (
    ("posHours", "POS Hours"),
    ("nmcmSHours", "NMCM-S Hours"),
    ("nmcmUHours", "NMCM-U Hours"),
    ("nmcsHours", "NMCS Hours"),
)


class AircraftDirectory(Protocol):
    """Read-only source of aircraft used for registration lookups."""

    def list_all(self) -> Sequence[Aircraft]: ...


@dataclass
class RuleContext:
    """Read collaborators shared by the validators of one upload."""

    aircraft_source: AircraftDirectory | None = None
    clock: Callable[[], datetime] = field(default=now_in_app_naive_datetime)

    @cached_property
    def aircraft(self) -> tuple[Aircraft, ...]:
        if self.aircraft_source is None:
            return ()
        return tuple(self.aircraft_source.list_all())


RowRule = Callable[[ParsedRow, RuleContext], ParsedRow]


def _format_hours(value: float) -> str:
    return f"{value:g}"


def _upper_registration(row: ParsedRow, key: str = "aircraftRegistration") -> None:
    value = row.data.get(key)
    if isinstance(value, str):
        row.data[key] = value.strip().upper()


def resolve_aircraft(text: str, fleet: Sequence[Aircraft]) -> Aircraft | None:
    """Find the aircraft a free-text cell refers to.

    Candidates are tried in order: exact registration, registration contained
    in the text, then aircraft type contained in the text or vice versa. The
    first aircraft satisfying the earliest matching step wins.
    """

    needle = text.strip().upper()
    if not needle:
        return None

    for aircraft in fleet:
        if aircraft.registration.upper() == needle:
            return aircraft
    for aircraft in fleet:
        if aircraft.registration.upper() in needle:
            return aircraft
    for aircraft in fleet:
        aircraft_type = (aircraft.aircraft_type or "").strip().upper()
        if aircraft_type and (aircraft_type in needle or needle in aircraft_type):
            return aircraft
    return None


def parse_time_of_day(text: str) -> tuple[int, int] | None:
    """Return ``(hour, minute)`` for a 24-hour ``HH:MM`` string."""

    match = _TIME_PATTERN.match(text.strip())
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


def _compose_timestamp(
    row: ParsedRow,
    *,
    date_key: str,
    date_header: str,
    time_key: str,
    time_header: str,
    now: datetime,
    report_pairing: bool = True,
) -> datetime | None:
    day = row.data.get(date_key)
    raw_time = row.data.get(time_key)
    if day is None and raw_time is None:
        return None
    if not report_pairing and (day is None or raw_time is None):
        # Required columns: the missing half is already reported.
        return None
    if day is None:
        row.errors.append(
            f"{time_header}: {date_header} is required when {time_header} is provided"
        )
        return None
    if raw_time is None:
        row.errors.append(
            f"{date_header}: {time_header} is required when {date_header} is provided"
        )
        return None

    parsed_time = parse_time_of_day(str(raw_time))
    if parsed_time is None:
        row.errors.append(
            f"{time_header}: Invalid time \"{raw_time}\" (expected HH:MM, 24-hour)"
        )
        return None

    hour, minute = parsed_time
    moment = datetime(day.year, day.month, day.day) + timedelta(hours=hour, minutes=minute)
    if moment > now:
        row.errors.append(f"{date_header}: Date and time cannot be in the future")
        return None
    return moment


def validate_daily_status(row: ParsedRow, context: RuleContext) -> ParsedRow:
    _upper_registration(row)
    data = row.data
    for key, header in _DAILY_HOUR_FIELDS:
        value = data.get(key)
        if value is not None and not 0 <= value <= MAX_DAILY_HOURS:
            row.errors.append(
                f"{header}: Value {_format_hours(value)} is outside valid range (0-24)"
            )

    pos = data.get("posHours")
    scheduled = data.get("nmcmSHours")
    unscheduled = data.get("nmcmUHours")
    if pos is None or scheduled is None or unscheduled is None:
        return row

    downtime = scheduled + unscheduled + (data.get("nmcsHours") or 0)
    if downtime > pos:
        row.errors.append(
            f"Total downtime ({_format_hours(downtime)}h) exceeds POS hours "
            f"({_format_hours(pos)}h)"
        )
    data["fmcHours"] = max(0, min(pos, pos - downtime))
    return row


def validate_aog_event(row: ParsedRow, context: RuleContext) -> ParsedRow:
    data = row.data

    raw_aircraft = data.get("aircraft")
    if raw_aircraft is not None:
        aircraft = resolve_aircraft(str(raw_aircraft), context.aircraft)
        if aircraft is None:
            row.errors.append(f"Aircraft: Aircraft \"{raw_aircraft}\" not found")
        else:
            data["aircraftId"] = aircraft.id
            data["aircraftRegistration"] = aircraft.registration

    category = data.get("category")
    if category is not None:
        data["categoryMapped"] = AOG_CATEGORY_MAP[category]

    location = data.get("location")
    if location is not None:
        code = str(location).strip().upper()
        if _ICAO_PATTERN.match(code):
            data["location"] = code
        else:
            row.errors.append(
                f"Location: Invalid ICAO code \"{location}\" (expected 4 letters)"
            )

    now = context.clock()
    detected_at = _compose_timestamp(
        row,
        date_key="startDate",
        date_header="Start Date",
        time_key="startTime",
        time_header="Start Time",
        now=now,
        report_pairing=False,
    )
    cleared_at = _compose_timestamp(
        row,
        date_key="finishDate",
        date_header="Finish Date",
        time_key="finishTime",
        time_header="Finish Time",
        now=now,
    )
    if detected_at is not None:
        data["detectedAt"] = detected_at
    if cleared_at is not None:
        data["clearedAt"] = cleared_at
    if detected_at is not None and cleared_at is not None and cleared_at < detected_at:
        row.errors.append("Finish Date: Finish must be on or after the start")
    return row


def validate_work_order_summary(row: ParsedRow, context: RuleContext) -> ParsedRow:
    _upper_registration(row)
    data = row.data

    period = data.get("period")
    if period is not None and not _PERIOD_PATTERN.match(str(period)):
        row.errors.append(
            f"Period: Invalid period format: {period}. Expected YYYY-MM (e.g., 2024-01)"
        )

    count = data.get("workOrderCount")
    if count is not None and count < 0:
        row.errors.append(f"Work Order Count: Must be >= 0, got: {count}")

    cost = data.get("totalCost")
    if cost is not None and cost < 0:
        row.errors.append(f"Total Cost: Must be >= 0, got: {cost}")
    return row


def validate_aircraft(row: ParsedRow, context: RuleContext) -> ParsedRow:
    _upper_registration(row, key="registration")
    engines = row.data.get("enginesCount")
    if engines is not None and not (isinstance(engines, int) and 1 <= engines <= 4):
        row.errors.append(f"Engines Count: Value {engines} must be a whole number from 1 to 4")
    return row


def validate_budget(row: ParsedRow, context: RuleContext) -> ParsedRow:
    currency = row.data.get("currency")
    row.data["currency"] = currency or "USD"
    return row


def validate_registration_only(row: ParsedRow, context: RuleContext) -> ParsedRow:
    _upper_registration(row)
    return row


def _no_rules(row: ParsedRow, context: RuleContext) -> ParsedRow:
    return row


ROW_RULES: dict[ImportDomain, RowRule] = {
    ImportDomain.UTILIZATION: validate_registration_only,
    ImportDomain.MAINTENANCE_TASKS: validate_registration_only,
    ImportDomain.AOG_EVENTS: validate_aog_event,
    ImportDomain.BUDGET: validate_budget,
    ImportDomain.AIRCRAFT: validate_aircraft,
    ImportDomain.DAILY_STATUS: validate_daily_status,
    ImportDomain.WORK_ORDER_SUMMARY: validate_work_order_summary,
    ImportDomain.VACATION_PLAN: _no_rules,
}


def apply_domain_rules(
    domain: ImportDomain, rows: Sequence[ParsedRow], context: RuleContext
) -> list[ParsedRow]:
    rule = ROW_RULES[domain]
    return [rule(row, context) for row in rows]


__all__ = [
    "AOG_CATEGORY_MAP",
    "AircraftDirectory",
    "ROW_RULES",
    "RuleContext",
    "apply_domain_rules",
    "parse_time_of_day",
    "resolve_aircraft",
    "validate_aircraft",
    "validate_aog_event",
    "validate_budget",
    "validate_daily_status",
    "validate_work_order_summary",
]
