"""Domain entities for day-to-day aircraft operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

AOG_CATEGORIES = ("aog", "scheduled", "unscheduled", "mro", "cleaning")


@dataclass
class DailyCounter:
    """Cumulative airframe, engine and APU counters recorded for a day."""

    id: int | None
    aircraft_id: int
    date: date
    airframe_hours_ttsn: float
    airframe_cycles_tcsn: float
    engine1_hours: float
    engine1_cycles: float
    engine2_hours: float
    engine2_cycles: float
    engine3_hours: float | None
    engine3_cycles: float | None
    engine4_hours: float | None
    engine4_cycles: float | None
    apu_hours: float
    apu_cycles: float | None
    last_flight_date: date | None
    updated_by: str | None = None


@dataclass
class DailyStatus:
    """Availability breakdown of one aircraft for one day."""

    id: int | None
    aircraft_id: int
    date: date
    pos_hours: float
    fmc_hours: float
    nmcm_s_hours: float
    nmcm_u_hours: float
    nmcs_hours: float | None
    notes: str | None
    updated_by: str | None = None

    @property
    def total_downtime_hours(self) -> float:
        return self.nmcm_s_hours + self.nmcm_u_hours + (self.nmcs_hours or 0)

    @property
    def availability_percentage(self) -> float:
        if self.pos_hours <= 0:
            return 0.0
        return round(self.fmc_hours / self.pos_hours * 100, 2)


@dataclass
class AOGEvent:
    """Period during which an aircraft was unavailable."""

    id: int | None
    aircraft_id: int
    detected_at: datetime
    cleared_at: datetime | None
    category: str
    reason_code: str
    location: str | None
    responsible_party: str
    action_taken: str
    manpower_count: int
    man_hours: float
    total_downtime_hours: float | None = None
    is_imported: bool = False
    updated_by: str | None = None

    @property
    def is_active(self) -> bool:
        return self.cleared_at is None


@dataclass
class MaintenanceTask:
    """Work performed on an aircraft during a shift."""

    id: int | None
    aircraft_id: int
    date: date
    shift: str
    task_type: str
    task_description: str
    manpower_count: int
    man_hours: float
    cost: float | None
    work_order_ref: str | None
    updated_by: str | None = None


__all__ = [
    "AOG_CATEGORIES",
    "AOGEvent",
    "DailyCounter",
    "DailyStatus",
    "MaintenanceTask",
]
