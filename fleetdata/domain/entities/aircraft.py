"""Domain entity representing an aircraft of the fleet."""

from dataclasses import dataclass
from datetime import date, datetime

AIRCRAFT_STATUSES = ("active", "parked", "leased")


@dataclass
class Aircraft:
    """Master data for one airframe."""

    id: int | None
    registration: str
    fleet_group: str
    aircraft_type: str | None
    msn: str | None
    owner: str
    manufacture_date: date | None
    certification_date: date | None
    in_service_date: date | None
    engines_count: int
    status: str = "active"
    created_by: str | None = None
    created_at: datetime | None = None


__all__ = ["AIRCRAFT_STATUSES", "Aircraft"]
