"""Persistence layer for counters, daily status, AOG events and tasks."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Sequence

from sqlalchemy.orm import Session

from fleetdata.domain.entities import (
    AOGEvent,
    DailyCounter,
    DailyStatus,
    MaintenanceTask,
)
from fleetdata.infrastructure.models import (
    AOGEventModel,
    DailyCounterModel,
    DailyStatusModel,
    MaintenanceTaskModel,
)


def _apply_day_range(query, column, start: date | None, end: date | None):
    if start is not None:
        query = query.filter(column >= start)
    if end is not None:
        query = query.filter(column <= end)
    return query


_COUNTER_FIELDS = (
    "aircraft_id",
    "date",
    "airframe_hours_ttsn",
    "airframe_cycles_tcsn",
    "engine1_hours",
    "engine1_cycles",
    "engine2_hours",
    "engine2_cycles",
    "engine3_hours",
    "engine3_cycles",
    "engine4_hours",
    "engine4_cycles",
    "apu_hours",
    "apu_cycles",
    "last_flight_date",
    "updated_by",
)


class DailyCounterRepository:
    """Provide filtered reads and inserts for :class:`DailyCounter` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find(
        self,
        *,
        aircraft_id: int | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Sequence[DailyCounter]:
        query = self.session.query(DailyCounterModel)
        if aircraft_id is not None:
            query = query.filter(DailyCounterModel.aircraft_id == aircraft_id)
        query = _apply_day_range(query, DailyCounterModel.date, start_date, end_date)
        query = query.order_by(DailyCounterModel.date, DailyCounterModel.id)
        return [self._to_entity(model) for model in query.all()]

    def create(self, counter: DailyCounter) -> DailyCounter:
        model = DailyCounterModel()
        for name in _COUNTER_FIELDS:
            setattr(model, name, getattr(counter, name))
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: DailyCounterModel) -> DailyCounter:
        return DailyCounter(
            id=model.id, **{name: getattr(model, name) for name in _COUNTER_FIELDS}
        )


class DailyStatusRepository:
    """Provide filtered reads and inserts for :class:`DailyStatus` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find(
        self,
        *,
        aircraft_id: int | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Sequence[DailyStatus]:
        query = self.session.query(DailyStatusModel)
        if aircraft_id is not None:
            query = query.filter(DailyStatusModel.aircraft_id == aircraft_id)
        query = _apply_day_range(query, DailyStatusModel.date, start_date, end_date)
        query = query.order_by(DailyStatusModel.date.desc(), DailyStatusModel.id)
        return [self._to_entity(model) for model in query.all()]

    def get_for_day(self, aircraft_id: int, day: date) -> DailyStatus | None:
        model = (
            self.session.query(DailyStatusModel)
            .filter(
                DailyStatusModel.aircraft_id == aircraft_id,
                DailyStatusModel.date == day,
            )
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, status: DailyStatus) -> DailyStatus:
        model = DailyStatusModel(
            aircraft_id=status.aircraft_id,
            date=status.date,
            pos_hours=status.pos_hours,
            fmc_hours=status.fmc_hours,
            nmcm_s_hours=status.nmcm_s_hours,
            nmcm_u_hours=status.nmcm_u_hours,
            nmcs_hours=status.nmcs_hours,
            notes=status.notes,
            updated_by=status.updated_by,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: DailyStatusModel) -> DailyStatus:
        return DailyStatus(
            id=model.id,
            aircraft_id=model.aircraft_id,
            date=model.date,
            pos_hours=model.pos_hours,
            fmc_hours=model.fmc_hours,
            nmcm_s_hours=model.nmcm_s_hours,
            nmcm_u_hours=model.nmcm_u_hours,
            nmcs_hours=model.nmcs_hours,
            notes=model.notes,
            updated_by=model.updated_by,
        )


class AOGEventRepository:
    """Provide filtered reads and inserts for :class:`AOGEvent` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find(
        self,
        *,
        aircraft_id: int | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Sequence[AOGEvent]:
        query = self.session.query(AOGEventModel)
        if aircraft_id is not None:
            query = query.filter(AOGEventModel.aircraft_id == aircraft_id)
        if start_date is not None:
            query = query.filter(
                AOGEventModel.detected_at >= datetime.combine(start_date, time())
            )
        if end_date is not None:
            query = query.filter(
                AOGEventModel.detected_at
                < datetime.combine(end_date + timedelta(days=1), time())
            )
        query = query.order_by(AOGEventModel.detected_at.desc(), AOGEventModel.id)
        return [self._to_entity(model) for model in query.all()]

    def create(self, event: AOGEvent) -> AOGEvent:
        model = AOGEventModel(
            aircraft_id=event.aircraft_id,
            detected_at=event.detected_at,
            cleared_at=event.cleared_at,
            category=event.category,
            reason_code=event.reason_code,
            location=event.location,
            responsible_party=event.responsible_party,
            action_taken=event.action_taken,
            manpower_count=event.manpower_count,
            man_hours=event.man_hours,
            total_downtime_hours=event.total_downtime_hours,
            is_imported=event.is_imported,
            updated_by=event.updated_by,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: AOGEventModel) -> AOGEvent:
        return AOGEvent(
            id=model.id,
            aircraft_id=model.aircraft_id,
            detected_at=model.detected_at,
            cleared_at=model.cleared_at,
            category=model.category,
            reason_code=model.reason_code,
            location=model.location,
            responsible_party=model.responsible_party,
            action_taken=model.action_taken,
            manpower_count=model.manpower_count,
            man_hours=model.man_hours,
            total_downtime_hours=model.total_downtime_hours,
            is_imported=bool(model.is_imported),
            updated_by=model.updated_by,
        )


class MaintenanceTaskRepository:
    """Provide filtered reads and inserts for :class:`MaintenanceTask` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find(
        self,
        *,
        aircraft_id: int | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Sequence[MaintenanceTask]:
        query = self.session.query(MaintenanceTaskModel)
        if aircraft_id is not None:
            query = query.filter(MaintenanceTaskModel.aircraft_id == aircraft_id)
        query = _apply_day_range(query, MaintenanceTaskModel.date, start_date, end_date)
        query = query.order_by(MaintenanceTaskModel.date.desc(), MaintenanceTaskModel.id)
        return [self._to_entity(model) for model in query.all()]

    def create(self, task: MaintenanceTask) -> MaintenanceTask:
        model = MaintenanceTaskModel(
            aircraft_id=task.aircraft_id,
            date=task.date,
            shift=task.shift,
            task_type=task.task_type,
            task_description=task.task_description,
            manpower_count=task.manpower_count,
            man_hours=task.man_hours,
            cost=task.cost,
            work_order_ref=task.work_order_ref,
            updated_by=task.updated_by,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: MaintenanceTaskModel) -> MaintenanceTask:
        return MaintenanceTask(
            id=model.id,
            aircraft_id=model.aircraft_id,
            date=model.date,
            shift=model.shift,
            task_type=model.task_type,
            task_description=model.task_description,
            manpower_count=model.manpower_count,
            man_hours=model.man_hours,
            cost=model.cost,
            work_order_ref=model.work_order_ref,
            updated_by=model.updated_by,
        )


__all__ = [
    "AOGEventRepository",
    "DailyCounterRepository",
    "DailyStatusRepository",
    "MaintenanceTaskRepository",
]
