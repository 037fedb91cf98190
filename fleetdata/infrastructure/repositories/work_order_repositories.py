"""Persistence layer for work orders, monthly summaries and discrepancies."""

from __future__ import annotations

from datetime import date
from typing import Sequence

from sqlalchemy.orm import Session

from fleetdata.domain.entities import Discrepancy, WorkOrder, WorkOrderSummary
from fleetdata.infrastructure.models import (
    DiscrepancyModel,
    WorkOrderModel,
    WorkOrderSummaryModel,
)


class WorkOrderRepository:
    """Provide filtered reads for :class:`WorkOrder` records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find(
        self,
        *,
        aircraft_id: int | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Sequence[WorkOrder]:
        query = self.session.query(WorkOrderModel)
        if aircraft_id is not None:
            query = query.filter(WorkOrderModel.aircraft_id == aircraft_id)
        if start_date is not None:
            query = query.filter(WorkOrderModel.date_in >= start_date)
        if end_date is not None:
            query = query.filter(WorkOrderModel.date_in <= end_date)
        query = query.order_by(WorkOrderModel.date_in.desc(), WorkOrderModel.id)
        return [self._to_entity(model) for model in query.all()]

    def create(self, work_order: WorkOrder) -> WorkOrder:
        model = WorkOrderModel(
            aircraft_id=work_order.aircraft_id,
            wo_number=work_order.wo_number,
            description=work_order.description,
            status=work_order.status,
            date_in=work_order.date_in,
            date_out=work_order.date_out,
            due_date=work_order.due_date,
            cost=work_order.cost,
            notes=work_order.notes,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: WorkOrderModel) -> WorkOrder:
        return WorkOrder(
            id=model.id,
            aircraft_id=model.aircraft_id,
            wo_number=model.wo_number,
            description=model.description,
            status=model.status,
            date_in=model.date_in,
            date_out=model.date_out,
            due_date=model.due_date,
            cost=model.cost,
            notes=model.notes,
        )


class WorkOrderSummaryRepository:
    """Provide filtered reads and upserts for :class:`WorkOrderSummary` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find(
        self,
        *,
        aircraft_id: int | None = None,
        start_period: str | None = None,
        end_period: str | None = None,
    ) -> Sequence[WorkOrderSummary]:
        query = self.session.query(WorkOrderSummaryModel)
        if aircraft_id is not None:
            query = query.filter(WorkOrderSummaryModel.aircraft_id == aircraft_id)
        if start_period is not None:
            query = query.filter(WorkOrderSummaryModel.period >= start_period)
        if end_period is not None:
            query = query.filter(WorkOrderSummaryModel.period <= end_period)
        query = query.order_by(
            WorkOrderSummaryModel.period.desc(), WorkOrderSummaryModel.id
        )
        return [self._to_entity(model) for model in query.all()]

    def upsert(self, summary: WorkOrderSummary) -> WorkOrderSummary:
        """Create or replace the summary of ``summary.aircraft_id`` for its period."""

        model = (
            self.session.query(WorkOrderSummaryModel)
            .filter(
                WorkOrderSummaryModel.aircraft_id == summary.aircraft_id,
                WorkOrderSummaryModel.period == summary.period,
            )
            .first()
        )
        if model is None:
            model = WorkOrderSummaryModel(
                aircraft_id=summary.aircraft_id, period=summary.period
            )
        model.work_order_count = summary.work_order_count
        model.total_cost = summary.total_cost
        model.currency = summary.currency
        model.notes = summary.notes
        model.updated_by = summary.updated_by
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: WorkOrderSummaryModel) -> WorkOrderSummary:
        return WorkOrderSummary(
            id=model.id,
            aircraft_id=model.aircraft_id,
            period=model.period,
            work_order_count=model.work_order_count,
            total_cost=model.total_cost,
            currency=model.currency,
            notes=model.notes,
            updated_by=model.updated_by,
        )


class DiscrepancyRepository:
    """Provide filtered reads for :class:`Discrepancy` records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find(
        self,
        *,
        aircraft_id: int | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Sequence[Discrepancy]:
        query = self.session.query(DiscrepancyModel)
        if aircraft_id is not None:
            query = query.filter(DiscrepancyModel.aircraft_id == aircraft_id)
        if start_date is not None:
            query = query.filter(DiscrepancyModel.date_detected >= start_date)
        if end_date is not None:
            query = query.filter(DiscrepancyModel.date_detected <= end_date)
        query = query.order_by(DiscrepancyModel.date_detected.desc(), DiscrepancyModel.id)
        return [self._to_entity(model) for model in query.all()]

    def create(self, discrepancy: Discrepancy) -> Discrepancy:
        model = DiscrepancyModel(
            aircraft_id=discrepancy.aircraft_id,
            date_detected=discrepancy.date_detected,
            ata_chapter=discrepancy.ata_chapter,
            discrepancy_text=discrepancy.discrepancy_text,
            date_corrected=discrepancy.date_corrected,
            corrective_action=discrepancy.corrective_action,
            responsibility=discrepancy.responsibility,
            downtime_hours=discrepancy.downtime_hours,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: DiscrepancyModel) -> Discrepancy:
        return Discrepancy(
            id=model.id,
            aircraft_id=model.aircraft_id,
            date_detected=model.date_detected,
            ata_chapter=model.ata_chapter,
            discrepancy_text=model.discrepancy_text,
            date_corrected=model.date_corrected,
            corrective_action=model.corrective_action,
            responsibility=model.responsibility,
            downtime_hours=model.downtime_hours,
        )


__all__ = [
    "DiscrepancyRepository",
    "WorkOrderRepository",
    "WorkOrderSummaryRepository",
]
