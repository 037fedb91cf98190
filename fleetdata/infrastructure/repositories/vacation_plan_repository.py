"""Persistence layer for team vacation plans."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy.orm import Session

from fleetdata.domain.entities import ScheduleEmployee, WeeklySchedulePlan
from fleetdata.infrastructure.models import VacationPlanModel


class VacationPlanRepository:
    """Provide reads and writes for :class:`WeeklySchedulePlan` records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, *, year: int | None = None) -> Sequence[WeeklySchedulePlan]:
        query = self.session.query(VacationPlanModel)
        if year is not None:
            query = query.filter(VacationPlanModel.year == year)
        query = query.order_by(VacationPlanModel.year.desc(), VacationPlanModel.team)
        return [self._to_entity(model) for model in query.all()]

    def get(self, plan_id: int) -> WeeklySchedulePlan | None:
        model = self.session.get(VacationPlanModel, plan_id)
        return self._to_entity(model) if model else None

    def upsert(self, plan: WeeklySchedulePlan) -> WeeklySchedulePlan:
        """Store ``plan`` as the single plan of its year and team."""

        model = (
            self.session.query(VacationPlanModel)
            .filter(
                VacationPlanModel.year == plan.year,
                VacationPlanModel.team == plan.team,
            )
            .first()
        )
        if model is None:
            model = VacationPlanModel(year=plan.year, team=plan.team)
        self._apply_entity_to_model(model, plan)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, plan: WeeklySchedulePlan) -> WeeklySchedulePlan:
        model = self.session.get(VacationPlanModel, plan.id)
        if model is None:
            msg = f"Vacation plan with ID {plan.id} not found"
            raise LookupError(msg)
        self._apply_entity_to_model(model, plan)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: VacationPlanModel) -> WeeklySchedulePlan:
        employees = tuple(
            ScheduleEmployee(name=item["name"], cells=tuple(item["cells"]))
            for item in model.employees or []
        )
        return WeeklySchedulePlan(
            id=model.id,
            year=model.year,
            team=model.team,
            employees=employees,
            updated_by=model.updated_by,
            updated_at=model.updated_at,
        )

    @staticmethod
    def _apply_entity_to_model(
        model: VacationPlanModel, plan: WeeklySchedulePlan
    ) -> None:
        model.employees = [
            {"name": employee.name, "cells": list(employee.cells)}
            for employee in plan.employees
        ]
        model.updated_by = plan.updated_by


__all__ = ["VacationPlanRepository"]
