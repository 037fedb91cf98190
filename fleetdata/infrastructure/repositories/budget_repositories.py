"""Persistence layer for budget plans and actual spend."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy.orm import Session

from fleetdata.domain.entities import ActualSpend, BudgetPlan
from fleetdata.infrastructure.models import ActualSpendModel, BudgetPlanModel


class BudgetPlanRepository:
    """Provide reads and upserts for :class:`BudgetPlan` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find(self, *, fiscal_year: int | None = None) -> Sequence[BudgetPlan]:
        query = self.session.query(BudgetPlanModel)
        if fiscal_year is not None:
            query = query.filter(BudgetPlanModel.fiscal_year == fiscal_year)
        query = query.order_by(
            BudgetPlanModel.fiscal_year,
            BudgetPlanModel.clause_id,
            BudgetPlanModel.aircraft_group,
        )
        return [self._to_entity(model) for model in query.all()]

    def upsert(self, plan: BudgetPlan) -> BudgetPlan:
        """Create or replace the plan keyed by fiscal year, clause and group."""

        model = (
            self.session.query(BudgetPlanModel)
            .filter(
                BudgetPlanModel.fiscal_year == plan.fiscal_year,
                BudgetPlanModel.clause_id == plan.clause_id,
                BudgetPlanModel.aircraft_group == plan.aircraft_group,
            )
            .first()
        )
        if model is None:
            model = BudgetPlanModel(
                fiscal_year=plan.fiscal_year,
                clause_id=plan.clause_id,
                aircraft_group=plan.aircraft_group,
            )
        model.clause_description = plan.clause_description
        model.planned_amount = plan.planned_amount
        model.currency = plan.currency
        model.updated_by = plan.updated_by
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: BudgetPlanModel) -> BudgetPlan:
        return BudgetPlan(
            id=model.id,
            fiscal_year=model.fiscal_year,
            clause_id=model.clause_id,
            clause_description=model.clause_description,
            aircraft_group=model.aircraft_group,
            planned_amount=model.planned_amount,
            currency=model.currency,
            updated_by=model.updated_by,
        )


class ActualSpendRepository:
    """Provide reads and inserts for :class:`ActualSpend` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find(self, *, fiscal_year: int | None = None) -> Sequence[ActualSpend]:
        query = self.session.query(ActualSpendModel)
        if fiscal_year is not None:
            query = query.filter(ActualSpendModel.fiscal_year == fiscal_year)
        query = query.order_by(ActualSpendModel.period, ActualSpendModel.clause_id)
        return [self._to_entity(model) for model in query.all()]

    def create(self, spend: ActualSpend) -> ActualSpend:
        model = ActualSpendModel(
            fiscal_year=spend.fiscal_year,
            clause_id=spend.clause_id,
            period=spend.period,
            amount=spend.amount,
            aircraft_group=spend.aircraft_group,
            aircraft_id=spend.aircraft_id,
            currency=spend.currency,
            vendor=spend.vendor,
            notes=spend.notes,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ActualSpendModel) -> ActualSpend:
        return ActualSpend(
            id=model.id,
            fiscal_year=model.fiscal_year,
            clause_id=model.clause_id,
            period=model.period,
            amount=model.amount,
            aircraft_group=model.aircraft_group,
            aircraft_id=model.aircraft_id,
            currency=model.currency,
            vendor=model.vendor,
            notes=model.notes,
        )


__all__ = ["ActualSpendRepository", "BudgetPlanRepository"]
